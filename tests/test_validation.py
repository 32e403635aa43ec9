#!/usr/bin/python
# -*- coding: UTF-8 -*-

import unittest

from FMR.exceptions import ValidationError
from FMR.fingerprint import ExtendedDataArea, MinutiaPoint
from FMR.fingerprint.fmr import decode, encode
from FMR.fingerprint.functions import to_xyt
from FMR.validation import check, validate, Validator
from FMR.validation import *

from .records import ALL_TAGS, build_record

def codes( violations ):
    return sorted( [ v.code for v in violations ] )

def decoded_record( tag = "ISO_2005" ):
    return decode( encode( build_record( tag ) ), tag )

class TestValidRecords( unittest.TestCase ):
    def test_built_records( self ):
        for tag in ALL_TAGS:
            self.assertEqual( check( build_record( tag ) ), [], tag )
            self.assertTrue( validate( build_record( tag ) ) )
    
    def test_decoded_records( self ):
        for tag in ALL_TAGS:
            self.assertEqual( check( decoded_record( tag ) ), [], tag )
    
    def test_explicit_profile( self ):
        record = build_record( "ISO_2005" )
        self.assertEqual( check( record, "ISO" ), [] )
        
        self.assertIn( SPEC_VERSION_MISMATCH, codes( check( record, "ANSI_2007" ) ) )

class TestCompleteness( unittest.TestCase ):
    def test_three_defects( self ):
        record = decoded_record()
        record.num_views = 3
        record.finger_views[ 0 ].minutiae_data[ 1 ].quality = 150
        record.record_length += 10
        
        self.assertEqual(
            codes( check( record ) ),
            sorted( [ NUM_VIEWS_MISMATCH, QUALITY_OUT_OF_RANGE, RECORD_LENGTH_MISMATCH ] )
        )
        
        with self.assertRaises( ValidationError ) as cm:
            validate( record )
        
        self.assertEqual( len( cm.exception.violations ), 3 )
        
        with self.assertRaises( ValidationError ):
            validate( record, allow_length_mismatch = True )
    
    def test_violation_paths( self ):
        record = decoded_record()
        record.finger_views[ 1 ].minutiae_data[ 0 ].quality = 101
        
        violations = check( record )
        self.assertEqual( len( violations ), 1 )
        self.assertEqual( violations[ 0 ].path, "finger_views[1].minutiae_data[0]" )
        self.assertIn( "QUALITY_OUT_OF_RANGE", str( violations[ 0 ] ) )

class TestLengthPolicy( unittest.TestCase ):
    def test_decoded_length_mismatch( self ):
        data = bytearray( encode( build_record( "ISO_2005" ) ) )
        data[ 8:12 ] = ( len( data ) - 2 ).to_bytes( 4, "big" )
        
        with self.assertLogs( "FMR", level = "WARNING" ):
            record = decode( bytes( data ), "ISO_2005" )
        
        self.assertEqual( codes( check( record ) ), [ RECORD_LENGTH_MISMATCH ] )
        
        with self.assertRaises( ValidationError ):
            validate( record )
        
        with self.assertLogs( "FMR", level = "WARNING" ):
            self.assertTrue( validate( record, allow_length_mismatch = True ) )
    
    def test_built_length_mismatch( self ):
        record = build_record( "ANSI_2004" )
        record.record_length -= 1
        
        self.assertEqual( codes( check( record ) ), [ RECORD_LENGTH_MISMATCH ] )

class TestRecordChecks( unittest.TestCase ):
    def test_format_id( self ):
        record = build_record( "ISO_2005" )
        record.format_id = b"FIR\x00"
        
        self.assertEqual( codes( check( record ) ), [ FORMAT_ID_MISMATCH ] )
    
    def test_record_length_type( self ):
        record = build_record( "ISO_2005" )
        record.record_length_type = "short"
        self.assertEqual( codes( check( record ) ), [ RECORD_LENGTH_TYPE_INVALID ] )
        
        record.record_length_type = None
        self.assertEqual( codes( check( record ) ), [ RECORD_LENGTH_TYPE_INVALID ] )
    
    def test_image_and_resolution( self ):
        record = build_record( "ISO_2005" )
        record.x_image_size = 0
        record.y_resolution = 0
        
        self.assertEqual( codes( check( record ) ), sorted( [ IMAGE_SIZE_INVALID, RESOLUTION_INVALID ] ) )
    
    def test_view_image_ansi_2007( self ):
        record = build_record( "ANSI_2007" )
        record.finger_views[ 1 ].x_resolution = 0
        
        self.assertEqual( codes( check( record ) ), [ RESOLUTION_INVALID ] )
    
    def test_compliance( self ):
        record = build_record( "ANSI_2004" )
        record.compliance = 3
        self.assertEqual( codes( check( record ) ), [ COMPLIANCE_INVALID ] )
        
        record.compliance = 8
        self.assertEqual( check( record ), [] )
    
    def test_duplicate_view( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 1 ].finger_number = 2
        record.finger_views[ 1 ].view_number = 0
        
        self.assertEqual( codes( check( record ) ), [ DUPLICATE_VIEW ] )

class TestViewChecks( unittest.TestCase ):
    def test_number_of_minutiae( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].number_of_minutiae = 4
        
        self.assertEqual( codes( check( record ) ), [ NUMBER_OF_MINUTIAE_MISMATCH ] )
    
    def test_too_many_minutiae( self ):
        record = build_record( "ISO_2005" )
        view = record.finger_views[ 0 ]
        view.minutiae_data = [ MinutiaPoint( 10, 10, 0, 50, 1 ) for _ in range( 256 ) ]
        view.number_of_minutiae = 256
        record.clean()
        
        self.assertEqual( codes( check( record ) ), sorted( [ FIELD_NOT_REPRESENTABLE, TOO_MANY_MINUTIAE ] ) )
    
    def test_codes( self ):
        record = build_record( "ISO_2005" )
        view = record.finger_views[ 0 ]
        view.finger_number = 11
        view.impression_type = 5
        view.finger_quality = 101
        
        self.assertEqual(
            codes( check( record ) ),
            sorted( [ FINGER_NUMBER_INVALID, IMPRESSION_TYPE_INVALID, FINGER_QUALITY_OUT_OF_RANGE ] )
        )
    
    def test_view_number( self ):
        record = build_record( "ANSI_2007" )
        record.finger_views[ 0 ].view_number = 16
        
        self.assertEqual( codes( check( record ) ), [ VIEW_NUMBER_INVALID ] )

class TestMinutiaChecks( unittest.TestCase ):
    def test_quality_sentinel( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].quality = 255
        
        self.assertEqual( check( record ), [] )
    
    def test_angle_range( self ):
        record = build_record( "ANSI_2004" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].angle_raw = 128
        self.assertEqual( codes( check( record ) ), [ ANGLE_OUT_OF_RANGE ] )
        
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].angle_raw = 255
        self.assertEqual( check( record ), [] )
    
    def test_coordinates( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].x_coord = 500
        record.finger_views[ 0 ].minutiae_data[ 1 ].y_coord = 550
        
        self.assertEqual( codes( check( record ) ), [ COORDINATE_OUT_OF_RANGE, COORDINATE_OUT_OF_RANGE ] )
    
    def test_coordinates_ansi_2007( self ):
        record = build_record( "ANSI_2007" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].y_coord = 600
        
        self.assertEqual( codes( check( record ) ), [ COORDINATE_OUT_OF_RANGE ] )
    
    def test_type( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].type = 3
        self.assertEqual( check( record ), [] )
        
        record.finger_views[ 0 ].minutiae_data[ 0 ].type = 4
        self.assertEqual( codes( check( record ) ), sorted( [ FIELD_NOT_REPRESENTABLE, MINUTIA_TYPE_INVALID ] ) )

class TestExtendedDataChecks( unittest.TestCase ):
    def test_declared_but_absent( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 1 ].extended_data_block_length = 8
        
        self.assertIn( EXTENDED_DATA_MISMATCH, codes( check( record ) ) )
    
    def test_present_but_not_declared( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].extended_data_block_length = 0
        
        self.assertIn( EXTENDED_DATA_MISMATCH, codes( check( record ) ) )
    
    def test_area_length( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].extended_data.append( ExtendedDataArea( 2, 6, b"\x00" ) )
        record.finger_views[ 0 ].extended_data_block_length = 14
        record.record_length += 5
        
        self.assertEqual( codes( check( record ) ), [ EXTENDED_DATA_MISMATCH ] )
    
    def test_not_supported( self ):
        record = build_record( "ISO_2005_NORMAL_CARD" )
        record.finger_views[ 0 ].extended_data.append( ExtendedDataArea( 1, 4, b"" ) )
        
        self.assertIn( EXTENDED_DATA_NOT_SUPPORTED, codes( check( record ) ) )

class TestStorageChecks( unittest.TestCase ):
    def test_card_quality( self ):
        for tag in ( "ISO_2005_NORMAL_CARD", "ISO_2005_COMPACT_CARD" ):
            record = build_record( tag )
            record.finger_views[ 0 ].minutiae_data[ 0 ].quality = 60

            self.assertEqual( codes( check( record ) ), [ FIELD_NOT_REPRESENTABLE ], tag )

    def test_compact_card_coordinates( self ):
        record = build_record( "ISO_2005_COMPACT_CARD" )
        record.finger_views[ 0 ].minutiae_data[ 0 ].x_coord = 300

        self.assertEqual( codes( check( record ) ), [ FIELD_NOT_REPRESENTABLE ] )

    def test_wide_image_coordinates( self ):
        record = build_record( "ISO_2005" )
        record.x_image_size = 30000
        record.finger_views[ 0 ].minutiae_data[ 0 ].x_coord = 20000

        violations = check( record )

        self.assertEqual( codes( violations ), [ FIELD_NOT_REPRESENTABLE ] )
        self.assertEqual( violations[ 0 ].path, "finger_views[0].minutiae_data[0]" )

    def test_implied_values( self ):
        record = build_record( "ISO_2005" )
        record.product_identifier_owner = 1
        self.assertEqual( codes( check( record ) ), [ FIELD_NOT_REPRESENTABLE ] )

        record = build_record( "ANSI_2004" )
        record.finger_views[ 1 ].algorithm_id = 5
        self.assertEqual( codes( check( record ) ), [ FIELD_NOT_REPRESENTABLE ] )

        record.finger_views[ 1 ].algorithm_id = 0
        self.assertEqual( check( record ), [] )

    def test_negative_value( self ):
        record = build_record( "ANSI_2007" )
        record.scanner_id = -1

        self.assertEqual( codes( check( record ) ), [ FIELD_NOT_REPRESENTABLE ] )

    def test_extended_area_type( self ):
        record = build_record( "ISO_2005" )
        record.finger_views[ 0 ].extended_data[ 0 ].type_id = 0x10000

        self.assertEqual( codes( check( record ) ), [ FIELD_NOT_REPRESENTABLE ] )

    def test_missing_spec_version( self ):
        record = build_record( "ANSI_2004" )
        record.spec_version = None

        self.assertEqual( codes( check( record ) ), [ SPEC_VERSION_MISMATCH ] )

        record.clean()
        self.assertEqual( check( record ), [] )

class TestEditedRecords( unittest.TestCase ):
    def test_clean_after_edit( self ):
        record = decoded_record( "ISO_2005" )
        self.assertEqual( record.consumed_length, 68 )

        record.finger_views[ 0 ].minutiae_data.append( MinutiaPoint( 30, 40, 10, 50, 1 ) )
        record.clean()

        self.assertIsNone( record.consumed_length )
        self.assertEqual( record.record_length, 74 )
        self.assertEqual( check( record ), [] )
        self.assertTrue( validate( record ) )
        self.assertEqual( len( to_xyt( record ).splitlines() ), 5 )

    def test_edit_without_clean( self ):
        record = decoded_record( "ISO_2005" )
        record.finger_views[ 0 ].minutiae_data.append( MinutiaPoint( 30, 40, 10, 50, 1 ) )

        self.assertIn( NUMBER_OF_MINUTIAE_MISMATCH, codes( check( record ) ) )

class TestValidator( unittest.TestCase ):
    def test_reuse( self ):
        validator = Validator( "ISO_2005" )
        
        bad = build_record( "ISO_2005" )
        bad.num_views = 0
        
        self.assertEqual( len( validator.check( bad ) ), 1 )
        self.assertEqual( validator.check( build_record( "ISO_2005" ) ), [] )

if __name__ == "__main__":
    unittest.main()
