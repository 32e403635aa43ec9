#!/usr/bin/python
# -*- coding: UTF-8 -*-

import unittest

from FMR.core import ByteCursor
from FMR.core.config import MINUTIA_TYPE_UNKNOWN, MINUTIA_QUALITY_UNAVAILABLE
from FMR.exceptions import FieldOverflow, TruncatedRecord, OutOfBounds
from FMR.fingerprint import MinutiaPoint
from FMR.fingerprint.fmd import decode_fmd, encode_fmd, angle_degrees
from FMR.standards import get_profile, PROFILES

def encoded( point, tag ):
    profile = get_profile( tag )
    c = ByteCursor( bytearray( profile.minutia_size ) )
    encode_fmd( point, profile, c )
    return c.getvalue()

class TestAngleConversion( unittest.TestCase ):
    def test_zero( self ):
        for profile in PROFILES.values():
            self.assertEqual( angle_degrees( 0, profile ), 0.0 )
    
    def test_quantum_boundary( self ):
        for profile in PROFILES.values():
            q = profile.angle_quantum
            
            self.assertEqual( angle_degrees( q, profile ), 360.0 )
            self.assertEqual( angle_degrees( q // 4, profile ), 90.0 )
            self.assertEqual( angle_degrees( profile.max_angle, profile ), 360.0 * ( q - 1 ) / q )
    
    def test_ansi_and_iso( self ):
        self.assertEqual( angle_degrees( MinutiaPoint( angle_raw = 127 ), "ANSI_2004" ), 357.1875 )
        self.assertEqual( angle_degrees( MinutiaPoint( angle_raw = 255 ), "ISO_2005" ), 358.59375 )
        self.assertEqual( angle_degrees( MinutiaPoint( angle_raw = 1 ), "ISO_2005" ), 1.40625 )

class TestMinutiaCodec( unittest.TestCase ):
    def test_iso_record_packing( self ):
        point = MinutiaPoint( x_coord = 120, y_coord = 340, angle_raw = 64, quality = 60, type = 2 )
        data = encoded( point, "ISO_2005" )
        
        self.assertEqual( data, b"\x80\x78\x01\x54\x40\x3C" )
        self.assertEqual( decode_fmd( ByteCursor( data ), get_profile( "ISO_2005" ) ), point )
    
    def test_ansi_packing( self ):
        point = MinutiaPoint( 0x3FFF, 0x3FFF, 127, 100, 1 )
        data = encoded( point, "ANSI_2004" )
        
        self.assertEqual( data, b"\x7F\xFF\x3F\xFF\x7F\x64" )
        self.assertEqual( decode_fmd( ByteCursor( data ), get_profile( "ANSI_2004" ) ), point )
    
    def test_reserved_bits_ignored( self ):
        point = decode_fmd( ByteCursor( b"\x40\x0A\xC0\x14\x10\x32" ), get_profile( "ISO_2005" ) )
        
        self.assertEqual( point.y_coord, 20 )
        self.assertEqual( point.type, 1 )
    
    def test_normal_card( self ):
        profile = get_profile( "ISO_2005_NORMAL_CARD" )
        point = decode_fmd( ByteCursor( b"\x80\x78\x01\x54\x40" ), profile )
        
        self.assertEqual( point, MinutiaPoint( 120, 340, 64, MINUTIA_QUALITY_UNAVAILABLE, 2 ) )
        self.assertEqual( encoded( point, profile ), b"\x80\x78\x01\x54\x40" )
    
    def test_compact_card( self ):
        profile = get_profile( "ISO_2005_COMPACT_CARD" )
        point = decode_fmd( ByteCursor( b"\x78\x54\x50" ), profile )
        
        self.assertEqual( point, MinutiaPoint( 120, 84, 16, MINUTIA_QUALITY_UNAVAILABLE, 1 ) )
        self.assertEqual( angle_degrees( point, profile ), 90.0 )
        self.assertEqual( encoded( point, profile ), b"\x78\x54\x50" )
    
    def test_type_leniency( self ):
        point = decode_fmd( ByteCursor( b"\xC0\x78\x01\x54\x40\x3C" ), get_profile( "ISO_2005" ) )
        
        self.assertEqual( point.type, MINUTIA_TYPE_UNKNOWN )
        self.assertEqual( point.type_label, "Unknown" )
        self.assertEqual( MinutiaPoint( type = 9 ).type_label, "Unknown" )
    
    def test_truncated( self ):
        with self.assertRaises( TruncatedRecord ):
            decode_fmd( ByteCursor( b"\x80\x78\x01\x54\x40" ), get_profile( "ISO_2005" ) )
        
        with self.assertRaises( OutOfBounds ):
            decode_fmd( ByteCursor( b"\x78\x54" ), get_profile( "ISOCC" ) )

class TestMinutiaOverflow( unittest.TestCase ):
    def test_type_overflow( self ):
        with self.assertRaises( FieldOverflow ):
            encoded( MinutiaPoint( 120, 340, 64, 60, 4 ), "ISO_2005" )
    
    def test_coordinate_overflow( self ):
        with self.assertRaises( FieldOverflow ):
            encoded( MinutiaPoint( 0x4000, 340, 64, 60, 1 ), "ANSI_2004" )
        
        with self.assertRaises( FieldOverflow ):
            encoded( MinutiaPoint( 256, 10, 16, 255, 1 ), "ISO_2005_COMPACT_CARD" )
    
    def test_angle_overflow( self ):
        with self.assertRaises( FieldOverflow ):
            encoded( MinutiaPoint( 10, 10, 256, 60, 1 ), "ISO_2005" )
        
        with self.assertRaises( FieldOverflow ):
            encoded( MinutiaPoint( 10, 10, 64, 255, 1 ), "ISO_2005_COMPACT_CARD" )
    
    def test_quality_not_stored_in_cards( self ):
        for tag in ( "ISO_2005_NORMAL_CARD", "ISO_2005_COMPACT_CARD" ):
            with self.assertRaises( FieldOverflow ):
                encoded( MinutiaPoint( 10, 10, 16, 60, 1 ), tag )

if __name__ == "__main__":
    unittest.main()
