#!/usr/bin/python
# -*- coding: UTF-8 -*-

################################################################################
#
#    Validation of the Finger Minutiae Records
#
#        All the checks are done on the whole record; the violations are
#        collected and reported together in one ValidationError.
#
################################################################################

from ..core.config import *
from ..core.logger import debug
from ..core.functions import leveler
from ..exceptions import ValidationError
from ..fingerprint.fmr import fmr_length
from ..fingerprint.labels import MINUTIA_TYPE
from ..standards import get_profile

#    Violation codes
FORMAT_ID_MISMATCH = "FORMAT_ID_MISMATCH"
SPEC_VERSION_MISMATCH = "SPEC_VERSION_MISMATCH"
RECORD_LENGTH_TYPE_INVALID = "RECORD_LENGTH_TYPE_INVALID"
RECORD_LENGTH_MISMATCH = "RECORD_LENGTH_MISMATCH"
IMAGE_SIZE_INVALID = "IMAGE_SIZE_INVALID"
RESOLUTION_INVALID = "RESOLUTION_INVALID"
COMPLIANCE_INVALID = "COMPLIANCE_INVALID"
NUM_VIEWS_MISMATCH = "NUM_VIEWS_MISMATCH"
DUPLICATE_VIEW = "DUPLICATE_VIEW"
NUMBER_OF_MINUTIAE_MISMATCH = "NUMBER_OF_MINUTIAE_MISMATCH"
TOO_MANY_MINUTIAE = "TOO_MANY_MINUTIAE"
FINGER_NUMBER_INVALID = "FINGER_NUMBER_INVALID"
VIEW_NUMBER_INVALID = "VIEW_NUMBER_INVALID"
IMPRESSION_TYPE_INVALID = "IMPRESSION_TYPE_INVALID"
FINGER_QUALITY_OUT_OF_RANGE = "FINGER_QUALITY_OUT_OF_RANGE"
QUALITY_OUT_OF_RANGE = "QUALITY_OUT_OF_RANGE"
ANGLE_OUT_OF_RANGE = "ANGLE_OUT_OF_RANGE"
MINUTIA_TYPE_INVALID = "MINUTIA_TYPE_INVALID"
COORDINATE_OUT_OF_RANGE = "COORDINATE_OUT_OF_RANGE"
EXTENDED_DATA_MISMATCH = "EXTENDED_DATA_MISMATCH"
EXTENDED_DATA_NOT_SUPPORTED = "EXTENDED_DATA_NOT_SUPPORTED"
FIELD_NOT_REPRESENTABLE = "FIELD_NOT_REPRESENTABLE"

#    Violations accepted with the `allow_length_mismatch` flag
LENGTH_CODES = ( RECORD_LENGTH_MISMATCH, )

class Violation( object ):
    """
        One non-conformity of a record.

        :cvar str code: Code of the violation (module constant).
        :cvar str path: Location in the record ('record',
            'finger_views[0].minutiae_data[2]', ...).
        :cvar str message: Human readable description.
    """
    def __init__( self, code, path, message ):
        self.code = code
        self.path = path
        self.message = message

    def __str__( self ):
        return "%s at %s: %s" % ( self.code, self.path, self.message )

    def __repr__( self ):
        return "Violation( %s, %s )" % ( self.code, self.path )

################################################################################
#
#    Validator
#
################################################################################

class Validator( object ):
    """
        Check a record against the limits of one standard.

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView, MinutiaPoint
            >>> from FMR.validation import Validator
            >>> view = FingerView( finger_number = 2, finger_quality = 60 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197 )
            >>> record.finger_views.append( view )
            >>> record.clean( "ISO_2005" )
            >>> Validator( "ISO_2005" ).check( record )
            []
            >>> view.minutiae_data[ 0 ].quality = 101
            >>> Validator( "ISO_2005" ).check( record )
            [Violation( QUALITY_OUT_OF_RANGE, finger_views[0].minutiae_data[0] )]
    """
    def __init__( self, profile ):
        self.profile = get_profile( profile )
        self.violations = []

    def add( self, code, path, message ):
        v = Violation( code, path, message )
        debug.debug( leveler( str( v ), 1 ) )
        self.violations.append( v )

    def check( self, record ):
        """
            Run all the checks on the record.

            :return: List of the violations found (empty for a valid record).
            :rtype: list of Violation
        """
        self.violations = []

        debug.debug( "Validating the record against %s" % self.profile.name )

        self.check_header( record )

        for i, view in enumerate( record.finger_views ):
            self.check_view( record, view, "finger_views[%d]" % i )

        self.check_length( record )

        return self.violations

    ############################################################################
    #
    #    Storage of the values
    #
    ############################################################################

    def check_fields( self, obj, layout, implied, path ):
        """
            Check that the values stored in `layout` fit in their number of
            bits, and that the values not stored by the standard are set to
            their implied value.
        """
        values = obj.as_dict()

        for _, fields in layout:
            for name, bits in fields:
                if name is None:
                    continue

                value = values[ name ]

                if not isinstance( value, int ) or not 0 <= value < 1 << bits:
                    self.add( FIELD_NOT_REPRESENTABLE, path, "%s: %r does not fit in %d bits" % ( name, value, bits ) )

        for name, value in implied.items():
            if values[ name ] != value:
                self.add( FIELD_NOT_REPRESENTABLE, path, "%s: %r can not be stored in the %s format" % ( name, values[ name ], self.profile.name ) )

    ############################################################################
    #
    #    Record header
    #
    ############################################################################

    def check_header( self, record ):
        p = self.profile

        self.check_fields( record, p.record_header, p.implied_record, "record" )

        if record.format_id != p.format_id:
            self.add( FORMAT_ID_MISMATCH, "record", "format id %r, %r expected" % ( record.format_id, p.format_id ) )

        if record.spec_version != p.spec_version:
            self.add( SPEC_VERSION_MISMATCH, "record", "version %r, %r expected" % ( record.spec_version, p.spec_version ) )

        if record.record_length_type not in p.record_length_types:
            self.add( RECORD_LENGTH_TYPE_INVALID, "record", "length type %r not in %s" % ( record.record_length_type, ", ".join( p.record_length_types ) ) )

        if p.record_image_info:
            self.check_image( record, "record" )

        if p.compliance_codes is not None and record.compliance not in p.compliance_codes:
            self.add( COMPLIANCE_INVALID, "record", "compliance %d not allowed" % record.compliance )

        if record.num_views != len( record.finger_views ):
            self.add( NUM_VIEWS_MISMATCH, "record", "%d views declared, %d stored" % ( record.num_views, len( record.finger_views ) ) )

        seen = set()

        for i, view in enumerate( record.finger_views ):
            key = ( view.finger_number, view.view_number )

            if key in seen:
                self.add( DUPLICATE_VIEW, "finger_views[%d]" % i, "finger %d, view %d already stored" % key )

            seen.add( key )

    def check_image( self, obj, path ):
        if obj.x_image_size == 0 or obj.y_image_size == 0:
            self.add( IMAGE_SIZE_INVALID, path, "image size %dx%d" % ( obj.x_image_size, obj.y_image_size ) )

        if obj.x_resolution == 0 or obj.y_resolution == 0:
            self.add( RESOLUTION_INVALID, path, "resolution %dx%d" % ( obj.x_resolution, obj.y_resolution ) )

    ############################################################################
    #
    #    Finger views
    #
    ############################################################################

    def check_view( self, record, view, path ):
        p = self.profile

        self.check_fields( view, p.view_header, p.implied_view, path )

        if view.number_of_minutiae != len( view.minutiae_data ):
            self.add( NUMBER_OF_MINUTIAE_MISMATCH, path, "%d minutiae declared, %d stored" % ( view.number_of_minutiae, len( view.minutiae_data ) ) )

        if len( view.minutiae_data ) > p.max_minutiae:
            self.add( TOO_MANY_MINUTIAE, path, "%d minutiae, %d max" % ( len( view.minutiae_data ), p.max_minutiae ) )

        if view.finger_number not in p.finger_numbers:
            self.add( FINGER_NUMBER_INVALID, path, "finger number %d" % view.finger_number )

        if not 0 <= view.view_number <= p.max_view_number:
            self.add( VIEW_NUMBER_INVALID, path, "view number %d" % view.view_number )

        if view.impression_type not in p.impression_types:
            self.add( IMPRESSION_TYPE_INVALID, path, "impression type %d" % view.impression_type )

        if not FINGER_QUALITY_MIN <= view.finger_quality <= FINGER_QUALITY_MAX:
            self.add( FINGER_QUALITY_OUT_OF_RANGE, path, "finger quality %d" % view.finger_quality )

        if p.view_image_info:
            self.check_image( view, path )
            image = view
        else:
            image = record

        for i, point in enumerate( view.minutiae_data ):
            self.check_minutia( point, image, "%s.minutiae_data[%d]" % ( path, i ) )

        self.check_extended_data( view, path )

    def check_minutia( self, point, image, path ):
        p = self.profile

        self.check_fields( point, p.minutia, p.implied_minutia, path )

        if point.quality != MINUTIA_QUALITY_UNAVAILABLE and not MINUTIA_QUALITY_MIN <= point.quality <= MINUTIA_QUALITY_MAX:
            self.add( QUALITY_OUT_OF_RANGE, path, "quality %d" % point.quality )

        if not 0 <= point.angle_raw <= p.max_angle:
            self.add( ANGLE_OUT_OF_RANGE, path, "angle %d, %d max" % ( point.angle_raw, p.max_angle ) )

        if point.type not in MINUTIA_TYPE:
            self.add( MINUTIA_TYPE_INVALID, path, "type %r" % point.type )

        if p.coordinates_in_pixels:
            if image.x_image_size and point.x_coord >= image.x_image_size:
                self.add( COORDINATE_OUT_OF_RANGE, path, "x %d outside of a %d pixels wide image" % ( point.x_coord, image.x_image_size ) )

            if image.y_image_size and point.y_coord >= image.y_image_size:
                self.add( COORDINATE_OUT_OF_RANGE, path, "y %d outside of a %d pixels high image" % ( point.y_coord, image.y_image_size ) )

    def check_extended_data( self, view, path ):
        if not self.profile.has_extended_data:
            if view.extended_data or view.extended_data_block_length:
                self.add( EXTENDED_DATA_NOT_SUPPORTED, path, "extended data in a %s record" % self.profile.name )

            return

        declared = view.extended_data_block_length
        stored = sum( [ area.length for area in view.extended_data ] )

        if declared and not view.extended_data:
            self.add( EXTENDED_DATA_MISMATCH, path, "extended data block of %d bytes declared, no area stored" % declared )

        elif view.extended_data and not declared:
            self.add( EXTENDED_DATA_MISMATCH, path, "%d extended data areas stored, no block declared" % len( view.extended_data ) )

        elif declared != stored:
            self.add( EXTENDED_DATA_MISMATCH, path, "extended data block of %d bytes declared, %d bytes in the areas" % ( declared, stored ) )

        if not 0 <= declared <= 0xFFFF:
            self.add( FIELD_NOT_REPRESENTABLE, path, "extended_data_block_length: %d does not fit in 16 bits" % declared )

        for i, area in enumerate( view.extended_data ):
            if not 0 <= area.type_id <= 0xFFFF or not 0 <= area.length <= 0xFFFF:
                self.add( FIELD_NOT_REPRESENTABLE, "%s.extended_data[%d]" % ( path, i ), "type 0x%X, length %d, 16 bits values expected" % ( area.type_id, area.length ) )

            if area.length != FEDB_AREA_HEADER_LENGTH + len( area.data ):
                self.add( EXTENDED_DATA_MISMATCH, "%s.extended_data[%d]" % ( path, i ), "area of %d bytes declared, %d bytes stored" % ( area.length, FEDB_AREA_HEADER_LENGTH + len( area.data ) ) )

    ############################################################################
    #
    #    Record length
    #
    ############################################################################

    def check_length( self, record ):
        if record.consumed_length is not None:
            actual = record.consumed_length
            what = "decoded"
        else:
            actual = fmr_length( record, self.profile )
            what = "computed"

        if record.record_length != actual:
            self.add( RECORD_LENGTH_MISMATCH, "record", "%d bytes declared, %d bytes %s" % ( record.record_length, actual, what ) )

################################################################################
#
#    Module functions
#
################################################################################

def check( record, profile = None ):
    """
        Return the list of all the violations of the record. The standard used
        to decode the record is used by default.

        :rtype: list of Violation
    """
    return Validator( profile or record.format_std ).check( record )

def validate( record, profile = None, allow_length_mismatch = False ):
    """
        Validate the record.

        :param record: Record to validate.
        :type record: MinutiaeRecord

        :param profile: Profile (or tag) of the standard; the standard used to
            decode the record by default.
        :type profile: StandardProfile or str

        :param allow_length_mismatch: Accept a record if the only violations
            are on the record length.
        :type allow_length_mismatch: bool

        :return: True
        :rtype: bool

        :raise ValidationError: with the list of all the violations

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord
            >>> from FMR.validation import validate
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197 )
            >>> record.clean( "ISO" )
            >>> validate( record )
            True
            >>> record.record_length += 2
            >>> validate( record )
            Traceback (most recent call last):
            ...
            FMR.exceptions.ValidationError: 1 violation(s): RECORD_LENGTH_MISMATCH at record: 26 bytes declared, 24 bytes computed
            >>> validate( record, allow_length_mismatch = True )
            True
    """
    violations = check( record, profile )

    if not violations:
        return True

    if allow_length_mismatch and all( [ v.code in LENGTH_CODES for v in violations ] ):
        debug.warning( "Record accepted with a length mismatch: %s" % "; ".join( [ str( v ) for v in violations ] ) )
        return True

    raise ValidationError( violations )
