#!/usr/bin/python
# -*- coding: UTF-8 -*-

################################################################################
#
#    Supported standards
#
#        ANSI_2004               ANSI/INCITS 378-2004
#        ANSI_2007               ANSI/INCITS 378-2007
#        ISO_2005                ISO/IEC 19794-2:2005, record format
#        ISO_2005_NORMAL_CARD    ISO/IEC 19794-2:2005, normal size card format
#        ISO_2005_COMPACT_CARD   ISO/IEC 19794-2:2005, compact size card format
#
#    All the standards share the same schema (record > views > minutiae). The
#    differences (fields present on the wire, widths, bit packing, angle unit
#    and validation limits) are stored in one StandardProfile per standard.
#    A layout is a list of big-endian words, each word being described by its
#    size in bytes and the list of ( field, number of bits ) packed in it,
#    starting from the most significant bit. The field `None` is reserved.
#
################################################################################

from ..core.config import *
from ..exceptions import UnsupportedStandard

ANSI_2004 = "ANSI_2004"
ANSI_2007 = "ANSI_2007"
ISO_2005 = "ISO_2005"
ISO_2005_NORMAL_CARD = "ISO_2005_NORMAL_CARD"
ISO_2005_COMPACT_CARD = "ISO_2005_COMPACT_CARD"

#    Standard tags and aliases
STD = {
    'ANSI_2004': ANSI_2004,
    'ANSI': ANSI_2004,
    'ANSI_2007': ANSI_2007,
    'ANSI07': ANSI_2007,
    'ISO_2005': ISO_2005,
    'ISO': ISO_2005,
    'ISO_2005_NORMAL_CARD': ISO_2005_NORMAL_CARD,
    'ISONC_2005': ISO_2005_NORMAL_CARD,
    'ISONC': ISO_2005_NORMAL_CARD,
    'ISO_2005_COMPACT_CARD': ISO_2005_COMPACT_CARD,
    'ISOCC_2005': ISO_2005_COMPACT_CARD,
    'ISOCC': ISO_2005_COMPACT_CARD,
}

def decode_standard( code ):
    """
        Return the canonical tag of the standard passed in parameter. This is
        the only place where the standard strings are parsed.

        :param code: Tag (or alias) of the standard.
        :type code: str

        :return: Canonical tag.
        :rtype: str

        :raise UnsupportedStandard: if the standard is not known

        Usage:

            >>> from FMR.standards import decode_standard
            >>> decode_standard( 'ANSI_2004' )
            'ANSI_2004'
            >>> decode_standard( 'isocc_2005' )
            'ISO_2005_COMPACT_CARD'
            >>> decode_standard( 'ISO_2011' )
            Traceback (most recent call last):
            ...
            FMR.exceptions.UnsupportedStandard: 'ISO_2011'
    """
    if isinstance( code, StandardProfile ):
        return code.name

    try:
        return STD[ str( code ).upper() ]

    except KeyError:
        raise UnsupportedStandard( repr( code ) )

################################################################################
#
#    Layouts
#
################################################################################

def layout_size( layout ):
    """
        Size, in bytes, of a layout.

            >>> from FMR.standards import layout_size, MINUTIA_RECORD, MINUTIA_COMPACT_CARD
            >>> layout_size( MINUTIA_RECORD )
            6
            >>> layout_size( MINUTIA_COMPACT_CARD )
            3
    """
    return sum( [ size for size, _ in layout ] )

def layout_fields( layout ):
    """
        Names of the fields stored in a layout, reserved bits excluded.

            >>> from FMR.standards import layout_fields, MINUTIA_RECORD
            >>> layout_fields( MINUTIA_RECORD )
            ['type', 'x_coord', 'y_coord', 'angle_raw', 'quality']
    """
    return [ name for _, fields in layout for name, _ in fields if name is not None ]

#    Record header, after the format identifier, the version and the length
RECORD_PRODUCT = [
    ( 2, [ ( "product_identifier_owner", 16 ) ] ),
    ( 2, [ ( "product_identifier_type", 16 ) ] ),
]

RECORD_CAPTURE = [
    ( 2, [ ( "compliance", 4 ), ( "scanner_id", 12 ) ] ),
]

RECORD_IMAGE = [
    ( 2, [ ( "x_image_size", 16 ) ] ),
    ( 2, [ ( "y_image_size", 16 ) ] ),
    ( 2, [ ( "x_resolution", 16 ) ] ),
    ( 2, [ ( "y_resolution", 16 ) ] ),
]

RECORD_VIEWS = [
    ( 1, [ ( "num_views", 8 ) ] ),
    ( 1, [ ( None, 8 ) ] ),
]

#    Finger view header
VIEW_2004 = [
    ( 1, [ ( "finger_number", 8 ) ] ),
    ( 1, [ ( "view_number", 4 ), ( "impression_type", 4 ) ] ),
    ( 1, [ ( "finger_quality", 8 ) ] ),
    ( 1, [ ( "number_of_minutiae", 8 ) ] ),
]

VIEW_2007 = [
    ( 1, [ ( "finger_number", 8 ) ] ),
    ( 1, [ ( "view_number", 8 ) ] ),
    ( 1, [ ( "impression_type", 8 ) ] ),
    ( 1, [ ( "finger_quality", 8 ) ] ),
    ( 2, [ ( "algorithm_id", 16 ) ] ),
    ( 2, [ ( "x_image_size", 16 ) ] ),
    ( 2, [ ( "y_image_size", 16 ) ] ),
    ( 2, [ ( "x_resolution", 16 ) ] ),
    ( 2, [ ( "y_resolution", 16 ) ] ),
    ( 1, [ ( "number_of_minutiae", 8 ) ] ),
]

#    Finger minutiae data
MINUTIA_RECORD = [
    ( 2, [ ( "type", 2 ), ( "x_coord", 14 ) ] ),
    ( 2, [ ( None, 2 ), ( "y_coord", 14 ) ] ),
    ( 1, [ ( "angle_raw", 8 ) ] ),
    ( 1, [ ( "quality", 8 ) ] ),
]

MINUTIA_NORMAL_CARD = MINUTIA_RECORD[ 0:3 ]

MINUTIA_COMPACT_CARD = [
    ( 1, [ ( "x_coord", 8 ) ] ),
    ( 1, [ ( "y_coord", 8 ) ] ),
    ( 1, [ ( "type", 2 ), ( "angle_raw", 6 ) ] ),
]

#    Values of the fields not stored on the wire
NO_VIEW_IMAGE = {
    "algorithm_id": 0,
    "x_image_size": 0,
    "y_image_size": 0,
    "x_resolution": 0,
    "y_resolution": 0,
}

NO_RECORD_IMAGE = {
    "x_image_size": 0,
    "y_image_size": 0,
    "x_resolution": 0,
    "y_resolution": 0,
}

NO_PRODUCT = {
    "product_identifier_owner": 0,
    "product_identifier_type": 0,
}

NO_MINUTIA_QUALITY = {
    "quality": MINUTIA_QUALITY_UNAVAILABLE,
}

################################################################################
#
#    Profile object
#
################################################################################

class StandardProfile( object ):
    """
        Description of one standard: layouts, implied values and validation
        limits. The profiles are shared, read-only objects; use
        :func:`~FMR.standards.get_profile` to get one.

        :cvar str name: Canonical tag of the standard.
        :cvar str description: Full name of the standard.
        :cvar str byte_order: Byte order of the multi-byte fields.
        :cvar bytes format_id: Format identifier.
        :cvar bytes spec_version: Version of the standard.
        :cvar str record_length_encoding: 'ansi' (2 bytes, or 0 followed by 4 bytes) or 'fixed' (4 bytes).
        :cvar int angle_quantum: Number of angle units in a full circle.
    """
    def __init__( self, name, description, spec_version, record_length_encoding,
                  record_header, view_header, minutia, angle_quantum,
                  has_extended_data = True, coordinates_in_pixels = True,
                  implied_record = None, implied_view = None, implied_minutia = None,
                  compliance_codes = None ):
        self.name = name
        self.description = description
        self.byte_order = BIG_ENDIAN

        self.format_id = FMR_FORMAT_ID
        self.spec_version = spec_version
        self.record_length_encoding = record_length_encoding

        self.record_header = record_header
        self.view_header = view_header
        self.minutia = minutia

        self.implied_record = implied_record or {}
        self.implied_view = implied_view or {}
        self.implied_minutia = implied_minutia or {}

        self.angle_quantum = angle_quantum
        self.max_angle = angle_quantum - 1

        self.has_extended_data = has_extended_data
        self.coordinates_in_pixels = coordinates_in_pixels

        #    Validation limits
        self.max_minutiae = MAX_MINUTIAE
        self.max_view_number = 15
        self.finger_numbers = tuple( range( 0, 11 ) )
        self.impression_types = ( 0, 1, 2, 3, 8 )
        self.compliance_codes = compliance_codes

    @property
    def record_length_types( self ):
        """
            Record length types allowed by the standard.
        """
        if self.record_length_encoding == RECORD_LENGTH_ANSI:
            return ( RECORD_LENGTH_SHORT, RECORD_LENGTH_LONG )
        else:
            return ( RECORD_LENGTH_LONG, )

    @property
    def view_image_info( self ):
        """
            True if the image size and resolution are stored in each view
            (ANSI/INCITS 378-2007) instead of the record header.
        """
        return "x_image_size" in layout_fields( self.view_header )

    @property
    def record_image_info( self ):
        return "x_image_size" in layout_fields( self.record_header )

    @property
    def minutia_size( self ):
        return layout_size( self.minutia )

    def __str__( self ):
        return "StandardProfile( %s )" % self.name

    def __repr__( self ):
        return self.__str__()

################################################################################
#
#    Profiles table
#
################################################################################

PROFILES = {
    ANSI_2004: StandardProfile(
        ANSI_2004,
        "ANSI/INCITS 378-2004",
        FMR_SPEC_VERSION_2004,
        RECORD_LENGTH_ANSI,
        RECORD_PRODUCT + RECORD_CAPTURE + RECORD_IMAGE + RECORD_VIEWS,
        VIEW_2004,
        MINUTIA_RECORD,
        128,
        implied_view = NO_VIEW_IMAGE,
        compliance_codes = ( 0, 8 ),
    ),
    ANSI_2007: StandardProfile(
        ANSI_2007,
        "ANSI/INCITS 378-2007",
        FMR_SPEC_VERSION_2007,
        RECORD_LENGTH_FIXED,
        RECORD_PRODUCT + RECORD_CAPTURE + RECORD_VIEWS,
        VIEW_2007,
        MINUTIA_RECORD,
        128,
        implied_record = NO_RECORD_IMAGE,
        compliance_codes = ( 0, 8 ),
    ),
    ISO_2005: StandardProfile(
        ISO_2005,
        "ISO/IEC 19794-2:2005",
        FMR_SPEC_VERSION_2004,
        RECORD_LENGTH_FIXED,
        RECORD_CAPTURE + RECORD_IMAGE + RECORD_VIEWS,
        VIEW_2004,
        MINUTIA_RECORD,
        256,
        implied_record = NO_PRODUCT,
        implied_view = NO_VIEW_IMAGE,
    ),
    ISO_2005_NORMAL_CARD: StandardProfile(
        ISO_2005_NORMAL_CARD,
        "ISO/IEC 19794-2:2005 normal size card format",
        FMR_SPEC_VERSION_2004,
        RECORD_LENGTH_FIXED,
        RECORD_CAPTURE + RECORD_IMAGE + RECORD_VIEWS,
        VIEW_2004,
        MINUTIA_NORMAL_CARD,
        256,
        has_extended_data = False,
        implied_record = NO_PRODUCT,
        implied_view = NO_VIEW_IMAGE,
        implied_minutia = NO_MINUTIA_QUALITY,
    ),
    ISO_2005_COMPACT_CARD: StandardProfile(
        ISO_2005_COMPACT_CARD,
        "ISO/IEC 19794-2:2005 compact size card format",
        FMR_SPEC_VERSION_2004,
        RECORD_LENGTH_FIXED,
        RECORD_CAPTURE + RECORD_IMAGE + RECORD_VIEWS,
        VIEW_2004,
        MINUTIA_COMPACT_CARD,
        64,
        has_extended_data = False,
        coordinates_in_pixels = False,
        implied_record = NO_PRODUCT,
        implied_view = NO_VIEW_IMAGE,
        implied_minutia = NO_MINUTIA_QUALITY,
    ),
}

def get_profile( tag ):
    """
        Return the StandardProfile for the tag passed in parameter.

        :param tag: Tag (or alias) of the standard, or a StandardProfile.
        :type tag: str or StandardProfile

        :return: Profile of the standard.
        :rtype: StandardProfile

        :raise UnsupportedStandard: if the standard is not known

        Usage:

            >>> from FMR.standards import get_profile
            >>> p = get_profile( "ISONC_2005" )
            >>> p
            StandardProfile( ISO_2005_NORMAL_CARD )
            >>> p.angle_quantum
            256
            >>> p.minutia_size
            5
            >>> get_profile( "ANSI_2004" ).record_length_types
            ('short', 'long')
            >>> get_profile( "ANSI_2007" ).view_image_info
            True
    """
    if isinstance( tag, StandardProfile ):
        return tag

    return PROFILES[ decode_standard( tag ) ]
