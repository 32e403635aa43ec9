#!/usr/bin/python
# -*- coding: UTF-8 -*-

from ..core.config import MINUTIA_TYPE_UNKNOWN
from ..core.functions import read_layout, write_layout, leveler
from ..core.logger import debug
from ..exceptions import FieldOverflow, OutOfBounds, TruncatedRecord
from ..standards import get_profile
from . import MinutiaPoint
from .labels import MINUTIA_TYPE

################################################################################
#
#    Finger Minutiae Data codec
#
################################################################################

def decode_fmd( cursor, profile ):
    """
        Read one minutia from the cursor. The fields not stored by the
        standard (the quality for the card formats) are set to their implied
        value. A type code not in the known list is decoded as 'Unknown'.

        :param cursor: Cursor positioned on the minutia.
        :type cursor: ByteCursor

        :param profile: Profile of the standard.
        :type profile: StandardProfile

        :return: Decoded minutia.
        :rtype: MinutiaPoint

        :raise TruncatedRecord: if the cursor runs out of bytes

        Usage:

            >>> from FMR.core import ByteCursor
            >>> from FMR.fingerprint.fmd import decode_fmd
            >>> from FMR.standards import get_profile
            >>> decode_fmd( ByteCursor( b"\\x80\\x78\\x01\\x54\\x40\\x3C" ), get_profile( "ISO_2005" ) )
            MinutiaPoint( x_coord='120', y_coord='340', angle_raw='64', quality='60', type='2' )

            >>> decode_fmd( ByteCursor( b"\\x78\\x54\\xD0" ), get_profile( "ISOCC_2005" ) )
            MinutiaPoint( x_coord='120', y_coord='84', angle_raw='16', quality='255', type='3' )
    """
    try:
        values = read_layout( cursor, profile.minutia, profile.byte_order )

    except OutOfBounds as e:
        raise TruncatedRecord( "minutia: %s" % e )

    for name, value in profile.implied_minutia.items():
        values.setdefault( name, value )

    if values[ "type" ] not in MINUTIA_TYPE:
        values[ "type" ] = MINUTIA_TYPE_UNKNOWN

    return MinutiaPoint( **values )

def encode_fmd( point, profile, cursor ):
    """
        Write one minutia in the cursor, with the bit packing of the standard.

        :raise FieldOverflow: if a value is too large for its field, or if a
            field not stored by the standard is not set to its implied value

        Usage:

            >>> from FMR.core import ByteCursor
            >>> from FMR.core.functions import hexstring
            >>> from FMR.fingerprint import MinutiaPoint
            >>> from FMR.fingerprint.fmd import encode_fmd
            >>> from FMR.standards import get_profile
            >>> c = ByteCursor( bytearray( 6 ) )
            >>> encode_fmd( MinutiaPoint( 120, 340, 64, 60, 2 ), get_profile( "ISO_2005" ), c )
            >>> hexstring( c.getvalue() )
            '80780154403C'

            >>> encode_fmd( MinutiaPoint( 120, 340, 64, 60, 2 ), get_profile( "ISONC_2005" ), ByteCursor( bytearray( 5 ) ) )
            Traceback (most recent call last):
            ...
            FMR.exceptions.FieldOverflow: quality: 60 can not be stored in the ISO_2005_NORMAL_CARD format
    """
    values = point.as_dict()

    for name, implied in profile.implied_minutia.items():
        if values[ name ] != implied:
            raise FieldOverflow( "%s: %r can not be stored in the %s format" % ( name, values[ name ], profile.name ) )

    write_layout( cursor, profile.minutia, values, profile.byte_order )

################################################################################
#
#    Angle conversion
#
################################################################################

def angle_degrees( point, profile ):
    """
        Convert the raw angle of a minutia to degrees, with the angle unit of
        the standard.

        :param point: Minutia (or raw angle value).
        :type point: MinutiaPoint or int

        :param profile: Profile (or tag) of the standard.
        :type profile: StandardProfile or str

        :return: Angle in degrees.
        :rtype: float

        Usage:

            >>> from FMR.fingerprint import MinutiaPoint
            >>> from FMR.fingerprint.fmd import angle_degrees
            >>> angle_degrees( MinutiaPoint( angle_raw = 64 ), "ISO_2005" )
            90.0
            >>> angle_degrees( MinutiaPoint( angle_raw = 32 ), "ANSI_2004" )
            90.0
            >>> angle_degrees( 16, "ISO_2005_COMPACT_CARD" )
            90.0
            >>> angle_degrees( 0, "ANSI_2007" )
            0.0
            >>> angle_degrees( 128, "ANSI_2004" )
            360.0
    """
    profile = get_profile( profile )

    if isinstance( point, MinutiaPoint ):
        raw = point.angle_raw
    else:
        raw = point

    return 360.0 * raw / profile.angle_quantum

def log_fmd( point, profile, level = 3 ):
    debug.debug( leveler( "minutia: x=%d y=%d angle=%d (%.2f deg) quality=%d type=%s" % (
        point.x_coord,
        point.y_coord,
        point.angle_raw,
        angle_degrees( point, profile ),
        point.quality,
        point.type_label
    ), level ) )
