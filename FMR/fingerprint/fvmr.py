#!/usr/bin/python
# -*- coding: UTF-8 -*-

from ..core import ByteCursor
from ..core.config import FEDB_AREA_HEADER_LENGTH
from ..core.functions import read_layout, write_layout, leveler, bindump
from ..core.logger import debug
from ..exceptions import DecodeError, FieldOverflow, OutOfBounds, TruncatedRecord
from ..standards import get_profile, layout_size
from . import FingerView, ExtendedDataArea
from .fmd import decode_fmd, encode_fmd, log_fmd
from .labels import FINGER_POSITION_CODE, IMPRESSION_TYPE_CODE, EXTENDED_DATA_TYPE

################################################################################
#
#    Finger View Minutiae Record codec
#
################################################################################

def decode_fvmr( cursor, profile ):
    """
        Read one finger view: the view header, exactly `number_of_minutiae`
        minutiae (in the stored order) and, for the standards supporting it,
        the extended data block.

        :param cursor: Cursor positioned on the view header.
        :type cursor: ByteCursor

        :param profile: Profile of the standard.
        :type profile: StandardProfile

        :return: Decoded finger view.
        :rtype: FingerView

        :raise TruncatedRecord: if the cursor runs out of bytes

        Usage:

            >>> from FMR.core import ByteCursor
            >>> from FMR.fingerprint.fvmr import decode_fvmr
            >>> from FMR.standards import get_profile
            >>> data = b"\\x02\\x00\\x3C\\x01" + b"\\x80\\x78\\x01\\x54\\x40\\x3C" + b"\\x00\\x00"
            >>> view = decode_fvmr( ByteCursor( data ), get_profile( "ISO_2005" ) )
            >>> view.finger_number, view.finger_quality, view.number_of_minutiae
            (2, 60, 1)
            >>> view.minutiae_data
            [MinutiaPoint( x_coord='120', y_coord='340', angle_raw='64', quality='60', type='2' )]

            >>> decode_fvmr( ByteCursor( data[ :-5 ] ), get_profile( "ISO_2005" ) )
            Traceback (most recent call last):
            ...
            FMR.exceptions.TruncatedRecord: minutia 1 of 1: minutia: 2 bytes requested at offset 6, 1 available
    """
    try:
        values = read_layout( cursor, profile.view_header, profile.byte_order )

    except OutOfBounds as e:
        raise TruncatedRecord( "finger view header: %s" % e )

    for name, value in profile.implied_view.items():
        values.setdefault( name, value )

    view = FingerView( **values )

    debug.debug( leveler( "finger number: %d (%s)" % ( view.finger_number, FINGER_POSITION_CODE.get( view.finger_number, "unknown code" ) ), 2 ) )
    debug.debug( leveler( "view number: %d" % view.view_number, 2 ) )
    debug.debug( leveler( "impression type: %d (%s)" % ( view.impression_type, IMPRESSION_TYPE_CODE.get( view.impression_type, "unknown code" ) ), 2 ) )
    debug.debug( leveler( "finger quality: %d" % view.finger_quality, 2 ) )
    debug.debug( leveler( "number of minutiae: %d" % view.number_of_minutiae, 2 ) )

    for i in range( view.number_of_minutiae ):
        try:
            point = decode_fmd( cursor, profile )

        except TruncatedRecord as e:
            raise TruncatedRecord( "minutia %d of %d: %s" % ( i + 1, view.number_of_minutiae, e ) )

        log_fmd( point, profile )
        view.minutiae_data.append( point )

    if profile.has_extended_data:
        decode_extended_data( cursor, view )

    return view

def decode_extended_data( cursor, view ):
    """
        Read the extended data block of a finger view: the block length,
        followed by the areas (type, length, data). The areas are parsed in a
        cursor limited to the block.

        :raise TruncatedRecord: if the block, or an area, goes past the end of
            the data
        :raise DecodeError: if an area is shorter than its own header
    """
    try:
        view.extended_data_block_length = cursor.read_u16()
        block = ByteCursor( cursor.read_bytes( view.extended_data_block_length ) )

    except OutOfBounds as e:
        raise TruncatedRecord( "extended data block: %s" % e )

    debug.debug( leveler( "extended data block length: %d" % view.extended_data_block_length, 2 ) )

    while block.remaining() > 0:
        try:
            type_id = block.read_u16()
            length = block.read_u16()

            if length < FEDB_AREA_HEADER_LENGTH:
                raise DecodeError( "extended data area of %d bytes (header of %d bytes)" % ( length, FEDB_AREA_HEADER_LENGTH ) )

            data = block.read_bytes( length - FEDB_AREA_HEADER_LENGTH )

        except OutOfBounds as e:
            raise TruncatedRecord( "extended data area %d: %s" % ( len( view.extended_data ) + 1, e ) )

        debug.debug( leveler( "extended data area: type 0x%04X (%s), %s" % ( type_id, EXTENDED_DATA_TYPE.get( type_id, "vendor defined" ), bindump( data ) ), 3 ) )
        view.extended_data.append( ExtendedDataArea( type_id, length, data ) )

def encode_fvmr( view, profile, cursor ):
    """
        Write one finger view in the cursor. The stored values are written as
        they are; the counters and lengths are not recomputed (see
        :func:`~FMR.fingerprint.fmr.clean`).

        :raise FieldOverflow: if a value can not be stored in the standard

        Usage:

            >>> from FMR.core import ByteCursor
            >>> from FMR.core.functions import hexstring
            >>> from FMR.fingerprint import FingerView, MinutiaPoint
            >>> from FMR.fingerprint.fvmr import encode_fvmr, fvmr_length
            >>> from FMR.standards import get_profile
            >>> p = get_profile( "ISO_2005" )
            >>> view = FingerView( finger_number = 2, finger_quality = 60, number_of_minutiae = 1 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> c = ByteCursor( bytearray( fvmr_length( view, p ) ) )
            >>> encode_fvmr( view, p, c )
            >>> hexstring( c.getvalue() )
            '02003C0180780154403C0000'
    """
    values = view.as_dict()

    for name, implied in profile.implied_view.items():
        if values[ name ] != implied:
            raise FieldOverflow( "%s: %r can not be stored in the %s format" % ( name, values[ name ], profile.name ) )

    write_layout( cursor, profile.view_header, values, profile.byte_order )

    for point in view.minutiae_data:
        encode_fmd( point, profile, cursor )

    if profile.has_extended_data:
        cursor.write_u16( view.extended_data_block_length )

        for area in view.extended_data:
            cursor.write_u16( area.type_id )
            cursor.write_u16( area.length )
            cursor.write_bytes( area.data )

    elif view.extended_data or view.extended_data_block_length:
        raise FieldOverflow( "extended data can not be stored in the %s format" % profile.name )

def extended_data_length( view ):
    """
        Size of the extended data areas, as written (the declared lengths are
        not used).
    """
    return sum( [ FEDB_AREA_HEADER_LENGTH + len( area.data ) for area in view.extended_data ] )

def fvmr_length( view, profile ):
    """
        Size, in bytes, of the encoded finger view.

            >>> from FMR.fingerprint import FingerView, MinutiaPoint
            >>> from FMR.fingerprint.fvmr import fvmr_length
            >>> view = FingerView()
            >>> view.minutiae_data.extend( [ MinutiaPoint(), MinutiaPoint() ] )
            >>> fvmr_length( view, "ANSI_2007" )
            29
            >>> fvmr_length( view, "ISOCC_2005" )
            10
    """
    profile = get_profile( profile )

    ret = layout_size( profile.view_header )
    ret += len( view.minutiae_data ) * profile.minutia_size

    if profile.has_extended_data:
        ret += 2 + extended_data_length( view )

    return ret
