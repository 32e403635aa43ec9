#!/usr/bin/python
# -*- coding: UTF-8 -*-

from ..core import ByteCursor
from ..core.config import *
from ..core.functions import read_layout, write_layout, leveler, bindump, hexstring
from ..core.logger import debug
from ..exceptions import FieldOverflow, OutOfBounds, TruncatedRecord
from ..standards import get_profile, layout_size
from . import MinutiaeRecord
from .fvmr import decode_fvmr, encode_fvmr, extended_data_length, fvmr_length

################################################################################
#
#    Record length field
#
################################################################################

def read_record_length( cursor, profile ):
    """
        Read the record length field. For ANSI/INCITS 378-2004, the length is
        stored on 2 bytes, or on 4 bytes after a 2 bytes 0x0000 marker if the
        record is larger than 65535 bytes. The other standards use 4 bytes.

        :return: The record length and the length type ('short' or 'long').
        :rtype: tuple

        Usage:

            >>> from FMR.core import ByteCursor
            >>> from FMR.fingerprint.fmr import read_record_length
            >>> from FMR.standards import get_profile
            >>> read_record_length( ByteCursor( b"\\x00\\x24" ), get_profile( "ANSI_2004" ) )
            (36, 'short')
            >>> read_record_length( ByteCursor( b"\\x00\\x00\\x00\\x01\\x00\\x00" ), get_profile( "ANSI_2004" ) )
            (65536, 'long')
            >>> read_record_length( ByteCursor( b"\\x00\\x00\\x00\\x24" ), get_profile( "ISO_2005" ) )
            (36, 'long')
    """
    if profile.record_length_encoding == RECORD_LENGTH_ANSI:
        length = cursor.read_u16( profile.byte_order )

        if length != 0:
            return length, RECORD_LENGTH_SHORT

    return cursor.read_u32( profile.byte_order ), RECORD_LENGTH_LONG

def write_record_length( cursor, length, length_type, profile ):
    if profile.record_length_encoding == RECORD_LENGTH_ANSI:
        if length_type == RECORD_LENGTH_SHORT:
            cursor.write_u16( length, profile.byte_order )
            return

        cursor.write_u16( 0, profile.byte_order )

    cursor.write_u32( length, profile.byte_order )

def record_length_type( record, profile ):
    """
        Length type needed to encode the record. A record already in the long
        form stays in the long form.
    """
    if profile.record_length_encoding != RECORD_LENGTH_ANSI:
        return RECORD_LENGTH_LONG

    if record.record_length_type == RECORD_LENGTH_LONG:
        return RECORD_LENGTH_LONG

    if _body_length( record, profile ) + 2 > FMR_ANSI_SHORT_LENGTH_MAX:
        return RECORD_LENGTH_LONG

    return RECORD_LENGTH_SHORT

def record_length_size( length_type, profile ):
    if profile.record_length_encoding == RECORD_LENGTH_ANSI and length_type == RECORD_LENGTH_SHORT:
        return 2

    elif profile.record_length_encoding == RECORD_LENGTH_ANSI:
        return 6

    else:
        return 4

################################################################################
#
#    Record size
#
################################################################################

def _body_length( record, profile ):
    ret = len( FMR_FORMAT_ID ) + len( FMR_SPEC_VERSION_2004 )
    ret += layout_size( profile.record_header )
    ret += sum( [ fvmr_length( view, profile ) for view in record.finger_views ] )

    return ret

def fmr_length( record, profile ):
    """
        Size, in bytes, of the encoded record.

        :param record: Record to encode.
        :type record: MinutiaeRecord

        :param profile: Profile (or tag) of the standard.
        :type profile: StandardProfile or str

        :rtype: int

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView
            >>> from FMR.fingerprint.fmr import fmr_length
            >>> record = MinutiaeRecord()
            >>> record.finger_views.append( FingerView() )
            >>> fmr_length( record, "ANSI_2004" )
            32
            >>> fmr_length( record, "ANSI_2007" )
            37
            >>> fmr_length( record, "ISOCC_2005" )
            28
    """
    profile = get_profile( profile )
    length_type = record_length_type( record, profile )

    return _body_length( record, profile ) + record_length_size( length_type, profile )

################################################################################
#
#    Decoding
#
################################################################################

def decode( data, tag ):
    """
        Decode a Finger Minutiae Record stored in `data`, with the standard
        `tag`.

        The number of bytes consumed by the decoder is stored in the
        `consumed_length` attribute of the record. If this length is not the
        declared `record_length`, a warning is logged and the record is
        returned anyway; the rejection (or acceptance) of such a record is
        done by the :mod:`FMR.validation` module.

        :param data: Binary record.
        :type data: bytes

        :param tag: Tag (or alias) of the standard.
        :type tag: str

        :return: Decoded record.
        :rtype: MinutiaeRecord

        :raise UnsupportedStandard: if the tag is not known
        :raise TruncatedRecord: if the data is shorter than the structure
            declared in it

        Usage:

            >>> from FMR.fingerprint.fmr import decode
            >>> data = b"FMR\\x00 20\\x00\\x00\\x00\\x00\\x24\\x00\\x00\\x01\\xF4\\x01\\xF4\\x00\\xC5\\x00\\xC5\\x01\\x00"
            >>> data += b"\\x02\\x00\\x3C\\x01\\x80\\x78\\x01\\x54\\x40\\x3C\\x00\\x00"
            >>> record = decode( data, "ISO" )
            >>> record.format_std
            'ISO_2005'
            >>> record.record_length, record.consumed_length, record.length_mismatch
            (36, 36, False)
            >>> record.x_image_size, record.x_resolution, record.num_views
            (500, 197, 1)
            >>> record.finger_views[ 0 ].minutiae_data[ 0 ].type_label
            'Bifurcation'

            >>> decode( data[ :20 ], "ISO" )
            Traceback (most recent call last):
            ...
            FMR.exceptions.TruncatedRecord: record header: 2 bytes requested at offset 20, 0 available
    """
    profile = get_profile( tag )
    cursor = ByteCursor( data )

    debug.debug( "Decoding %s record: %s" % ( profile.name, bindump( data ) ) )

    try:
        format_id = cursor.read_bytes( len( FMR_FORMAT_ID ) )
        spec_version = cursor.read_bytes( len( FMR_SPEC_VERSION_2004 ) )
        length, length_type = read_record_length( cursor, profile )
        values = read_layout( cursor, profile.record_header, profile.byte_order )

    except OutOfBounds as e:
        raise TruncatedRecord( "record header: %s" % e )

    for name, value in profile.implied_record.items():
        values.setdefault( name, value )

    record = MinutiaeRecord(
        format_id = format_id,
        spec_version = spec_version,
        record_length = length,
        record_length_type = length_type,
        format_std = profile.name,
        **values
    )

    debug.debug( leveler( "format id: %s" % hexstring( format_id ), 1 ) )
    debug.debug( leveler( "spec version: %s" % hexstring( spec_version ), 1 ) )
    debug.debug( leveler( "record length: %d (%s)" % ( length, length_type ), 1 ) )

    for name, value in values.items():
        debug.debug( leveler( "%s: %d" % ( name.replace( "_", " " ), value ), 1 ) )

    for i in range( record.num_views ):
        debug.debug( leveler( "Finger view %d of %d" % ( i + 1, record.num_views ), 1 ) )

        try:
            record.finger_views.append( decode_fvmr( cursor, profile ) )

        except TruncatedRecord as e:
            raise TruncatedRecord( "finger view %d of %d: %s" % ( i + 1, record.num_views, e ) )

    record.consumed_length = cursor.tell()

    if record.length_mismatch:
        debug.warning( "Record length mismatch: %d bytes declared, %d bytes decoded" % ( record.record_length, record.consumed_length ) )

    if cursor.remaining() > 0:
        debug.warning( "%d bytes after the end of the record" % cursor.remaining() )

    return record

################################################################################
#
#    Encoding
#
################################################################################

def encode( record, tag = None ):
    """
        Encode a Finger Minutiae Record. The record is written in a buffer
        allocated with the size of the record, and the record length field is
        patched with the number of bytes written. The other fields are written
        as stored in the record; see :func:`~FMR.fingerprint.fmr.clean` to
        recompute the counters.

        :param record: Record to encode.
        :type record: MinutiaeRecord

        :param tag: Tag of the standard; the standard used to decode the
            record by default.
        :type tag: str

        :return: Binary record.
        :rtype: bytes

        :raise FieldOverflow: if a value can not be stored in the standard

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView, MinutiaPoint
            >>> from FMR.fingerprint.fmr import encode
            >>> from FMR.core.functions import bindump
            >>> view = FingerView( finger_number = 2, finger_quality = 60, number_of_minutiae = 1 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197, num_views = 1 )
            >>> record.finger_views.append( view )
            >>> bindump( encode( record, "ISO_2005" ) )
            '464D5200 ... 403C0000 (36 bytes)'
    """
    profile = get_profile( tag or record.format_std )

    length_type = record_length_type( record, profile )
    cursor = ByteCursor( bytearray( fmr_length( record, profile ) ) )

    debug.debug( "Encoding %s record (%d bytes)" % ( profile.name, len( cursor ) ) )

    values = record.as_dict()

    for name, implied in profile.implied_record.items():
        if values[ name ] != implied:
            raise FieldOverflow( "%s: %r can not be stored in the %s format" % ( name, values[ name ], profile.name ) )

    for name, default in ( ( "format_id", profile.format_id ), ( "spec_version", profile.spec_version ) ):
        value = values[ name ] if values[ name ] is not None else default

        if len( value ) != len( default ):
            raise FieldOverflow( "%s: %r is not a %d bytes value" % ( name, value, len( default ) ) )

        cursor.write_bytes( value )

    length_pos = cursor.tell()
    write_record_length( cursor, 0, length_type, profile )
    write_layout( cursor, profile.record_header, values, profile.byte_order )

    for view in record.finger_views:
        encode_fvmr( view, profile, cursor )

    end = cursor.tell()

    debug.debug( leveler( "Patching the record length to %d (%s)" % ( end, length_type ), 1 ) )
    cursor.seek( length_pos )
    write_record_length( cursor, end, length_type, profile )

    return cursor.getvalue()[ : end ]

################################################################################
#
#    Cleaning
#
################################################################################

def clean( record, tag = None ):
    """
        Recompute, in place, the computed fields of the record (number of
        views, number of minutiae, extended data lengths, record length) and
        set the format identifier, version and record length type of the
        standard. The bytes consumed by the decoder are forgotten, the record
        length being recomputed. Used before encoding a record built, or
        edited, by hand.

        :param record: Record to clean.
        :type record: MinutiaeRecord

        :param tag: Tag of the standard; the standard used to decode the
            record by default.
        :type tag: str
    """
    profile = get_profile( tag or record.format_std )

    debug.debug( "Cleaning the record for %s" % profile.name )

    record.format_std = profile.name
    record.format_id = profile.format_id
    record.spec_version = profile.spec_version
    record.num_views = len( record.finger_views )

    for view in record.finger_views:
        view.number_of_minutiae = len( view.minutiae_data )

        for area in view.extended_data:
            area.length = FEDB_AREA_HEADER_LENGTH + len( area.data )

        view.extended_data_block_length = extended_data_length( view )

    record.record_length_type = record_length_type( record, profile )
    record.record_length = fmr_length( record, profile )

    #    The record no longer matches the decoded bytes
    record.consumed_length = None

    debug.debug( leveler( "record length: %d (%s)" % ( record.record_length, record.record_length_type ), 1 ) )
