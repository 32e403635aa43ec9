#!/usr/bin/python
# -*- coding: UTF-8 -*-

import math

from collections import OrderedDict

from .config import BIG_ENDIAN
from ..exceptions import FieldOverflow

################################################################################
#
#    Generic functions
#
################################################################################

def hexformat( x ):
    """
        Return an hexadecimal format of the value passed in parameter.

        :param x: Value to convert
        :type x: int

        :return: Hex representation.
        :rtype: str

        Usage:

            >>> from FMR.core.functions import hexformat
            >>> hexformat( 255 )
            'FF'
    """
    return format( x, '02X' )

def hexstring( data ):
    """
        Full hexadecimal representation of a binary string.

            >>> from FMR.core.functions import hexstring
            >>> hexstring( b"FMR\\x00" )
            '464D5200'
    """
    return "".join( [ hexformat( b ) for b in bytearray( data ) ] )

#    Binary print
def bindump( data, n = 8 ):
    """
        Return the first and last `n/2` bytes of a binary data, in hexadecimal
        format. Short data is returned in full.

        :param data: Data to strip
        :rype data: bytes

        :return: Stripped hex representation
        :rtype: str

        Usage:

            >>> from FMR.core.functions import bindump
            >>> data = bytes( range( 256 ) )
            >>> bindump( data )
            '00010203 ... FCFDFEFF (256 bytes)'

            >>> bindump( data, 16 )
            '0001020304050607 ... F8F9FAFBFCFDFEFF (256 bytes)'

            >>> bindump( b"FMR\\x00" )
            '464D5200 (4 bytes)'
    """
    data = bytearray( data )

    if len( data ) <= n:
        return "%s (%d bytes)" % ( hexstring( data ), len( data ) )

    pre = data[ : n // 2 ]
    post = data[ -( n // 2 ): ]

    return "%s ... %s (%d bytes)" % ( hexstring( pre ), hexstring( post ), len( data ) )

#    Alignment function
def leveler( msg, level = 1 ):
    """
        Return an indented string.

        :param msg: Message to indent
        :type msg: str

        :param level: Level to indent (number of indentation)
        :type level: int

        :return: Formatted string
        :rtype: str

        Usage:

            >>> from FMR.core.functions import leveler
            >>> leveler( "x_coord", 1 )
            '    x_coord'
    """
    return "    " * level + msg

def round_half_up( value ):
    """
        Round to the nearest integer, the halves being rounded up (the python
        `round` function rounds the halves to the even number).

            >>> from FMR.core.functions import round_half_up
            >>> round_half_up( 22.5 )
            23
            >>> round_half_up( 2.5 )
            3
            >>> round_half_up( 90.0 )
            90
            >>> round_half_up( 1.40625 )
            1
    """
    return int( math.floor( value + 0.5 ) )

################################################################################
#
#    Bit fields
#
################################################################################

def unpack_bits( value, fields, total_bits ):
    """
        Split an integer in bit fields. The fields are described as a list of
        ( name, number of bits ) tuples, starting from the most significant
        bit.

        :param value: Integer to split.
        :type value: int

        :param fields: Fields description.
        :type fields: list of tuples

        :param total_bits: Number of bits in `value`.
        :type total_bits: int

        :return: List of ( name, value ) tuples.
        :rtype: list

        Usage:

            >>> from FMR.core.functions import unpack_bits
            >>> unpack_bits( 0x8078, [ ( "type", 2 ), ( "x_coord", 14 ) ], 16 )
            [('type', 2), ('x_coord', 120)]
            >>> unpack_bits( 0x21, [ ( "view_number", 4 ), ( "impression_type", 4 ) ], 8 )
            [('view_number', 2), ('impression_type', 1)]
    """
    ret = []
    shift = total_bits

    for name, bits in fields:
        shift -= bits
        ret.append( ( name, ( value >> shift ) & ( ( 1 << bits ) - 1 ) ) )

    return ret

def pack_bits( values, fields, total_bits ):
    """
        Reverse function of :func:`~FMR.core.functions.unpack_bits`. The
        fields named `None` are reserved bits, always set to 0.

        :param values: Values of the fields.
        :type values: dict

        :raise FieldOverflow: if a value does not fit in its number of bits

        Usage:

            >>> from FMR.core.functions import pack_bits
            >>> pack_bits( { "type": 2, "x_coord": 120 }, [ ( "type", 2 ), ( "x_coord", 14 ) ], 16 )
            32888
            >>> pack_bits( { "y_coord": 340 }, [ ( None, 2 ), ( "y_coord", 14 ) ], 16 )
            340
            >>> pack_bits( { "type": 4, "x_coord": 120 }, [ ( "type", 2 ), ( "x_coord", 14 ) ], 16 )
            Traceback (most recent call last):
            ...
            FMR.exceptions.FieldOverflow: type: 4 does not fit in 2 bits
    """
    ret = 0
    shift = total_bits

    for name, bits in fields:
        shift -= bits

        if name is None:
            continue

        v = values[ name ]

        if not isinstance( v, int ) or v < 0 or v >= ( 1 << bits ):
            raise FieldOverflow( "%s: %r does not fit in %d bits" % ( name, v, bits ) )

        ret |= v << shift

    return ret

################################################################################
#
#    Resolution changes
#
################################################################################

def dpi_to_dpcm( dpi ):
    """
        Convert a resolution in dots per inch to the dots per centimeter unit
        stored in the resolution fields.

            >>> from FMR.core.functions import dpi_to_dpcm
            >>> dpi_to_dpcm( 500 )
            197
    """
    return ( dpi * 100 + 50 ) // 254

def dpcm_to_dpi( dpcm ):
    """
        Reverse function of :func:`~FMR.core.functions.dpi_to_dpcm`.

            >>> from FMR.core.functions import dpcm_to_dpi
            >>> dpcm_to_dpi( 197 )
            500
    """
    return int( dpcm * 2.54 + 0.5 )

################################################################################
#
#    Layouts
#
################################################################################

def read_layout( cursor, layout, order = BIG_ENDIAN ):
    """
        Read the words described by `layout` from the cursor and split them in
        fields. The reserved fields are dropped.

        :param cursor: Cursor to read from.
        :type cursor: ByteCursor

        :param layout: List of ( size in bytes, fields ) words.
        :type layout: list

        :return: Values of the fields.
        :rtype: OrderedDict

        Usage:

            >>> from FMR.core import ByteCursor
            >>> from FMR.core.functions import read_layout
            >>> layout = [ ( 2, [ ( "type", 2 ), ( "x_coord", 14 ) ] ), ( 1, [ ( "angle_raw", 8 ) ] ) ]
            >>> values = read_layout( ByteCursor( b"\\x80\\x78\\x40" ), layout )
            >>> list( values.items() )
            [('type', 2), ('x_coord', 120), ('angle_raw', 64)]
    """
    ret = OrderedDict()

    for size, fields in layout:
        word = cursor.read_uint( size, order )

        for name, value in unpack_bits( word, fields, 8 * size ):
            if name is not None:
                ret[ name ] = value

    return ret

def write_layout( cursor, layout, values, order = BIG_ENDIAN ):
    """
        Reverse function of :func:`~FMR.core.functions.read_layout`.

            >>> from FMR.core import ByteCursor
            >>> from FMR.core.functions import write_layout
            >>> layout = [ ( 2, [ ( "type", 2 ), ( "x_coord", 14 ) ] ), ( 1, [ ( "angle_raw", 8 ) ] ) ]
            >>> c = ByteCursor( bytearray( 3 ) )
            >>> write_layout( c, layout, { "type": 2, "x_coord": 120, "angle_raw": 64 } )
            >>> c.getvalue()
            b'\\x80x@'
    """
    for size, fields in layout:
        cursor.write_uint( pack_bits( values, fields, 8 * size ), size, order )
