#!/usr/bin/python
# -*- coding: UTF-8 -*-

from .config import BIG_ENDIAN
from ..exceptions import OutOfBounds, FieldOverflow

################################################################################
#
#    Bounds-checked binary cursor
#
################################################################################

class ByteCursor( object ):
    """
        Bounds-checked reader/writer over a fixed-size byte buffer. All the
        decoders and encoders of the library work through this object; any
        access past the end of the buffer raises an
        :class:`~FMR.exceptions.OutOfBounds` exception, and the position is
        not changed by a failed operation. The buffer never grows.

        A cursor over a `bytes` object is read-only; use a `bytearray` to
        write.

        Usage:

            >>> from FMR.core import ByteCursor
            >>> c = ByteCursor( b"FMR\\x00\\x00\\x1A\\x01" )
            >>> c.read_bytes( 4 )
            b'FMR\\x00'
            >>> c.read_u16()
            26
            >>> c.remaining()
            1
            >>> c.read_u16()
            Traceback (most recent call last):
            ...
            FMR.exceptions.OutOfBounds: 2 bytes requested at offset 6, 1 available
            >>> c.read_u8()
            1

        Writing in a pre-allocated buffer:

            >>> w = ByteCursor( bytearray( 3 ) )
            >>> w.write_u16( 0x1234 )
            >>> w.write_u8( 0xFF )
            >>> w.getvalue()
            b'\\x124\\xff'
            >>> w.write_u8( 1 )
            Traceback (most recent call last):
            ...
            FMR.exceptions.OutOfBounds: 1 bytes requested at offset 3, 0 available
    """
    def __init__( self, data ):
        if isinstance( data, memoryview ):
            data = data.tobytes()

        self._data = data
        self._pos = 0

    def __len__( self ):
        return len( self._data )

    ############################################################################
    #
    #    Position
    #
    ############################################################################

    def tell( self ):
        return self._pos

    def remaining( self ):
        """
            Number of bytes between the current position and the end of the
            buffer.
        """
        return len( self._data ) - self._pos

    def seek( self, pos ):
        """
            Move the cursor to the absolute position `pos`. Seeking to the end
            of the buffer is allowed (nothing is left to read or write).

            :raise OutOfBounds: if the position is outside the buffer
        """
        if pos < 0 or pos > len( self._data ):
            raise OutOfBounds( "seek to %d outside of a %d bytes buffer" % ( pos, len( self._data ) ) )

        self._pos = pos

    def _check( self, n ):
        if n < 0 or n > self.remaining():
            raise OutOfBounds( "%d bytes requested at offset %d, %d available" % ( n, self._pos, self.remaining() ) )

    ############################################################################
    #
    #    Reading
    #
    ############################################################################

    def read_bytes( self, n ):
        self._check( n )

        ret = bytes( self._data[ self._pos : self._pos + n ] )
        self._pos += n

        return ret

    def read_uint( self, size, order = BIG_ENDIAN ):
        return int.from_bytes( self.read_bytes( size ), order )

    def read_u8( self, order = BIG_ENDIAN ):
        return self.read_uint( 1, order )

    def read_u16( self, order = BIG_ENDIAN ):
        return self.read_uint( 2, order )

    def read_u32( self, order = BIG_ENDIAN ):
        return self.read_uint( 4, order )

    ############################################################################
    #
    #    Writing
    #
    ############################################################################

    def write_bytes( self, data ):
        if not isinstance( self._data, bytearray ):
            raise TypeError( "read-only buffer" )

        self._check( len( data ) )

        self._data[ self._pos : self._pos + len( data ) ] = data
        self._pos += len( data )

    def write_uint( self, value, size, order = BIG_ENDIAN ):
        """
            Write an unsigned integer of `size` bytes.

            :raise FieldOverflow: if the value does not fit in `size` bytes
            :raise OutOfBounds: if the buffer is too small
        """
        if value < 0 or value >= 1 << ( 8 * size ):
            raise FieldOverflow( "%r does not fit in %d bytes" % ( value, size ) )

        self.write_bytes( value.to_bytes( size, order ) )

    def write_u8( self, value, order = BIG_ENDIAN ):
        self.write_uint( value, 1, order )

    def write_u16( self, value, order = BIG_ENDIAN ):
        self.write_uint( value, 2, order )

    def write_u32( self, value, order = BIG_ENDIAN ):
        self.write_uint( value, 4, order )

    def getvalue( self ):
        return bytes( self._data )
