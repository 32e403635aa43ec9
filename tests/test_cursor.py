#!/usr/bin/python
# -*- coding: UTF-8 -*-

import unittest

from FMR.core import ByteCursor
from FMR.core.config import LITTLE_ENDIAN
from FMR.exceptions import OutOfBounds, FieldOverflow

class TestByteCursorRead( unittest.TestCase ):
    def test_read_sequence( self ):
        c = ByteCursor( b"\x01\x00\x02\x00\x00\x00\x03FMR" )
        
        self.assertEqual( c.read_u8(), 1 )
        self.assertEqual( c.read_u16(), 2 )
        self.assertEqual( c.read_u32(), 3 )
        self.assertEqual( c.read_bytes( 3 ), b"FMR" )
        self.assertEqual( c.remaining(), 0 )
        self.assertEqual( c.tell(), 10 )
    
    def test_little_endian( self ):
        c = ByteCursor( b"\x02\x01" )
        self.assertEqual( c.read_u16( LITTLE_ENDIAN ), 0x0102 )
    
    def test_read_past_end_keeps_position( self ):
        c = ByteCursor( b"\x00\x01\x02" )
        c.read_u16()
        
        with self.assertRaises( OutOfBounds ):
            c.read_u16()
        
        self.assertEqual( c.tell(), 2 )
        self.assertEqual( c.read_u8(), 2 )
    
    def test_read_bytes_negative( self ):
        with self.assertRaises( OutOfBounds ):
            ByteCursor( b"\x00" ).read_bytes( -1 )
    
    def test_memoryview( self ):
        data = memoryview( b"\x00\x24" )
        self.assertEqual( ByteCursor( data ).read_u16(), 36 )
    
    def test_seek( self ):
        c = ByteCursor( b"\x00\x01\x02\x03" )
        c.seek( 3 )
        self.assertEqual( c.read_u8(), 3 )
        
        c.seek( 4 )
        self.assertEqual( c.remaining(), 0 )
        
        with self.assertRaises( OutOfBounds ):
            c.seek( 5 )
        
        with self.assertRaises( OutOfBounds ):
            c.seek( -1 )
        
        self.assertEqual( c.tell(), 4 )

class TestByteCursorWrite( unittest.TestCase ):
    def test_write_sequence( self ):
        c = ByteCursor( bytearray( 7 ) )
        c.write_u8( 1 )
        c.write_u16( 0x0203 )
        c.write_u32( 0x04050607 )
        
        self.assertEqual( c.getvalue(), b"\x01\x02\x03\x04\x05\x06\x07" )
    
    def test_buffer_does_not_grow( self ):
        c = ByteCursor( bytearray( 3 ) )
        c.write_bytes( b"FM" )
        
        with self.assertRaises( OutOfBounds ):
            c.write_u16( 1 )
        
        self.assertEqual( c.tell(), 2 )
        self.assertEqual( len( c ), 3 )
        self.assertEqual( c.getvalue(), b"FM\x00" )
    
    def test_overflow( self ):
        c = ByteCursor( bytearray( 4 ) )
        
        with self.assertRaises( FieldOverflow ):
            c.write_u8( 256 )
        
        with self.assertRaises( FieldOverflow ):
            c.write_u16( -1 )
        
        self.assertEqual( c.tell(), 0 )
    
    def test_read_only( self ):
        with self.assertRaises( TypeError ):
            ByteCursor( b"\x00\x00" ).write_u8( 1 )
    
    def test_patch( self ):
        c = ByteCursor( bytearray( 4 ) )
        c.write_u16( 0 )
        c.write_u16( 0xFFFF )
        c.seek( 0 )
        c.write_u16( 4 )
        
        self.assertEqual( c.getvalue(), b"\x00\x04\xFF\xFF" )

if __name__ == "__main__":
    unittest.main()
