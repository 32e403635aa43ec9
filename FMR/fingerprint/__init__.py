#!/usr/bin/python
# -*- coding: UTF-8 -*-

from collections import OrderedDict

from ..core.config import FMR_FORMAT_ID, MINUTIA_TYPE_UNKNOWN
from .labels import MINUTIA_TYPE

################################################################################
#
#    Generic record object
#
################################################################################

class FMRObject( object ):
    """
        Generic class for the objects stored in a Finger Minutiae Record. Each
        sub-class declares its fields (and default values) in the `_fields`
        list; the values can be passed as positional arguments (in the order
        of the `_fields` list) or as keyword arguments. A callable default
        value is called to get a new value for each object (used for the
        lists).

        Two objects are equal if all the declared fields are equal.
    """
    _fields = []

    def __init__( self, *args, **kwargs ):
        names = self.field_names()

        if len( args ) > len( names ):
            raise TypeError( "%s takes at most %d arguments" % ( self.__class__.__name__, len( names ) ) )

        values = dict( zip( names, args ) )

        for name, value in kwargs.items():
            if name not in names:
                raise TypeError( "%s has no field '%s'" % ( self.__class__.__name__, name ) )

            elif name in values:
                raise TypeError( "field '%s' given twice" % name )

            values[ name ] = value

        for name, default in self._fields:
            if name in values:
                value = values[ name ]
            elif callable( default ):
                value = default()
            else:
                value = default

            setattr( self, name, value )

    @classmethod
    def field_names( cls ):
        return [ name for name, _ in cls._fields ]

    def as_dict( self ):
        """
            Return the fields of the object in an OrderedDict (shallow copy).
        """
        return OrderedDict( [ ( name, getattr( self, name ) ) for name in self.field_names() ] )

    def __eq__( self, other ):
        if not isinstance( other, self.__class__ ):
            return NotImplemented

        return self.as_dict() == other.as_dict()

    __hash__ = None

    def __str__( self ):
        """
            String representation of the object. The lists are not shown, only
            their length.
        """
        lst = []

        for name, value in self.as_dict().items():
            if isinstance( value, list ):
                lst.append( "%s=[%d]" % ( name, len( value ) ) )
            else:
                lst.append( "%s='%s'" % ( name, value ) )

        return "%s( %s )" % ( self.__class__.__name__, ", ".join( lst ) )

    def __repr__( self ):
        return self.__str__()

################################################################################
#
#    Finger Minutiae Data
#
################################################################################

class MinutiaPoint( FMRObject ):
    """
        One minutia (FMD). The angle is stored in its raw, quantized, form;
        see :func:`~FMR.fingerprint.fmd.angle_degrees` for the conversion to
        degrees.

        Usage:

            >>> from FMR.fingerprint import MinutiaPoint
            >>> m = MinutiaPoint( x_coord = 120, y_coord = 340, angle_raw = 64, quality = 60, type = 2 )
            >>> m
            MinutiaPoint( x_coord='120', y_coord='340', angle_raw='64', quality='60', type='2' )
            >>> m.type_label
            'Bifurcation'
            >>> m == MinutiaPoint( 120, 340, 64, 60, 2 )
            True
    """
    _fields = [
        ( "x_coord", 0 ),
        ( "y_coord", 0 ),
        ( "angle_raw", 0 ),
        ( "quality", 0 ),
        ( "type", 0 ),
    ]

    @property
    def type_label( self ):
        return MINUTIA_TYPE.get( self.type, MINUTIA_TYPE[ MINUTIA_TYPE_UNKNOWN ] )

################################################################################
#
#    Extended data
#
################################################################################

class ExtendedDataArea( FMRObject ):
    """
        One area of the extended data block of a finger view. The `length` is
        the declared length of the area, including the 4 bytes of the type and
        length fields.
    """
    _fields = [
        ( "type_id", 0 ),
        ( "length", 0 ),
        ( "data", b"" ),
    ]

################################################################################
#
#    Finger View Minutiae Record
#
################################################################################

class FingerView( FMRObject ):
    """
        One finger view (FVMR). The minutiae are stored in the
        `minutiae_data` list, in the capture order.
    """
    _fields = [
        ( "finger_number", 0 ),
        ( "view_number", 0 ),
        ( "impression_type", 0 ),
        ( "finger_quality", 0 ),
        ( "algorithm_id", 0 ),
        ( "x_image_size", 0 ),
        ( "y_image_size", 0 ),
        ( "x_resolution", 0 ),
        ( "y_resolution", 0 ),
        ( "number_of_minutiae", 0 ),
        ( "minutiae_data", list ),
        ( "extended_data_block_length", 0 ),
        ( "extended_data", list ),
    ]

################################################################################
#
#    Finger Minutiae Record
#
################################################################################

class MinutiaeRecord( FMRObject ):
    """
        Finger Minutiae Record (FMR), owner of the finger views.

        :cvar str format_std: Tag of the standard used to decode the record.
        :cvar int consumed_length: Number of bytes consumed by the decoder
            (None if the record was not decoded, or was cleaned since).

        A record can be built by hand, and the computed fields (number of
        views, number of minutiae, lengths) set with the
        :func:`~FMR.fingerprint.MinutiaeRecord.clean` function:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView, MinutiaPoint
            >>> view = FingerView( finger_number = 2, finger_quality = 60 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197 )
            >>> record.finger_views.append( view )
            >>> record.clean( "ISO_2005" )
            >>> record.record_length
            36
            >>> record.record_length_type
            'long'
            >>> view.number_of_minutiae
            1
    """
    _fields = [
        ( "format_id", FMR_FORMAT_ID ),
        ( "spec_version", None ),
        ( "record_length", 0 ),
        ( "record_length_type", None ),
        ( "product_identifier_owner", 0 ),
        ( "product_identifier_type", 0 ),
        ( "scanner_id", 0 ),
        ( "compliance", 0 ),
        ( "x_image_size", 0 ),
        ( "y_image_size", 0 ),
        ( "x_resolution", 0 ),
        ( "y_resolution", 0 ),
        ( "num_views", 0 ),
        ( "finger_views", list ),
    ]

    def __init__( self, *args, **kwargs ):
        format_std = kwargs.pop( "format_std", None )

        super( MinutiaeRecord, self ).__init__( *args, **kwargs )

        self.format_std = format_std
        self.consumed_length = None

    @property
    def length_mismatch( self ):
        """
            True if the record was decoded and the number of bytes consumed is
            not the declared record length.
        """
        return self.consumed_length is not None and self.consumed_length != self.record_length

    def clean( self, tag = None ):
        """
            Recompute the counters and lengths of the record, and set the
            header fields of the standard. See :func:`FMR.fingerprint.fmr.clean`.
        """
        from .fmr import clean

        clean( self, tag )
