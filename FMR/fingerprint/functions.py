#!/usr/bin/python
# -*- coding: UTF-8 -*-

from collections import OrderedDict

import json

from ..core.functions import leveler, round_half_up, hexstring, dpcm_to_dpi
from ..core.logger import debug
from ..standards import get_profile
from ..validation import validate as validate_record
from .fmd import angle_degrees
from .labels import FINGER_POSITION_CODE, IMPRESSION_TYPE_CODE, EXTENDED_DATA_TYPE

################################################################################
#
#    Projections of the Finger Minutiae Records
#
#        The projections are only done on valid records. The validation can
#        be disabled with the `validate` flag, or relaxed for the record
#        length with the `allow_length_mismatch` flag.
#
################################################################################

def _prepare( record, profile, validate, allow_length_mismatch ):
    profile = get_profile( profile or record.format_std )

    if validate:
        validate_record( record, profile, allow_length_mismatch = allow_length_mismatch )

    return profile

def _text( value ):
    if value is None:
        return None
    else:
        return value.decode( "latin-1" )

def to_xyt( record, profile = None, validate = True, allow_length_mismatch = False ):
    """
        XYT representation of the record: one line per minutia, for all the
        finger views, in the stored order. Each line is::

            y x angle quality "type"

        with the angle in degrees, rounded to the nearest integer.

        :param record: Record to project.
        :type record: MinutiaeRecord

        :return: XYT text.
        :rtype: str

        :raise ValidationError: if the record is not valid

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView, MinutiaPoint
            >>> from FMR.fingerprint.functions import to_xyt
            >>> view = FingerView( finger_number = 2, finger_quality = 60 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> view.minutiae_data.append( MinutiaPoint( 10, 20, 16, 45, 1 ) )
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197 )
            >>> record.finger_views.append( view )
            >>> record.clean( "ISO_2005" )
            >>> print( to_xyt( record ), end = "" )
            340 120 90 60 "Bifurcation"
            20 10 23 45 "Ridge Ending"
    """
    profile = _prepare( record, profile, validate, allow_length_mismatch )

    lines = []

    for view in record.finger_views:
        for point in view.minutiae_data:
            lines.append( '%d %d %d %d "%s"\n' % (
                point.y_coord,
                point.x_coord,
                round_half_up( angle_degrees( point, profile ) ),
                point.quality,
                point.type_label
            ) )

    debug.debug( "%d minutiae exported in XYT" % len( lines ) )

    return "".join( lines )

def to_tree( record, profile = None, validate = True, allow_length_mismatch = False ):
    """
        Nested OrderedDict / list representation of the record, with all the
        fields of the record, the finger views and the minutiae. The minutia
        type is given as label (`type`) and as code (`type_code`), and the
        angle as raw value (`angle_raw`) and in degrees (`converted_angle`).

        :rtype: OrderedDict

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView, MinutiaPoint
            >>> from FMR.fingerprint.functions import to_tree
            >>> view = FingerView( finger_number = 2, finger_quality = 60 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197 )
            >>> record.finger_views.append( view )
            >>> record.clean( "ISO_2005" )
            >>> tree = to_tree( record )
            >>> tree[ "format_std" ], tree[ "record_length" ], tree[ "num_views" ]
            ('ISO_2005', 36, 1)
            >>> minutia = tree[ "finger_views" ][ 0 ][ "minutiae_data" ][ 0 ]
            >>> minutia[ "type" ], minutia[ "type_code" ], minutia[ "converted_angle" ]
            ('Bifurcation', 2, 90.0)
    """
    profile = _prepare( record, profile, validate, allow_length_mismatch )

    ret = OrderedDict()
    ret[ "format_std" ] = profile.name

    for name, value in record.as_dict().items():
        if name in ( "format_id", "spec_version" ):
            ret[ name ] = _text( value )

        elif name == "finger_views":
            ret[ name ] = [ _view_tree( view, profile ) for view in value ]

        else:
            ret[ name ] = value

    return ret

def _view_tree( view, profile ):
    ret = OrderedDict()
    ret[ "format_std" ] = profile.name

    for name, value in view.as_dict().items():
        if name == "minutiae_data":
            ret[ name ] = [ _minutia_tree( i, point, profile ) for i, point in enumerate( value, 1 ) ]

        elif name == "extended_data":
            ret[ name ] = [
                OrderedDict( [
                    ( "type_id", area.type_id ),
                    ( "length", area.length ),
                    ( "data", hexstring( area.data ) ),
                ] )
                for area in value
            ]

        else:
            ret[ name ] = value

    return ret

def _minutia_tree( index, point, profile ):
    return OrderedDict( [
        ( "format_std", profile.name ),
        ( "index", index ),
        ( "type", point.type_label ),
        ( "type_code", point.type ),
        ( "x_coord", point.x_coord ),
        ( "y_coord", point.y_coord ),
        ( "angle_raw", point.angle_raw ),
        ( "converted_angle", angle_degrees( point, profile ) ),
        ( "quality", point.quality ),
    ] )

def to_json( record, profile = None, validate = True, allow_length_mismatch = False, **options ):
    """
        JSON representation of the tree returned by
        :func:`~FMR.fingerprint.functions.to_tree`. The extra options are
        passed to `json.dumps`.

        :rtype: str
    """
    tree = to_tree( record, profile, validate, allow_length_mismatch )

    return json.dumps( tree, **options )

def dump( record, profile = None, validate = True, allow_length_mismatch = False ):
    """
        Human readable report of the record.

        :rtype: str

        Usage:

            >>> from FMR.fingerprint import MinutiaeRecord, FingerView, MinutiaPoint
            >>> from FMR.fingerprint.functions import dump
            >>> view = FingerView( finger_number = 2, finger_quality = 60 )
            >>> view.minutiae_data.append( MinutiaPoint( 120, 340, 64, 60, 2 ) )
            >>> record = MinutiaeRecord( x_image_size = 500, y_image_size = 500, x_resolution = 197, y_resolution = 197 )
            >>> record.finger_views.append( view )
            >>> record.clean( "ISO_2005" )
            >>> print( dump( record ) ) # doctest: +NORMALIZE_WHITESPACE
            Finger Minutiae Record (ISO/IEC 19794-2:2005)
                Format ID: 464D5200
                Spec Version: 20323000
                Record Length: 36 (long)
                Product ID: 0x0000/0x0000
                Scanner ID: 0x000, compliance 0x0
                Image size: 500x500
                Resolution: 197x197 px/cm (500 dpi)
                Number of views: 1
                (FVMR 1)
                    Finger number: 2 (right index)
                    View number: 0
                    Impression type: 0 (live-scan plain)
                    Finger quality: 60
                    Number of minutiae: 1
                    (FMD 1) Bifurcation: x=120 y=340 angle=64 (90.00 deg) quality=60
                    Extended data block length: 0
    """
    profile = _prepare( record, profile, validate, allow_length_mismatch )

    spec_version = record.spec_version if record.spec_version is not None else profile.spec_version

    lst = [
        "Finger Minutiae Record (%s)" % profile.description,
        leveler( "Format ID: %s" % hexstring( record.format_id ) ),
        leveler( "Spec Version: %s" % hexstring( spec_version ) ),
        leveler( "Record Length: %d (%s)" % ( record.record_length, record.record_length_type ) ),
        leveler( "Product ID: 0x%04X/0x%04X" % ( record.product_identifier_owner, record.product_identifier_type ) ),
        leveler( "Scanner ID: 0x%03X, compliance 0x%X" % ( record.scanner_id, record.compliance ) ),
    ]

    if profile.record_image_info:
        lst.append( leveler( "Image size: %dx%d" % ( record.x_image_size, record.y_image_size ) ) )
        lst.append( leveler( "Resolution: %dx%d px/cm (%d dpi)" % ( record.x_resolution, record.y_resolution, dpcm_to_dpi( record.x_resolution ) ) ) )

    lst.append( leveler( "Number of views: %d" % record.num_views ) )

    for i, view in enumerate( record.finger_views, 1 ):
        lst.append( leveler( "(FVMR %d)" % i ) )
        lst.append( leveler( "Finger number: %d (%s)" % ( view.finger_number, FINGER_POSITION_CODE.get( view.finger_number, "unknown code" ) ), 2 ) )
        lst.append( leveler( "View number: %d" % view.view_number, 2 ) )
        lst.append( leveler( "Impression type: %d (%s)" % ( view.impression_type, IMPRESSION_TYPE_CODE.get( view.impression_type, "unknown code" ) ), 2 ) )
        lst.append( leveler( "Finger quality: %d" % view.finger_quality, 2 ) )

        if profile.view_image_info:
            lst.append( leveler( "Algorithm ID: 0x%04X" % view.algorithm_id, 2 ) )
            lst.append( leveler( "Image size: %dx%d" % ( view.x_image_size, view.y_image_size ), 2 ) )
            lst.append( leveler( "Resolution: %dx%d px/cm (%d dpi)" % ( view.x_resolution, view.y_resolution, dpcm_to_dpi( view.x_resolution ) ), 2 ) )

        lst.append( leveler( "Number of minutiae: %d" % view.number_of_minutiae, 2 ) )

        for j, point in enumerate( view.minutiae_data, 1 ):
            lst.append( leveler( "(FMD %d) %s: x=%d y=%d angle=%d (%.2f deg) quality=%d" % (
                j,
                point.type_label,
                point.x_coord,
                point.y_coord,
                point.angle_raw,
                angle_degrees( point, profile ),
                point.quality
            ), 2 ) )

        if profile.has_extended_data:
            lst.append( leveler( "Extended data block length: %d" % view.extended_data_block_length, 2 ) )

            for area in view.extended_data:
                lst.append( leveler( "Area 0x%04X (%s): %d bytes, %s" % (
                    area.type_id,
                    EXTENDED_DATA_TYPE.get( area.type_id, "vendor defined" ),
                    area.length,
                    hexstring( area.data )
                ), 3 ) )

    return "\n".join( lst )
