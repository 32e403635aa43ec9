#!/usr/bin/python
# -*- coding: UTF-8 -*-

################################################################################
#
#    Minutiae extractor boundary
#
#        The extraction of the minutiae from a fingerprint image is done by an
#        external extractor, passed as a callable:
#
#            extractor( pixels, width, height, dpi, target_format ) -> ( data, size )
#
#        The extractor raises an ExtractionError on failure. The limits of the
#        extractor are checked before calling it.
#
################################################################################

from PIL import Image, UnidentifiedImageError

from ..core.functions import bindump, leveler, dpi_to_dpcm
from ..core.logger import debug
from ..exceptions import ExtractionError, ImageFormatNotSupported
from ..fingerprint.fmr import decode
from ..standards import ANSI_2004, ISO_2005

#    Result codes of the extractor
FJFX_SUCCESS = 0
FJFX_FAIL_IMAGE_SIZE_NOT_SUP = 1
FJFX_FAIL_EXTRACTION_UNSPEC = 2
FJFX_FAIL_EXTRACTION_BAD_IMP = 3
FJFX_FAIL_INVALID_OUTPUT_FORMAT = 7
FJFX_FAIL_OUTPUT_BUFFER_IS_TOO_SMALL = 8

#    Output formats of the extractor
FMD_ANSI_378_2004 = 0x001B0201
FMD_ISO_19794_2_2005 = 0x01010001

FORMAT_TAGS = {
    FMD_ANSI_378_2004: ANSI_2004,
    FMD_ISO_19794_2_2005: ISO_2005,
}

#    34 bytes of header and 6 bytes per minutia, for up to 256 minutiae
FMD_BUFFER_SIZE = 34 + 256 * 6

#    Limits of the extractor
MAX_IMAGE_SIZE = 2000
MIN_DPI = 300
MAX_DPI = 1024
MIN_PGM_SIZE = 32

#    Physical size limits, in 1/500 inch
MIN_PHYSICAL_SIZE = 150
MAX_PHYSICAL_WIDTH = 812
MAX_PHYSICAL_HEIGHT = 1000

#    Failure reasons
REASON_IMAGE_TOO_LARGE = "ImageTooLarge"
REASON_IMAGE_TOO_SMALL = "ImageTooSmall"
REASON_DPI_OUT_OF_RANGE = "DpiOutOfRange"
REASON_ASPECT_RATIO_OUT_OF_RANGE = "AspectRatioOutOfRange"
REASON_NO_FINGERPRINT_DETECTED = "NoFingerprintDetected"
REASON_UNSUPPORTED_FORMAT = "UnsupportedFormat"
REASON_BUFFER_TOO_SMALL = "BufferTooSmall"
REASON_UNSPECIFIED = "Unspecified"

RESULT_REASONS = {
    FJFX_FAIL_IMAGE_SIZE_NOT_SUP: REASON_IMAGE_TOO_LARGE,
    FJFX_FAIL_EXTRACTION_UNSPEC: REASON_UNSPECIFIED,
    FJFX_FAIL_EXTRACTION_BAD_IMP: REASON_NO_FINGERPRINT_DETECTED,
    FJFX_FAIL_INVALID_OUTPUT_FORMAT: REASON_UNSUPPORTED_FORMAT,
    FJFX_FAIL_OUTPUT_BUFFER_IS_TOO_SMALL: REASON_BUFFER_TOO_SMALL,
}

def check_result( code ):
    """
        Raise the ExtractionError matching a result code of the extractor.
        Unknown codes are unspecified failures.

            >>> from FMR.extractor import check_result, FJFX_SUCCESS
            >>> check_result( FJFX_SUCCESS )
            >>> check_result( 3 )
            Traceback (most recent call last):
            ...
            FMR.exceptions.ExtractionError: extractor failed with code 3
    """
    if code != FJFX_SUCCESS:
        raise ExtractionError( RESULT_REASONS.get( code, REASON_UNSPECIFIED ), "extractor failed with code %d" % code )

def check_preconditions( width, height, dpi, target_format, buffer_size = FMD_BUFFER_SIZE ):
    """
        Check the image and output parameters against the limits of the
        extractor: at most 2000x2000 pixels, between 300 and 1024 dpi, a
        physical width between 0.3 and 1.62 inch and a physical height between
        0.3 and 2.0 inch.

        :raise ExtractionError: with the reason of the failure

        Usage:

            >>> from FMR.extractor import check_preconditions, FMD_ISO_19794_2_2005
            >>> check_preconditions( 500, 500, 500, FMD_ISO_19794_2_2005 )
            >>> check_preconditions( 100, 500, 500, FMD_ISO_19794_2_2005 )
            Traceback (most recent call last):
            ...
            FMR.exceptions.ExtractionError: image of 100x500 pixels at 500 dpi is smaller than 0.3 inch
            >>> check_preconditions( 500, 500, 200, FMD_ISO_19794_2_2005 )
            Traceback (most recent call last):
            ...
            FMR.exceptions.ExtractionError: 200 dpi not in 300-1024
    """
    if width > MAX_IMAGE_SIZE or height > MAX_IMAGE_SIZE:
        raise ExtractionError( REASON_IMAGE_TOO_LARGE, "image of %dx%d pixels, %d pixels max" % ( width, height, MAX_IMAGE_SIZE ) )

    if not MIN_DPI <= dpi <= MAX_DPI:
        raise ExtractionError( REASON_DPI_OUT_OF_RANGE, "%d dpi not in %d-%d" % ( dpi, MIN_DPI, MAX_DPI ) )

    if width * 500 < MIN_PHYSICAL_SIZE * dpi or height * 500 < MIN_PHYSICAL_SIZE * dpi:
        raise ExtractionError( REASON_IMAGE_TOO_SMALL, "image of %dx%d pixels at %d dpi is smaller than 0.3 inch" % ( width, height, dpi ) )

    if width * 500 > MAX_PHYSICAL_WIDTH * dpi or height * 500 > MAX_PHYSICAL_HEIGHT * dpi:
        raise ExtractionError( REASON_ASPECT_RATIO_OUT_OF_RANGE, "image of %dx%d pixels at %d dpi is larger than 1.62x2.0 inches" % ( width, height, dpi ) )

    if buffer_size < FMD_BUFFER_SIZE:
        raise ExtractionError( REASON_BUFFER_TOO_SMALL, "output buffer of %d bytes, %d needed" % ( buffer_size, FMD_BUFFER_SIZE ) )

    if target_format not in FORMAT_TAGS:
        raise ExtractionError( REASON_UNSUPPORTED_FORMAT, "output format 0x%08X not supported" % target_format )

def extract( extractor, pixels, width, height, dpi, target_format, buffer_size = FMD_BUFFER_SIZE ):
    """
        Call the extractor on a grayscale image (one byte per pixel, row by
        row), after the check of its limits. The errors raised by the
        extractor are not changed.

        :param extractor: Minutiae extractor.
        :type extractor: callable

        :return: Binary minutiae record.
        :rtype: bytes

        :raise ExtractionError: if the parameters are out of the limits of the
            extractor, or if the extraction failed
    """
    check_preconditions( width, height, dpi, target_format, buffer_size )

    if len( pixels ) != width * height:
        raise ExtractionError( REASON_UNSPECIFIED, "%d pixels for an image of %dx%d pixels" % ( len( pixels ), width, height ) )

    debug.debug( "Extracting the minutiae from a %dx%d image at %d dpi (%d px/cm)" % ( width, height, dpi, dpi_to_dpcm( dpi ) ) )

    data, size = extractor( pixels, width, height, dpi, target_format )

    if size > len( data ):
        raise ExtractionError( REASON_UNSPECIFIED, "record of %d bytes declared, %d bytes returned" % ( size, len( data ) ) )

    data = bytes( data[ : size ] )

    debug.debug( leveler( "extracted record: %s" % bindump( data ) ) )

    return data

################################################################################
#
#    PGM images
#
################################################################################

def read_pgm( source ):
    """
        Read a binary (P5) 8-bit grayscale PGM image.

        :param source: Path or file object.
        :type source: str or file

        :return: The pixels, the width and the height of the image.
        :rtype: tuple

        :raise ImageFormatNotSupported: if the image is not an 8-bit grayscale
            PGM image of at least 32x32 pixels
    """
    try:
        img = Image.open( source )

    except UnidentifiedImageError as e:
        raise ImageFormatNotSupported( str( e ) )

    if img.format != "PPM" or img.mode != "L":
        raise ImageFormatNotSupported( "%s image in mode %s, 8-bit grayscale PGM expected" % ( img.format, img.mode ) )

    width, height = img.size

    if width < MIN_PGM_SIZE or height < MIN_PGM_SIZE:
        raise ImageFormatNotSupported( "image of %dx%d pixels, %dx%d pixels min" % ( width, height, MIN_PGM_SIZE, MIN_PGM_SIZE ) )

    debug.debug( "PGM image of %dx%d pixels" % ( width, height ) )

    return img.tobytes(), width, height

def extract_from_pgm( source, extractor, dpi = 500, target_format = FMD_ISO_19794_2_2005 ):
    """
        Read a PGM image, extract the minutiae and decode the record.

        :rtype: MinutiaeRecord
    """
    pixels, width, height = read_pgm( source )
    data = extract( extractor, pixels, width, height, dpi, target_format )

    return decode( data, FORMAT_TAGS[ target_format ] )
