#!/usr/bin/python
# -*- coding: UTF-8 -*-

################################################################################
#
#    Python library for:
#
#                 Finger Minutiae Records (FMR) interchange
#
#    The aim of the python library is to read, validate and write the finger
#    minutiae records produced by the fingerprint scanners and minutiae
#    extractors, and to export them in the XYT format used by the matchers.
#
#    The following standards are supported:
#
#        ANSI_2004               : ANSI/INCITS 378-2004
#        ANSI_2007               : ANSI/INCITS 378-2007
#        ISO_2005                : ISO/IEC 19794-2:2005, record format
#        ISO_2005_NORMAL_CARD    : ISO/IEC 19794-2:2005, normal size card format
#        ISO_2005_COMPACT_CARD   : ISO/IEC 19794-2:2005, compact size card format
#
#    A record is composed of finger views (FVMR), each view containing the
#    minutiae (FMD) in the capture order:
#
#        >>> import FMR
#        >>> record = FMR.decode( data, "ISO_2005" )
#        >>> FMR.validate( record )
#        >>> print( FMR.to_xyt( record ) )
#
#    The minutiae extraction is not done by the library; an external
#    extractor can be plugged with the functions of the FMR.extractor module.
#
################################################################################

from .exceptions import *
from .fingerprint import MinutiaeRecord, FingerView, MinutiaPoint, ExtendedDataArea
from .fingerprint.fmd import angle_degrees
from .fingerprint.fmr import decode, encode, clean, fmr_length
from .fingerprint.functions import to_xyt, to_tree, to_json, dump
from .standards import get_profile, decode_standard
from .validation import validate, check

try:
    from .version import __version__
except ImportError:
    __version__ = "dev"
