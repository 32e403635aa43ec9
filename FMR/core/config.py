#!/usr/bin/python
# -*- coding: UTF-8 -*-

################################################################################
#
#    Byte order
#
################################################################################

BIG_ENDIAN = "big"
LITTLE_ENDIAN = "little"

################################################################################
#
#    Record header
#
################################################################################

FMR_FORMAT_ID = b"FMR\x00"

FMR_SPEC_VERSION_2004 = b" 20\x00"
FMR_SPEC_VERSION_2007 = b"030\x00"

#    Record length encodings
RECORD_LENGTH_ANSI = "ansi"
RECORD_LENGTH_FIXED = "fixed"

#    Record length types (size of the record length field)
RECORD_LENGTH_SHORT = "short"
RECORD_LENGTH_LONG = "long"

FMR_ANSI_SHORT_LENGTH_MAX = 0xFFFF

################################################################################
#
#    Minutiae
#
################################################################################

MINUTIA_TYPE_OTHER = 0
MINUTIA_TYPE_RIDGE_ENDING = 1
MINUTIA_TYPE_BIFURCATION = 2
MINUTIA_TYPE_UNKNOWN = 3

MINUTIA_QUALITY_MIN = 0
MINUTIA_QUALITY_MAX = 100
MINUTIA_QUALITY_UNAVAILABLE = 255

FINGER_QUALITY_MIN = 0
FINGER_QUALITY_MAX = 100

MAX_MINUTIAE = 255

################################################################################
#
#    Extended data
#
################################################################################

FEDB_AREA_HEADER_LENGTH = 4

FEDB_TYPE_RIDGE_COUNT = 0x0001
FEDB_TYPE_CORE_AND_DELTA = 0x0002
