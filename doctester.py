#!/usr/bin/python
# -*- coding: UTF-8 -*-

import doctest
import sys
import unittest

import FMR.core.__init__
import FMR.core.functions

import FMR.standards.__init__

import FMR.fingerprint.__init__
import FMR.fingerprint.fmd
import FMR.fingerprint.fvmr
import FMR.fingerprint.fmr
import FMR.fingerprint.functions

import FMR.validation.__init__

import FMR.extractor.__init__

MODULES = [
    FMR.core.__init__,
    FMR.core.functions,
    FMR.standards.__init__,
    FMR.fingerprint.__init__,
    FMR.fingerprint.fmd,
    FMR.fingerprint.fvmr,
    FMR.fingerprint.fmr,
    FMR.fingerprint.functions,
    FMR.validation.__init__,
    FMR.extractor.__init__,
]

def FMRtests():
    tests = unittest.TestSuite()
    
    for module in MODULES:
        tests.addTests( doctest.DocTestSuite( module ) )
    
    return tests

if __name__ == "__main__":
    ret = not unittest.TextTestRunner( verbosity = 2 ).run( FMRtests() ).wasSuccessful()
    sys.exit( ret )
else:
    def load_tests( loader, tests, ignore ):
        return FMRtests()
