#!/usr/bin/python
# -*- coding: UTF-8 -*-

from setuptools import setup

################################################################################
# 
#    Version determination
# 
################################################################################

try:
    import versioneer
    version = versioneer.get_version()

except ImportError:
    version = "0.dev0"
    
finally:
    import os
    os.chdir( os.path.split( os.path.abspath( __file__ ) )[ 0 ] )
    
    with open( "FMR/version.py", "w+" ) as fp:
        fp.write( "__version__ = '%s'" % version )

################################################################################
# 
#    Setup configuration
# 
################################################################################

setup( 
    name = 'FMR',
    version = version,
    description = 'Python library for reading, validating and writing Finger Minutiae Records (ANSI/INCITS 378, ISO/IEC 19794-2)',
    packages = [
        'FMR',
        'FMR.core',
        'FMR.standards',
        'FMR.fingerprint',
        'FMR.validation',
        'FMR.extractor',
    ],
    install_requires = [
        'pillow',
    ],
    extras_require = {
        'test': [
            'pytest',
        ],
    },
 )
