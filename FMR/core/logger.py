#!/usr/bin/python
# -*- coding: UTF-8 -*-

import logging
import sys

#    Shared logger for the whole FMR package
debug = logging.getLogger( "FMR" )
debug.addHandler( logging.NullHandler() )

def setup_logging( level = logging.INFO, log_file = None ):
    """
        Configure the 'FMR' logger with a console handler (stdout) and,
        optionally, a file handler.

        :param level: Logging level (logging.DEBUG, logging.INFO, ...)
        :type level: int

        :param log_file: Optional path to a log file.
        :type log_file: str

        :return: The configured logger.
        :rtype: logging.Logger
    """
    debug.setLevel( level )

    # Avoid duplicated lines if called more than once
    for handler in list( debug.handlers ):
        if not isinstance( handler, logging.NullHandler ):
            debug.removeHandler( handler )

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt = '%H:%M:%S'
    )

    console_handler = logging.StreamHandler( sys.stdout )
    console_handler.setLevel( level )
    console_handler.setFormatter( formatter )
    debug.addHandler( console_handler )

    if log_file:
        file_handler = logging.FileHandler( log_file, mode = 'w', encoding = 'utf-8' )
        file_handler.setLevel( level )
        file_handler.setFormatter( formatter )
        debug.addHandler( file_handler )

    return debug
