#!/usr/bin/env python
#  *-* coding: utf-8 *-*

class FMRException( Exception ):
    pass

class UnsupportedStandard( FMRException ):
    pass

class DecodeError( FMRException ):
    pass

class EncodeError( FMRException ):
    pass

class OutOfBounds( FMRException ):
    pass

class TruncatedRecord( OutOfBounds, DecodeError ):
    pass

class FieldOverflow( EncodeError ):
    pass

class ImageFormatNotSupported( FMRException ):
    pass

class ValidationError( FMRException ):
    """
        Raised when a decoded (or caller-built) record does not conform to its
        standard. All the violations found are stored in the `violations`
        list, not only the first one.
    """
    def __init__( self, violations ):
        self.violations = list( violations )

        super( ValidationError, self ).__init__(
            "%d violation(s): %s" % (
                len( self.violations ),
                "; ".join( [ str( v ) for v in self.violations ] )
            )
        )

class ExtractionError( FMRException ):
    """
        Error reported by (or before calling) the external minutiae extractor.
        The `reason` is one of the `REASON_*` values defined in
        :mod:`FMR.extractor`.
    """
    def __init__( self, reason, message = None ):
        self.reason = reason

        super( ExtractionError, self ).__init__( message or reason )
