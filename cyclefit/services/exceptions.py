"""
Service-level exceptions.

This module contains exceptions that can be raised by the recommendation
services. Only ReferenceDataError is expected to reach a caller, when the
static tables cannot be loaded at startup.
"""

class CycleFitError(Exception):
    """Base exception for recommendation errors."""
    pass

class InvalidInputError(CycleFitError):
    """Raised when a profile field needed for a recommendation is missing or malformed."""
    pass

class ReferenceDataError(CycleFitError):
    """Raised when reference data cannot be loaded or is inconsistent."""
    pass
