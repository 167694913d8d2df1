"""
Exception hierarchy for pydense.

All exceptions inherit from PyDenseError to allow catching any
library-specific error.

Design principles:
    - Every argument failure names the offending parameter, both in the
      message (as its first token) and in the ``parameter`` attribute
    - Failures are raised before any output buffer is written
    - Numerical kernels never raise on IEEE special values
"""


class PyDenseError(Exception):
    """Base exception for all pydense errors."""
    pass


class ValidationError(PyDenseError):
    """
    Input validation failed.
    
    Raised when a kernel argument fails its contract check: an enumerated
    option outside its value set, a zero stride, an illegal transpose for a
    structured update, and so on.
    
    Attributes:
        parameter: Name of the offending parameter, if known
    """
    
    def __init__(self, message: str, parameter: str | None = None):
        super().__init__(message)
        self.parameter = parameter


class DimensionError(ValidationError):
    """
    Dimensions are negative, inconsistent, or do not fit the storage.
    
    Raised for negative m/n/k, a leading dimension smaller than the minor
    extent, a buffer too short for the requested view, or views whose
    shapes do not conform.
    """
    pass


class AccessDeniedError(ValidationError):
    """
    A view does not allow writes to the region an operation needs.
    
    Attributes:
        parameter: Name of the view
        requested: The access region the operation needs
        policy: The write policy of the view
    """
    
    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        requested: object = None,
        policy: object = None,
    ):
        super().__init__(message, parameter=parameter)
        self.requested = requested
        self.policy = policy
