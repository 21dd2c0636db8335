"""
Utility functions and helpers.

This package contains input validation, error types and
pagination/size-limit helpers.
"""

from .errors import DirectoryError, InputInvalidError, describe_error
from .pagination import enforce_size_limit, paginate, pagination_meta
from .validators import validate_fqdn, validate_ipv4, validate_zone_name

__all__ = [
    "DirectoryError",
    "InputInvalidError",
    "describe_error",
    "enforce_size_limit",
    "paginate",
    "pagination_meta",
    "validate_fqdn",
    "validate_ipv4",
    "validate_zone_name",
]
