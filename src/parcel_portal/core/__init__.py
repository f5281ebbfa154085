"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error class for domain-level error handling
- Error codes and runtime environment enums

The core module has NO dependencies on other application layers.
"""

from parcel_portal.core.enums import Environment, ErrorCode
from parcel_portal.core.errors import DomainError
from parcel_portal.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
