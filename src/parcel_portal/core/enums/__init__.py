"""Core enums package.

Usage:
    from parcel_portal.core.enums import ErrorCode, Environment
"""

from parcel_portal.core.enums.environment import Environment
from parcel_portal.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
