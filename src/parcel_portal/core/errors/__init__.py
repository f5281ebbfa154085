"""Core errors package.

Usage:
    from parcel_portal.core.errors import DomainError
"""

from parcel_portal.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
