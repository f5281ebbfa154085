"""Application data transfer objects."""

from parcel_portal.application.dtos.access_dtos import AccessRequest

__all__ = ["AccessRequest"]
