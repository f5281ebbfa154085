"""Shared HTTP client."""

from parcel_portal.infrastructure.http.base_json_client import BaseJSONClient

__all__ = ["BaseJSONClient"]
