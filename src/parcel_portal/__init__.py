"""Parcel portal session lifecycle and access audit package.

Tracks who is signed in to the parcel portal, ends idle sessions, and writes
one best-effort audit row per session transition (login, logout, session
refresh, denied access) enriched with IP, location and device details.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
