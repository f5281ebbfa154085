"""Centralized constants for internal implementation details.

This module holds fixed values that are part of the audit record format or
the client-state contract, NOT environment-specific configuration. Tunable
values (timeouts, poll intervals, URLs) live in `parcel_portal.core.config`.

Categories:
- Sentinels: Placeholder values for unknown client details
- Session identifiers: Prefixes and random suffix alphabet
- Client state keys: Names shared with the browser's local storage
- Interaction events: DOM events that count as user activity
"""

# =============================================================================
# Sentinels
# =============================================================================

UNKNOWN_IP: str = "unknown"
"""IP recorded when the echo service answered without an address."""

LOCALHOST_IP: str = "localhost"
"""IP recorded when the echo service could not be reached."""

UNKNOWN_VALUE: str = "Unknown"
"""Default for undetected device fields and unresolved countries."""

LOCAL_COUNTRY: str = "Local/Development"
"""Country recorded for loopback, private and sentinel addresses."""

LOCAL_IP_VALUES: frozenset[str] = frozenset({UNKNOWN_IP, LOCALHOST_IP, "127.0.0.1"})
"""Exact addresses that are never sent to the geolocation service."""

PRIVATE_IP_PREFIXES: tuple[str, ...] = ("192.168.", "10.")
"""Address prefixes that are never sent to the geolocation service."""


# =============================================================================
# Session identifiers
# =============================================================================

SESSION_ID_PREFIX: str = "session"
FAILED_SESSION_ID_PREFIX: str = "failed"
DENIED_SESSION_ID_PREFIX: str = "denied"

SESSION_ID_RANDOM_LENGTH: int = 9
"""Length of the random base36 suffix of generated session ids."""

BASE36_ALPHABET: str = "0123456789abcdefghijklmnopqrstuvwxyz"

SYSTEM_ERROR_REASON: str = "system_error"
"""Failed-login reason used when sign-in raised unexpectedly."""


# =============================================================================
# Client state keys
# =============================================================================

LAST_ACTIVITY_KEY: str = "lastActivity"
SESSION_ID_KEY: str = "sessionId"


# =============================================================================
# Interaction events
# =============================================================================

TRACKED_INTERACTION_EVENTS: tuple[str, ...] = (
    "mousedown",
    "mousemove",
    "keypress",
    "scroll",
    "touchstart",
    "click",
)
"""Any one of these resets the inactivity clock."""

BEFORE_UNLOAD_EVENT: str = "beforeunload"
VISIBILITY_CHANGE_EVENT: str = "visibilitychange"
