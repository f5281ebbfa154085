"""Caller details probed from the network environment."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ClientInfo:
    """Public IP and user agent of the current client.

    Attributes:
        ip: Public IP, or the "unknown"/"localhost" sentinel.
        user_agent: Raw user agent string.
    """

    ip: str
    user_agent: str
