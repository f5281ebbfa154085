"""Inactivity tracker states."""

from enum import Enum


class ActivityState(str, Enum):
    """States of the session inactivity tracker.

    ACTIVE -> WARNING when the remaining time drops inside the warning window.
    WARNING -> ACTIVE on any interaction or explicit extension.
    ACTIVE/WARNING -> EXPIRED when the idle time exceeds the timeout.
    """

    ACTIVE = "active"
    WARNING = "warning"
    EXPIRED = "expired"
