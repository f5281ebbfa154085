"""Device information derived from a user agent string."""

from dataclasses import dataclass
from typing import Any

from parcel_portal.core.constants import UNKNOWN_VALUE


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceInfo:
    """Parsed device details, embedded in every access event.

    Not persisted on its own. Every field has a safe default so a parse
    failure still yields a complete value.

    Attributes:
        browser: Browser family ("Chrome", "Firefox", "Safari", "Edge").
        browser_version: Browser version token ("120.0").
        os: Operating system with version ("Windows 10.0", "macOS 10.15.7").
        device: Device category ("Desktop", "iPhone", "Android Phone", ...).
        mobile: Whether the agent identifies as a mobile device.
        bot: Whether the agent identifies as a crawler or bot.
    """

    browser: str = UNKNOWN_VALUE
    browser_version: str = UNKNOWN_VALUE
    os: str = UNKNOWN_VALUE
    device: str = UNKNOWN_VALUE
    mobile: bool = False
    bot: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the key names stored in `access_logs.device_info`."""
        return {
            "browser": self.browser,
            "browserVersion": self.browser_version,
            "os": self.os,
            "device": self.device,
            "mobile": self.mobile,
            "bot": self.bot,
        }
