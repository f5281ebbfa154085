"""Device enricher implementation.

Parses user agent strings into the DeviceInfo stored with every access event.
Browser, OS and device category come from a fixed, ordered set of rules so
that stored rows stay comparable over time. The user-agents library only
contributes bot detection.

Implements DeviceEnricher protocol with fail-open behavior.
"""

import re

from user_agents import parse as parse_ua  # type: ignore[import-untyped]

from parcel_portal.core.constants import UNKNOWN_VALUE
from parcel_portal.domain.entities.device_info import DeviceInfo
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol

_MOBILE = re.compile(r"Mobile|Android|iPhone|iPad")

# (marker, label, version pattern, replace underscores); first match wins.
_OS_RULES: tuple[tuple[str, str, re.Pattern[str] | None, bool], ...] = (
    ("Windows NT", "Windows", re.compile(r"Windows NT ([\d.]+)"), False),
    ("Mac OS X", "macOS", re.compile(r"Mac OS X ([\d_]+)"), True),
    ("Android", "Android", re.compile(r"Android ([\d.]+)"), False),
    ("iPhone OS", "iOS", re.compile(r"iPhone OS ([\d_]+)"), True),
    ("Linux", "Linux", None, False),
)


def _detect_os(user_agent: str) -> str:
    for marker, label, version_pattern, underscores in _OS_RULES:
        if marker not in user_agent:
            continue
        if version_pattern is None:
            return label
        match = version_pattern.search(user_agent)
        if not match:
            return label
        version = match.group(1)
        if underscores:
            version = version.replace("_", ".")
        return f"{label} {version}"
    return UNKNOWN_VALUE


def _detect_browser(user_agent: str) -> tuple[str, str]:
    if "Chrome" in user_agent and "Chromium" not in user_agent:
        browser, pattern = "Chrome", r"Chrome/([\d.]+)"
    elif "Firefox" in user_agent:
        browser, pattern = "Firefox", r"Firefox/([\d.]+)"
    elif "Safari" in user_agent and "Chrome" not in user_agent:
        browser, pattern = "Safari", r"Version/([\d.]+)"
    elif "Edge" in user_agent:
        browser, pattern = "Edge", r"Edge/([\d.]+)"
    else:
        return UNKNOWN_VALUE, UNKNOWN_VALUE

    match = re.search(pattern, user_agent)
    return browser, match.group(1) if match else UNKNOWN_VALUE


def _detect_device(user_agent: str, mobile: bool) -> str:
    if "iPhone" in user_agent:
        return "iPhone"
    if "iPad" in user_agent:
        return "iPad"
    if "Android" in user_agent:
        return "Android Phone" if "Mobile" in user_agent else "Android Tablet"
    if mobile:
        return "Mobile Device"
    return "Desktop"


def parse_user_agent(user_agent: str | None) -> DeviceInfo:
    """Parse a user agent string into DeviceInfo.

    Rules (each list is checked in order, first match wins):
        - mobile: any of Mobile, Android, iPhone, iPad
        - OS: Windows NT, Mac OS X, Android, iPhone OS, Linux
        - browser: Chrome (not Chromium), Firefox, Safari (not Chrome), Edge
        - device: iPhone, iPad, Android phone/tablet, generic mobile, Desktop

    Note that iOS agents contain "like Mac OS X" and are therefore reported
    as macOS without a version.

    Args:
        user_agent: Raw user agent string, may be empty or None.

    Returns:
        DeviceInfo; all fields "Unknown" and mobile False for empty input.
    """
    if not user_agent:
        return DeviceInfo()

    mobile = bool(_MOBILE.search(user_agent))
    browser, browser_version = _detect_browser(user_agent)
    return DeviceInfo(
        browser=browser,
        browser_version=browser_version,
        os=_detect_os(user_agent),
        device=_detect_device(user_agent, mobile),
        mobile=mobile,
    )


class UserAgentDeviceEnricher:
    """Device enricher built on parse_user_agent().

    Implements DeviceEnricher protocol (structural typing).

    Behavior:
        - Fail-open: Returns default DeviceInfo on parse errors
        - Non-blocking: Pure string parsing
        - Bot flag from the user-agents library (best-effort)
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize enricher.

        Args:
            logger: Logger for parse failures.
        """
        self._logger = logger

    async def enrich(self, user_agent: str) -> DeviceInfo:
        """Parse user agent string to extract device information.

        Args:
            user_agent: Raw user agent string.

        Returns:
            DeviceInfo with parsed details. Defaults on parse failure.
        """
        if not user_agent:
            return DeviceInfo()

        try:
            info = parse_user_agent(user_agent)
        except Exception as e:
            self._logger.warning(
                "Failed to parse user agent",
                user_agent=user_agent[:100],
                error=str(e),
            )
            return DeviceInfo()

        try:
            is_bot = bool(parse_ua(user_agent).is_bot)
        except Exception as e:
            self._logger.debug(
                "Bot detection failed",
                user_agent=user_agent[:100],
                error=str(e),
            )
            is_bot = False

        return DeviceInfo(
            browser=info.browser,
            browser_version=info.browser_version,
            os=info.os,
            device=info.device,
            mobile=info.mobile,
            bot=is_bot,
        )
