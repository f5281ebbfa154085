"""Access audit logger.

Best-effort, append-only audit trail: one `access_logs` row per login
attempt, logout, session refresh or denied access.

Flow (record_access):
1. Probe client info (public IP + user agent)
2. Geolocate the IP
3. Parse the user agent
4. Assemble the AccessEvent (created_at = now, referrer from the environment)
5. Insert one row into the audit table
6. Return Success(AccessEvent) or Failure(AuditError)

The public boundary (`log_access` and the wrappers) collapses the result to a
boolean and never raises: audit failures must not break sign-in or sign-out.

Architecture:
- Application layer; enrichers, table store and environment are injected
  via protocols
"""

import secrets
import time

from parcel_portal.application.dtos import AccessRequest
from parcel_portal.core.constants import (
    BASE36_ALPHABET,
    DENIED_SESSION_ID_PREFIX,
    FAILED_SESSION_ID_PREFIX,
    SESSION_ID_PREFIX,
    SESSION_ID_RANDOM_LENGTH,
)
from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Result, Success
from parcel_portal.domain.entities.access_event import AccessEvent
from parcel_portal.domain.enums import AccessEventType
from parcel_portal.domain.errors import AuditError
from parcel_portal.domain.protocols import (
    ClientEnvironmentProtocol,
    ClientInfoProbeProtocol,
    DeviceEnricher,
    LocationEnricher,
    LoggerProtocol,
    TableStoreProtocol,
)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_session_id() -> str:
    """Generate an audit session id.

    Format: `session_<epoch-ms>_<9 random base36 chars>`.
    """
    suffix = "".join(
        secrets.choice(BASE36_ALPHABET) for _ in range(SESSION_ID_RANDOM_LENGTH)
    )
    return f"{SESSION_ID_PREFIX}_{_epoch_ms()}_{suffix}"


class AccessAuditLogger:
    """Records access events to the audit table.

    Attributes:
        _table: Audit table name (default "access_logs").
    """

    def __init__(
        self,
        *,
        probe: ClientInfoProbeProtocol,
        location_enricher: LocationEnricher,
        device_enricher: DeviceEnricher,
        environment: ClientEnvironmentProtocol,
        store: TableStoreProtocol,
        logger: LoggerProtocol,
        table: str = "access_logs",
    ) -> None:
        """Initialize audit logger with dependencies.

        Args:
            probe: Client IP + user agent probe.
            location_enricher: IP geolocation.
            device_enricher: User agent parser.
            environment: Source of the page referrer.
            store: Table store receiving the rows.
            logger: Logger for non-fatal audit failures.
            table: Audit table name.
        """
        self._probe = probe
        self._location_enricher = location_enricher
        self._device_enricher = device_enricher
        self._environment = environment
        self._store = store
        self._logger = logger
        self._table = table

    async def record_access(
        self, request: AccessRequest
    ) -> Result[AccessEvent, AuditError]:
        """Run the audit pipeline for one event.

        Args:
            request: Caller-supplied event fields.

        Returns:
            Success(AccessEvent) when the row was accepted.
            Failure(AuditError) when the insert was rejected or any step
            raised unexpectedly.
        """
        try:
            client = await self._probe.probe()
            location = await self._location_enricher.enrich(client.ip)
            device = await self._device_enricher.enrich(client.user_agent)

            event = AccessEvent(
                user_id=request.user_id or None,
                email=request.email,
                ip_address=client.ip,
                user_agent=client.user_agent,
                event_type=request.event_type,
                success=request.success,
                location=location,
                session_id=request.session_id or None,
                referrer=self._environment.referrer or None,
                device_info=device,
            )

            insert_result = await self._store.insert(
                self._table, event.to_record(), access_token=request.access_token
            )
        except Exception as e:
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_PIPELINE_FAILED,
                    message=str(e) or type(e).__name__,
                    details={"error_type": type(e).__name__},
                )
            )

        match insert_result:
            case Failure(error=storage_error):
                return Failure(
                    error=AuditError(
                        code=ErrorCode.AUDIT_RECORD_FAILED,
                        message=storage_error.message,
                        details={"table": self._table},
                    )
                )
            case Success():
                return Success(value=event)

    async def log_access(
        self,
        *,
        email: str | None,
        event_type: AccessEventType,
        success: bool,
        user_id: str | None = None,
        session_id: str | None = None,
        access_token: str | None = None,
    ) -> bool:
        """Record an access event, best-effort.

        Returns:
            True if the row was written, False otherwise. Never raises.
        """
        request = AccessRequest(
            email=email,
            event_type=event_type,
            success=success,
            user_id=user_id,
            session_id=session_id,
            access_token=access_token,
        )
        try:
            result = await self.record_access(request)
        except Exception as e:
            self._logger.warning(
                "Access logging encountered an error (non-critical)",
                event_type=event_type.value,
                error=str(e),
            )
            return False

        match result:
            case Success():
                self._logger.debug(
                    "Access event logged", event_type=event_type.value
                )
                return True
            case Failure(error=error):
                self._logger.warning(
                    "Access logging failed (non-critical)",
                    event_type=event_type.value,
                    error_code=error.code.value,
                    error=error.message,
                )
                return False

    async def log_login(
        self,
        user_id: str,
        email: str,
        session_id: str | None = None,
        *,
        access_token: str | None = None,
    ) -> bool:
        """Successful login; generates a session id when none is given."""
        return await self.log_access(
            user_id=user_id,
            email=email,
            event_type=AccessEventType.LOGIN,
            success=True,
            session_id=session_id or generate_session_id(),
            access_token=access_token,
        )

    async def log_failed_login(
        self, email: str, reason: str = "invalid_credentials"
    ) -> bool:
        """Failed login attempt, recorded as `failed_<ms>_<reason>`."""
        return await self.log_access(
            user_id=None,
            email=email,
            event_type=AccessEventType.LOGIN,
            success=False,
            session_id=f"{FAILED_SESSION_ID_PREFIX}_{_epoch_ms()}_{reason}",
        )

    async def log_logout(
        self,
        user_id: str,
        email: str,
        session_id: str | None = None,
        *,
        access_token: str | None = None,
    ) -> bool:
        return await self.log_access(
            user_id=user_id,
            email=email,
            event_type=AccessEventType.LOGOUT,
            success=True,
            session_id=session_id,
            access_token=access_token,
        )

    async def log_session_refresh(
        self,
        user_id: str,
        email: str,
        session_id: str | None = None,
        *,
        access_token: str | None = None,
    ) -> bool:
        return await self.log_access(
            user_id=user_id,
            email=email,
            event_type=AccessEventType.SESSION_REFRESH,
            success=True,
            session_id=session_id,
            access_token=access_token,
        )

    async def log_access_denied(
        self, email: str | None = None, reason: str = "unauthorized"
    ) -> bool:
        """Denied access, recorded as `denied_<ms>_<reason>`."""
        return await self.log_access(
            user_id=None,
            email=email,
            event_type=AccessEventType.ACCESS_DENIED,
            success=False,
            session_id=f"{DENIED_SESSION_ID_PREFIX}_{_epoch_ms()}_{reason}",
        )
