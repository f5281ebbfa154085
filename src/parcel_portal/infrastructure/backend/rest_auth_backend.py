"""Hosted auth backend REST adapter.

Talks to the hosted backend's auth API (GoTrue-compatible endpoints):

    POST {url}/auth/v1/token?grant_type=password   sign in
    POST {url}/auth/v1/signup                      sign up
    POST {url}/auth/v1/logout                      sign out (bearer token)

Every request carries the project's public API key in the `apikey` header.
The current session is kept in memory for the lifetime of the adapter, and
auth change listeners are notified in-process on sign-in and sign-out.

Error Handling:
    - Backend rejections become AuthError with the backend's message
      (`error_description`, `msg` or `message` field)
    - Timeouts and connection errors become AUTH_BACKEND_UNAVAILABLE
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Success
from parcel_portal.domain.entities.auth import (
    AuthData,
    AuthResponse,
    AuthSession,
    AuthUser,
)
from parcel_portal.domain.enums import AuthChangeEvent
from parcel_portal.domain.errors import AuthError
from parcel_portal.domain.protocols.auth_backend_protocol import AuthChangeCallback
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol
from parcel_portal.infrastructure.backend.auth_listeners import (
    AuthListenerRegistry,
    ListenerSubscription,
)
from parcel_portal.infrastructure.http.base_json_client import BaseJSONClient

TOKEN_PATH = "/auth/v1/token"
SIGNUP_PATH = "/auth/v1/signup"
LOGOUT_PATH = "/auth/v1/logout"

_ALREADY_REGISTERED_MARKERS = ("already registered", "already exists")


class RestAuthBackend(BaseJSONClient):
    """Auth backend over the hosted REST API.

    Implements AuthBackendProtocol (structural typing).
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize adapter.

        Args:
            base_url: Project URL, e.g. "https://xyz.supabase.co".
            api_key: Public (anon) API key.
            timeout: Request timeout in seconds.
            logger: Logger for backend failures.
        """
        super().__init__(
            base_url=base_url,
            service_name="auth_backend",
            timeout=timeout,
            logger=logger,
            default_headers={"apikey": api_key},
        )
        self._session: AuthSession | None = None
        self._listeners = AuthListenerRegistry(self._logger)

    def restore_session(self, session: AuthSession | None) -> None:
        """Install a persisted session (e.g. read back from client storage)."""
        self._session = session

    async def get_session(self) -> AuthSession | None:
        if self._session is not None and self._session.is_expired():
            self._logger.info("auth_session_expired", user_id=self._session.user.id)
            self._session = None
        return self._session

    def on_auth_state_change(self, callback: AuthChangeCallback) -> ListenerSubscription:
        return self._listeners.add(callback)

    def current_access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        """Exchange email + password for a session."""
        result = await self._execute_request(
            method="POST",
            path=TOKEN_PATH,
            params={"grant_type": "password"},
            json_data={"email": email, "password": password},
            operation="sign_in",
        )
        match result:
            case Failure(error=error):
                return AuthResponse(error=self._unavailable(error.message))
            case Success(value=response):
                pass

        if not response.is_success:
            return AuthResponse(
                error=self._error_from_response(
                    response, default_code=ErrorCode.AUTHENTICATION_FAILED
                )
            )

        match self._parse_json_object(response, "sign_in"):
            case Failure(error=error):
                return AuthResponse(error=self._unavailable(error.message))
            case Success(value=body):
                pass

        session = self._session_from_body(body)
        if session is None:
            return AuthResponse(
                error=AuthError(
                    code=ErrorCode.AUTHENTICATION_FAILED,
                    message="Auth backend returned no session",
                    status=response.status_code,
                )
            )

        self._session = session
        self._listeners.notify(AuthChangeEvent.SIGNED_IN, session)
        return AuthResponse(data=AuthData(user=session.user, session=session))

    async def sign_up(self, email: str, password: str) -> AuthResponse:
        """Register an account. The session is None until email confirmation."""
        result = await self._execute_request(
            method="POST",
            path=SIGNUP_PATH,
            json_data={"email": email, "password": password},
            operation="sign_up",
        )
        match result:
            case Failure(error=error):
                return AuthResponse(error=self._unavailable(error.message))
            case Success(value=response):
                pass

        if not response.is_success:
            return AuthResponse(
                error=self._error_from_response(
                    response, default_code=ErrorCode.AUTH_SIGN_UP_FAILED
                )
            )

        match self._parse_json_object(response, "sign_up"):
            case Failure(error=error):
                return AuthResponse(error=self._unavailable(error.message))
            case Success(value=body):
                pass

        session = self._session_from_body(body)
        if session is not None:
            # Auto-confirmed projects sign the user in immediately.
            self._session = session
            self._listeners.notify(AuthChangeEvent.SIGNED_IN, session)
            return AuthResponse(data=AuthData(user=session.user, session=session))

        return AuthResponse(data=AuthData(user=_user_from(body), session=None))

    async def sign_out(self) -> AuthError | None:
        """Revoke the session on the backend and drop it locally.

        The local session is dropped even when the backend call fails.
        """
        session = self._session
        self._session = None
        if session is None:
            return None

        self._listeners.notify(AuthChangeEvent.SIGNED_OUT, None)

        result = await self._execute_request(
            method="POST",
            path=LOGOUT_PATH,
            headers={"Authorization": f"Bearer {session.access_token}"},
            operation="sign_out",
        )
        match result:
            case Failure(error=error):
                return self._unavailable(error.message)
            case Success(value=response):
                pass

        # An already-revoked token is not an error for the caller.
        if response.is_success or response.status_code in (401, 403, 404):
            return None
        return self._error_from_response(
            response, default_code=ErrorCode.AUTH_SIGN_OUT_FAILED
        )

    def _unavailable(self, message: str) -> AuthError:
        return AuthError(code=ErrorCode.AUTH_BACKEND_UNAVAILABLE, message=message)

    def _error_from_response(
        self, response: httpx.Response, *, default_code: ErrorCode
    ) -> AuthError:
        message = _error_message(response)
        code = default_code
        lowered = message.lower()
        if "invalid login credentials" in lowered or "invalid_grant" in lowered:
            code = ErrorCode.INVALID_CREDENTIALS
        elif any(marker in lowered for marker in _ALREADY_REGISTERED_MARKERS):
            code = ErrorCode.USER_ALREADY_EXISTS

        self._logger.warning(
            "auth_backend_rejected",
            status_code=response.status_code,
            error_code=code.value,
        )
        return AuthError(code=code, message=message, status=response.status_code)

    @staticmethod
    def _session_from_body(body: dict[str, Any]) -> AuthSession | None:
        access_token = body.get("access_token")
        user = _user_from(body.get("user"))
        if not access_token or user is None:
            return None

        expires_at: datetime | None = None
        if body.get("expires_at"):
            expires_at = datetime.fromtimestamp(int(body["expires_at"]), tz=UTC)
        elif body.get("expires_in"):
            expires_at = datetime.now(UTC) + timedelta(seconds=int(body["expires_in"]))

        return AuthSession(
            access_token=str(access_token),
            refresh_token=body.get("refresh_token"),
            user=user,
            expires_at=expires_at,
        )


def _user_from(data: Any) -> AuthUser | None:
    if not isinstance(data, dict) or not data.get("id"):
        return None
    return AuthUser(id=str(data["id"]), email=str(data.get("email") or ""))


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            value = body.get(key)
            if value:
                return str(value)
    return f"Auth backend returned HTTP {response.status_code}"
