"""In-memory hosted backend adapters.

InMemoryAuthBackend keeps accounts and the current session in memory and
answers with the same messages as the hosted backend ("Invalid login
credentials", "User already registered"). InMemoryTableStore appends rows to
per-table lists and can be told to reject inserts.

Used by the container when `backend_type="memory"` and throughout the tests.
"""

import secrets
from collections import defaultdict
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Result, Success
from parcel_portal.domain.entities.auth import (
    AuthData,
    AuthResponse,
    AuthSession,
    AuthUser,
)
from parcel_portal.domain.enums import AuthChangeEvent
from parcel_portal.domain.errors import AuthError, StorageError
from parcel_portal.domain.protocols.auth_backend_protocol import AuthChangeCallback
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol
from parcel_portal.infrastructure.backend.auth_listeners import (
    AuthListenerRegistry,
    ListenerSubscription,
)

INVALID_CREDENTIALS_MESSAGE = "Invalid login credentials"
USER_ALREADY_REGISTERED_MESSAGE = "User already registered"


class InMemoryAuthBackend:
    """Auth backend with accounts held in a dictionary.

    Implements AuthBackendProtocol (structural typing).

    Attributes:
        sign_out_error: When set, sign_out() returns it (the local session is
            still dropped, as the hosted backend does).
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        *,
        session_ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self._logger = logger
        self._session_ttl = session_ttl
        self._accounts: dict[str, tuple[AuthUser, str]] = {}
        self._session: AuthSession | None = None
        self._listeners = AuthListenerRegistry(logger)
        self.sign_out_error: AuthError | None = None

    def add_user(self, email: str, password: str, *, user_id: str | None = None) -> AuthUser:
        """Register an account directly (fixtures, seeding)."""
        user = AuthUser(id=user_id or str(uuid4()), email=email)
        self._accounts[email.lower()] = (user, password)
        return user

    def issue_session(self, user: AuthUser) -> AuthSession:
        """Mint a fresh session for `user` without installing it."""
        return self._new_session(user)

    def restore_session(self, session: AuthSession | None) -> None:
        """Install a persisted session, as if the page was reloaded."""
        self._session = session

    async def get_session(self) -> AuthSession | None:
        if self._session is not None and self._session.is_expired():
            self._session = None
        return self._session

    def on_auth_state_change(self, callback: AuthChangeCallback) -> ListenerSubscription:
        return self._listeners.add(callback)

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        account = self._accounts.get(email.lower())
        if account is None or account[1] != password:
            return AuthResponse(
                error=AuthError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message=INVALID_CREDENTIALS_MESSAGE,
                    status=400,
                )
            )

        user = account[0]
        self._session = self._new_session(user)
        self._listeners.notify(AuthChangeEvent.SIGNED_IN, self._session)
        return AuthResponse(data=AuthData(user=user, session=self._session))

    async def sign_out(self) -> AuthError | None:
        had_session = self._session is not None
        self._session = None
        if had_session:
            self._listeners.notify(AuthChangeEvent.SIGNED_OUT, None)
        return self.sign_out_error

    async def sign_up(self, email: str, password: str) -> AuthResponse:
        if email.lower() in self._accounts:
            return AuthResponse(
                error=AuthError(
                    code=ErrorCode.USER_ALREADY_EXISTS,
                    message=USER_ALREADY_REGISTERED_MESSAGE,
                    status=422,
                )
            )
        user = self.add_user(email, password)
        # Accounts need email confirmation before a session is issued.
        return AuthResponse(data=AuthData(user=user, session=None))

    def current_access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    def _new_session(self, user: AuthUser) -> AuthSession:
        return AuthSession(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
            user=user,
            expires_at=datetime.now(UTC) + self._session_ttl,
        )


class InMemoryTableStore:
    """Append-only table store held in memory.

    Implements TableStoreProtocol (structural typing).

    Attributes:
        rows: Table name -> inserted rows, in insertion order.
        reject_with: When set, every insert fails with this message.
        access_tokens: Token passed with each insert attempt, in call order.
    """

    def __init__(self) -> None:
        self.rows: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.reject_with: str | None = None
        self.access_tokens: list[str | None] = []

    async def insert(
        self,
        table: str,
        record: dict[str, Any],
        *,
        access_token: str | None = None,
    ) -> Result[None, StorageError]:
        self.access_tokens.append(access_token)
        if self.reject_with is not None:
            return Failure(
                error=StorageError(
                    code=ErrorCode.STORAGE_INSERT_FAILED,
                    message=self.reject_with,
                    table=table,
                )
            )
        self.rows[table].append(dict(record))
        return Success(value=None)
