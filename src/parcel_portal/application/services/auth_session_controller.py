"""Auth session controller.

Owns the sign-in/sign-out lifecycle of the portal user and wires it to the
inactivity tracker and the access audit trail.

States: LOADING -> ANONYMOUS | AUTHENTICATED.

Flow (sign_in):
1. Call the backend with email + password
2. Success: set user, generate session id, start the tracker, audit login
3. Backend error: audit failed login with the backend's message
4. Unexpected exception: audit failed login with reason "system_error" and
   return AUTH_SYSTEM_ERROR

Flow (sign_out):
1. Audit logout if a user is set, with the token of the ending session
2. Drop the local identity and session id before any await
3. Clear client state (local + session) unconditionally
4. Call the backend, then stop the tracker

Audit calls run as background tasks so sign-in and sign-out resolve without
waiting on the IP probe, geolocation or the insert. `wait_for_audit()`
drains them (teardown, tests).

Architecture:
- Application layer; backend, client state and interaction source are
  injected via protocols
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

from parcel_portal.application.services.access_audit_logger import (
    AccessAuditLogger,
    generate_session_id,
)
from parcel_portal.application.services.session_activity_tracker import (
    SessionActivityTracker,
)
from parcel_portal.core.constants import (
    BEFORE_UNLOAD_EVENT,
    SESSION_ID_KEY,
    SYSTEM_ERROR_REASON,
    VISIBILITY_CHANGE_EVENT,
)
from parcel_portal.core.enums import ErrorCode
from parcel_portal.domain.entities.auth import AuthResponse, AuthSession, AuthUser
from parcel_portal.domain.entities.session_state import SessionState
from parcel_portal.domain.enums import AuthChangeEvent, AuthState
from parcel_portal.domain.errors import AuthError
from parcel_portal.domain.protocols import (
    AuthBackendProtocol,
    AuthSubscription,
    ClientStateProtocol,
    InteractionSourceProtocol,
    LoggerProtocol,
)

AuthStateListener = Callable[[AuthState, AuthUser | None], None]


class AuthSessionController:
    """Sign-in/sign-out lifecycle with best-effort auditing."""

    def __init__(
        self,
        *,
        backend: AuthBackendProtocol,
        audit: AccessAuditLogger,
        tracker: SessionActivityTracker,
        session_state: SessionState,
        client_state: ClientStateProtocol,
        logger: LoggerProtocol,
        sign_out_on_hidden: bool = True,
    ) -> None:
        """Initialize controller with dependencies.

        Args:
            backend: Hosted auth backend.
            audit: Access audit logger.
            tracker: Inactivity tracker sharing `session_state`.
            session_state: Identity and activity clock.
            client_state: Local/session client storage.
            logger: Structured logger.
            sign_out_on_hidden: Sign out when the page becomes hidden.
        """
        self._backend = backend
        self._audit = audit
        self._tracker = tracker
        self._session_state = session_state
        self._client_state = client_state
        self._logger = logger
        self._sign_out_on_hidden = sign_out_on_hidden

        self._state = AuthState.LOADING
        self._listeners: list[AuthStateListener] = []
        self._subscription: AuthSubscription | None = None
        self._lifecycle_source: InteractionSourceProtocol | None = None
        self._audit_tasks: set[asyncio.Task[bool]] = set()

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is AuthState.LOADING

    @property
    def user(self) -> AuthUser | None:
        return self._session_state.current_user

    @property
    def session_id(self) -> str | None:
        return self._session_state.session_id

    @property
    def tracker(self) -> SessionActivityTracker:
        return self._tracker

    def add_listener(self, listener: AuthStateListener) -> None:
        """Register a listener told about every auth state change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Startup / teardown
    # ------------------------------------------------------------------

    async def initialize(self) -> AuthState:
        """Resume a persisted backend session and subscribe to auth changes.

        Loading ends exactly once; later calls return the current state.
        """
        if self._state is not AuthState.LOADING:
            return self._state

        if self._subscription is None:
            self._subscription = self._backend.on_auth_state_change(
                self._on_auth_change
            )

        session: AuthSession | None = None
        try:
            session = await self._backend.get_session()
        except Exception as e:
            self._logger.error("Could not resume auth session", error=e)

        if session is None or session.user is None:
            self._set_state(AuthState.ANONYMOUS)
            return self._state

        session_id = self._begin(session.user)
        self._logger.info("Auth session resumed", user_id=session.user.id)
        self._spawn_audit(
            self._audit.log_session_refresh(
                session.user.id,
                session.user.email,
                session_id,
                access_token=session.access_token,
            )
        )
        return self._state

    def attach_lifecycle(self, source: InteractionSourceProtocol) -> None:
        """Sign out on page close, and on hide when enabled."""
        self._lifecycle_source = source
        source.subscribe(BEFORE_UNLOAD_EVENT, self._on_before_unload)
        source.subscribe(VISIBILITY_CHANGE_EVENT, self._on_visibility_change)

    def detach_lifecycle(self) -> None:
        source = self._lifecycle_source
        if source is None:
            return
        source.unsubscribe(BEFORE_UNLOAD_EVENT, self._on_before_unload)
        source.unsubscribe(VISIBILITY_CHANGE_EVENT, self._on_visibility_change)
        self._lifecycle_source = None

    async def wait_for_audit(self) -> None:
        """Wait until every pending audit write has finished."""
        while self._audit_tasks:
            await asyncio.gather(*list(self._audit_tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Unsubscribe from the backend, stop tracking, drain audit writes."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.detach_lifecycle()
        await self._tracker.stop()
        await self.wait_for_audit()

    # ------------------------------------------------------------------
    # Auth operations
    # ------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> AuthResponse:
        """Sign in with email and password.

        Returns:
            The backend's AuthResponse unchanged, or an AUTH_SYSTEM_ERROR
            response if the backend call raised.
        """
        try:
            response = await self._backend.sign_in_with_password(email, password)
        except Exception as e:
            self._logger.error("Sign-in failed unexpectedly", error=e)
            self._spawn_audit(self._audit.log_failed_login(email, SYSTEM_ERROR_REASON))
            return AuthResponse(
                error=AuthError(
                    code=ErrorCode.AUTH_SYSTEM_ERROR,
                    message=str(e) or type(e).__name__,
                )
            )

        if response.error is not None:
            self._logger.info(
                "Sign-in rejected", error_code=response.error.code.value
            )
            self._spawn_audit(
                self._audit.log_failed_login(email, response.error.message)
            )
            return response

        user = response.data.user if response.data else None
        if user is None:
            return response

        session_id = self._begin(user)
        self._logger.info("User signed in", user_id=user.id)
        token = response.data.session.access_token if response.data.session else None
        self._spawn_audit(
            self._audit.log_login(user.id, user.email, session_id, access_token=token)
        )
        return response

    async def sign_out(self) -> AuthError | None:
        """Sign out. Safe to call repeatedly, including concurrently.

        Identity is captured and cleared before the first await, so an
        overlapping call (expiry poller racing a lifecycle hook) finds no
        user and writes no second logout row.

        Returns:
            The backend's sign-out error, if any. Local state is cleared
            either way.
        """
        user = self._session_state.current_user
        if user is not None:
            self._spawn_audit(
                self._audit.log_logout(
                    user.id,
                    user.email,
                    self._session_state.session_id,
                    access_token=self._backend.current_access_token(),
                )
            )
        self._session_state.clear()
        self._set_state(AuthState.ANONYMOUS)

        try:
            self._client_state.clear()
        except Exception as e:
            self._logger.warning(
                "Could not clear client state",
                error_type=type(e).__name__,
                error_message=str(e),
            )

        error: AuthError | None = None
        try:
            error = await self._backend.sign_out()
        except Exception as e:
            self._logger.error("Backend sign-out failed", error=e)
            error = AuthError(
                code=ErrorCode.AUTH_SIGN_OUT_FAILED,
                message=str(e) or type(e).__name__,
            )
        finally:
            await self._tracker.stop()

        if error is not None:
            self._logger.warning(
                "Backend sign-out reported an error", error_code=error.code.value
            )
        elif user is not None:
            self._logger.info("User signed out", user_id=user.id)
        return error

    async def sign_up(self, email: str, password: str) -> AuthResponse:
        """Register an account. Not audited."""
        try:
            return await self._backend.sign_up(email, password)
        except Exception as e:
            self._logger.error("Sign-up failed unexpectedly", error=e)
            return AuthResponse(
                error=AuthError(
                    code=ErrorCode.AUTH_SYSTEM_ERROR,
                    message=str(e) or type(e).__name__,
                )
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin(self, user: AuthUser) -> str:
        session_id = generate_session_id()
        self._session_state.begin(user, session_id)
        self._client_state.set(SESSION_ID_KEY, session_id, scope="session")
        self._set_state(AuthState.AUTHENTICATED)
        self._tracker.start(self.sign_out)
        return session_id

    def _on_auth_change(
        self, event: AuthChangeEvent, session: AuthSession | None
    ) -> None:
        # Backend notifications update identity only; no auditing here.
        user = session.user if session is not None else None
        self._session_state.current_user = user
        self._logger.debug("Auth state changed", auth_event=event.value)
        if self._state is AuthState.LOADING:
            return
        self._set_state(AuthState.AUTHENTICATED if user else AuthState.ANONYMOUS)

    async def _on_before_unload(self, **_payload: Any) -> None:
        await self.sign_out()

    async def _on_visibility_change(self, hidden: bool = False, **_payload: Any) -> None:
        if hidden and self._sign_out_on_hidden:
            await self.sign_out()

    def _spawn_audit(self, coro: Coroutine[Any, Any, bool]) -> None:
        task = asyncio.create_task(coro)
        self._audit_tasks.add(task)
        task.add_done_callback(self._audit_tasks.discard)

    def _set_state(self, state: AuthState) -> None:
        if state is self._state:
            return
        self._state = state
        user = self._session_state.current_user
        for listener in list(self._listeners):
            try:
                listener(state, user)
            except Exception as e:
                self._logger.warning(
                    "Auth state listener failed",
                    state=state.value,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
