"""Session inactivity tracker.

Ends idle sessions. Two independent pollers run for the authenticated
lifetime of a session:

- Warning check (every 30 s): when the remaining idle allowance drops to the
  warning window, enter WARNING and report the minutes left (rounded up).
- Expiry check (every 60 s): when the idle time exceeds the timeout, enter
  EXPIRED and sign the user out. This check does not depend on the warning
  state, so it still fires if interaction events were never delivered.

Any tracked interaction ("mousedown", "mousemove", "keypress", "scroll",
"touchstart", "click") resets the activity clock immediately and clears a
pending warning.

Lifetime:
    start(sign_out) attaches the interaction handlers and spawns both poll
    tasks; stop() detaches and cancels them. stop() may be called from the
    expiry task itself (sign-out stops the tracker) and will not cancel the
    task it runs in.
"""

import asyncio
import inspect
import math
from collections.abc import Awaitable, Callable, Coroutine
from datetime import UTC, datetime, timedelta
from typing import Any

from parcel_portal.core.constants import (
    LAST_ACTIVITY_KEY,
    TRACKED_INTERACTION_EVENTS,
)
from parcel_portal.domain.entities.session_state import SessionState
from parcel_portal.domain.enums import ActivityState
from parcel_portal.domain.protocols import (
    ClientStateProtocol,
    InteractionSourceProtocol,
    LoggerProtocol,
)

Clock = Callable[[], datetime]
SignOutCallback = Callable[[], Awaitable[Any]]
ActivityListener = Callable[[ActivityState, int | None], None]
"""Called with the new state and the minutes left (WARNING only)."""


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SessionActivityTracker:
    """Inactivity state machine: ACTIVE, WARNING, EXPIRED.

    Attributes:
        timeout: Idle time after which the session expires.
        warning_time: Lead time of the expiry warning.
    """

    def __init__(
        self,
        *,
        session_state: SessionState,
        client_state: ClientStateProtocol,
        interactions: InteractionSourceProtocol,
        logger: LoggerProtocol,
        timeout: timedelta = timedelta(minutes=30),
        warning_time: timedelta = timedelta(minutes=5),
        warning_interval: float = 30.0,
        expiry_interval: float = 60.0,
        clock: Clock | None = None,
    ) -> None:
        """Initialize tracker.

        Args:
            session_state: Shared identity and activity clock.
            client_state: Receives the `lastActivity` mirror (epoch ms).
            interactions: Source of tracked interaction events.
            logger: Logger for transitions and sign-out failures.
            timeout: Idle time after which the session expires.
            warning_time: Lead time of the expiry warning.
            warning_interval: Seconds between warning checks.
            expiry_interval: Seconds between expiry checks.
            clock: Returns the current UTC time (injectable for tests).
        """
        self.timeout = timeout
        self.warning_time = warning_time
        self._session_state = session_state
        self._client_state = client_state
        self._interactions = interactions
        self._logger = logger
        self._warning_interval = warning_interval
        self._expiry_interval = expiry_interval
        self._clock = clock or _utc_now

        self._state = ActivityState.ACTIVE
        self._time_left_minutes: int | None = None
        self._listeners: list[ActivityListener] = []
        self._sign_out: SignOutCallback | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._running = False

    @property
    def state(self) -> ActivityState:
        return self._state

    @property
    def time_left_minutes(self) -> int | None:
        """Minutes left before expiry while in WARNING, otherwise None."""
        return self._time_left_minutes

    @property
    def is_running(self) -> bool:
        return self._running

    def add_listener(self, listener: ActivityListener) -> None:
        """Register a state listener (e.g. the warning banner)."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ActivityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def start(self, sign_out: SignOutCallback) -> None:
        """Attach interaction handlers and spawn both pollers.

        Restarting an already running tracker only replaces the sign-out
        callback.

        Args:
            sign_out: Coroutine function invoked on expiry.
        """
        self._sign_out = sign_out
        if self._running:
            return

        self._running = True
        self._set_state(ActivityState.ACTIVE, None)
        for event_name in TRACKED_INTERACTION_EVENTS:
            self._interactions.subscribe(event_name, self.record_activity)

        self._spawn(self._poll(self._warning_interval, self.check_warning))
        self._spawn(self._poll(self._expiry_interval, self.check_expiry))
        self._logger.debug(
            "Inactivity tracking started",
            timeout_minutes=self.timeout.total_seconds() / 60,
        )

    async def stop(self) -> None:
        """Detach interaction handlers and cancel the pollers. Idempotent."""
        if not self._running and not self._tasks:
            return

        self._running = False
        for event_name in TRACKED_INTERACTION_EVENTS:
            self._interactions.unsubscribe(event_name, self.record_activity)

        current = asyncio.current_task()
        cancelled = [task for task in self._tasks if task is not current]
        for task in cancelled:
            task.cancel()
        if cancelled:
            await asyncio.gather(*cancelled, return_exceptions=True)
        self._logger.debug("Inactivity tracking stopped")

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _poll(
        self, interval: float, check: Callable[[], Any]
    ) -> None:
        while self._running:
            await asyncio.sleep(interval)
            if not self._running:
                return
            try:
                outcome = check()
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                self._logger.error(
                    "Inactivity check failed",
                    error=e,
                    check=getattr(check, "__name__", repr(check)),
                )

    # ------------------------------------------------------------------
    # Activity
    # ------------------------------------------------------------------

    def record_activity(self, *_args: Any, **_payload: Any) -> None:
        """Interaction handler: reset the activity clock, clear a warning."""
        now = self._session_state.touch(self._clock())
        self._client_state.set(LAST_ACTIVITY_KEY, str(int(now.timestamp() * 1000)))
        if self._state is ActivityState.WARNING:
            self._set_state(ActivityState.ACTIVE, None)

    def extend_session(self) -> None:
        """Explicit "stay logged in" from the warning banner."""
        self.record_activity()
        self._logger.info("Session extended by user")

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _idle_time(self) -> timedelta | None:
        if not self._session_state.is_authenticated:
            return None
        last_activity = self._session_state.last_activity_at
        if last_activity is None:
            return None
        return self._clock() - last_activity

    def check_warning(self) -> ActivityState:
        """Warning poll: enter or leave WARNING.

        WARNING holds while `0 < timeout - idle <= warning_time`; the minutes
        left are rounded up.

        Returns:
            The state after the check.
        """
        if self._state is ActivityState.EXPIRED:
            return self._state

        idle = self._idle_time()
        if idle is None:
            if self._state is ActivityState.WARNING:
                self._set_state(ActivityState.ACTIVE, None)
            return self._state

        remaining = self.timeout - idle
        if timedelta(0) < remaining <= self.warning_time:
            minutes_left = math.ceil(remaining.total_seconds() / 60)
            if (
                self._state is not ActivityState.WARNING
                or minutes_left != self._time_left_minutes
            ):
                self._set_state(ActivityState.WARNING, minutes_left)
        elif self._state is ActivityState.WARNING:
            self._set_state(ActivityState.ACTIVE, None)
        return self._state

    async def check_expiry(self) -> bool:
        """Expiry poll: sign out once idle time exceeds the timeout.

        Sign-out failures are logged, not raised.

        Returns:
            True if the session expired during this check.
        """
        idle = self._idle_time()
        if idle is None or idle <= self.timeout:
            return False

        self._logger.info(
            "Session timed out due to inactivity",
            idle_seconds=int(idle.total_seconds()),
        )
        self._set_state(ActivityState.EXPIRED, None)

        if self._sign_out is None:
            self._logger.warning("Session expired with no sign-out handler")
            return True

        try:
            await self._sign_out()
        except Exception as e:
            self._logger.warning(
                "Sign-out after inactivity failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
        return True

    def _set_state(self, state: ActivityState, minutes_left: int | None) -> None:
        self._state = state
        self._time_left_minutes = minutes_left
        for listener in list(self._listeners):
            try:
                listener(state, minutes_left)
            except Exception as e:
                self._logger.warning(
                    "Activity listener failed",
                    state=state.value,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
