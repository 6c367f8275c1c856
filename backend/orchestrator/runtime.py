"""
Runtime execution shell for a single voice navigation session.

Responsibilities:
- Own reducer state
- Call pure reducer
- Execute commands with side effects (recognition, speech, client effects)
- Run command resolution off the event path
- Schedule and cancel timers, retries and delayed navigations
- Convert timer expiry into events
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from orchestrator.reducer import TIMER_RECOGNITION_RETRY, reduce
from orchestrator.commands import (
    AbortRecognition,
    CancelAllTimers,
    CancelTimer,
    Command,
    LogEvent,
    Navigate,
    PublishState,
    ResolveCommand,
    ScheduleRetry,
    ShowToast,
    Speak,
    StartRecognition,
    StartTimer,
    StopRecognition,
    StorePendingRedirect,
)
from orchestrator.events import (
    CommandResolved,
    Event,
    EventType,
    ListenTimeout,
    ProcessingReset,
    RetryReady,
)
from orchestrator.state_dataclass import VoiceNavState

from observability.logger import log_event, now_ms


if TYPE_CHECKING:
    from orchestrator.runtime_context import RuntimeExecutionContext


SleepFn = Callable[[float], Awaitable[None]]

TASK_NAVIGATE = "navigate"
TASK_RESOLVE = "resolve"


class Runtime:
    """
    Runtime execution boundary for a single voice session.

    Responsibilities:
    - Own the authoritative reducer state
    - Act as the universal event sink for the session
      (gateway events, recognition callbacks, timer events, dispatch results)
    - Invoke the pure reducer deterministically
    - Execute emitted commands with side effects
    - Schedule and cancel timers
    - Convert timer expiry into events

    Guarantees:
    - Reducer is always called exactly once per incoming event
    - State is swapped before any side effects execute
    - Runtime never performs orchestration logic itself
    - Timers and dispatch results re-enter handle_event (single entry point)
    - Every delay goes through the injected sleep function
    """

    def __init__(
        self,
        *,
        initial_state: VoiceNavState,
        context: RuntimeExecutionContext,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._state = initial_state
        self._ctx = context
        self._sleep = sleep
        self._timers: dict[str, asyncio.Task[None]] = {}

    @property
    def state(self) -> VoiceNavState:
        """
        Return the current immutable reducer state.

        State is only replaced internally by Runtime via the reducer.
        Consumers must never modify it.
        """
        return self._state

    @property
    def active_timer_ids(self) -> frozenset[str]:
        """Ids of timers and background tasks that have not finished yet."""
        return frozenset(
            timer_id for timer_id, task in self._timers.items() if not task.done()
        )

    async def handle_event(self, event: Event) -> None:
        """
        Process a single event through the reducer pipeline.

        Processing steps:
        1. Pass the current state and event to the pure reducer
        2. Swap in the new state
        3. Execute all emitted commands sequentially, in emitted order

        All event sources converge here:
        - Gateway (user control, session lifecycle, recognition callbacks)
        - Timers (listen timeout, processing reset, retry delay)
        - Dispatch tasks (CommandResolved)
        """
        new_state, commands = reduce(self._state, event)
        self._state = new_state

        for cmd in commands:
            await self._execute_command(cmd)

    async def shutdown(self) -> None:
        """
        Cancel all in-flight timers and background tasks and wait for them.

        Called by gateway on session teardown.
        """
        tasks = [task for task in self._timers.values() if not task.done()]
        for timer_id in list(self._timers.keys()):
            self._cancel_timer(timer_id)

        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Command execution (side effects)
    # ------------------------------------------------------------------

    async def _execute_command(self, cmd: Command) -> None:
        """Execute a single command with side effects."""

        if isinstance(cmd, LogEvent):
            log_event({
                **cmd.event,
                "session_id": self._ctx.session_id,
            })

        elif isinstance(cmd, StartRecognition):
            assert self._ctx.recognizer is not None, "Recognition adapter missing"
            await self._ctx.recognizer.start(cmd.run_id, cmd.config)
            log_event({
                "ts_ms": now_ms(),
                "event_type": "RECOGNITION_START_EXECUTED",
                "session_id": self._ctx.session_id,
                "run_id": cmd.run_id,
                "config": cmd.config.to_payload(),
            })

        elif isinstance(cmd, StopRecognition):
            assert self._ctx.recognizer is not None, "Recognition adapter missing"
            await self._ctx.recognizer.stop(cmd.run_id)

        elif isinstance(cmd, AbortRecognition):
            assert self._ctx.recognizer is not None, "Recognition adapter missing"
            await self._ctx.recognizer.abort(cmd.run_id)

        elif isinstance(cmd, ResolveCommand):
            self._start_resolution(run_id=cmd.run_id, transcript=cmd.transcript)

        elif isinstance(cmd, Speak):
            assert self._ctx.synthesizer is not None, "Speech synthesizer missing"
            await self._ctx.synthesizer.speak(cmd.text, cmd.language)

        elif isinstance(cmd, Navigate):
            self._schedule_navigation(path=cmd.path, delay_ms=cmd.delay_ms)

        elif isinstance(cmd, StorePendingRedirect):
            assert self._ctx.client is not None, "Client bridge missing"
            await self._ctx.client.store_pending_redirect(cmd.path)

        elif isinstance(cmd, ShowToast):
            assert self._ctx.client is not None, "Client bridge missing"
            await self._ctx.client.show_toast(cmd.severity, cmd.title, cmd.description)

        elif isinstance(cmd, PublishState):
            assert self._ctx.client is not None, "Client bridge missing"
            await self._ctx.client.publish_state(cmd.state, cmd.run_id)

        elif isinstance(cmd, StartTimer):
            self._start_timer(
                timer_id=cmd.timer_id,
                duration_ms=cmd.duration_ms,
                timeout_event_type=cmd.timeout_event_type,
                run_id=cmd.run_id,
            )

        elif isinstance(cmd, CancelTimer):
            self._cancel_timer(cmd.timer_id)

        elif isinstance(cmd, CancelAllTimers):
            for timer_id in list(self._timers.keys()):
                self._cancel_timer(timer_id)

        elif isinstance(cmd, ScheduleRetry):
            self._schedule_retry(run_id=cmd.run_id, delay_ms=cmd.delay_ms)

        else:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "COMMAND_NOT_HANDLED",
                "session_id": self._ctx.session_id,
                "command_type": type(cmd).__name__,
            })

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _start_resolution(self, *, run_id: int, transcript: str) -> None:
        """
        Resolve a transcript in the background.

        The result re-enters handle_event as CommandResolved. The reducer
        drops it if run_id is no longer current.
        """
        dispatcher = self._ctx.dispatcher
        assert dispatcher is not None, "Dispatcher missing"

        async def _resolve_task() -> None:
            try:
                outcome = await dispatcher.resolve(transcript)
            except asyncio.CancelledError:
                return
            except Exception as exc:  # pylint: disable=broad-exception-caught
                log_event({
                    "ts_ms": now_ms(),
                    "event_type": "RESOLVE_FAILED",
                    "session_id": self._ctx.session_id,
                    "run_id": run_id,
                    "exception": type(exc).__name__,
                    "message": str(exc),
                })
                return

            await self.handle_event(
                CommandResolved(
                    event_type=EventType.COMMAND_RESOLVED,
                    ts_ms=now_ms(),
                    run_id=run_id,
                    outcome=outcome,
                )
            )

        self._spawn(TASK_RESOLVE, _resolve_task())

    def _schedule_navigation(self, *, path: str, delay_ms: int) -> None:
        """Push path to the client router after delay_ms (replaces pending)."""
        client = self._ctx.client
        assert client is not None, "Client bridge missing"

        async def _navigate_task() -> None:
            try:
                if delay_ms > 0:
                    await self._sleep(delay_ms / 1000.0)
                await client.navigate(path)
            except asyncio.CancelledError:
                return

            log_event({
                "ts_ms": now_ms(),
                "event_type": "NAVIGATE_EXECUTED",
                "session_id": self._ctx.session_id,
                "path": path,
                "delay_ms": delay_ms,
            })

        self._spawn(TASK_NAVIGATE, _navigate_task())

    # ------------------------------------------------------------------
    # Timer management
    # ------------------------------------------------------------------

    def _start_timer(
        self,
        *,
        timer_id: str,
        duration_ms: int,
        timeout_event_type: EventType,
        run_id: int,
    ) -> None:
        """
        Start or replace a timer that emits a timeout event.

        Timer tasks re-enter handle_event() when they expire,
        maintaining the single event entry point invariant.
        """

        async def _timer_task() -> None:
            try:
                await self._sleep(duration_ms / 1000.0)

                event = self._construct_timeout_event(
                    timeout_event_type=timeout_event_type,
                    run_id=run_id,
                )

                await self.handle_event(event)

            except asyncio.CancelledError:
                # Timer was cancelled - this is normal
                return

        self._spawn(timer_id, _timer_task())

    def _schedule_retry(self, *, run_id: int, delay_ms: int) -> None:
        """
        Schedule a recognition retry.

        Semantic sugar over a timer that emits RetryReady for the fresh run.
        """

        async def _retry_task() -> None:
            try:
                await self._sleep(delay_ms / 1000.0)

                await self.handle_event(
                    RetryReady(
                        event_type=EventType.RETRY_READY,
                        ts_ms=now_ms(),
                        run_id=run_id,
                    )
                )

            except asyncio.CancelledError:
                return

        self._spawn(TIMER_RECOGNITION_RETRY, _retry_task())

    def _spawn(self, timer_id: str, coro: Awaitable[None]) -> None:
        # Replace any task already registered under this id
        self._cancel_timer(timer_id)
        self._timers[timer_id] = asyncio.ensure_future(coro)

    def _cancel_timer(self, timer_id: str) -> None:
        """
        Cancel an in-flight timer if it exists.

        Idempotent: safe to call even if timer doesn't exist. A task never
        cancels itself while it is delivering its own event.
        """
        task = self._timers.pop(timer_id, None)
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            return
        task.cancel()

    @staticmethod
    def _construct_timeout_event(
        *,
        timeout_event_type: EventType,
        run_id: int,
    ) -> Event:
        """
        Construct the timeout event for an expired timer.

        The run_id captured at StartTimer time lets the reducer drop
        timeouts that belong to an earlier recognition handle.
        """
        ts = now_ms()

        if timeout_event_type is EventType.LISTEN_TIMEOUT:
            return ListenTimeout(
                event_type=EventType.LISTEN_TIMEOUT,
                ts_ms=ts,
                run_id=run_id,
            )

        if timeout_event_type is EventType.PROCESSING_RESET:
            return ProcessingReset(
                event_type=EventType.PROCESSING_RESET,
                ts_ms=ts,
                run_id=run_id,
            )

        # This should never happen if reducer is correct
        raise ValueError(f"Unknown timeout event type: {timeout_event_type}")
