"""
Pure voice navigation reducer.

(state, event) -> (new_state, commands)

Rules:
- Pure: no side effects, no IO, no clocks.
- Deterministic: output depends only on inputs.
- Total: every (state, event) pair is handled or explicitly ignored (logged).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from constants import LISTEN_TIMEOUT_MS, PROCESSING_RESET_DELAY_MS
from navigation.auth_gate import OutcomeKind
from navigation.messages import (
    LISTEN_TIMEOUT_TEXT,
    LISTEN_TIMEOUT_TITLE,
    NETWORK_EXHAUSTED_TEXT,
    NO_SPEECH_TEXT,
    NO_SPEECH_TITLE,
    NOT_FOUND_TITLE,
    UNSUPPORTED_TEXT,
    UNSUPPORTED_TITLE,
    VOICE_ERROR_TITLE,
    not_found_toast_text,
)
from orchestrator.commands import (
    AbortRecognition,
    CancelAllTimers,
    CancelTimer,
    Command,
    LogEvent,
    Navigate,
    PublishState,
    RecognitionConfig,
    ResolveCommand,
    ScheduleRetry,
    ShowToast,
    Speak,
    StartRecognition,
    StartTimer,
    StopRecognition,
    StorePendingRedirect,
)
from orchestrator.enums.state import State
from orchestrator.events import (
    CommandResolved,
    Event,
    EventType,
    ListenTimeout,
    MicStop,
    MicToggle,
    ProcessingReset,
    RecognitionEnded,
    RecognitionError,
    RecognitionResult,
    RecognitionStarted,
    RetryReady,
    RunEvent,
    SessionEnd,
    SessionStarted,
)
from orchestrator.retry import (
    ErrorClass,
    classify_error,
    error_message,
    get_retry_delay_ms,
    next_attempt,
    reset_attempt,
    should_retry,
)
from orchestrator.state_dataclass import VoiceNavState


# =============================================================================
# Timer IDs
# =============================================================================

TIMER_LISTEN = "listen_timeout"
TIMER_PROCESSING_RESET = "processing_reset"
TIMER_RECOGNITION_RETRY = "retry:recognition"


# =============================================================================
# Small helpers
# =============================================================================

def _log(
    state: VoiceNavState,
    event: Event,
    decision: str,
    details: dict[str, Any] | None = None,
) -> LogEvent:
    return LogEvent(
        event={
            "ts_ms": event.ts_ms,
            "state": state.state.value,
            "event_type": event.event_type.value,
            "decision": decision,
            "run_id": state.run_id,
            "retry_attempt": state.retry_attempt.attempt,
            "details": details or {},
        }
    )


def _logs_last(commands: tuple[Command, ...]) -> tuple[Command, ...]:
    """Keep side effects first, then logs, then state_changed logs."""
    non_logs: list[Command] = []
    logs: list[Command] = []
    state_change_logs: list[Command] = []

    for command in commands:
        if isinstance(command, LogEvent):
            if command.event.get("decision") == "state_changed":
                state_change_logs.append(command)
            else:
                logs.append(command)
        else:
            non_logs.append(command)

    return tuple(non_logs + logs + state_change_logs)


def _ignore(
    state: VoiceNavState, event: Event, reason: str
) -> tuple[VoiceNavState, tuple[Command, ...]]:
    return state, (_log(state, event, "ignore", {"reason": reason}),)


def _is_stale(state: VoiceNavState, event: RunEvent) -> bool:
    return event.run_id != state.run_id


def _transition(
    prev: VoiceNavState,
    new_state: VoiceNavState,
    event: Event,
    source: str,
    cmds: list[Command],
) -> tuple[VoiceNavState, tuple[Command, ...]]:
    """Attach state_changed log + client mirror when the control state moves."""
    if prev.state is not new_state.state:
        cmds.append(PublishState(state=new_state.state.value, run_id=new_state.run_id))
        cmds.append(
            _log(
                new_state,
                event,
                "state_changed",
                {
                    "from_state": prev.state.value,
                    "to_state": new_state.state.value,
                    "source": source,
                },
            )
        )
    return new_state, _logs_last(tuple(cmds))


def _to_idle(state: VoiceNavState, **changes: Any) -> VoiceNavState:
    """Terminal reset: IDLE, retry counter cleared, no pending retry."""
    return replace(
        state,
        state=State.IDLE,
        retry_attempt=reset_attempt(),
        retry_pending=False,
        **changes,
    )


def _listen_timer(run_id: int) -> StartTimer:
    return StartTimer(
        timer_id=TIMER_LISTEN,
        duration_ms=LISTEN_TIMEOUT_MS,
        timeout_event_type=EventType.LISTEN_TIMEOUT,
        run_id=run_id,
    )


def _stop_listening(
    state: VoiceNavState, event: Event, source: str
) -> tuple[VoiceNavState, tuple[Command, ...]]:
    new_state = _to_idle(state)
    cmds: list[Command] = [
        StopRecognition(run_id=state.run_id),
        CancelTimer(timer_id=TIMER_LISTEN),
        CancelTimer(timer_id=TIMER_RECOGNITION_RETRY),
        _log(new_state, event, "stop_listening", {"source": source}),
    ]
    return _transition(state, new_state, event, source, cmds)


# =============================================================================
# Reducer entrypoint
# =============================================================================

def reduce(
    state: VoiceNavState, event: Event
) -> tuple[VoiceNavState, tuple[Command, ...]]:
    """
    Pure reducer for the voice navigation state machine.

    Given the current state and a single event, returns:
    - the next state
    - a tuple of commands describing required side effects

    Properties:
    - Deterministic: no IO, clocks, or randomness
    - Total: every (state, event) pair is handled or explicitly ignored
    - Version-safe: ignores events with stale run IDs
    """
    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    if isinstance(event, SessionStarted):
        new_state = replace(state, recognition_supported=event.recognition_supported)
        cmds: list[Command] = [
            _log(
                new_state,
                event,
                "session_started",
                {
                    "session_id": event.session_id,
                    "recognition_supported": event.recognition_supported,
                },
            ),
        ]
        if not event.recognition_supported:
            cmds.insert(0, ShowToast(
                severity="destructive",
                title=UNSUPPORTED_TITLE,
                description=UNSUPPORTED_TEXT,
            ))
        return new_state, _logs_last(tuple(cmds))

    if isinstance(event, SessionEnd):
        new_state = _to_idle(state, awaiting_resolution=False)
        cmds = []
        if state.state is State.LISTENING:
            cmds.append(AbortRecognition(run_id=state.run_id))
        cmds.append(CancelAllTimers())
        cmds.append(_log(new_state, event, "session_end", {"reason": event.reason}))
        return _transition(state, new_state, event, "session_end", cmds)

    # ------------------------------------------------------------------
    # User control
    # ------------------------------------------------------------------
    if isinstance(event, MicToggle):
        if not state.recognition_supported:
            return _ignore(state, event, "recognition_unsupported")

        if state.state is State.LISTENING:
            return _stop_listening(state, event, "toggle")

        if state.state is State.PROCESSING:
            return _ignore(state, event, "processing_in_progress")

        run_id = state.run_id + 1
        new_state = replace(
            state,
            state=State.LISTENING,
            run_id=run_id,
            retry_attempt=reset_attempt(),
            retry_pending=False,
            awaiting_resolution=False,
            last_error=None,
        )
        cmds = [
            StartRecognition(
                run_id=run_id,
                config=RecognitionConfig(lang=state.recognition_locale),
            ),
            _listen_timer(run_id),
            _log(new_state, event, "idle_to_listening", {"run_id": run_id}),
        ]
        return _transition(state, new_state, event, "mic_toggle", cmds)

    if isinstance(event, MicStop):
        if state.state is not State.LISTENING:
            return _ignore(state, event, "noop_not_listening")
        return _stop_listening(state, event, "mic_stop")

    # ------------------------------------------------------------------
    # Recognition callbacks
    # ------------------------------------------------------------------
    if isinstance(event, RecognitionStarted):
        if _is_stale(state, event):
            return _ignore(state, event, "recognition_started_stale")
        return state, (_log(state, event, "recognition_started"),)

    if isinstance(event, RecognitionResult):
        if _is_stale(state, event):
            return _ignore(state, event, "recognition_result_stale")
        if state.state is not State.LISTENING:
            return _ignore(state, event, "recognition_result_not_listening")

        transcript = event.transcript.strip()

        if not transcript:
            new_state = _to_idle(state)
            cmds = [
                CancelTimer(timer_id=TIMER_LISTEN),
                ShowToast(
                    severity="destructive",
                    title=NO_SPEECH_TITLE,
                    description=NO_SPEECH_TEXT,
                ),
                _log(new_state, event, "empty_transcript"),
            ]
            return _transition(state, new_state, event, "empty_transcript", cmds)

        new_state = replace(
            state,
            state=State.PROCESSING,
            awaiting_resolution=True,
            retry_attempt=reset_attempt(),
            retry_pending=False,
        )
        cmds = [
            CancelTimer(timer_id=TIMER_LISTEN),
            ResolveCommand(run_id=state.run_id, transcript=transcript),
            StartTimer(
                timer_id=TIMER_PROCESSING_RESET,
                duration_ms=PROCESSING_RESET_DELAY_MS,
                timeout_event_type=EventType.PROCESSING_RESET,
                run_id=state.run_id,
            ),
            _log(new_state, event, "transcript_received", {"transcript": transcript}),
        ]
        return _transition(state, new_state, event, "recognition_result", cmds)

    if isinstance(event, RecognitionError):
        if _is_stale(state, event):
            return _ignore(state, event, "recognition_error_stale")
        if state.state is not State.LISTENING:
            return _ignore(state, event, "recognition_error_not_listening")

        error_class = classify_error(event.error_code)

        if should_retry(error_class=error_class, attempt=state.retry_attempt):
            attempt = next_attempt(state.retry_attempt)
            run_id = state.run_id + 1
            new_state = replace(
                state,
                run_id=run_id,
                retry_attempt=attempt,
                retry_pending=True,
                last_error=event.error_code,
            )
            return new_state, _logs_last((
                AbortRecognition(run_id=state.run_id),
                CancelTimer(timer_id=TIMER_LISTEN),
                ScheduleRetry(
                    run_id=run_id,
                    delay_ms=get_retry_delay_ms(attempt=attempt),
                ),
                _log(
                    new_state,
                    event,
                    "schedule_retry",
                    {
                        "error_code": event.error_code,
                        "failed_run_id": state.run_id,
                        "attempt": attempt.attempt,
                    },
                ),
            ))

        if error_class is ErrorClass.NETWORK:
            description = NETWORK_EXHAUSTED_TEXT
            decision = "retries_exhausted"
        else:
            description = error_message(error_class)
            decision = "recognition_error"

        new_state = _to_idle(state, last_error=event.error_code)
        cmds = [
            CancelTimer(timer_id=TIMER_LISTEN),
            ShowToast(
                severity="destructive",
                title=VOICE_ERROR_TITLE,
                description=description,
            ),
            _log(
                new_state,
                event,
                decision,
                {
                    "error_code": event.error_code,
                    "error_class": error_class.value,
                    "attempts": state.retry_attempt.attempt + 1,
                },
            ),
        ]
        return _transition(state, new_state, event, decision, cmds)

    if isinstance(event, RecognitionEnded):
        if _is_stale(state, event):
            return _ignore(state, event, "recognition_ended_stale")
        if state.state is not State.LISTENING or state.retry_pending:
            return state, (_log(state, event, "recognition_ended"),)

        new_state = _to_idle(state)
        cmds = [
            CancelTimer(timer_id=TIMER_LISTEN),
            _log(new_state, event, "ended_without_result"),
        ]
        return _transition(state, new_state, event, "recognition_ended", cmds)

    # ------------------------------------------------------------------
    # Retry
    # ------------------------------------------------------------------
    if isinstance(event, RetryReady):
        if _is_stale(state, event):
            return _ignore(state, event, "retry_stale")
        if state.state is not State.LISTENING or not state.retry_pending:
            return _ignore(state, event, "retry_not_pending")

        new_state = replace(state, retry_pending=False)
        return new_state, _logs_last((
            StartRecognition(
                run_id=state.run_id,
                config=RecognitionConfig.minimal(lang=state.recognition_locale),
            ),
            _listen_timer(state.run_id),
            _log(
                new_state,
                event,
                "retry_start",
                {"attempt": state.retry_attempt.attempt},
            ),
        ))

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------
    if isinstance(event, ListenTimeout):
        if _is_stale(state, event):
            return _ignore(state, event, "listen_timeout_stale")
        if state.state is not State.LISTENING:
            return _ignore(state, event, "listen_timeout_not_listening")

        new_state = _to_idle(state, last_error="listen_timeout")
        cmds = [
            AbortRecognition(run_id=state.run_id),
            CancelTimer(timer_id=TIMER_RECOGNITION_RETRY),
            ShowToast(
                severity="info",
                title=LISTEN_TIMEOUT_TITLE,
                description=LISTEN_TIMEOUT_TEXT,
            ),
            _log(new_state, event, "listen_timeout"),
        ]
        return _transition(state, new_state, event, "listen_timeout", cmds)

    if isinstance(event, ProcessingReset):
        if _is_stale(state, event):
            return _ignore(state, event, "processing_reset_stale")
        if state.state is not State.PROCESSING:
            return _ignore(state, event, "processing_reset_not_processing")

        new_state = _to_idle(state, awaiting_resolution=False)
        return _transition(
            state,
            new_state,
            event,
            "processing_reset",
            [_log(new_state, event, "processing_to_idle")],
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    if isinstance(event, CommandResolved):
        if _is_stale(state, event) or not state.awaiting_resolution:
            return _ignore(state, event, "command_resolved_stale")

        outcome = event.outcome
        new_state = replace(state, awaiting_resolution=False)
        details = {
            "outcome": outcome.kind.value,
            "keyword": outcome.keyword,
            "path": outcome.path,
        }

        if outcome.kind is OutcomeKind.LOGIN_REDIRECT:
            assert outcome.path is not None and outcome.pending_redirect is not None
            cmds = [
                StorePendingRedirect(path=outcome.pending_redirect),
                Speak(text=outcome.spoken_text, language=outcome.language),
                Navigate(path=outcome.path, delay_ms=outcome.delay_ms),
                _log(new_state, event, "login_redirect", details),
            ]
        elif outcome.kind is OutcomeKind.NAVIGATE:
            assert outcome.path is not None
            cmds = [
                Speak(text=outcome.spoken_text, language=outcome.language),
                Navigate(path=outcome.path, delay_ms=outcome.delay_ms),
                _log(new_state, event, "navigate", details),
            ]
        else:
            cmds = [
                Speak(text=outcome.spoken_text, language=outcome.language),
                ShowToast(
                    severity="info",
                    title=NOT_FOUND_TITLE,
                    description=not_found_toast_text(outcome.keyword),
                ),
                _log(new_state, event, "not_found", details),
            ]

        return new_state, _logs_last(tuple(cmds))

    return _ignore(state, event, "unhandled_event")
