"""
Speech recognition adapter contract.

This module defines the *interface only*. No retries, timers, or
orchestration decisions live here.

Key invariants:
- Run IDs are owned by the reducer. Adapters never generate or mutate them.
- Every start() opens a fresh engine handle; handles are never reused.
- The adapter emits recognition events; it does not call the reducer or
  make state transitions.
- After abort(run_id), no further callbacks for that run may be delivered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orchestrator.commands import RecognitionConfig


class RecognitionAdapter(ABC):
    """
    Abstract interface for a single-shot speech recognition engine.

    Note: emit_event callback must be async.

    Implementations are responsible for:
    - Opening one engine handle per run_id with the given configuration
    - Producing RecognitionStarted / RecognitionResult / RecognitionError /
      RecognitionEnded events for that run_id
    - Supporting graceful stop and hard abort

    Non-responsibilities:
    - No state machine logic (IDLE/LISTENING/PROCESSING)
    - No retry policy
    - No timers owned by the reducer
    """

    @abstractmethod
    async def start(self, run_id: int, config: RecognitionConfig) -> None:
        """Open a fresh recognition handle for run_id."""
        raise NotImplementedError

    @abstractmethod
    async def stop(self, run_id: int) -> None:
        """
        Gracefully stop the handle for run_id.

        The engine may still deliver a final result and ``onend``.
        Idempotent; a no-op for unknown runs.
        """
        raise NotImplementedError

    @abstractmethod
    async def abort(self, run_id: int) -> None:
        """
        Hard abort of the handle for run_id.

        Contract:
        - No further events for run_id are emitted after this call.
        - Idempotent; a no-op for unknown runs.
        """
        raise NotImplementedError
