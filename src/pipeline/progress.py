"""ProgressReporter — edits one status message on a timer until stopped.

Progress is time based: the backends expose no completion fraction, so the
reporter only signals liveness. It never reports 100% on its own; only
``complete()`` does, and that edit is always the last one.
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Optional

from src.bot_client import StatusChannel
from src.constants import (
    MSG_PROGRESS,
    MSG_PROGRESS_EDIT_FAILED,
    PROGRESS_BLOCKS,
    PROGRESS_CAP,
    PROGRESS_DONE,
    PROGRESS_EMPTY,
    PROGRESS_FILLED,
    PROGRESS_LONG_VOICE_SECONDS,
    PROGRESS_START,
    PROGRESS_STEP,
    PROGRESS_TICK_LONG,
    PROGRESS_TICK_SHORT,
)
from src.pipeline.models import ProgressState

module_logger = logging.getLogger(__name__)


class ReporterStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def tick_interval(duration_seconds: int) -> float:
    """Seconds between edits; longer voice messages are edited less often."""
    return PROGRESS_TICK_SHORT if duration_seconds <= PROGRESS_LONG_VOICE_SECONDS else PROGRESS_TICK_LONG


def render_progress(percent: int) -> str:
    filled = max(1, round(percent / 100 * PROGRESS_BLOCKS))
    return MSG_PROGRESS % (
        PROGRESS_FILLED * filled,
        PROGRESS_EMPTY * (PROGRESS_BLOCKS - filled),
        percent,
    )


class ProgressReporter:

    def __init__(
        self,
        channel: StatusChannel,
        message_handle: Any,
        interval: float,
        *,
        start_percent: int = PROGRESS_START,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._channel = channel
        self._interval = interval
        self._logger = logger or module_logger
        self.state = ProgressState(percent=start_percent, message_handle=message_handle)
        self.status = ReporterStatus.IDLE
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        match self.status:
            case ReporterStatus.IDLE:
                pass
            case _:
                return
        self.status = ReporterStatus.RUNNING
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._tick_loop(self._stop_event))

    async def stop(self) -> None:
        """Cancel future ticks. Safe to call repeatedly and before start()."""
        match self._stop_event:
            case None:
                pass
            case event:
                event.set()

        match self._task:
            case None:
                pass
            case task:
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
                self._task = None

        self._stop_event = None
        if self.status == ReporterStatus.RUNNING:
            self.status = ReporterStatus.CANCELLED

    async def complete(self) -> None:
        """Stop ticking, then show 100% as the final edit."""
        await self.stop()
        match self.status:
            case ReporterStatus.COMPLETED:
                return
            case _:
                pass
        self.state.percent = PROGRESS_DONE
        self.status = ReporterStatus.COMPLETED
        await self._edit(PROGRESS_DONE)

    async def _tick_loop(self, stop: asyncio.Event) -> None:
        while not stop.is_set():
            await asyncio.sleep(self._interval)
            if stop.is_set():
                return
            match self.state.percent:
                case p if p < PROGRESS_CAP:
                    self.state.percent = min(p + PROGRESS_STEP, PROGRESS_CAP)
                    await self._edit(self.state.percent)
                case _:
                    pass

    async def _edit(self, percent: int) -> None:
        try:
            await self._channel.edit_message(self.state.message_handle, render_progress(percent))
        except Exception as exc:
            self._logger.warning(MSG_PROGRESS_EDIT_FAILED, exc)
