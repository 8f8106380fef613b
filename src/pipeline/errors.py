"""Stage-scoped errors raised inside the voice pipeline.

Every error carries the stage it belongs to and a short ``cause`` tag; the
orchestrator turns them into a ``TranscriptionFailure`` and logs ``detail``.
"""
from enum import Enum
from typing import Optional

from src.constants import MSG_STAGE_TIMEOUT
from src.pipeline.models import Stage


class PipelineError(Exception):
    """Base class for failures the orchestrator maps to a user-facing reply."""

    stage: Stage = Stage.TRANSCRIBE
    cause: str = "error"

    @property
    def detail(self) -> str:
        return str(self)


class FetchError(PipelineError):
    """Raised when the voice file cannot be downloaded or written."""

    stage = Stage.FETCH
    cause = "fetch"

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ToolUnavailableError(PipelineError):
    """Raised when the transcoder executable is not on the search path."""

    stage = Stage.NORMALIZE
    cause = "tool_unavailable"


class NormalizeError(PipelineError):
    """Raised when the transcoder exits non-zero or cannot be launched."""

    stage = Stage.NORMALIZE
    cause = "normalize"

    def __init__(self, message: str, *, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr

    @property
    def detail(self) -> str:
        return f"{self}\n{self.stderr}" if self.stderr else str(self)


class BackendErrorKind(str, Enum):
    NETWORK = "network"
    API = "api"
    PROCESS = "process"


class BackendError(PipelineError):
    """Raised by transcription backends; ``kind`` tells transport, API and process failures apart."""

    stage = Stage.TRANSCRIBE

    def __init__(
        self,
        kind: BackendErrorKind,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.body = body
        self.stderr = stderr

    @property
    def cause(self) -> str:
        return self.kind.value

    @property
    def detail(self) -> str:
        parts = [str(self)]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.body:
            parts.append(f"body={self.body}")
        if self.stderr:
            parts.append(f"stderr={self.stderr}")
        return " ".join(parts)


class StageTimeoutError(PipelineError):
    """Raised when a stage exceeds its deadline."""

    cause = "timeout"

    def __init__(self, stage: Stage, timeout: float) -> None:
        super().__init__(MSG_STAGE_TIMEOUT % (stage.value, timeout))
        self.stage = stage
        self.timeout = timeout


class UnexpectedStageError(PipelineError):
    """Wraps any other exception escaping a stage, tagged with that stage."""

    cause = "error"

    def __init__(self, stage: Stage, error: Exception) -> None:
        super().__init__(f"{type(error).__name__}: {error}")
        self.stage = stage
