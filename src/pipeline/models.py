"""Value types flowing through one voice transcription run."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class Stage(str, Enum):
    FETCH = "fetch"
    NORMALIZE = "normalize"
    TRANSCRIBE = "transcribe"


class ArtifactKind(str, Enum):
    RAW_INPUT = "raw_input"
    NORMALIZED_OUTPUT = "normalized_output"


@dataclass(frozen=True)
class VoiceSubmission:
    source_reference: str
    estimated_duration_seconds: int

    def __post_init__(self) -> None:
        if self.estimated_duration_seconds < 0:
            raise ValueError("estimated_duration_seconds must be >= 0")


@dataclass(frozen=True)
class TemporaryAudioArtifact:
    path: Path
    kind: ArtifactKind


@dataclass
class ProgressState:
    """Mutable progress of one run; only the ProgressReporter writes to it."""
    percent: int
    message_handle: Any


@dataclass(frozen=True)
class TranscriptionResult:
    text: str


@dataclass(frozen=True)
class TranscriptionFailure:
    stage: Stage
    cause: str
    detail: str


TranscriptionOutcome = TranscriptionResult | TranscriptionFailure
