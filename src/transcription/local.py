"""LocalWhisperClient — whisper.cpp command-line speech-to-text backend."""
import logging
import sys
from pathlib import Path

from src.constants import (
    BACKEND_LOCAL,
    WHISPER_CLI_BINARY,
    WHISPER_CLI_BINARY_WINDOWS,
    WHISPER_FILE_FLAG,
    WHISPER_LANGUAGE_AUTO,
    WHISPER_LANGUAGE_FLAG,
    WHISPER_MODEL_FLAG,
)
from src.pipeline.errors import BackendError, BackendErrorKind
from src.process import run_command
from src.transcription.client import TranscriptionClient

logger = logging.getLogger(__name__)


def whisper_binary(whisper_path: str) -> Path:
    binary = WHISPER_CLI_BINARY_WINDOWS if sys.platform == "win32" else WHISPER_CLI_BINARY
    return Path(whisper_path) / binary


class LocalWhisperClient(TranscriptionClient):
    requires_normalized_audio = True

    def __init__(self, whisper_path: str, model_path: str) -> None:
        self._binary = whisper_binary(whisper_path)
        self._model_path = model_path

    @property
    def name(self) -> str:
        return f"{BACKEND_LOCAL} ({Path(self._model_path).name})"

    def build_args(self, audio_path: Path) -> list[str]:
        return [
            str(self._binary),
            WHISPER_MODEL_FLAG,
            self._model_path,
            WHISPER_FILE_FLAG,
            str(audio_path),
            WHISPER_LANGUAGE_FLAG,
            WHISPER_LANGUAGE_AUTO,
        ]

    async def transcribe(self, audio_path: Path) -> str:
        logger.info("Calling whisper-cli…")
        try:
            returncode, stdout, stderr = await run_command(*self.build_args(audio_path))
        except OSError as exc:
            raise BackendError(
                BackendErrorKind.PROCESS, f"Could not launch {self._binary}: {exc}"
            ) from exc

        err = stderr.decode(errors="replace")
        match returncode:
            case 0:
                logger.debug("whisper-cli stderr: %s", err)
                return stdout.decode(errors="replace")
            case code:
                raise BackendError(
                    BackendErrorKind.PROCESS,
                    f"whisper-cli exited with code {code}",
                    stderr=err,
                )
