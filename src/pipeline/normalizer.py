"""AudioNormalizer — converts any input audio to 16 kHz mono PCM WAV with ffmpeg."""
import logging
import shutil
from pathlib import Path

from src.constants import (
    FFMPEG_BINARY,
    NORMALIZED_CHANNELS,
    NORMALIZED_CODEC,
    NORMALIZED_SAMPLE_RATE,
)
from src.pipeline.errors import NormalizeError, ToolUnavailableError
from src.pipeline.models import ArtifactKind, TemporaryAudioArtifact
from src.process import run_command

logger = logging.getLogger(__name__)


def build_normalize_cmd(ffmpeg: str, input_path: Path, output_path: Path) -> list[str]:
    """Fixed ffmpeg invocation; overwrites *output_path* if it exists."""
    return [
        ffmpeg,
        "-y",
        "-i",
        str(input_path),
        "-vn",
        "-acodec",
        NORMALIZED_CODEC,
        "-ar",
        str(NORMALIZED_SAMPLE_RATE),
        "-ac",
        str(NORMALIZED_CHANNELS),
        str(output_path),
    ]


class AudioNormalizer:

    def __init__(self, ffmpeg_path: str = FFMPEG_BINARY) -> None:
        self._ffmpeg_path = ffmpeg_path

    def _resolve_ffmpeg(self) -> str:
        match shutil.which(self._ffmpeg_path):
            case None:
                raise ToolUnavailableError(f"{self._ffmpeg_path} not found on PATH")
            case resolved:
                return resolved

    async def normalize(
        self, source: TemporaryAudioArtifact, destination: Path
    ) -> TemporaryAudioArtifact:
        ffmpeg = self._resolve_ffmpeg()
        args = build_normalize_cmd(ffmpeg, source.path, destination)

        logger.info("Normalizing audio with ffmpeg…")
        try:
            returncode, _, stderr = await run_command(*args)
        except OSError as exc:
            raise NormalizeError(f"Could not launch {ffmpeg}: {exc}") from exc

        match returncode:
            case 0:
                return TemporaryAudioArtifact(path=destination, kind=ArtifactKind.NORMALIZED_OUTPUT)
            case code:
                raise NormalizeError(
                    f"ffmpeg exited with code {code}",
                    stderr=stderr.decode(errors="replace"),
                )
