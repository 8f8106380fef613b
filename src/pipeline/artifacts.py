"""Naming and cleanup of the temporary audio files owned by one pipeline run."""
import logging
import re
import time
import uuid
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from src.constants import (
    DEFAULT_VOICE_BASENAME,
    MSG_CLEANUP_FAILED,
    NORMALIZED_OUTPUT_PREFIX,
    NORMALIZED_SUFFIX,
    RAW_INPUT_PREFIX,
)
from src.pipeline.models import ArtifactKind, TemporaryAudioArtifact

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def new_run_token() -> str:
    """Millisecond timestamp plus a random suffix, unique across concurrent runs."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def reference_basename(source_reference: str) -> str:
    path = urlparse(source_reference).path if "://" in source_reference else source_reference
    name = _UNSAFE_CHARS.sub("_", PurePosixPath(path).name).lstrip(".")
    return name or DEFAULT_VOICE_BASENAME


def raw_input_artifact(temp_dir: Path, token: str, source_reference: str) -> TemporaryAudioArtifact:
    name = f"{RAW_INPUT_PREFIX}{token}_{reference_basename(source_reference)}"
    return TemporaryAudioArtifact(path=temp_dir / name, kind=ArtifactKind.RAW_INPUT)


def normalized_output_artifact(temp_dir: Path, token: str) -> TemporaryAudioArtifact:
    name = f"{NORMALIZED_OUTPUT_PREFIX}{token}{NORMALIZED_SUFFIX}"
    return TemporaryAudioArtifact(path=temp_dir / name, kind=ArtifactKind.NORMALIZED_OUTPUT)


def remove_artifacts(artifacts: list[TemporaryAudioArtifact], logger: logging.Logger) -> None:
    """Delete every artifact that exists; a failure on one file does not stop the rest."""
    for artifact in artifacts:
        if not artifact.path.exists():
            continue
        try:
            artifact.path.unlink()
        except OSError as exc:
            logger.warning(MSG_CLEANUP_FAILED, artifact.path, exc)
