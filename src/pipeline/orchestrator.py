"""VoicePipeline — fetch, normalize and transcribe one voice message.

The pipeline owns every temporary file it creates and the progress reporter it
starts: both are released in a ``finally`` block, whichever way the run ends.
Stage errors are logged once here and reduced to a ``TranscriptionFailure``;
the user only ever sees a single generic failure reply.
"""
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

from src.bot_client import StatusChannel
from src.constants import (
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_NORMALIZE_TIMEOUT,
    DEFAULT_TRANSCRIBE_TIMEOUT,
    MSG_STAGE_CRASHED,
    MSG_STAGE_FAILED,
    MSG_VOICE_DURATION,
    MSG_VOICE_FAILED,
    PROGRESS_START,
)
from src.pipeline.artifacts import (
    new_run_token,
    normalized_output_artifact,
    raw_input_artifact,
    remove_artifacts,
)
from src.pipeline.errors import PipelineError, StageTimeoutError, UnexpectedStageError
from src.pipeline.fetcher import AudioFetcher
from src.pipeline.models import (
    Stage,
    TemporaryAudioArtifact,
    TranscriptionFailure,
    TranscriptionOutcome,
    TranscriptionResult,
    VoiceSubmission,
)
from src.pipeline.normalizer import AudioNormalizer
from src.pipeline.progress import ProgressReporter, render_progress, tick_interval
from src.transcription.client import TranscriptionClient

module_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StageTimeouts:
    fetch: float = DEFAULT_FETCH_TIMEOUT
    normalize: float = DEFAULT_NORMALIZE_TIMEOUT
    transcribe: float = DEFAULT_TRANSCRIBE_TIMEOUT


class VoicePipeline:

    def __init__(
        self,
        fetcher: AudioFetcher,
        backend: TranscriptionClient,
        normalizer: Optional[AudioNormalizer] = None,
        *,
        temp_dir: Path,
        timeouts: StageTimeouts = StageTimeouts(),
        interval_for: Callable[[int], float] = tick_interval,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if backend.requires_normalized_audio and normalizer is None:
            raise ValueError(f"{backend.name} backend requires an audio normalizer")
        self._fetcher = fetcher
        self._backend = backend
        self._normalizer = normalizer
        self._temp_dir = Path(temp_dir)
        self._timeouts = timeouts
        self._interval_for = interval_for
        self._logger = logger or module_logger

    async def run(
        self, submission: VoiceSubmission, channel: StatusChannel
    ) -> TranscriptionOutcome:
        token = new_run_token()
        raw = raw_input_artifact(self._temp_dir, token, submission.source_reference)
        normalized = (
            normalized_output_artifact(self._temp_dir, token)
            if self._normalizer is not None
            else None
        )
        artifacts = [a for a in (raw, normalized) if a is not None]

        await channel.send_message(MSG_VOICE_DURATION % submission.estimated_duration_seconds)
        handle = await channel.send_message(render_progress(PROGRESS_START))
        reporter = ProgressReporter(
            channel,
            handle,
            self._interval_for(submission.estimated_duration_seconds),
            logger=self._logger,
        )
        reporter.start()

        try:
            text = await self._run_stages(submission, raw, normalized)
        except PipelineError as exc:
            await reporter.stop()
            self._logger.error(MSG_STAGE_FAILED, exc.stage.value, exc.cause, exc.detail)
            outcome: TranscriptionOutcome = TranscriptionFailure(
                stage=exc.stage, cause=exc.cause, detail=exc.detail
            )
        else:
            await reporter.complete()
            outcome = TranscriptionResult(text=text)
        finally:
            await reporter.stop()
            remove_artifacts(artifacts, self._logger)

        match outcome:
            case TranscriptionFailure():
                await channel.send_message(MSG_VOICE_FAILED)
            case _:
                pass
        return outcome

    async def _run_stages(
        self,
        submission: VoiceSubmission,
        raw: TemporaryAudioArtifact,
        normalized: Optional[TemporaryAudioArtifact],
    ) -> str:
        self._logger.info("Fetching voice file…")
        fetched = await self._with_deadline(
            Stage.FETCH,
            self._timeouts.fetch,
            self._fetcher.fetch(submission.source_reference, raw.path),
        )

        match (self._normalizer, normalized):
            case (None, _) | (_, None):
                audio = fetched
            case (normalizer, target):
                audio = await self._with_deadline(
                    Stage.NORMALIZE,
                    self._timeouts.normalize,
                    normalizer.normalize(fetched, target.path),
                )

        self._logger.info("Transcribing with %s…", self._backend.name)
        return await self._with_deadline(
            Stage.TRANSCRIBE,
            self._timeouts.transcribe,
            self._backend.transcribe(audio.path),
        )

    async def _with_deadline(self, stage: Stage, timeout: float, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise StageTimeoutError(stage, timeout) from exc
        except PipelineError:
            raise
        except Exception as exc:
            self._logger.exception(MSG_STAGE_CRASHED, stage.value)
            raise UnexpectedStageError(stage, exc) from exc
