"""WhisperTranscriptionClient — OpenAI Whisper API speech-to-text backend."""
import logging
from pathlib import Path

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError

from src.constants import BACKEND_REMOTE, WHISPER_MODEL
from src.pipeline.errors import BackendError, BackendErrorKind
from src.transcription.client import TranscriptionClient

logger = logging.getLogger(__name__)


class WhisperTranscriptionClient(TranscriptionClient):

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key
        self._client: AsyncOpenAI | None = None

    @property
    def name(self) -> str:
        return f"{BACKEND_REMOTE} ({WHISPER_MODEL})"

    def _get_client(self) -> AsyncOpenAI:
        # One client per backend, with SDK retries disabled.
        match self._client:
            case None:
                self._client = AsyncOpenAI(api_key=self._api_key, max_retries=0)
                return self._client
            case client:
                return client

    async def transcribe(self, audio_path: Path) -> str:
        client = self._get_client()
        logger.info("Calling Whisper API…")
        try:
            with open(audio_path, "rb") as audio_file:
                response = await client.audio.transcriptions.create(
                    model=WHISPER_MODEL,
                    file=audio_file,
                )
        except APIStatusError as exc:
            raise BackendError(
                BackendErrorKind.API,
                f"Whisper API returned HTTP {exc.status_code}",
                status_code=exc.status_code,
                body=exc.response.text,
            ) from exc
        except APIConnectionError as exc:
            raise BackendError(BackendErrorKind.NETWORK, f"Whisper API unreachable: {exc}") from exc
        except OpenAIError as exc:
            raise BackendError(BackendErrorKind.API, f"Whisper API call failed: {exc}") from exc
        except OSError as exc:
            raise BackendError(BackendErrorKind.NETWORK, f"Could not upload {audio_path}: {exc}") from exc
        return response.text
