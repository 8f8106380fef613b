from dataclasses import dataclass
from typing import Optional
import os
import tempfile
from dotenv import load_dotenv

from src.constants import (
    BACKEND_LOCAL,
    BACKEND_REMOTE,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_NORMALIZE_TIMEOUT,
    DEFAULT_TRANSCRIBE_TIMEOUT,
    FFMPEG_BINARY,
)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    allowed_chat_id: Optional[str]
    log_level: str
    transcription_backend: str
    openai_api_key: Optional[str]
    whisper_path: Optional[str]
    whisper_model: Optional[str]
    ffmpeg_path: str
    normalize_remote_audio: bool
    temp_dir: str
    fetch_timeout: int
    normalize_timeout: int
    transcribe_timeout: int

    @property
    def normalize_audio(self) -> bool:
        return self.transcription_backend == BACKEND_LOCAL or self.normalize_remote_audio

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = os.getenv("TELEGRAM_BOT_TOKEN")
        chat_id = os.getenv("ALLOWED_CHAT_ID") or None
        log_level = os.getenv("LOG_LEVEL", "INFO")
        backend = os.getenv("TRANSCRIPTION_BACKEND", BACKEND_LOCAL).strip().lower()
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        whisper_path = os.getenv("WHISPER_PATH") or None
        whisper_model = os.getenv("WHISPER_MODEL") or None
        ffmpeg_path = os.getenv("FFMPEG_PATH", FFMPEG_BINARY) or FFMPEG_BINARY
        normalize_remote = os.getenv("NORMALIZE_REMOTE_AUDIO", "false")
        temp_dir = os.getenv("TEMP_DIR") or tempfile.gettempdir()
        fetch_timeout = os.getenv("FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT))
        normalize_timeout = os.getenv("NORMALIZE_TIMEOUT", str(DEFAULT_NORMALIZE_TIMEOUT))
        transcribe_timeout = os.getenv("TRANSCRIBE_TIMEOUT", str(DEFAULT_TRANSCRIBE_TIMEOUT))

        return cls._validate(
            telegram_bot_token=token,
            allowed_chat_id=chat_id,
            log_level=log_level,
            transcription_backend=backend,
            openai_api_key=openai_api_key,
            whisper_path=whisper_path,
            whisper_model=whisper_model,
            ffmpeg_path=ffmpeg_path,
            normalize_remote_audio=_parse_bool(normalize_remote),
            temp_dir=temp_dir,
            fetch_timeout=int(fetch_timeout),
            normalize_timeout=int(normalize_timeout),
            transcribe_timeout=int(transcribe_timeout),
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        allowed_chat_id: Optional[str],
        log_level: str,
        transcription_backend: str,
        openai_api_key: Optional[str],
        whisper_path: Optional[str],
        whisper_model: Optional[str],
        ffmpeg_path: str,
        normalize_remote_audio: bool,
        temp_dir: str,
        fetch_timeout: int,
        normalize_timeout: int,
        transcribe_timeout: int,
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        match (transcription_backend, openai_api_key, whisper_path, whisper_model):
            case (str() as b, None | "", _, _) if b == BACKEND_REMOTE:
                raise ValueError("OPENAI_API_KEY must be set in .env for the remote backend")
            case (str() as b, _, None | "", _) if b == BACKEND_LOCAL:
                raise ValueError("WHISPER_PATH must be set in .env for the local backend")
            case (str() as b, _, _, None | "") if b == BACKEND_LOCAL:
                raise ValueError("WHISPER_MODEL must be set in .env for the local backend")
            case (str() as b, _, _, _) if b in (BACKEND_LOCAL, BACKEND_REMOTE):
                pass
            case (other, _, _, _):
                raise ValueError(
                    f"TRANSCRIPTION_BACKEND must be '{BACKEND_LOCAL}' or "
                    f"'{BACKEND_REMOTE}', got {other!r}"
                )

        bad_timeouts = [
            name
            for name, value in (
                ("FETCH_TIMEOUT", fetch_timeout),
                ("NORMALIZE_TIMEOUT", normalize_timeout),
                ("TRANSCRIBE_TIMEOUT", transcribe_timeout),
            )
            if value <= 0
        ]
        match bad_timeouts:
            case []:
                pass
            case [name, *_]:
                raise ValueError(f"{name} must be a positive number of seconds")

        return Config(
            telegram_bot_token=telegram_bot_token,
            allowed_chat_id=allowed_chat_id,
            log_level=log_level,
            transcription_backend=transcription_backend,
            openai_api_key=openai_api_key,
            whisper_path=whisper_path,
            whisper_model=whisper_model,
            ffmpeg_path=ffmpeg_path,
            normalize_remote_audio=normalize_remote_audio,
            temp_dir=temp_dir,
            fetch_timeout=fetch_timeout,
            normalize_timeout=normalize_timeout,
            transcribe_timeout=transcribe_timeout,
        )
