"""Entry point — wires Config → VoicePipeline → TelegramClient."""
import logging
from pathlib import Path

from rich.logging import RichHandler

from src.config import Config
from src.constants import BACKEND_REMOTE, MSG_BOT_STARTING
from src.pipeline.fetcher import AudioFetcher
from src.pipeline.normalizer import AudioNormalizer
from src.pipeline.orchestrator import StageTimeouts, VoicePipeline
from src.telegram.client import TelegramClient
from src.transcription.client import TranscriptionClient
from src.transcription.local import LocalWhisperClient
from src.transcription.whisper import WhisperTranscriptionClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_backend(config: Config) -> TranscriptionClient:
    match config.transcription_backend:
        case str() as b if b == BACKEND_REMOTE:
            return WhisperTranscriptionClient(config.openai_api_key)
        case _:
            return LocalWhisperClient(config.whisper_path, config.whisper_model)


def build_pipeline(config: Config, backend: TranscriptionClient) -> VoicePipeline:
    normalizer = AudioNormalizer(config.ffmpeg_path) if config.normalize_audio else None
    return VoicePipeline(
        AudioFetcher(config.telegram_bot_token),
        backend,
        normalizer,
        temp_dir=Path(config.temp_dir),
        timeouts=StageTimeouts(
            fetch=config.fetch_timeout,
            normalize=config.normalize_timeout,
            transcribe=config.transcribe_timeout,
        ),
        logger=logging.getLogger("src.pipeline"),
    )


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING)

    backend = build_backend(config)
    pipeline = build_pipeline(config, backend)
    client = TelegramClient(config, pipeline, backend.name)
    client.run()


if __name__ == "__main__":
    main()
