"""Wiring in main: backend selection and pipeline assembly."""
from pathlib import Path

from src.config import Config
from src.main import build_backend, build_pipeline
from src.transcription.local import LocalWhisperClient
from src.transcription.whisper import WhisperTranscriptionClient


def make_config(**overrides) -> Config:
    values = dict(
        telegram_bot_token="test-token",
        allowed_chat_id=None,
        log_level="INFO",
        transcription_backend="local",
        openai_api_key="sk-test",
        whisper_path="/opt/whisper",
        whisper_model="/models/ggml-base.bin",
        ffmpeg_path="ffmpeg",
        normalize_remote_audio=False,
        temp_dir="/tmp/voice",
        fetch_timeout=10,
        normalize_timeout=20,
        transcribe_timeout=30,
    )
    values.update(overrides)
    return Config(**values)


def test_local_backend_is_selected_by_default():
    assert isinstance(build_backend(make_config()), LocalWhisperClient)


def test_remote_backend_is_selected_when_configured():
    config = make_config(transcription_backend="remote")
    assert isinstance(build_backend(config), WhisperTranscriptionClient)


def test_local_pipeline_gets_normalizer_and_timeouts():
    config = make_config()
    pipeline = build_pipeline(config, build_backend(config))

    assert pipeline._normalizer is not None
    assert pipeline._temp_dir == Path("/tmp/voice")
    assert (pipeline._timeouts.fetch, pipeline._timeouts.normalize, pipeline._timeouts.transcribe) == (10, 20, 30)


def test_remote_pipeline_skips_normalizer_unless_asked():
    config = make_config(transcription_backend="remote")
    assert build_pipeline(config, build_backend(config))._normalizer is None

    config = make_config(transcription_backend="remote", normalize_remote_audio=True)
    assert build_pipeline(config, build_backend(config))._normalizer is not None
