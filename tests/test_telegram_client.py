"""TelegramClient: chat filter, voice handler wiring and status channel."""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from src.config import Config
from src.constants import MSG_HELP, MSG_VOICE_EMPTY, MSG_VOICE_FAILED
from src.pipeline.models import Stage, TranscriptionFailure, TranscriptionResult, VoiceSubmission
from src.telegram.client import TelegramClient
from src.telegram.status import TelegramStatusChannel


def make_config(*, chat_id: str | None = "123456789") -> Config:
    return Config(
        telegram_bot_token="test-token",
        allowed_chat_id=chat_id,
        log_level="INFO",
        transcription_backend="local",
        openai_api_key=None,
        whisper_path="/opt/whisper",
        whisper_model="/models/ggml-base.bin",
        ffmpeg_path="ffmpeg",
        normalize_remote_audio=False,
        temp_dir="/tmp",
        fetch_timeout=60,
        normalize_timeout=60,
        transcribe_timeout=300,
    )


def make_client(outcome=None, *, chat_id: str | None = "123456789") -> TelegramClient:
    pipeline = MagicMock()
    pipeline.run = AsyncMock(return_value=outcome)
    return TelegramClient(make_config(chat_id=chat_id), pipeline, "local (ggml-base.bin)")


def make_voice_update(*, chat_id: int = 123456789, duration: int = 12) -> MagicMock:
    """Build a minimal mock of a python-telegram-bot Update carrying a voice note."""
    tg_file = MagicMock()
    tg_file.file_path = "https://api.telegram.org/file/bottest-token/voice/file_7.oga"
    update = MagicMock()
    update.effective_chat.id = chat_id
    update.message.voice.duration = duration
    update.message.voice.get_file = AsyncMock(return_value=tg_file)
    return update


# ── allowed-chat filter ───────────────────────────────────────────────────────


def test_allowed_chat_id_passes_filter():
    client = make_client()
    assert client._is_allowed(make_voice_update(chat_id=123456789))


def test_blocked_chat_id_fails_filter():
    client = make_client()
    assert not client._is_allowed(make_voice_update(chat_id=999999999))


def test_no_allowed_chat_accepts_everyone():
    client = make_client(chat_id=None)
    assert client._is_allowed(make_voice_update(chat_id=999999999))


# ── voice handler ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_voice_handler_runs_pipeline_and_replies_with_trimmed_text():
    client = make_client(TranscriptionResult(text="hello world\n"))
    update = make_voice_update()

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_voice_handler()(update, MagicMock())

    submission, channel = client._pipeline.run.call_args.args
    assert submission == VoiceSubmission(
        source_reference="https://api.telegram.org/file/bottest-token/voice/file_7.oga",
        estimated_duration_seconds=12,
    )
    assert isinstance(channel, TelegramStatusChannel)
    mock_send.assert_called_once_with("123456789", "hello world")


@pytest.mark.asyncio
async def test_voice_handler_reports_empty_transcript():
    client = make_client(TranscriptionResult(text="  \n"))

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_voice_handler()(make_voice_update(), MagicMock())

    mock_send.assert_called_once_with("123456789", MSG_VOICE_EMPTY)


@pytest.mark.asyncio
async def test_voice_handler_sends_nothing_more_on_pipeline_failure():
    client = make_client(TranscriptionFailure(stage=Stage.FETCH, cause="fetch", detail="boom"))

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_voice_handler()(make_voice_update(), MagicMock())

    mock_send.assert_not_called()


@pytest.mark.asyncio
async def test_voice_handler_replies_generic_error_on_transport_failure():
    client = make_client()
    client._pipeline.run = AsyncMock(side_effect=RuntimeError("Forbidden: bot was blocked"))

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_voice_handler()(make_voice_update(), MagicMock())

    mock_send.assert_called_once_with("123456789", MSG_VOICE_FAILED)


@pytest.mark.asyncio
async def test_voice_handler_ignores_blocked_chat():
    client = make_client(TranscriptionResult(text="hi"))

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_voice_handler()(make_voice_update(chat_id=42), MagicMock())

    client._pipeline.run.assert_not_called()
    mock_send.assert_not_called()


# ── commands ──────────────────────────────────────────────────────────────────


def test_status_text_mentions_backend_and_timeouts():
    text = make_client().status_text()

    assert "local (ggml-base.bin)" in text
    assert "transcribe 300s" in text


def test_help_text_mentions_voice():
    assert "Voice note" in MSG_HELP


@pytest.mark.asyncio
async def test_simple_handler_replies_with_callback_text():
    client = make_client()
    update = make_voice_update()

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_simple_handler(lambda: MSG_HELP)(update, MagicMock())

    mock_send.assert_called_once_with("123456789", MSG_HELP)


# ── status channel ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_status_channel_sends_and_edits_in_one_chat():
    bot = MagicMock()
    bot.send_message = AsyncMock(return_value=MagicMock(message_id=55))
    bot.edit_message_text = AsyncMock()
    channel = TelegramStatusChannel(bot, "123456789")

    handle = await channel.send_message("🔄 Progress: [▒░░░░░░░░░] 10%")
    await channel.edit_message(handle, "🔄 Progress: [▒▒░░░░░░░░] 15%")

    assert handle == 55
    bot.send_message.assert_awaited_once_with(chat_id=123456789, text="🔄 Progress: [▒░░░░░░░░░] 10%")
    bot.edit_message_text.assert_awaited_once_with(
        text="🔄 Progress: [▒▒░░░░░░░░] 15%", chat_id=123456789, message_id=55
    )
