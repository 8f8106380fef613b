"""TelegramClient — event-driven transport via python-telegram-bot."""
import logging
import time
from typing import Callable, Optional

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from src.bot_client import BotClient
from src.config import Config
from src.constants import (
    CMD_HELP,
    CMD_START,
    CMD_STATUS,
    MSG_BLOCKED_CHAT,
    MSG_HELP,
    MSG_SEND_FAIL,
    MSG_SEND_OK,
    MSG_START,
    MSG_STATUS,
    MSG_VOICE_EMPTY,
    MSG_VOICE_FAILED,
)
from src.pipeline.models import TranscriptionFailure, TranscriptionResult, VoiceSubmission
from src.pipeline.orchestrator import VoicePipeline
from src.telegram.status import TelegramStatusChannel

logger = logging.getLogger(__name__)


class TelegramClient(BotClient):

    def __init__(self, config: Config, pipeline: VoicePipeline, backend_name: str) -> None:
        self._config = config
        self._token = config.telegram_bot_token
        self._allowed_chat_id = config.allowed_chat_id
        self._pipeline = pipeline
        self._backend_name = backend_name
        self._app: Optional[Application] = None

    # ── BotClient interface ───────────────────────────────────────────────────

    def run(self) -> None:
        self._app = Application.builder().token(self._token).concurrent_updates(True).build()
        self._app.add_handler(CommandHandler(CMD_START, self._make_simple_handler(lambda: MSG_START)))
        self._app.add_handler(CommandHandler(CMD_HELP, self._make_simple_handler(lambda: MSG_HELP)))
        self._app.add_handler(CommandHandler(CMD_STATUS, self._make_simple_handler(self.status_text)))
        self._app.add_handler(TGMessageHandler(filters.VOICE, self._make_voice_handler()))
        self._app.run_polling()

    async def send_message(self, to: str, text: str) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case app:
                try:
                    await app.bot.send_message(chat_id=int(to), text=text)
                    return True
                except Exception as exc:
                    logger.error("Telegram send_message failed: %s", exc)
                    return False

    # ── helpers (also used in tests) ─────────────────────────────────────────

    def _is_allowed(self, update: Update) -> bool:
        if update.effective_chat is None:
            return False
        match self._allowed_chat_id:
            case None:
                return True
            case allowed:
                return str(update.effective_chat.id) == allowed.strip()

    def status_text(self) -> str:
        return MSG_STATUS % (
            self._backend_name,
            "on" if self._config.normalize_audio else "off",
            self._config.fetch_timeout,
            self._config.normalize_timeout,
            self._config.transcribe_timeout,
        )

    @staticmethod
    def _submission_from(file_path: str, duration: Optional[int]) -> VoiceSubmission:
        return VoiceSubmission(
            source_reference=file_path,
            estimated_duration_seconds=max(0, int(duration or 0)),
        )

    # ── internal handler factory ──────────────────────────────────────────────

    def _make_simple_handler(self, callback: Callable[[], str]) -> Callable:
        """Handler for commands that need no arguments — just call callback and reply."""
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    chat_id = update.effective_chat.id if update.effective_chat else "?"
                    logger.warning(MSG_BLOCKED_CHAT, chat_id)
                    return
                case True:
                    pass
            sender = str(update.effective_chat.id) if update.effective_chat else ""
            await self.send_message(sender, callback())

        return _handler

    def _make_voice_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    chat_id = update.effective_chat.id if update.effective_chat else "?"
                    logger.warning(MSG_BLOCKED_CHAT, chat_id)
                    return
                case True:
                    pass

            sender = str(update.effective_chat.id) if update.effective_chat else ""
            voice = update.message.voice if update.message else None
            match voice:
                case None:
                    return
                case v:
                    start = time.time()
                    channel = TelegramStatusChannel(context.bot, sender)
                    try:
                        tg_file = await v.get_file()
                        submission = self._submission_from(tg_file.file_path, v.duration)
                        outcome = await self._pipeline.run(submission, channel)
                    except Exception:
                        logger.exception("Voice transcription failed")
                        await self.send_message(sender, MSG_VOICE_FAILED)
                        return
                    await self._reply(sender, outcome, time.time() - start)

        return _handler

    async def _reply(
        self,
        sender: str,
        outcome: TranscriptionResult | TranscriptionFailure,
        elapsed: float,
    ) -> None:
        match outcome:
            case TranscriptionFailure():
                # The pipeline already told the user.
                return
            case TranscriptionResult(text=text):
                pass

        match text.strip():
            case "":
                await self.send_message(sender, MSG_VOICE_EMPTY)
            case transcript:
                success = await self.send_message(sender, transcript)
                match success:
                    case True:
                        logger.info(MSG_SEND_OK, elapsed)
                    case False:
                        logger.error(MSG_SEND_FAIL, elapsed)
