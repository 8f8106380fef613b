"""TelegramStatusChannel — posts and edits pipeline status messages in one chat."""
from telegram import Bot

from src.bot_client import StatusChannel


class TelegramStatusChannel(StatusChannel):

    def __init__(self, bot: Bot, chat_id: str) -> None:
        self._bot = bot
        self._chat_id = int(chat_id)

    async def send_message(self, text: str) -> int:
        message = await self._bot.send_message(chat_id=self._chat_id, text=text)
        return message.message_id

    async def edit_message(self, handle: int, text: str) -> None:
        await self._bot.edit_message_text(text=text, chat_id=self._chat_id, message_id=handle)
