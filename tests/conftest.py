import pytest

from src.bot_client import StatusChannel


class RecordingChannel(StatusChannel):
    """In-memory StatusChannel that records every send and edit."""

    def __init__(self, *, fail_edits: bool = False) -> None:
        self.sent: list[str] = []
        self.edits: list[tuple[int, str]] = []
        self.fail_edits = fail_edits

    async def send_message(self, text: str) -> int:
        self.sent.append(text)
        return len(self.sent)

    async def edit_message(self, handle: int, text: str) -> None:
        if self.fail_edits:
            raise RuntimeError("message is not modified")
        self.edits.append((handle, text))


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def failing_channel() -> RecordingChannel:
    return RecordingChannel(fail_edits=True)


@pytest.fixture
def make_channel():
    return RecordingChannel
