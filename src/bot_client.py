"""Abstract interfaces for transport-agnostic bot clients."""
from abc import ABC, abstractmethod
from typing import Any


class StatusChannel(ABC):
    """One conversation the pipeline can post to and edit its own messages in."""

    @abstractmethod
    async def send_message(self, text: str) -> Any:
        """Send *text* and return a handle usable with edit_message. Raises on failure."""
        ...

    @abstractmethod
    async def edit_message(self, handle: Any, text: str) -> None: ...


class BotClient(ABC):
    @abstractmethod
    def run(self) -> None: ...

    @abstractmethod
    async def send_message(self, to: str, text: str) -> bool: ...
