"""TranscriptionClient — abstract base for speech-to-text backends."""
from abc import ABC, abstractmethod
from pathlib import Path


class TranscriptionClient(ABC):
    # True when the backend only accepts 16 kHz mono PCM WAV input.
    requires_normalized_audio: bool = False

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def transcribe(self, audio_path: Path) -> str:
        """Convert the audio file to untrimmed text. Raises BackendError on failure."""
        ...
