"""AudioFetcher — downloads a Telegram voice file into a temporary file."""
import asyncio
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional

import httpx

from src.constants import TELEGRAM_FILE_API
from src.pipeline.errors import FetchError
from src.pipeline.models import ArtifactKind, TemporaryAudioArtifact

logger = logging.getLogger(__name__)


def _flush_to_disk(out: BinaryIO) -> None:
    out.flush()
    os.fsync(out.fileno())


class AudioFetcher:

    def __init__(
        self,
        bot_token: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._bot_token = bot_token
        self._transport = transport

    def file_url(self, source_reference: str) -> str:
        """Full URLs are used as-is; bare Telegram file paths are resolved with the bot token."""
        match source_reference:
            case str() as ref if ref.startswith(("http://", "https://")):
                return ref
            case ref:
                return TELEGRAM_FILE_API % (self._bot_token, ref.lstrip("/"))

    async def fetch(self, source_reference: str, destination: Path) -> TemporaryAudioArtifact:
        """Stream the referenced file into *destination*. Raises FetchError on any failure.

        A partially written file is left in place for the caller to clean up.
        """
        url = self.file_url(source_reference)
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                async with client.stream("GET", url) as response:
                    match response.is_success:
                        case True:
                            pass
                        case False:
                            await response.aread()
                            raise FetchError(
                                f"Download failed with HTTP {response.status_code}",
                                status_code=response.status_code,
                            )
                    out = await asyncio.to_thread(open, destination, "wb")
                    try:
                        async for chunk in response.aiter_bytes():
                            await asyncio.to_thread(out.write, chunk)
                        await asyncio.to_thread(_flush_to_disk, out)
                    finally:
                        out.close()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"Download failed: {exc}") from exc
        except OSError as exc:
            raise FetchError(f"Could not write {destination}: {exc}") from exc

        logger.debug("Fetched %s bytes into %s", destination.stat().st_size, destination)
        return TemporaryAudioArtifact(path=destination, kind=ArtifactKind.RAW_INPUT)
