"""Async subprocess helper shared by the transcoder and the local whisper backend."""
import asyncio
import logging

logger = logging.getLogger(__name__)


async def run_command(*args: str) -> tuple[int, bytes, bytes]:
    """Run *args*, wait for exit and return (returncode, stdout, stderr).

    Raises OSError when the executable cannot be launched. If the awaiting task
    is cancelled (e.g. by ``asyncio.wait_for``), the child is killed and reaped
    before the cancellation propagates.
    """
    process = await asyncio.create_subprocess_exec(
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        match process.returncode:
            case None:
                logger.warning("Killing %s (pid %s)", args[0], process.pid)
                process.kill()
                await process.wait()
            case _:
                pass
        raise
    return process.returncode, stdout or b"", stderr or b""
