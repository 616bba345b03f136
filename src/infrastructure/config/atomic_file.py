import asyncio
import tempfile
from pathlib import Path

import aiofiles
from filelock import FileLock
from loguru import logger


async def write_text_atomic(path: Path, content: str) -> None:
    """Write a file via temp file + rename, holding a sibling lock file.

    Concurrent `init` runs in the same repository serialise on the lock; the
    rename keeps readers from ever seeing a half-written config.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    # Acquired and released on different worker threads.
    lock = FileLock(path.with_name(f".{path.name}.lock"), thread_local=False)

    await asyncio.to_thread(lock.acquire)
    try:
        fd, temp_name = tempfile.mkstemp(dir=str(path.parent), prefix=".tmp_", suffix=path.suffix)
        temp_path = Path(temp_name)
        try:
            async with aiofiles.open(fd, mode="w", encoding="utf-8", closefd=True) as f:
                await f.write(content)
            await asyncio.to_thread(temp_path.replace, path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise
    finally:
        await asyncio.to_thread(lock.release)
    logger.debug("Wrote {}", path)
