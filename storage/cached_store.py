"""File store with a read-through cache in front of the backend."""

from pathlib import Path

import structlog

from data.cache import TTLCache
from storage.files import FileBackend

log = structlog.get_logger(__name__)


class CachedFileStore:
    """Reads are served from the cache when possible; writes invalidate.

    Keys are path strings and are treated as opaque by the cache. Backend
    errors propagate unchanged and are never cached. Each key carries a
    write generation; a read-miss only populates the cache if no write or
    append to that key completed while the backend read was in flight.
    """

    def __init__(
        self,
        backend: FileBackend,
        cache: TTLCache[str],
        ttl: float | None = None,
    ) -> None:
        self.backend = backend
        self.cache = cache
        self.ttl = ttl
        self._generations: dict[str, int] = {}

    async def read(self, path: str | Path) -> str:
        key = str(path)
        cached = self.cache.get(key)
        if cached is not None:
            log.debug("cache_hit", key=key)
            return cached

        log.debug("cache_miss", key=key)
        generation = self._generations.get(key, 0)
        content = await self.backend.read(key)
        if self._generations.get(key, 0) == generation:
            self.cache.set(key, content, self.ttl)
        else:
            log.debug("cache_fill_skipped", key=key, reason="written_during_read")
        return content

    async def write(self, path: str | Path, content: str) -> None:
        key = str(path)
        await self.backend.write(key, content)
        self._bump(key)
        self.cache.invalidate(key)

    async def append(self, path: str | Path, content: str) -> None:
        key = str(path)
        await self.backend.append(key, content)
        self._bump(key)
        self.cache.invalidate(key)

    # ── Uncached pass-throughs ──

    async def exists(self, path: str | Path) -> bool:
        return await self.backend.exists(str(path))

    async def ensure_dir(self, directory: str | Path) -> None:
        await self.backend.ensure_dir(directory)

    async def list_markdown(self, directory: str | Path) -> list[Path]:
        return await self.backend.list_markdown(directory)

    def invalidate_all(self) -> None:
        self.cache.clear()

    def _bump(self, key: str) -> None:
        self._generations[key] = self._generations.get(key, 0) + 1
