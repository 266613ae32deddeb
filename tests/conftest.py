"""Shared test fixtures for the Context Keeper test suite."""

from pathlib import Path

import pytest

from context.manager import ContextManager
from data.cache import TTLCache
from storage.cached_store import CachedFileStore
from storage.files import ContextFileError, ContextFileNotFoundError, FileBackend


# ── Clock ──


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Small cache on the fake clock: 3 entries, 10s TTL."""
    return TTLCache(max_size=3, default_ttl=10.0, clock=clock)


# ── Storage backend mock ──


class MemoryBackend:
    """In-memory stand-in for FileBackend that records calls."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.reads: list[str] = []
        self.writes: list[str] = []
        self.appends: list[str] = []
        self.fail_writes = False

    async def exists(self, path) -> bool:
        return str(path) in self.files

    async def read(self, path) -> str:
        key = str(path)
        self.reads.append(key)
        if key not in self.files:
            raise ContextFileNotFoundError(f"Could not read file: {Path(key).name}", key)
        return self.files[key]

    async def write(self, path, content: str) -> None:
        key = str(path)
        if self.fail_writes:
            raise ContextFileError(f"Could not write to file: {Path(key).name}", key)
        self.writes.append(key)
        self.files[key] = content

    async def append(self, path, content: str) -> None:
        key = str(path)
        if self.fail_writes:
            raise ContextFileError(f"Could not append to file: {Path(key).name}", key)
        self.appends.append(key)
        self.files[key] = self.files.get(key, "") + content

    async def ensure_dir(self, directory) -> None:
        pass

    async def list_markdown(self, directory) -> list[Path]:
        prefix = str(directory).rstrip("/") + "/"
        return [
            Path(k) for k in self.files
            if k.startswith(prefix) and "/" not in k[len(prefix):] and k.endswith(".md")
        ]


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def memory_store(memory_backend, cache):
    return CachedFileStore(memory_backend, cache)


# ── Real files ──


@pytest.fixture
def context_dir(tmp_path) -> Path:
    return tmp_path / ".context"


@pytest.fixture
def file_store():
    return CachedFileStore(FileBackend(), TTLCache(max_size=50, default_ttl=600.0))


@pytest.fixture
def manager(file_store, context_dir):
    return ContextManager(file_store, context_dir, pattern_limit=3)
