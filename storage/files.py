"""Markdown file backend for the context directory."""

import asyncio
from pathlib import Path

import structlog

from config.constants import MARKDOWN_SUFFIX

log = structlog.get_logger(__name__)


class ContextFileError(Exception):
    """A context file could not be read or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class ContextFileNotFoundError(ContextFileError):
    """The requested context file does not exist."""


class FileBackend:
    """Async text file I/O. Blocking calls run in a worker thread."""

    encoding = "utf-8"

    async def exists(self, path: str | Path) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def read(self, path: str | Path) -> str:
        """Read a file as text.

        Raises ContextFileNotFoundError for a missing file and ContextFileError
        for any other OS failure. Messages carry only the base name.
        """
        p = Path(path)
        try:
            return await asyncio.to_thread(p.read_text, encoding=self.encoding)
        except FileNotFoundError as e:
            log.warning("file_not_found", path=str(p))
            raise ContextFileNotFoundError(f"Could not read file: {p.name}", p) from e
        except OSError as e:
            log.error("file_read_failed", path=str(p), error=str(e))
            raise ContextFileError(f"Could not read file: {p.name}", p) from e

    async def write(self, path: str | Path, content: str) -> None:
        """Replace a file's content, creating parent directories."""
        p = Path(path)
        try:
            await asyncio.to_thread(self._write_sync, p, content, "w")
        except OSError as e:
            log.error("file_write_failed", path=str(p), error=str(e))
            raise ContextFileError(f"Could not write to file: {p.name}", p) from e

    async def append(self, path: str | Path, content: str) -> None:
        """Append to a file, creating it (and parent directories) if needed."""
        p = Path(path)
        try:
            await asyncio.to_thread(self._write_sync, p, content, "a")
        except OSError as e:
            log.error("file_append_failed", path=str(p), error=str(e))
            raise ContextFileError(f"Could not append to file: {p.name}", p) from e

    async def ensure_dir(self, directory: str | Path) -> None:
        await asyncio.to_thread(Path(directory).mkdir, parents=True, exist_ok=True)

    async def list_markdown(self, directory: str | Path) -> list[Path]:
        """Markdown files in ``directory``, most recently modified first.

        A missing directory yields an empty list; any other OS failure raises
        ContextFileError.
        """
        d = Path(directory)
        try:
            return await asyncio.to_thread(self._list_markdown_sync, d)
        except OSError as e:
            log.error("directory_list_failed", path=str(d), error=str(e))
            raise ContextFileError(f"Could not list directory: {d.name}", d) from e

    def _write_sync(self, path: Path, content: str, mode: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open(mode, encoding=self.encoding) as f:
            f.write(content)

    @staticmethod
    def _list_markdown_sync(directory: Path) -> list[Path]:
        if not directory.is_dir():
            return []
        files = [(p, p.stat().st_mtime) for p in directory.glob(f"*{MARKDOWN_SUFFIX}") if p.is_file()]
        files.sort(key=lambda item: item[1], reverse=True)
        return [p for p, _ in files]
