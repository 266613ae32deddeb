"""Project context manager: load and update the .context/ markdown files."""

import asyncio
from pathlib import Path

import structlog

from config.constants import (
    ACTIVE_CONTEXT_FILE,
    DNA_FILE,
    PATTERNS_DIR,
    SESSION_LOG_FILE,
    STATE_FILE,
)
from context import templates
from context.models import ContextUpdate
from storage.cached_store import CachedFileStore
from storage.files import ContextFileError
from utils.time_utils import iso_timestamp

log = structlog.get_logger(__name__)


class ContextManager:
    """Reads and writes the project context through the cached file store."""

    def __init__(self, store: CachedFileStore, context_dir: Path, pattern_limit: int = 3) -> None:
        self.store = store
        self.context_dir = Path(context_dir)
        self.pattern_limit = pattern_limit

    @property
    def patterns_dir(self) -> Path:
        return self.context_dir / PATTERNS_DIR

    # ── Public API ──

    async def load_context(self, focus: str | None = None) -> str:
        """Render the project context, optionally filtering patterns by a focus keyword.

        Returns initialisation guidance when the context files are missing.
        """
        try:
            dna, state, patterns = await asyncio.gather(
                self.store.read(self.context_dir / DNA_FILE),
                self.store.read(self.context_dir / STATE_FILE),
                self._read_patterns(),
            )
        except ContextFileError as e:
            log.info("context_not_found", context_dir=str(self.context_dir), error=str(e))
            return templates.CONTEXT_NOT_FOUND

        if focus:
            needle = focus.lower()
            relevant = [p for p in patterns if needle in p.lower()]
        else:
            relevant = patterns[: self.pattern_limit]

        log.info("context_loaded", focus=focus, patterns=len(relevant), total_patterns=len(patterns))
        return templates.context_view(dna, state, relevant, iso_timestamp(), focus=focus)

    async def update_context(self, update: ContextUpdate) -> str:
        """Record a session: rewrite the state files and append to the session log."""
        timestamp = iso_timestamp()
        try:
            await self._ensure_structure()
            await asyncio.gather(
                self._write_current_state(update, timestamp),
                self._write_active_context(update, timestamp),
                self._append_session_log(update, timestamp),
            )
        except ContextFileError as e:
            log.error("context_update_failed", error=str(e), path=e.path)
            return templates.update_failed(str(e))

        log.info("context_updated", summary=update.summary, timestamp=timestamp)
        return templates.update_succeeded(update.summary, timestamp)

    # ── Helpers ──

    async def _read_patterns(self) -> list[str]:
        """Pattern files rendered as markdown blocks, newest first."""
        files = await self.store.list_markdown(self.patterns_dir)
        contents = await asyncio.gather(*[self.store.read(f) for f in files])
        return [templates.pattern_block(f.name, c) for f, c in zip(files, contents)]

    async def _ensure_structure(self) -> None:
        await self.store.ensure_dir(self.patterns_dir)
        dna_path = self.context_dir / DNA_FILE
        if not await self.store.exists(dna_path):
            log.info("creating_default_dna", path=str(dna_path))
            await self.store.write(dna_path, templates.DEFAULT_PROJECT_DNA)

    async def _write_current_state(self, update: ContextUpdate, timestamp: str) -> None:
        content = templates.current_state(
            timestamp,
            update.summary,
            update.completed,
            update.next_steps,
            update.decisions,
        )
        await self.store.write(self.context_dir / STATE_FILE, content)

    async def _write_active_context(self, update: ContextUpdate, timestamp: str) -> None:
        content = templates.active_context(timestamp, update.summary, update.next_steps)
        await self.store.write(self.context_dir / ACTIVE_CONTEXT_FILE, content)

    async def _append_session_log(self, update: ContextUpdate, timestamp: str) -> None:
        entry = templates.session_log_entry(timestamp, update.summary, update.completed, update.decisions)
        await self.store.append(self.context_dir / SESSION_LOG_FILE, entry)
