"""Entry point: wire the cache, store and context manager, then run a command."""

import argparse
import asyncio
import sys

import structlog

from ai.dispatcher import ToolDispatcher
from config.constants import TOOL_CONTEXT_LOAD, TOOL_CONTEXT_UPDATE
from config.logging_config import setup_logging
from config.settings import Settings, settings
from context.manager import ContextManager
from data.cache import TTLCache
from storage.cached_store import CachedFileStore
from storage.files import FileBackend

log = structlog.get_logger(__name__)


def build_dispatcher(config: Settings = settings) -> ToolDispatcher:
    """Create the process-wide cache and everything that depends on it."""
    cache: TTLCache[str] = TTLCache(
        max_size=config.cache_max_entries,
        default_ttl=config.cache_ttl_seconds,
    )
    store = CachedFileStore(FileBackend(), cache, ttl=config.cache_ttl_seconds)
    manager = ContextManager(store, config.context_dir, pattern_limit=config.pattern_limit)
    return ToolDispatcher(manager)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="context-keeper", description="Project context notes for coding agents.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    load = sub.add_parser("load", help="Print the project context")
    load.add_argument("--focus", default=None, help="Only include patterns mentioning this keyword")

    update = sub.add_parser("update", help="Record a development session")
    update.add_argument("--summary", required=True)
    update.add_argument("--completed", nargs="*", default=[])
    update.add_argument("--next", nargs="*", default=[], dest="next_steps")
    update.add_argument("--decisions", nargs="*", default=[])

    ask = sub.add_parser("ask", help="Ask Claude a question with access to the context tools")
    ask.add_argument("prompt")
    return parser


async def run(args: argparse.Namespace) -> int:
    dispatcher = build_dispatcher()

    if args.command == "ask":
        from ai.engine import ContextAgent

        if not settings.anthropic_api_key:
            print("ANTHROPIC_API_KEY is not set.", file=sys.stderr)
            return 1
        print(await ContextAgent(dispatcher).run(args.prompt))
        return 0

    if args.command == "load":
        result = await dispatcher.execute(TOOL_CONTEXT_LOAD, {"focus": args.focus})
    else:
        result = await dispatcher.execute(TOOL_CONTEXT_UPDATE, {
            "summary": args.summary,
            "completed": args.completed,
            "next": args.next_steps,
            "decisions": args.decisions,
        })

    for block in result["content"]:
        print(block["text"])
    log.debug("cache_stats", **dispatcher.manager.store.cache.stats())
    return 1 if result["is_error"] else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
