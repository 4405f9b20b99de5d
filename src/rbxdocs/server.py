"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the stdio transport
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import rbxdocs.tools.clear_doc_cache as t_clear_cache
import rbxdocs.tools.list_doc_entries as t_list_entries
from rbxdocs import __version__
from rbxdocs.cache import SnapshotCache
from rbxdocs.config import Settings
from rbxdocs.coordinator import FreshnessCoordinator
from rbxdocs.errors import RbxDocsError
from rbxdocs.release import ReleaseResolver, build_http_client
from rbxdocs.state import AppState
from rbxdocs.store import KeyValueStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info("server_starting", version=__version__)

    db_path = Path(settings.cache.db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    db = await aiosqlite.connect(str(db_path))
    store = KeyValueStore(db)
    await store.init_db()

    http_client = build_http_client(settings.http)
    resolver = ReleaseResolver(http_client, settings.release)
    cache = SnapshotCache(store)
    coordinator = FreshnessCoordinator(
        cache,
        resolver,
        staleness_window_ms=settings.release.staleness_window_ms,
    )

    state = AppState(
        settings=settings,
        cache=cache,
        coordinator=coordinator,
    )

    log.info("server_started", version=__version__, db_path=str(db_path))

    try:
        yield state
    finally:
        await http_client.aclose()
        await db.close()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("rbxdocs", lifespan=lifespan)
# FastMCP has no version kwarg; set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: RbxDocsError) -> CallToolResult:
    """Convert an RbxDocsError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


@mcp.tool()
async def list_doc_entries(ctx: Context) -> object:
    """List every searchable Roblox Creator documentation page and section.

    Each entry has a title, a type (e.g. "class property") and a direct URL,
    including the section anchor where there is one.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_list_entries.handle(state)
    except RbxDocsError as exc:
        log.warning(
            "tool_error",
            tool="list_doc_entries",
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="list_doc_entries", exc_info=True)
        raise


@mcp.tool()
async def clear_doc_cache(ctx: Context) -> object:
    """Forget the cached documentation index so the next listing downloads it again."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_clear_cache.handle(state)
    except Exception:
        log.error("tool_unexpected_error", tool="clear_doc_cache", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
