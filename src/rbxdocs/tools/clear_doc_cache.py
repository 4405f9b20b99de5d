"""Tool handler for clear_doc_cache.

Drops the cached snapshot so the next list_doc_entries call downloads the
metadata again. Used after the metadata entry shape changes, since the cache
carries no schema version.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from rbxdocs.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a clear_doc_cache tool call."""
    log = structlog.get_logger().bind(tool="clear_doc_cache")
    log.info("handler_called")

    cleared = await state.cache.clear()
    return {"cleared": cleared}
