"""Tool handler for list_doc_entries.

Receives AppState, runs the freshness coordinator, flattens the metadata and
returns a structured dict. No MCP or FastMCP imports; server.py handles the
MCP wiring. Errors from the coordinator propagate so the server can turn them
into an error result carrying the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from rbxdocs.models.tools import ListDocEntriesOutput
from rbxdocs.transform import exclude_untitled, transform_metadata

if TYPE_CHECKING:
    from rbxdocs.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a list_doc_entries tool call."""
    log = structlog.get_logger().bind(tool="list_doc_entries")
    log.info("handler_called")

    metadata = await state.coordinator.get_metadata()
    entries = exclude_untitled(
        transform_metadata(
            metadata,
            source_root=state.settings.docs.source_root,
            base_url=state.settings.docs.base_url,
        )
    )
    log.info("entries_built", pages=len(metadata), entries=len(entries))

    output = ListDocEntriesOutput(entries=entries, total=len(entries))
    return output.model_dump(mode="json")
