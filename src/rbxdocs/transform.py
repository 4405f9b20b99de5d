"""Flatten documentation metadata into deep-linked search entries.

Pure functions, no I/O. Malformed entries are skipped, never reported.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rbxdocs.models.metadata import SearchEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rbxdocs.models.metadata import MetadataEntry

DEFAULT_SOURCE_ROOT = "content/en-us/"
DEFAULT_BASE_URL = "https://create.roblox.com/docs/"

_SOURCE_EXTENSIONS = (".md", ".yaml")
_INDEX_SUFFIX = "/index"
_ANCHOR_DELIMITERS = (":", ".")


def extract_doc_path(path: str, source_root: str = DEFAULT_SOURCE_ROOT) -> str | None:
    """Return the page path between source_root and the file extension.

    ``"content/en-us/guide/index.md"`` → ``"guide"``. Returns None when the
    path is outside the source root, has another extension, or names no page.
    """
    start = path.find(source_root)
    if start == -1:
        return None

    for extension in _SOURCE_EXTENSIONS:
        if path.endswith(extension):
            doc_path = path[start + len(source_root) : -len(extension)]
            break
    else:
        return None

    if not doc_path:
        return None
    if doc_path.endswith(_INDEX_SUFFIX):
        # Index pages are served at their directory URL
        doc_path = doc_path[: -len(_INDEX_SUFFIX)]
    return doc_path


def extract_anchor(title: str) -> str | None:
    """Return the text after the last ':' or '.' that has something after it.

    ``"Signal:Connect"`` → ``"Connect"``, ``"Plain"`` → None.
    """
    # Searching up to len - 1 guarantees a non-empty suffix
    cut = max(title.rfind(delimiter, 0, len(title) - 1) for delimiter in _ANCHOR_DELIMITERS)
    if cut == -1:
        return None
    return title[cut + 1 :]


def transform_metadata(
    entries: Iterable[MetadataEntry],
    *,
    source_root: str = DEFAULT_SOURCE_ROOT,
    base_url: str = DEFAULT_BASE_URL,
) -> list[SearchEntry]:
    """Flatten pages and their sub-items, preserving input order.

    Each page is followed by its sub-items. Pages with a blank title are
    skipped but their sub-items are still emitted; see exclude_untitled for
    the final filter.
    """
    search_entries: list[SearchEntry] = []

    for entry in entries:
        doc_path = extract_doc_path(entry.path, source_root)
        if doc_path is None:
            continue

        url = f"{base_url}{doc_path}"

        if entry.title.strip():
            search_entries.append(SearchEntry(title=entry.title, type=entry.type, url=url))

        for subitem in entry.subitems or []:
            anchor = extract_anchor(subitem.title)
            search_entries.append(
                SearchEntry(
                    title=subitem.title,
                    type=f"{entry.type} {subitem.type}" if subitem.type else entry.type,
                    url=f"{url}#{anchor}" if anchor is not None else url,
                )
            )

    return search_entries


def exclude_untitled(entries: Iterable[SearchEntry]) -> list[SearchEntry]:
    """Drop entries whose title is empty or whitespace only."""
    return [entry for entry in entries if entry.title.strip()]
