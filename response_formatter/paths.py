from __future__ import annotations

from typing import List


def split_path(path: str) -> List[str]:
    """Split a dot path into its segments.

    Every '.' separates a segment; empty segments are kept so that
    'a..b' compiles to ['a', '', 'b'] instead of silently merging keys.
    """
    if path is None:
        return []
    if not isinstance(path, str):
        path = str(path)
    return path.split('.')


def first_segment(path: str) -> str:
    """Return the part of a dot path before its first '.'."""
    parts = split_path(path)
    return parts[0] if parts else ''


def split_path_list(text: str) -> List[str]:
    """Parse a free-form list of paths, one per line or comma separated."""
    if not text:
        return []
    paths: List[str] = []
    for line in str(text).splitlines():
        for chunk in line.split(','):
            chunk = chunk.strip()
            if chunk:
                paths.append(chunk)
    return paths
