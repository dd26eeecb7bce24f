"""Text diffing for "what changed" summaries of the virtual file store."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from actionkit.kernel.domain.files import File, FileModification

if TYPE_CHECKING:
    from collections.abc import Mapping

    from actionkit.kernel.domain.files import Folder


def diff_files(path: str, old_content: str, new_content: str) -> str:
    """Return a unified diff between two versions of ``path``.

    An empty string means the contents are identical.
    """
    if old_content == new_content:
        return ""
    diff_lines = difflib.unified_diff(
        old_content.splitlines(keepends=True),
        new_content.splitlines(keepends=True),
        fromfile=path,
        tofile=path,
    )
    return "".join(diff_lines)


def compute_file_modifications(
    files: Mapping[str, File | Folder],
    originals: Mapping[str, str],
) -> dict[str, FileModification]:
    """Summarize every ledgered path whose current content differs from its original.

    Paths that vanished, turned into folders, or are back to their original
    content are left out. When the diff is not smaller than the file itself
    the full content is reported instead.
    """
    modifications: dict[str, FileModification] = {}

    for file_path, original_content in originals.items():
        entry = files.get(file_path)
        if not isinstance(entry, File):
            continue

        unified_diff = diff_files(file_path, original_content, entry.content)
        if not unified_diff:
            continue

        if len(unified_diff) >= len(entry.content):
            modifications[file_path] = FileModification(type="file", content=entry.content)
        else:
            modifications[file_path] = FileModification(type="diff", content=unified_diff)

    return modifications


__all__ = ["compute_file_modifications", "diff_files"]
