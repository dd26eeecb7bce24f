"""Domain models for the virtual file store.

Entries are keyed by absolute, ``/``-rooted workspace paths. A path maps
either to a :class:`File` (content plus binary marker) or to a
:class:`Folder` marker. The whole mapping round-trips through JSON with
:data:`FILE_MAP_ADAPTER` so a key-value collaborator can persist it as a
single string.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class File(BaseModel):
    """A file entry."""

    model_config = ConfigDict(frozen=True)

    type: Literal["file"] = "file"
    content: str
    is_binary: bool = False


class Folder(BaseModel):
    """A folder marker. Folders carry no content."""

    model_config = ConfigDict(frozen=True)

    type: Literal["folder"] = "folder"


Dirent = Annotated[File | Folder, Field(discriminator="type")]

FileMap = dict[str, Dirent]

FILE_MAP_ADAPTER: TypeAdapter[dict[str, File | Folder]] = TypeAdapter(FileMap)


class FileModification(BaseModel):
    """Change summary for a single modified path.

    Attributes
    ----------
    type : Literal["file", "diff"]
        ``diff`` when ``content`` is a unified diff against the recorded
        original, ``file`` when the diff would be larger than the file and
        the full current content is sent instead.
    content : str
        The diff or the full file content.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["file", "diff"]
    content: str


__all__ = ["FILE_MAP_ADAPTER", "Dirent", "File", "FileMap", "FileModification", "Folder"]
