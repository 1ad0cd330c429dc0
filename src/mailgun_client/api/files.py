"""File attachment references for multipart uploads.

A file may be given either as a plain path (optionally with a legacy leading
``@``) or as a mapping ``{"remoteName": ..., "filePath": ...}`` that also sets
the filename the server sees. Both shapes are resolved into a
:class:`FileReference` before any file is opened.
"""

import os
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, List, Mapping, Optional, Sequence, Tuple, Union

from mailgun_client.constants import FILE_FIELDS


@dataclass(frozen=True)
class RemoteFile:
    """Local file uploaded under a different remote filename."""

    remote_name: str
    file_path: Union[str, os.PathLike]


FileSource = Union[str, os.PathLike, RemoteFile, Mapping[str, Any]]

# httpx multipart part: (field name, (filename, content))
MultipartPart = Tuple[str, Tuple[Optional[str], Union[str, bytes, IO[bytes]]]]


@dataclass(frozen=True)
class FileReference:
    """Normalized file part: form field, local path and upload filename."""

    field_name: str
    path: str
    filename: str

    def open(self, stack: ExitStack) -> MultipartPart:
        """Open the file for reading, registering it on ``stack`` for closing."""
        stream = stack.enter_context(open(self.path, "rb"))
        return (self.field_name, (self.filename, stream))


def _strip_at(path: str) -> str:
    # Legacy "@/path/to/file" syntax
    if path.startswith("@"):
        return path[1:]
    return path


def normalize_file(field_name: str, source: FileSource) -> FileReference:
    """Resolve one file source into a :class:`FileReference`.

    Raises:
        ValueError: If a mapping source lacks ``filePath``.
    """
    remote_name: Optional[str] = None

    if isinstance(source, RemoteFile):
        remote_name = source.remote_name
        path = os.fspath(source.file_path)
    elif isinstance(source, Mapping):
        if "filePath" not in source:
            raise ValueError(
                f"File reference for '{field_name}' is missing 'filePath'"
            )
        remote_name = source.get("remoteName")
        path = os.fspath(source["filePath"])
    else:
        path = os.fspath(source)

    path = _strip_at(path)
    filename = remote_name or Path(path).name

    return FileReference(field_name=field_name, path=path, filename=filename)


def collect_files(files: Optional[Mapping[str, Any]]) -> List[FileReference]:
    """Normalize the ``message``/``attachment``/``inline`` groups of ``files``.

    Each group may hold a single source or a sequence of sources. Groups are
    emitted in a fixed order and other keys are ignored.
    """
    references: List[FileReference] = []
    if not files:
        return references

    for field_name in FILE_FIELDS:
        value = files.get(field_name)
        if value is None:
            continue
        if _is_sequence(value):
            for source in value:
                references.append(normalize_file(field_name, source))
        else:
            references.append(normalize_file(field_name, value))

    return references


def data_parts(post_data: Optional[Mapping[str, Any]]) -> List[MultipartPart]:
    """Turn form fields into multipart parts.

    Sequence values produce one part per element, all under the same name.
    """
    parts: List[MultipartPart] = []
    if not post_data:
        return parts

    for name, value in post_data.items():
        values: Sequence[Any] = value if _is_sequence(value) else [value]
        for item in values:
            parts.append((name, (None, _to_content(item))))

    return parts


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _to_content(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, bool):
        value = "true" if value else "false"
    return str(value).encode("utf-8")
