"""Frontmatter codec — a flat, line-oriented ``key: value`` block.

Wire format::

    ---
    key1: value1
    key2: value2
    ---
    <body text>

This is deliberately *not* YAML. Each metadata line is split on the first
colon and the value is trimmed. There is no quoting, escaping, nesting,
list, or multi-line support; anything more elaborate degrades to a
verbatim single-line string.

The codec sits behind the :class:`MetadataCodec` protocol so the lifecycle
layer never depends on this particular format.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

FRONTMATTER_DELIMITER = "---"


class CodecError(ValueError):
    """Raised by a codec that cannot decode a document's metadata block."""


class MetadataCodec(Protocol):
    """Decode/encode the metadata block embedded in a document."""

    def parse(self, text: str) -> tuple[dict[str, str], str]: ...

    def generate(self, metadata: Mapping[str, object | None]) -> str: ...


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r") == FRONTMATTER_DELIMITER


def parse_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split *text* into ``(metadata, body)``.

    The first line must be exactly ``---`` and a later line must close the
    block with ``---``. Lines without a colon, or with nothing before the
    colon, are ignored.

    Returns:
        ``({}, text)`` unchanged if the block is absent or never closed.
    """
    lines = text.split("\n")
    if len(lines) < 2 or not _is_delimiter(lines[0]):
        return {}, text

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            end_idx = i
            break

    if end_idx is None:
        return {}, text

    metadata: dict[str, str] = {}
    for line in lines[1:end_idx]:
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        metadata[key] = value.strip()

    body = "\n".join(lines[end_idx + 1 :])
    return metadata, body


def generate_frontmatter(metadata: Mapping[str, object | None]) -> str:
    """Render *metadata* as a frontmatter block, preserving key order.

    ``None`` values are omitted entirely. The returned text ends with a
    newline after the closing delimiter, ready to be followed by the body.
    """
    lines = [FRONTMATTER_DELIMITER]
    for key, value in metadata.items():
        if value is None:
            continue
        lines.append(f"{key}: {value}")
    lines.append(FRONTMATTER_DELIMITER)
    lines.append("")
    return "\n".join(lines)


class LineFrontmatterCodec:
    """Default :class:`MetadataCodec` backed by the module-level functions."""

    def parse(self, text: str) -> tuple[dict[str, str], str]:
        return parse_frontmatter(text)

    def generate(self, metadata: Mapping[str, object | None]) -> str:
        return generate_frontmatter(metadata)
