"""Extraction of generated files from assistant text.

Generated text carries files as blocks of the form::

    FILENAME: hello.py
    ```python
    print("hi")
    ```

The scanner walks the text line by line: it looks for a marker line, then an
opening fence (optionally tagged with a language), then captures lines until a
closing fence at the end of a line. Blocks are matched left to right without
overlap.
"""

import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.filesystem import FileSystemState, outputs_path

logger = logging.getLogger(__name__)

FILENAME_MARKER = "FILENAME:"
FENCE = "```"

_MARKER_RE = re.compile(re.escape(FILENAME_MARKER) + r"\s*(\S+)(.*)$")
_OPENING_FENCE_RE = re.compile(r"^```(\w*)$")


class GeneratedFileBatch(BaseModel):
    """Files produced by one extraction pass.

    Args:
        files: Mapping from filename to trimmed content, in match order.
        languages: Mapping from filename to the fence's language tag, when
            one was given. Informational only.
    """

    model_config = ConfigDict(frozen=True)

    files: dict[str, str] = Field(
        default_factory=dict, description="Filename to trimmed content"
    )
    languages: dict[str, str] = Field(
        default_factory=dict, description="Filename to fence language tag"
    )

    @property
    def filenames(self) -> list[str]:
        """Return the extracted filenames in match order."""
        return list(self.files)

    def is_empty(self) -> bool:
        """Return True when nothing was extracted."""
        return not self.files

    def __len__(self) -> int:
        return len(self.files)

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the batch."""
        return {
            "files": dict(self.files),
            "languages": dict(self.languages),
            "file_count": len(self.files),
        }


def _match_opening_fence(line: str) -> re.Match | None:
    return _OPENING_FENCE_RE.match(line.strip())


def _closing_fence_prefix(line: str) -> str | None:
    """Return the text before a closing fence on ``line``, or None.

    A fence closes a block when it ends the line, either alone or after the
    last content. A tagged opening fence (```bash) does not.
    """
    stripped = line.rstrip()
    if not stripped.endswith(FENCE):
        return None
    return stripped[: -len(FENCE)]


def _find_opening_fence(lines: list[str], start: int, inline: str) -> tuple[int, str] | None:
    """Locate the opening fence for a marker.

    The fence may follow the filename on the marker line itself, or sit on the
    next non-blank line.

    Returns:
        Tuple of (index of the first content line, language tag), or None.
    """
    inline = inline.strip()
    if inline:
        match = _match_opening_fence(inline)
        if match is None:
            return None
        return start, match.group(1)

    index = start
    while index < len(lines) and not lines[index].strip():
        index += 1
    if index >= len(lines):
        return None
    match = _match_opening_fence(lines[index])
    if match is None:
        return None
    return index + 1, match.group(1)


def extract_files(text: str) -> GeneratedFileBatch:
    """Scan ``text`` for filename/fence blocks.

    A marker without an opening fence is skipped. A block without a closing
    fence is discarded. When a filename repeats, the later block wins.

    Args:
        text: Generated assistant text.

    Returns:
        The batch of extracted files (possibly empty).
    """
    lines = text.splitlines()
    files: dict[str, str] = {}
    languages: dict[str, str] = {}

    index = 0
    while index < len(lines):
        marker = _MARKER_RE.search(lines[index])
        index += 1
        if marker is None:
            continue

        filename, trailing = marker.group(1), marker.group(2)
        opening = _find_opening_fence(lines, index, trailing)
        if opening is None:
            logger.debug("Marker for %s has no opening fence, skipping", filename)
            continue

        body_start, language = opening
        body_end = body_start
        closing = None
        while body_end < len(lines):
            closing = _closing_fence_prefix(lines[body_end])
            if closing is not None:
                break
            body_end += 1
        if closing is None:
            logger.debug("Block for %s is never closed, discarding", filename)
            index = body_start
            continue

        body = lines[body_start:body_end]
        if closing.strip():
            body.append(closing)
        files[filename] = "\n".join(body).strip()
        if language:
            languages[filename] = language
        else:
            languages.pop(filename, None)
        index = body_end + 1

    return GeneratedFileBatch(files=files, languages=languages)


def stage_files(
    filesystem: FileSystemState, cwd: str, batch: GeneratedFileBatch
) -> FileSystemState:
    """Merge ``batch`` into the outputs directory under ``cwd``."""
    if batch.is_empty():
        return filesystem
    logger.info("Staging %d generated file(s) into %s", len(batch), outputs_path(cwd))
    return filesystem.merge_files(outputs_path(cwd), batch.files)


def extract_and_stage(
    filesystem: FileSystemState, cwd: str, text: str
) -> tuple[FileSystemState, GeneratedFileBatch]:
    """Extract files from ``text`` and stage them under ``cwd``.

    Returns:
        Tuple of (new filesystem, extracted batch).
    """
    batch = extract_files(text)
    return stage_files(filesystem, cwd, batch), batch
