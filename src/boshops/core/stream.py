"""Splitting of newline-delimited JSON result streams.

Task results are not a JSON array: they are zero or more independent JSON
objects, one per line. `split_records` turns such a body into raw chunks
without decoding them, so a malformed line is only reported when (and if)
it is decoded.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Any, Iterator

from boshops.core.errors import DecodeError


@dataclass(frozen=True)
class RawRecord:
    """
    One undecoded line of a result stream.

    Attributes:
        index: 0-based line number in the body (blank lines are counted).
        text: The line content (bytes are kept undecoded until decode_record).
    """

    index: int
    text: bytes


class RecordStream:
    """Lazy, restartable view over the non-blank lines of a result body."""

    def __init__(self, raw: bytes | str):
        self._raw = raw.encode("utf-8") if isinstance(raw, str) else raw

    def __iter__(self) -> Iterator[RawRecord]:
        for index, line in enumerate(io.BytesIO(self._raw)):
            line = line.strip()
            if line:
                yield RawRecord(index=index, text=line)

    def __repr__(self) -> str:
        return f"RecordStream({len(self._raw)} bytes)"


def split_records(raw: bytes | str | None) -> RecordStream:
    """Split a newline-delimited JSON body into raw chunks, in order."""
    return RecordStream(raw or b"")


def decode_record(record: RawRecord) -> dict[str, Any]:
    """
    Decode one raw chunk into a JSON object.

    Raises:
        DecodeError: If the line is not valid UTF-8 JSON or not an object.
    """
    try:
        value = json.loads(record.text.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise DecodeError(f"invalid UTF-8: {exc}", index=record.index) from exc
    except json.JSONDecodeError as exc:
        raise DecodeError(f"malformed JSON: {exc.msg}", index=record.index) from exc
    if not isinstance(value, dict):
        raise DecodeError(
            f"expected a JSON object, got {type(value).__name__}", index=record.index
        )
    return value
