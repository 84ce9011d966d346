"""
Sentence Segmenter

Splits raw text into offset-tagged sentence spans.

Deliberately simple: a split on sentence punctuation and line breaks,
with offsets recovered by searching forward for each trimmed sentence.
When identical sentence text repeats, an offset can point at an earlier
occurrence. That is an accepted approximation, never an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_GUARD_SPLIT = re.compile(r"([.?!\n\r])")
_DOCUMENT_SPLIT = re.compile(r"([.?!\n\r\u05be])")


@dataclass(frozen=True)
class SentenceSpan:
    text: str
    start_offset: int
    end_offset: int
    index: int


def segment(text: str, document_mode: bool = False) -> list[SentenceSpan]:
    """
    Split text into sentence spans.

    Delimiters are period, question mark, exclamation mark, newline and
    carriage return. In document mode the Hebrew maqaf also closes a span.
    Trailing text without a delimiter becomes the final span.
    """
    if not text or not text.strip():
        return []

    splitter = _DOCUMENT_SPLIT if document_mode else _GUARD_SPLIT
    spans: list[SentenceSpan] = []
    offset = 0
    buffer = ""

    def flush(chunk: str) -> None:
        nonlocal offset
        trimmed = chunk.strip()
        if not trimmed:
            return
        start = text.find(trimmed, offset)
        if start < 0:
            start = offset
        end = start + len(trimmed)
        spans.append(SentenceSpan(trimmed, start, end, len(spans)))
        offset = end

    # re.split with a capture group alternates text and delimiter parts
    for i, part in enumerate(splitter.split(text)):
        buffer += part
        if i % 2 == 1:
            flush(buffer)
            buffer = ""
    flush(buffer)

    if not spans:
        trimmed = text.strip()
        start = text.find(trimmed)
        spans.append(SentenceSpan(trimmed, start, start + len(trimmed), 0))

    return spans
