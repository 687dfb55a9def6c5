"""Pager line model: headers, body text, part headings and separators.

Messages are laid out one after another in thread order. The first line of
each message (its ``From`` header) marks the message start; part headings
mark attachments that can be highlighted, saved, or opened.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from ..ansi import char_display_width
from ..thread_model.types import Message, Part
from .highlight import colorize_diff, is_diff_part

URL_RE = re.compile(r"(?:https?|ftp)://[^\s<>\"'`]+|mailto:[^\s<>\"'`]+")
_URL_TRAILING = ".,;:!?)]}>'\""

PAGER_HEADERS = (
    ("From", "from_"),
    ("Subject", "subject"),
    ("Date", "date"),
    ("To", "to"),
    ("Cc", "cc"),
    ("Reply-To", "reply_to"),
)


class LineKind(Enum):
    HEADER = "header"
    TEXT = "text"
    PART = "part"
    BLANK = "blank"


@dataclass(frozen=True)
class PagerLine:
    message: Message
    kind: LineKind
    text: str = ""
    header_name: str = ""
    starts_message: bool = False
    quote_level: int = 0
    part: Part | None = None
    urls: tuple[tuple[int, int], ...] = ()
    styled: str | None = None

    @property
    def message_id(self) -> str:
        return self.message.message_id

    @property
    def is_quoted(self) -> bool:
        return self.quote_level > 0

    def url_text(self, index: int) -> str:
        start, end = self.urls[index]
        return self.text[start:end]

    def search_text(self) -> str:
        if self.kind is LineKind.HEADER:
            return f"{self.header_name}: {self.text}"
        return self.text


def quote_level(text: str) -> int:
    """Count leading ``>`` markers, allowing spaces between them."""
    level = 0
    for ch in text:
        if ch == ">":
            level += 1
        elif ch == " " and level:
            continue
        else:
            break
    return level


def find_urls(text: str) -> tuple[tuple[int, int], ...]:
    spans: list[tuple[int, int]] = []
    for match in URL_RE.finditer(text):
        start, end = match.span()
        while end > start and text[end - 1] in _URL_TRAILING:
            end -= 1
        if end > start:
            spans.append((start, end))
    return tuple(spans)


def hard_wrap(text: str, cols: int) -> list[str]:
    """Split ``text`` into chunks of at most ``cols`` display columns."""
    if cols <= 0 or not text:
        return [text]
    chunks: list[str] = []
    current: list[str] = []
    col = 0
    for ch in text.expandtabs(8):
        width = char_display_width(ch, col)
        if col + width > cols and current:
            chunks.append("".join(current))
            current = []
            col = 0
        current.append(ch)
        col += width
    chunks.append("".join(current))
    return chunks


def part_heading(part: Part) -> str:
    label = part.content_type
    if part.filename:
        label += f"; {part.filename}"
    return f"[-- {label} --]"


def _text_lines(message: Message, content: str, cols: int) -> Iterator[PagerLine]:
    for raw_line in content.splitlines():
        raw_line = raw_line.rstrip("\r")
        level = quote_level(raw_line)
        for chunk in hard_wrap(raw_line, cols):
            yield PagerLine(
                message=message,
                kind=LineKind.TEXT,
                text=chunk,
                quote_level=level,
                urls=find_urls(chunk),
            )


def _diff_lines(message: Message, content: str, cols: int) -> list[PagerLine]:
    plain = content.splitlines()
    styled = colorize_diff(content)
    if styled is None or len(styled) != len(plain):
        return list(_text_lines(message, content, cols))
    return [
        PagerLine(message=message, kind=LineKind.TEXT, text=text, styled=ansi, urls=find_urls(text))
        for text, ansi in zip(plain, styled)
    ]


def _part_lines(message: Message, index: int, part: Part, cols: int, colour: bool) -> list[PagerLine]:
    lines: list[PagerLine] = []
    is_text = part.content is not None and part.content_type.startswith("text/")
    if not (index == 0 and part.content_type == "text/plain" and is_text):
        lines.append(PagerLine(message=message, kind=LineKind.PART, text=part_heading(part), part=part))
    if part.content is None:
        return lines
    if colour and is_diff_part(part.content_type, part.filename):
        lines.extend(_diff_lines(message, part.content, cols))
    else:
        lines.extend(_text_lines(message, part.content, cols))
    return lines


def message_lines(message: Message, cols: int, *, colour: bool = True) -> list[PagerLine]:
    """Lay out a single message (not its replies)."""
    lines: list[PagerLine] = []
    for name, attr in PAGER_HEADERS:
        value = getattr(message.headers, attr)
        if not value and name not in {"From", "Subject"}:
            continue
        lines.append(
            PagerLine(
                message=message,
                kind=LineKind.HEADER,
                text=value,
                header_name=name,
                starts_message=not lines,
            )
        )
    lines.append(PagerLine(message=message, kind=LineKind.BLANK))
    for index, part in enumerate(message.body):
        lines.extend(_part_lines(message, index, part, cols, colour))
    lines.append(PagerLine(message=message, kind=LineKind.BLANK))
    return lines


def flatten_messages(messages: Iterable[Message]) -> Iterator[Message]:
    """Yield messages depth-first, parents before replies."""
    for message in messages:
        yield message
        yield from flatten_messages(message.replies)


def build_pager_lines(messages: Sequence[Message], cols: int, *, colour: bool = True) -> list[PagerLine]:
    lines: list[PagerLine] = []
    for message in flatten_messages(messages):
        lines.extend(message_lines(message, cols, colour=colour))
    return lines
