"""Message and thread-line datatypes shared across lazymail modules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

UNREAD_TAG = "unread"
REPLIED_TAG = "replied"
DELETED_TAG = "deleted"
FLAGGED_TAG = "flagged"
DRAFT_TAG = "draft"


@dataclass(frozen=True)
class Headers:
    """Subset of message headers notmuch reports, plus everything else in ``rest``."""

    date: str = ""
    from_: str = ""
    to: str = ""
    cc: str = ""
    bcc: str = ""
    subject: str = ""
    reply_to: str = ""
    references: str = ""
    in_reply_to: str = ""
    rest: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class Part:
    """One body part; ``part_id`` 0 stands for the whole message."""

    message_id: str
    part_id: int
    content_type: str
    content: str | None = None
    filename: str | None = None


@dataclass(frozen=True)
class Message:
    message_id: str
    timestamp: int
    headers: Headers
    tags: tuple[str, ...] = ()
    body: tuple[Part, ...] = ()
    replies: tuple[Message, ...] = ()


class Graphic(Enum):
    """Tree-drawing cell used in front of a thread line."""

    BLANK = "blank"
    VERT = "vert"
    TEE = "tee"
    ELL = "ell"


@dataclass(frozen=True)
class ThreadLine:
    """One row of the thread view.

    ``prev_tags`` are the tags as loaded and never change for the life of the
    line. The four flags are derived from ``curr_tags`` in ``__post_init__``,
    so every ``dataclasses.replace`` that touches the tags re-derives them.
    """

    message: Message
    parent_id: str | None
    clean_from: str
    prev_tags: frozenset[str]
    curr_tags: frozenset[str]
    graphics: tuple[Graphic, ...]
    reldate: str
    subject: str | None
    unread: bool = field(init=False)
    replied: bool = field(init=False)
    deleted: bool = field(init=False)
    flagged: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "unread", UNREAD_TAG in self.curr_tags)
        object.__setattr__(self, "replied", REPLIED_TAG in self.curr_tags)
        object.__setattr__(self, "deleted", DELETED_TAG in self.curr_tags)
        object.__setattr__(self, "flagged", FLAGGED_TAG in self.curr_tags)

    @property
    def message_id(self) -> str:
        return self.message.message_id
