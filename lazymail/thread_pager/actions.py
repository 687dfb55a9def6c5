"""What the thread pager asks its event loop to do after a key."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..message_update import MessageUpdate, UpdateKind
from ..thread_model.tags import TagGroups
from ..thread_model.types import Message, Part


class ReplyKind(Enum):
    DIRECT = "direct"
    GROUP = "group"
    LIST = "list"


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Resize:
    pass


@dataclass(frozen=True)
class StartReply:
    message: Message
    kind: ReplyKind


@dataclass(frozen=True)
class PromptTag:
    initial: str


@dataclass(frozen=True)
class PromptSavePart:
    part: Part


@dataclass(frozen=True)
class PromptOpenPart:
    part: Part


@dataclass(frozen=True)
class PromptOpenUrl:
    url: str


@dataclass(frozen=True)
class PromptSearch:
    pass


@dataclass(frozen=True)
class RefreshResults:
    pass


@dataclass(frozen=True)
class Leave:
    """Exit the pager; ``tag_groups`` maps each delta set to its message ids."""

    tag_groups: TagGroups = field(default_factory=dict)


ThreadPagerAction = (
    Continue
    | Resize
    | StartReply
    | PromptTag
    | PromptSavePart
    | PromptOpenPart
    | PromptOpenUrl
    | PromptSearch
    | RefreshResults
    | Leave
)

__all__ = [
    "Continue",
    "Leave",
    "MessageUpdate",
    "PromptOpenPart",
    "PromptOpenUrl",
    "PromptSavePart",
    "PromptSearch",
    "PromptTag",
    "RefreshResults",
    "ReplyKind",
    "Resize",
    "StartReply",
    "ThreadPagerAction",
    "UpdateKind",
]
