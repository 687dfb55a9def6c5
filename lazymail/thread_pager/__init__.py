"""Thread pager: thread list and message pager driven by one key at a time."""

from .actions import (
    Continue,
    Leave,
    PromptOpenPart,
    PromptOpenUrl,
    PromptSavePart,
    PromptSearch,
    PromptTag,
    RefreshResults,
    ReplyKind,
    Resize,
    StartReply,
)
from .controller import sync_thread_to_pager, thread_pager_input
from .lifecycle import (
    apply_search,
    apply_tag_edit,
    commit_tag_groups,
    create_thread_pager,
    leave_thread_pager,
    reopen_thread_pager,
    resize_thread_pager,
    setup_thread_pager,
)
from .state import History, ThreadPagerInfo

__all__ = [
    "Continue",
    "History",
    "Leave",
    "PromptOpenPart",
    "PromptOpenUrl",
    "PromptSavePart",
    "PromptSearch",
    "PromptTag",
    "RefreshResults",
    "ReplyKind",
    "Resize",
    "StartReply",
    "ThreadPagerInfo",
    "apply_search",
    "apply_tag_edit",
    "commit_tag_groups",
    "create_thread_pager",
    "leave_thread_pager",
    "reopen_thread_pager",
    "resize_thread_pager",
    "setup_thread_pager",
    "sync_thread_to_pager",
    "thread_pager_input",
]
