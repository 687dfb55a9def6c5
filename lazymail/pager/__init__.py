"""Message pager: flat, scrollable rendering of a thread's message bodies."""

from .lines import LineKind, PagerLine, build_pager_lines, find_urls, quote_level
from .pager import MessagePager, SearchKind

__all__ = [
    "LineKind",
    "MessagePager",
    "PagerLine",
    "SearchKind",
    "build_pager_lines",
    "find_urls",
    "quote_level",
]
