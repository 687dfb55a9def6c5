"""Errors raised while talking to the notmuch store."""

from __future__ import annotations


class NotmuchError(RuntimeError):
    """A notmuch invocation failed or produced output we cannot parse."""
