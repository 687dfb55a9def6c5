"""Reply hook: notmuch reply template, ``$EDITOR``, then store as a draft.

External programs run with the TUI suspended. Failures come back as warning
``MessageUpdate`` values instead of exceptions.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import shlex
import subprocess
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..message_update import MessageUpdate
from ..notmuch.errors import NotmuchError
from ..thread_model.types import Message
from ..thread_pager.actions import ReplyKind

logger = logging.getLogger(__name__)

_MAILTO_RE = re.compile(r"<mailto:([^>?]+)")


def list_post_address(message: Message) -> str | None:
    """Return the address from the message's ``List-Post`` header, if any."""
    for name, value in message.headers.rest.items():
        if name.lower() == "list-post":
            match = _MAILTO_RE.search(value)
            if match:
                return match.group(1)
    return None


def address_template_to(template: str, address: str) -> str:
    """Point a reply template at ``address`` only: replace ``To:`` and drop ``Cc:``."""
    head, sep, body = template.partition("\n\n")
    out: list[str] = []
    skipping = False
    for line in head.splitlines():
        if skipping and line[:1] in {" ", "\t"}:
            continue
        skipping = False
        lower = line.lower()
        if lower.startswith("to:"):
            out.append(f"To: {address}")
            skipping = True
        elif lower.startswith("cc:"):
            skipping = True
        else:
            out.append(line)
    return "\n".join(out) + sep + body


def launch_editor(target: Path, suspended: Callable[[], contextlib.AbstractContextManager]) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot edit: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot edit: $EDITOR is empty."

    with suspended():
        try:
            proc = subprocess.run([*cmd, str(target)], check=False)
        except OSError as exc:
            return f"Failed to launch editor: {exc}"
    if proc.returncode != 0:
        return f"{cmd[0]} returned with exit status {proc.returncode}"
    return None


def start_reply(
    store,
    message: Message,
    kind: ReplyKind,
    suspended: Callable[[], contextlib.AbstractContextManager],
) -> MessageUpdate:
    """Compose a reply to ``message`` and store it with the ``draft`` tag."""
    reply_to = "sender" if kind is ReplyKind.DIRECT else "all"
    try:
        template = store.reply_template(message.message_id, reply_to)
    except NotmuchError as exc:
        return MessageUpdate.warning(str(exc))

    if kind is ReplyKind.LIST:
        address = list_post_address(message)
        if address is None:
            return MessageUpdate.warning("No mailing list address.")
        template = address_template_to(template, address)

    fd, name = tempfile.mkstemp(prefix="lazymail-", suffix=".eml")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(template)
        error = launch_editor(path, suspended)
        if error is not None:
            return MessageUpdate.warning(error)
        if path.read_text(encoding="utf-8", errors="replace") == template:
            return MessageUpdate.info("Reply discarded (not edited).")
        store.insert_draft(path)
    except NotmuchError as exc:
        logger.error("saving draft reply to %s failed: %s", message.message_id, exc)
        return MessageUpdate.warning(str(exc))
    finally:
        with contextlib.suppress(OSError):
            path.unlink()
    logger.info("saved %s reply to %s", kind.value, message.message_id)
    return MessageUpdate.info("Draft saved.")
