"""Thin wrapper around the ``notmuch`` command-line tool.

Every call is a ``subprocess.run`` of the configured notmuch command. Failures
surface as ``NotmuchError``; callers decide whether they are fatal.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..thread_model.types import Message
from .errors import NotmuchError
from .parsing import loads, parse_messages_list

logger = logging.getLogger(__name__)

NOTMUCH_TIMEOUT_SECONDS = 60.0


def message_id_to_search_term(message_id: str) -> str:
    return 'id:"' + message_id.replace('"', '""') + '"'


def thread_id_to_search_term(thread_id: str) -> str:
    if thread_id.startswith("thread:"):
        return thread_id
    return "thread:" + thread_id


class NotmuchClient:
    """Runs notmuch subcommands for one mail store."""

    def __init__(self, command: str = "notmuch") -> None:
        self.command = command
        self._argv = shlex.split(command) or ["notmuch"]

    def _run(self, args: Sequence[str], *, stdin: bytes | None = None) -> bytes:
        argv = [*self._argv, *args]
        logger.debug("running %s", shlex.join(argv))
        try:
            proc = subprocess.run(
                argv,
                input=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
                timeout=NOTMUCH_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.error("notmuch failed to run: %s", exc)
            raise NotmuchError(f"cannot run {argv[0]}: {exc}") from exc
        if proc.returncode != 0:
            detail = proc.stderr.decode("utf-8", errors="replace").strip()
            logger.error("notmuch %s exited with %d: %s", args[0], proc.returncode, detail)
            raise NotmuchError(detail or f"{argv[0]} {args[0]} returned with exit status {proc.returncode}")
        return proc.stdout

    def show_thread(self, thread_id: str) -> list[Message]:
        """Fetch the message forest of one thread."""
        output = self._run(["show", "--format=json", "--", thread_id_to_search_term(thread_id)])
        messages = parse_messages_list(loads(output.decode("utf-8", errors="replace")))
        logger.debug("thread %s: %d top-level messages", thread_id, len(messages))
        return messages

    def tag_messages(self, tokens: Iterable[str], message_ids: Iterable[str]) -> None:
        """Apply ``+tag``/``-tag`` tokens to every message in ``message_ids``."""
        ordered_tokens = sorted(tokens)
        terms = [message_id_to_search_term(message_id) for message_id in message_ids]
        if not ordered_tokens or not terms:
            return
        query = " or ".join(terms)
        self._run(["tag", *ordered_tokens, "--", query])
        logger.info("tagged %d messages with %s", len(terms), " ".join(ordered_tokens))

    def raw_part(self, message_id: str, part_id: int) -> bytes:
        return self._run(
            ["show", "--format=raw", f"--part={part_id}", message_id_to_search_term(message_id)]
        )

    def expand_part(self, message_id: str, part_id: int, filter_command: str | None = None) -> str:
        """Return the decoded text of a part, optionally piped through a filter."""
        raw = self.raw_part(message_id, part_id)
        if filter_command:
            logger.debug("filtering part %s/%d through %s", message_id, part_id, filter_command)
            try:
                proc = subprocess.run(
                    filter_command,
                    shell=True,
                    input=raw,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.DEVNULL,
                    check=False,
                    timeout=NOTMUCH_TIMEOUT_SECONDS,
                )
            except (OSError, subprocess.SubprocessError) as exc:
                raise NotmuchError(f"cannot run {filter_command}: {exc}") from exc
            if proc.returncode != 0:
                raise NotmuchError(f"{filter_command} returned with exit status {proc.returncode}")
            raw = proc.stdout
        return raw.decode("utf-8", errors="replace")

    def save_part(self, message_id: str, part_id: int, path: Path) -> None:
        data = self.raw_part(message_id, part_id)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise NotmuchError(f"cannot write {path}: {exc}") from exc

    def reply_template(self, message_id: str, reply_to: str = "sender") -> str:
        """Return the reply draft notmuch composes for ``message_id``.

        ``reply_to`` is ``"sender"`` or ``"all"``.
        """
        output = self._run(["reply", f"--reply-to={reply_to}", "--", message_id_to_search_term(message_id)])
        return output.decode("utf-8", errors="replace")

    def insert_draft(self, path: Path) -> None:
        """Store the message in ``path`` as a draft."""
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise NotmuchError(f"cannot read {path}: {exc}") from exc
        self._run(["insert", "+draft", "-inbox", "-unread"], stdin=data)
        logger.info("stored draft from %s", path)
