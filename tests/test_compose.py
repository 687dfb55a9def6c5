"""Tests for the reply hook.

The editor is replaced by a function that edits (or leaves alone) the
temporary draft file.
"""

from __future__ import annotations

import contextlib
import subprocess
import unittest
from pathlib import Path
from unittest import mock

from lazymail.message_update import MessageUpdate
from lazymail.notmuch.errors import NotmuchError
from lazymail.runtime.compose import address_template_to, launch_editor, list_post_address, start_reply
from lazymail.thread_pager.actions import ReplyKind
from thread_fixtures import FakeStore, make_message

LIST_MESSAGE = make_message("a", "Patch", rest={"List-Post": "<mailto:dev@lists.example.com>"})


def _editing(text: str | None):
    def fake_editor(target: Path, suspended) -> None:
        if text is not None:
            target.write_text(text, encoding="utf-8")
        return None

    return fake_editor


class ListAddressTests(unittest.TestCase):
    def test_list_post_address(self) -> None:
        self.assertEqual(list_post_address(LIST_MESSAGE), "dev@lists.example.com")
        self.assertIsNone(list_post_address(make_message("b")))
        self.assertIsNone(list_post_address(make_message("c", rest={"list-post": "NO"})))

    def test_address_template_to_replaces_recipients(self) -> None:
        template = (
            "From: me@example.com\n"
            "To: a@example.com,\n"
            " b@example.com\n"
            "Cc: c@example.com\n"
            "Subject: Re: Patch\n"
            "\n"
            "To: quoted body line\n"
        )
        self.assertEqual(
            address_template_to(template, "dev@lists.example.com"),
            "From: me@example.com\n"
            "To: dev@lists.example.com\n"
            "Subject: Re: Patch\n"
            "\n"
            "To: quoted body line\n",
        )


class StartReplyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = FakeStore([])

    def _reply(self, message, kind, edit_text):
        with mock.patch("lazymail.runtime.compose.launch_editor", side_effect=_editing(edit_text)):
            return start_reply(self.store, message, kind, contextlib.nullcontext)

    def test_edited_reply_is_stored_as_draft(self) -> None:
        update = self._reply(make_message("a"), ReplyKind.DIRECT, "To: a@example.com\n\nThanks!\n")
        self.assertEqual(update, MessageUpdate.info("Draft saved."))
        self.assertEqual(self.store.reply_requests, [("a", "sender")])
        self.assertEqual(self.store.drafts, ["To: a@example.com\n\nThanks!\n"])

    def test_unedited_reply_is_discarded(self) -> None:
        update = self._reply(make_message("a"), ReplyKind.GROUP, None)
        self.assertEqual(update, MessageUpdate.info("Reply discarded (not edited)."))
        self.assertEqual(self.store.reply_requests, [("a", "all")])
        self.assertEqual(self.store.drafts, [])

    def test_list_reply_goes_to_list_address(self) -> None:
        seen: list[str] = []

        def fake_editor(target: Path, suspended) -> None:
            seen.append(target.read_text(encoding="utf-8"))
            target.write_text(seen[0] + "ok\n", encoding="utf-8")

        with mock.patch("lazymail.runtime.compose.launch_editor", side_effect=fake_editor):
            update = start_reply(self.store, LIST_MESSAGE, ReplyKind.LIST, contextlib.nullcontext)

        self.assertEqual(update, MessageUpdate.info("Draft saved."))
        self.assertIn("To: dev@lists.example.com\n", seen[0])
        self.assertNotIn("Cc:", seen[0])

    def test_list_reply_without_list_address(self) -> None:
        update = self._reply(make_message("a"), ReplyKind.LIST, "x")
        self.assertEqual(update, MessageUpdate.warning("No mailing list address."))

    def test_editor_failure_is_a_warning(self) -> None:
        with mock.patch("lazymail.runtime.compose.launch_editor", return_value="vi returned with exit status 1"):
            update = start_reply(self.store, make_message("a"), ReplyKind.DIRECT, contextlib.nullcontext)
        self.assertEqual(update, MessageUpdate.warning("vi returned with exit status 1"))

    def test_store_failure_is_a_warning(self) -> None:
        with mock.patch.object(self.store, "reply_template", side_effect=NotmuchError("no such message")):
            update = self._reply(make_message("a"), ReplyKind.DIRECT, "x")
        self.assertEqual(update, MessageUpdate.warning("no such message"))


class LaunchEditorTests(unittest.TestCase):
    def test_missing_editor(self) -> None:
        with mock.patch.dict("lazymail.runtime.compose.os.environ", {}, clear=True):
            self.assertEqual(
                launch_editor(Path("/tmp/x.eml"), contextlib.nullcontext),
                "Cannot edit: $EDITOR is not set.",
            )

    def test_editor_runs_with_terminal_suspended(self) -> None:
        events: list[str] = []

        @contextlib.contextmanager
        def suspended():
            events.append("suspend")
            yield
            events.append("resume")

        def fake_run(argv, check=False):
            events.append(" ".join(argv))
            return subprocess.CompletedProcess(argv, 0)

        with mock.patch.dict("lazymail.runtime.compose.os.environ", {"EDITOR": "vim -n"}, clear=True), mock.patch(
            "lazymail.runtime.compose.subprocess.run", side_effect=fake_run
        ):
            self.assertIsNone(launch_editor(Path("/tmp/x.eml"), suspended))

        self.assertEqual(events, ["suspend", "vim -n /tmp/x.eml", "resume"])

    def test_editor_exit_status(self) -> None:
        with mock.patch.dict("lazymail.runtime.compose.os.environ", {"EDITOR": "vi"}, clear=True), mock.patch(
            "lazymail.runtime.compose.subprocess.run", return_value=subprocess.CompletedProcess(["vi"], 1)
        ):
            self.assertEqual(
                launch_editor(Path("/tmp/x.eml"), contextlib.nullcontext),
                "vi returned with exit status 1",
            )


if __name__ == "__main__":
    unittest.main()
