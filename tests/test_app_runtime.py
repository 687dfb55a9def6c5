"""Tests for interactive session bootstrap.

Terminal control and the event loop are patched; these check the wiring
between the store, the screen, and the loop.
"""

from __future__ import annotations

import unittest
from unittest import mock

from lazymail.message_update import MessageUpdate
from lazymail.notmuch.errors import NotmuchError
from lazymail.runtime import open_thread_pager
from lazymail.runtime.app import SessionOptions
from lazymail.thread_pager.state import History
from lazymail.ui_theme import PLAIN_THEME
from thread_fixtures import FakeStore, chain


class OpenThreadPagerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fake_sys = mock.MagicMock()
        self.fake_sys.stdin.fileno.return_value = 10
        self.fake_sys.stdout.fileno.return_value = 11
        sys_patcher = mock.patch("lazymail.runtime.app.sys", self.fake_sys)
        sys_patcher.start()
        self.addCleanup(sys_patcher.stop)
        terminal_patcher = mock.patch("lazymail.runtime.app.TerminalController")
        self.terminal_cls = terminal_patcher.start()
        self.addCleanup(terminal_patcher.stop)
        self.store = FakeStore([chain("a", "b", "c")])
        self.options = SessionOptions(theme=PLAIN_THEME, ascii_graphics=True)

    def test_session_runs_loop_in_raw_mode(self) -> None:
        history = History(["earlier"])

        def fake_loop(screen, info, context):
            self.assertEqual(screen.message, MessageUpdate.info("Showing 3 messages."))
            self.assertIs(info.search_history, history)
            self.assertTrue(context.settings.ascii_graphics)
            self.assertIs(context.store, self.store)
            return True, info.search_history, screen

        with mock.patch("lazymail.runtime.app.run_thread_pager_loop", side_effect=fake_loop):
            need_refresh, returned = open_thread_pager(self.store, "thread:1", self.options, history)

        self.assertTrue(need_refresh)
        self.assertIs(returned, history)
        self.terminal_cls.assert_called_once_with(10, 11)
        self.terminal_cls.return_value.raw_mode.assert_called_once()

    def test_final_warning_is_printed_after_leaving(self) -> None:
        def fake_loop(screen, info, context):
            screen.update_message(MessageUpdate.warning("Encountered problems while applying tags."))
            return True, info.search_history, screen

        with mock.patch("lazymail.runtime.app.run_thread_pager_loop", side_effect=fake_loop):
            open_thread_pager(self.store, "thread:1", self.options)

        written = "".join(call.args[0] for call in self.fake_sys.stderr.write.call_args_list)
        self.assertIn("Encountered problems while applying tags.", written)

    def test_fetch_errors_happen_before_raw_mode(self) -> None:
        self.store.fail_show = True
        with self.assertRaises(NotmuchError):
            open_thread_pager(self.store, "thread:1", self.options)
        self.terminal_cls.assert_not_called()


if __name__ == "__main__":
    unittest.main()
