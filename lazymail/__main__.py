"""Module entrypoint for ``python -m lazymail``.

Argument parsing, logging setup and the notmuch client live in ``lazymail.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
