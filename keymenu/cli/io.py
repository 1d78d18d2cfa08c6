from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from functools import partial
import sys
from typing import Callable

import readchar

KeyFunc = Callable[[], str]
PrintFunc = Callable[[str], None]
IsATTYFunc = Callable[[], bool]

# Ctrl-D arrives as a key in raw mode; an empty read is a closed stream.
_EOF_KEYS = frozenset({"", "\x04"})


def _stream_isatty(name: str) -> bool:
    """Whether ``sys.<name>`` is a terminal; a missing stream counts as not."""
    checker = getattr(getattr(sys, name, None), "isatty", None)
    return callable(checker) and bool(checker())


@dataclass(slots=True)
class MenuIO:
    key_func: KeyFunc = field(default_factory=lambda: readchar.readkey)
    print_func: PrintFunc = field(default_factory=lambda: print)
    stdin_isatty: IsATTYFunc = field(
        default_factory=lambda: partial(_stream_isatty, "stdin")
    )
    stdout_isatty: IsATTYFunc = field(
        default_factory=lambda: partial(_stream_isatty, "stdout")
    )

    def read_key(self, prompt: str, choices: Collection[str]) -> str:
        """Show ``prompt`` once, then block until a key in ``choices`` is pressed.

        Keys outside ``choices`` are ignored. Ctrl-D or an empty read means the
        input is exhausted and raises ``EOFError``.
        """
        if not choices:
            raise ValueError("choices must not be empty")
        self.write(prompt)
        while True:
            key = self.key_func()
            if key in _EOF_KEYS:
                raise EOFError("no more input")
            if key in choices:
                return key

    def write(self, message: str) -> None:
        self.print_func(message)

    def is_interactive(self) -> bool:
        return self.stdin_isatty() and self.stdout_isatty()
