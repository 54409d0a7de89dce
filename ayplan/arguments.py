"""Command-line argument lookup with ``-flag value`` pairs."""

from __future__ import annotations

import re
from collections.abc import Iterable

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf|nan))",
    re.IGNORECASE,
)


class Arguments:
    """Holds a command line and the values that follow each flag.

    Any word that starts with ``-`` and is longer than one character is a
    flag; the word after it is the flag's value.
    """

    def __init__(self, argv: Iterable[str]) -> None:
        words = list(argv)
        self.arguments: list[str] = []
        self.assignments: dict[str, str] = {}
        self.last_guard_test = ""

        items = iter(words)
        for word in items:
            self.arguments.append(word)
            if len(word) > 1 and word.startswith("-"):
                try:
                    value = next(items)
                except StopIteration:
                    raise ValueError(f"flag {word!r} has no value") from None
                self.arguments.append(value)
                self.assignments[word] = value

    def got_guard(self, key: str) -> bool:
        """Is there a value for ``key``? Remembers ``key`` for later lookups."""
        if not key:
            raise ValueError("guard key must not be empty")
        self.last_guard_test = key
        return key in self.assignments

    def _raw(self, key: str | None) -> str:
        if not key:
            if not self.last_guard_test:
                raise ValueError("no key given and no guard tested before")
            key = self.last_guard_test
        try:
            return self.assignments[key]
        except KeyError:
            raise KeyError(key) from None

    def get_int(self, key: str | None = None) -> int:
        """The value of ``key`` (or the last guard) read as an integer."""
        raw = self._raw(key)
        match = _INT_PREFIX.match(raw)
        if match is None:
            raise ValueError(f"not an integer: {raw!r}")
        return int(match.group(1))

    def get_float(self, key: str | None = None) -> float:
        """The value of ``key`` (or the last guard) read as a float."""
        raw = self._raw(key)
        match = _FLOAT_PREFIX.match(raw)
        if match is None:
            raise ValueError(f"not a number: {raw!r}")
        return float(match.group(1))

    def get_bool(self, key: str | None = None) -> bool:
        """The value of ``key`` (or the last guard) read as ``0`` or ``1``."""
        raw = self._raw(key)
        match = _INT_PREFIX.match(raw)
        if match is None or int(match.group(1)) not in (0, 1):
            raise ValueError(f"not a boolean: {raw!r}")
        return bool(int(match.group(1)))

    def get_string(self, key: str | None = None) -> str:
        """The first whitespace-delimited word of the value of ``key``."""
        words = self._raw(key).split()
        return words[0] if words else ""

    def is_argument(self, value: str) -> bool:
        """Does ``value`` appear anywhere on the command line?"""
        return value in self.arguments

    def is_nmap(self, value: str) -> bool:
        """Does ``value`` appear on the command line without being a flag?"""
        return self.is_argument(value) and value not in self.assignments