"""Records held by the pointer table: variables, strings and regular expressions."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Optional

MAX_KEY_LEN = 511
ANONYM_KEY_WIDTH = 16
HEAD_KEY = "_HEAD_OF_UTHASH_"
DEFAULT_REXP_ENCODING = "UTF-8"


class PtrType(enum.IntEnum):
    """Kind of value a record holds."""

    INT = 0
    DBL = 1
    STR = 2
    REXP = 3
    NULL = 4
    INFO = 5


_TYPE_CODES = {
    PtrType.INT: "i",
    PtrType.DBL: "d",
    PtrType.STR: "s",
    PtrType.REXP: "r",
    PtrType.NULL: "n",
    PtrType.INFO: "f",
}


class Rexp:
    """A compiled regular expression that remembers its last match."""

    def __init__(self, pattern: str, encoding: str = DEFAULT_REXP_ENCODING) -> None:
        self.pattern = pattern
        self.encoding = encoding
        self._compiled = re.compile(pattern)
        self.last_match: Optional[re.Match[str]] = None

    def search(self, text: str) -> bool:
        """Search text for the pattern; remember and report whether it matched."""
        self.last_match = self._compiled.search(text)
        return self.last_match is not None

    def reset(self) -> None:
        """Forget the last match."""
        self.last_match = None

    def __repr__(self) -> str:
        return f"Rexp({self.pattern!r}, encoding={self.encoding!r})"


def _truncate_key(key: str) -> str:
    return key if len(key) + 1 <= MAX_KEY_LEN else key[: MAX_KEY_LEN - 1]


def _format_value(value: Any, type_: PtrType) -> str:
    if value is None:
        return "(NULL)"
    if type_ is PtrType.INT:
        return str(int(value))
    if type_ is PtrType.DBL:
        return f"{float(value):f}"
    if type_ is PtrType.REXP:
        return value.pattern
    return str(value)


@dataclass
class PtrRecord:
    """A named value with an optional extra slot of another numeric type."""

    key: str
    value: Any = None
    type: PtrType = PtrType.NULL
    extra: Any = None
    extra_type: PtrType = PtrType.NULL
    anonym: bool = False
    _unused: None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.key = _truncate_key(self.key)
        self.type = PtrType(self.type)
        self.extra_type = PtrType(self.extra_type)
        if self.type is PtrType.NULL:
            self.value = None

    def update(self, value: Any, type: PtrType) -> None:
        """Replace the main value and its type; a NULL type clears the value."""
        self.type = PtrType(type)
        self.value = None if self.type is PtrType.NULL else value

    def set_extra(self, value: Any, type: PtrType) -> None:
        """Set the extra slot and its type."""
        self.extra = value
        self.extra_type = PtrType(type)

    def swap(self) -> None:
        """Exchange the main value with the extra slot."""
        self.value, self.extra = self.extra, self.value
        self.type, self.extra_type = self.extra_type, self.type

    def type_code(self) -> str:
        """One-letter code for the record's type."""
        return _TYPE_CODES[self.type]

    def reset_rexp(self) -> None:
        """Forget the last match of the held regular expression."""
        if self.type is not PtrType.REXP:
            raise TypeError(f"record {self.key!r} does not hold a regular expression")
        self.value.reset()

    def describe(self) -> str:
        """Return a one-line description of the record."""
        anonym = int(self.anonym)
        if self.type in (PtrType.INT, PtrType.DBL):
            return (
                f"KEY:{self.key}\t TYPE:{int(self.type)}\t "
                f"VAL:{_format_value(self.value, self.type)}\t "
                f"(EXTR TYPE:{int(self.extra_type)}\t "
                f"VAL:{_format_value(self.extra, self.extra_type)}) "
                f"[Anonym:{anonym}]"
            )
        if self.type in (PtrType.STR, PtrType.REXP):
            return (
                f"KEY:{self.key}\t TYPE:{int(self.type)}\t "
                f"VAL:{_format_value(self.value, self.type)}\t [Anonym:{anonym}]"
            )
        if self.type is PtrType.INFO:
            return f"KEY:{self.key}\t TYPE:INFO\t VAL:{self.value}"
        return f"KEY:{self.key}\t TYPE:{int(self.type)}\t [Anonym:{anonym}]"