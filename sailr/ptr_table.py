"""Table of named records holding the values a script reads and writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from sailr.ptr_record import (
    ANONYM_KEY_WIDTH,
    DEFAULT_REXP_ENCODING,
    HEAD_KEY,
    MAX_KEY_LEN,
    PtrRecord,
    PtrType,
    Rexp,
)


@dataclass
class TableInfo:
    """Bookkeeping kept by the table's header record."""

    str_counter: int = 0
    rexp_counter: int = 0
    null_updated: int = 0

    def __str__(self) -> str:
        return (
            f"str_counter {self.str_counter}, rexp_counter {self.rexp_counter}, "
            f"null_updated {self.null_updated}"
        )


def _normalize_key(key: str) -> str:
    return key if len(key) + 1 <= MAX_KEY_LEN else key[: MAX_KEY_LEN - 1]


def _anonym_key(prefix: str, counter: int) -> str:
    digits = ANONYM_KEY_WIDTH - len(prefix) - 1
    return f"{prefix}{counter:0{digits}d}"[: ANONYM_KEY_WIDTH - 1]


class PtrTable:
    """Ordered mapping from keys to records, starting with a header record."""

    def __init__(self) -> None:
        self._records: dict[str, PtrRecord] = {}
        head = PtrRecord(HEAD_KEY, TableInfo(), PtrType.INFO)
        self._records[head.key] = head

    # --- internal helpers -------------------------------------------------

    @property
    def _info(self) -> TableInfo:
        head = self._records.get(HEAD_KEY)
        if head is None or head.type is not PtrType.INFO:
            raise LookupError("table has no header record")
        return head.value

    def _require(self, key: str) -> PtrRecord:
        record = self.find(key)
        if record is None:
            raise KeyError(key)
        return record

    # --- creation and update ---------------------------------------------

    def add(self, key: str, value: Any, type: PtrType) -> PtrRecord:
        """Create a record, or replace the value and type of an existing one."""
        type_ = PtrType(type)
        record = self.find(key)
        if record is None:
            record = PtrRecord(_normalize_key(key), value, type_)
            self._records[record.key] = record
        else:
            record.update(value, type_)
        return record

    def create_int(self, key: str, ival: int, extra: Optional[float] = None) -> PtrRecord:
        """Store an integer; a given extra value fills the record's double slot."""
        record = self.add(key, int(ival), PtrType.INT)
        if extra is not None:
            record.set_extra(float(extra), PtrType.DBL)
        return record

    def create_double(self, key: str, dval: float, extra: Optional[int] = None) -> PtrRecord:
        """Store a double; a given extra value fills the record's integer slot."""
        record = self.add(key, float(dval), PtrType.DBL)
        if extra is not None:
            record.set_extra(int(extra), PtrType.INT)
        return record

    def update_int(self, key: str, ival: int) -> None:
        """Overwrite the integer held by an existing record."""
        record = self._require(key)
        if record.type is not PtrType.INT:
            raise TypeError(f"record {key!r} does not hold an integer")
        record.value = int(ival)

    def update_double(self, key: str, dval: float) -> None:
        """Overwrite the double held by an existing record."""
        record = self._require(key)
        if record.type is not PtrType.DBL:
            raise TypeError(f"record {key!r} does not hold a double")
        record.value = float(dval)

    def create_string(self, key: str, text: str) -> PtrRecord:
        """Store a string under key."""
        return self.add(key, str(text), PtrType.STR)

    def create_anonym_string(self, text: str) -> PtrRecord:
        """Store a string under a freshly generated key and mark it anonymous."""
        info = self._info
        info.str_counter += 1
        record = self.add(_anonym_key("STR", info.str_counter), str(text), PtrType.STR)
        record.anonym = True
        return record

    def create_anonym_rexp(
        self, pattern: str, encoding: str = DEFAULT_REXP_ENCODING
    ) -> PtrRecord:
        """Compile a pattern, store it under a generated key and mark it anonymous."""
        info = self._info
        info.rexp_counter += 1
        rexp = Rexp(pattern, encoding)
        record = self.add(_anonym_key("REXP", info.rexp_counter), rexp, PtrType.REXP)
        record.anonym = True
        return record

    def update_string(self, key: str, text: str) -> None:
        """Replace the string held by an existing string record."""
        record = self._require(key)
        if record.type is not PtrType.STR:
            raise TypeError(f"record {key!r} with non-string is updated with string")
        record.value = str(text)

    def read_string(self, key: str) -> str:
        """Return the string held under key."""
        record = self._require(key)
        if record.type is not PtrType.STR:
            raise TypeError(f"record {key!r} does not hold a string")
        return record.value

    def create_null(self, key: str) -> PtrRecord:
        """Create a record holding no value, or clear an existing one."""
        return self.add(key, None, PtrType.NULL)

    # --- lookup ------------------------------------------------------------

    def find(self, key: str) -> Optional[PtrRecord]:
        """Return the record under key, or None."""
        return self._records.get(_normalize_key(key))

    def get_type(self, key: str) -> PtrType:
        """Type of the record under key."""
        return self._require(key).type

    def is_null(self, key: str) -> bool:
        """Whether the record under key holds no value."""
        return self.get_type(key) is PtrType.NULL

    # --- deletion ----------------------------------------------------------

    def delete(self, key: str) -> None:
        """Remove the record under key."""
        normalized = _normalize_key(key)
        if normalized not in self._records:
            raise KeyError(key)
        del self._records[normalized]

    def delete_except(self, keys: Iterable[str]) -> None:
        """Remove every record whose key is not among keys."""
        kept = set(keys)
        self._records = {k: r for k, r in self._records.items() if k in kept}

    def clear(self) -> None:
        """Remove every record, the header included."""
        self._records.clear()

    # --- display -----------------------------------------------------------

    def show_all(self) -> None:
        """Print a line for each record."""
        for record in self:
            print(record.describe())

    # --- null tracking -----------------------------------------------------

    def change_null_updated_by_type(self, type: PtrType) -> None:
        """Note that a null value was turned into a value of the given type."""
        type_ = PtrType(type)
        if not PtrType.INT <= type_ <= PtrType.REXP:
            raise ValueError(f"null cannot be converted to {type_.name}")
        self._info.null_updated |= 1 << int(type_)

    def null_updated(self) -> int:
        """Bit set of the types nulls were converted to."""
        return self._info.null_updated

    def reset_null_updated(self) -> None:
        """Clear the record of null conversions."""
        self._info.null_updated = 0

    # --- container protocol ------------------------------------------------

    def __iter__(self) -> Iterator[PtrRecord]:
        return iter(list(self._records.values()))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _normalize_key(key) in self._records

    def __len__(self) -> int:
        return len(self._records)