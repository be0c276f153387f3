"""Location of a construct within a script's source text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScriptLoc:
    """Span of a construct in the script, from its first to its last character."""

    first_line: int = 0
    first_column: int = 0
    last_line: int = 0
    last_column: int = 0

    def describe(self) -> str:
        """Return a human readable description of the span."""
        return (
            f"approximate script position: from line {self.first_line} "
            f"col {self.first_column} to line {self.last_line} "
            f"col {self.last_column} "
        )

    def __str__(self) -> str:
        return self.describe()