"""State shared between the parser and the code generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sailr.node import TreeNode
from sailr.ptr_record import DEFAULT_REXP_ENCODING
from sailr.ptr_table import PtrTable


@dataclass
class ParserState:
    """The source name, the parsed tree and the variables met while parsing."""

    fname: str
    table: PtrTable
    tree: Optional[TreeNode] = None
    lineno: int = 0
    tline: int = 0
    yynerrs: int = 0
    rexp_encoding: str = DEFAULT_REXP_ENCODING
    _vars: dict[str, None] = field(default_factory=dict, repr=False)
    _lhsvars: dict[str, None] = field(default_factory=dict, repr=False)
    _rhsvars: dict[str, None] = field(default_factory=dict, repr=False)

    def add_lhs_var(self, name: str) -> None:
        """Note a variable that is assigned to."""
        self._lhsvars.setdefault(name)
        self._vars.setdefault(name)

    def add_rhs_var(self, name: str) -> None:
        """Note a variable that is read."""
        self._rhsvars.setdefault(name)
        self._vars.setdefault(name)

    def varnames(self) -> list[str]:
        """All variables, in the order they were first met."""
        return list(self._vars)

    def lhs_varnames(self) -> list[str]:
        """Variables that are assigned to."""
        return list(self._lhsvars)

    def rhs_varnames(self) -> list[str]:
        """Variables that are read."""
        return list(self._rhsvars)