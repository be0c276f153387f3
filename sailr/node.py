"""Syntax tree nodes built by the parser."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from sailr.ptr_record import DEFAULT_REXP_ENCODING
from sailr.ptr_table import PtrTable
from sailr.script_loc import ScriptLoc

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INT_RE = re.compile(r"\s*[+-]?\d+")


class NodeType(enum.Enum):
    """Kinds of syntax tree node."""

    PRGM = enum.auto()
    STMT = enum.auto()
    INT = enum.auto()
    DBL = enum.auto()
    STR = enum.auto()
    REXP = enum.auto()
    IDENT = enum.auto()
    FCALL = enum.auto()
    FARG = enum.auto()
    OP = enum.auto()
    UNIOP = enum.auto()
    LET = enum.auto()
    IF = enum.auto()
    NULL = enum.auto()


@dataclass(eq=False)
class TreeNode:
    """A node: a terminal value or operator name, child nodes and a next sibling.

    Children by type: PRGM [body]; STMT [stmt]; FCALL [ident, arg];
    FARG [expr]; OP [left, right]; UNIOP [operand]; LET [lhs, rhs];
    IF [cond, then, else].
    """

    type: NodeType
    value: Any = None
    children: list[Optional[TreeNode]] = field(default_factory=list)
    sibling: Optional[TreeNode] = None
    loc: ScriptLoc = field(default_factory=ScriptLoc)
    _last: Optional[TreeNode] = field(default=None, repr=False)

    def siblings(self) -> Iterator[TreeNode]:
        """Yield this node and every node that follows it in the sibling chain."""
        node: Optional[TreeNode] = self
        while node is not None:
            yield node
            node = node.sibling


def char_to_int(num: str) -> int:
    """Parse a decimal integer that must fit in 32 bits."""
    if not num or _INT_RE.fullmatch(num) is None:
        raise ValueError(f"not a valid int number: {num!r}")
    value = int(num)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError(f"number out of int range: {num!r}")
    return value


def char_to_double(num: str) -> float:
    """Parse a decimal number."""
    if not num or num != num.rstrip() or "_" in num:
        raise ValueError(f"not a valid decimal number: {num!r}")
    try:
        return float(num)
    except ValueError:
        try:
            return float.fromhex(num)
        except ValueError:
            raise ValueError(f"not a valid decimal number: {num!r}") from None


def new_prgm(body: TreeNode) -> TreeNode:
    return TreeNode(NodeType.PRGM, children=[body])


def new_stmt(node: TreeNode) -> TreeNode:
    stmt = TreeNode(NodeType.STMT, children=[node])
    stmt._last = stmt
    return stmt


def pushback_stmt(stmts: TreeNode, stmt: TreeNode) -> TreeNode:
    """Append stmt to the statement chain headed by stmts."""
    last = stmts._last if stmts._last is not None else stmts
    last.sibling = stmt
    stmts._last = stmt
    return stmts


def new_int(text: str) -> TreeNode:
    return TreeNode(NodeType.INT, char_to_int(text))


def new_double(text: str) -> TreeNode:
    return TreeNode(NodeType.DBL, char_to_double(text))


def new_nan_double() -> TreeNode:
    return TreeNode(NodeType.DBL, float("nan"))


def new_str(text: str, table: PtrTable) -> TreeNode:
    """Register a string literal in the table; the node holds its key."""
    record = table.create_anonym_string(text)
    return TreeNode(NodeType.STR, record.key)


def new_rexp(
    pattern: str, table: PtrTable, encoding: str = DEFAULT_REXP_ENCODING
) -> TreeNode:
    """Register a regular expression literal in the table; the node holds its key."""
    record = table.create_anonym_rexp(pattern, encoding)
    return TreeNode(NodeType.REXP, record.key)


def new_ident(name: str) -> TreeNode:
    return TreeNode(NodeType.IDENT, name)


def new_fcall(ident: TreeNode, arg: TreeNode) -> TreeNode:
    return TreeNode(NodeType.FCALL, children=[ident, arg])


def new_farg(arg: TreeNode) -> TreeNode:
    return TreeNode(NodeType.FARG, children=[arg])


def pushback_farg(first: TreeNode, new: TreeNode) -> TreeNode:
    """Append an argument node to the argument chain starting at first."""
    *_, last = first.siblings()
    last.sibling = new
    return first


def new_op(op: str, left: TreeNode, right: TreeNode) -> TreeNode:
    return TreeNode(NodeType.OP, op, [left, right])


def new_uniop(op: str, operand: TreeNode) -> TreeNode:
    return TreeNode(NodeType.UNIOP, op, [operand])


def new_let(lhs: TreeNode, rhs: TreeNode) -> TreeNode:
    return TreeNode(NodeType.LET, children=[lhs, rhs])


def new_if(
    cond: TreeNode, then: Optional[TreeNode], otherwise: Optional[TreeNode]
) -> TreeNode:
    return TreeNode(NodeType.IF, children=[cond, then, otherwise])


def new_null() -> TreeNode:
    return TreeNode(NodeType.NULL)


def count_num_farg(fcall_node: TreeNode) -> int:
    """Number of arguments passed by a function call node."""
    arg = fcall_node.children[1]
    if arg.type is NodeType.NULL:
        return 0
    if arg.type is not NodeType.FARG:
        raise ValueError(f"unexpected node under function call: {arg.type.name}")
    return sum(1 for _ in arg.siblings())