"""Virtual machine instructions and the instruction lists built from them."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from sailr.script_loc import ScriptLoc

MAX_FUNC_NAME_LEN = 256


class VmCmd(enum.Enum):
    """Commands understood by the virtual machine."""

    NOP = enum.auto()
    PUSH_IVAL = enum.auto()
    PUSH_DVAL = enum.auto()
    PUSH_PP_NUM = enum.auto()
    PUSH_PP_STR = enum.auto()
    PUSH_PP_REXP = enum.auto()
    PUSH_NULL = enum.auto()
    ADDX = enum.auto()
    SUBX = enum.auto()
    MULX = enum.auto()
    DIVX = enum.auto()
    MODX = enum.auto()
    POWX = enum.auto()
    FAC = enum.auto()
    UMINUS = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    EQ = enum.auto()
    NEQ = enum.auto()
    GT = enum.auto()
    LT = enum.auto()
    GE = enum.auto()
    LE = enum.auto()
    NEG = enum.auto()
    REXP_MATCH = enum.auto()
    STO = enum.auto()
    FCALL = enum.auto()
    LABEL = enum.auto()
    FJMP = enum.auto()
    JMP = enum.auto()
    DISP = enum.auto()
    END = enum.auto()


@dataclass
class VmInst:
    """A single instruction with the operands its command uses."""

    cmd: VmCmd
    ival: int = 0
    dval: float = 0.0
    ptr_key: Optional[str] = None
    label: Optional[str] = None
    fname: Optional[str] = None
    num_arg: int = 0
    loc: ScriptLoc = field(default_factory=ScriptLoc)

    def describe(self) -> str:
        """Return a one-line description of the instruction."""
        name = self.cmd.name
        if self.cmd is VmCmd.PUSH_IVAL:
            return f"{name}\t{self.ival}"
        if self.cmd is VmCmd.PUSH_DVAL:
            return f"{name}\t{self.dval:f}"
        if self.cmd is VmCmd.FCALL:
            return f"{name}\t{self.fname} ({self.num_arg} args)"
        if self.ptr_key is not None:
            return f"{name}\t{self.ptr_key}"
        if self.label is not None:
            return f"{name}\t{self.label}"
        return name


class InstList:
    """An ordered, growable sequence of instructions."""

    def __init__(self, insts: Iterable[VmInst] = ()) -> None:
        self._insts: list[VmInst] = list(insts)

    def cat(self, other: InstList) -> InstList:
        """Append the instructions of other to this list and return this list."""
        self._insts.extend(list(other))
        return self

    def get(self, index: int) -> VmInst:
        """Return the instruction at a zero-based index."""
        if not 0 <= index < len(self._insts):
            raise IndexError(f"instruction index {index} is out of bound")
        return self._insts[index]

    def set_loc_to_last(self, loc: ScriptLoc) -> None:
        """Attach a script location to the last instruction."""
        if not self._insts:
            raise IndexError("instruction list is empty")
        self._insts[-1].loc = loc

    def show_all(self) -> None:
        """Print a line for each instruction."""
        for inst in self._insts:
            print(inst.describe())

    def to_code(self) -> tuple[VmInst, ...]:
        """Return an independent, fixed sequence of the instructions."""
        return tuple(dataclasses.replace(inst) for inst in self._insts)

    def __len__(self) -> int:
        return len(self._insts)

    def __iter__(self) -> Iterator[VmInst]:
        return iter(self._insts)

    def __repr__(self) -> str:
        return f"InstList({self._insts!r})"


def command(cmd: VmCmd) -> InstList:
    """A list holding one operand-less instruction."""
    return InstList([VmInst(VmCmd(cmd))])


def push_ival(ival: int) -> InstList:
    return InstList([VmInst(VmCmd.PUSH_IVAL, ival=int(ival))])


def push_dval(dval: float) -> InstList:
    return InstList([VmInst(VmCmd.PUSH_DVAL, dval=float(dval))])


def push_pp_num(key: str) -> InstList:
    """Push the numeric variable stored in the table under key."""
    return InstList([VmInst(VmCmd.PUSH_PP_NUM, ptr_key=key)])


def push_pp_str(key: str) -> InstList:
    """Push the string stored in the table under key."""
    return InstList([VmInst(VmCmd.PUSH_PP_STR, ptr_key=key)])


def push_pp_rexp(key: str) -> InstList:
    """Push the regular expression stored in the table under key."""
    return InstList([VmInst(VmCmd.PUSH_PP_REXP, ptr_key=key)])


def push_null(key: str) -> InstList:
    """Push the null variable stored in the table under key."""
    return InstList([VmInst(VmCmd.PUSH_NULL, ptr_key=key)])


def label(name: str) -> InstList:
    return InstList([VmInst(VmCmd.LABEL, label=name)])


def fjmp(name: str) -> InstList:
    """Jump to the label when the popped condition is false."""
    return InstList([VmInst(VmCmd.FJMP, label=name)])


def jmp(name: str) -> InstList:
    return InstList([VmInst(VmCmd.JMP, label=name)])