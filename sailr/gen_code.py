"""Generation of virtual machine code from the syntax tree."""

from __future__ import annotations

from typing import Callable

from sailr import instructions as ins
from sailr.instructions import MAX_FUNC_NAME_LEN, InstList, VmCmd
from sailr.node import NodeType, TreeNode, count_num_farg
from sailr.ptr_record import PtrType
from sailr.ptr_table import PtrTable


class CodeGenError(Exception):
    """Raised when a tree cannot be turned into code."""


_OPS = {
    "PLUS": VmCmd.ADDX,
    "SUB": VmCmd.SUBX,
    "MULT": VmCmd.MULX,
    "DIV": VmCmd.DIVX,
    "MOD": VmCmd.MODX,
    "POWER": VmCmd.POWX,
    "FACTOR": VmCmd.FAC,
    "UMINUS": VmCmd.UMINUS,
    "AND": VmCmd.AND,
    "OR": VmCmd.OR,
    "EQ": VmCmd.EQ,
    "NEQ": VmCmd.NEQ,
    "GT": VmCmd.GT,
    "LT": VmCmd.LT,
    "GE": VmCmd.GE,
    "LE": VmCmd.LE,
    "NEG": VmCmd.NEG,
    "REXP_MATCH": VmCmd.REXP_MATCH,
}


def convert_op(op_name: str) -> VmCmd:
    """Command for an operator name used in the tree."""
    try:
        return _OPS[op_name]
    except KeyError:
        raise CodeGenError(f"node op has undefined operator: {op_name!r}") from None


class CodeGenerator:
    """Turns syntax trees into instruction lists, resolving names in a table."""

    def __init__(self, table: PtrTable) -> None:
        self.table = table
        self._label_count = 0
        self._handlers: dict[NodeType, Callable[[TreeNode], InstList]] = {
            NodeType.PRGM: self._prgm,
            NodeType.STMT: self._stmt,
            NodeType.INT: self._int,
            NodeType.DBL: self._double,
            NodeType.STR: self._str,
            NodeType.REXP: self._rexp,
            NodeType.IDENT: self._ident,
            NodeType.OP: self._op,
            NodeType.UNIOP: self._uniop,
            NodeType.LET: self._let,
            NodeType.FCALL: self._fcall,
            NodeType.FARG: self._farg,
            NodeType.IF: self._if,
            NodeType.NULL: self._null,
        }

    def new_label(self) -> str:
        """A label name not handed out before by this generator."""
        self._label_count += 1
        return f"L{self._label_count}"

    def generate(self, node: TreeNode) -> InstList:
        """Instruction list for node and everything below it."""
        return self._handlers[node.type](node)

    # --- handlers ----------------------------------------------------------

    def _prgm(self, node: TreeNode) -> InstList:
        return self.generate(node.children[0]).cat(ins.command(VmCmd.END))

    def _stmt(self, node: TreeNode) -> InstList:
        code = InstList()
        for stmt in node.siblings():
            code.cat(self.generate(stmt.children[0]))
        return code

    def _farg(self, node: TreeNode) -> InstList:
        code = InstList()
        for arg in node.siblings():
            code.cat(self.generate(arg.children[0]))
        return code

    @staticmethod
    def _located(code: InstList, node: TreeNode) -> InstList:
        code.set_loc_to_last(node.loc)
        return code

    def _int(self, node: TreeNode) -> InstList:
        return self._located(ins.push_ival(node.value), node)

    def _double(self, node: TreeNode) -> InstList:
        return self._located(ins.push_dval(node.value), node)

    def _str(self, node: TreeNode) -> InstList:
        return self._located(ins.push_pp_str(node.value), node)

    def _rexp(self, node: TreeNode) -> InstList:
        return self._located(ins.push_pp_rexp(node.value), node)

    def _ident(self, node: TreeNode) -> InstList:
        name = node.value
        record = self.table.find(name)
        if record is None:
            raise CodeGenError(f"variable {name!r} is not in the table")
        if record.type in (PtrType.INT, PtrType.DBL):
            code = ins.push_pp_num(name)
        elif record.type is PtrType.STR:
            code = ins.push_pp_str(name)
        elif record.type is PtrType.NULL:
            code = ins.push_null(name)
        else:
            raise CodeGenError(
                f"inappropriate type {record.type.name} for variable {name!r}"
            )
        return self._located(code, node)

    def _op(self, node: TreeNode) -> InstList:
        cmd = convert_op(node.value)
        left, right = node.children
        code = self.generate(left).cat(self.generate(right)).cat(ins.command(cmd))
        return self._located(code, node)

    def _uniop(self, node: TreeNode) -> InstList:
        cmd = convert_op(node.value)
        code = self.generate(node.children[0]).cat(ins.command(cmd))
        return self._located(code, node)

    def _let(self, node: TreeNode) -> InstList:
        lhs, rhs = node.children
        code = self.generate(lhs).cat(self.generate(rhs)).cat(ins.command(VmCmd.STO))
        return self._located(code, node)

    def _fcall(self, node: TreeNode) -> InstList:
        ident, arg = node.children
        fname = ident.value
        if len(fname) >= MAX_FUNC_NAME_LEN:
            raise CodeGenError(
                f"function name is too long: over {MAX_FUNC_NAME_LEN} characters"
            )
        if arg.type is NodeType.FARG:
            code = self.generate(arg)
            num_arg = count_num_farg(node)
        elif arg.type is NodeType.NULL:
            code = InstList()
            num_arg = 0
        else:
            raise CodeGenError(f"unintended node under function call: {arg.type.name}")
        call = ins.command(VmCmd.FCALL)
        inst = call.get(0)
        inst.fname = fname
        inst.num_arg = num_arg
        return self._located(code.cat(call), node)

    def _if(self, node: TreeNode) -> InstList:
        cond, then, otherwise = node.children
        label_l1 = self.new_label()
        label_l2 = self.new_label()
        code = self.generate(cond).cat(ins.fjmp(label_l1))
        if then is not None:
            code.cat(self.generate(then))
        if otherwise is not None:
            code.cat(ins.jmp(label_l2))
        code.cat(ins.label(label_l1))
        if otherwise is not None:
            code.cat(self.generate(otherwise))
            code.cat(ins.label(label_l2))
        return code

    def _null(self, node: TreeNode) -> InstList:
        return InstList()


def gen_code(tree: TreeNode, table: PtrTable) -> InstList:
    """Instruction list for a whole tree."""
    return CodeGenerator(table).generate(tree)