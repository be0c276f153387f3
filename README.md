# sailr

`sailr` is the compiler core of a small scripting language for data
manipulation. It keeps the language's named values in a table, builds
syntax trees, and turns a tree into a list of stack-machine instructions.

## Modules

- `sailr.script_loc`: `ScriptLoc`, a span of source text (first and last line
  and column). `describe()` gives a readable form of it.
- `sailr.ptr_record`: `PtrType` (`INT`, `DBL`, `STR`, `REXP`, `NULL`, `INFO`),
  `Rexp` (a pattern compiled with Python's `re` module that remembers its last
  match through `search()` and forgets it with `reset()`) and `PtrRecord`, a
  named value with an extra slot. A record can `update()`, `set_extra()`,
  `swap()` its main value and extra slot, report a one-letter `type_code()`
  (`i`, `d`, `s`, `r`, `n`, `f`), `reset_rexp()` and `describe()` itself.
- `sailr.ptr_table`: `PtrTable`, an ordered table of records that starts with
  a header record named `_HEAD_OF_UTHASH_`. It creates and updates integers,
  doubles, strings and nulls (`create_int`, `create_double`, `create_string`,
  `create_null`, `update_int`, `update_double`, `update_string`), stores
  anonymous string and regex literals under generated keys such as
  `STR000000000001` and `REXP00000000001` (`create_anonym_string`,
  `create_anonym_rexp`), looks records up (`find`, `get_type`, `is_null`,
  `read_string`, `in`, `len`, iteration), deletes them (`delete`,
  `delete_except`, `clear`) and prints them (`show_all`). It also keeps a bit
  set of the types that null values were turned into
  (`change_null_updated_by_type`, `null_updated`, `reset_null_updated`).
- `sailr.node`: `NodeType`, `TreeNode` and the tree constructors
  `new_prgm`, `new_stmt`, `pushback_stmt`, `new_int`, `new_double`,
  `new_nan_double`, `new_str`, `new_rexp`, `new_ident`, `new_fcall`,
  `new_farg`, `pushback_farg`, `new_op`, `new_uniop`, `new_let`, `new_if`,
  `new_null`, plus `count_num_farg`, `char_to_int` (decimal, 32-bit range)
  and `char_to_double`. String and regex literals are registered in a
  `PtrTable`; their nodes hold the generated key.
- `sailr.instructions`: the instruction set `VmCmd`, single instructions
  `VmInst`, and `InstList`, a growable instruction list (`cat`, `get`,
  `set_loc_to_last`, `show_all`, `to_code`), with builders such as
  `command`, `push_ival`, `push_dval`, `push_pp_num`, `push_pp_str`,
  `push_pp_rexp`, `push_null`, `label`, `fjmp` and `jmp`.
- `sailr.parser_state`: `ParserState`, which holds the source name, the
  table, the tree and the regex encoding, and records the variables a
  program assigns (`add_lhs_var`, `lhs_varnames`), reads (`add_rhs_var`,
  `rhs_varnames`) or uses at all (`varnames`), in the order first met.
- `sailr.gen_code`: `gen_code(tree, table)` and `CodeGenerator`, which walk a
  tree and return its `InstList`; a program ends with `END`. Operator names
  such as `PLUS`, `MULT`, `EQ` or `REXP_MATCH` map to commands through
  `convert_op`. `if` statements use labels `L1`, `L2`, … handed out by
  `CodeGenerator.new_label()`.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example

Compiling `y = x + 1` followed by `z = "hello"`:

```python
from sailr.ptr_table import PtrTable
from sailr import node
from sailr.gen_code import gen_code

table = PtrTable()
table.create_int("x", 10, None)
table.create_null("y")
table.create_null("z")

let_y = node.new_let(
    node.new_ident("y"),
    node.new_op("PLUS", node.new_ident("x"), node.new_int("1")),
)
let_z = node.new_let(node.new_ident("z"), node.new_str("hello", table))

stmts = node.pushback_stmt(node.new_stmt(let_y), node.new_stmt(let_z))
program = node.new_prgm(stmts)

code = gen_code(program, table)
code.show_all()
instructions = code.to_code()
```

`to_code()` returns a tuple of independent copies of the instructions.

## Errors

- `sailr.gen_code.CodeGenError` is raised for an unknown operator, a variable
  missing from the table or of an unsuitable type, a function name that is
  too long, or an unexpected node under a function call.
- `PtrTable` raises `KeyError` for a missing key and `TypeError` when a record
  does not hold the kind of value asked for.
- `char_to_int` and `char_to_double` raise `ValueError` for text that is not
  a valid number or an integer outside the 32-bit range.

## What this package does not do

- It has no parser: there is no tokenizer or grammar that reads script text.
  Trees are built with the constructors in `sailr.node`, and nothing fills
  `ParserState.tree` or its variable lists for you.
- It does not execute code: there is no virtual machine or stack, and no
  built-in or external functions behind `FCALL` instructions.
- It has no command-line program.

## Tests

```
pytest
```