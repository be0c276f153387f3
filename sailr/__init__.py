"""Pointer table, syntax tree and stack-machine code generation for the sailr language."""

__version__ = "0.1.0"

__all__ = [
    "script_loc",
    "ptr_record",
    "ptr_table",
    "node",
    "instructions",
    "parser_state",
    "gen_code",
]