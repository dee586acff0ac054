#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import List, Optional, TextIO

from bl_context import InterpreterContext
from bl_evaluator import Evaluator
from bl_lexer import Lexer
from bl_logger import log_debug
from bl_parser import Parser


def print_parser_errors(out: TextIO, errors: List[str]) -> None:
    out.write(" parser errors:\n")
    for msg in errors:
        out.write(f"\t{msg}\n")


def start(stdin: TextIO, stdout: TextIO, context: Optional[InterpreterContext] = None) -> None:
    """
    Read-eval-print loop: one line is one program.

    Parse errors are listed and the line is dropped; otherwise the value
    of the line is printed. Returns at end of input.
    """
    if context is None:
        context = InterpreterContext.default()
    evaluator = Evaluator(context)

    while True:
        stdout.write(context.prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return

        parser = Parser(Lexer(line, filename="<repl>"), filename="<repl>", context=context)
        program = parser.parse_program()
        if parser.errors:
            print_parser_errors(stdout, parser.errors)
            continue
        if not program.stmts:
            continue

        log_debug(context, f"repl: parsed {program}")
        value = evaluator.evaluate(program)
        stdout.write(value.inspect() + "\n")
