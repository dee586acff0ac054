#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
import sys
from typing import List, Optional, Tuple

from bl_ast import Program
from bl_ast_printer import format_program
from bl_context import InterpreterContext, LogLevel
from bl_diagnostics import Diagnostic
from bl_evaluator import Evaluator
from bl_lexer import Lexer, TokenKind
from bl_logger import log_error, log_stage
from bl_object import is_error
from bl_parser import Parser
from bl_repl import start


def _read_source(args: argparse.Namespace) -> str:
    if args.expr is not None:
        return args.expr
    return sys.stdin.read()


def _source_name(args: argparse.Namespace) -> str:
    return "<expr>" if args.expr is not None else "<stdin>"


def print_diagnostic_with_snippet(diag: Diagnostic, lines: List[str], context: InterpreterContext) -> None:
    # First line: header
    log_error(context, diag.format())

    if diag.line is None:
        return
    line_idx = diag.line - 1
    if not (0 <= line_idx < len(lines)):
        return

    src_line = lines[line_idx]

    # "N | ..." gutter, wide enough for multi-digit line numbers
    width = max(5, len(str(diag.line)))
    log_error(context, f"{diag.line:>{width}} | {src_line}")

    if diag.column is None:
        return

    start_col = max(1, diag.column)
    if diag.end_line == diag.line and diag.end_column is not None:
        end_col = max(start_col + 1, diag.end_column)
    else:
        end_col = start_col + 1

    caret_prefix = " " * width + " | " + " " * (start_col - 1)
    log_error(context, caret_prefix + "^" * (end_col - start_col))


def build_interpreter_context(args: argparse.Namespace) -> InterpreterContext:
    """Build an InterpreterContext from command-line arguments."""
    verbosity = getattr(args, "verbosity", 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return InterpreterContext(
        log_rich_format=getattr(args, "log", False),
        log_level=log_level,
    )


def _parse_args_source(args: argparse.Namespace) -> Tuple[Optional[Program], InterpreterContext]:
    """Parse the requested source, reporting diagnostics; returns (None, context) on errors."""
    context = build_interpreter_context(args)
    name = _source_name(args)
    source = _read_source(args)

    log_stage(context, "Parsing", name)
    parser = Parser(Lexer(source, filename=name), filename=name, context=context)
    program = parser.parse_program()
    if parser.diagnostics:
        lines = source.splitlines()
        for diag in parser.diagnostics:
            print_diagnostic_with_snippet(diag, lines, context)
        return None, context
    return program, context


def cmd_run(args: argparse.Namespace) -> int:
    """Parse and evaluate a program, printing its value."""
    program, context = _parse_args_source(args)
    if program is None:
        return 1

    log_stage(context, "Evaluating", _source_name(args))
    value = Evaluator(context).evaluate(program)
    if is_error(value):
        log_error(context, value.inspect())
        return 1
    print(value.inspect())
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """
    Print the parsed program.

    By default, prints the source-like rendering; with --tree, prints the
    indented node dump instead.
    """
    program, _ = _parse_args_source(args)
    if program is None:
        return 1
    if args.tree:
        print(format_program(program))
    else:
        print(program)
    return 0


def cmd_tok(args: argparse.Namespace) -> int:
    """Dump lexer tokens."""
    source = _read_source(args)
    for tok in Lexer(source, filename=_source_name(args)).tokenize():
        if not args.include_eof and tok.kind is TokenKind.EOF:
            continue
        # Format: line:col: KIND  'text'
        print(f"{tok.line}:{tok.column}:\t{tok.kind.name:<10} {tok.text!r}")
    return 0


def cmd_repl(args: argparse.Namespace) -> int:
    """Run the interactive loop on stdin/stdout."""
    context = build_interpreter_context(args)
    try:
        start(sys.stdin, sys.stdout, context)
    # Handle Ctrl-C gracefully
    except KeyboardInterrupt:
        return 130
    return 0


def _add_source_arg(parser: argparse.ArgumentParser) -> None:
    """Add the -e/--expr source argument."""
    parser.add_argument(
        "-e", "--expr",
        default=None,
        help="Source text to process (default: read all of stdin)",
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="bli", description="basedlang interpreter")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")

    ###########################
    # repl command
    ###########################
    p_repl = subparsers.add_parser("repl", help="Start the interactive loop")
    p_repl.set_defaults(func=cmd_repl)

    ###########################
    # run command
    ###########################
    p_run = subparsers.add_parser("run", help="Evaluate a program and print its value", aliases=["eval"])
    _add_source_arg(p_run)
    p_run.set_defaults(func=cmd_run)

    ###########################
    # ast command
    ###########################
    p_ast = subparsers.add_parser("ast", help="Print the parsed program")
    _add_source_arg(p_ast)
    p_ast.add_argument("--tree", "-t", action="store_true",
                       help="Print the indented node dump instead of source-like text")
    p_ast.set_defaults(func=cmd_ast)

    ###########################
    # tok command
    ###########################
    p_tok = subparsers.add_parser("tok", help="Dump lexer tokens", aliases=["tokens"])
    _add_source_arg(p_tok)
    p_tok.add_argument("--include-eof", "-E", action="store_true",
                       help="Include the EOF token in the output")
    p_tok.set_defaults(func=cmd_tok)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
