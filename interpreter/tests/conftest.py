#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from textwrap import dedent

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from bl_ast import Program
from bl_evaluator import evaluate
from bl_object import Object
from bl_parser import Parser


@pytest.fixture
def parse_program():
    """Parse source text and return (program, errors).

    Usage:
        def test_something(parse_program):
            program, errors = parse_program("1 + 2;")
            assert errors == []
    """

    def _parse(src: str) -> tuple[Program, list[str]]:
        parser = Parser.from_source(dedent(src))
        program = parser.parse_program()
        return program, parser.errors

    return _parse


@pytest.fixture
def eval_source():
    """Parse and evaluate source text; fails the test on parse errors."""

    def _eval(src: str) -> Object:
        parser = Parser.from_source(dedent(src))
        program = parser.parse_program()
        assert parser.errors == [], parser.errors
        return evaluate(program)

    return _eval


def has_error_code(errors, code: str) -> bool:
    """Check if any diagnostic message contains the given code.

    Args:
        errors: List of diagnostic message strings
        code: Code string like "PAR-0010" or "[PAR-0010]"

    Returns:
        True if any message contains the code
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in msg for msg in errors)
