#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Optional

from bl_lexer import Token


DIAGNOSTIC_CODE_FAMILIES = {
    "PAR": [
        "PAR-0010",  # unexpected token
        "PAR-0020",  # no prefix parse function
        "PAR-0030",  # malformed integer literal
    ],
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    filename: Optional[str] = None

    # Primary location (start of the span)
    line: Optional[int] = None
    column: Optional[int] = None

    # Optional end of span (exclusive)
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    # Return the one-line header; snippets are printed at the call site
    def format(self) -> str:
        parts = []
        if self.filename is not None:
            parts.append(self.filename)
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        loc = ":".join(parts)
        if loc:
            loc += ": "
        return f"{loc}{self.kind}: {self.message}"


def diag_from_token(
        kind: str,
        message: str,
        *,
        filename: Optional[str],
        token: Optional[Token],
) -> Diagnostic:
    line = column = end_line = end_column = None
    if token is not None:
        line = token.line
        column = token.column
        end_line = token.line
        end_column = token.column + max(1, len(token.text))
    return Diagnostic(
        kind=kind,
        message=message,
        filename=filename,
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
    )
