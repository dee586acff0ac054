#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

# ==========================================
# Runtime values produced by the evaluator.
# ==========================================

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class ObjectKind(Enum):
    INTEGER = auto()
    BOOLEAN = auto()
    NULL = auto()
    ERROR = auto()
    RETURN_VALUE = auto()


class Object:
    """
    Base class for everything an evaluation can produce.
    Used only as a common marker; concrete kinds are dataclasses below.
    """
    kind: ClassVar[ObjectKind]

    def inspect(self) -> str:
        raise NotImplementedError


class Value(Object):
    """Ordinary data: integers, booleans and null."""
    pass


class Signal(Object):
    """
    Control-flow sentinels (errors, return signals).

    They travel through the evaluator like values but are never valid
    operands; callers check for them with `is_signal`, or `is_error` for
    errors alone.
    """
    pass


@dataclass(frozen=True)
class Integer(Value):
    kind: ClassVar[ObjectKind] = ObjectKind.INTEGER
    value: int

    @staticmethod
    def wrapping(value: int) -> "Integer":
        """Build an Integer, wrapping `value` to signed 64 bits."""
        value = (value - INT64_MIN) % 2 ** 64 + INT64_MIN
        return Integer(value)

    def inspect(self) -> str:
        return str(self.value)


# booleans and null are interned; equality between them is identity
@dataclass(frozen=True, eq=False)
class Boolean(Value):
    kind: ClassVar[ObjectKind] = ObjectKind.BOOLEAN
    value: bool

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, eq=False)
class Null(Value):
    kind: ClassVar[ObjectKind] = ObjectKind.NULL

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True)
class Error(Signal):
    kind: ClassVar[ObjectKind] = ObjectKind.ERROR
    message: str

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


@dataclass(frozen=True)
class ReturnValue(Signal):
    kind: ClassVar[ObjectKind] = ObjectKind.RETURN_VALUE
    value: Object

    def inspect(self) -> str:
        return self.value.inspect()


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_error(obj: Object) -> bool:
    return isinstance(obj, Error)


def is_truthy(obj: Object) -> bool:
    # every integer is truthy, zero included
    return obj is not NULL and obj is not FALSE


def is_signal(obj: Object) -> bool:
    return isinstance(obj, Signal)
