"""Structured error types for tree-building/evaluation separation."""

from __future__ import annotations


class CalcError(Exception):
    """Base class for structured calc-jax errors."""


class CalcParseError(CalcError):
    """Structural failure while building the expression tree."""

    def __init__(self, message: str, start: int = -1, end: int = -1) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end

    def __str__(self) -> str:
        if self.start < 0:
            return self.message
        return f"{self.message} at span [{self.start}, {self.end})"


class UnbalancedParenthesis(CalcParseError):
    pass


class UnbalancedBracket(CalcParseError):
    pass


class CalcRuntimeError(CalcError):
    """Generic evaluation failure after a successful tree build."""


class UnknownIdentifier(CalcRuntimeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown identifier: {name}")
        self.name = name


class UnknownOperator(CalcRuntimeError):
    def __init__(self, op: str) -> None:
        super().__init__(f"operator '{op}' does not exist")
        self.op = op


class InvalidOperation(CalcRuntimeError):
    """Shape or value-kind mismatch."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"invalid operation: {detail}")
        self.detail = detail


class ReservedOperator(InvalidOperation):
    """Operator exists in the grammar but has no evaluation semantics yet."""

    def __init__(self, op: str) -> None:
        super().__init__(f"operator '{op}' is reserved and not implemented")
        self.op = op


class InvalidVectorContents(CalcRuntimeError):
    def __init__(self, contents: str) -> None:
        super().__init__(f"cannot contain '{contents}' in vector")
        self.contents = contents


class MatrixUnequalRowLengths(CalcRuntimeError):
    def __init__(self) -> None:
        super().__init__("matrix row lengths are unequal")


class WrongArgumentCount(CalcRuntimeError):
    def __init__(self, expected: int, given: int) -> None:
        super().__init__(f"called function requiring {expected} params with {given} args")
        self.expected = expected
        self.given = given


class BadFunctionArguments(CalcRuntimeError):
    def __init__(self, name: str, detail: str | None = None) -> None:
        message = f"bad arguments for {name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.name = name


class UnknownExpressionShape(CalcRuntimeError):
    """Raised for a tree shape the folder should never produce."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"could not parse expression: {detail}")
        self.detail = detail
