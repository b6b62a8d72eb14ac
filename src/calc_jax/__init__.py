"""calc-jax public API."""

from .commands import CommandResult, run_command
from .environment import Environment, TrigMode, UserFunction
from .errors import (
    BadFunctionArguments,
    CalcError,
    CalcParseError,
    CalcRuntimeError,
    InvalidOperation,
    InvalidVectorContents,
    MatrixUnequalRowLengths,
    ReservedOperator,
    UnbalancedBracket,
    UnbalancedParenthesis,
    UnknownExpressionShape,
    UnknownIdentifier,
    UnknownOperator,
    WrongArgumentCount,
)
from .evaluator import evaluate, evaluate_tree
from .formatter import format_value
from .lexer import Token, tokenize
from .parser import build_expression_tree, fold, normalize, parse, resolve
from .session import Calculator
from .tree import ExpressionTree, Group, Leaf, NormalizedTree, ResolvedTree
from .values import Matrix, Scalar, Value, ValueKind, Vector, value_info

__all__ = [
    "tokenize",
    "Token",
    "resolve",
    "normalize",
    "fold",
    "build_expression_tree",
    "parse",
    "Leaf",
    "Group",
    "ResolvedTree",
    "NormalizedTree",
    "ExpressionTree",
    "evaluate",
    "evaluate_tree",
    "Environment",
    "TrigMode",
    "UserFunction",
    "Calculator",
    "CommandResult",
    "run_command",
    "format_value",
    "Scalar",
    "Vector",
    "Matrix",
    "Value",
    "ValueKind",
    "value_info",
    "CalcError",
    "CalcParseError",
    "CalcRuntimeError",
    "UnbalancedParenthesis",
    "UnbalancedBracket",
    "UnknownIdentifier",
    "UnknownOperator",
    "InvalidOperation",
    "ReservedOperator",
    "InvalidVectorContents",
    "MatrixUnequalRowLengths",
    "WrongArgumentCount",
    "BadFunctionArguments",
    "UnknownExpressionShape",
]
