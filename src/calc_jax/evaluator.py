"""Recursive evaluator over folded expression trees."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from .builtin_functions import call_builtin
from .environment import Environment
from .errors import (
    InvalidOperation,
    InvalidVectorContents,
    MatrixUnequalRowLengths,
    UnknownExpressionShape,
    UnknownIdentifier,
    UnknownOperator,
    WrongArgumentCount,
)
from .formatter import format_value
from .lexer import Token
from .operations import negate, operate
from .parser import ASSIGNMENT_OPS, UNARY_OPS, build_expression_tree, parse
from .tree import ExpressionTree, Group, Leaf, Node, is_leaf_kind, is_name, is_op
from .values import Matrix, Scalar, Value, Vector

_DEFINITION_RESULT: Final[Scalar] = Scalar(0.0)


def _build_literal(children: tuple[Node, ...], env: Environment) -> Value:
    columns: list[list[float]] = []
    col = 0
    for node in children[1:]:
        if is_leaf_kind(node, "COMMA"):
            continue
        if is_leaf_kind(node, "SEMI"):
            col = 0
            continue
        element = evaluate_tree(node, env)
        if not isinstance(element, Scalar):
            raise InvalidVectorContents(format_value(element, env.digit_cap))
        if col < len(columns):
            columns[col].append(element.value)
        else:
            columns.append([element.value])
        col += 1

    height = len(columns[0]) if columns else 0
    if any(len(column) != height for column in columns):
        raise MatrixUnequalRowLengths()

    if not columns:
        return Vector()
    if len(columns) == 1:
        return Vector(tuple(columns[0]))
    # A comma-only literal such as [1,2] lands here as a one-row Matrix.
    return Matrix(tuple(tuple(column) for column in columns))


def split_arguments(node: Node) -> list[Node]:
    """Split a call's argument expression on its top-level commas."""
    if not isinstance(node, Group) or node.is_bracket_literal:
        return [node]
    if not node.children:
        return []
    segments: list[Node] = []
    current: list[Node] = []
    for child in node.children:
        if is_leaf_kind(child, "COMMA"):
            segments.append(Group(tuple(current)))
            current = []
        else:
            current.append(child)
    segments.append(Group(tuple(current)))
    return segments


def _parameter_names(node: Node) -> tuple[str, ...] | None:
    if is_name(node):
        return (node.text,)
    if not isinstance(node, Group) or node.is_bracket_literal:
        return None
    names: list[str] = []
    expect_name = True
    for child in node.children:
        if expect_name and is_name(child):
            names.append(child.text)
        elif not expect_name and is_leaf_kind(child, "COMMA"):
            pass
        else:
            return None
        expect_name = not expect_name
    if node.children and expect_name:
        return None
    return tuple(names)


def _function_signature(node: Node) -> tuple[str, tuple[str, ...]] | None:
    """Return ``(name, params)`` if ``node`` has the shape ``name(params)``."""
    if not isinstance(node, Group) or len(node) != 2 or node.is_bracket_literal:
        return None
    callee, params = node.children
    if not is_name(callee):
        return None
    names = _parameter_names(params)
    if names is None:
        return None
    return callee.text, names


def _assignment_sides(nodes: tuple[Node, Node, Node]) -> tuple[Node, Node]:
    lhs, op, rhs = nodes
    return (lhs, rhs) if op.text == "=" else (rhs, lhs)


def defines_function(tree: ExpressionTree | Node) -> bool:
    """True when the tree is a top-level function definition."""
    node: Node = tree.root if isinstance(tree, ExpressionTree) else tree
    while isinstance(node, Group) and len(node) == 1:
        node = node.children[0]
    if not isinstance(node, Group) or len(node) != 3 or not is_op(node.children[1], *ASSIGNMENT_OPS):
        return False
    target, _ = _assignment_sides(node.children)
    return _function_signature(target) is not None


def _assign(nodes: tuple[Node, Node, Node], env: Environment) -> Value:
    target, value_node = _assignment_sides(nodes)

    signature = _function_signature(target)
    if signature is not None:
        name, params = signature
        env.define_function(name, params, value_node)
        return _DEFINITION_RESULT

    value = evaluate_tree(value_node, env)
    if not is_name(target):
        raise InvalidOperation("invalid variable name")
    env[target.text] = value
    return value


def _call(callee: Leaf, argument: Node, env: Environment) -> Value:
    # Arguments and body run in a frame; nothing written there reaches the caller.
    frame = env.call_frame()
    args = [evaluate_tree(arg, frame) for arg in split_arguments(argument)]

    function = env.lookup_function(callee.text)
    if function is None:
        return call_builtin(callee.text, args, env)

    if len(function.params) != len(args):
        raise WrongArgumentCount(len(function.params), len(args))
    for param, arg in zip(function.params, args):
        frame[param] = arg
    return evaluate_tree(function.body, frame)


def evaluate_tree(node: Node, env: Environment) -> Value:
    """Evaluate one node, mutating ``env`` through assignments and definitions.

    Recursion through user functions is unbounded; runaway recursion surfaces
    as Python's ``RecursionError``.
    """
    if isinstance(node, Leaf):
        if node.kind == "NUMBER":
            return Scalar(float(node.text))
        try:
            return env[node.text]
        except KeyError:
            raise UnknownIdentifier(node.text) from None

    children = node.children
    if node.is_bracket_literal:
        return _build_literal(children, env)

    arity = len(children)
    if arity == 0:
        return Scalar(0.0)
    if arity == 1:
        return evaluate_tree(children[0], env)
    if arity == 2:
        left, right = children
        if is_op(left, *UNARY_OPS):
            if left.text != "-":
                raise UnknownOperator(left.text)
            return negate(evaluate_tree(right, env))
        if is_name(left):
            return _call(left, right, env)
        raise UnknownExpressionShape(f"left: {left.flat_string()}; right: {right.flat_string()};")
    if arity == 3:
        lhs, op, rhs = children
        if is_op(op, *ASSIGNMENT_OPS):
            return _assign(children, env)
        if isinstance(op, Leaf):
            left_value = evaluate_tree(lhs, env)
            right_value = evaluate_tree(rhs, env)
            return operate(op.text, left_value, right_value)
    raise UnknownExpressionShape(node.flat_string())


def evaluate(source: str | Iterable[Token] | ExpressionTree, env: Environment | None = None) -> Value:
    """Build (if needed) and evaluate one line against ``env``.

    Without an environment a fresh default one is used and discarded.
    """
    if env is None:
        env = Environment()
    if isinstance(source, str):
        tree = parse(source)
    elif isinstance(source, ExpressionTree):
        tree = source
    else:
        tree = build_expression_tree(source)
    return evaluate_tree(tree.root, env)
