"""Arithmetic table over scalar/vector/matrix operand shapes."""

from __future__ import annotations

from typing import Callable, Final

import jax.numpy as jnp

from .errors import InvalidOperation, ReservedOperator, UnknownOperator
from .values import Matrix, Scalar, Value, Vector, as_jax_array, from_jax_array

_RESERVED_OPS: Final[frozenset[str]] = frozenset({"//"})


def _describe(left: Value, op: str, right: Value) -> str:
    return f"{left.kind.value} {op} {right.kind.value}"


def _apply(kernel: Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray], left: Value, right: Value) -> Value:
    return from_jax_array(kernel(as_jax_array(left), as_jax_array(right)))


def _power(left: Value, right: Value) -> Value:
    if isinstance(left, Scalar) and isinstance(right, Scalar):
        return _apply(jnp.power, left, right)
    raise InvalidOperation(_describe(left, "^", right))


def _elementwise(op: str, kernel, verb: str) -> Callable[[Value, Value], Value]:
    def handler(left: Value, right: Value) -> Value:
        if isinstance(left, Scalar) and isinstance(right, Scalar):
            return _apply(kernel, left, right)
        if isinstance(left, Vector) and isinstance(right, Vector):
            if len(left) != len(right):
                raise InvalidOperation(f"{verb} vectors with different size")
            return _apply(kernel, left, right)
        if isinstance(left, Matrix) and isinstance(right, Matrix):
            if (left.n_cols, left.n_rows) != (right.n_cols, right.n_rows):
                raise InvalidOperation(f"{verb} matrices with different size")
            return _apply(kernel, left, right)
        raise InvalidOperation(_describe(left, op, right))

    return handler


def _multiply(left: Value, right: Value) -> Value:
    if isinstance(left, Scalar) or isinstance(right, Scalar):
        return _apply(jnp.multiply, left, right)
    if isinstance(left, Matrix) and isinstance(right, Vector):
        if left.n_cols != len(right):
            raise InvalidOperation("matrix width does not match vector height")
        return _apply(jnp.matmul, left, right)
    if isinstance(left, Matrix) and isinstance(right, Matrix):
        if left.n_cols != right.n_rows:
            raise InvalidOperation("matrix1 width does not match matrix2 height")
        return _apply(jnp.matmul, left, right)
    raise InvalidOperation(_describe(left, "*", right))


def _divide(left: Value, right: Value) -> Value:
    if isinstance(right, Scalar):
        return _apply(jnp.divide, left, right)
    raise InvalidOperation(_describe(left, "/", right))


_OPERATIONS: Final[dict[str, Callable[[Value, Value], Value]]] = {
    "^": _power,
    "+": _elementwise("+", jnp.add, "adding"),
    "-": _elementwise("-", jnp.subtract, "subtracting"),
    "*": _multiply,
    "/": _divide,
}


def operate(op: str, left: Value, right: Value) -> Value:
    """Apply binary operator ``op``; no broadcasting beyond scalar scaling."""
    if op in _RESERVED_OPS:
        raise ReservedOperator(op)
    handler = _OPERATIONS.get(op)
    if handler is None:
        raise UnknownOperator(op)
    return handler(left, right)


def negate(value: Value) -> Value:
    return operate("*", value, Scalar(-1.0))
