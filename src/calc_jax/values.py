"""Runtime value model: scalar, vector and column-major matrix."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

import jax
import jax.numpy as jnp

# Values are IEEE doubles; jax defaults to float32 otherwise.
jax.config.update("jax_enable_x64", True)


class ValueKind(str, Enum):
    SCALAR = "scalar"
    VECTOR = "vector"
    MATRIX = "matrix"


@dataclass(frozen=True)
class Scalar:
    value: float
    kind: ClassVar[ValueKind] = ValueKind.SCALAR

    def __float__(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class Vector:
    items: tuple[float, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.VECTOR

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Matrix:
    """Column-major matrix: ``columns[c][r]`` is the entry at row r, column c."""

    columns: tuple[tuple[float, ...], ...]
    kind: ClassVar[ValueKind] = ValueKind.MATRIX

    def __post_init__(self) -> None:
        heights = {len(column) for column in self.columns}
        if len(heights) > 1:
            raise ValueError("Matrix columns must all have the same length")

    @property
    def n_cols(self) -> int:
        return len(self.columns)

    @property
    def n_rows(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    def entry(self, row: int, col: int) -> float:
        return self.columns[col][row]

    def rows(self) -> list[tuple[float, ...]]:
        return [tuple(column[r] for column in self.columns) for r in range(self.n_rows)]


Value = Union[Scalar, Vector, Matrix]


@dataclass(frozen=True)
class ValueInfo:
    kind: ValueKind
    shape: tuple[int, ...]
    rank: int


def shape_of(value: Value) -> tuple[int, ...]:
    """Row-major shape: ``()``, ``(length,)`` or ``(rows, cols)``."""
    if isinstance(value, Scalar):
        return ()
    if isinstance(value, Vector):
        return (len(value.items),)
    return (value.n_rows, value.n_cols)


def value_info(value: Value) -> ValueInfo:
    shape = shape_of(value)
    return ValueInfo(kind=value.kind, shape=shape, rank=len(shape))


def as_jax_array(value: Value) -> jnp.ndarray:
    """Convert to a float64 array; matrices come out as rows x cols."""
    if isinstance(value, Scalar):
        return jnp.asarray(value.value, dtype=jnp.float64)
    if isinstance(value, Vector):
        return jnp.asarray(value.items, dtype=jnp.float64)
    columns = jnp.asarray(value.columns, dtype=jnp.float64).reshape(value.n_cols, value.n_rows)
    return columns.T


def from_jax_array(arr) -> Value:
    arr = jnp.asarray(arr, dtype=jnp.float64)
    if arr.ndim == 0:
        return Scalar(float(arr))
    if arr.ndim == 1:
        return Vector(tuple(float(x) for x in arr.tolist()))
    if arr.ndim == 2:
        return Matrix(tuple(tuple(float(x) for x in column) for column in arr.T.tolist()))
    raise ValueError(f"Arrays of rank {arr.ndim} have no calculator value")


def validate_value(value: object, *, where: str = "value") -> None:
    if isinstance(value, (Scalar, Vector, Matrix)):
        return
    raise TypeError(f"{where} has unsupported runtime type {type(value).__name__}")


def as_value(obj: object, *, where: str = "value") -> Value:
    """Accept calculator values, plain real numbers and rank<=2 arrays."""
    if isinstance(obj, (Scalar, Vector, Matrix)):
        return obj
    if isinstance(obj, bool):
        raise TypeError(f"{where} has unsupported runtime type bool")
    if isinstance(obj, numbers.Real):
        return Scalar(float(obj))
    if isinstance(obj, jnp.ndarray):
        return from_jax_array(obj)
    raise TypeError(f"{where} has unsupported runtime type {type(obj).__name__}")
