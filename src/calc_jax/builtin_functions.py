"""Catalog of built-in named functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Sequence

import jax.numpy as jnp

from .environment import Environment, TrigMode
from .errors import BadFunctionArguments, UnknownIdentifier, WrongArgumentCount
from .values import Scalar, Value


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    arity: int | None  # None: one or more arguments
    impl: Callable[[list[float], Environment], object]


def _to_radians(x, env: Environment):
    return jnp.deg2rad(x) if env.trig_mode is TrigMode.DEG else x


def _from_radians(x, env: Environment):
    return jnp.rad2deg(x) if env.trig_mode is TrigMode.DEG else x


def _unary(kernel) -> Callable[[list[float], Environment], object]:
    return lambda args, env: kernel(jnp.asarray(args[0], dtype=jnp.float64))


def _trig(kernel) -> Callable[[list[float], Environment], object]:
    return lambda args, env: kernel(_to_radians(jnp.asarray(args[0], dtype=jnp.float64), env))


def _inverse_trig(kernel) -> Callable[[list[float], Environment], object]:
    return lambda args, env: _from_radians(kernel(jnp.asarray(args[0], dtype=jnp.float64)), env)


def _reduce(kernel) -> Callable[[list[float], Environment], object]:
    return lambda args, env: kernel(jnp.asarray(args, dtype=jnp.float64))


_BUILTINS: Final[dict[str, BuiltinFunction]] = {
    fn.name: fn
    for fn in (
        BuiltinFunction("sin", 1, _trig(jnp.sin)),
        BuiltinFunction("cos", 1, _trig(jnp.cos)),
        BuiltinFunction("tan", 1, _trig(jnp.tan)),
        BuiltinFunction("asin", 1, _inverse_trig(jnp.arcsin)),
        BuiltinFunction("acos", 1, _inverse_trig(jnp.arccos)),
        BuiltinFunction("atan", 1, _inverse_trig(jnp.arctan)),
        BuiltinFunction("sqrt", 1, _unary(jnp.sqrt)),
        BuiltinFunction("abs", 1, _unary(jnp.abs)),
        BuiltinFunction("exp", 1, _unary(jnp.exp)),
        BuiltinFunction("ln", 1, _unary(jnp.log)),
        BuiltinFunction("log", 1, _unary(jnp.log10)),
        BuiltinFunction("floor", 1, _unary(jnp.floor)),
        BuiltinFunction("ceil", 1, _unary(jnp.ceil)),
        BuiltinFunction("max", None, _reduce(jnp.max)),
        BuiltinFunction("min", None, _reduce(jnp.min)),
    )
}


def call_builtin(name: str, args: Sequence[Value], env: Environment) -> Value:
    fn = _BUILTINS.get(name)
    if fn is None:
        raise UnknownIdentifier(name)
    if fn.arity is None:
        if not args:
            raise WrongArgumentCount(1, 0)
    elif len(args) != fn.arity:
        raise WrongArgumentCount(fn.arity, len(args))

    scalars: list[float] = []
    for arg in args:
        if not isinstance(arg, Scalar):
            raise BadFunctionArguments(name, f"expected scalar, got {arg.kind.value}")
        scalars.append(arg.value)
    return Scalar(float(fn.impl(scalars, env)))
