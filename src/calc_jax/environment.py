"""Evaluation environment: variables, user functions and display settings."""

from __future__ import annotations

import math
import os
from collections import ChainMap
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Final

from .tree import Node
from .values import Scalar, Value, as_value


class TrigMode(str, Enum):
    DEG = "deg"
    RAD = "rad"


_DEFAULT_TRIG_MODE: Final[TrigMode] = TrigMode(os.environ.get("CALC_JAX_TRIG_MODE", "deg").strip().lower())
MAX_DIGIT_CAP: Final[int] = 17
_DEFAULT_DIGIT_CAP: Final[int] = min(MAX_DIGIT_CAP, max(0, int(os.environ.get("CALC_JAX_DIGIT_CAP", "9"))))


def check_digit_cap(cap: object) -> int:
    """Return ``cap`` when it is a usable display cap (decimal places), else raise ValueError."""
    if isinstance(cap, bool) or not isinstance(cap, int) or not 0 <= cap <= MAX_DIGIT_CAP:
        raise ValueError(f"digit cap must be a whole number in 0..{MAX_DIGIT_CAP}, got {cap!r}")
    return cap


def default_variables() -> dict[str, Value]:
    return {
        "pi": Scalar(math.pi),
        "PI": Scalar(math.pi),
        "e": Scalar(math.e),
        "E": Scalar(math.e),
        "ans": Scalar(0.0),
    }


@dataclass(frozen=True)
class UserFunction:
    params: tuple[str, ...]
    body: Node


class Environment(MutableMapping[str, Value]):
    """Session state threaded through evaluation.

    The mapping interface covers variables. ``call_frame()`` layers a fresh
    scope over this one: the frame reads every caller binding, but writes land
    in the frame only, so a callee never mutates its caller.
    """

    variables: ChainMap[str, Value]
    functions: ChainMap[str, UserFunction]

    def __init__(
        self,
        data: Mapping[str, object] | None = None,
        *,
        trig_mode: TrigMode | str | None = None,
        digit_cap: int | None = None,
    ) -> None:
        self.trig_mode = _DEFAULT_TRIG_MODE if trig_mode is None else TrigMode(trig_mode)
        self.digit_cap = _DEFAULT_DIGIT_CAP if digit_cap is None else digit_cap
        self._seed = {} if data is None else {name: as_value(value, where=f"env[{name!r}]") for name, value in data.items()}
        self.reset()

    def reset(self) -> None:
        """Drop every user binding and function; keep mode and digit settings."""
        self.variables = ChainMap({**default_variables(), **self._seed})
        self.functions = ChainMap({})

    @property
    def digit_cap(self) -> int:
        return self._digit_cap

    @digit_cap.setter
    def digit_cap(self, cap: int) -> None:
        self._digit_cap = check_digit_cap(cap)

    def call_frame(self) -> "Environment":
        frame = Environment.__new__(Environment)
        frame.trig_mode = self.trig_mode
        frame._digit_cap = self._digit_cap
        frame._seed = self._seed
        frame.variables = self.variables.new_child()
        frame.functions = self.functions.new_child()
        return frame

    @property
    def depth(self) -> int:
        return len(self.variables.maps) - 1

    def define_function(self, name: str, params: tuple[str, ...], body: Node) -> UserFunction:
        function = UserFunction(params=params, body=body)
        self.functions[name] = function
        return function

    def lookup_function(self, name: str) -> UserFunction | None:
        return self.functions.get(name)

    def __getitem__(self, key: str) -> Value:
        return self.variables[key]

    def __setitem__(self, key: str, value: Value) -> None:
        self.variables[key] = as_value(value, where=f"env[{key!r}]")

    def __delitem__(self, key: str) -> None:
        del self.variables[key]

    def __iter__(self):
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)
