"""Command layer that short-circuits a line before tree building."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Final

from .environment import MAX_DIGIT_CAP, Environment, TrigMode
from .formatter import format_value
from .lexer import Token


@dataclass(frozen=True)
class CommandResult:
    status: str
    exit: bool = False


def _set_mode(mode: TrigMode) -> Callable[[Sequence[Token], Environment], CommandResult]:
    def run(args: Sequence[Token], env: Environment) -> CommandResult:
        env.trig_mode = mode
        return CommandResult(f"trig mode: {'degrees' if mode is TrigMode.DEG else 'radians'}")

    return run


def _digits(args: Sequence[Token], env: Environment) -> CommandResult:
    if not args:
        return CommandResult(f"digits: {env.digit_cap}")
    text = args[0].text
    if not text.isdigit() or int(text) > MAX_DIGIT_CAP:
        return CommandResult(f"digits expects a whole number in 0..{MAX_DIGIT_CAP}, got {text!r}")
    env.digit_cap = int(text)
    return CommandResult(f"digits: {env.digit_cap}")


def _clear(args: Sequence[Token], env: Environment) -> CommandResult:
    env.reset()
    return CommandResult("cleared variables and functions")


def _list_vars(args: Sequence[Token], env: Environment) -> CommandResult:
    lines = [f"{name} = {format_value(env[name], env.digit_cap)}" for name in sorted(env)]
    for name in sorted(env.functions):
        function = env.functions[name]
        lines.append(f"{name}({', '.join(function.params)}) = {function.body.flat_string()}")
    return CommandResult("\n".join(lines))


def _quit(args: Sequence[Token], env: Environment) -> CommandResult:
    return CommandResult("exit", exit=True)


# keyword -> (handler, max extra tokens)
_COMMANDS: Final[dict[str, tuple[Callable[[Sequence[Token], Environment], CommandResult], int]]] = {
    "deg": (_set_mode(TrigMode.DEG), 0),
    "degrees": (_set_mode(TrigMode.DEG), 0),
    "rad": (_set_mode(TrigMode.RAD), 0),
    "radians": (_set_mode(TrigMode.RAD), 0),
    "digits": (_digits, 1),
    "clear": (_clear, 0),
    "vars": (_list_vars, 0),
    "exit": (_quit, 0),
    "quit": (_quit, 0),
}


def is_command(tokens: Sequence[Token]) -> bool:
    if not tokens or tokens[0].kind != "NAME":
        return False
    entry = _COMMANDS.get(tokens[0].text)
    return entry is not None and len(tokens) - 1 <= entry[1]


def run_command(tokens: Sequence[Token], env: Environment) -> CommandResult | None:
    """Run the line as a command, or return None when it is an expression.

    Only a whole line made of a keyword (plus its optional argument) counts,
    so names like ``deg`` stay usable inside expressions.
    """
    if not is_command(tokens):
        return None
    handler, _ = _COMMANDS[tokens[0].text]
    return handler(tokens[1:], env)
