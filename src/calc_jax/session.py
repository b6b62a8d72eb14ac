"""Line-level session: commands, tree building, evaluation and ``ans``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .commands import CommandResult, run_command
from .environment import Environment
from .errors import CalcError
from .evaluator import defines_function, evaluate_tree
from .formatter import format_value
from .lexer import tokenize
from .parser import ANS_NAME, build_expression_tree
from .values import Value

logger = logging.getLogger(__name__)


@dataclass
class Calculator:
    """Callable wrapper that evaluates lines in a persistent environment."""

    env: Environment = field(default_factory=Environment)
    exit_requested: bool = False
    last_error: CalcError | None = None

    def __call__(self, line: str) -> Value | CommandResult | None:
        """Run one line; errors propagate to the caller.

        Returns None for a blank line, a ``CommandResult`` for a command and
        the evaluated value otherwise. Values (but not function definitions)
        become the new ``ans``.
        """
        tokens = tokenize(line)
        if not tokens:
            return None

        command = run_command(tokens, self.env)
        if command is not None:
            logger.debug("command %r -> %r", tokens[0].text, command.status)
            if command.exit:
                self.exit_requested = True
            return command

        tree = build_expression_tree(tokens)
        logger.debug("tree for %r: %s", line, tree.flat_string())
        value = evaluate_tree(tree.root, self.env)
        if defines_function(tree):
            return CommandResult("function defined")
        self.env[ANS_NAME] = value
        return value

    def run_line(self, line: str) -> str:
        """Run one line and render its outcome, reporting errors as text."""
        self.last_error = None
        try:
            outcome = self(line)
        except CalcError as err:
            logger.info("line %r failed: %s", line, err)
            self.last_error = err
            return f"error: {err}"
        if outcome is None:
            return ""
        if isinstance(outcome, CommandResult):
            return "" if outcome.exit else outcome.status
        return format_value(outcome, self.env.digit_cap)
