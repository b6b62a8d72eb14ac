"""Interactive calculator loop."""

from __future__ import annotations

import argparse
import logging

from .environment import Environment, TrigMode, check_digit_cap
from .session import Calculator

logger = logging.getLogger(__name__)


def _digit_cap_arg(text: str) -> int:
    try:
        return check_digit_cap(int(text))
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _build_calculator(args: argparse.Namespace) -> Calculator:
    env = Environment(trig_mode=args.mode, digit_cap=args.digits)
    return Calculator(env)


def _run_lines(calculator: Calculator, lines: list[str]) -> int:
    status = 0
    for line in lines:
        output = calculator.run_line(line)
        if output:
            print(output)
        if calculator.last_error is not None:
            status = 1
        if calculator.exit_requested:
            break
    return status


def _interactive(calculator: Calculator, prompt: str) -> int:
    while not calculator.exit_requested:
        try:
            line = input(prompt)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue
        output = calculator.run_line(line)
        if output:
            print(output)
    logger.debug("session ended")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        default=[],
        help="evaluate this line and exit (repeatable; lines share one session)",
    )
    parser.add_argument("--digits", type=_digit_cap_arg, default=None, help="digit cap for displayed values")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in TrigMode],
        default=None,
        help="trigonometric mode",
    )
    parser.add_argument("--prompt", default=": ", help="interactive prompt")
    parser.add_argument("-v", "--verbose", action="store_true", help="log tree building and errors")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    calculator = _build_calculator(args)
    if args.command:
        return _run_lines(calculator, args.command)
    return _interactive(calculator, args.prompt)


if __name__ == "__main__":
    raise SystemExit(main())
