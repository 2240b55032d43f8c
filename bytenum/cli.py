"""
`bytenum` command-line calculator.

    bytenum calc 123456789 '*' 987654321
    bytenum sqrt 1000000000000
    bytenum prime 7919
    bytenum hex -10
    bytenum digit 12345 2

Operands are decimal strings and are parsed by `BigInt.from_decimal`, so
values of any size work.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from .config import get_config, load_config, set_config
from .core.bigint import BigInt
from .errors import DivisionByZeroError, InvalidDigitError, NegativeSquareRootError

logger = logging.getLogger(__name__)

_OPERATORS: dict[str, Callable[[BigInt, BigInt], BigInt]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a / b,
    "%": lambda a, b: a % b,
}

_EXIT_ERROR = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="bytenum", description="Arbitrary-precision integer calculator.")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level.")
    ap.add_argument("--config", type=Path, default=None, help="YAML config file (see bytenum.config).")
    sub = ap.add_subparsers(dest="cmd", required=True)

    calc = sub.add_parser("calc", help="Evaluate A OP B.")
    calc.add_argument("a")
    calc.add_argument("op", choices=sorted(_OPERATORS))
    calc.add_argument("b")

    sqrt = sub.add_parser("sqrt", help="Integer square root (floor).")
    sqrt.add_argument("n")
    sqrt.add_argument("--ignore-sign", action="store_true", help="Take the root of |N|.")

    prime = sub.add_parser("prime", help="Trial-division primality test.")
    prime.add_argument("n")

    hex_ = sub.add_parser("hex", help="Uppercase hex, two digits per byte.")
    hex_.add_argument("n")

    digit = sub.add_parser("digit", help="Decimal digit at INDEX (0 = least significant).")
    digit.add_argument("n")
    digit.add_argument("index", type=int)

    return ap.parse_args(argv)


def _run(args: argparse.Namespace) -> str:
    if args.cmd == "calc":
        a = BigInt.from_decimal(args.a)
        b = BigInt.from_decimal(args.b)
        return str(_OPERATORS[args.op](a, b))
    n = BigInt.from_decimal(args.n)
    if args.cmd == "sqrt":
        return str(n.sqrt(ignore_sign=bool(args.ignore_sign)))
    if args.cmd == "prime":
        return "prime" if n.is_prime() else "not prime"
    if args.cmd == "hex":
        return n.to_hex()
    if args.cmd == "digit":
        return str(n.digit(args.index))
    raise SystemExit(f"unknown command: {args.cmd}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.config is not None:
        try:
            set_config(load_config(args.config))
        except (OSError, TypeError, ValueError) as exc:
            sys.stderr.write(f"bytenum: cannot load config {args.config}: {exc}\n")
            return _EXIT_ERROR

    level = logging.DEBUG if args.verbose else get_config().log_level_number
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logger.debug("command %s", args.cmd)

    try:
        print(_run(args))
    except (DivisionByZeroError, InvalidDigitError, NegativeSquareRootError, IndexError) as exc:
        sys.stderr.write(f"bytenum: {exc}\n")
        return _EXIT_ERROR
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
