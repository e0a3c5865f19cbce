"""Command-line quoting against a pair snapshot.

Usage:
    amm-engine quote-out --pair pair.json --token 0x... --amount 1000000
    amm-engine quote-in --pair pair.json --token 0x... --amount 1000000
    amm-engine invariant --balance0 1000 --balance1 1000 [--amp 200000]

Results are printed as JSON on stdout, logs go to stderr.

Exit codes:
    0 - Quote computed
    1 - Invalid input (malformed snapshot, unknown token, insufficient reserves, ...)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from amm_engine.config import EngineConfig
from amm_engine.errors import AMMError
from amm_engine.math.stable_math import calculate_invariant
from amm_engine.models.pair import Pair
from amm_engine.models.snapshot import PairSnapshot, parse_pair
from amm_engine.models.token import Token, TokenAmount

logger = structlog.get_logger()


def configure_logging(level_name: str) -> None:
    """Configure structlog for console output on stderr."""
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_pair(path: Path, config: EngineConfig) -> Pair:
    with open(path) as f:
        data = json.load(f)
    return parse_pair(data, config)


def _find_token(pair: Pair, address: str) -> Token:
    address = address.lower()
    for token in (pair.token0, pair.token1):
        if token.address == address:
            return token
    raise AMMError(f"Token {address} is not part of pair {pair.token0}/{pair.token1}")


def _quote_result(amount: TokenAmount, new_pair: Pair) -> dict[str, Any]:
    return {
        "token": amount.token.address,
        "amount": str(amount.raw),
        "exact": amount.to_exact(),
        "pair": PairSnapshot.from_pair(new_pair).model_dump(mode="json", by_alias=True),
    }


def _cmd_quote_out(args: argparse.Namespace, config: EngineConfig) -> dict[str, Any]:
    pair = _load_pair(args.pair, config)
    token_in = _find_token(pair, args.token)
    amount_out, new_pair = pair.get_output_amount(TokenAmount(token_in, args.amount))
    return _quote_result(amount_out, new_pair)


def _cmd_quote_in(args: argparse.Namespace, config: EngineConfig) -> dict[str, Any]:
    pair = _load_pair(args.pair, config)
    token_out = _find_token(pair, args.token)
    amount_in, new_pair = pair.get_input_amount(TokenAmount(token_out, args.amount))
    return _quote_result(amount_in, new_pair)


def _cmd_invariant(args: argparse.Namespace, config: EngineConfig) -> dict[str, Any]:
    amp = config.default_amplification_coefficient if args.amp is None else args.amp
    invariant = calculate_invariant(args.balance0, args.balance1, amp)
    return {"invariant": str(invariant), "amplificationCoefficient": amp}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amm-engine",
        description="Quote swaps against a constant-product or stable pair snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text, token_help in (
        ("quote-out", "Quote output for an exact input", "Input token address"),
        ("quote-in", "Quote input for an exact output", "Output token address"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--pair", type=Path, required=True, help="Pair snapshot JSON file")
        sub.add_argument("--token", required=True, help=token_help)
        sub.add_argument("--amount", type=int, required=True, help="Raw amount in token decimals")

    sub = subparsers.add_parser("invariant", help="Compute the stable invariant D")
    sub.add_argument("--balance0", type=int, required=True, help="Balance of token0 (18 decimals)")
    sub.add_argument("--balance1", type=int, required=True, help="Balance of token1 (18 decimals)")
    sub.add_argument("--amp", type=int, default=None, help="A * A_PRECISION (default from config)")

    return parser


_COMMANDS = {
    "quote-out": _cmd_quote_out,
    "quote-in": _cmd_quote_in,
    "invariant": _cmd_invariant,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = EngineConfig.from_env()
    configure_logging("DEBUG" if args.verbose else config.log_level)

    try:
        result = _COMMANDS[args.command](args, config)
    except (AMMError, ArithmeticError, ValidationError, OSError, ValueError) as err:
        logger.error("command_failed", command=args.command, error=str(err))
        print(f"Error: {err}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0
