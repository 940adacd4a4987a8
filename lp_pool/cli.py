"""Command-line driver for the liquidity pool.

Creates a pool, applies a sequence of operations and prints each result.

Usage:
    lp-pool [--price P] [--min-fee F] [--max-fee F] [--liquidity-target T]
            [--json] [--verbose] [OP ...]

Operations:
    add:<tokens>      deposit base tokens
    remove:<shares>   redeem LP tokens
    swap:<staked>     swap staked tokens into base tokens
    quote:<staked>    price a swap without executing it

Without operations the driver runs a short demo (add 500, remove 200, swap 10).
Parameter defaults come from LP_POOL_* environment variables when set.

Exit codes:
    0 - All operations succeeded
    1 - Configuration error or an operation failed
"""

import argparse
import logging
import sys
from dataclasses import asdict
from decimal import Decimal

import structlog

from lp_pool.config import PoolConfig, parse_decimal
from lp_pool.errors import InvalidArgument, LpPoolError
from lp_pool.models.quantities import LpTokenAmount, StakedTokenAmount, TokenAmount
from lp_pool.pool import LpPool

logger = structlog.get_logger()

OPERATIONS = ("add", "remove", "swap", "quote")

DEMO_OPERATIONS: list[tuple[str, Decimal]] = [
    ("add", Decimal("500")),
    ("remove", Decimal("200")),
    ("swap", Decimal("10")),
]


def parse_operation(text: str) -> tuple[str, Decimal]:
    """Parse 'kind:amount' into (kind, amount)."""
    kind, sep, amount = text.partition(":")
    if not sep or kind not in OPERATIONS:
        raise argparse.ArgumentTypeError(
            f"invalid operation '{text}' (expected one of {', '.join(OPERATIONS)} as kind:amount)"
        )
    try:
        return kind, parse_decimal(amount, kind)
    except InvalidArgument as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _decimal_arg(text: str) -> Decimal:
    try:
        return parse_decimal(text, "value")
    except InvalidArgument as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def run_operation(pool: LpPool, kind: str, amount: Decimal) -> str:
    """Apply one operation to the pool and describe the result."""
    if kind == "add":
        shares = pool.add_liquidity(TokenAmount.from_decimal(amount))
        return f"Added liquidity: {amount} tokens -> {shares} LP tokens"
    if kind == "remove":
        tokens, st_tokens = pool.remove_liquidity(LpTokenAmount.from_decimal(amount))
        return f"Removed liquidity: {amount} LP tokens -> {tokens} tokens, {st_tokens} staked tokens"
    if kind == "swap":
        payout = pool.swap(StakedTokenAmount.from_decimal(amount))
        return f"Swapped tokens: {amount} staked tokens -> {payout} tokens"
    if kind == "quote":
        quote = pool.quote_swap(StakedTokenAmount.from_decimal(amount))
        return (
            f"Swap quote: {amount} staked tokens -> {quote.payout} tokens "
            f"(fee {quote.fee}, fee tokens {quote.fee_tokens})"
        )
    raise ValueError(f"Unknown operation: {kind}")


def build_parser(defaults: PoolConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lp-pool",
        description="Run operations against a two-asset liquidity pool",
    )
    parser.add_argument(
        "operations",
        nargs="*",
        type=parse_operation,
        metavar="OP",
        help="Operations as add:<tokens>, remove:<shares>, swap:<staked> or quote:<staked>",
    )
    parser.add_argument(
        "--price",
        type=_decimal_arg,
        default=defaults.price,
        help=f"Base tokens per staked token (default: {defaults.price})",
    )
    parser.add_argument(
        "--min-fee",
        type=_decimal_arg,
        default=defaults.min_fee,
        help=f"Minimum swap fee as a fraction (default: {defaults.min_fee})",
    )
    parser.add_argument(
        "--max-fee",
        type=_decimal_arg,
        default=defaults.max_fee,
        help=f"Maximum swap fee as a fraction (default: {defaults.max_fee})",
    )
    parser.add_argument(
        "--liquidity-target",
        type=_decimal_arg,
        default=defaults.liquidity_target,
        help=f"Base reserve at which the fee bottoms out (default: {defaults.liquidity_target})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final pool state as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: list[str] | None = None) -> int:
    try:
        defaults = PoolConfig.from_env()
    except InvalidArgument as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    args = build_parser(defaults).parse_args(argv)
    configure_logging(args.verbose)

    config = PoolConfig(
        price=args.price,
        min_fee=args.min_fee,
        max_fee=args.max_fee,
        liquidity_target=args.liquidity_target,
    )
    operations = args.operations or DEMO_OPERATIONS

    try:
        pool = LpPool.from_config(config)
        logger.info("pool_created", **{k: str(v) for k, v in asdict(config).items()})
        for kind, amount in operations:
            print(run_operation(pool, kind, amount))
    except LpPoolError as err:
        logger.error("operation_failed", error_type=type(err).__name__, error=str(err))
        print(f"Error: {err}", file=sys.stderr)
        return 1

    if args.json:
        print(pool.snapshot().model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
