"""Command line entry point: fetch a quote or token prices and print them as JSON."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from jupiter_swap_api_client.client import JupiterSwapApiClient
from jupiter_swap_api_client.config import get_settings
from jupiter_swap_api_client.errors import ClientError
from jupiter_swap_api_client.price import PriceRequest
from jupiter_swap_api_client.quote import QuoteRequest

logger = logging.getLogger(__name__)


def _parse_quote_arg(value: str) -> tuple[str, str]:
    key, sep, arg = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {value!r}")
    return key, arg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jupiter-swap-api", description="Jupiter swap API client")
    parser.add_argument("--base-path", type=str, help="API base URL (overrides JUPITER_BASE_PATH)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote = subparsers.add_parser("quote", help="Get a swap quote")
    quote.add_argument("--input-mint", required=True, help="Input token mint")
    quote.add_argument("--output-mint", required=True, help="Output token mint")
    quote.add_argument("--amount", required=True, type=int, help="Amount in smallest units")
    quote.add_argument("--slippage-bps", type=int, help="Slippage tolerance in basis points")
    quote.add_argument(
        "--quote-arg",
        type=_parse_quote_arg,
        action="append",
        default=[],
        help="Extra query parameter as key=value (repeatable)",
    )

    price = subparsers.add_parser("price", help="Get token prices")
    price.add_argument("--ids", required=True, help="Comma-separated token mints")
    price.add_argument("--vs-token", help="Token to price against (default: USDC)")
    price.add_argument("--extra-info", action="store_true", help="Include extra price info")

    return parser


async def run(args: argparse.Namespace, client: Optional[JupiterSwapApiClient] = None) -> dict:
    """Execute the parsed command and return the response as wire JSON."""
    client = client or JupiterSwapApiClient(base_path=args.base_path)

    if args.command == "quote":
        request = QuoteRequest.new(args.input_mint, args.output_mint, args.amount)
        if args.slippage_bps is not None:
            request = request.with_slippage_bps(args.slippage_bps)
        if args.quote_arg:
            request = request.with_quote_args(dict(args.quote_arg))
        response = await client.quote(request)
    else:
        request = PriceRequest(ids=args.ids)
        if args.vs_token:
            request = request.with_vs_token(args.vs_token)
        if args.extra_info:
            request = request.with_extra_info(True)
        response = await client.get_prices(request)

    return response.to_wire()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    log_level = logging.DEBUG if (args.debug or settings.debug) else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug(f"Settings: {settings.get_safe_dict()}")

    try:
        result = asyncio.run(run(args))
    except ValidationError as e:
        print(f"Invalid request: {e}", file=sys.stderr)
        return 2
    except ClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
