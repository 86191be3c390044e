# main.py - Local entry point for running a single tool.
"""
This file:
1. Loads .env and builds the frozen Settings value
2. Starts terminal session logging
3. Runs one tool through the registry and prints its result

Run with:
    python main.py list
    python main.py get_account_info
    python main.py place_order symbol=BTCUSDT side=BUY type=LIMIT quantity=0.001 price=30000

Values are parsed as JSON when possible (numbers, true/false, lists),
otherwise kept as strings.
"""

import argparse
import asyncio
import json
from pathlib import Path

from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(__file__).parent

# Load environment variables
load_dotenv(PROJECT_ROOT / ".env")

from config import Settings
from models import ToolResult, mask_secret
from services.binance_api import BinanceAPI
from services.logger import terminal_logger
from services.signer import resolve_endpoint_root
from services.time_utils import get_utc_timestamp
from tools import execute_tool, list_tools


def parse_tool_args(pairs: list[str]) -> dict:
    """Turn ["key=value", ...] into an ordered parameter dict."""
    args = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got: {pair}")
        key, raw = pair.split("=", 1)
        try:
            args[key] = json.loads(raw)
        except json.JSONDecodeError:
            args[key] = raw
    return args


async def run_tool(name: str, args: dict, settings: Settings) -> ToolResult:
    """Run one tool with a fresh HTTP client."""
    api = BinanceAPI(settings)
    try:
        return await execute_tool(name, args, settings, api)
    finally:
        await api.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a Binance spot trading tool.")
    parser.add_argument("tool", help="Tool name, or 'list' to show available tools")
    parser.add_argument("params", nargs="*", help="Tool parameters as key=value")
    args = parser.parse_args()

    if args.tool == "list":
        for name in list_tools():
            print(name)
        return 0

    try:
        tool_args = parse_tool_args(args.params)
    except ValueError as e:
        parser.error(str(e))

    settings = Settings.from_env()

    log_path = terminal_logger.start()
    try:
        print("=" * 50)
        print(f"Binance tools ({'TESTNET' if settings.testnet else 'PRODUCTION'})")
        print("=" * 50)
        print(f"Started: {get_utc_timestamp()}")
        print(f"Terminal log: {log_path}")
        print(f"Endpoint: {resolve_endpoint_root(settings)}")
        print(f"BINANCE_API_KEY: {mask_secret(settings.api_key)}")
        print(f"BINANCE_SECRET_KEY: {mask_secret(settings.secret_key)}")
        if settings.proxy_url:
            print("Proxy: enabled")

        result = asyncio.run(run_tool(args.tool, tool_args, settings))
        print(result.content_text)
        return 1 if result.is_error else 0
    finally:
        terminal_logger.stop()


if __name__ == "__main__":
    raise SystemExit(main())
