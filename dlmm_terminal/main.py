#!/usr/bin/env python3
"""
DLMM Terminal - Main Entry Point
Command-line interface for discovering Meteora DLMM pools and managing
liquidity positions
"""

import argparse
import logging
import math
import os
import sys

from rich.logging import RichHandler

from .blockchain import BlockchainManager
from .config import load_config, save_config, validate_config
from .constants import VERSION, DEFAULT_CONFIG, CONFIG_FILE
from .discovery import PoolDiscovery, filter_active, filter_by_token, sort_pools
from .display import DisplayManager, console
from .errors import DlmmTerminalError
from .notifications import TelegramNotifier
from .pool_index import PoolIndexClient
from .pool_monitor import PoolWatcher
from .positions import PositionActions, load_backend, resolve_price_bounds
from .utils import parse_range
from .wallet import load_keypair_from_config

logger = logging.getLogger(__name__)


def finite_float(value):
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}")
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"Invalid number: {value}")
    return number


def setup_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=debug)],
        force=True,
    )
    # Keep urllib3 connection chatter out of --debug output
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="dlmm-terminal",
        description="CLI for Meteora DLMM liquidity management",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--config", default=CONFIG_FILE, help=f"config file (default: {CONFIG_FILE})")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # discover
    discover = subparsers.add_parser("discover", help="List active DLMM pools")
    discover.add_argument("--limit", type=int, default=50, help="max rows (default: 50)")
    discover.add_argument("--min-tvl", type=finite_float, default=0, help="minimum TVL (USD)")
    discover.add_argument("--min-apr", type=finite_float, default=0, help="minimum APR (%%)")
    discover.add_argument("--sort", choices=["apr", "tvl"], default="apr", help="sort key (default: apr)")
    discover.add_argument("--order", choices=["asc", "desc"], default="desc", help="sort order (default: desc)")
    discover.add_argument("--json", action="store_true", help="output as JSON")
    discover.add_argument("--token", help="filter by token symbol (e.g. SOL or USDC)")
    discover.add_argument("--active-only", action="store_true", help="only show pools with TVL > 0")
    discover.set_defaults(handler=cmd_discover)

    # watch
    watch = subparsers.add_parser("watch", help="Continuously watch for new pools")
    watch.add_argument("--interval", type=finite_float, help="seconds between refreshes")
    watch.add_argument("--limit", type=int, help="max rows")
    watch.add_argument("--min-tvl", type=finite_float, default=0, help="minimum TVL (USD)")
    watch.add_argument("--min-apr", type=finite_float, default=0, help="minimum APR (%%)")
    watch.add_argument("--notify", action="store_true", help="send a Telegram alert for new pools")
    watch.set_defaults(handler=cmd_watch)

    # lp
    lp = subparsers.add_parser("lp", help="Manage DLMM liquidity positions")
    lp_sub = lp.add_subparsers(dest="lp_command", required=True)

    lp_open = lp_sub.add_parser("open", help="Open a DLMM position")
    lp_open.add_argument("--pair", help="e.g. SOL-USDC")
    lp_open.add_argument("--pool", help="DLMM pool address (overrides --pair)")
    lp_open.add_argument("--amount", type=finite_float, required=True, help="deposit amount in token units")
    lp_open.add_argument("--range", help="price range, e.g. 0.98-1.02")
    lp_open.add_argument("--min", type=finite_float, help="min of range")
    lp_open.add_argument("--max", type=finite_float, help="max of range")
    lp_open.add_argument("--dry-run", action="store_true", help="resolve and validate without submitting")
    lp_open.set_defaults(handler=cmd_lp_open)

    lp_claim = lp_sub.add_parser("claim", help="Claim swap fees for positions in a pool")
    lp_claim.add_argument("--pair", help="pool pair name (e.g. SOL-USDC)")
    lp_claim.add_argument("--pool", help="DLMM pool address (overrides --pair)")
    lp_claim.add_argument("--dry-run", action="store_true", help="resolve without submitting")
    lp_claim.set_defaults(handler=cmd_lp_claim)

    lp_resolve = lp_sub.add_parser("resolve", help="Resolve a pair name to its DLMM pool address")
    lp_resolve.add_argument("--pair", required=True, help="e.g. SOL-USDC")
    lp_resolve.set_defaults(handler=cmd_lp_resolve)

    # alert
    alert = subparsers.add_parser("alert", help="Send a Telegram alert")
    alert.add_argument("message", nargs="+", help="message to send")
    alert.set_defaults(handler=cmd_alert)

    # health
    health = subparsers.add_parser("health", help="Check the Solana RPC endpoint")
    health.set_defaults(handler=cmd_health)

    # init-config
    init = subparsers.add_parser("init-config", help="Write the default config file")
    init.add_argument("--force", action="store_true", help="overwrite an existing file")
    init.set_defaults(handler=cmd_init_config)

    return parser


def make_discovery(config):
    return PoolDiscovery(PoolIndexClient.from_config(config))


def cmd_discover(args, config, display):
    pools = make_discovery(config).discover(args.limit, args.min_tvl, args.min_apr)
    if args.token:
        pools = filter_by_token(pools, args.token)
    if args.active_only:
        pools = filter_active(pools)
    pools = sort_pools(pools, args.sort, args.order)
    display.print_pools(pools, as_json=args.json)
    return 0


def cmd_watch(args, config, display):
    watch_settings = config.get("watch", {})
    interval = args.interval or watch_settings.get("interval", 30)
    limit = args.limit or watch_settings.get("limit", 50)
    notifier = TelegramNotifier.from_config(config) if args.notify else None

    watcher = PoolWatcher(
        make_discovery(config),
        interval=interval,
        limit=limit,
        min_tvl=args.min_tvl,
        min_apr=args.min_apr,
        notifier=notifier,
        on_update=lambda pools, new_pools, notified: display.print_watch_frame(
            pools, new_pools, interval, notified
        ),
    )
    try:
        watcher.run()
    except KeyboardInterrupt:
        display.print_goodbye()
    return 0


def _position_actions(config):
    discovery = make_discovery(config)
    backend = load_backend(config.get("positions", {}).get("backend"))
    return PositionActions(discovery.resolver, backend=backend)


def cmd_lp_open(args, config, display):
    target = args.pool or args.pair
    range_bounds = parse_range(args.range) if args.range else None
    min_price, max_price = resolve_price_bounds(range_bounds, args.min, args.max)
    actions = _position_actions(config)

    if args.dry_run:
        request = actions.prepare_open(target, args.amount, min_price, max_price)
        display.print_open_plan(request, dry_run=True)
        return 0

    actions.require_backend()
    keypair = load_keypair_from_config(config)
    request, signature = actions.open_position(target, args.amount, min_price, max_price, keypair)
    display.print_open_plan(request, dry_run=False)
    console.print(f"[green]✅ Position opened[/green] signature={signature}")
    return 0


def cmd_lp_claim(args, config, display):
    target = args.pool or args.pair
    actions = _position_actions(config)

    if args.dry_run:
        request = actions.prepare_claim(target)
        display.print_claim_plan(request, dry_run=True)
        return 0

    actions.require_backend()
    keypair = load_keypair_from_config(config)
    request, signature = actions.claim_fees(target, keypair)
    display.print_claim_plan(request, dry_run=False)
    console.print(f"[green]✅ Fees claimed[/green] signature={signature}")
    return 0


def cmd_lp_resolve(args, config, display):
    pool = make_discovery(config).resolve_pair(args.pair)
    display.print_resolution(args.pair, pool)
    return 0


def cmd_alert(args, config, display):
    notifier = TelegramNotifier.from_config(config)
    notifier.send_alert(" ".join(args.message))
    console.print("[green]✅ Alert sent[/green]")
    return 0


def cmd_health(args, config, display):
    rpc_url = config["rpc_url"]
    status = BlockchainManager(rpc_url, timeout=config.get("request_timeout", 10)).check_connection()
    display.print_health(rpc_url, status)
    return 0


def cmd_init_config(args, config, display):
    if os.path.exists(args.config) and not args.force:
        display.print_error(f"{args.config} already exists (use --force to overwrite)")
        return 1
    path = save_config(DEFAULT_CONFIG, args.config)
    console.print(f"[green]✅ Created {path}[/green]")
    console.print("📝 Edit the file or set values in .env, then run a command.")
    return 0


def main(argv=None):
    """Parse arguments and run one command; returns the process exit code"""
    parser = build_parser()
    args = parser.parse_args(argv)
    display = None

    try:
        config = load_config(args.config, use_env=args.handler is not cmd_init_config)
        display_settings = config.setdefault("display_settings", {})
        if args.debug:
            display_settings["debug_mode"] = True
        setup_logging(display_settings.get("debug_mode", False))
        display = DisplayManager(config)
        validate_config(config)
        return args.handler(args, config, display)
    except KeyboardInterrupt:
        console.print("\n[yellow]👋 Stopped by user[/yellow]")
        return 0
    except (DlmmTerminalError, ValueError) as e:
        (display or DisplayManager()).print_error(e)
        return 1
    except Exception as e:
        (display or DisplayManager()).print_error(f"Unexpected error: {e}")
        logger.debug("Unhandled exception", exc_info=True)
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
