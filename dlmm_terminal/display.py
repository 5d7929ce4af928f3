#!/usr/bin/env python3
"""
Display Management Module for DLMM Terminal
Rich tables and panels for discover/watch output, plus JSON rendering
"""

import json
from datetime import datetime, timezone

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich.align import Align
from rich import box
from rich.markup import escape

from .constants import VERSION
from .utils import format_usd, format_apr, shorten_address

console = Console()


class DisplayManager:
    """Renders pools and action summaries to the terminal"""

    def __init__(self, config=None, output=None):
        self.config = config or {}
        self.console = output or console
        self.use_rich = self.config.get("display_settings", {}).get("use_rich_ui", True)

    def create_header_panel(self, subtitle="Meteora DLMM pool explorer"):
        header_text = Text()
        header_text.append("💧 DLMM TERMINAL\n", style="bold cyan")
        header_text.append(f"{subtitle}\n", style="bright_white")
        header_text.append(f"v{VERSION}", style="italic dim")
        return Panel(
            Align.center(header_text),
            box=box.DOUBLE_EDGE,
            style="blue",
            padding=(0, 2)
        )

    def create_pools_table(self, pools, title="DLMM Pools"):
        table = Table(
            title=title,
            box=box.ROUNDED if self.use_rich else box.ASCII,
            show_header=True,
            header_style="bold magenta",
            title_style="bold cyan",
            border_style="blue"
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Pair", style="yellow")
        table.add_column("TVL", justify="right", style="white")
        table.add_column("APR 24h", justify="right", style="cyan")
        table.add_column("Fee", justify="right")
        table.add_column("Bin", justify="right")
        table.add_column("Address", style="dim")

        for i, pool in enumerate(pools, start=1):
            apr_style = "green" if pool.apr_24h > 0 else "dim"
            table.add_row(
                str(i),
                pool.name,
                format_usd(pool.tvl_usd),
                Text(format_apr(pool.apr_24h), style=apr_style),
                pool.fee_tier or "-",
                str(pool.bin_step) if pool.bin_step else "-",
                shorten_address(pool.address),
            )
        return table

    def print_pools(self, pools, as_json=False, title="DLMM Pools"):
        if as_json:
            # Plain print keeps the output machine-readable
            print(json.dumps([pool.to_dict() for pool in pools], indent=2))
            return
        if not pools:
            self.console.print("[yellow]🤔 No pools matched the filters[/yellow]")
            return
        self.console.print(self.create_pools_table(pools, title))
        self.console.print(f"\n[dim]Source: Meteora DLMM API • {now_iso()}[/dim]")

    def print_watch_frame(self, pools, new_pools, interval, notified=False):
        self.console.clear()
        self.console.print(self.create_header_panel(f"Watching pools, refreshing every {interval}s"))
        self.console.print(self.create_pools_table(pools, title=f"DLMM Pools @ {now_iso()}"))
        if new_pools:
            names = escape(", ".join(pool.name for pool in new_pools))
            self.console.print(f"[bold green]🆕 New pools: {names}[/bold green]")
        if notified:
            self.console.print("[green]🔔 Notification sent[/green]")
        self.console.print("[dim]Press Ctrl+C to stop[/dim]")

    def print_resolution(self, query, pool):
        self.console.print(f'pair={query} -> name="{pool.name}" address={pool.address}', markup=False, soft_wrap=True)

    def print_open_plan(self, request, dry_run):
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Pool", f"{request.pool_name} ({request.pool_address})")
        table.add_row("Amount", f"{request.amount:g}")
        table.add_row("Range", f"{request.min_price:g} - {request.max_price:g}")
        if request.owner:
            table.add_row("Owner", request.owner)
        title = "Open position (dry run)" if dry_run else "Open position"
        self.console.print(Panel(table, title=title, border_style="cyan"))

    def print_claim_plan(self, request, dry_run):
        title = "Claim fees (dry run)" if dry_run else "Claim fees"
        body = f"Pool: {request.pool_name} ({request.pool_address})"
        if request.owner:
            body += f"\nOwner: {request.owner}"
        self.console.print(Panel(body, title=title, border_style="cyan"))

    def print_health(self, rpc_url, status):
        self.console.print(f"[green]✅ RPC OK[/green] {rpc_url}")
        self.console.print(f"   Slot: {status['slot']:,}")
        self.console.print(f"   Version: {status['version']}")

    def print_error(self, message):
        self.console.print(f"[red]❌ {escape(str(message))}[/red]")

    def print_goodbye(self):
        self.console.print("\n[yellow]👋 Watch stopped by user[/yellow]")


def now_iso():
    return datetime.now(timezone.utc).isoformat(timespec="seconds")
