#!/usr/bin/env python3
"""
connectIPS CLI - Operator commands for the payment gateway

Provides a command line interface for:
- Inspecting the configuration loaded from the environment
- Building signed payment initiation payloads
- Generating lookup tokens
- Validating payments and fetching transaction details
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .client import ConnectIPSClient
from .config import ConnectIPSConfig
from .exceptions import ConnectIPSError
from .models import DEFAULT_CURRENCY, TransactionRequest

logger = logging.getLogger(__name__)
console = Console()


def _handle_cli_error(exc: Exception, exit_code: int = 1) -> None:
    """Centralized CLI error handler."""
    logger.error("CLI error: %s", exc, exc_info=True)
    console.print(f"[bold red]Error:[/] {escape(str(exc))}")
    sys.exit(exit_code)


def _print_mapping(title: str, data: dict[str, Any], border_style: str = "green") -> None:
    table = Table(show_header=False, box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    # Tokens are long unbroken base64 strings
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        table.add_row(key, "" if value is None else escape(str(value)))
    console.print(Panel(table, title=title, border_style=border_style))


def _emit(ctx: click.Context, title: str, data: dict[str, Any]) -> None:
    if ctx.obj.get("json_output"):
        click.echo(json.dumps(data, indent=2))
        return
    _print_mapping(title, data)


@click.group()
@click.option("--json", "json_output", is_flag=True, help="Print raw JSON instead of tables")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool):
    """connectIPS payment gateway commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output


@cli.command("config")
@click.pass_context
def show_config(ctx: click.Context):
    """
    Show the configuration read from CONNECTIPS_* variables.

    Example:
        connectips config
    """
    try:
        config = ConnectIPSConfig.from_env()
    except ConnectIPSError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "connectIPS Configuration", config.redacted())


@cli.command("payload")
@click.option("--txn-id", required=True, help="Unique transaction id")
@click.option("--amount", required=True, type=int, help="Transaction amount")
@click.option("--reference-id", required=True, help="Reference id")
@click.option("--remarks", default="", help="Remarks")
@click.option("--particulars", default="", help="Particulars")
@click.option("--date", "transaction_date", default=None, help="Transaction date, DD-MM-YYYY (default: today)")
@click.option("--currency", default=DEFAULT_CURRENCY, show_default=True, help="Transaction currency")
@click.pass_context
def build_payload(
    ctx: click.Context,
    txn_id: str,
    amount: int,
    reference_id: str,
    remarks: str,
    particulars: str,
    transaction_date: str | None,
    currency: str,
):
    """
    Build the signed form fields for the hosted payment page.

    Example:
        connectips payload --txn-id TX1 --amount 100 --reference-id R1
    """
    try:
        request = TransactionRequest(
            transaction_id=txn_id,
            amount=amount,
            reference_id=reference_id,
            remarks=remarks,
            particulars=particulars,
            transaction_date=transaction_date,
            currency=currency,
        )
        with ConnectIPSClient.from_env() as client:
            payload = client.build_initiation_payload(request)
    except ConnectIPSError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Payment Initiation Payload", payload.to_dict())


@cli.command("token")
@click.argument("txn_id")
@click.argument("amount", type=int)
@click.pass_context
def lookup_token(ctx: click.Context, txn_id: str, amount: int):
    """
    Print the token used by the validate and details calls.

    Example:
        connectips token TX1 100
    """
    try:
        with ConnectIPSClient.from_env() as client:
            token = client.generate_token(txn_id, amount)
    except ConnectIPSError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Lookup Token", {"referenceId": txn_id, "txnAmt": amount, "token": token})


@cli.command("validate")
@click.argument("txn_id")
@click.argument("amount", type=int)
@click.pass_context
def validate_payment(ctx: click.Context, txn_id: str, amount: int):
    """
    Validate a payment with the gateway.

    Example:
        connectips validate TX1 100
    """
    try:
        with ConnectIPSClient.from_env() as client:
            with console.status("[bold cyan]Validating payment..."):
                result = client.validate_payment(txn_id, amount)
    except ConnectIPSError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Payment Validation", result)


@cli.command("details")
@click.argument("txn_id")
@click.argument("amount", type=int)
@click.pass_context
def transaction_details(ctx: click.Context, txn_id: str, amount: int):
    """
    Fetch transaction details from the gateway.

    Example:
        connectips details TX1 100
    """
    try:
        with ConnectIPSClient.from_env() as client:
            with console.status("[bold cyan]Fetching transaction details..."):
                result = client.get_transaction_details(txn_id, amount)
    except ConnectIPSError as exc:
        _handle_cli_error(exc)
        return
    _emit(ctx, "Transaction Details", result)


def main():
    """Main CLI entry point"""
    return cli(obj={})


if __name__ == "__main__":
    sys.exit(main() or 0)
