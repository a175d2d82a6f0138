# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for the Mandrill mailer.

Usage:
    mandrill-mailer send message.eml --config /etc/mandrill/config.ini
    mandrill-mailer send message.eml --api-key md-XXXX --json
    mandrill-mailer render message.eml

``render`` prints the Mandrill message parameters built from the file
without calling the API, which is handy to check headers, recipients and
attachments before sending.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mandrill_mailer.config_loader import load_mandrill_config
from mandrill_mailer.exceptions import MandrillError
from mandrill_mailer.mailer import MandrillMailer

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def load_eml(path: str) -> EmailMessage:
    """Parse a .eml file into an EmailMessage."""
    with open(Path(path), "rb") as f:
        return BytesParser(policy=policy.default).parse(f)


def print_results(results: Any) -> None:
    """Show per-recipient results as a table, anything else as JSON."""
    if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
        print_json(results)
        return

    table = Table(title="Mandrill results")
    table.add_column("Email", style="cyan")
    table.add_column("Status")
    table.add_column("Reject reason")
    table.add_column("ID", style="dim")
    for row in results:
        status = str(row.get("status", ""))
        color = "green" if status in ("sent", "queued", "scheduled") else "red"
        table.add_row(
            str(row.get("email", "")),
            f"[{color}]{status}[/{color}]",
            str(row.get("reject_reason") or "-"),
            str(row.get("_id", "")),
        )
    console.print(table)


@click.group()
@click.version_option(package_name="mandrill-mailer")
def main() -> None:
    """mandrill-mailer CLI - Send .eml files through Mandrill."""
    log_level = os.getenv("MANDRILL_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@main.command("send")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(), help="Path to config.ini.")
@click.option("--api-key", "-k", help="Mandrill API key (overrides config and MANDRILL_API_KEY).")
@click.option("--json", "as_json", is_flag=True, help="Output the response as JSON.")
def send_cmd(file: str, config_path: str | None, api_key: str | None, as_json: bool) -> None:
    """Send an email from a .eml file.

    Example:

        mandrill-mailer send email.eml --api-key md-XXXX
    """
    config = load_mandrill_config(config_path)
    if api_key:
        config.api_key = api_key

    try:
        mailer = MandrillMailer.from_config(config)
        results = mailer.send(load_eml(file))
    except MandrillError as e:
        print_error(str(e))
        sys.exit(1)

    if as_json:
        print_json(results)
    else:
        print_success(f"Message from {file} sent")
        print_results(results)


@main.command("render")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def render_cmd(file: str) -> None:
    """Print the Mandrill parameters built from a .eml file (no API call).

    Example:

        mandrill-mailer render email.eml
    """
    mailer = MandrillMailer("render-only")
    try:
        params = mailer.build_params(load_eml(file))
    except MandrillError as e:
        print_error(str(e))
        sys.exit(1)
    print_json(params.to_payload())


if __name__ == "__main__":
    main()
