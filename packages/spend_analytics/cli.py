"""CLI for the ``spend_analytics`` package.

This module exposes callable command handlers (``cmd_burn_rate``,
``cmd_list_transactions``, ``cmd_seed_demo``) and a Typer-based console
interface around them. Environment variables (notably ``DATABASE_URL``) are
loaded from a local ``.env`` using ``python-dotenv`` before any command runs.
Business logic lives in ``spend_analytics.api``; handlers only format output
and turn failures into a non-zero exit status.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv

from .logging_setup import configure_logging


def _emit(payload: Any) -> None:
    # Sorted keys: identical results always print identical bytes.
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def cmd_burn_rate(
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    account_id: str | None = None,
    database_url: str | None = None,
) -> int:
    """Print the monthly burn rate as a JSON list.

    Errors are written to stderr and the function returns ``1``; on success
    it returns ``0``.
    """

    from .api import get_burn_rate

    try:
        months = get_burn_rate(
            start_date,
            end_date,
            account_id=account_id,
            database_url=database_url,
        )
    except ValueError as e:
        print(f"Error: invalid burn-rate request: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: burn rate failed: {e}", file=sys.stderr)
        return 1

    _emit([m.to_json_dict() for m in months])
    return 0


def cmd_list_transactions(
    *,
    page: int = 0,
    size: int = 10,
    category: str | None = None,
    sort: str = "transactionDate",
    direction: str = "desc",
    database_url: str | None = None,
) -> int:
    """Print one page of transactions (with statuses) as JSON."""

    from .api import list_transactions

    try:
        result = list_transactions(
            page,
            size,
            category,
            sort,
            direction,
            database_url=database_url,
        )
    except ValueError as e:
        print(f"Error: invalid transactions request: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: listing transactions failed: {e}", file=sys.stderr)
        return 1

    _emit(result.to_json_dict())
    return 0


def cmd_seed_demo(
    *,
    count: int = 500,
    seed: int = 0,
    database_url: str | None = None,
) -> int:
    """Seed synthetic transactions into an empty database and report the count."""

    import random

    from .ingest.seed_transactions import seed_transactions

    try:
        inserted = seed_transactions(
            database_url=database_url,
            rng=random.Random(seed),
            count=count,
        )
    except Exception as e:
        print(f"Error: seeding failed: {e}", file=sys.stderr)
        return 1

    if inserted:
        typer.echo(f"Seeded {inserted} transactions.")
    else:
        typer.echo("Transactions table already has data. Skipping seeding.")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Spending analytics: monthly burn rate and paginated transaction listing. "
        "Loads DATABASE_URL from a local .env before running."
    ),
)

_DATABASE_URL_HELP = "Override DATABASE_URL (falls back to env var)."


def _exit_with(code: int) -> None:
    if code:
        raise typer.Exit(code)


@app.command("burn-rate")
def burn_rate_cmd(
    start_date: str | None = typer.Option(None, help="Start date (YYYY-MM-DD)."),
    end_date: str | None = typer.Option(None, help="End date (YYYY-MM-DD); defaults to today."),
    account_id: str | None = typer.Option(None, help="Only count this account's spending."),
    database_url: str | None = typer.Option(None, help=_DATABASE_URL_HELP),
) -> None:
    """Monthly spending totals; four months ending today when no dates are given."""

    _exit_with(
        cmd_burn_rate(
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            database_url=database_url,
        )
    )


@app.command("transactions")
def transactions_cmd(
    page: int = typer.Option(0, help="Zero-based page index."),
    size: int = typer.Option(10, help="Page size."),
    category: str | None = typer.Option(None, help="Category filter; 'All' lists everything."),
    sort: str = typer.Option("transactionDate", help="Sort field."),
    direction: str = typer.Option("desc", "--dir", help="Sort direction: asc or desc."),
    database_url: str | None = typer.Option(None, help=_DATABASE_URL_HELP),
) -> None:
    """List transactions with their statuses."""

    _exit_with(
        cmd_list_transactions(
            page=page,
            size=size,
            category=category,
            sort=sort,
            direction=direction,
            database_url=database_url,
        )
    )


@app.command("seed-demo")
def seed_demo_cmd(
    count: int = typer.Option(500, help="Number of transactions to generate."),
    seed: int = typer.Option(0, help="Random seed for reproducible data."),
    database_url: str | None = typer.Option(None, help=_DATABASE_URL_HELP),
) -> None:
    """Fill an empty database with synthetic transactions."""

    _exit_with(cmd_seed_demo(count=count, seed=seed, database_url=database_url))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
