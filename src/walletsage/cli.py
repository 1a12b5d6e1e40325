"""Command line front end for WalletSage."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .services import ledger_service, periods, snapshot, status
from .services.reconciliation import ReconcileError

KIND_OPTION = click.option(
    "--kind",
    type=click.Choice(["income", "expense"]),
    default="expense",
    show_default=True,
    help="Which fixed item registry to act on.",
)

ERROR_MESSAGES = {
    ReconcileError.ITEM_NOT_FOUND: "Fixed item not found.",
    ReconcileError.ITEM_INACTIVE: "Fixed item is paused; reactivate it first.",
    ReconcileError.ALREADY_GENERATED: "A transaction was already generated for this month.",
    ReconcileError.BEFORE_ACTIVATION: "The month is before the item's start date.",
    ReconcileError.AFTER_DEACTIVATION: "The month is after the item's end date.",
    ReconcileError.NOTHING_TO_UNDO: "Nothing was generated for this month.",
}


def _month_arg(ctx, param, value: str | None) -> str:
    if value is None:
        return periods.current_month()
    try:
        periods.parse_month(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    return value


def _optional_month(ctx, param, value: str | None) -> str | None:
    return None if value is None else _month_arg(ctx, param, value)


def _fail(error: ReconcileError) -> None:
    raise click.ClickException(ERROR_MESSAGES[error])


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """Track fixed incomes and expenses month by month."""

    config = BaseConfig(data_dir=data_dir)
    setup_logging(config)
    ctx.obj = create_app_context(config)


@cli.command("seed-categories")
@click.pass_obj
def seed_categories(app: AppContext) -> None:
    """Insert the default income and expense categories."""

    added = app.categories.seed_defaults()
    click.echo(f"Added {added} categories.")


@cli.command("add-fixed")
@KIND_OPTION
@click.option("--title", required=True)
@click.option("--amount", type=float, required=True)
@click.option("--day", "period_day", type=click.IntRange(1, 31), required=True)
@click.option("--start", "start_date", type=click.DateTime(["%Y-%m-%d"]), required=True)
@click.option("--end", "end_date", type=click.DateTime(["%Y-%m-%d"]), default=None)
@click.option("--category", "category_id", default=None)
@click.option("--description", default="")
@click.pass_obj
def add_fixed(app: AppContext, kind, title, amount, period_day, start_date, end_date,
              category_id, description) -> None:
    """Register a new fixed income or expense."""

    if amount <= 0:
        raise click.BadParameter("amount must be positive", param_hint="--amount")
    item = app.registry_for(kind).add(
        title=title,
        amount=amount,
        period_day=period_day,
        start_date=start_date.date(),
        end_date=end_date.date() if end_date else None,
        category_id=category_id,
        description=description,
    )
    click.echo(item.id)


@cli.command("list-fixed")
@KIND_OPTION
@click.option("--month", callback=_month_arg, default=None)
@click.pass_obj
def list_fixed(app: AppContext, kind: str, month: str) -> None:
    """List fixed items with their status for MONTH."""

    engine = app.engine_for(kind)
    for item in app.registry_for(kind).list_all():
        state = status.classify(item, month, generations=engine.generations)
        remaining = status.remaining_count(item, month)
        category = app.categories.display_for(item.category_id)
        click.echo(
            f"{item.id}  day {item.period_day:>2}  {item.amount:>10.2f}  "
            f"{state.value:<8}  {category.name:<14}  {item.title}"
            + (f"  ({remaining} left)" if remaining is not None else "")
        )


@cli.command("toggle")
@KIND_OPTION
@click.argument("item_id")
@click.pass_obj
def toggle(app: AppContext, kind: str, item_id: str) -> None:
    """Pause or resume a fixed item."""

    item = app.registry_for(kind).toggle_active(item_id)
    if item is None:
        _fail(ReconcileError.ITEM_NOT_FOUND)
    click.echo("active" if item.is_active else "paused")


@cli.command("remove-fixed")
@KIND_OPTION
@click.argument("item_id")
@click.pass_obj
def remove_fixed(app: AppContext, kind: str, item_id: str) -> None:
    """Delete a fixed item and every transaction generated for it."""

    if not app.registry_for(kind).remove(item_id):
        _fail(ReconcileError.ITEM_NOT_FOUND)
    click.echo("removed")


@cli.command("generate")
@KIND_OPTION
@click.argument("item_id")
@click.argument("month", required=False, callback=_month_arg)
@click.pass_obj
def generate(app: AppContext, kind: str, item_id: str, month: str) -> None:
    """Create this month's transaction for one fixed item."""

    result = app.engine_for(kind).generate(item_id, month)
    if not result.ok:
        _fail(result.error)
    click.echo(result.transaction_id)


@cli.command("undo")
@KIND_OPTION
@click.argument("item_id")
@click.argument("month", required=False, callback=_month_arg)
@click.pass_obj
def undo(app: AppContext, kind: str, item_id: str, month: str) -> None:
    """Remove the generated transaction for one fixed item."""

    result = app.engine_for(kind).undo(item_id, month)
    if not result.ok:
        _fail(result.error)
    click.echo("undone")


@cli.command("generate-all")
@KIND_OPTION
@click.argument("month", required=False, callback=_month_arg)
@click.pass_obj
def generate_all(app: AppContext, kind: str, month: str) -> None:
    """Generate every due fixed item for MONTH."""

    created = app.engine_for(kind).generate_all_due(month)
    click.echo(f"Generated {created} transactions for {month}.")


@cli.command("clear-month")
@KIND_OPTION
@click.argument("month", callback=_month_arg)
@click.pass_obj
def clear_month(app: AppContext, kind: str, month: str) -> None:
    """Undo every generated transaction in MONTH."""

    removed = app.engine_for(kind).clear_month(month)
    click.echo(f"Removed {removed} transactions for {month}.")


@cli.command("status")
@KIND_OPTION
@click.argument("month", required=False, callback=_month_arg)
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_obj
def month_status(app: AppContext, kind: str, month: str, as_json: bool) -> None:
    """Show paid / overdue / upcoming totals for MONTH."""

    engine = app.engine_for(kind)
    rollup = status.summarize(
        app.registry_for(kind).list_all(), month, generations=engine.generations, today=date.today()
    )
    if as_json:
        click.echo(json.dumps(rollup.as_dict(), indent=2))
        return
    for name, bucket in rollup.as_dict().items():
        click.echo(f"{name:<9} {bucket['count']:>3}  {bucket['amount']:>10.2f}")


@cli.command("balance")
@click.option("--month", callback=_optional_month, default=None, help="Limit to one YYYY-MM month.")
@click.option("--top", type=click.IntRange(min=0), default=5, show_default=True,
              help="How many expense categories to list.")
@click.pass_obj
def balance(app: AppContext, month: str | None, top: int) -> None:
    """Print ledger totals and the largest expense categories."""

    if month is None:
        transactions = app.ledger.list_all()
    else:
        transactions = app.ledger.filter_by_date_range(
            periods.due_date(month, 1), periods.due_date(month, 31)
        )
    summary = ledger_service.compute_summary(transactions)
    click.echo(f"income   {summary['income']:>10.2f}")
    click.echo(f"expense  {summary['expenses']:>10.2f}")
    click.echo(f"balance  {summary['net']:>10.2f}")

    breakdown = ledger_service.spending_by_category(transactions, app.categories)
    for row in ledger_service.top_categories(breakdown, limit=top):
        click.echo(f"  {row['name']:<14} {row['amount']:>10.2f}")


@cli.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def export_cmd(app: AppContext, path: Path) -> None:
    """Write the whole state to a JSON snapshot."""

    written = snapshot.write_snapshot(path, app.session_factory)
    click.echo(f"Snapshot written: {written}")


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(app: AppContext, path: Path) -> None:
    """Replace the whole state with a JSON snapshot."""

    try:
        counts = snapshot.read_snapshot(path, app.session_factory)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(", ".join(f"{key}={count}" for key, count in counts.items()))


def main() -> None:  # pragma: no cover - console entry point
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
