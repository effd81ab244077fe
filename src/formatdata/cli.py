"""Command-line interface for formatdata."""

from __future__ import annotations

import json
import logging
import unicodedata
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from formatdata.config import FormatDataConfig
from formatdata.errors import FormatDataError, LocaleDataError
from formatdata.registry import LocaleTableRegistry
from formatdata.table import FormatValue
from formatdata.validation import validate_table

app = typer.Typer(
    name="formatdata",
    help="Inspect per-locale calendar and number formatting tables",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Annotated[
        Optional[Path],
        typer.Option("--data-dir", "-d", help="Directory holding locale documents"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file (YAML, JSON or TOML)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Inspect per-locale calendar and number formatting tables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = (
            FormatDataConfig.from_file(config_file)
            if config_file is not None
            else FormatDataConfig.from_env()
        )
    except FormatDataError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    ctx.obj = config.with_overrides(data_dir=data_dir)


def _registry(ctx: typer.Context, strict: bool | None = None) -> LocaleTableRegistry:
    config = ctx.obj or FormatDataConfig.from_env()
    return LocaleTableRegistry(config.with_overrides(strict=strict))


def _escape(text: str) -> str:
    """Make invisible characters (no-break spaces, bidi marks) visible."""
    out = []
    for ch in text:
        category = unicodedata.category(ch)
        if category in ("Cc", "Cf", "Zl", "Zp") or (category == "Zs" and ch != " "):
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def _display(value: FormatValue) -> str:
    if isinstance(value, str):
        return _escape(value)
    return " | ".join(_escape(item) for item in value)


def _jsonable(value: FormatValue) -> str | list[str]:
    return value if isinstance(value, str) else list(value)


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


@app.command("locales")
def locales_cmd(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List supported locales."""
    try:
        tables = _registry(ctx).load_all()
    except (FormatDataError, OSError) as e:
        raise _fail(e)

    rows = [
        {"locale": locale, "keys": len(table), "shared_groups": len(table.shared)}
        for locale, table in tables.items()
    ]

    if json_output:
        typer.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        typer.echo("No locales found.")
        return

    table = Table(title="Locales")
    table.add_column("Locale", style="cyan", no_wrap=True)
    table.add_column("Keys", justify="right")
    table.add_column("Shared groups", justify="right")
    for row in rows:
        table.add_row(row["locale"], str(row["keys"]), str(row["shared_groups"]))
    console.print(table)


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    locale: Annotated[str, typer.Argument(help="Locale identifier (e.g. ar_MA)")],
    prefix: Annotated[
        Optional[str],
        typer.Option("--prefix", "-p", help="Only keys starting with this prefix"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show the table of a locale."""
    try:
        locale_table = _registry(ctx).get_table(locale)
    except (FormatDataError, OSError) as e:
        raise _fail(e)

    entries = locale_table.with_prefix(prefix) if prefix else dict(locale_table)

    if json_output:
        typer.echo(json.dumps(
            {key: _jsonable(value) for key, value in entries.items()},
            ensure_ascii=False,
            indent=2,
        ))
        return

    table = Table(title=f"Format data: {locale}")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")
    for key in sorted(entries):
        table.add_row(key, _display(entries[key]))
    console.print(table)


@app.command("get")
def get_cmd(
    ctx: typer.Context,
    locale: Annotated[str, typer.Argument(help="Locale identifier")],
    key: Annotated[str, typer.Argument(help="Format key (e.g. buddhist.MonthNames)")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Print one format value."""
    try:
        value = _registry(ctx).get_value(locale, key)
    except (FormatDataError, OSError) as e:
        raise _fail(e)

    if json_output:
        typer.echo(json.dumps(_jsonable(value), ensure_ascii=False))
    elif isinstance(value, str):
        typer.echo(_escape(value))
    else:
        for item in value:
            typer.echo(_escape(item))


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    locales: Annotated[
        Optional[list[str]],
        typer.Argument(help="Locales to check (default: all)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Validate locale tables."""
    registry = _registry(ctx, strict=False)
    report: dict[str, list[str]] = {}
    try:
        for locale in locales or registry.list_locales():
            try:
                table = registry.get_table(locale)
            except LocaleDataError as e:
                report[locale] = [str(e)]
                continue
            report[locale] = [str(issue) for issue in validate_table(table)]
    except (FormatDataError, OSError) as e:
        raise _fail(e)

    failed = {locale: issues for locale, issues in report.items() if issues}

    if json_output:
        typer.echo(json.dumps(report, ensure_ascii=False, indent=2))
    else:
        for locale, issues in report.items():
            if issues:
                console.print(f"[red]FAIL[/red] {locale}")
                for issue in issues:
                    console.print(f"  {issue}", markup=False)
            else:
                console.print(f"[green]OK[/green]   {locale}")
        console.print(f"{len(report) - len(failed)}/{len(report)} tables passed")

    if failed:
        raise typer.Exit(1)


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    locale: Annotated[str, typer.Argument(help="Locale identifier")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path"),
    ],
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format (json, yaml); default from suffix"),
    ] = None,
) -> None:
    """Write a locale table to a document."""
    fmt = (format or output.suffix.lstrip(".") or "json").lower()
    if fmt == "yml":
        fmt = "yaml"
    if fmt not in ("json", "yaml"):
        typer.echo(f"Error: Unsupported format: {fmt}", err=True)
        raise typer.Exit(1)

    try:
        table = _registry(ctx).get_table(locale)
        if fmt == "json":
            table.to_json(output)
        else:
            table.to_yaml(output)
    except (FormatDataError, OSError) as e:
        raise _fail(e)

    typer.echo(f"Exported {locale} ({len(table)} keys) to {output}")


if __name__ == "__main__":
    app()
