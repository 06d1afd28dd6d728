"""
Command line interface for the access rights check.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from access_rights_check.config import load_settings
from access_rights_check.logging_utils import configure_logging
from access_rights_check.models import InvalidReference, Verdict
from access_rights_check.workflow import AccessRightsChecker

EXIT_PASS = 0
EXIT_NOT_PASSED = 1
EXIT_INVALID_REFERENCE = 3

app = typer.Typer(
    name="access-rights-check",
    help="Check a CESSDA catalogue record for an approved Access Rights term.",
    add_completion=False,
)


@app.command()
def check(
    url: str = typer.Argument(
        ...,
        help="Catalogue detail URL, e.g. https://datacatalogue.cessda.eu/detail/<id>",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=False,
        help="Optional YAML settings override.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level for diagnostics written to stderr.",
    ),
) -> None:
    """Print pass, fail or indeterminate for the record at URL."""

    overrides: dict[str, object] = {}
    if log_level is not None:
        overrides["log_level"] = log_level
    settings = load_settings(config_path, overrides=overrides or None)
    configure_logging(settings.log_level)

    checker = AccessRightsChecker(settings)
    try:
        verdict = checker.check_record(url)
    except InvalidReference as exc:
        typer.echo(f"Invalid record URL: {exc}", err=True)
        raise typer.Exit(code=EXIT_INVALID_REFERENCE)
    finally:
        checker.close()

    typer.echo(verdict.value)
    raise typer.Exit(code=EXIT_PASS if verdict is Verdict.PASS else EXIT_NOT_PASSED)


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
