"""
Vigil CLI - check a page element from the command line.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vigil import __version__
from vigil.core.config import VigilConfig
from vigil.core.errors import VigilError
from vigil.layers.sense import conditions

console = Console()

# Conditions selectable by name with --be / --not-be
NAMED_CONDITIONS = {
    "visible": conditions.visible,
    "hidden": conditions.hidden,
    "present": conditions.present,
    "exist": conditions.exist,
    "enabled": conditions.enabled,
    "disabled": conditions.disabled,
    "selected": conditions.selected,
    "readonly": conditions.readonly,
    "empty": conditions.empty,
}


@click.group()
@click.version_option(version=__version__, prog_name="vigil")
@click.option("--verbose", "-v", is_flag=True, help="Log every step and polling attempt")
def cli(verbose):
    """Vigil - retrying assertions for browser UI tests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command()
@click.argument("url")
@click.argument("selector")
@click.option("--be", "be", multiple=True, type=click.Choice(sorted(NAMED_CONDITIONS)),
              help="State the element should be in (repeatable)")
@click.option("--not-be", "not_be", multiple=True, type=click.Choice(sorted(NAMED_CONDITIONS)),
              help="State the element should not be in (repeatable)")
@click.option("--have-text", default=None, help="Text the element should contain")
@click.option("--index", default=0, type=int, help="Ordinal of the match to check")
@click.option("--timeout", "timeout_ms", default=None, type=int,
              help="Wait timeout in milliseconds (default: 4000 or VIGIL_TIMEOUT_MS)")
@click.option("--polling-interval", "polling_interval_ms", default=None, type=int,
              help="Polling interval in milliseconds (default: 100)")
@click.option("--headless/--headed", default=None,
              help="Run browser in headless mode (default: VIGIL_HEADLESS or headed)")
@click.option("--report", "report_path", default=None, help="Write the step record as JSON")
def check(url, selector, be, not_be, have_text, index, timeout_ms, polling_interval_ms,
          headless, report_path):
    """
    Open URL and assert conditions on the element matching SELECTOR.

    \b
    Examples:

        vigil check https://example.com h1 --have-text "Example Domain"

        vigil check https://example.com "#spinner" --not-be visible --timeout 10000
    """
    from vigil.core.session import VigilSession

    if not be and not not_be and have_text is None:
        be = ("visible",)

    config = VigilConfig.from_env(
        timeout_ms=timeout_ms,
        polling_interval_ms=polling_interval_ms,
        headless=headless,
    )

    console.print(Panel.fit(
        f"[bold blue]Vigil[/bold blue]\n"
        f"[dim]{url}[/dim]",
        border_style="blue"
    ))

    session = VigilSession(config=config)
    failure = None
    try:
        session.open(url)
        element = session.find(selector, index)
        if be:
            element.should_be(*(NAMED_CONDITIONS[name] for name in be))
        if not_be:
            element.should_not_be(*(NAMED_CONDITIONS[name] for name in not_be))
        if have_text is not None:
            element.should_have(conditions.text(have_text))
    except VigilError as e:
        failure = e
    finally:
        session.close()

    _print_steps(session.recorder)

    if report_path:
        session.recorder.save_json(report_path)
        console.print(f"[dim]Report: {report_path}[/dim]")

    if failure is not None:
        console.print("\n[bold red]FAILED[/bold red]")
        console.print(str(failure), markup=False, highlight=False)
        sys.exit(1)

    console.print("\n[bold green]All checks passed[/bold green]")


def _print_steps(recorder) -> None:
    if not recorder.entries:
        return
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Element", style="yellow", max_width=40)
    table.add_column("Step", style="green")
    table.add_column("Status", justify="center")
    table.add_column("Duration", justify="right", style="dim")

    for entry in recorder.entries:
        status = "[green]passed[/green]" if entry.status.value == "passed" else "[red]failed[/red]"
        table.add_row(Text(entry.subject), Text(entry.description), status, f"{entry.duration_ms:.0f} ms")

    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
