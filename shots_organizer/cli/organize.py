"""
CLI command for organizing screenshots.

Sorts screenshots and screen recordings under a directory into dated
month folders.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..config import OrganizerSettings
from ..core.errors import OrganizerError
from ..core.types import ArchiveRule, DateSource, ExecutionResult, Plan
from ..organization import OperationExecutor, OperationPlanner, OrganizationStrategy, scan
from ..shared import setup_logging
from ..version import __version__

console = Console()
err_console = Console(stderr=True)

USAGE_HELP = """\
This command organizes screenshot and recording files into:
  • archival years (2020-2023 by default): _YEAR/MM MonthName/
  • later years: MM MonthName/"""


@click.command()
@click.argument("target_dir", required=False, type=click.Path())
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Preview changes without executing",
)
@click.option(
    "--max-operations",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of operations executed in this run (default: 5000)",
)
@click.option(
    "--date-source",
    type=click.Choice([source.value for source in DateSource], case_sensitive=False),
    default=None,
    help="Read dates from filenames or from file timestamps",
)
@click.option(
    "--archive-rule",
    type=click.Choice([rule.value for rule in ArchiveRule], case_sensitive=False),
    default=None,
    help="Which years go under _YEAR folders",
)
@click.option(
    "--include-audio",
    is_flag=True,
    default=False,
    help="Also organize .mp3 screen recording audio",
)
@click.option(
    "--no-prune",
    is_flag=True,
    default=False,
    help="Keep directories emptied by the moves",
)
@click.option(
    "--no-journal",
    is_flag=True,
    default=False,
    help="Do not write a transaction log",
)
@click.option(
    "--rollback",
    type=str,
    help="Rollback a previous run by transaction ID",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Verbose output",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress all output except warnings and the summary",
)
@click.version_option(__version__, prog_name="shots-organize")
def organize(
    target_dir: Optional[str],
    dry_run: bool,
    max_operations: Optional[int],
    date_source: Optional[str],
    archive_rule: Optional[str],
    include_audio: bool,
    no_prune: bool,
    no_journal: bool,
    rollback: Optional[str],
    verbose: bool,
    quiet: bool,
) -> None:
    """
    Organize screenshots and screen recordings in TARGET_DIR.

    \b
    Examples:
        # Preview what would move
        shots-organize ~/Desktop/Screenshots --dry-run

        # Organize, taking dates from file timestamps
        shots-organize ~/Desktop/Screenshots --date-source metadata

        # Undo a run
        shots-organize ~/Desktop/Screenshots --rollback abc123...

    \b
    Layout:
        _2022/03 March/Screenshot 2022-03-14 at 10.00.00 AM.png
        06 June/Screenshot 2025-06-01 at 09.00.00 AM.png
    """
    if not target_dir:
        err_console.print("[red]✗ Usage: shots-organize TARGET_DIR[/red]\n")
        err_console.print(USAGE_HELP, markup=False)
        sys.exit(1)

    if rollback and dry_run:
        err_console.print("[red]✗ --dry-run cannot be combined with --rollback[/red]")
        sys.exit(1)

    setup_logging(verbose=verbose, quiet=quiet, console=console)

    try:
        settings = OrganizerSettings()
    except ValidationError as e:
        err_console.print("[red]✗ Invalid SHOTS_* configuration:[/red]")
        err_console.print(str(e), markup=False)
        sys.exit(1)

    if max_operations is not None:
        settings.max_operations = max_operations
    if date_source:
        settings.date_source = DateSource(date_source.lower())
    if archive_rule:
        settings.archive_rule = ArchiveRule(archive_rule.lower())
    if include_audio:
        settings.include_audio = True
    if no_prune:
        settings.prune_empty_dirs = False
    if no_journal:
        settings.journal = False

    root = Path(target_dir).expanduser().resolve()

    if not root.is_dir():
        err_console.print(f"[red]✗ Directory does not exist: {root}[/red]")
        sys.exit(1)

    executor = OperationExecutor(
        root=root,
        max_operations=settings.max_operations,
        dry_run=dry_run,
        journal=settings.journal,
        journal_dir=settings.journal_dir,
        show_progress=not quiet,
    )

    if rollback:
        console.print(f"[yellow]Rolling back transaction {rollback}...[/yellow]")
        try:
            restored = executor.rollback(rollback)
        except (OrganizerError, ValueError, OSError) as e:
            err_console.print(f"[red]✗ Rollback failed: {e}[/red]")
            sys.exit(1)
        console.print(f"[green]✓ Rollback complete, restored {restored} entries[/green]")
        return

    if not quiet:
        console.print(f"[bold cyan]Shots Organizer {__version__}[/bold cyan]\n")
        console.print(f"[cyan]Organizing files in:[/cyan] {root}")
        console.print(f"  Date source: {DateSource(settings.date_source).value}")
        console.print(f"  Archive rule: {ArchiveRule(settings.archive_rule).value}")
        console.print(f"  Max operations: {settings.max_operations}")
        if dry_run:
            console.print("\n[yellow]⚠ DRY RUN MODE - No files will be modified[/yellow]")
        console.print()

    try:
        records = scan(root, exclude_dirs=[settings.journal_dir])

        planner = OperationPlanner(
            root=root,
            strategy=OrganizationStrategy(
                archive_rule=settings.archive_rule,
                archive_first_year=settings.archive_first_year,
                archive_last_year=settings.archive_last_year,
            ),
            date_source=settings.date_source,
            include_audio=settings.include_audio,
            prune_empty_dirs=settings.prune_empty_dirs,
        )
        plan = planner.plan(records)

        result = executor.execute(plan)

    except (OrganizerError, OSError) as e:
        err_console.print(f"\n[red]✗ Error: {e}[/red]")
        if verbose:
            err_console.print_exception()
        if executor.transaction_id:
            err_console.print(
                f"[yellow]Operations completed before the error are journaled; "
                f"undo them with --rollback {executor.transaction_id}[/yellow]"
            )
        sys.exit(1)

    _display_result(plan, result)

    if result.transaction_id:
        console.print(f"\n[dim]Transaction ID: {result.transaction_id}[/dim]")
        console.print("[dim]You can rollback this run with:[/dim]")
        console.print(
            f"[dim]  shots-organize {target_dir} --rollback {result.transaction_id}[/dim]"
        )


def _display_result(plan: Plan, result: ExecutionResult) -> None:
    """Display organization result."""
    console.print("\n[green]✓ Organization complete![/green]\n")

    skip_counts = plan.skip_counts()

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Processed", str(result.moved))
    table.add_row("Skipped", str(len(plan.skipped) + result.skipped))
    table.add_row("  not a capture", str(skip_counts["not_organizable"]))
    table.add_row("  no date", str(skip_counts["no_date"]))
    table.add_row("  already in place", str(skip_counts["already_in_place"]))
    table.add_row("  target exists", str(skip_counts["target_exists"]))
    table.add_row("Failed", str(result.failed))
    table.add_row("Directories removed", str(result.removed_directories))
    table.add_row("Remaining", str(result.remaining))

    console.print(table)

    if result.dry_run:
        console.print("\n[yellow]This was a DRY RUN - no files were modified[/yellow]")
        console.print("Run without --dry-run to execute the organization.")

    if result.remaining:
        console.print(
            f"\n[yellow]{result.remaining} operations exceed the limit; "
            f"run again to continue.[/yellow]"
        )

    if result.errors:
        console.print("\n[red]Errors:[/red]")
        for error in result.errors[:10]:  # Show first 10
            console.print(f"  [red]• {error}[/red]")
        if len(result.errors) > 10:
            console.print(f"  [dim]... and {len(result.errors) - 10} more[/dim]")


def main() -> None:
    organize()


if __name__ == "__main__":
    main()
