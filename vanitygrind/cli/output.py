"""
CLI Output Formatting
=====================

Handles console output: banner, menus, cost advisory, command display and
the final artifact inventory.

Uses Rich library for styled console output.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vanitygrind.core.models import Routing
from vanitygrind.core.process import format_argv
from vanitygrind.core.validator import AMBIGUOUS_CHARACTERS

if TYPE_CHECKING:
    from ..core.models import CollectionReport, CommandPlan, CostEstimate, VanityRequest


# Module-level console instance
console = Console(highlight=False)

RULE = "-" * 40

MENU_OPTIONS = [
    "Prefix only",
    "Suffix only",
    "Both prefix and suffix",
    "Show advanced example",
    "Exit",
]


def print_banner(generator_version: str | None = None) -> None:
    console.print("[bold cyan]✨ Vanity address generator ✨[/bold cyan]")
    console.print(RULE)
    if generator_version:
        console.print(f"[green]Found generator: {generator_version}[/green]\n")


def print_menu() -> None:
    """Print the address type menu."""
    console.print("\n[bold]Which kind of vanity address do you want to generate?[/bold]")
    for index, option in enumerate(MENU_OPTIONS, start=1):
        console.print(f"  {index}) {option}")


def print_advanced_example(generator: str = "solana-keygen", subcommand: str = "grind") -> None:
    """Print a full generator invocation using mnemonic options."""
    command = " ".join(part for part in (generator, subcommand) if part)
    console.print("\n[bold cyan]Advanced example:[/bold cyan]")
    console.print(
        "[magenta]Generates 1 address starting with 'A' and ending with 'M' (case-insensitive), "
        "using a 24-word Japanese mnemonic, writing no .json file and no BIP39 passphrase:[/magenta]\n"
    )
    console.print(
        f"[green]{command} --starts-and-ends-with A:M:1 --ignore-case --use-mnemonic "
        "--word-count 24 --language japanese --no-outfile --no-bip39-passphrase[/green]\n"
    )
    console.print(
        "[yellow]Mnemonic options can be added after '--' on the vanitygrind command line; "
        "they are passed through unchanged.[/yellow]"
    )


def print_base58_reminder() -> None:
    glyphs = ", ".join(f"'{c}'" for c in AMBIGUOUS_CHARACTERS)
    console.print("[yellow]Reminder: patterns must use Base58 characters (A-Z, a-z, 1-9).[/yellow]")
    console.print(f"[yellow]The easily confused characters {glyphs} are not allowed.[/yellow]")


def print_invalid_reply(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def print_cost_advisory(estimate: "CostEstimate", request: "VanityRequest") -> None:
    """Print the expected search cost for a request.

    Args:
        estimate: Cost estimate for the request
        request: The request being estimated
    """
    table = Table(title="Search Cost Estimate", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Pattern Characters", str(estimate.total_pattern_chars))
    table.add_row("Expected Attempts", f"{estimate.expected_attempts:,}")
    table.add_row("Matches Requested", str(request.count))
    table.add_row("Case Mode", request.case_mode)

    console.print()
    console.print(table)
    console.print("[dim]Expected attempts is an order-of-magnitude figure, not a guaranteed bound.[/dim]")

    if request.case_sensitive:
        console.print(
            "[yellow]Case-sensitive matching is slower than the figure above suggests "
            "for patterns containing letters.[/yellow]"
        )
    else:
        console.print("[green]Matching is case-insensitive (default).[/green]")

    if estimate.total_pattern_chars > estimate.threshold:
        console.print("\n[bold red]!!!!!!!!!!!!!!!!!!!!!!!!!!!!!! WARNING !!!!!!!!!!!!!!!!!!!!!!!!!!!!!![/bold red]")
        console.print(f"[red]You are searching for a pattern of {estimate.total_pattern_chars} characters.[/red]")
        console.print("[red]This can take hours, days or longer and use a lot of CPU.[/red]")
        console.print("[red]Patterns of 2-5 characters are usually recommended.[/red]")
        console.print("[bold red]!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!!![/bold red]")
    console.print()


def print_command(plan: "CommandPlan", dry_run: bool = False) -> None:
    """Print the generator command that will run (or would run)."""
    heading = "Dry run, the generator would be started with:" if dry_run else "The following command will be run:"
    console.print(f"\n[cyan]{heading}[/cyan]")
    console.print(f"[magenta]{escape(format_argv(plan.argv))}[/magenta]", soft_wrap=True)
    if plan.explicit_output_control:
        console.print("[dim]Output is routed by your passthrough arguments; files will not be moved.[/dim]")
    console.print()


def print_dry_run(plan: "CommandPlan") -> None:
    print_command(plan, dry_run=True)


def print_generation_start() -> None:
    console.print("[green]Starting generation... press Ctrl+C at any time to stop.[/green]")
    console.print(RULE)


def print_interrupted(working_dir: Path) -> None:
    """Report an interrupted run; partial artifacts are left in place."""
    console.print(f"\n{RULE}")
    console.print("[bold yellow]Generation interrupted.[/bold yellow]")
    console.print(f"[dim]Any keypair files already written remain in {working_dir}[/dim]")


def print_run_failure(exit_code: int) -> None:
    console.print(RULE)
    console.print(f"[red]✗ Generation failed (exit status {exit_code}).[/red]")


def print_collection_report(report: "CollectionReport") -> None:
    """Print where the generated keypair files ended up.

    Args:
        report: Result of output collection
    """
    console.print(RULE)
    console.print("[green]✓ Generation completed.[/green]")

    if report.routing == Routing.WORKING_DIR:
        console.print(f"[cyan]Your keypair files should be in the current directory: {report.destination}[/cyan]")
        for path in report.inventory:
            console.print(f"  - {path.name}")
        return

    if report.routing == Routing.EXPLICIT:
        console.print("[cyan]Output was routed by your passthrough arguments; no files were moved.[/cyan]")
    else:
        console.print(f"[green]✓ Moved {len(report.moved)} file(s) to: {report.destination}[/green]")

    for source, reason in report.failed.items():
        console.print(f"[red]✗ Could not move {source.name}: {reason}[/red]")

    if report.routing == Routing.EXPLICIT and not report.inventory:
        return

    table = Table(title=f"Contents of {report.destination}", show_header=True, header_style="bold green")
    table.add_column("File")
    table.add_column("Size", justify="right")
    for path in report.inventory:
        table.add_row(path.name, f"{path.stat().st_size:,} B")
    if not report.inventory:
        table.add_row("[dim](empty)[/dim]", "")
    console.print(table)


def print_security_reminder(generator: str = "solana-keygen", subcommand: str = "grind") -> None:
    command = " ".join(part for part in (generator, subcommand) if part)
    console.print("[yellow]Back up your keypair files securely and never share your private key![/yellow]")
    console.print(f"\n[cyan]For more options (mnemonic, word count, language, ...) see: {command} --help[/cyan]\n")


def print_error(message: str) -> None:
    console.print(f"[red]✗ {escape(message)}[/red]")


def print_notice(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")
