"""Command-line interface for radio-accuracy.

Uses Typer for a modern, type-hinted CLI experience.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

# Load environment variables from .env files
# Priority: local .env > ~/.radio-accuracy/.env
load_dotenv()
_user_env = Path.home() / ".radio-accuracy" / ".env"
if _user_env.exists():
    load_dotenv(_user_env)  # Fills in only what the local .env left unset
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from radio_accuracy import __version__
from radio_accuracy.batch import load_attempts, score_attempts
from radio_accuracy.config import ScoringConfig, get_scoring_config
from radio_accuracy.errors import RadioAccuracyError, format_error_for_display
from radio_accuracy.logging import LogLevel, set_verbosity
from radio_accuracy.models import AccuracyCategory, AccuracyResult, SpeechCategory
from radio_accuracy.scenarios import (
    DEFAULT_LIST_LIMIT,
    ScenarioCatalog,
    build_session_record,
)
from radio_accuracy.scoring import compute_accuracy
from radio_accuracy.storage import StorageError
from radio_accuracy.vocabulary import PHONETIC_ALPHABET, POLICE_CODES

# Create the main Typer app
app = typer.Typer(
    name="radio-accuracy",
    help="Score spoken radio phrases against the expected 10-codes, phonetic letters and protocol.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

_CATEGORY_STYLES = {
    AccuracyCategory.EXCELLENT: "green",
    AccuracyCategory.GOOD: "cyan",
    AccuracyCategory.NEEDS_IMPROVEMENT: "yellow",
    AccuracyCategory.POOR: "red",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"radio-accuracy version {__version__}")
        raise typer.Exit()


def _fail(error: Exception) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(format_error_for_display(error))}")
    raise typer.Exit(1)


def _load_config(ctx: typer.Context) -> ScoringConfig:
    """Resolve the scoring config from --config, the environment or defaults."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return get_scoring_config(config_path)
    except RadioAccuracyError as e:
        _fail(e)


def _load_catalog(scenario_file: Path | None) -> ScenarioCatalog:
    """Load a scenario file, or the built-in scenarios when none is given."""
    if scenario_file is None:
        return ScenarioCatalog.builtin()
    try:
        return ScenarioCatalog.load_file(scenario_file)
    except RadioAccuracyError as e:
        _fail(e)


def _print_result(result: AccuracyResult) -> None:
    """Render an accuracy result as a table with a summary line."""
    table = Table(title="Token Matches")
    table.add_column("#", style="dim")
    table.add_column("Expected", style="cyan")
    table.add_column("Spoken", style="white")
    table.add_column("Similarity", style="magenta", justify="right")
    table.add_column("Match")

    for index, record in enumerate(result.matches, start=1):
        table.add_row(
            str(index),
            record.expected,
            record.actual or "[dim]-[/dim]",
            f"{record.similarity:.1f}%",
            "[green]yes[/green]" if record.match else "[red]no[/red]",
        )

    if result.matches:
        console.print(table)

    style = _CATEGORY_STYLES[result.category]
    console.print(f"\nScore: [{style}]{result.score}[/{style}] ({result.category.value})")
    console.print(f"Matched: {result.perfect_matches}/{result.expected_token_count}")

    if result.suggestions:
        console.print("\n[bold]Suggestions:[/bold]")
        for suggestion in result.suggestions:
            console.print(f"  - {suggestion}", markup=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log output (-vv for debug)."),
    ] = 0,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Scoring config JSON file (default: $RADIO_ACCURACY_CONFIG).",
        ),
    ] = None,
) -> None:
    """Radio Accuracy - Speech Accuracy Scoring for Radio Communication Training.

    Compares what a trainee said with what they should have said:

    [bold]codes[/bold]: 10-codes such as 10-4, spoken as "ten four" or "10-4"

    [bold]phonetic[/bold]: NATO phonetic alphabet letters

    [bold]radio-protocol[/bold]: general radio phrases, word by word
    """
    if verbose >= 2:
        set_verbosity(LogLevel.DEBUG)
    elif verbose == 1:
        set_verbosity(LogLevel.VERBOSE)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


# =============================================================================
# Scoring Commands
# =============================================================================


@app.command()
def score(
    ctx: typer.Context,
    spoken: Annotated[str, typer.Argument(help="Transcript of what was said")],
    expected: Annotated[str, typer.Argument(help="Phrase that should have been said")],
    category: Annotated[
        SpeechCategory,
        typer.Option("--category", "-t", help="Vocabulary to score with"),
    ] = SpeechCategory.RADIO_PROTOCOL,
    strict: Annotated[
        bool, typer.Option("--strict", help="Require 95% similarity for plain words")
    ] = False,
    no_partial_credit: Annotated[
        bool,
        typer.Option("--no-partial-credit", help="Give no credit to near misses"),
    ] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
) -> None:
    """Score a spoken transcript against the expected phrase.

    Example:
        radio-accuracy score "ten four" "10-4" --category codes
    """
    scoring_config = _load_config(ctx)
    result = compute_accuracy(
        spoken,
        expected,
        category=category,
        strict_mode=strict,
        allow_partial_credit=not no_partial_credit,
        config=scoring_config,
    )

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    _print_result(result)


@app.command()
def variants(
    table_name: Annotated[str, typer.Argument(help="Alias table: codes or phonetic")],
    key: Annotated[
        Optional[str],
        typer.Argument(help="Code or letter to look up (omit to list the table)"),
    ] = None,
) -> None:
    """List the accepted spoken forms of a 10-code or phonetic letter."""
    tables = {"codes": POLICE_CODES, "phonetic": PHONETIC_ALPHABET}
    alias_table = tables.get(table_name.lower())
    if alias_table is None:
        console.print(f"[red]Error:[/red] Unknown table '{escape(table_name)}'. Use 'codes' or 'phonetic'.")
        raise typer.Exit(1)

    if key is None:
        table = Table(title=f"Accepted {table_name.lower()} variants")
        table.add_column("Canonical", style="cyan", no_wrap=True)
        table.add_column("Spoken forms", style="white")
        for canonical in alias_table.get_all_terms():
            table.add_row(canonical, ", ".join(alias_table.get_variants(canonical)))
        console.print(table)
        return

    if key not in alias_table:
        console.print(f"[yellow]'{escape(key)}' is not in the table; only the exact form is accepted.[/yellow]")

    for variant in alias_table.get_variants(key):
        console.print(f"  {variant}", markup=False)


# =============================================================================
# Scenario Commands
# =============================================================================

# Create scenarios subcommand group
scenarios_app = typer.Typer(
    name="scenarios",
    help="Browse and practise voice scenarios.",
)
app.add_typer(scenarios_app, name="scenarios")


@scenarios_app.command("list")
def scenarios_list(
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-t", help="Filter by category (PHONETIC, CODES, RADIO_PROTOCOL)"),
    ] = None,
    difficulty: Annotated[
        Optional[str],
        typer.Option("--difficulty", "-d", help="Filter by difficulty (EASY, MEDIUM, HARD)"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of scenarios to show (max 100)"),
    ] = DEFAULT_LIST_LIMIT,
    scenario_file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Scenario JSON file (default: built-in scenarios)"),
    ] = None,
) -> None:
    """List voice practice scenarios."""
    catalog = _load_catalog(scenario_file)
    try:
        scenarios = catalog.filter(category=category, difficulty=difficulty, limit=limit)
    except RadioAccuracyError as e:
        _fail(e)

    if not scenarios:
        console.print("[yellow]No scenarios found.[/yellow]")
        return

    table = Table(title=f"Voice Scenarios ({len(scenarios)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Category", style="green")
    table.add_column("Level", style="yellow")

    for scenario in scenarios:
        level = scenario.difficulty.value
        if scenario.estimated_duration:
            level += f" ({scenario.estimated_duration}s)"
        table.add_row(
            escape(scenario.id),
            escape(scenario.title),
            scenario.category.value,
            level,
        )

    console.print(table)


@scenarios_app.command("practice")
def scenarios_practice(
    ctx: typer.Context,
    scenario_id: Annotated[str, typer.Argument(help="Scenario ID")],
    transcript: Annotated[str, typer.Argument(help="Transcript of what was said")],
    scenario_file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Scenario JSON file (default: built-in scenarios)"),
    ] = None,
    duration: Annotated[
        float, typer.Option("--duration", help="Recording length in seconds")
    ] = 0.0,
    strict: Annotated[
        bool, typer.Option("--strict", help="Require 95% similarity for plain words")
    ] = False,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the session record payload as JSON")
    ] = False,
) -> None:
    """Score a transcript against a practice scenario."""
    scoring_config = _load_config(ctx)
    catalog = _load_catalog(scenario_file)

    try:
        scenario = catalog.get(scenario_id)
        record = build_session_record(
            transcript,
            scenario,
            duration=duration,
            strict_mode=strict,
            config=scoring_config,
        )
    except RadioAccuracyError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(record.to_payload(), indent=2))
        return

    console.print(
        Panel(
            f"{escape(scenario.instruction)}\n\n"
            f"Target:   {escape(scenario.target_text)}\n"
            f"Expected: {escape(scenario.expected_answer)}",
            title=escape(scenario.title),
        )
    )
    _print_result(record.accuracy)


# =============================================================================
# Batch Commands
# =============================================================================


@app.command()
def batch(
    ctx: typer.Context,
    input_file: Annotated[Path, typer.Argument(help="JSON file of attempts")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the report JSON here"),
    ] = None,
    scenario_file: Annotated[
        Optional[Path],
        typer.Option("--scenarios", "-s", help="Scenario JSON file for scenario_id lookups"),
    ] = None,
) -> None:
    """Score a batch of attempts from a JSON file.

    Each attempt has a transcript plus either an expected_answer (and
    optional category) or a scenario_id. Failed attempts are reported
    without stopping the batch.
    """
    scoring_config = _load_config(ctx)
    catalog = _load_catalog(scenario_file)

    try:
        attempts = load_attempts(input_file)
    except RadioAccuracyError as e:
        _fail(e)

    report = score_attempts(attempts, catalog=catalog, config=scoring_config)
    summary = report.get_summary()

    table = Table(title=f"Batch Results ({summary['total_attempts']} attempts)")
    table.add_column("Attempt", style="cyan")
    table.add_column("Status", style="white")
    table.add_column("Score", style="magenta", justify="right")
    table.add_column("Category", style="green")
    table.add_column("Error", style="red", max_width=40)

    for result in report.results:
        table.add_row(
            result.attempt_id,
            result.status.value,
            str(result.score) if result.score is not None else "-",
            result.accuracy_category or "-",
            escape(result.error_message),
        )

    console.print(table)

    mean = summary["mean_score"]
    console.print(
        f"\nCompleted: {summary['completed']}  Failed: {summary['failed']}  "
        f"Mean score: {mean if mean is not None else '-'}  "
        f"Likely correct: {summary['likely_correct']}"
    )

    if output:
        try:
            report.save(output)
        except StorageError as e:
            _fail(e)
        console.print(f"[green]Report saved to {output}[/green]")


if __name__ == "__main__":
    app()
