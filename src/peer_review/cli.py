"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from peer_review.clients.llm_client import LLMClient
from peer_review.config import load_config
from peer_review.errors import PreconditionError
from peer_review.export.review_composer import compose_review
from peer_review.models.section import TONE_SCALE, GenerationState
from peer_review.models.snapshot import FormSnapshot
from peer_review.parsers.form_loader import load_form
from peer_review.pipeline.form_controller import FormController
from peer_review.pipeline.prompt_builder import resolve_question
from peer_review.store.section_store import SectionStore
from peer_review.usage.cost_calculator import format_usage
from peer_review.utils.word_counter import FeedbackIssue, check_feedback, word_count

app = typer.Typer(
    name="peer-review",
    help="Rewrite informal peer feedback into a professional review",
    no_args_is_help=True,
)
console = Console()

ISSUE_TEXT = {
    FeedbackIssue.EMPTY: "no feedback written",
    FeedbackIssue.OVER_LIMIT: "over the word limit",
    FeedbackIssue.IN_PROGRESS: "already generating",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_or_exit(form: Path) -> FormSnapshot:
    if not form.exists():
        console.print(f"[red]Form file not found: {form}[/red]")
        raise typer.Exit(1)
    try:
        return load_form(form)
    except (PreconditionError, ValueError) as e:
        console.print(f"[red]Invalid form file: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def refine(
    form: Path = typer.Argument(help="Review form YAML file"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the composed review (.md)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Rewrite every section with feedback and print the results."""
    _setup_logging(verbose)
    config = load_config()
    snapshot = _load_or_exit(form)

    llm = LLMClient(timeout=config.llm.timeout)
    controller = FormController(llm, store=SectionStore(snapshot), config=config)

    for i, issue in enumerate(controller.section_issues()):
        if issue is not None:
            console.print(f"[yellow]Skipping question {i + 1}: {ISSUE_TEXT[issue]}[/yellow]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Generating...", total=None)

        def on_change(current: FormSnapshot) -> None:
            pending = sum(1 for s in current.sections if s.is_loading)
            progress.update(task, description=f"Generating... {pending} section(s) pending")

        controller.subscribe(on_change)
        started = asyncio.run(controller.regenerate_all())

    result = controller.snapshot
    name = result.subject.name
    for i in started:
        section = result.sections[i]
        title = escape(f"Question {i + 1}: {resolve_question(section.question, name)}")
        if section.generation_state is GenerationState.SUCCESS:
            console.print(
                Panel(Text(section.refined_feedback or ""), title=title, border_style="green")
            )
        else:
            console.print(
                Panel(Text(section.last_error or "", style="red"), title=title, border_style="red")
            )

    console.print(f"[dim]{escape(format_usage(llm.get_token_summary()))}[/dim]")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(compose_review(result), encoding="utf-8")
        console.print(f"\n[green]Review saved: {output}[/green]")

    missing = result.subject.missing_fields()
    if missing:
        console.print(f"[yellow]Missing subject fields: {', '.join(missing)}[/yellow]")


@app.command()
def check(
    form: Path = typer.Argument(help="Review form YAML file"),
) -> None:
    """Show word counts and blocking issues without calling the API."""
    config = load_config()
    snapshot = _load_or_exit(form)
    limit = config.feedback.word_limit

    table = Table(title="Feedback sections")
    table.add_column("#", justify="right")
    table.add_column("Question")
    table.add_column("Words", justify="right")
    table.add_column("Tone")
    table.add_column("Status", no_wrap=True)

    for i, section in enumerate(snapshot.sections):
        issue = check_feedback(section.initial_feedback, limit)
        words = word_count(section.initial_feedback)
        color = "red" if words > limit else "default"
        table.add_row(
            str(i + 1),
            escape(resolve_question(section.question, snapshot.subject.name)),
            f"[{color}]{words}/{limit}[/{color}]",
            section.tone.value if section.tone else "-",
            f"[yellow]{ISSUE_TEXT[issue]}[/yellow]" if issue else "[green]ready[/green]",
        )
    console.print(table)

    missing = snapshot.subject.missing_fields()
    if missing:
        console.print(f"[yellow]Missing subject fields: {', '.join(missing)}[/yellow]")


@app.command()
def tones() -> None:
    """List the tone scale."""
    for ordinal, tone in TONE_SCALE.items():
        console.print(f"{ordinal}. {tone.value}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
