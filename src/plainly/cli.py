# src/plainly/cli.py
"""
Plainly Command Line Interface (CLI).

This module implements the terminal front end using `typer` and `rich`. It
drives the same explainer as the HTTP API, including the clarification round:
when the model asks questions, the CLI prompts for answers and sends one
follow-up request carrying them.

Usage
-----
    # Explain a text passed inline
    $ plainly explain "The insurer may deny coverage if ..."

    # Explain a file in kid mode, plain-text output
    $ plainly explain --file letter.txt --mode kid --plain

    # Pipe text in, skip clarification prompts
    $ pbpaste | plainly explain --no-interactive

    # Serve the HTTP API
    $ plainly serve --port 8000
"""

from __future__ import annotations

import time
import traceback
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt

from plainly.core.contracts.explain import ExplainRequest, ExplainResult
from plainly.core.errors import ValidationError
from plainly.core.settings import load_settings
from plainly.explain.explainer import Explainer
from plainly.explain.render import render_text

# Ensure env vars (like OPENAI_API_KEY) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="Plainly: paste confusing text, get a plain-language explanation.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _get_explainer() -> Explainer:
    """Build the explainer from settings; tests patch this helper."""
    load_settings.cache_clear()
    return Explainer.from_settings(load_settings())


def _read_input(text: str | None, file: Path | None) -> tuple[str, bool]:
    """Return the raw input and whether it came from stdin."""
    if file is not None:
        return file.read_text(encoding="utf-8"), False
    if text is not None and text != "-":
        return text, False
    return typer.get_text_stream("stdin").read(), True


def _run(explainer: Explainer, request: ExplainRequest, label: str) -> ExplainResult:
    """Call the explainer behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"[yellow]{label}", total=None)
        return explainer.explain_request(request)


def _render_result(result: ExplainResult) -> None:
    """Render a result as three Rich panels."""
    console.print(
        Panel(Markdown(result.explanation), title="Plain English Explanation", border_style="cyan")
    )
    console.print(Panel(result.summary, title="Short Summary", border_style="blue"))
    steps = "\n".join(f"- {step}" for step in result.next_steps) or "_Nothing to do._"
    console.print(Panel(Markdown(steps), title="What this means for you", border_style="green"))


def _ask_answers(questions: list[str]) -> list[str]:
    """Prompt until every question has a non-empty answer."""
    console.print("\n[bold yellow]Quick questions[/bold yellow]")
    answers: list[str] = []
    for question in questions:
        answer = ""
        while not answer.strip():
            answer = Prompt.ask(f"[bold]{question}[/bold]", console=console)
        answers.append(answer.strip())
    return answers


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def explain(
    text: Annotated[
        str | None,
        typer.Argument(help="Text to explain. Omit or pass '-' to read from stdin."),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Read the text from a file instead.",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Explanation mode: quick, normal or kid."),
    ] = "normal",
    answer: Annotated[
        list[str] | None,
        typer.Option(
            "--answer",
            "-a",
            help="Answer to a clarification question (repeatable, in order).",
        ),
    ] = None,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Print plain text ready to copy."),
    ] = False,
    texting: Annotated[
        bool,
        typer.Option("--texting", help="Print plain text in the short texting layout."),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive/--no-interactive",
            help="Prompt for answers when the model asks clarifying questions.",
        ),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Explain a confusing text in plain language.
    """
    raw, from_stdin = _read_input(text, file)

    try:
        request = ExplainRequest.from_payload({"text": raw, "mode": mode, "answers": answer})
    except ValidationError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(code=2) from e

    explainer = _get_explainer()
    start_time = time.time()

    try:
        result = _run(explainer, request, "Reading your text...")

        if (
            interactive
            and not from_stdin
            and request.answers is None
            and result.needs_clarification
            and result.questions
        ):
            if not (plain or texting):
                _render_result(result)
            answers = _ask_answers(result.questions)
            request = request.model_copy(update={"answers": answers})
            result = _run(explainer, request, "Updating the explanation...")
    except Exception as e:
        console.print(f"\n[bold red]Explain Error:[/bold red] {str(e) or 'Unexpected error.'}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    if plain or texting:
        typer.echo(render_text(result, "texting" if texting else "full"))
        return

    duration = time.time() - start_time
    console.print(f"[dim]Done in {duration:.1f}s[/dim]\n")
    _render_result(result)
    if result.needs_clarification and result.questions:
        console.print("\n[bold yellow]The explanation may improve if you answer:[/bold yellow]")
        for question in result.questions:
            console.print(f" • {question}")


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on.")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes.")] = False,
) -> None:
    """
    Serve the HTTP API with uvicorn.
    """
    from plainly.api.server import main as serve_main

    serve_main(host=host, port=port, reload=reload)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
