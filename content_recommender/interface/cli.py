# content_recommender/interface/cli.py

from typing import List, Mapping, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from content_recommender.domain.models import Document, SimilarDocument


console = Console()


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]📚 Content-Based Recommender[/bold cyan]\n"
        "[dim]TF-IDF vectors + cosine similarity[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_training_status(num_documents: int, language: str, restored: bool = False) -> None:
    action = "Model restored" if restored else "Model trained"
    console.print(
        f"\n[green]✓[/green] {action} — [bold]{num_documents}[/bold] documents "
        f"ready ([dim]language: {language}[/dim]).\n"
    )


def prompt_for_document_id() -> str:
    return Prompt.ask("\n[bold yellow]🔎 Document id[/bold yellow]").strip()


def display_similar_documents(
    document_id: str,
    similar_documents: List[SimilarDocument],
    documents_by_id: Optional[Mapping[str, Document]] = None,
) -> None:
    if not similar_documents:
        console.print(f"\n[dim]No similar documents for[/dim] [bold]{document_id}[/bold].\n")
        return

    documents_by_id = documents_by_id or {}
    table = Table(
        title=f"Similar to '{document_id}'",
        box=box.ROUNDED,
        header_style="bold",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Id", style="bold white")
    table.add_column("Score", justify="right")
    table.add_column("Content", overflow="fold")

    for rank, similar in enumerate(similar_documents, start=1):
        color = _score_to_color(similar.score)
        content = documents_by_id.get(similar.id, {}).get("content", "")
        table.add_row(
            str(rank),
            similar.id,
            f"[{color}]{similar.score:.4f}[/{color}]",
            content[:120],
        )

    console.print(table)


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")


def ask_continue() -> bool:
    answer = Prompt.ask(
        "\n[dim]Look up another document?[/dim]",
        choices=["y", "n"],
        default="y",
    )
    return answer.lower() == "y"


def _score_to_color(score: float) -> str:
    if score >= 0.75:
        return "green"
    elif score >= 0.40:
        return "yellow"
    else:
        return "red"
