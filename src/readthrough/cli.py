"""CLI interface for readthrough.

Requires the 'cli' extra: pip install readthrough[cli]
"""

from __future__ import annotations

import logging
import sys

try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError:
    print(
        "CLI dependencies not installed. Install with: pip install readthrough[cli]",
        file=sys.stderr,
    )
    sys.exit(1)

from readthrough import __version__
from readthrough.books.caching import CachingBookRepository
from readthrough.books.repository import SimpleBookRepository
from readthrough.exceptions import ConfigurationError
from readthrough.greeting import greet as greet_once
from readthrough.runner import DEMO_ISBNS, build_demo_repository, run_demo

app = typer.Typer(
    name="readthrough",
    help="Read-through caching for slow lookups.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Enable logging at this level (e.g. DEBUG)"
    ),
) -> None:
    if version:
        console.print(f"readthrough {__version__}")
        raise typer.Exit()
    if log_level is not None:
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            console.print(f"[red]Error: unknown log level {log_level!r}[/red]")
            raise typer.Exit(code=2)
        logging.basicConfig(
            level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


@app.command()
def info() -> None:
    """Show information about the readthrough installation."""
    table = Table(title="readthrough info")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])

    for dep_name in ["pydantic", "typer", "rich"]:
        try:
            mod = __import__(dep_name)
            ver = getattr(mod, "__version__", "installed")
            table.add_row(dep_name, str(ver))
        except ImportError:
            table.add_row(dep_name, "[red]not installed[/red]")

    console.print(table)


@app.command()
def lookup(
    isbns: list[str] = typer.Argument(..., help="ISBNs to look up, in order"),  # noqa: B008
    delay: float = typer.Option(3.0, "--delay", "-d", help="Simulated lookup delay in seconds"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the read-through cache"),
) -> None:
    """Look up books by ISBN, reporting which calls were served from cache."""
    try:
        slow = SimpleBookRepository(delay)
    except ConfigurationError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    cached = CachingBookRepository(slow)

    table = Table(title="Lookups")
    table.add_column("ISBN", style="cyan")
    table.add_column("Title")
    table.add_column("Cached", style="green")
    for isbn in isbns:
        if no_cache:
            book = slow.get_by_isbn(isbn)
            hit = False
        else:
            hits_before = cached.cache.stats().hits
            book = cached.get_by_isbn(isbn)
            hit = cached.cache.stats().hits > hits_before
        table.add_row(isbn, book.title, "yes" if hit else "no")
    console.print(table)
    console.print(f"[dim]Backend calls: {slow.call_count}[/dim]")


@app.command()
def demo(
    delay: float = typer.Option(3.0, "--delay", "-d", help="Simulated lookup delay in seconds"),
) -> None:
    """Fetch the demo ISBN sequence through the cache and time each call."""
    try:
        repository = build_demo_repository(delay)
    except ConfigurationError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    results = run_demo(repository, DEMO_ISBNS)

    table = Table(title="Demo lookups")
    table.add_column("ISBN", style="cyan")
    table.add_column("Title")
    table.add_column("Seconds", justify="right", style="green")
    for result in results:
        table.add_row(result.isbn, result.book.title, f"{result.elapsed:.3f}")
    console.print(table)

    stats = repository.cache.stats()
    console.print(
        f"[dim]hits={stats.hits} misses={stats.misses} loads={stats.loads} "
        f"hit_rate={stats.hit_rate:.2f}[/dim]"
    )


@app.command()
def greet(
    name: str = typer.Option("World", "--name", "-n", help="Who to greet"),
    count: int = typer.Option(1, "--count", "-c", min=1, help="Number of greetings"),
) -> None:
    """Print numbered greetings as JSON, one per line."""
    for _ in range(count):
        console.print_json(greet_once(name).model_dump_json())


if __name__ == "__main__":
    app()
