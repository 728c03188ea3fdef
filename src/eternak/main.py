"""
E-TernakID - CLI Entry Point.

Usage:
    eternak serve            Start the web API
    eternak seed             Seed the default herd
    eternak herd             List the herd
    eternak show KIT-01      Show one animal
    eternak predict KIT-01   Predict health issues for one animal
    eternak health           Check configuration
    eternak --help           Show help
"""

import asyncio

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

app = typer.Typer(
    name="eternak",
    help="E-TernakID - Livestock records and AI health prediction.",
    add_completion=False,
)
console = Console()


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import os

    import uvicorn

    from eternak.config import settings

    # Hosting platforms set PORT
    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]E-TernakID API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "eternak.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def seed(
    count: int = typer.Option(None, "--count", "-n", help="Number of animals (default: SEED_ANIMAL_COUNT)"),
) -> None:
    """Create the default herd. Existing animals are left untouched."""
    from eternak.db.livestock import create_default_animals

    try:
        created = asyncio.run(create_default_animals(count))
    except Exception as e:
        console.print(f"\n[red]FAIL Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]OK[/green] Seeded {len(created)} animals")


@app.command()
def herd(
    search: str = typer.Option(None, "--search", "-s", help="Filter by name or registration id"),
) -> None:
    """List the herd."""
    from eternak.calculations import calculate_age
    from eternak.db.livestock import list_animals

    animals = asyncio.run(list_animals(search))
    if not animals:
        console.print("[dim]No animals found.[/dim]")
        return

    table = Table(title="Ternak")
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Nama")
    table.add_column("No. Registrasi")
    table.add_column("Ras")
    table.add_column("Kelamin")
    table.add_column("Umur")
    table.add_column("Status")
    for a in animals:
        table.add_row(a.id, a.name, a.reg_id, a.breed, a.gender, calculate_age(a.birth_date), a.status)

    console.print(table)
    console.print(f"\n[dim]Total: {len(animals)} animals[/dim]")


@app.command()
def show(animal_id: str = typer.Argument(..., help="Animal id, e.g. KIT-01")) -> None:
    """Show one animal with its logs and growth."""
    from eternak.calculations import calculate_adg, calculate_age, format_date
    from eternak.db.livestock import get_animal

    animal = asyncio.run(get_animal(animal_id))
    if animal is None:
        console.print(f"[red]Ternak {animal_id} tidak ditemukan[/red]")
        raise typer.Exit(1)

    dam, sire = animal.pedigree.dam, animal.pedigree.sire
    console.print(
        Panel.fit(
            f"[bold]{animal.name}[/bold] ({animal.reg_id})\n"
            f"Ras: {animal.breed}  Kelamin: {animal.gender}  Status: {animal.status}\n"
            f"Umur: {calculate_age(animal.birth_date)}  Lahir: {format_date(animal.birth_date)}\n"
            f"Pemilik: {animal.owner}, {animal.address}\n"
            f"Induk: {dam.name or '-'}  Pejantan: {sire.name or '-'}",
            title=animal.id,
            border_style="green",
        )
    )

    growth = calculate_adg(animal.growth_records)
    table = Table(title=f"Pertumbuhan (rata-rata ADG: {growth.average})")
    table.add_column("Tanggal")
    table.add_column("Bobot (kg)", justify="right")
    table.add_column("ADG (kg/hari)", justify="right")
    for row in growth.records:
        table.add_row(format_date(row.date), f"{row.weight:g}", row.adg)
    console.print(table)

    if animal.health_log:
        console.print("\n[bold]Riwayat Kesehatan:[/bold]")
        for log in sorted(animal.health_log, key=lambda log: log.date, reverse=True):
            console.print(f"  • {format_date(log.date)} [{log.type}] {log.summary}")

    if animal.reproduction_log:
        console.print("\n[bold]Riwayat Reproduksi:[/bold]")
        for log in sorted(animal.reproduction_log, key=lambda log: log.date, reverse=True):
            console.print(f"  • {format_date(log.date)} [{log.type}] {log.detail}")


@app.command()
def predict(
    animal_id: str = typer.Argument(..., help="Animal id, e.g. KIT-01"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log LLM prompts to prompt_logs/"),
) -> None:
    """Predict likely health issues from the animal's health log."""
    from eternak.db.livestock import get_animal
    from eternak.errors import InsufficientHealthDataError
    from eternak.llm.prompt_logger import enable_prompt_logging, get_session_log_dir
    from eternak.prediction import PredictionError, build_prediction_input, run_health_prediction

    if log_prompts:
        enable_prompt_logging(True)

    animal = asyncio.run(get_animal(animal_id))
    if animal is None:
        console.print(f"[red]Ternak {animal_id} tidak ditemukan[/red]")
        raise typer.Exit(1)

    try:
        data = build_prediction_input(animal)
    except InsufficientHealthDataError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(1)

    with Live(Spinner("dots", text="Menganalisis..."), console=console, transient=True):
        result = asyncio.run(run_health_prediction(data))

    if isinstance(result, PredictionError):
        console.print(f"[red]{result.error}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Prediksi Kesehatan {result.animal_id}")
    table.add_column("Masalah", style="bold")
    table.add_column("Kemungkinan")
    table.add_column("Rekomendasi")
    for issue in result.predicted_issues:
        table.add_row(issue.issue, issue.likelihood, issue.recommendations)
    console.print(table)

    if log_prompts:
        log_dir = get_session_log_dir()
        if log_dir:
            console.print(f"\n[dim]Prompts logged to: {log_dir}[/dim]")


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from eternak.config import get_settings

    console.print("\n[bold]E-TernakID Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.eternak_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Store backend: {settings.store_backend}")

        if settings.openai_api_key.startswith("sk-"):
            console.print("[green]OK[/green] OpenAI API key configured")
        else:
            console.print("[yellow]WARN[/yellow] OpenAI API key may be invalid")

        if settings.store_backend == "supabase":
            if settings.supabase_url and settings.supabase_url.startswith("https://"):
                console.print("[green]OK[/green] Supabase URL configured")
            else:
                console.print("[red]FAIL[/red] Supabase URL missing or invalid")
                raise typer.Exit(1)
        else:
            console.print("[dim]INFO[/dim] In-memory store, data is lost on exit")

        console.print("\n[green]All checks passed![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)


@app.command()
def db() -> None:
    """Check the Supabase connection and the livestock table."""
    from eternak.config import settings
    from eternak.db.client import get_client

    console.print("\n[bold]Database Connection Check[/bold]\n")

    try:
        client = get_client()
        console.print("[green]OK[/green] Connected to Supabase")

        result = client.table(settings.livestock_table).select("id", count="exact").limit(0).execute()
        count = result.count if result.count is not None else "?"
        console.print(f"  [green]OK[/green] {settings.livestock_table}: {count} rows")

        console.print("\n[green]Database check complete![/green]")

    except Exception as e:
        console.print(f"\n[red]FAIL Database connection failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from eternak import __version__

    console.print(f"E-TernakID version {__version__}")


if __name__ == "__main__":
    app()
