#!/usr/bin/env python3
"""
Newsboard - Discussion Platform Data Layer
==========================================

Management CLI for configuration checks, database setup and seeding.

Usage:
    python main.py --help                    # Show all commands
    python main.py check-config              # Validate configuration
    python main.py init-db                   # Initialize database
    python main.py seed --data-dir data/seed # Load seed data
    python main.py show-topics               # List topics
    python main.py show-article 1            # Show one article
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from newsboard.config.settings import get_settings
from newsboard.database.schema import DatabaseSchema
from newsboard.database.connection import get_db_manager
from newsboard.database.seed import DataSeeder, load_seed_data
from newsboard.storage import ArticleRepository, TopicRepository, run_operation
from newsboard.utils.logging import configure_application_logging
from newsboard.utils.exceptions import NewsboardError, get_user_friendly_message

console = Console()


@click.group(invoke_without_command=True)
@click.option('--debug', is_flag=True, help='Enable debug mode')
@click.pass_context
def cli(ctx, debug):
    """Newsboard - discussion platform data layer."""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    try:
        settings = get_settings()
    except NewsboardError as e:
        console.print(f"[bold red]❌ {get_user_friendly_message(e)}[/bold red]")
        sys.exit(1)

    configure_application_logging(
        log_level="DEBUG" if debug else settings.get_effective_log_level(),
        log_file=settings.logging.file_path,
        enable_console=settings.logging.console_logging,
        structured_logging=settings.logging.structured_logging,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
    )


@cli.command()
def check_config():
    """Validate configuration and environment variables."""
    console.print("[bold blue]🔧 Checking Newsboard Configuration[/bold blue]")

    settings = get_settings()

    table = Table(title="Configuration Status")
    table.add_column("Component", style="cyan")
    table.add_column("Details")

    table.add_row("Database", f"Path: {settings.database.path}, pool: {settings.database.pool_size}")
    table.add_row("Logging", f"Level: {settings.get_effective_log_level()}, file: {settings.logging.file_path}")
    table.add_row("Seed data", f"Directory: {settings.seed.data_dir}")

    console.print(table)
    console.print("[bold green]✅ Configuration valid[/bold green]")


@cli.command()
def init_db():
    """Initialize database with schema."""
    console.print("[bold blue]🗄️ Initializing Newsboard Database[/bold blue]")

    settings = get_settings()
    schema = DatabaseSchema(settings.database.path)
    schema.create_tables()

    if not schema.verify_schema():
        console.print("[bold red]❌ Database schema verification failed[/bold red]")
        sys.exit(1)

    console.print("[bold green]✅ Database initialized successfully![/bold green]")

    info = get_db_manager().get_database_info()

    info_table = Table(title="Database Information")
    info_table.add_column("Property", style="cyan")
    info_table.add_column("Value", style="green")
    info_table.add_row("Database Path", settings.database.path)
    info_table.add_row("Size", f"{info['database_size_mb']:.2f} MB")
    info_table.add_row("Connection Pool", f"{info['total_connections']} connections")
    console.print(info_table)


@cli.command()
@click.option('--data-dir', help='Directory with topics/users/articles/comments JSON files')
def seed(data_dir):
    """Replace all data with the seed dataset."""
    settings = get_settings()
    data_dir = data_dir or settings.seed.data_dir
    console.print(f"[bold blue]🌱 Seeding from {data_dir}[/bold blue]")

    try:
        DatabaseSchema(settings.database.path).create_tables()
        counts = DataSeeder(get_db_manager()).seed(load_seed_data(data_dir))
    except NewsboardError as e:
        console.print(f"[bold red]❌ Seeding failed: {get_user_friendly_message(e)}[/bold red]")
        sys.exit(1)

    table = Table(title="Seeded Rows")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="green")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)


@cli.command()
def show_topics():
    """List all topics."""
    result = run_operation(TopicRepository(get_db_manager()).fetch_all)
    if not result.ok:
        console.print(f"[bold red]❌ {get_user_friendly_message(result.error)}[/bold red]")
        sys.exit(1)

    if not result.value:
        console.print("[yellow]⚠️ No topics found in database[/yellow]")
        return

    table = Table(title="Topics")
    table.add_column("Slug", style="cyan")
    table.add_column("Description")
    for topic in result.value:
        table.add_row(topic.slug, topic.description or "")
    console.print(table)


@cli.command()
@click.argument('article_id')
def show_article(article_id):
    """Show one article with its comment count."""
    result = run_operation(ArticleRepository(get_db_manager()).fetch_by_id, article_id)
    if not result.ok:
        console.print(f"[bold red]❌ {result.kind.value}: {get_user_friendly_message(result.error)}[/bold red]")
        sys.exit(1)

    article = result.value
    table = Table(title=f"Article {article.article_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field, value in article.model_dump(mode="json").items():
        table.add_row(field, str(value))
    console.print(table)


if __name__ == "__main__":
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]👋 Newsboard interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[bold red]❌ Unexpected error: {e}[/bold red]")
        sys.exit(1)
