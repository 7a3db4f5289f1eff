"""CardQuery CLI application using Typer.

Offline translation, maintenance jobs that normally run behind the admin
API, and secret generation for deployment configuration.
"""

import asyncio
import secrets
from datetime import timedelta
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardquery.application.services import FeedbackProcessor, PatternMiner
from cardquery.domain.mining import MiningReport
from cardquery.domain.translation import (
    SearchFilters,
    apply_filters,
    compile_fallback,
    compile_query,
    validate_query,
)
from cardquery.infrastructure.integration.ai import OllamaRuleGenerator
from cardquery.infrastructure.integration.scryfall import ScryfallLiveValidator
from cardquery.infrastructure.persistence.sqlalchemy.models import Base
from cardquery.infrastructure.persistence.sqlalchemy.repositories import (
    FeedbackRepositorySQLAlchemy,
    RuleRepositorySQLAlchemy,
    TranslationLogRepositorySQLAlchemy,
)
from cardquery_config.settings import Settings, get_settings

app = typer.Typer(
    name="cardquery",
    help="CardQuery - natural-language card search translator CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


def _filters(format_: Optional[str], colors: Optional[str]) -> SearchFilters:
    return SearchFilters(
        format=format_.lower() if format_ else None,
        color_identity=tuple(colors.upper()) if colors else (),
    )


def _print_translation(query: str, compiled: str, warnings: list[str]) -> None:
    console.print(f"[dim]{query}[/dim]")
    console.print(f"[bold green]{compiled}[/bold green]")
    for warning in warnings:
        console.print(f"[yellow]! {warning}[/yellow]")


@app.command("translate")
def translate(
    query: str = typer.Argument(..., help="Natural-language card search"),
    format_: Optional[str] = typer.Option(None, "--format", "-f", help="Format filter"),
    colors: Optional[str] = typer.Option(
        None, "--colors", "-c", help="Color identity filter, e.g. RG"
    ),
) -> None:
    """Translate a query with the deterministic extractor pipeline.

    No cache, rule store or network access is involved.
    """
    compiled, ir = compile_query(query)
    compiled = apply_filters(compiled, _filters(format_, colors))
    validation = validate_query(compiled)

    warnings = list(ir.warnings) + list(validation.issues)
    _print_translation(query, validation.sanitized, warnings)


@app.command("fallback")
def fallback(
    query: str = typer.Argument(..., help="Natural-language card search"),
    format_: Optional[str] = typer.Option(None, "--format", "-f", help="Format filter"),
    colors: Optional[str] = typer.Option(
        None, "--colors", "-c", help="Color identity filter, e.g. RG"
    ),
) -> None:
    """Translate a query with the static fallback compiler."""
    _print_translation(query, compile_fallback(query, _filters(format_, colors)), [])


async def _with_session(settings: Settings, job):
    engine = create_async_engine(settings.database_url, echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        async with session_maker() as session:
            result = await job(session)
            await session.commit()
            return result
    finally:
        await engine.dispose()


def _live_validator(settings: Settings) -> ScryfallLiveValidator:
    return ScryfallLiveValidator(
        base_url=settings.scryfall_base_url,
        timeout=settings.scryfall_timeout,
    )


@app.command("mine-patterns")
def mine_patterns(
    no_validate: bool = typer.Option(
        False, "--no-validate", help="Skip live validation of candidates"
    ),
) -> None:
    """Promote frequently served translations to rules."""
    settings = get_settings()

    async def job(session: AsyncSession) -> MiningReport:
        use_validator = settings.miner_live_validation and not no_validate
        miner = PatternMiner(
            log_repository=TranslationLogRepositorySQLAlchemy(session),
            rule_repository=RuleRepositorySQLAlchemy(session),
            live_validator=_live_validator(settings) if use_validator else None,
            window=timedelta(days=settings.miner_window_days),
            log_limit=settings.miner_log_limit,
            min_occurrences=settings.miner_min_occurrences,
            min_confidence=settings.miner_min_confidence,
            max_new_rules=settings.miner_max_new_rules,
            fail_open=settings.validation_fail_open,
        )
        return await miner.run()

    report = asyncio.run(_with_session(settings, job))

    table = Table(title="Pattern mining")
    table.add_column("Analyzed", justify="right")
    table.add_column("Candidates", justify="right")
    table.add_column("Created", justify="right")
    table.add_column("Rejected", justify="right")
    table.add_row(
        str(report.analyzed),
        str(report.candidates),
        str(report.created_count),
        str(len(report.rejected)),
    )
    console.print(table)
    for pattern in report.created:
        console.print(f"  [green]+[/green] {pattern}")
    for pattern in report.rejected:
        console.print(f"  [red]-[/red] {pattern}")


@app.command("sweep-feedback")
def sweep_feedback() -> None:
    """Fail feedback items stuck in processing past the stale age."""
    settings = get_settings()

    async def job(session: AsyncSession) -> int:
        processor = FeedbackProcessor(
            feedback_repository=FeedbackRepositorySQLAlchemy(session),
            rule_repository=RuleRepositorySQLAlchemy(session),
            rule_generator=OllamaRuleGenerator(
                model=settings.llm_model,
                base_url=settings.llm_base_url,
                timeout=settings.llm_timeout,
            ),
            live_validator=_live_validator(settings),
            stale_after=timedelta(minutes=settings.feedback_stale_minutes),
        )
        return await processor.sweep_stale()

    reclaimed = asyncio.run(_with_session(settings, job))
    console.print(f"Reclaimed [bold]{reclaimed}[/bold] stale feedback item(s)")


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for CardQuery configuration.

    Generates:
    - JWT_SECRET_KEY: Secret for verifying signed bearer tokens
    - API_SECRET: Static bearer credential for trusted clients

    Copy the output to your .env file.
    """
    console.print("\n[bold green]CardQuery Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes is comfortably strong for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    api_secret = secrets.token_urlsafe(32)
    console.print(f"[cyan]API_SECRET[/cyan]={api_secret}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env or "
        "config/.env.dev file.[/dim]\n"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
