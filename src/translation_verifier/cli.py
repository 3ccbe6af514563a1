"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from translation_verifier.cache.search_cache import SearchCache
from translation_verifier.clients.page_segmenter import PageSegmenter
from translation_verifier.clients.search_client import SearchClient
from translation_verifier.config import AppConfig, load_config
from translation_verifier.errors import VerifierError
from translation_verifier.models.report import TranslationReport
from translation_verifier.nlp.parser import ChunkParser
from translation_verifier.nlp.similarity import StructuralSimilarity
from translation_verifier.pipeline.evidence import EvidenceGatherer
from translation_verifier.pipeline.judge import MeaningfulnessJudge, is_meaningful
from translation_verifier.pipeline.phrase_extractor import extract_phrases
from translation_verifier.pipeline.report_builder import ReportBuilder
from translation_verifier.report.xml_writer import write_report
from translation_verifier.translators import PROVIDER_NAMES, build_translators

app = typer.Typer(
    name="translation-verifier",
    help="Check machine translations phrase by phrase against web evidence",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _search_client(config: AppConfig) -> SearchClient:
    cache = None
    if config.cache.enabled:
        cache = SearchCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    return SearchClient(
        search_depth=config.search.search_depth,
        timeout=config.search.timeout,
        cache=cache,
    )


def _build_judge(config: AppConfig, client: httpx.AsyncClient, parser: ChunkParser) -> MeaningfulnessJudge:
    segmenter = PageSegmenter(
        client,
        timeout=config.fetch.timeout,
        max_sentences=config.fetch.max_sentences,
        user_agent=config.fetch.user_agent,
    )
    return MeaningfulnessJudge(
        _search_client(config),
        EvidenceGatherer(segmenter),
        StructuralSimilarity(parser),
        config.judge,
    )


def _summary_table(report: TranslationReport) -> Table:
    table = Table(title="Translations")
    table.add_column("Engine")
    table.add_column("Translation")
    table.add_column("Phrases", justify="right")
    table.add_column("Meaningful", justify="right")
    for translation in report.translations:
        if translation.error:
            table.add_row(translation.engine, f"[red]{translation.error}[/red]", "-", "-")
            continue
        table.add_row(
            translation.engine,
            translation.translated_text,
            str(translation.phrase_count),
            str(translation.meaningful_count),
        )
    return table


@app.command()
def check(
    texts: list[str] = typer.Argument(None, help="Source texts to translate and check"),
    input_file: Path = typer.Option(None, "--input", "-i", help="File with one source text per line"),
    provider: list[str] = typer.Option(None, "--provider", "-p", help="Translation provider (repeatable)"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Directory for XML reports"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Translate texts with every provider and write meaningfulness reports."""
    _setup_logging(verbose)
    sources = list(texts or [])
    if input_file is not None:
        if not input_file.exists():
            console.print(f"[red]Input file not found: {input_file}[/red]")
            raise typer.Exit(1)
        sources.extend(
            line.strip() for line in input_file.read_text(encoding="utf-8").splitlines() if line.strip()
        )
    if not sources:
        console.print("[red]Nothing to check: pass texts or --input.[/red]")
        raise typer.Exit(1)

    config = load_config(config_path)
    output_dir = output_dir or Path(config.report.output_dir)

    async def run() -> list[TranslationReport]:
        async with httpx.AsyncClient() as client:
            translators = build_translators(config.translation, client, provider or None)
            parser = ChunkParser()
            builder = ReportBuilder(
                translators,
                parser,
                _build_judge(config, client, parser),
                config,
                on_phase=on_phase,
            )
            return await builder.build_many(sources)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Checking translations...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        try:
            reports = asyncio.run(run())
        except (VerifierError, ValueError) as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)

    for index, report in enumerate(reports, 1):
        path = write_report(report, output_dir / f"report{index}.xml", config.report.stylesheet)
        console.print(_summary_table(report))
        console.print(f"[green]Report saved: {path}[/green]")


@app.command()
def judge(
    phrase: str = typer.Argument(help="Phrase to judge"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Judge a single phrase and list the supporting sentences."""
    _setup_logging(verbose)
    config = load_config(config_path)

    async def run():
        async with httpx.AsyncClient() as client:
            return await _build_judge(config, client, ChunkParser()).judge(phrase)

    try:
        with console.status("Searching for evidence..."):
            suggestions = asyncio.run(run())
    except (VerifierError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if not suggestions:
        console.print("[yellow]No corroborating evidence found.[/yellow]")
        return

    verdict = is_meaningful(suggestions, config.judge.meaningfulness_threshold)
    table = Table(title="Meaningful" if verdict else "Suggestions")
    table.add_column("Score", justify="right")
    table.add_column("Sentence")
    for text, score in sorted(suggestions.items(), key=lambda item: -item[1]):
        table.add_row(f"{score:.3f}", text)
    console.print(table)


@app.command()
def phrases(
    sentence: str = typer.Argument(help="Sentence to split into phrase candidates"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    tree: bool = typer.Option(False, "--tree", help="Also print the parse tree"),
) -> None:
    """Show the phrase candidates of a sentence in testing order."""
    config = load_config(config_path)
    try:
        parsed = ChunkParser().parse(sentence)
    except VerifierError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if tree:
        console.print(parsed.pformat())
    candidates = list(extract_phrases(parsed, config.phrases))
    if not candidates:
        console.print("[yellow]No phrase satisfies the word-count bounds.[/yellow]")
        return
    for index, candidate in enumerate(candidates, 1):
        console.print(f"{index}. ({candidate.word_count} words) {candidate.text}")


@app.command()
def providers() -> None:
    """List the known translation providers."""
    for name in PROVIDER_NAMES:
        console.print(name)


@app.command("clear-cache")
def clear_cache(
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
) -> None:
    """Delete all cached search results."""
    config = load_config(config_path)
    cache = SearchCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    console.print(f"[green]Removed {cache.clear()} cached search(es).[/green]")


if __name__ == "__main__":
    app()
