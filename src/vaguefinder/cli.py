"""Typer CLI definition for vaguefinder."""

import asyncio
import json
import logging
import sys
from pathlib import Path

import typer

from .cache.models import PairComparison, SentenceComparison
from .config import CONFIG_PATH, generate_config, load_config
from .embeddings.generator import EmbeddingGenerator
from .errors import ModelLoadError, VagueFinderError
from .finder import VagueFinder

app = typer.Typer(help="Compare and rank sentences by semantic similarity")


def configure_logging(debug: bool) -> None:
    """Enable verbose logging when --debug is given."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def read_candidates(candidates: list[str] | None, file: Path | None) -> list[str]:
    """Collect candidate sentences from arguments, a file or stdin.

    Arguments win over the file, the file wins over stdin. Lines from a file
    or stdin are stripped and blank lines are skipped.

    Args:
        candidates: Candidate sentences given on the command line
        file: File with one candidate per line

    Returns:
        Candidate sentences in input order

    Raises:
        ValueError: If no candidates are provided
    """
    if candidates:
        return list(candidates)

    if file is not None:
        lines = file.read_text().splitlines()
    elif not sys.stdin.isatty():
        lines = sys.stdin.read().splitlines()
    else:
        lines = []

    sentences = [line.strip() for line in lines if line.strip()]
    if not sentences:
        raise ValueError("No candidate sentences provided")
    return sentences


def format_comparison(comparison: SentenceComparison) -> str:
    """Render one "score<TAB>sentence" line per result."""
    return "\n".join(f"{r.score:.4f}\t{r.sentence}" for r in comparison.results)


def build_finder(
    model: str | None, device: str | None, no_cache: bool
) -> VagueFinder:
    """Create a finder from config, with CLI flags taking priority."""
    config = load_config()
    resolved_device = device if device is not None else config.device
    if resolved_device == "auto":
        resolved_device = None

    generator = EmbeddingGenerator(model or config.model.name, device=resolved_device)
    use_cache = False if no_cache else config.cache.enabled
    return VagueFinder(provider=generator, config=config, use_cache=use_cache)


def report_error(message: str, error: Exception, debug: bool) -> None:
    if debug:
        typer.echo(f"Debug - {message}: {error!r}", err=True)
    else:
        typer.echo(f"Error: {error}", err=True)


async def _compare(
    finder: VagueFinder, sentence_one: str, sentence_two: str
) -> PairComparison:
    await finder.load_model()
    return await finder.compare_two_sentences(sentence_one, sentence_two)


async def _rank(
    finder: VagueFinder, sentence: str, candidates: list[str], top: int | None
) -> SentenceComparison:
    await finder.load_model()
    if top is None:
        return await finder.array_in_order(sentence, candidates)
    return await finder.get_top(sentence, candidates, top)


@app.command()
def compare(
    sentence_one: str = typer.Argument(..., help="First sentence"),
    sentence_two: str = typer.Argument(..., help="Second sentence"),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Embedding model (from config if omitted)"
    ),
    device: str | None = typer.Option(
        None, "--device", help="Compute device: auto, cpu, cuda, mps"
    ),
    no_cache: bool = typer.Option(
        False, "--no-cache", help="Embed repeated sentences again"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and cache activity"
    ),
) -> None:
    """Print the cosine similarity of two sentences."""
    configure_logging(debug)

    try:
        finder = build_finder(model, device, no_cache)
        result = asyncio.run(_compare(finder, sentence_one, sentence_two))
    except ModelLoadError as e:
        report_error("Model load error", e, debug)
        raise typer.Exit(1) from None
    except (VagueFinderError, ValueError) as e:
        report_error("Comparison error", e, debug)
        raise typer.Exit(1) from None

    typer.echo(f"{result.score:.4f}")


@app.command()
def rank(
    sentence: str = typer.Argument(..., help="Query sentence"),
    candidates: list[str] | None = typer.Argument(
        None, help="Candidate sentences (read from --file or stdin if omitted)"
    ),
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Read candidates from file, one per line"
    ),
    top: int | None = typer.Option(
        None, "-n", "--top", help="Show only the N most similar candidates"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    model: str | None = typer.Option(
        None, "-m", "--model", help="Embedding model (from config if omitted)"
    ),
    device: str | None = typer.Option(
        None, "--device", help="Compute device: auto, cpu, cuda, mps"
    ),
    no_cache: bool = typer.Option(
        False, "--no-cache", help="Embed repeated sentences again"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and cache activity"
    ),
) -> None:
    """Rank candidate sentences by similarity to a query sentence."""
    configure_logging(debug)

    try:
        sentences = read_candidates(candidates, file)
    except OSError as e:
        report_error("File read error", e, debug)
        raise typer.Exit(1) from None
    except ValueError as e:
        report_error("Input error", e, debug)
        raise typer.Exit(1) from None

    try:
        finder = build_finder(model, device, no_cache)
        comparison = asyncio.run(_rank(finder, sentence, sentences, top))
    except ModelLoadError as e:
        report_error("Model load error", e, debug)
        raise typer.Exit(1) from None
    except (VagueFinderError, ValueError) as e:
        report_error("Ranking error", e, debug)
        raise typer.Exit(1) from None

    if as_json:
        typer.echo(json.dumps(comparison.to_dict(), indent=2))
    else:
        typer.echo(format_comparison(comparison))


@app.command("init-config")
def init_config(
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing config file"
    ),
) -> None:
    """Write the default config file to ~/.config/vaguefinder/config.toml."""
    if CONFIG_PATH.exists() and not force:
        typer.echo(f"Config already exists at {CONFIG_PATH} (use --force)", err=True)
        raise typer.Exit(1)

    path = generate_config(CONFIG_PATH)
    typer.echo(f"Config written to {path}")
