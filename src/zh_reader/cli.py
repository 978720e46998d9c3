"""Command line interface for the Chinese reading core."""

import click
import json
import logging
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import CUMULATIVE, SINGLE_BAND, ConfigError, ConfigLoader, LEVEL_NAMES, ReaderConfig
from .difficulty import DifficultyAnalyzer, cumulative_percentages, difficulty_stars
from .frequency import load_frequency_table
from .segmenter import Resolution, SentenceSegmenter

RULE_CHOICES = {"single-band": SINGLE_BAND, "cumulative": CUMULATIVE}

INDEX_COLUMNS = [
    "file",
    "totalCharacters",
    "uniqueCharacters",
    "difficultyScore",
    "difficultyLevel",
] + LEVEL_NAMES


def _setup_logging(verbose: bool) -> None:
    """Configure root logging for a command run."""
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s: %(message)s")

    # Silence pypinyin's own logger
    logging.getLogger("pypinyin").setLevel(logging.WARNING)


def _load_config(config_file: Optional[Path]) -> ConfigLoader:
    loader = ConfigLoader(config_file)
    try:
        loader.load_config()
    except ConfigError as e:
        click.echo(click.style(f"❌ {e}", fg="red"), err=True)
        raise click.Abort()
    return loader


def _build_analyzer(config_file: Optional[Path], table: Optional[Path], rule: Optional[str]) -> DifficultyAnalyzer:
    """Create an analyzer from config, with command line overrides applied."""
    loader = _load_config(config_file)
    config: ReaderConfig = loader.load_config()

    analysis = config.analysis
    if rule:
        analysis = analysis.model_copy(update={"rule": RULE_CHOICES[rule]})

    frequency_table = load_frequency_table(table or loader.resolve_table_path())
    return DifficultyAnalyzer(frequency_table, analysis)


def _format_pinyin(readings) -> str:
    return "/".join(reading for reading in readings if reading)


@click.group()
@click.version_option(package_name="zh-reader-core")
def cli() -> None:
    """Annotate Chinese text with pinyin and score its difficulty."""
    pass


@cli.command()
@click.argument("text")
@click.option(
    "--rule",
    type=click.Choice(list(RULE_CHOICES)),
    default=None,
    help="Difficulty level rule (default: from config, single-band)",
)
@click.option("--table", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Frequency table CSV")
@click.option("--config", "config_file", type=click.Path(path_type=Path), help="Path to YAML configuration file")
@click.option("--json", "as_json", is_flag=True, help="Print the article metadata record as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def analyze(
    text: str,
    rule: Optional[str],
    table: Optional[Path],
    config_file: Optional[Path],
    as_json: bool,
    verbose: bool,
) -> None:
    """Show the character level breakdown and difficulty of TEXT."""
    _setup_logging(verbose)
    analyzer = _build_analyzer(config_file, table, rule)

    report = analyzer.analyze(text)

    if as_json:
        click.echo(json.dumps(report.to_metadata(), ensure_ascii=False, indent=2))
        return

    click.echo(click.style("Character Level Analysis:", fg="green", bold=True))

    if report.unique_characters == 0:
        click.echo("\nNo Chinese characters found.")

    breakdown = analyzer.character_breakdown(text)
    for level in LEVEL_NAMES:
        chars = breakdown[level]
        if not chars:
            continue
        occurrences = sum(count for _, count in chars)
        header = (
            f"{level} ({len(chars)} unique characters, {occurrences} total occurrences, "
            f"{report.level_distribution[level]:.1f}%):"
        )
        click.echo(f"\n{click.style(header, fg='blue', bold=True)}")
        click.echo(" ".join(f"{char}({count})" for char, count in chars))

    click.echo(f"\n{click.style('Cumulative Percentages:', fg='blue', bold=True)}")
    for bands, percentage in cumulative_percentages(report).items():
        click.echo(f"{bands.replace('LEVEL_', 'Level ')}: {percentage:.1f}%")

    level_line = f"Difficulty Level: {report.difficulty_level} ({report.label}) {difficulty_stars(report.difficulty_level)}"
    click.echo(f"\n{click.style(level_line, fg='yellow', bold=True)}")
    click.echo(f"Difficulty Score: {report.difficulty_score}")
    if verbose:
        click.echo(f"Rule: {report.rule}")
        click.echo(f"Characters: {report.total_characters} total, {report.unique_characters} unique")


@cli.command()
@click.argument("text")
@click.option("--config", "config_file", type=click.Path(path_type=Path), help="Path to YAML configuration file")
@click.option("--json", "as_json", is_flag=True, help="Print the tokens as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def pinyin(text: str, config_file: Optional[Path], as_json: bool, verbose: bool) -> None:
    """Print TEXT sentence by sentence with its pinyin."""
    _setup_logging(verbose)
    config = _load_config(config_file).load_config()
    segmenter = SentenceSegmenter(config=config.segmentation)

    results = segmenter.segment(text)

    if as_json:
        tokens = [token.to_dict() for result in results for token in result.tokens]
        click.echo(json.dumps(tokens, ensure_ascii=False, indent=2))
        return

    for result in results:
        sentence = click.style(result.sentence.strip(), fg="cyan", bold=True)
        marker = click.style(" (fallback)", fg="yellow") if result.resolution is Resolution.FALLBACK else ""
        click.echo(sentence + marker)
        syllables = [_format_pinyin(token.pinyin) for token in result.tokens]
        click.echo("  " + " ".join(s for s in syllables if s))


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default="difficulty_index.csv",
    show_default=True,
    help="CSV file to write",
)
@click.option("--rule", type=click.Choice(list(RULE_CHOICES)), default=None, help="Difficulty level rule")
@click.option("--table", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Frequency table CSV")
@click.option("--config", "config_file", type=click.Path(path_type=Path), help="Path to YAML configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def batch(
    files: List[Path],
    output: Path,
    rule: Optional[str],
    table: Optional[Path],
    config_file: Optional[Path],
    verbose: bool,
) -> None:
    """Analyze text FILES and write a difficulty index CSV, hardest first."""
    _setup_logging(verbose)
    analyzer = _build_analyzer(config_file, table, rule)

    rows: List[Dict[str, Any]] = []
    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            click.echo(click.style(f"Warning: Skipping {path}: {e}", fg="yellow"), err=True)
            continue

        metadata = analyzer.analyze(text).to_metadata()
        row = {"file": str(path)}
        row.update({key: metadata[key] for key in INDEX_COLUMNS[1:5]})
        row.update(metadata["levelDistribution"])
        rows.append(row)

        if verbose:
            click.echo(f"  {path}: level {metadata['difficultyLevel']}, score {metadata['difficultyScore']}")

    df = pd.DataFrame(rows, columns=INDEX_COLUMNS)
    df = df.sort_values(["difficultyLevel", "difficultyScore"], ascending=False, kind="mergesort")
    df.to_csv(output, index=False)

    click.echo(click.style(f"Wrote difficulty index for {len(df)} files to {output}", fg="green"))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
