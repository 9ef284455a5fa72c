"""Command-line interface for textbayes.

Provides ``train``, ``predict``, ``probabilities`` and ``stats`` commands
with rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    textbayes train reviews.jsonl --model model.json
    textbayes predict "what an awesome movie" --model model.json
    textbayes predict review.pdf --multi-label --filter top-k --k 2
    textbayes stats --model model.json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .classifier import MultiLabelClassifier, SingleLabelClassifier
from .config import get_settings
from .exceptions import TextBayesError
from .filters import AboveMeanFilter, ThresholdFilter, TopKFilter
from .logging_utils import configure_logging
from .models import Probability
from .parsers import extract_text

console = Console()


def load_records(path: Path) -> list[Any]:
    """Read training records from a JSON array or a JSON-lines file.

    Raises:
        ValueError: If the file is neither.
    """
    content = path.read_text(encoding="utf-8")
    stripped = content.lstrip()
    if stripped.startswith("["):
        records = json.loads(content)
        if not isinstance(records, list):
            raise ValueError(f"{path} does not contain a JSON array")
        return records
    return [json.loads(line) for line in content.splitlines() if line.strip()]


def _read_input(value: str) -> str:
    """Treat ``value`` as a file path when one exists, else as the text."""
    path = Path(value)
    try:
        is_file = path.is_file()
    except OSError:
        is_file = False
    return extract_text(path) if is_file else value


def _model_path(model: Optional[Path]) -> Path:
    return model if model is not None else Path(get_settings().model_path)


def _load_classifier(model: Path, multi_label: bool):
    cls = MultiLabelClassifier if multi_label else SingleLabelClassifier
    return cls.load(model)


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/] {exc}")
    sys.exit(1)


@click.group()
@click.version_option(package_name="textbayes")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """📊 textbayes — naive-Bayes text classification.

    Train single- or multi-label models from labelled samples and
    classify new text or documents.
    """
    configure_logging(override_level="DEBUG" if verbose else None, force=True)


@main.command()
@click.argument("dataset", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--model", "-m", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Model file to write (default: $TEXTBAYES_MODEL_PATH or model.json).")
@click.option("--multi-label", is_flag=True, help="Records carry a list of labels.")
@click.option("--sample-key", default="sample", show_default=True, help="Key holding the text.")
@click.option("--label-key", default=None,
              help="Key holding the label(s) (default: 'label', or 'labels' with --multi-label).")
@click.option("--append", is_flag=True, help="Continue training an existing model file.")
def train(
    dataset: Path,
    model: Path | None,
    multi_label: bool,
    sample_key: str,
    label_key: str | None,
    append: bool,
) -> None:
    """Train a model from a JSON or JSON-lines dataset.

    Example: textbayes train reviews.jsonl --model reviews.json
    """
    model = _model_path(model)
    label_key = label_key or ("labels" if multi_label else "label")

    with console.status("[bold blue]Training...", spinner="dots"):
        try:
            records = load_records(dataset)
            if append and model.exists():
                classifier = _load_classifier(model, multi_label)
            else:
                classifier = MultiLabelClassifier() if multi_label else SingleLabelClassifier()
            classifier.train_on(records, sample_key, label_key)
            classifier.save(model)
        except (OSError, ValueError, TextBayesError) as e:
            _fail(e)

    stats = classifier.training_stats()
    console.print(
        f"[bold green]Trained[/] on {len(records)} records: "
        f"{stats.total_documents} documents, {stats.num_categories} categories, "
        f"{stats.vocabulary_size} tokens"
    )
    console.print(f"[dim]Model saved to {model}[/]")


@main.command()
@click.argument("text")
@click.option("--model", "-m", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Model file to read.")
@click.option("--multi-label", is_flag=True, help="Return every category selected by --filter.")
@click.option("--filter", "filter_name", type=click.Choice(["threshold", "top-k", "above-mean"]),
              default="threshold", show_default=True, help="Selection strategy for --multi-label.")
@click.option("--threshold", type=float, default=None, help="Minimum probability for 'threshold'.")
@click.option("--k", type=click.IntRange(min=0), default=None, help="Number of categories for 'top-k'.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def predict(
    text: str,
    model: Path | None,
    multi_label: bool,
    filter_name: str,
    threshold: float | None,
    k: int | None,
    output: str,
) -> None:
    """Predict the category of TEXT (a string or a document path).

    Example: textbayes predict "cheap pills online" --model spam.json
    """
    settings = get_settings()
    try:
        content = _read_input(text)
        classifier = _load_classifier(_model_path(model), multi_label)
    except (OSError, ImportError, ValueError, TextBayesError) as e:
        _fail(e)

    if not multi_label:
        label = classifier.predict(content)
        if output == "json":
            click.echo(json.dumps({"category": label}, indent=2))
        elif label is None:
            console.print("[yellow]No prediction:[/] the model has no training data.")
        else:
            console.print(f"Predicted category: [bold cyan]{label}[/]")
        return

    if filter_name == "top-k":
        prediction_filter = TopKFilter(k if k is not None else settings.top_k)
    elif filter_name == "above-mean":
        prediction_filter = AboveMeanFilter()
    else:
        prediction_filter = ThresholdFilter(threshold if threshold is not None else settings.threshold)

    selected = classifier.predict(content, prediction_filter)
    if output == "json":
        click.echo(json.dumps([p.to_dict() for p in selected], indent=2))
    else:
        _render_probabilities(selected, title=f"Selected categories ({prediction_filter!r})")


@main.command()
@click.argument("text")
@click.option("--model", "-m", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Model file to read.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def probabilities(text: str, model: Path | None, output: str) -> None:
    """Show the probability of every category for TEXT.

    Example: textbayes probabilities "cheap pills online"
    """
    try:
        content = _read_input(text)
        classifier = SingleLabelClassifier.load(_model_path(model))
    except (OSError, ImportError, ValueError, TextBayesError) as e:
        _fail(e)

    result = classifier.probabilities(content)
    if output == "json":
        click.echo(json.dumps([p.to_dict() for p in result], indent=2))
    else:
        _render_probabilities(result, title="Category probabilities")


@main.command()
@click.option("--model", "-m", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Model file to read.")
@click.option("--output", "-o", type=click.Choice(["rich", "json", "text"]), default="rich",
              help="Output format.")
def stats(model: Path | None, output: str) -> None:
    """Show training statistics for a model.

    Example: textbayes stats --model spam.json
    """
    try:
        classifier = SingleLabelClassifier.load(_model_path(model))
    except (OSError, ValueError, TextBayesError) as e:
        _fail(e)

    training_stats = classifier.training_stats()
    if output == "json":
        click.echo(json.dumps(training_stats.to_dict(), indent=2))
    elif output == "text":
        click.echo(training_stats.to_text())
    else:
        _render_stats(training_stats)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_probabilities(result: list[Probability], title: str) -> None:
    if not result:
        console.print("[yellow]No categories to show.[/]")
        return

    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Category", style="cyan")
    table.add_column("Probability", justify="right")
    table.add_column("Log probability", justify="right", style="dim")

    ranked = sorted(result, key=lambda p: p.log_probability, reverse=True)
    for i, p in enumerate(ranked, 1):
        table.add_row(str(i), p.category, f"{p.decimal:.2%}", f"{p.log_probability:.4f}")

    console.print(table)


def _render_stats(training_stats) -> None:
    ratio = training_stats.class_balance_ratio()
    balance_style = "green" if training_stats.is_balanced() else "bold yellow"

    console.print(Panel(
        f"Documents: {training_stats.total_documents} | "
        f"Vocabulary: {training_stats.vocabulary_size} | "
        f"Categories: {training_stats.num_categories}\n"
        f"Class balance ratio: [{balance_style}]{ratio:.2f}[/]",
        title="📊 Training Statistics",
        border_style="blue",
    ))

    if training_stats.num_categories:
        table = Table(title="Categories")
        table.add_column("Category", style="cyan")
        table.add_column("Documents", justify="right")
        table.add_column("Share", justify="right")
        table.add_column("Avg. length", justify="right")
        table.add_column("Top tokens", style="dim", max_width=50)

        for category_stats in training_stats.all_category_stats():
            table.add_row(
                category_stats.name,
                str(category_stats.doc_count),
                f"{category_stats.percentage:.1f}%",
                f"{category_stats.average_doc_length:.2f}",
                ", ".join(category_stats.top_tokens(5)),
            )
        console.print(table)

    most_common = training_stats.most_common_tokens(10)
    if most_common:
        console.print("[bold]Most common tokens[/]")
        for rank, (token, frequency) in enumerate(most_common.items(), 1):
            console.print(f"  {rank}. {token}: {frequency}")
    console.print()


if __name__ == "__main__":
    main()
