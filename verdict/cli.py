"""verdict CLI -- moderate images and text from the command line."""

import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from verdict import __version__
from verdict.errors import ModerationError

console = Console()

_RECOMMENDATION_STYLE = {
    "APPROPRIATE": "green",
    "NEEDS_REVIEW": "yellow",
    "INAPPROPRIATE": "red",
}


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML config file")
@click.option("--taxonomy", "taxonomy_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML taxonomy overrides")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, config_path, taxonomy_path, verbose):
    """verdict -- decide whether images and text are fit for publication.

    Signals come from Google Cloud Vision / Natural Language, or from
    recorded cases with 'verdict replay'.
    """
    from verdict.config import load_config
    from verdict.logsetup import configure_logging

    try:
        config = load_config(config_path)
    except ModerationError as e:
        raise click.ClickException(str(e))
    if taxonomy_path:
        config.taxonomy_path = taxonomy_path
    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


def _taxonomies(config):
    try:
        return config.taxonomies()
    except ModerationError as e:
        raise click.ClickException(str(e))


def _render(result, as_json: bool, title: str = "Moderation Result") -> None:
    from verdict.report import summarize

    summary = summarize(result)
    if as_json:
        click.echo(json.dumps(summary, indent=2))
        return

    style = _RECOMMENDATION_STYLE[summary["recommendation"]]
    lines = [
        f"Recommendation: [{style}]{summary['recommendation']}[/]",
        f"Appropriate:    {summary['isAppropriate']}",
    ]
    if summary["reasons"]:
        lines.append(f"Reasons:        {', '.join(summary['reasons'])}")
    console.print(Panel("\n".join(lines), title=title))

    for w in summary["warnings"]:
        console.print(f"  [red]x[/] {w}")
    for f in summary["flags"]:
        console.print(f"  [yellow]![/] {f}")

    if summary["kind"] == "image":
        table = Table(title="Safe search")
        table.add_column("Attribute", style="cyan")
        table.add_column("Likelihood")
        for attribute, likelihood in summary["safeSearch"].items():
            table.add_row(attribute, likelihood)
        console.print(table)
        signals, label = summary["labels"], "Labels"
    else:
        sentiment = summary["sentiment"]
        console.print(f"  Sentiment: score={sentiment['score']} magnitude={sentiment['magnitude']}")
        signals, label = summary["categories"], "Categories"

    if signals:
        table = Table(title=label)
        table.add_column("Name", style="cyan")
        table.add_column("Confidence", justify="right")
        for s in signals:
            table.add_row(s["name"], str(s["confidence"]))
        console.print(table)


# ── Moderate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_obj
def image(config, image_path: str, as_json: bool):
    """Moderate an image file with Google Cloud Vision."""
    from pathlib import Path

    from verdict.analyzers.google_cloud import GoogleVisionAnalyzer
    from verdict.engine.taxonomy import TaxonomyDomain
    from verdict.service import ImageModerationService

    taxonomy = _taxonomies(config)[TaxonomyDomain.IMAGE]
    try:
        service = ImageModerationService(GoogleVisionAnalyzer(config.credentials_path or None), taxonomy)
        result = service.moderate(Path(image_path).read_bytes())
    except (ModerationError, RuntimeError) as e:
        raise click.ClickException(str(e))
    _render(result, as_json)


@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_obj
def text(config, text: str, as_json: bool):
    """Moderate TEXT with Google Cloud Natural Language."""
    from verdict.analyzers.google_cloud import GoogleLanguageAnalyzer
    from verdict.engine.taxonomy import TaxonomyDomain
    from verdict.service import TextModerationService

    taxonomy = _taxonomies(config)[TaxonomyDomain.TEXT]
    try:
        service = TextModerationService(GoogleLanguageAnalyzer(config.credentials_path or None), taxonomy)
        result = service.moderate(text)
    except (ModerationError, RuntimeError) as e:
        raise click.ClickException(str(e))
    _render(result, as_json)


# ── Replay ───────────────────────────────────────────────────────────


@main.command()
@click.argument("cases_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print results as a JSON list")
@click.pass_obj
def replay(config, cases_path: str, as_json: bool):
    """Run recorded cases through the moderation engine.

    CASES_PATH is a YAML file with a top-level 'cases' list; each case
    carries the signals the analyzer returned for it.
    """
    from verdict.report import load_cases, run_case, summarize

    taxonomies = _taxonomies(config)
    try:
        cases = load_cases(cases_path)
    except ModerationError as e:
        raise click.ClickException(str(e))

    results = []
    errors = 0
    for case in cases:
        try:
            result = run_case(case, taxonomies)
        except (ModerationError, OSError) as e:
            errors += 1
            if as_json:
                results.append({"description": case.description, "error": str(e)})
            else:
                console.print(f"\n[bold]Testing:[/] {case.description}")
                console.print(f"  [red]Error:[/] {e}")
            continue

        if as_json:
            results.append({"description": case.description, **summarize(result)})
        else:
            console.print(f"\n[bold]Testing:[/] {case.description}")
            _render(result, as_json=False)

    if as_json:
        click.echo(json.dumps(results, indent=2))
    else:
        console.print(f"\n{len(cases) - errors}/{len(cases)} case(s) moderated")

    if errors:
        raise SystemExit(1)


# ── Reference tables ─────────────────────────────────────────────────


@main.command()
@click.pass_obj
def taxonomy(config):
    """Show the keyword taxonomies in effect."""
    for domain, tax in _taxonomies(config).items():
        table = Table(title=f"{domain.value} taxonomy")
        table.add_column("Inappropriate", style="red")
        table.add_column("Review", style="yellow")
        for i in range(max(len(tax.inappropriate), len(tax.review))):
            table.add_row(
                tax.inappropriate[i] if i < len(tax.inappropriate) else "",
                tax.review[i] if i < len(tax.review) else "",
            )
        console.print(table)


@main.command()
def reasons():
    """List reason codes and their messages."""
    from verdict.models.reasons import ReasonCode, describe

    table = Table(title="Reason codes")
    table.add_column("Code", style="cyan")
    table.add_column("Message")
    for code in ReasonCode:
        table.add_row(code.name, describe(code))
    console.print(table)


if __name__ == "__main__":
    main()
