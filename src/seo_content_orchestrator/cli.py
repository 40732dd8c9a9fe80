"""
Command-line interface for the SEO Content Orchestrator.

Runs the full pipeline for one keyword and location and prints a summary,
optionally writing the JSON report to a file.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import OrchestratorConfig
from .errors import PipelineError, SeoOrchestratorError
from .models import (
    CONTENT_TYPES,
    TARGET_AUDIENCES,
    TONES,
    ContentCustomizations,
    GenerationOptions,
    OptimizedContentRequest,
    OptimizedContentResult,
)
from .orchestrator import UnifiedContentOrchestrator

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@click.command()
@click.option(
    "--keyword",
    "-k",
    type=str,
    required=True,
    help="Target keyword to rank for.",
)
@click.option(
    "--location",
    "-l",
    type=str,
    required=True,
    help="Search market, e.g. 'usa', 'uk', 'uae'.",
)
@click.option(
    "--content-type",
    type=click.Choice(CONTENT_TYPES),
    default="service_page",
    show_default=True,
    help="Kind of page to generate.",
)
@click.option(
    "--tone",
    type=click.Choice(TONES),
    default="professional",
    show_default=True,
    help="Writing tone.",
)
@click.option(
    "--audience",
    type=click.Choice(TARGET_AUDIENCES),
    default="business_owners",
    show_default=True,
    help="Target audience.",
)
@click.option(
    "--word-count",
    type=click.IntRange(min=1),
    default=None,
    help="Article length in words (default: competitor average).",
)
@click.option(
    "--industry",
    type=str,
    default=None,
    help="Industry context for the generator.",
)
@click.option(
    "--company-name",
    type=str,
    default=None,
    help="Company name to write for.",
)
@click.option(
    "--website-url",
    type=str,
    default=None,
    help="Site the internal links should point to.",
)
@click.option(
    "--images/--no-images",
    default=True,
    help="Ask for image placements with alt text.",
)
@click.option(
    "--links/--no-links",
    default=True,
    help="Ask for internal and external links.",
)
@click.option(
    "--featured-snippets/--no-featured-snippets",
    default=True,
    help="Shape the opening and FAQ for featured snippets.",
)
@click.option(
    "--no-meta-tags",
    is_flag=True,
    default=False,
    help="Skip meta tag generation and return fallback tags.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the full JSON report to this path.",
)
@click.option(
    "--dev",
    is_flag=True,
    default=False,
    help="Use development settings (stub SERP results when search fails).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(
    keyword: str,
    location: str,
    content_type: str,
    tone: str,
    audience: str,
    word_count: Optional[int],
    industry: Optional[str],
    company_name: Optional[str],
    website_url: Optional[str],
    images: bool,
    links: bool,
    featured_snippets: bool,
    no_meta_tags: bool,
    output: Optional[Path],
    dev: bool,
    verbose: bool,
) -> None:
    """
    SEO Content Orchestrator - Generate content that matches the top results.

    Analyzes the search results for a keyword, benchmarks the top competitor
    pages, and generates an article written against those benchmarks.

    Examples:

        seo-orchestrate -k "movers" -l usa

        seo-orchestrate -k "office cleaning" -l uk --content-type blog_post -o report.json
    """
    _configure_logging(verbose)

    console.print(Panel.fit(
        "[bold blue]SEO Content Orchestrator[/bold blue]\n"
        f"Generating competitor-benchmarked content for '{keyword}' ({location})",
        border_style="blue",
    ))

    try:
        request = OptimizedContentRequest(
            keyword=keyword,
            location=location,
            content_type=content_type,
            customizations=ContentCustomizations(
                tone=tone,
                target_audience=audience,
                word_count=word_count,
                industry=industry,
                company_name=company_name,
                website_url=website_url,
            ),
            options=GenerationOptions(
                include_images=images,
                include_internal_links=links,
                include_outbound_links=links,
                generate_meta_tags=not no_meta_tags,
                optimize_for_featured_snippets=featured_snippets,
            ),
        )
        config = OrchestratorConfig.development() if dev else OrchestratorConfig.production()
        orchestrator = UnifiedContentOrchestrator.from_config(config)

        with console.status("[bold green]Running content pipeline..."):
            result = orchestrator.generate_optimized_content(request)

        _display_summary(result, verbose)

        if output:
            output.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
            console.print(f"\n[bold green]Success![/bold green] Report saved to: {output}")
        else:
            console.print("\n[bold green]Success![/bold green]")

    except ValueError as e:
        console.print(f"[red]Invalid request:[/red] {e}")
        sys.exit(1)
    except PipelineError as e:
        console.print(f"[red]Pipeline error:[/red] {e}")
        sys.exit(1)
    except SeoOrchestratorError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)


def _display_summary(result: OptimizedContentResult, verbose: bool) -> None:
    """Display the pipeline summary."""
    console.print("\n[bold]Content Summary[/bold]")

    bench = result.benchmarks
    bench_table = Table(title="Competitor Benchmarks", show_header=True)
    bench_table.add_column("Metric", style="cyan")
    bench_table.add_column("Value", style="green")
    bench_table.add_row("Competitors analyzed", str(len(result.competitors)))
    bench_table.add_row("Average word count", str(bench.average_word_count))
    bench_table.add_row("Average keyword density", f"{bench.average_keyword_density}%")
    bench_table.add_row("Average optimized headings", str(bench.average_optimized_headings))
    console.print(bench_table)

    metrics_table = Table(title="SEO Metrics", show_header=True)
    metrics_table.add_column("Metric", style="cyan")
    metrics_table.add_column("Value", style="yellow")
    metrics = result.validation
    metrics_table.add_row("Keyword density", f"{metrics.actual_density}%")
    metrics_table.add_row("Density accuracy", str(metrics.density_accuracy))
    metrics_table.add_row("Optimized headings", str(metrics.heading_optimization))
    metrics_table.add_row("LSI keywords used", str(metrics.lsi_keywords_used))
    metrics_table.add_row("Entities integrated", str(metrics.entities_integrated))
    metrics_table.add_row("Overall quality", str(result.quality_analysis.overall_score))
    console.print(metrics_table)

    meta_table = Table(title="Meta Tags", show_header=True)
    meta_table.add_column("Tag", style="cyan")
    meta_table.add_column("Content", style="green")
    meta_table.add_row("Title", result.meta_tags.title)
    meta_table.add_row("Description", result.meta_tags.description)
    meta_table.add_row("Keywords", ", ".join(result.meta_tags.keywords))
    console.print(meta_table)

    if verbose:
        for insight in result.insights:
            console.print(f"  [dim]- {insight}[/dim]")
        console.print(f"\n[dim]Generation id: {result.generation_id} ({result.processing_time}ms)[/dim]")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
