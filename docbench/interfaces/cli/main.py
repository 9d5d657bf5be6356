"""
CLI Main - Typer-based command-line interface.

Usage:
    docbench --plugin mypkg.converters:register convert sample.pdf --to docx
    docbench compare sample.pdf
    docbench batch-convert "docs/*.pdf" --converter fast
    docbench benchmark sample.pdf --converter fast --iterations 5
    docbench benchmark-suite test-files/
"""

from __future__ import annotations

import asyncio
import glob
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from docbench.config import DocBenchError, get_settings
from docbench.domains.benchmark import BenchmarkOutcome, BenchmarkReport
from docbench.domains.conversion import ConversionResult, ConverterRegistry
from docbench.domains.orchestration import ConversionOptions, ConversionPipeline
from docbench.domains.reporting import ReportWriter

app = typer.Typer(
    name="docbench",
    help="DocBench - Document conversion quality benchmarking",
    add_completion=False,
)
console = Console()


@app.callback()
def configure(
    ctx: typer.Context,
    plugin: list[str] | None = typer.Option(
        None, "--plugin", "-p", help="Converter plugin as module:function (repeatable)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Load converter plugins and configure logging."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"plugins": list(plugin or [])}


def _build_pipeline(ctx: typer.Context) -> ConversionPipeline:
    """Registry from entry points, settings plugins, and --plugin options."""
    settings = get_settings()
    registry = ConverterRegistry()
    registry.load_entry_points()
    registry.load_plugins([*settings.converter_plugins, *ctx.obj["plugins"]])
    if not len(registry):
        console.print(
            "[yellow]No converters registered.[/yellow] "
            "Use --plugin module:function or install a docbench.converters entry point."
        )
    return ConversionPipeline(registry, settings=settings)


def _run(ctx: typer.Context, coro_factory) -> None:
    """Run a pipeline coroutine, reporting engine errors the CLI way."""
    try:
        pipeline = _build_pipeline(ctx)
        asyncio.run(coro_factory(pipeline))
    except DocBenchError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e


def _results_table(title: str, results: list[ConversionResult]) -> Table:
    table = Table(title=title)
    table.add_column("Converter", style="cyan")
    table.add_column("Status")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Memory (KiB)", justify="right")
    table.add_column("Quality", justify="right")
    table.add_column("Output / Error")

    for result in results:
        memory = f"{result.memory_bytes / 1024:.1f}" if result.memory_bytes is not None else "-"
        if result.quality is not None:
            quality = f"{result.quality.overall:.1f}"
        elif result.quality_error:
            quality = "[yellow]n/a[/yellow]"
        else:
            quality = "-"
        table.add_row(
            result.converter_id,
            "[green]OK[/green]" if result.success else "[red]FAILED[/red]",
            f"{result.conversion_time_ms:.1f}",
            memory,
            quality,
            str(result.output_path) if result.success else str(result.error_message),
        )
    return table


def _benchmark_table(title: str, outcomes: list[BenchmarkOutcome]) -> Table:
    table = Table(title=title)
    table.add_column("Converter", style="cyan")
    table.add_column("File")
    table.add_column("Avg (ms)", justify="right")
    table.add_column("Min (ms)", justify="right")
    table.add_column("Max (ms)", justify="right")
    table.add_column("Std dev", justify="right")
    table.add_column("OK / Runs", justify="right")

    for outcome in outcomes:
        if outcome.success:
            table.add_row(
                outcome.converter_id,
                outcome.file_label,
                f"{outcome.avg_time_ms:.1f}",
                f"{outcome.min_time_ms:.1f}",
                f"{outcome.max_time_ms:.1f}",
                f"{outcome.std_dev_time_ms:.1f}",
                f"{len(outcome.samples)}/{outcome.iterations}",
            )
        else:
            table.add_row(
                outcome.converter_id,
                outcome.file_label,
                "[red]failed[/red]",
                "-",
                "-",
                "-",
                f"0/{outcome.iterations}",
            )
    return table


@app.command()
def convert(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to convert (.pdf or .docx)"),
    to: str | None = typer.Option(None, "--to", "-t", help="Target type: pdf or docx"),
    converter: str | None = typer.Option(None, "--converter", "-c", help="Converter strategy"),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    quality: bool = typer.Option(False, "--quality", "-q", help="Assess conversion quality"),
) -> None:
    """Convert one document."""
    if not file_path.exists():
        console.print(f"[red]Error:[/red] File not found: {file_path}")
        raise typer.Exit(1)

    options = ConversionOptions(
        strategy=converter,
        assess_quality=True if quality else None,
        output_dir=output_dir,
    )

    async def _convert(pipeline: ConversionPipeline) -> None:
        result = await pipeline.convert_document(file_path, to, options)
        console.print(_results_table(f"Conversion of {file_path.name}", [result]))
        if not result.success:
            raise typer.Exit(1)

    _run(ctx, _convert)


@app.command()
def compare(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to convert with every converter"),
    quality: bool = typer.Option(True, "--quality/--no-quality", help="Assess quality"),
    report: bool = typer.Option(True, "--report/--no-report", help="Write report files"),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Output directory"),
) -> None:
    """Compare every registered converter on one document."""
    if not file_path.exists():
        console.print(f"[red]Error:[/red] File not found: {file_path}")
        raise typer.Exit(1)

    options = ConversionOptions(assess_quality=quality, output_dir=output_dir)

    async def _compare(pipeline: ConversionPipeline) -> None:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task("Running converters...", total=None)
            comparison = await pipeline.compare_converters(file_path, options)

        console.print(
            _results_table(
                f"{comparison.conversion_type.value}: {file_path.name}", comparison.results
            )
        )

        ranked = comparison.ranked()
        if ranked:
            best = ranked[0]
            console.print(
                f"\n[bold]Best quality:[/bold] {best.converter_id} ({best.quality.overall:.1f})"
            )

        if report:
            writer = ReportWriter(get_settings().reports_dir)
            json_path = writer.write_comparison(comparison)
            text_path = writer.write_comparison_text(comparison)
            console.print(f"[green]Reports:[/green] {json_path}, {text_path}")

    _run(ctx, _compare)


@app.command("batch-convert")
def batch_convert(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help='Glob pattern, e.g. "docs/*.pdf"'),
    to: str | None = typer.Option(None, "--to", "-t", help="Target type: pdf or docx"),
    converter: str | None = typer.Option(None, "--converter", "-c", help="Converter strategy"),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    quality: bool = typer.Option(False, "--quality", "-q", help="Assess conversion quality"),
) -> None:
    """Convert every document matching a glob pattern."""
    files = sorted(Path(p) for p in glob.glob(pattern, recursive=True) if Path(p).is_file())
    if not files:
        console.print(f"[red]Error:[/red] No files match {pattern}")
        raise typer.Exit(1)

    options = ConversionOptions(
        strategy=converter,
        assess_quality=True if quality else None,
        output_dir=output_dir,
    )

    async def _batch(pipeline: ConversionPipeline) -> None:
        results = await pipeline.batch_convert(files, options, output_type=to)
        console.print(_results_table(f"Batch conversion ({len(files)} files)", results))
        failed = sum(1 for r in results if not r.success)
        if failed:
            console.print(f"[yellow]{failed} of {len(results)} conversions failed[/yellow]")

    _run(ctx, _batch)


@app.command()
def benchmark(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to benchmark"),
    converter: str = typer.Option("default", "--converter", "-c", help="Converter strategy"),
    iterations: int | None = typer.Option(None, "--iterations", "-n", help="Number of runs"),
) -> None:
    """Benchmark one converter on one document."""
    if not file_path.exists():
        console.print(f"[red]Error:[/red] File not found: {file_path}")
        raise typer.Exit(1)

    async def _benchmark(pipeline: ConversionPipeline) -> None:
        outcome = await pipeline.run_benchmark(converter, file_path, iterations)
        console.print(_benchmark_table(f"Benchmark of {converter}", [outcome]))
        if not outcome.success:
            for error in outcome.errors:
                console.print(f"  [red]-[/red] {error}")
            raise typer.Exit(1)

    _run(ctx, _benchmark)


@app.command("benchmark-suite")
def benchmark_suite(
    ctx: typer.Context,
    directory: Path = typer.Argument(..., help="Directory of .pdf/.docx files"),
    iterations: int | None = typer.Option(None, "--iterations", "-n", help="Runs per file"),
    report: bool = typer.Option(True, "--report/--no-report", help="Write a JSON report"),
) -> None:
    """Benchmark every converter against every document in a directory."""
    if not directory.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {directory}")
        raise typer.Exit(1)

    async def _suite(pipeline: ConversionPipeline) -> None:
        result: BenchmarkReport = await pipeline.benchmark_directory(directory, iterations)
        for conversion_type, outcomes in result.results.items():
            console.print(_benchmark_table(conversion_type, outcomes))
        if report:
            path = ReportWriter(get_settings().reports_dir).write_benchmark(result)
            console.print(f"[green]Report:[/green] {path}")

    _run(ctx, _suite)


@app.command()
def version() -> None:
    """Show version information."""
    from docbench import __version__

    console.print(f"DocBench v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
