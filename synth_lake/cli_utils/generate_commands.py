"""
Synthetic Data Generation CLI Commands

This module contains the command implementations for dataset generation,
keeping CLI logic out of the main cli.py file.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from synth_lake.cli_utils.console_styles import ConsoleStyles
from synth_lake.cli_utils.progress_utils import ProgressTracker
from synth_lake.python_libs.common.generation_logger import GenerationLogger
from synth_lake.python_libs.generation import GenerationConfig, generate_from_config
from synth_lake.python_libs.generation.common.exceptions import SyntheticDataError
from synth_lake.python_libs.generation.providers import get_registered_providers
from synth_lake.python_libs.generation.sinks import get_registered_sinks

console = Console()
console_styles = ConsoleStyles()


def generate(
    ctx: typer.Context,
    paths: List[Path],
    seed: Optional[int] = None,
    output_dir: Optional[Path] = None,
    workers: Optional[int] = None,
):
    """
    Generate one output file per schema file.

    Every schema is attempted even when an earlier one fails; the command
    exits with code 1 when any of them failed.
    """
    generation_logger: GenerationLogger = ctx.obj["generation_logger"]
    failed: List[Path] = []

    for path in paths:
        try:
            config = GenerationConfig.from_file(path)
            config.validate()
            generation_logger.log_generation_start(config, seed)

            total_chunks = -(-config.info.rows // config.info.chunk_size)
            with ProgressTracker(console, path.name, total_chunks) as on_chunk:
                result = generate_from_config(
                    config,
                    output_dir=output_dir,
                    seed=seed,
                    max_workers=workers,
                    on_chunk=on_chunk,
                )

            summary = generation_logger.log_generation_complete(result)
            console_styles.print_success(console, f"✅ {summary}")
            console_styles.print_dim(console, f"   {result.output_path} (seed {result.seed})")
        except SyntheticDataError as e:
            failed.append(path)
            generation_logger.log_generation_failure(str(path), e)
            console_styles.print_error(console, f"❌ {path}: {e}")

    if len(paths) > 1:
        stats = generation_logger.get_generation_statistics()
        console_styles.print_info(
            console,
            f"Generated {stats.get('total_files_generated', 0)} of {len(paths)} file(s), "
            f"{stats.get('total_rows_generated', 0):,} rows",
        )

    if failed:
        raise typer.Exit(code=1)


def list_components(output_format: str = "table"):
    """List registered provider types and output formats."""
    providers = sorted(get_registered_providers())
    formats = {name: sink.extension() for name, sink in sorted(get_registered_sinks().items())}

    if output_format == "json":
        console.print_json(json.dumps({"providers": providers, "formats": formats}))
        return
    if output_format != "table":
        console_styles.print_error(console, f"❌ Unknown format '{output_format}'. Use 'table' or 'json'.")
        raise typer.Exit(code=1)

    table = Table(title="Providers")
    table.add_column("provider", style="cyan")
    for provider in providers:
        table.add_row(provider)
    console.print(table)

    table = Table(title="Output formats")
    table.add_column("output_format", style="cyan")
    table.add_column("extension")
    for name, extension in formats.items():
        table.add_row(name, extension)
    console.print(table)
