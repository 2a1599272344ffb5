from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from synth_lake.cli_utils import generate_commands
from synth_lake.python_libs.common.generation_logger import GenerationLogger

app = typer.Typer(no_args_is_help=True, pretty_exceptions_show_locals=False)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every chunk and the seed used (DEBUG level).",
        ),
    ] = False,
):
    """Generate synthetic tabular datasets from declarative column schemas."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["generation_logger"] = GenerationLogger(
        log_level=logging.DEBUG if verbose else logging.INFO
    )


@app.command("generate")
def generate(
    ctx: typer.Context,
    paths: Annotated[
        List[Path],
        typer.Argument(help="One or more schema files (YAML or JSON)."),
    ],
    seed: Annotated[
        Optional[int],
        typer.Option(
            "--seed",
            "-s",
            min=0,
            help="Root seed; overrides the seed of every schema file.",
        ),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory that relative output names are resolved against (default: current directory).",
        ),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option(
            "--workers",
            "-w",
            min=1,
            help="Maximum number of columns generated in parallel.",
        ),
    ] = None,
):
    """
    Generate one output file per schema file.

    Examples:
      # Generate with the seed and format declared in the schema
      synth-lake generate schemas/customers.yaml

      # Reproducible run of several schemas into one directory
      synth-lake generate schemas/*.yaml --seed 42 --output-dir target
    """
    generate_commands.generate(
        ctx=ctx,
        paths=paths,
        seed=seed,
        output_dir=output_dir,
        workers=workers,
    )


@app.command("list")
def list_components(
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: 'table' or 'json'."),
    ] = "table",
):
    """List the available provider types and output formats."""
    generate_commands.list_components(output_format=output_format)


if __name__ == "__main__":
    app()
