# cli.py
from __future__ import annotations

import sys
from typing import Callable, Optional, Tuple

import click

from tkngraph import __version__, settings
from tkngraph.dispatch import FORMATS, FormatError, validate_output_format
from tkngraph.emitter import OutputError, print_all_graphs, write_all_graphs
from tkngraph.manifests import ManifestError, ManifestSet, load_manifests
from tkngraph.sources import PipelineRunSource, PipelineSource, SourceError, build_graphs
from tkngraph.ui.console import Console, get_console, set_console


def graph_options(f: Callable) -> Callable:
    """Options shared by `pipeline graph` and `pipelinerun graph`."""
    f = click.option(
        "--with-task-ref/--without-task-ref",
        default=settings.WITH_TASK_REF,
        help="Include TaskRefName information in the output",
    )(f)
    f = click.option(
        "--output-dir",
        default=settings.DEFAULT_OUTPUT_DIR,
        help="The directory to save the output files. Otherwise, the output is printed to the screen",
    )(f)
    f = click.option(
        "--output-format",
        default=settings.DEFAULT_OUTPUT_FORMAT,
        show_default=True,
        help="The output format (dot - DOT, puml - PlantUML or mmd - Mermaid)",
    )(f)
    f = click.option(
        "-f",
        "--filename",
        "filenames",
        multiple=True,
        required=True,
        help="Manifest file or directory with Tekton resources (YAML or JSON); repeatable",
    )(f)
    return f


def run_graph_command(
    ctx: click.Context,
    source_factory: Callable[[ManifestSet], PipelineSource | PipelineRunSource],
    name: Optional[str],
    filenames: Tuple[str, ...],
    output_format: str,
    output_dir: str,
    with_task_ref: bool,
) -> None:
    console = get_console()

    # Validate before reading anything
    try:
        validate_output_format(output_format)
    except FormatError as e:
        console.print_error(
            "Invalid output format",
            str(e),
            suggestion=f"Allowed formats are: {', '.join(FORMATS)}",
        )
        sys.exit(1)

    try:
        source = source_factory(load_manifests(filenames))
        data = [source.get_by_name(name)] if name else source.get_all()
        graphs = build_graphs(data)

        if output_dir:
            written = write_all_graphs(graphs, output_format, output_dir, with_task_ref)
            console.print_info(f"Wrote {len(written)} file(s) to {output_dir}")
        else:
            print_all_graphs(graphs, output_format, with_task_ref)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except ManifestError as e:
        console.print_error("Failed to load manifests", str(e), details=e.details)
        sys.exit(1)
    except SourceError as e:
        console.print_error(
            "Failed to fetch data",
            str(e),
            suggestion="Check the names and the files passed with --filename.",
        )
        sys.exit(1)
    except OutputError as e:
        title = "Failed to save graph" if output_dir else "Failed to print graph"
        console.print_error(title, str(e))
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=settings.DEBUG,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """tkn-graph: generate graphs of Tekton Pipelines and PipelineRuns."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.group()
def pipeline():
    """Work with Tekton Pipelines."""


@pipeline.command("graph")
@click.argument("name", required=False)
@graph_options
@click.pass_context
def pipeline_graph(ctx, name, filenames, output_format, output_dir, with_task_ref):
    """Generate the graph of one Pipeline (NAME) or of all Pipelines."""
    run_graph_command(ctx, PipelineSource, name, filenames, output_format, output_dir, with_task_ref)


pipeline.add_command(pipeline_graph, name="g")


@cli.group()
def pipelinerun():
    """Work with Tekton PipelineRuns."""


@pipelinerun.command("graph")
@click.argument("name", required=False)
@graph_options
@click.pass_context
def pipelinerun_graph(ctx, name, filenames, output_format, output_dir, with_task_ref):
    """Generate the graph of one PipelineRun (NAME) or of all PipelineRuns."""
    run_graph_command(ctx, PipelineRunSource, name, filenames, output_format, output_dir, with_task_ref)


pipelinerun.add_command(pipelinerun_graph, name="g")


@cli.command()
def version():
    """Print the tkn-graph version."""
    get_console().print_info(f"tkn-graph version {__version__}")


if __name__ == "__main__":
    cli()
