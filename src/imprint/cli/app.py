"""CLI application entry point for imprint.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from imprint import __version__
from imprint.cli.operations import describe_operation, parse_operation
from imprint.cli.output import (
    console,
    print_error,
    print_font_info,
    print_header,
    print_operations,
    print_step,
    print_success,
)
from imprint.config import ImprintSettings, LoggingConfig, WatermarkConfig
from imprint.config.settings import DEFAULT_WATERMARK_ANGLE
from imprint.core import ImageProcessor
from imprint.domain import TextLine, parse_color
from imprint.exceptions import (
    ColorError,
    DecodeError,
    EncodeError,
    FontLoadError,
    ImprintError,
    OperationSpecError,
)
from imprint.io import FontResource

# Create the Typer app
app = typer.Typer(
    name="imprint",
    help="Watermark, crop, scale and mount raster images.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Imprint[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def imprint(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, JPEG, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-imprinted.png)",
        ),
    ] = None,
    operations: Annotated[
        list[str] | None,
        typer.Option(
            "--op",
            "-O",
            help="Operation spec, applied in the order given (e.g. crop=0.9,0.9)",
        ),
    ] = None,
    font: Annotated[
        Path | None,
        typer.Option(
            "--font",
            "-f",
            help="TTF/OTF font for watermark lines",
        ),
    ] = None,
    lines: Annotated[
        list[str] | None,
        typer.Option(
            "--line",
            "-l",
            help="Watermark text line (repeat for multiple lines, top to bottom)",
        ),
    ] = None,
    font_size: Annotated[
        float,
        typer.Option(
            "--font-size",
            "-s",
            help="Watermark text size in pixels",
            min=1.0,
        ),
    ] = 128.0,
    color: Annotated[
        str,
        typer.Option(
            "--color",
            "-c",
            help="Watermark text color (#RRGGBB or #RRGGBBAA)",
        ),
    ] = "#ff0000ff",
    spacing: Annotated[
        float,
        typer.Option(
            "--spacing",
            help="Extra line spacing as a fraction of line height (0-2)",
            min=0.0,
            max=2.0,
        ),
    ] = 0.0,
    angle: Annotated[
        float,
        typer.Option(
            "--angle",
            help="Default watermark rotation in radians",
            min=-6.2832,
            max=6.2832,
        ),
    ] = DEFAULT_WATERMARK_ANGLE,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Apply an ordered list of operations to an image and write a PNG.

    Operations are given with --op and run in the order listed:

        scale=F, scale-exact=W,H, rotate=RAD, crop=FW,FH, crop-exact=W,H,
        paper-paste=PW,PH,X,Y, watermark[=S[,RAD]], stamp=PATH,X,Y

    Example:
        imprint id_card.jpg -f Athiti-Bold.ttf -l "For KYC only" \\
            --op crop=0.9,0.9 --op scale-exact=800,600 --op watermark=0.9
    """
    line_texts = lines or []
    op_specs = operations or []

    # Validate input file exists
    if not input_image.is_file():
        print_error(
            f"Input file not found: {input_image}",
            details="Please provide a path to a PNG or JPEG image.",
        )
        raise typer.Exit(code=1)

    if line_texts and font is None:
        print_error("--line requires --font")
        raise typer.Exit(code=1)

    try:
        text_color = parse_color(color)
    except ColorError as e:
        print_error(str(e), details="Use #RRGGBB or #RRGGBBAA, e.g. #ff000080")
        raise typer.Exit(code=1)

    # Print header
    if not quiet:
        print_header(__version__)

    settings = ImprintSettings(
        watermark=WatermarkConfig(
            angle=angle,
            font_size=font_size,
            line_spacing=spacing,
            color=text_color,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    try:
        mark_lines: list[TextLine] = []
        if font is not None and line_texts:
            if not quiet:
                print_step("Loading font")
            resource = FontResource.from_path(font)
            mark_lines = [
                TextLine.new(
                    resource,
                    settings.watermark.font_size,
                    settings.watermark.color,
                    text,
                ).with_spacing(settings.watermark.line_spacing)
                for text in line_texts
            ]
            if not quiet:
                print_font_info(
                    font_path=str(font),
                    family=resource.family_name,
                    font_format=resource.format,
                    line_count=len(mark_lines),
                )

        pipeline = [
            parse_operation(spec, mark_lines, settings.watermark) for spec in op_specs
        ]
        if not quiet:
            print_step("Operations")
            print_operations([describe_operation(op) for op in pipeline])
            print_step("Processing")

        processor = ImageProcessor(settings, quiet=quiet)
        output_path = processor.process_file(input_image, pipeline, output_path=output)

        if not quiet:
            stats = processor.stats
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=stats.duration_seconds,
                applied=stats.applied_count,
                input_size=stats.input_size,
                output_size=stats.output_size,
                slowest=stats.slowest_operation,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except OperationSpecError as e:
        print_error(f"Invalid operation '{e.spec}': {e.reason}")
        raise typer.Exit(code=1)
    except DecodeError as e:
        print_error(f"Could not read image: {e.reason}")
        raise typer.Exit(code=1)
    except EncodeError as e:
        print_error(f"Could not write image: {e.reason}")
        raise typer.Exit(code=1)
    except ImprintError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
