"""CLI application entry point for vignettify.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from vignettify import __version__
from vignettify.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_gradation_table,
    print_header,
    print_image_info,
    print_processing_info,
    print_step,
    print_success,
    print_vignette_config,
)
from vignettify.config import (
    LoggingConfig,
    PreviewConfig,
    ProcessingConfig,
    VignetteConfig,
    VignetteShape,
    VignettizerSettings,
    make_vignette_config,
)
from vignettify.core import (
    VignetteProcessor,
    build_gradation_table,
    preview_scale_factor,
    preview_size,
    scale_config_to_full_resolution,
)
from vignettify.domain import parse_color
from vignettify.exceptions import (
    ImageLoadError,
    ImageSaveError,
    InvalidConfigurationError,
    UnsupportedImageFormatError,
    VignettizerError,
)
from vignettify.io import ImageReader

# Create the Typer app
app = typer.Typer(
    name="vignettify",
    help="Apply a shaped vignette border to an image.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Vignettify[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def vignettify(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, JPEG, BMP, TIFF, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path, .png/.jpg/.bmp (default: {name}-Vignetted.{ext})",
        ),
    ] = None,
    shape: Annotated[
        str,
        typer.Option(
            "--shape",
            "-s",
            help="Vignette shape (circle|ellipse|diamond|square|rectangle)",
        ),
    ] = "ellipse",
    orientation: Annotated[
        float,
        typer.Option(
            "--orientation",
            "-a",
            help="Rotation of the figure in degrees (ignored for circles)",
        ),
    ] = 0.0,
    coverage: Annotated[
        float,
        typer.Option(
            "--coverage",
            "-c",
            help="Preserved region as a percentage of width/height",
        ),
    ] = 80.0,
    band_width: Annotated[
        int,
        typer.Option(
            "--band-width",
            "-b",
            help="Transition band thickness in pixels",
        ),
    ] = 60,
    steps: Annotated[
        int,
        typer.Option(
            "--steps",
            "-n",
            help="Number of gradation steps in the band",
        ),
    ] = 32,
    offset_x: Annotated[
        float,
        typer.Option(
            "--offset-x",
            help="Centre offset as a percentage of half the width",
        ),
    ] = 0.0,
    offset_y: Annotated[
        float,
        typer.Option(
            "--offset-y",
            help="Centre offset as a percentage of half the height",
        ),
    ] = 0.0,
    border_color: Annotated[
        str,
        typer.Option(
            "--border-color",
            "-k",
            help="Border colour as R,G,B, #rrggbb or a colour name",
        ),
    ] = "20,20,240",
    preview: Annotated[
        bool,
        typer.Option(
            "--preview",
            help="Render at preview size (longest side fits the viewport)",
        ),
    ] = False,
    tuned_on_preview: Annotated[
        bool,
        typer.Option(
            "--tuned-on-preview",
            help="Band width and steps were chosen on the preview; rescale them for full size",
        ),
    ] = False,
    viewport: Annotated[
        int,
        typer.Option(
            "--viewport",
            help="Preview viewport size in pixels",
            min=16,
            max=4096,
        ),
    ] = 600,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show the derived gradation table without writing an image",
        ),
    ] = False,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
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
    """Apply a vignette to an image.

    Pixels inside the inner figure are kept, pixels outside the outer figure
    take the border colour, and the band between them is blended smoothly.

    Example:
        vignettify photo.jpg --shape diamond --coverage 70 --border-color black

    This will create photo-Vignetted.jpg next to the source image.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_image.exists():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_image.is_file():
        print_error(
            f"Input path is not a file: {input_image}",
            details="Please provide a path to an image file.",
        )
        raise typer.Exit(code=1)

    try:
        shape_choice = VignetteShape(shape.lower())
    except ValueError:
        print_error(
            f"Invalid shape: {shape}",
            details="Valid values: circle, ellipse, diamond, square, rectangle",
        )
        raise typer.Exit(code=1)

    try:
        vignette = make_vignette_config(
            shape=shape_choice,
            orientation_degrees=orientation,
            coverage_percent=coverage,
            band_width_pixels=band_width,
            gradation_steps=steps,
            center_offset_x_percent=offset_x,
            center_offset_y_percent=offset_y,
            border_color=parse_color(border_color),
        )
    except InvalidConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = VignettizerSettings(
        vignette=vignette,
        preview=PreviewConfig(viewport_size=viewport),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        if not quiet:
            print_step("Loading image")

        try:
            with ImageReader(input_image) as reader:
                image_format = reader.format
                mode = reader.mode
                width, height = reader.size
                if not reader.is_supported:
                    raise UnsupportedImageFormatError(
                        str(input_image),
                        f"pixel mode '{mode}' is not a 24-bit or 32-bit colour format",
                    )
        except FileNotFoundError as e:
            raise ImageLoadError(str(input_image), str(e)) from e

        if not quiet:
            print_image_info(str(input_image), image_format, mode, width, height)

        if dry_run:
            _handle_dry_run(settings, width, height, preview, tuned_on_preview, quiet)
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Vignette")
            print_vignette_config(vignette)

            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Compositing")
            print_processing_info(actual_workers, is_auto=(workers is None))

        actual_output_path = VignetteProcessor.resolve_output_path(input_image, output)
        if output is not None and actual_output_path != output and not quiet:
            console.print(f"  Output would overwrite the source; writing {actual_output_path}")

        processor = VignetteProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("Compositing", total=None)

                    def update_progress(completed: int, total: int) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    stats = processor.process(
                        input_path=input_image,
                        output_path=actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                        preview=preview,
                        tuned_on_preview=tuned_on_preview,
                    )
            else:
                stats = processor.process(
                    input_path=input_image,
                    output_path=actual_output_path,
                    max_workers=workers,
                    preview=preview,
                    tuned_on_preview=tuned_on_preview,
                )
        except KeyboardInterrupt:
            if not quiet:
                partial = processor.last_stats
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=partial.processed_chunks if partial else 0,
                    cancelled=partial.cancelled_count if partial else 0,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                file_size=_format_file_size(actual_output_path),
                total_time_s=stats.duration_seconds,
                preserved=stats.preserved_pixels,
                blended=stats.blended_pixels,
                border=stats.border_pixels,
                avg_time_ms=stats.avg_chunk_time_ms if verbose else None,
                min_time_ms=stats.min_chunk_time_ms if verbose else None,
                max_time_ms=stats.max_chunk_time_ms if verbose else None,
            )

    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except UnsupportedImageFormatError as e:
        print_error("Unsupported image format", details=e.details)
        raise typer.Exit(code=1)
    except ImageSaveError as e:
        print_error(f"Could not save image: {e.reason}")
        raise typer.Exit(code=1)
    except VignettizerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_dry_run(
    settings: VignettizerSettings,
    width: int,
    height: int,
    preview: bool,
    tuned_on_preview: bool,
    quiet: bool,
) -> None:
    """Handle --dry-run mode.

    Args:
        settings: Application settings
        width: Source image width
        height: Source image height
        preview: Derive the table for the preview size
        tuned_on_preview: Rescale band width and steps for full size
        quiet: Suppress output
    """
    config: VignetteConfig = settings.vignette
    scaled_w, scaled_h = preview_size(width, height, settings.preview.viewport_size)

    if preview:
        width, height = scaled_w, scaled_h
    elif tuned_on_preview:
        factor = preview_scale_factor(width, height, scaled_w, scaled_h)
        config = scale_config_to_full_resolution(config, factor)

    table = build_gradation_table(width, height, config)

    if quiet:
        return

    print_step(f"Vignette (dry run, {width}×{height})")
    print_vignette_config(config)
    print_step("Gradation table")
    print_gradation_table(table)
    console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] – no image written")


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
