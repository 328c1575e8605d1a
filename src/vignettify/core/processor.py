"""Parallel processing orchestration for the vignette pipeline.

This module coordinates the full workflow: load, build the gradation
table once, composite row chunks in parallel using ProcessPoolExecutor,
reassemble and save.

Key components:
- row_chunks: Split an image height into row ranges
- VignetteProcessor: Main orchestrator class for image processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

import numpy as np

from vignettify.config import VignetteConfig, VignettizerSettings
from vignettify.core.compositor import RegionCounts, process_chunk
from vignettify.core.gradation import build_gradation_table
from vignettify.core.preview import (
    preview_scale_factor,
    preview_size,
    scale_config_to_full_resolution,
)
from vignettify.domain import GradationTable, Image
from vignettify.exceptions import ProcessingError
from vignettify.io import ImageReader, ImageWriter
from vignettify.utils import ProcessingLogger, ProcessingStats, configure_logging


def row_chunks(height: int, rows_per_chunk: int) -> list[tuple[int, int]]:
    """Split ``height`` rows into consecutive [start, stop) ranges.

    Args:
        height: Number of image rows
        rows_per_chunk: Maximum rows per range

    Returns:
        List of (start, stop) pairs covering every row once
    """
    if rows_per_chunk < 1:
        raise ValueError(f"rows_per_chunk must be >= 1, got {rows_per_chunk}")
    return [
        (start, min(start + rows_per_chunk, height))
        for start in range(0, height, rows_per_chunk)
    ]


class VignetteProcessor:
    """Orchestrates parallel vignette compositing.

    Manages the complete workflow:
    1. Load image file (full size or preview size)
    2. Build the gradation table for the configuration
    3. Composite row chunks in parallel using worker processes
    4. Collect results and update statistics
    5. Save the vignetted image

    Example:
        settings = VignettizerSettings()
        processor = VignetteProcessor(settings)
        stats = processor.process(
            input_path=Path("photo.jpg"),
            output_path=Path("photo-vignette.png"),
            max_workers=4
        )
    """

    def __init__(self, config: VignettizerSettings) -> None:
        """Initialize processor with configuration.

        Args:
            config: Settings containing vignette, processing and logging config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        # Statistics of the most recent render, kept for cancellation reports
        self.last_stats: ProcessingStats | None = None

    @staticmethod
    def resolve_output_path(input_path: Path, output_path: Path | None = None) -> Path:
        """Pick the output path, never overwriting the source image."""
        if output_path is None:
            output_path = ImageWriter.get_vignetted_path(input_path)
        return ImageWriter.protect_source(input_path, output_path)

    def render(
        self,
        image: Image,
        config: VignetteConfig | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> tuple[Image, ProcessingStats]:
        """Composite an in-memory image.

        Args:
            image: Source image
            config: Vignette configuration (settings default if None)
            max_workers: Maximum worker processes (None = settings/auto)
            progress_callback: Optional callback(completed_chunks, total_chunks)

        Returns:
            (vignetted image, statistics)

        Raises:
            InvalidConfigurationError: If the configuration is invalid
            ProcessingError: If any chunk failed
            KeyboardInterrupt: If processing is cancelled by user
        """
        config = config or self.config.vignette
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        self.last_stats = stats
        stats.start_time = time.time()

        table = build_gradation_table(image.width, image.height, config)
        processing_logger.log_table_built(
            shape=config.shape.value,
            steps=table.steps,
            inner_axes=table.inner_axes,
            outer_axes=table.outer_axes,
        )
        chunks = row_chunks(image.height, self.config.processing.rows_per_chunk)
        stats.chunk_count = len(chunks)

        use_pool = (
            max_workers != 1
            and len(chunks) > 1
            and image.pixel_count >= self.config.processing.parallel_threshold_pixels
        )

        self.logger.info(
            "Starting compositing",
            width=image.width,
            height=image.height,
            shape=config.shape.value,
            chunks=len(chunks),
            parallel=use_pool,
            max_workers=max_workers,
        )

        output = np.empty_like(image.pixels)
        counts = RegionCounts()
        if use_pool:
            self._composite_parallel(
                image, config, table, chunks, max_workers, output, counts,
                processing_logger, progress_callback,
            )
        else:
            self._composite_serial(
                image, config, table, chunks, output, counts,
                processing_logger, progress_callback,
            )

        stats.end_time = time.time()

        if stats.error_count:
            where, reason = stats.errors[0]
            raise ProcessingError(f"{stats.error_count} chunk(s) failed, first at {where}: {reason}")

        self.logger.info(
            "Compositing complete",
            preserved=counts.preserved,
            blended=counts.blended,
            border=counts.border,
            duration_seconds=round(stats.duration_seconds, 3),
        )

        return Image(pixels=output), stats

    def _handle_result(
        self,
        result: dict[str, Any],
        output: np.ndarray,
        counts: RegionCounts,
        processing_logger: ProcessingLogger,
    ) -> bool:
        if "error" in result:
            processing_logger.log_chunk_error(
                row_start=result["row_start"],
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return False

        row_start = result["row_start"]
        pixels = result["pixels"]
        output[row_start : row_start + pixels.shape[0]] = pixels

        chunk_counts = RegionCounts.from_dict(result["counts"])
        counts.add(chunk_counts)
        processing_logger.log_chunk_complete(
            row_start=row_start,
            preserved=chunk_counts.preserved,
            blended=chunk_counts.blended,
            border=chunk_counts.border,
            duration_ms=result.get("duration_ms", 0.0),
        )
        return True

    def _composite_serial(
        self,
        image: Image,
        config: VignetteConfig,
        table: GradationTable,
        chunks: list[tuple[int, int]],
        output: np.ndarray,
        counts: RegionCounts,
        processing_logger: ProcessingLogger,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> None:
        """Composite chunks one after another in this process."""
        stats = processing_logger.stats
        config_dict = config.model_dump()
        table_dict = table.to_dict()

        completed = 0
        try:
            for start, stop in chunks:
                processing_logger.log_chunk_start(start, stop - start)
                result = process_chunk(
                    image.pixels[start:stop],
                    start,
                    image.width,
                    image.height,
                    config_dict,
                    table_dict,
                )
                self._handle_result(result, output, counts, processing_logger)
                completed += 1
                if progress_callback is not None:
                    progress_callback(completed, len(chunks))

        except KeyboardInterrupt:
            self.logger.info("Cancellation requested by user")
            stats.was_cancelled = True
            stats.cancelled_count = len(chunks) - completed
            raise

    def _composite_parallel(
        self,
        image: Image,
        config: VignetteConfig,
        table: GradationTable,
        chunks: list[tuple[int, int]],
        max_workers: int | None,
        output: np.ndarray,
        counts: RegionCounts,
        processing_logger: ProcessingLogger,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> None:
        """Composite chunks in parallel using ProcessPoolExecutor."""
        stats = processing_logger.stats

        # Serialize configuration for workers
        config_dict = config.model_dump()
        table_dict = table.to_dict()

        total = len(chunks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for start, stop in chunks:
                processing_logger.log_chunk_start(start, stop - start)
                future = executor.submit(
                    process_chunk,
                    image.pixels[start:stop],
                    start,
                    image.width,
                    image.height,
                    config_dict,
                    table_dict,
                )
                pending_futures[future] = start

            try:
                for future in as_completed(pending_futures):
                    row_start = pending_futures.pop(future)

                    try:
                        self._handle_result(future.result(), output, counts, processing_logger)
                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_chunk_error(
                            row_start=row_start,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
        preview: bool = False,
        tuned_on_preview: bool = False,
    ) -> ProcessingStats:
        """Vignette an image file and save the result.

        Args:
            input_path: Path to the source image
            output_path: Path for the result (auto-generated if None)
            max_workers: Maximum worker processes (None = auto-detect)
            progress_callback: Optional callback(completed_chunks, total_chunks)
            preview: Render at preview size instead of full resolution
            tuned_on_preview: Band width and steps were chosen on the preview;
                rescale them when rendering at full resolution

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the file is not a readable image
            UnsupportedImageFormatError: If the pixel format or output
                extension is not supported
            InvalidConfigurationError: If the configuration is invalid
            ImageSaveError: If the result cannot be written
            KeyboardInterrupt: If processing is cancelled by user
        """
        output_path = self.resolve_output_path(input_path, output_path)
        writer = ImageWriter(output_path)
        config = self.config.vignette

        self.logger.info(
            "Starting image processing",
            input=str(input_path),
            output=str(output_path),
            preview=preview,
        )

        with ImageReader(input_path) as reader:
            width, height = reader.size
            self.logger.info(
                "Image loaded",
                format=reader.format,
                mode=reader.mode,
                width=width,
                height=height,
            )

            if preview:
                scaled_w, scaled_h = preview_size(width, height, self.config.preview.viewport_size)
                image = reader.read_resized(scaled_w, scaled_h)
            else:
                image = reader.read()
                if tuned_on_preview:
                    scaled_w, scaled_h = preview_size(
                        width, height, self.config.preview.viewport_size
                    )
                    factor = preview_scale_factor(width, height, scaled_w, scaled_h)
                    config = scale_config_to_full_resolution(config, factor)
                    self.logger.info(
                        "Scaled preview settings to full resolution",
                        scale_factor=round(factor, 4),
                        band_width_pixels=config.band_width_pixels,
                        gradation_steps=config.gradation_steps,
                    )

        result, stats = self.render(
            image,
            config=config,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        writer.save(result)
        self.logger.info("Image saved", output=str(output_path))

        return stats
