"""Logging utilities for Sheetfont."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from a conversion run."""

    glyph_count: int = 0
    skipped_cells: int = 0
    layers_processed: int = 0
    layers_skipped: int = 0
    forced_closures: int = 0
    duplicate_codepoints: int = 0
    max_points: int = 0
    max_contours: int = 0
    skipped_layers: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_sheetfont", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._sheetfont = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler._sheetfont = True  # type: ignore[attr-defined]
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("sheetfont")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking conversion progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_layer_start(self, layer_name: str, base_codepoint: int) -> None:
        """Log start of layer processing."""
        self._logger.debug(
            "Processing layer",
            layer=layer_name,
            base=f"U+{base_codepoint:04X}",
        )
        self._stats.layers_processed += 1

    def log_layer_skipped(self, layer_name: str, reason: str) -> None:
        """Log a layer whose name does not encode a codepoint."""
        self._logger.info("Layer skipped", layer=layer_name, reason=reason)
        self._stats.layers_skipped += 1
        self._stats.skipped_layers.append((layer_name, reason))

    def log_glyph_traced(
        self,
        codepoint: int,
        points: int,
        contours: int,
        duration_ms: float,
    ) -> None:
        """Log a traced glyph and update the global outline maxima."""
        self._logger.debug(
            "Glyph traced",
            codepoint=f"U+{codepoint:04X}",
            points=points,
            contours=contours,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.glyph_count += 1
        self._stats.max_points = max(self._stats.max_points, points)
        self._stats.max_contours = max(self._stats.max_contours, contours)

    def log_cell_skipped(self, layer_name: str, row: int, col: int) -> None:
        """Log a cell without foreground pixels."""
        self._logger.debug("Empty cell skipped", layer=layer_name, row=row, col=col)
        self._stats.skipped_cells += 1

    def log_forced_closure(self, codepoint: int, count: int) -> None:
        """Log paths that had to be force-closed."""
        self._logger.warning(
            "Boundary walk did not close; path force-closed",
            codepoint=f"U+{codepoint:04X}",
            paths=count,
        )
        self._stats.forced_closures += count

    def log_duplicate_codepoint(self, codepoint: int, layer_name: str) -> None:
        """Log a codepoint produced by more than one cell."""
        self._logger.warning(
            "Duplicate codepoint; later glyph wins in cmap",
            codepoint=f"U+{codepoint:04X}",
            layer=layer_name,
        )
        self._stats.duplicate_codepoints += 1

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
