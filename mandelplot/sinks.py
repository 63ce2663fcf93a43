"""Output sinks that receive rendered units in row-major order."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Optional, Sequence

import numpy as np
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont

from .banding import OutputUnit
from .renderer import GridDimensions

# 320x200 four-colour CGA, palette C0 (low intensity).
CGA_PALETTE: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (0, 170, 0),
    (170, 0, 0),
    (170, 85, 0),
)

STATUS_ORIGIN = (8, 8)
STATUS_LINE_HEIGHT = 10
SURFACE_MAX_INDEX = int(np.iinfo(np.uint8).max)


class OutputSink:
    """Sequential destination for rendered units.

    Use the sink as a context manager: it is acquired on entry and always
    released on exit. Buffered output is only flushed when the block
    finishes without an exception, so an aborted render leaves nothing
    half-written behind.
    """

    def __enter__(self) -> "OutputSink":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self.flush()
        finally:
            self.release()
        return False

    def acquire(self) -> None:
        pass

    def release(self) -> None:
        pass

    def flush(self) -> None:
        pass

    def accepts(self, unit: OutputUnit) -> bool:
        """Whether ``unit`` can be written to this sink."""

        return True

    def begin(self, dims: GridDimensions) -> None:
        pass

    def emit_unit(self, row: int, col: int, unit: OutputUnit) -> None:
        raise NotImplementedError

    def end_row(self, row: int) -> None:
        pass

    def end(self) -> None:
        pass


class TextLineSink(OutputSink):
    """Write one symbol per pixel and a line break after every row."""

    def __init__(
        self,
        stream: Optional[IO[str]] = None,
        *,
        path: Optional[Path] = None,
        encoding: str = "utf-8",
    ) -> None:
        if stream is not None and path is not None:
            raise ValueError("TextLineSink takes either a stream or a path, not both.")
        self.path = Path(path) if path is not None else None
        self.encoding = encoding
        self._owns_stream = False
        self._stream: Optional[IO[str]] = stream
        if stream is None and path is None:
            self._stream = sys.stdout

    def acquire(self) -> None:
        if self.path is not None and self._stream is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = self.path.open("w", encoding=self.encoding)
            self._owns_stream = True

    def release(self) -> None:
        if self._owns_stream and self._stream is not None:
            self._stream.close()
            self._stream = None
            self._owns_stream = False

    def flush(self) -> None:
        if self._stream is not None:
            self._stream.flush()

    def accepts(self, unit: OutputUnit) -> bool:
        return isinstance(unit, str)

    def _require_stream(self) -> IO[str]:
        if self._stream is None:
            raise RuntimeError("TextLineSink writing to a path must be used inside a 'with' block.")
        return self._stream

    def emit_symbol(self, unit: OutputUnit) -> None:
        self._require_stream().write(str(unit))

    def emit_line_break(self) -> None:
        self._require_stream().write("\n")

    def emit_unit(self, row: int, col: int, unit: OutputUnit) -> None:
        self.emit_symbol(unit)

    def end_row(self, row: int) -> None:
        self.emit_line_break()


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    pil_format = _pil_format_name(image_format)
    if pil_format == "JPEG" and image.mode == "P":
        image = image.convert("RGB")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)


class PixelSurfaceSink(OutputSink):
    """Paint colour indices onto an in-memory surface.

    ``pixels`` keeps the indices exactly as emitted. When the surface is
    turned into an image they are reduced modulo the palette size, the way a
    two-bit-per-pixel framebuffer masks them. The image is written to
    ``path`` (if given) when the sink is flushed.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        image_format: str = "png",
        palette: Sequence[tuple[int, int, int]] = CGA_PALETTE,
        background: int = 0,
    ) -> None:
        if not palette:
            raise ValueError("palette must contain at least one colour.")
        self.path = Path(path) if path is not None else None
        self.image_format = (image_format or "png").lower().lstrip(".")
        self.palette = tuple(palette)
        self.background = background
        self.pixels: Optional[np.ndarray] = None
        self.status_lines: list[str] = []

    def accepts(self, unit: OutputUnit) -> bool:
        """Colour indices must be integers that fit the 8-bit surface."""

        if isinstance(unit, bool) or not isinstance(unit, (int, np.integer)):
            return False
        return 0 <= int(unit) <= SURFACE_MAX_INDEX

    def begin(self, dims: GridDimensions) -> None:
        self.pixels = np.full((dims.height, dims.width), self.background, dtype=np.uint8)
        self.status_lines = []

    def emit_unit(self, row: int, col: int, unit: OutputUnit) -> None:
        if self.pixels is None:
            raise RuntimeError("PixelSurfaceSink.begin must be called before emitting units.")
        self.pixels[row, col] = int(unit)

    def annotate(self, lines: Sequence[str]) -> None:
        """Queue status lines to be drawn in black at the top-left corner."""

        self.status_lines.extend(lines)

    def to_image(self) -> PIL.Image.Image:
        if self.pixels is None:
            raise RuntimeError("Nothing has been rendered onto this surface.")

        indices = np.uint8(self.pixels % len(self.palette))
        image = PIL.Image.fromarray(indices)
        flat_palette = [channel for colour in self.palette for channel in colour]
        image.putpalette(flat_palette)

        if self.status_lines:
            draw = PIL.ImageDraw.Draw(image)
            font = PIL.ImageFont.load_default()
            x, y = STATUS_ORIGIN
            for line in self.status_lines:
                draw.text((x, y), line, font=font, fill=0)
                y += STATUS_LINE_HEIGHT
        return image

    def flush(self) -> None:
        if self.path is None or self.pixels is None:
            return
        write_single_image(self.to_image(), self.path, self.image_format)
