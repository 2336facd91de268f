"""Greedy word wrapping against measured pixel widths."""

from typing import Protocol

from ..config import FontSpec
from ..errors import MeasurementUnavailableError


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of a string."""

    def __call__(self, text: str, font: FontSpec) -> float: ...


class PillowMeasurer:
    """Measure text with a FreeType font loaded through Pillow.

    Only ``FontSpec.size`` is honoured; family and weight come from the font
    file itself. Without ``font_path``, Pillow's bundled regular face is used,
    which is narrower than the 800-weight Inter the SVG is drawn with, so
    labels can render wider than they were wrapped. Pass the TrueType file of
    the drawing family and weight to keep the two geometries identical.
    """

    def __init__(self, font_path: str | None = None):
        self.font_path = font_path
        self._fonts: dict[int, object] = {}

    def _load(self, size: int):
        if size not in self._fonts:
            try:
                from PIL import ImageFont
            except ImportError as err:
                raise MeasurementUnavailableError(
                    "Pillow is required for text measurement: pip install pillow"
                ) from err
            try:
                if self.font_path:
                    self._fonts[size] = ImageFont.truetype(self.font_path, size)
                else:
                    self._fonts[size] = ImageFont.load_default(size=size)
            except OSError as err:
                raise MeasurementUnavailableError(
                    f"Cannot load font {self.font_path or '<default>'}: {err}"
                ) from err
        return self._fonts[size]

    def __call__(self, text: str, font: FontSpec) -> float:
        return float(self._load(font.size).getlength(text))


def wrap_label(
    label: str,
    max_width: float,
    measure: TextMeasurer,
    font: FontSpec,
    max_lines: int = 3,
) -> list[str]:
    """Break ``label`` into at most ``max_lines`` lines no wider than ``max_width``.

    Words are packed greedily. A word wider than ``max_width`` on its own is
    kept whole on its own line. Words that do not fit in ``max_lines`` lines
    are dropped.

    Args:
        label: Text to wrap.
        max_width: Target line width in pixels.
        measure: Width measurement for ``font``.
        font: Font the label will be rendered with.
        max_lines: Hard cap on the number of lines.

    Returns:
        Between 1 and ``max_lines`` lines; an empty label gives ``[""]``.
    """
    if measure is None:
        raise MeasurementUnavailableError("A text measurer is required to wrap labels")

    words = label.split()
    if not words:
        return [""]

    lines: list[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if measure(candidate, font) > max_width and current:
            lines.append(current)
            if len(lines) == max_lines:
                return lines
            current = word
        else:
            current = candidate
    lines.append(current)
    return lines[:max_lines]
