"""Generate output files from a laid out scene."""

import io
import json
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ExportError
from .layout import Scene, render_html, render_svg

FORMATS = ("svg", "png", "json", "html")


@dataclass
class ExportReport:
    """Files written by generate_outputs, and formats that failed."""

    written: dict[str, Path] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


def export_json(tree: dict) -> str:
    """Pretty-print the original input tree."""
    return json.dumps(tree, indent=2, ensure_ascii=False)


def rasterize_svg(svg_text: str, width: int, height: int, scale: int = 2, renderer=None):
    """Render SVG markup to a Pillow image of ``width * scale`` x ``height * scale``.

    Args:
        svg_text: SVG document.
        width: Canvas width in SVG user units.
        height: Canvas height in SVG user units.
        scale: Supersampling multiplier.
        renderer: Callable with the ``cairosvg.svg2png`` signature returning PNG
            bytes. Defaults to cairosvg.

    Returns:
        RGBA ``PIL.Image.Image``.

    Raises:
        ExportError: If rendering or decoding the PNG fails.
    """
    from PIL import Image

    if renderer is None:
        try:
            import cairosvg
        except (ImportError, OSError) as err:
            # cairosvg raises OSError when the cairo shared library is missing
            raise ExportError(f"PNG export requires cairosvg and libcairo: {err}") from err
        renderer = cairosvg.svg2png

    try:
        png_bytes = renderer(
            bytestring=svg_text.encode(),
            output_width=width * scale,
            output_height=height * scale,
        )
    except Exception as err:
        raise ExportError(f"Failed to render SVG: {err}") from err

    try:
        image = Image.open(io.BytesIO(png_bytes))
        image.load()
    except (OSError, TypeError, ValueError) as err:
        raise ExportError(f"Failed to decode rendered PNG: {err}") from err

    return image.convert("RGBA")


def write_svg(scene: Scene, output_file: Path) -> None:
    output_file.write_text(render_svg(scene), encoding="utf-8")


def write_png(scene: Scene, output_file: Path, scale: int | None = None, renderer=None) -> None:
    """Rasterize the scene's SVG and save it as PNG."""
    scale = scale or scene.config.raster_scale
    image = rasterize_svg(render_svg(scene), scene.width, scene.height, scale, renderer)
    image.save(output_file, format="PNG")


def write_json(scene: Scene, output_file: Path) -> None:
    output_file.write_text(export_json(scene.tree) + "\n", encoding="utf-8")


def generate_outputs(
    scene: Scene,
    output_dir: Path,
    formats: tuple[str, ...] = FORMATS,
    basename: str = "mindmap",
    scale: int | None = None,
    renderer=None,
) -> ExportReport:
    """Write the requested formats of one scene into ``output_dir``.

    A failing format is recorded in the report and does not stop the others;
    every format is produced from the same scene.

    Args:
        scene: Laid out scene.
        output_dir: Directory to write into (created if missing).
        formats: Any of "svg", "png", "json", "html".
        basename: File name stem.
        scale: PNG supersampling multiplier (defaults to the scene's config).
        renderer: Optional SVG-to-PNG renderer passed to rasterize_svg.

    Returns:
        ExportReport with written paths and per-format errors.
    """
    unknown = [f for f in formats if f not in FORMATS]
    if unknown:
        raise ValueError(f"Unknown output format(s): {', '.join(unknown)}")

    output_dir.mkdir(parents=True, exist_ok=True)
    report = ExportReport()

    for fmt in formats:
        path = output_dir / f"{basename}.{fmt}"
        try:
            if fmt == "svg":
                write_svg(scene, path)
            elif fmt == "png":
                write_png(scene, path, scale, renderer)
            elif fmt == "json":
                write_json(scene, path)
            else:
                render_html(scene, path)
        except ExportError as err:
            report.errors[fmt] = str(err)
            continue
        report.written[fmt] = path

    return report
