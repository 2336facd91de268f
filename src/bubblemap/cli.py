"""CLI for bubblemap."""

import argparse
import json
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG, LayoutConfig, read_yaml
from .errors import BubblemapError, ConfigError
from .generate import fallback_tree_from_text, generate_tree
from .layout import PillowMeasurer, build_scene
from .visualize import FORMATS, generate_outputs


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared between subcommands."""
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", type=str, help="Free-form text to turn into a mindmap")
    source.add_argument("--text-file", type=Path, help="File containing the text")
    parser.add_argument("--llm-url", type=str, help="Chat-completions endpoint (default: $LLM_BASE_URL)")
    parser.add_argument("--model", type=str, help="Model name (default: $LLM_MODEL)")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the LLM and split the text into sentences",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")


def load_settings(args: argparse.Namespace) -> LayoutConfig:
    """Apply the config file to unset arguments and return the layout config."""
    if not args.config:
        return DEFAULT_CONFIG

    settings = read_yaml(args.config)
    if not args.llm_url and "llm-url" in settings:
        args.llm_url = settings["llm-url"]
    if not args.model and "model" in settings:
        args.model = settings["model"]
    if hasattr(args, "output") and args.output is None and "output" in settings:
        args.output = Path(settings["output"])
    if hasattr(args, "format") and not args.format and "formats" in settings:
        val = settings["formats"]
        formats = val if isinstance(val, list) else [val]
        unknown = [str(f) for f in formats if f not in FORMATS]
        if unknown:
            raise ConfigError(
                f"Unknown output format(s) in {args.config}: {', '.join(unknown)} "
                f"(choose from {', '.join(FORMATS)})"
            )
        args.format = formats
    return LayoutConfig.from_dict(settings.get("layout"))


def read_text(args: argparse.Namespace) -> str | None:
    """Return the source text from --text or --text-file, if either was given."""
    if args.text_file:
        return args.text_file.read_text(encoding="utf-8")
    return args.text


def text_to_tree(text: str, args: argparse.Namespace) -> dict:
    """Generate a tree for ``text``, reporting where it came from."""
    if args.offline:
        print("Offline mode: building tree from sentences")
        return fallback_tree_from_text(text)

    tree, source = generate_tree(text, url=args.llm_url, model=args.model)
    if source == "fallback":
        print("LLM unavailable or reply unusable; using sentence fallback")
    return tree


def cmd_render(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Lay out a tree and write the requested output formats."""
    config = load_settings(args)
    if args.font:
        config = config.replace(font_path=str(args.font))
    if args.max_iterations is not None:
        config = config.replace(max_iterations=args.max_iterations)
    if args.scale is not None:
        config = config.replace(raster_scale=args.scale)
    config.validate()

    text = read_text(args)
    if args.input:
        if text is not None:
            parser.error("--input cannot be combined with --text/--text-file")
        with open(args.input) as f:
            try:
                tree = json.load(f)
            except json.JSONDecodeError as err:
                print(f"ERROR: {args.input} is not valid JSON: {err}")
                sys.exit(1)
    elif text is not None:
        tree = text_to_tree(text, args)
    else:
        parser.error("one of --input, --text or --text-file is required")

    output = (args.output or Path("results")).resolve()
    formats = tuple(args.format) if args.format else FORMATS

    scene = build_scene(tree, PillowMeasurer(config.font_path), config)
    print(f"Laid out {len(scene.bubbles)} bubbles and {len(scene.links)} links")

    relaxation = scene.relaxation
    if relaxation.converged:
        print(f"Relaxation converged after {relaxation.iterations} iteration(s)")
    else:
        print(
            f"Relaxation stopped after {relaxation.iterations} iteration(s) "
            f"with {relaxation.residual_overlaps} residual overlap(s)"
        )
    print(f"Canvas: {scene.width} x {scene.height}")

    report = generate_outputs(scene, output, formats)
    for path in report.written.values():
        print(f"Wrote {path.name}")
    for fmt, message in report.errors.items():
        print(f"ERROR: {fmt} export failed: {message}")

    print(f"\nAll outputs written to {output}/")
    if report.errors:
        sys.exit(1)


def cmd_generate(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Turn text into a tree and print or save it as JSON."""
    load_settings(args)
    text = read_text(args)
    if text is None:
        parser.error("one of --text or --text-file is required")

    tree = text_to_tree(text, args)
    payload = json.dumps(tree, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        print(payload)


def main() -> None:
    """Main entry point for the bubblemap CLI."""
    parser = argparse.ArgumentParser(description="Render topic trees as radial bubble mindmaps")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser(
        "render",
        help="Lay out a tree and export SVG, PNG, JSON and HTML",
    )
    add_common_args(render_parser)
    render_parser.add_argument("--input", type=Path, help="JSON tree file ({name, children})")
    render_parser.add_argument(
        "--output",
        type=Path,
        help="Output directory (default: results)",
    )
    render_parser.add_argument(
        "--format",
        action="append",
        choices=FORMATS,
        help="Output format (can be repeated, default: all)",
    )
    render_parser.add_argument(
        "--font",
        type=Path,
        help="TrueType file of the drawing font (e.g. Inter ExtraBold) used to measure labels; "
        "without it Pillow's default face under-measures the bold SVG text",
    )
    render_parser.add_argument(
        "--max-iterations",
        type=int,
        help="Relaxation iteration ceiling (default: 80)",
    )
    render_parser.add_argument("--scale", type=int, help="PNG supersampling factor (default: 2)")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Turn text into a tree JSON without rendering",
    )
    add_common_args(generate_parser)
    generate_parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")

    args = parser.parse_args()

    try:
        if args.command == "render":
            cmd_render(args, render_parser)
        elif args.command == "generate":
            cmd_generate(args, generate_parser)
        else:
            # No subcommand provided - show help
            parser.print_help()
    except BubblemapError as err:
        print(f"ERROR: {err}")
        sys.exit(1)


if __name__ == "__main__":
    main()
