"""Command-line interface: recognize an image and list its entities."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ...application.services.image_analysis import ImageAnalysisService
from ...application.services.lens_session import LensSession
from ...domain.services.entity_extraction import build_registry
from ...domain.value_objects.config import LensConfig, RecognizerType
from ...exceptions import MagicLensError
from ...infrastructure.plugin_registry import PluginRegistry
from ...utils.env import setup_logging

logger = logging.getLogger(__name__)


def parse_display_size(value: str) -> tuple[int, int]:
    """Parse 'WIDTHxHEIGHT' into a positive size."""
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got '{value}'")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("display size must be positive")
    return width, height


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="magic-lens",
        description="Recognize text in an image and extract phones, emails, links and dates"
    )

    parser.add_argument("image", type=Path, help="Image to analyze")

    parser.add_argument(
        "-e", "--engine",
        choices=PluginRegistry.list_available(),
        default=RecognizerType.TESSERACT.value,
        help="Recognition engine (default: tesseract)"
    )
    parser.add_argument(
        "-l", "--lang",
        default="eng",
        help="Language code(s) in Tesseract form, e.g. eng or eng+deu (default: eng)"
    )
    parser.add_argument(
        "--min-confidence",
        type=float,
        default=0.0,
        help="Drop lines below this confidence, 0-1 (default: 0)"
    )
    parser.add_argument(
        "--display-size",
        type=parse_display_size,
        metavar="WxH",
        help="Size the image is shown at, for overlay geometry (default: natural size)"
    )

    rules_group = parser.add_argument_group("Entity rule options")
    rules_group.add_argument(
        "--rules-file",
        type=Path,
        help="JSON file with extra entity rules"
    )
    rules_group.add_argument(
        "--disable-rule",
        action="append",
        default=[],
        metavar="KEY",
        help="Skip a rule by key (repeatable)"
    )

    output_group = parser.add_argument_group("Output options")
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print overlays and entities as JSON"
    )
    output_group.add_argument(
        "--overlays",
        action="store_true",
        help="Also list overlay geometry in text output"
    )
    output_group.add_argument(
        "--log-file",
        help="Also write logs to this file"
    )
    output_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def render_text(session: LensSession, show_overlays: bool) -> str:
    """Human-readable summary of the session's result."""
    out: list[str] = []

    if show_overlays:
        out.append(f"Lines ({len(session.overlays)}):")
        for overlay in session.overlays:
            rect = overlay.rect
            out.append(
                f"  [{rect.left:.1f}, {rect.top:.1f}, {rect.width:.1f}x{rect.height:.1f}"
                f" @ {rect.font_size:.1f}px] {overlay.text}"
            )

    if not session.groups:
        out.append("No entities found")
    for group in session.groups:
        out.append(group.heading)
        for match in group.matches:
            out.append(f"  {match}")

    return "\n".join(out)


def render_json(session: LensSession) -> str:
    frame = session.frame
    payload = {
        "image": str(session.image_path),
        "frame": {
            "natural_width": frame.natural_width,
            "natural_height": frame.natural_height,
            "rendered_width": frame.rendered_width,
            "rendered_height": frame.rendered_height,
        },
        "text": session.result.full_text,
        "overlays": [overlay.to_dict() for overlay in session.overlays],
        "entities": [group.to_dict() for group in session.groups],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(logging.DEBUG if parsed.verbose else logging.INFO, parsed.log_file)

    try:
        config = LensConfig(
            language=parsed.lang,
            min_confidence=parsed.min_confidence,
            rules_file=parsed.rules_file,
            disabled_rules=parsed.disable_rule,
        )
        registry = build_registry(config)
        engine = PluginRegistry.create_recognizer(
            parsed.engine,
            language=config.language,
            min_confidence=config.min_confidence
        )
    except (MagicLensError, ValueError) as e:
        logger.error(f"Failed to initialize: {e}")
        return 1

    session = LensSession(config=config, registry=registry)
    service = ImageAnalysisService(engine, session)

    logger.info(f"Analyzing {parsed.image.name} with {engine.name}")

    try:
        with service:
            ok = service.analyze(parsed.image, parsed.display_size)
    except MagicLensError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    if not ok:
        logger.error(session.last_error)
        return 1

    if parsed.json:
        print(render_json(session))
    else:
        print(render_text(session, parsed.overlays))
    return 0


if __name__ == "__main__":
    sys.exit(main())
