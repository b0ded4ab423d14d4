"""
Rover Lens command line entry point.

Loads a rover photo (local file or URL), applies one effect with the exact
effect pipeline, and saves the result as a PNG.

Example:
    rover-lens --url https://example.org/sol1000.jpg --effect edges \
        --strength 2.2 --thickness 1 --output "out/{EFFECT}_{DATE}.png"
"""

from typing import Any, Dict, List, Optional
import argparse
import logging
import sys
from pathlib import Path

from RL_Libs.constants import DEFAULT_EXPORT_TEMPLATE, PRESETS_FILE_NAME
from RL_Libs.EffectsLib.effect_params import EffectKind, merge_params
from RL_Libs.errors import FetchBlocked, RoverLensError
from RL_Libs.RenderLib.image_source import ImageFetcher, load_raster
from RL_Libs.RenderLib.png_export import ExportConfig, ExportHandler
from RL_Libs.RenderLib.preset_store import load_preset, save_preset
from RL_Libs.RenderLib.render_session import RenderSession

logger = logging.getLogger("rover_lens")

KNOB_NAMES = (
    "strength",
    "threshold",
    "thickness",
    "recontrast",
    "amount",
    "shift",
    "invert",
    "width",
    "hue",
    "saturation",
    "opacity",
)


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Apply pixel effects to rover photos")
    g_io = p.add_argument_group("I/O")
    source = g_io.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", type=str, help="Path to a local image")
    source.add_argument("--url", type=str, help="URL of a remote image")
    g_io.add_argument("--relay", type=str, default=None,
                      help="Relay endpoint used when direct pixel access is blocked")
    g_io.add_argument("--output", type=str, default=DEFAULT_EXPORT_TEMPLATE,
                      help="Output file template ({DATE}, {TIME}, {EFFECT} tags)")
    g_io.add_argument("--overwrite", action="store_true")
    g_io.add_argument("--verbose", action="store_true")

    g_fx = p.add_argument_group("Effect")
    g_fx.add_argument("--effect", type=str, default=None,
                      choices=[k.value for k in EffectKind])
    g_fx.add_argument("--preset", type=str, default=None, help="Load effect and knobs from a preset")
    g_fx.add_argument("--save-preset", dest="save_preset", type=str, default=None,
                      help="Store the effect and knobs under this preset name")
    g_fx.add_argument("--presets", type=str, default=PRESETS_FILE_NAME, help="Preset file")

    g_edges = p.add_argument_group("Edges")
    g_edges.add_argument("--strength", type=float)
    g_edges.add_argument("--threshold", type=float)
    g_edges.add_argument("--thickness", type=float)
    g_edges.add_argument("--recontrast", type=float)

    g_sharp = p.add_argument_group("Sharpen")
    g_sharp.add_argument("--amount", type=float)

    g_thr = p.add_argument_group("Threshold")
    g_thr.add_argument("--shift", type=float)
    g_thr.add_argument("--invert", action=argparse.BooleanOptionalAction, default=None)

    g_out = p.add_argument_group("Outline")
    g_out.add_argument("--width", type=float)
    g_out.add_argument("--hue", type=float)
    g_out.add_argument("--saturation", type=float)
    g_out.add_argument("--opacity", type=float)

    return p


def _knobs_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    knobs = {}
    for name in KNOB_NAMES:
        value = getattr(args, name, None)
        if value is not None:
            knobs[name] = value
    return knobs


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.preset:
            kind, preset_params = load_preset(args.presets, args.preset)
            if args.effect and args.effect != kind.value:
                logger.warning(f"--effect {args.effect} overrides preset effect {kind.value}")
                kind = EffectKind(args.effect)
                preset_params = None
        else:
            kind, preset_params = EffectKind(args.effect or EffectKind.NONE.value), None

        params = merge_params(kind, preset_params, _knobs_from_args(args))

        if args.save_preset:
            save_preset(args.presets, args.save_preset, kind, params)
            logger.info(f"Saved preset '{args.save_preset}' to {args.presets}")

        session = RenderSession(ImageFetcher(relay_url=args.relay))
        token = session.begin()

        if args.url:
            raster = session.fetch(token, args.url)
        else:
            raster = load_raster(Path(args.image))

        handler = ExportHandler(ExportConfig(output_path=args.output, overwrite=args.overwrite))
        saved = session.export(token, raster, kind, params, handler)
    except FetchBlocked as exc:
        logger.error(f"{exc} Use --relay to switch transport.")
        return 2
    except (RoverLensError, KeyError, ValueError, OSError) as exc:
        logger.error(str(exc))
        return 2

    print(saved)
    return 0


if __name__ == "__main__":
    sys.exit(main())
