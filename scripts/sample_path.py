#!/usr/bin/env python3
"""Path sampling tool: length, bounds and a point/tangent table.

Loads an engine config and a path file, then reports what a presentation
layer would see when laying content along the path:
    1. Approximate arc length at the configured curve resolution
    2. Bounding box of the flattened path
    3. point_at / tangent_at at evenly spaced normalized times
    4. Optional placements for N equally sized items

Usage:
    python scripts/sample_path.py --path configs/paths/wave.v1.yaml
    python scripts/sample_path.py --path configs/paths/half_wheel.v1.yaml \\
                                  --samples 21 --output outputs/half_wheel.yaml
    python scripts/sample_path.py --path configs/paths/loop.v1.yaml \\
                                  --items 31 --item_extent 24 --axis vertical

Output YAML (with --output):
    path: <name>
    length: <float>
    bbox: [xmin, ymin, xmax, ymax]
    samples: [{t, x, y, angle_deg}, ...]
    placements: [{index, time, x, y, rotation_deg, dx, dy}, ...]

Callable API:
    sample_path_main(path_file, engine_cfg, samples) → dict
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

sys.path.insert(0, str(Path(__file__).parent.parent))

from pathtrace.engine.configured import PathEngine
from pathtrace.path.loader import build_path
from pathtrace.utils import fs, logging_config, profiler, validators

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_CFG = Path(__file__).parent.parent / "configs" / "engine.v1.yaml"


def sample_path_main(
    path_file: str,
    engine_cfg: Union[str, Path, validators.EngineV1, None] = None,
    samples: int = 11,
    items: int = 0,
    item_extent: float = 24.0,
    spacing: float = 8.0,
    axis: str = "horizontal",
    scroll_offset: float = 0.0,
) -> Dict[str, Any]:
    """Sample a path file with the configured engine.

    Parameters
    ----------
    path_file : str
        Path to a path.v1 YAML file
    engine_cfg : str | Path | EngineV1, optional
        Path to engine.v1 YAML, or an already validated config; built-in
        defaults when None
    samples : int
        Number of evenly spaced times in [0, 1], >= 2
    items : int
        Number of items to place; 0 skips placement
    item_extent, spacing, axis, scroll_offset
        Item layout, forwarded to PathEngine.distribute

    Returns
    -------
    Dict[str, Any]
        Results dict with keys path, length, bbox, samples, placements.
        Points that are undefined are reported as null coordinates.
    """
    if samples < 2:
        raise ValueError(f"samples must be >= 2, got {samples}")

    if engine_cfg is None:
        engine_cfg = validators.EngineV1()
    elif not isinstance(engine_cfg, validators.EngineV1):
        engine_cfg = validators.load_engine_config(engine_cfg)
    engine = PathEngine.from_config(engine_cfg)

    doc = validators.load_path_file(path_file)
    path = build_path(doc)
    with logging_config.log_context(path=doc.name):
        with profiler.timer("flatten"):
            length = engine.length(path)
        bbox = engine.bounding_box(path)
        logger.info(
            "Length %.4f over %d commands (subdivisions=%d)",
            length, len(path), engine.subdivisions,
        )

        per_sample = profiler.TimerAccumulator("sample")
        rows: List[Dict[str, Any]] = []
        for i in range(samples):
            t = i / (samples - 1)
            with per_sample.measure():
                point = engine.point_at(path, t)
                angle = engine.tangent_at(path, t)
            rows.append({
                "t": round(t, 6),
                "x": None if point is None else point.x,
                "y": None if point is None else point.y,
                "angle_deg": angle.degrees,
            })
        logger.info("Sampled %d times, %.1f us per sample", samples, per_sample.mean() * 1e6)

        placements = []
        if items > 0:
            placed = engine.distribute(
                path, items, item_extent, spacing=spacing, axis=axis,
                scroll_offset=scroll_offset,
            )
            for index, p in enumerate(placed):
                placements.append({
                    "index": index,
                    "time": p.time,
                    "x": None if p.point is None else p.point.x,
                    "y": None if p.point is None else p.point.y,
                    "rotation_deg": p.rotation.degrees,
                    "dx": p.offset.x,
                    "dy": p.offset.y,
                })
            on_path = sum(row["x"] is not None for row in placements)
            logger.info("Placed %d/%d items on the path", on_path, items)

    return {
        "path": doc.name,
        "length": length,
        "bbox": None if bbox is None else list(bbox),
        "samples": rows,
        "placements": placements,
    }


def format_table(result: Dict[str, Any]) -> str:
    """Render the sample rows as a fixed-width text table."""
    lines = [f"{'t':>8} {'x':>12} {'y':>12} {'angle':>10}"]
    for row in result["samples"]:
        if row["x"] is None:
            xy = f"{'-':>12} {'-':>12}"
        else:
            xy = f"{row['x']:12.4f} {row['y']:12.4f}"
        lines.append(f"{row['t']:8.4f} {xy} {row['angle_deg']:10.3f}")
    return "\n".join(lines)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Sample length, points and tangents along a path file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--path', type=str, required=True, help='Path file (path.v1 YAML)')
    parser.add_argument(
        '--engine_cfg', type=str, default=str(DEFAULT_ENGINE_CFG),
        help='Engine config (engine.v1 YAML)'
    )
    parser.add_argument('--samples', type=int, default=11, help='Evenly spaced sample times')
    parser.add_argument('--items', type=int, default=0, help='Number of items to place')
    parser.add_argument('--item_extent', type=float, default=24.0, help='Item size along the axis')
    parser.add_argument('--spacing', type=float, default=8.0, help='Gap between items')
    parser.add_argument(
        '--axis', choices=['horizontal', 'vertical'], default='horizontal', help='Scroll axis'
    )
    parser.add_argument('--scroll_offset', type=float, default=0.0, help='Current scroll position')
    parser.add_argument('--output', type=str, default=None, help='Write results as YAML')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    engine_cfg = None
    error = None
    log_kwargs = {"log_level": "INFO"}
    try:
        if args.engine_cfg:
            engine_cfg = validators.load_engine_config(args.engine_cfg)
        else:
            engine_cfg = validators.EngineV1()
        log_kwargs = engine_cfg.logging.as_kwargs()
    except (FileNotFoundError, ValueError) as e:
        error = e
    if args.verbose:
        log_kwargs["log_level"] = "DEBUG"
    logging_config.setup_logging(**log_kwargs, context={"app": "sample_path"})

    if error is not None:
        logger.error(str(error))
        return 1

    try:
        result = sample_path_main(
            args.path,
            engine_cfg=engine_cfg,
            samples=args.samples,
            items=args.items,
            item_extent=args.item_extent,
            spacing=args.spacing,
            axis=args.axis,
            scroll_offset=args.scroll_offset,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    print(f"{result['path']}: length={result['length']:.4f} bbox={result['bbox']}")
    print(format_table(result))

    if args.output:
        fs.atomic_yaml_dump(result, args.output)
        logger.info(f"Wrote {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
