from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from . import __version__
from .config import MazeSettings
from .errors import MazeConfigError
from .logging_config import configure_logging
from .maze.run import MazeRun
from .rng import RandomSource

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="zeus-maze",
        description="Project Zeus - generate a maze and preview its placement",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to a YAML file overriding the default maze settings.",
    )
    parser.add_argument("--width", type=int, default=None, help="Maze width in cells")
    parser.add_argument("--height", type=int, default=None, help="Maze height in cells")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze")
    parser.add_argument(
        "--simulate",
        type=float,
        default=0.0,
        metavar="SECONDS",
        help="Tick the idle run for SECONDS at 60 Hz and report the pursuit enemy state.",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of ASCII")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    parser.add_argument("--debug", action="store_true", help="Shortcut for -vv.")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> MazeSettings:
    settings = MazeSettings.load(user_path=args.config_path)
    overrides: Dict[str, Any] = {}
    for name in ("width", "height", "seed"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    settings = dataclasses.replace(settings, **overrides)
    settings.validate()
    return settings


def render_ascii(run: MazeRun) -> List[str]:
    rows = [list(line) for line in run.grid.to_lines()]
    sx, sy = run.placement.start
    ix, iy = run.placement.item
    rows[sy][sx] = "S"
    rows[iy][ix] = "I"
    return ["".join(r) for r in rows]


def summarize(run: MazeRun) -> Dict[str, Any]:
    enemy = run.enemy
    return {
        "width": run.grid.width,
        "height": run.grid.height,
        "grid": run.grid.to_lines(),
        "signature": run.grid.signature(),
        "start": list(run.placement.start),
        "item": list(run.placement.item),
        "used_fallback": run.placement.used_fallback,
        "enemy": {
            "active": enemy.is_active,
            "timer": round(enemy.timer, 3),
            "position": list(enemy.position.as_tuple()),
        },
    }


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(2 if args.debug else args.verbose)

    try:
        settings = build_settings(args)
    except MazeConfigError as exc:
        print(f"zeus-maze: {exc}", file=sys.stderr)
        return 2

    run = MazeRun.create(settings, RandomSource(settings.seed))
    frames = int(round(args.simulate * 60))
    for _ in range(frames):
        run.update(1.0 / 60.0)
    if frames:
        logger.info("Simulated %d frames", frames)

    if args.json:
        print(json.dumps(summarize(run), indent=2, sort_keys=True))
    else:
        print("\n".join(render_ascii(run)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
