from __future__ import annotations

import argparse
from pathlib import Path

from runfolio.app_config import RunConfig
from runfolio.common.diagnostics import configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="runfolio", description="Endless-runner portfolio showcase")
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run briefly offscreen and exit (for quick verification).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for obstacle placement and spawn rolls.",
    )
    parser.add_argument(
        "--assets",
        default=None,
        help="Folder with the character model, road texture and sky image (default: <repo>/assets).",
    )
    parser.add_argument(
        "--tuning",
        default=None,
        help="JSON tuning file (default: ~/.runfolio/tuning.json if present).",
    )
    parser.add_argument(
        "--checkpoints",
        default=None,
        help="JSON file replacing the built-in portfolio panels.",
    )
    parser.add_argument(
        "--no-placeholder",
        action="store_true",
        help="Do not substitute a box when the character model fails to load.",
    )
    parser.add_argument(
        "--diagnostics-log",
        default=None,
        help="Also append diagnostics (asset failures, callback errors) to this file.",
    )
    parser.add_argument(
        "--simulate",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Run the game loop headless for SECONDS of simulated time, print a summary and exit.",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=60.0,
        help="Frame rate assumed by --simulate (default: 60).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)

    if args.simulate is not None:
        if args.simulate < 0:
            parser.error("--simulate must be >= 0")
        from runfolio.game.checkpoints import load_checkpoints
        from runfolio.headless import random_steer, simulate
        from runfolio.settings import load_tuning

        summary = simulate(
            tuning=load_tuning(Path(args.tuning) if args.tuning else None),
            seconds=float(args.simulate),
            fps=float(args.fps),
            seed=args.seed,
            checkpoints=load_checkpoints(Path(args.checkpoints) if args.checkpoints else None),
            steer=random_steer,
        )
        for line in summary.lines():
            print(line)
        return

    from runfolio.app import run

    run(
        cfg=RunConfig(
            smoke=args.smoke,
            seed=args.seed,
            assets_dir=args.assets,
            tuning_path=args.tuning,
            checkpoints_path=args.checkpoints,
            placeholder_character=not args.no_placeholder,
            diagnostics_path=args.diagnostics_log,
        )
    )


if __name__ == "__main__":
    main()
