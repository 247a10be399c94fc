"""Entry point for `python -m lanefall` or the `lanefall` console script."""

import argparse
import logging
import sys
from pathlib import Path

from lanefall.app import App
from lanefall.beatmap import load_beatmap
from lanefall.config import DEFAULT_SETTINGS_PATH, load_config
from lanefall.models import ConfigurationError


def main() -> None:
    parser = argparse.ArgumentParser(description="LaneFall — four-lane rhythm game")
    parser.add_argument("--beatmaps-dir", default="", help="Directory containing .json/.mid beatmaps")
    parser.add_argument("--beatmap", default="", help="Play this beatmap file straight away")
    parser.add_argument("--config", type=Path, default=DEFAULT_SETTINGS_PATH, help="JSON settings file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        config.validate()
        beatmap = load_beatmap(args.beatmap, config.lane_count) if args.beatmap else None
        app = App(config=config, beatmaps_dir=args.beatmaps_dir, beatmap=beatmap)
    except ConfigurationError as exc:
        sys.exit(f"lanefall: {exc}")

    app.run()


if __name__ == "__main__":
    main()
