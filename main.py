from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from config_io import load_json_config
from models import MapConfigError
from utils import deep_merge


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Show a generated path map (SPACE for a new one).")
    p.add_argument("config", nargs="?", default="config.json", help="Config file (default: config.json)")
    p.add_argument("--seed", type=int, default=None, help="Override map.seed for reproducible maps.")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint for running the map viewer from the command line."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg = load_json_config(Path(args.config))
    if args.seed is not None:
        cfg = deep_merge(cfg, {"map": {"seed": args.seed}})

    from viewer import MapViewer  # local import keeps module load side effects minimal

    try:
        viewer = MapViewer(cfg)
    except MapConfigError as e:
        raise SystemExit(f"Invalid map config: {e}")
    viewer.run()


if __name__ == "__main__":
    main()
