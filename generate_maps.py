#!/usr/bin/env python3
"""
generate_maps.py

Generates branching path maps and writes them as JSON.

Per generated map k:
- Writes:   maps/map{k}.json

Numbering continues after the highest existing map{k}.json. Every map is
checked with MapValidator before it is written; the JSON holds the settings
used and the nodes (round, road, position, next) plus a flat connector list
of [[round, road], [round, road]] pairs.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import re
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from config_io import load_json_config
from config_parsing import parse_map_config
from map_generator import MapGenerator
from map_validator import MapValidator
from models import MapConfig, MapConfigError, PathMap

MAP_FILE_RE = re.compile(r"^map(\d+)\.json$", re.IGNORECASE)

logger = logging.getLogger(__name__)


# ----------------------------
# Index
# ----------------------------


class MapIndexScanner:
    def __init__(self, maps_root: Path) -> None:
        self.maps_root = maps_root

    def last_map_index(self) -> int:
        if not self.maps_root.exists():
            return 0
        indices: List[int] = []
        for child in self.maps_root.iterdir():
            if not child.is_file():
                continue
            m = MAP_FILE_RE.match(child.name)
            if not m:
                continue
            indices.append(int(m.group(1)))
        return max(indices) if indices else 0


# ----------------------------
# Writer
# ----------------------------


class MapWriter:
    def __init__(self, maps_root: Path) -> None:
        self.maps_root = maps_root

    def path_for(self, idx: int) -> Path:
        return self.maps_root / f"map{idx}.json"

    def write(self, idx: int, cfg: MapConfig, path_map: PathMap) -> Path:
        path = self.path_for(idx)
        if path.exists():
            raise FileExistsError(f"Refusing to overwrite {path}")
        payload: Dict[str, Any] = {"config": asdict(cfg), "map": path_map.to_dict()}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path


# ----------------------------
# Generator orchestration
# ----------------------------


class MapBatchGenerator:
    def __init__(self, maps_root: Path, cfg: MapConfig, rng: random.Random) -> None:
        self.maps_root = maps_root
        self.cfg = cfg

        self.scanner = MapIndexScanner(maps_root)
        self.generator = MapGenerator(cfg, rng)
        self.validator = MapValidator(rounds=cfg.rounds, roads=cfg.roads)
        self.writer = MapWriter(maps_root)

    def generate(self, count: int) -> List[Path]:
        self.maps_root.mkdir(parents=True, exist_ok=True)

        last_idx = self.scanner.last_map_index()
        written: List[Path] = []
        for i in range(count):
            idx = last_idx + 1 + i
            path_map = self.generator.generate()

            problems = self.validator.problems(path_map)
            if problems:
                raise RuntimeError(f"map{idx} failed validation: " + "; ".join(problems))

            path = self.writer.write(idx, self.cfg, path_map)
            written.append(path)
            connectors = path_map.connectors()
            lateral = sum(1 for c in connectors if c.is_lateral)
            logger.info("wrote %s", path)
            print(
                f"Generated map{idx}: {path_map.rounds}x{path_map.roads} | connectors={len(connectors)} (lateral={lateral})"
            )
        return written


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate branching path maps as JSON.")
    p.add_argument("count", type=int, help="How many new maps to generate.")
    p.add_argument(
        "--out-dir",
        type=str,
        default="maps",
        help="Output folder (default: maps)",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional JSON config; its 'map' section sets the generation settings.",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation (overrides map.seed).",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if args.count <= 0:
        raise SystemExit("count must be > 0")

    raw: Dict[str, Any] = {}
    if args.config:
        raw = load_json_config(Path(args.config)).get("map", {})
    try:
        cfg = parse_map_config(raw)
    except MapConfigError as e:
        raise SystemExit(f"Invalid map config: {e}")

    if args.seed is not None:
        cfg = replace(cfg, seed=args.seed)
    rng = random.Random(cfg.seed)
    MapBatchGenerator(Path(args.out_dir), cfg, rng).generate(args.count)


if __name__ == "__main__":
    main()
