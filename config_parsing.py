from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

from models import MapConfig, MapConfigError, RenderConfig
from utils import apply_color_mode, as_color, clamp_int

T = TypeVar("T")

# (canonical key, camelCase alias) pairs accepted under "map"
_MAP_KEYS = {
    "rounds": ("rounds", "numRounds"),
    "roads": ("roads", "numRoads"),
    "x_min": ("x_min", "xMin"),
    "x_max": ("x_max", "xMax"),
    "y_high": ("y_high", "yHigh"),
    "y_mid": ("y_mid", "yMid"),
    "y_low": ("y_low", "yLow"),
    "additional_connector_probability": (
        "additional_connector_probability",
        "additionalConnectorProbability",
    ),
}


def _lookup(raw: Dict[str, Any], keys: Sequence[str], default: Any) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return default


def _coerce(name: str, value: Any, kind: Callable[[Any], T]) -> T:
    """Convert a config value or raise MapConfigError naming the field."""
    if isinstance(value, bool) or value is None:
        raise MapConfigError(f"map.{name} must be a number (got {value!r})")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise MapConfigError(f"map.{name} must be a number (got {value!r})") from None


def _parse_seed(raw: Any) -> Optional[int]:
    """Parse an optional RNG seed (null means OS entropy)."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise MapConfigError(f"map.seed must be an integer or null (got {raw!r})")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise MapConfigError(f"map.seed must be an integer or null (got {raw!r})") from None


def parse_map_config(raw: Any) -> MapConfig:
    """Parse map generation settings from config data.

    Args:
        raw: Dict found under the "map" key of the config.

    Returns:
        A validated MapConfig with defaults applied.

    Raises:
        MapConfigError: If a value is not numeric or out of range.
    """
    if not isinstance(raw, dict):
        raw = {}
    defaults = MapConfig()

    def num(name: str, kind: Callable[[Any], T]) -> T:
        value = _lookup(raw, _MAP_KEYS[name], getattr(defaults, name))
        return _coerce(name, value, kind)

    cfg = MapConfig(
        rounds=num("rounds", int),
        roads=num("roads", int),
        x_min=num("x_min", float),
        x_max=num("x_max", float),
        y_high=num("y_high", float),
        y_mid=num("y_mid", float),
        y_low=num("y_low", float),
        additional_connector_probability=num("additional_connector_probability", float),
        seed=_parse_seed(raw.get("seed")),
    )
    cfg.validate()
    return cfg


def parse_render_mode(raw: Any) -> str:
    """Parse render mode into 'flat' or 'gradient' (defaults to flat)."""
    if isinstance(raw, str):
        val = raw.strip().lower()
        if val in ("flat", "gradient"):
            return val
    return "flat"


def parse_color_mode(raw: Any) -> str:
    """Parse color mode into 'multicolor' or 'gray' (defaults to multicolor)."""
    if isinstance(raw, str):
        val = raw.strip().lower()
        if val in ("multicolor", "gray"):
            return val
    return "multicolor"


def parse_render_config(raw: Any, color_mode: Optional[str] = None) -> RenderConfig:
    """Parse render settings from config data.

    Args:
        raw: Dict found under the "render" key of the config.
        color_mode: Overrides render.color when given (used by the C toggle).

    Returns:
        RenderConfig with defaults applied and colors adjusted for the mode.
    """
    if not isinstance(raw, dict):
        raw = {}
    mode = color_mode if color_mode is not None else parse_color_mode(raw.get("color"))

    def color(key: str, default: Any) -> Any:
        return apply_color_mode(as_color(raw.get(key, default), default), mode)

    return RenderConfig(
        mode=parse_render_mode(raw.get("mode")),
        color_mode=mode,
        node_color=color("node_color", (235, 240, 255)),
        start_color=color("start_color", (120, 220, 140)),
        end_color=color("end_color", (235, 110, 110)),
        connector_color=color("connector_color", (126, 126, 150)),
        label_color=color("label_color", (255, 255, 255)),
        node_radius=clamp_int(int(raw.get("node_radius", 10)), 2, 64),
        connector_width=clamp_int(int(raw.get("connector_width", 3)), 1, 16),
        margin=clamp_int(int(raw.get("margin", 60)), 0, 400),
        show_labels=bool(raw.get("show_labels", False)),
    )
