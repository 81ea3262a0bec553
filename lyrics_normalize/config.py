from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_ENV_PREFIX = "LYRICS_NORMALIZE_"


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lyrics-normalize"
    return Path.home() / ".config" / "lyrics-normalize"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class PipelineConfig:
    # LQE track merge
    exact_merge_tolerance_ms: int = 100
    nearest_merge_tolerance_ms: int = 2000

    # Fallback durations for degenerate timing
    word_fallback_ms: int = 500
    line_fallback_ms: int = 1000

    # Serializer placeholders
    empty_line_text: str = "[no lyrics]"
    empty_word_text: str = "[empty]"


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if isinstance(default, int):
        value = int(raw)
        if value < 0:
            raise ValueError(f"{name} must be >= 0")
        return value
    return str(raw)


def _load_file_overrides(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return {}
    return data


def load_config() -> PipelineConfig:
    # Priority: LYRICS_NORMALIZE_* env → config.json → defaults
    defaults = PipelineConfig()
    file_values = _load_file_overrides(_config_file())
    values: dict[str, Any] = {}

    for f in fields(PipelineConfig):
        default = getattr(defaults, f.name)
        raw = os.getenv(_ENV_PREFIX + f.name.upper())
        source = "env"
        if raw is None and f.name in file_values:
            raw = file_values[f.name]
            source = "config.json"
        if raw is None:
            continue
        try:
            values[f.name] = _coerce(f.name, raw, default)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring %s value for %s: %s", source, f.name, e)

    return PipelineConfig(**values)


def save_config(cfg: PipelineConfig) -> Path:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = {f.name: getattr(cfg, f.name) for f in fields(cfg)}
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
