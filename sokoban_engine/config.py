from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

# 5x5 room, one box one step left of its goal
DEFAULT_BOARD_STR = "5|5|01|01|01|01|01|01|00|04|04|01|01|04|02|03|01|01|04|04|04|01|01|01|01|01|01"


@dataclass(frozen=True)
class GameParameters:
    game_board_str: str = DEFAULT_BOARD_STR
    rng_seed: int = 0 # seed of the Zobrist basis
    compact_observation: bool = True # 4 channels instead of 7
    sprite_size: int = 16 # pixels per tile side in to_image()

    def with_overrides(self, **kw: Any) -> "GameParameters":
        return replace(self, **kw)


def params_from_dict(cfg: Optional[Dict[str, Any]]) -> GameParameters:
    """Builds parameters from a mapping; unknown keys are reported and ignored."""
    cfg = dict(cfg or {})
    if isinstance(cfg.get("game"), dict):
        cfg = dict(cfg["game"])
    known = {f.name for f in fields(GameParameters)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        print(f"Warning: ignoring unknown game parameters: {unknown}")
    kw = {k: v for k, v in cfg.items() if k in known}
    if "rng_seed" in kw:
        kw["rng_seed"] = int(kw["rng_seed"])
    if "sprite_size" in kw:
        kw["sprite_size"] = int(kw["sprite_size"])
    if "compact_observation" in kw:
        kw["compact_observation"] = bool(kw["compact_observation"])
    if "game_board_str" in kw:
        kw["game_board_str"] = str(kw["game_board_str"])
    return GameParameters(**kw)


def load_config(path: str) -> GameParameters:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    return params_from_dict(cfg)
