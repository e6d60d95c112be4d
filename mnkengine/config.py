# mnkengine/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
import logging
import os
import tomllib  # python >=3.11

from mnkengine.core.search import UNBOUNDED

logger = logging.getLogger(__name__)

# board size -> (required run, search depth)
DEFAULT_PRESETS = {
    3: (3, UNBOUNDED),
    4: (4, 5),
}

@dataclass
class SearchConfig:
    presets: Dict[int, Tuple[int, int]] = field(default_factory=lambda: dict(DEFAULT_PRESETS))
    default_run: int = 5  # boards of 5x5 and up
    default_depth: int = 2
    depth_override: Optional[int] = None  # applies to every size when set

    def preset_for(self, size: int) -> Tuple[int, int]:
        if size in self.presets:
            run, depth = self.presets[size]
        elif size < self.default_run:
            run, depth = size, UNBOUNDED
        else:
            run, depth = self.default_run, self.default_depth
        if self.depth_override is not None:
            depth = self.depth_override
        return run, depth

@dataclass
class UIConfig:
    window_title: str = "Tic Tac Toe"
    default_size: int = 3
    x_color: str = "red"
    o_color: str = "blue"
    cell_font: str = "Verdana"
    cell_font_size: int = 20
    min_cell_px: int = 32
    min_window_px: int = 500

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        if "search" in raw:
            for k, v in raw["search"].items():
                if k == "presets":
                    # TOML table keys are strings
                    v = {**cfg.search.presets, **{int(size): (int(run), int(depth)) for size, (run, depth) in v.items()}}
                if hasattr(cfg.search, k):
                    setattr(cfg.search, k, v)
        if "ui" in raw:
            for k, v in raw["ui"].items():
                if hasattr(cfg.ui, k):
                    setattr(cfg.ui, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

def setup_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("MNK_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("MNK_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth_override = int(override_depth)
    except ValueError:
        logger.warning("Ignoring MNK_SEARCH_DEPTH=%r, not an integer", override_depth)
