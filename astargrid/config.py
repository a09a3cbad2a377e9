# astargrid/config.py
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from astargrid.core.types import Terrain

REPO_ROOT = Path(__file__).resolve().parents[1]
MAP_DIR = REPO_ROOT / "maps"
MAP_FILES = {
    "01_open":    MAP_DIR / "01_open.json",
    "02_walls":   MAP_DIR / "02_walls.json",
    "03_terrain": MAP_DIR / "03_terrain.json",
}
CUSTOM_MAP = MAP_DIR / "custom.json"
DEFAULT_MAP = "01_open"

# ---------- window / layout ----------
SCREEN_W = 800
SCREEN_H = 600
GRID_ROWS = 10
GRID_COLS = 10
CELL_SIZE = 50
PADDING = 2              # gap between cell rectangles
PANEL_W = 300            # right band: metrics + hints
FPS = 60
STEPS_PER_SEC = 8

# ---------- colors ----------
BG            = (245, 245, 245)
PANEL_BG      = ( 36,  40,  48)
TEXT_LIGHT    = (230, 235, 240)
ACCENT_GOLD   = (255, 210,   0)
START_BLUE    = ( 70, 130, 180)
GOAL_RED      = (220,  50,  47)
PATH_MINT     = (  0, 200, 160)
OPEN_CYAN_A   = (  0, 150, 255, 110)
CLOSED_MAG_A  = (255,   0, 120,  90)

TERRAIN_COLORS = {
    Terrain.NORMAL:   (130, 130, 130),
    Terrain.OBSTACLE: ( 20,  20,  20),
    Terrain.SAND:     (222, 196, 132),
    Terrain.ROCKY:    (120,  98,  82),
}


class SettingsError(ValueError):
    pass


def _grid_size(arg: str) -> int:
    flag, value = arg.split("=", 1)
    try:
        n = int(value)
    except ValueError:
        raise SettingsError(f"{flag} expects an integer, got {value!r}") from None
    if n < 1:
        raise SettingsError(f"{flag} must be at least 1, got {n}")
    return n


@dataclass
class Settings:
    map_key: str = DEFAULT_MAP
    log_level: str = "INFO"
    rows: Optional[int] = None      # set -> start from an empty rows x cols grid
    cols: Optional[int] = None

    @property
    def map_path(self) -> Path:
        if self.map_key in MAP_FILES:
            return MAP_FILES[self.map_key]
        return Path(self.map_key)


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    """ENV (ASTARGRID_MAP, ASTARGRID_LOG_LEVEL), then --map= / --log-level= / --rows= / --cols=."""
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    s = Settings(
        map_key=environ.get("ASTARGRID_MAP", DEFAULT_MAP),
        log_level=environ.get("ASTARGRID_LOG_LEVEL", "INFO").upper(),
    )
    for arg in argv:
        if arg.startswith("--map="):
            s.map_key = arg.split("=", 1)[1]
        elif arg.startswith("--log-level="):
            s.log_level = arg.split("=", 1)[1].upper()
        elif arg.startswith("--rows="):
            s.rows = _grid_size(arg)
        elif arg.startswith("--cols="):
            s.cols = _grid_size(arg)

    if (s.rows is None) != (s.cols is None):
        s.rows = s.rows or GRID_ROWS
        s.cols = s.cols or GRID_COLS
    return s
