# astargrid/app/viewer.py
#!/usr/bin/env python3
"""
Terrain grid viewer — click to edit, watch A* / Dijkstra expand.

- Mouse:
    left click / drag -> paint with the active brush
- Keyboard:
    [S]/[G]          -> start / goal brush
    [0]/[1]/[2]/[3]  -> normal / obstacle / sand / rocky brush
    [D]/[A]          -> select algorithm (Dijkstra / A*)
    [SPACE]          -> run/pause
    [N]              -> single step
    [ENTER]          -> solve at once
    [R]              -> reset search
    [C]              -> clear grid
    [M]              -> next map
    [W]              -> write grid to maps/custom.json
    [+]/[-]          -> steps/sec
    [Q]/[ESC]        -> quit

Settings:
- ENV: ASTARGRID_MAP, ASTARGRID_LOG_LEVEL
- CLI: --map=<key|path> --log-level=<level> --rows=N --cols=N
"""

import sys
import time
from typing import List, Optional, Tuple

import pygame

from astargrid import config as C
from astargrid.app.session import EditorSession
from astargrid.core.maps import MapFormatError, load_map, save_map
from astargrid.core.types import Cell, Grid, Terrain
from astargrid.log import configure_logging, logger

FONT_NAME = None  # default pygame font

BRUSH_KEYS = {
    pygame.K_s: "start",
    pygame.K_g: "goal",
    pygame.K_0: Terrain.NORMAL,
    pygame.K_1: Terrain.OBSTACLE,
    pygame.K_2: Terrain.SAND,
    pygame.K_3: Terrain.ROCKY,
}


def brush_label(brush) -> str:
    return brush.title() if isinstance(brush, str) else brush.name.title()


def try_load_map(path) -> Optional[Grid]:
    """Load a map, logging instead of raising on a missing or malformed file."""
    try:
        return load_map(path)
    except (OSError, MapFormatError) as ex:
        logger.error("Failed to load map %s: %s", path, ex)
        return None


def try_save_map(grid: Grid, path) -> bool:
    try:
        save_map(grid, path)
    except OSError as ex:
        logger.error("Failed to save grid to %s: %s", path, ex)
        return False
    logger.info("Saved grid to %s", path)
    return True


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.active and self.togglable:
            bg = (58, 86, 160)
        elif self.hover:
            bg = (46, 50, 60)
        else:
            bg = (28, 32, 40)
        pygame.draw.rect(screen, bg, self.rect, border_radius=10)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, map_key: str = "custom"):
        pygame.init()

        self.session = EditorSession(grid)
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 26)

        self.screen = pygame.display.set_mode((C.SCREEN_W + C.PANEL_W, C.SCREEN_H))
        pygame.display.set_caption(f"A* terrain grid — {map_key}")

        self._buttons: List[UIButton] = []
        self._layout()

        self.running = False
        self.painting = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = C.STEPS_PER_SEC
        self.selected_map_key = map_key
        self._last_step_t = 0.0

    @property
    def grid(self) -> Grid:
        return self.session.grid

    # ---------- layout ----------
    def _layout(self):
        """Fit cell size to the grid area and center the grid in it."""
        rows, cols = self.grid.rows, self.grid.cols
        pad = C.PADDING
        by_w = (C.SCREEN_W - 2 * pad - (cols - 1) * pad) // cols
        by_h = (C.SCREEN_H - 2 * pad - (rows - 1) * pad) // rows
        self.cell_size = max(4, min(C.CELL_SIZE, by_w, by_h))

        total_w = cols * self.cell_size + (cols - 1) * pad
        total_h = rows * self.cell_size + (rows - 1) * pad
        self._grid_origin = ((C.SCREEN_W - total_w) // 2, (C.SCREEN_H - total_h) // 2)
        self._right_band = pygame.Rect(C.SCREEN_W, 0, C.PANEL_W, C.SCREEN_H)
        self._build_buttons()

    def cell_rect(self, cell: Cell) -> pygame.Rect:
        row, col = cell
        ox, oy = self._grid_origin
        step = self.cell_size + C.PADDING
        return pygame.Rect(ox + col * step, oy + row * step, self.cell_size, self.cell_size)

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        step = self.cell_size + C.PADDING
        col, dx = divmod(pos[0] - ox, step)
        row, dy = divmod(pos[1] - oy, step)
        if dx >= self.cell_size or dy >= self.cell_size:
            return None  # padding between cells
        cell = (row, col)
        return cell if self.grid.in_bounds(cell) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(C.FPS)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        if self.session.finished:
            return
        self.session.step()
        if self.session.finished:
            self.running = False
            self._refresh_active_states()

    def _solve(self):
        if not self.session.finished:
            self.session.solve()
        self.running = False
        self._refresh_active_states()

    def _quit(self):
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self.painting = True
                self._paint(e.pos)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self.painting = False
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if self.painting:
                    self._paint(e.pos)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key in BRUSH_KEYS:
            self.session.set_brush(BRUSH_KEYS[key])
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self._do_step()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._solve()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_c:
            self.session.clear()
            self._reset()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_m:
            self._next_map()
        elif key == pygame.K_w:
            try_save_map(self.grid, C.CUSTOM_MAP)
        elif key == pygame.K_d:
            self._switch_algo("Dijkstra")
        elif key == pygame.K_a:
            self._switch_algo("A*")

    def _paint(self, pos: Tuple[int, int]):
        cell = self.cell_at(pos)
        if cell is None:
            return
        if self.session.apply_brush(cell):
            self.running = False
            self._refresh_active_states()

    def _next_map(self):
        keys = list(C.MAP_FILES)
        i = keys.index(self.selected_map_key) + 1 if self.selected_map_key in keys else 0
        self._switch_map(keys[i % len(keys)])

    def _switch_map(self, key: str):
        grid = try_load_map(C.MAP_FILES[key])
        if grid is None:
            return
        self.session.load_grid(grid)
        self.selected_map_key = key
        pygame.display.set_caption(f"A* terrain grid — {key}")
        logger.info("Switched to map %s (%dx%d)", key, grid.rows, grid.cols)
        self.running = False
        self._layout()

    def _switch_algo(self, label: str):
        self.session.switch_algo(label)
        self.running = False
        self._refresh_active_states()

    def _reset(self):
        self.running = False
        self.session.reset()
        self._refresh_active_states()

    def _toggle_run(self):
        if self.session.finished:
            return
        self.running = not self.running
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(C.BG)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        s = self.session

        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = self.cell_rect((row, col))
                pygame.draw.rect(self.screen, C.TERRAIN_COLORS[self.grid.cells[row][col]], rect)

        # overlays: closed then open
        closed = pygame.Surface((cs, cs), pygame.SRCALPHA); closed.fill(C.CLOSED_MAG_A)
        opened = pygame.Surface((cs, cs), pygame.SRCALPHA); opened.fill(C.OPEN_CYAN_A)
        for c in s.closed_set:
            self.screen.blit(closed, self.cell_rect(c).topleft)
        for c in s.open_set:
            self.screen.blit(opened, self.cell_rect(c).topleft)

        if len(s.path) >= 2:
            pts = [self.cell_rect(c).center for c in s.path]
            pygame.draw.lines(self.screen, C.PATH_MINT, False, pts, max(3, cs // 8))

        self._draw_badge(self.grid.start, C.START_BLUE, "S")
        self._draw_badge(self.grid.goal, C.GOAL_RED, "G")

    def _draw_badge(self, cell: Cell, color: Tuple[int, int, int], letter: str):
        center = self.cell_rect(cell).center
        pygame.draw.circle(self.screen, color, center, max(4, self.cell_size // 2 - 4))
        txt = self.font_small.render(letter, True, (255, 255, 255))
        self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = rb.width - 32
        h = 30
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Solve", self._solve); y += h + gap
        add("Reset", self._reset); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        add("Algo: A*", lambda: self._switch_algo("A*"), togglable=True, store_as="btn_algo_a"); y += h + gap
        add("Algo: Dijkstra", lambda: self._switch_algo("Dijkstra"), togglable=True, store_as="btn_algo_d")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.session.selected_algo == "A*")
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.session.selected_algo == "Dijkstra")

    def _status(self) -> str:
        if self.session.finished:
            return self.session.state
        return "Running" if self.running else self.session.state

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        pygame.draw.rect(self.screen, C.PANEL_BG, rb)

        x0 = rb.x + 16
        y0 = rb.y + 14

        def line(text, big=False, color=C.TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 5

        m = self.session.last_metrics
        line("Metrics", big=True, color=C.ACCENT_GOLD)
        line(f"Status: {self._status()}")
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']:.3f}")
        line("-" * 26)
        line(f"Brush: {brush_label(self.session.brush)}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv=None):
    try:
        settings = C.resolve_settings(argv)
    except C.SettingsError as ex:
        configure_logging()
        logger.error("Bad settings: %s", ex)
        sys.exit(2)
    configure_logging(settings.log_level)

    if settings.rows is not None:
        grid = Grid.empty(settings.rows, settings.cols)
        key = "custom"
    else:
        key = settings.map_key
        grid = try_load_map(settings.map_path)
        if grid is None:
            sys.exit(1)
    Viewer(grid, map_key=key).run()


if __name__ == "__main__":
    main()
