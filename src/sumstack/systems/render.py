from typing import Dict, Tuple

from esper import World

from sumstack.components.animation_fade import FadeAnimation
from sumstack.components.game_state import GameMode, RoundPhase
from sumstack.constants import TILE_GAP, TIMER_WARNING_MS
from sumstack.events.bus import EVENT_BIG_CLEAR, EVENT_TICK, EventBus
from sumstack.systems.board_ops import board_dimensions
from sumstack.ui.layout import cell_origin, compute_board_geometry, overlay_buttons
from sumstack.utils.snapshot import RoundSnapshot, build_snapshot

Color = Tuple[int, int, int]

# (fill, text) per tile value
VALUE_COLORS: Dict[int, Tuple[Color, Color]] = {
    1: ((254, 226, 226), (185, 28, 28)),
    2: ((220, 252, 231), (21, 128, 61)),
    3: ((219, 234, 254), (29, 78, 216)),
    4: ((254, 243, 199), (180, 83, 9)),
    5: ((209, 250, 229), (4, 120, 87)),
    6: ((255, 228, 230), (190, 18, 60)),
    7: ((224, 242, 254), (3, 105, 161)),
    8: ((224, 231, 255), (67, 56, 202)),
    9: ((237, 233, 254), (109, 40, 217)),
}
DEFAULT_TILE_COLORS: Tuple[Color, Color] = ((255, 255, 255), (15, 23, 42))
BACKGROUND = (254, 242, 242)
INK = (15, 23, 42)
MUTED = (100, 116, 139)
ACCENT = (220, 38, 38)
TIMER_OK = (22, 163, 74)

BIG_CLEAR_FLASH_MS = 600


class RenderSystem:
    """Draws the round from snapshots; never mutates game state."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self._celebration_ms = 0
        self._celebration_count = 0
        self.event_bus.subscribe(EVENT_BIG_CLEAR, self.on_big_clear)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_big_clear(self, sender, **kwargs):
        self._celebration_count = kwargs.get('count', 0)
        self._celebration_ms = BIG_CLEAR_FLASH_MS

    def on_tick(self, sender, **kwargs):
        if self._celebration_ms > 0:
            self._celebration_ms = max(0, self._celebration_ms - kwargs.get('dt_ms', 0))

    @property
    def celebrating(self) -> bool:
        return self._celebration_ms > 0

    def process(self) -> None:
        snapshot = build_snapshot(self.world)
        if snapshot.phase == RoundPhase.IDLE:
            return
        # Local import keeps tests headless without creating a window.
        import arcade

        try:
            arcade.get_window()
        except Exception:
            return

        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, BACKGROUND)
        self._draw_header(arcade, snapshot)
        self._draw_board(arcade, snapshot)
        if snapshot.phase == RoundPhase.PAUSED:
            self._draw_overlay(arcade, snapshot, "Paused", None)
        elif snapshot.phase == RoundPhase.GAME_OVER:
            self._draw_overlay(
                arcade,
                snapshot,
                "Game over",
                f"Score {snapshot.score}   Best {snapshot.high_score}",
            )

    def _draw_header(self, arcade, snapshot: RoundSnapshot) -> None:
        top = self.window.height
        arcade.draw_text("TARGET", 24, top - 30, MUTED, 10, bold=True)
        arcade.draw_text(str(snapshot.target or ""), 24, top - 72, ACCENT, 34, bold=True)
        arcade.draw_text("SCORE", self.window.width / 2, top - 30, MUTED, 10, anchor_x="center", bold=True)
        arcade.draw_text(str(snapshot.score), self.window.width / 2, top - 66, INK, 26, anchor_x="center", bold=True)
        arcade.draw_text("BEST", self.window.width - 24, top - 30, MUTED, 10, anchor_x="right", bold=True)
        arcade.draw_text(str(snapshot.high_score), self.window.width - 24, top - 66, INK, 20, anchor_x="right")
        if snapshot.selection:
            arcade.draw_text(
                f"{snapshot.selection_total} / {snapshot.target}",
                self.window.width / 2,
                top - 92,
                MUTED,
                12,
                anchor_x="center",
            )
        if snapshot.mode == GameMode.TIMED:
            interval = self.world.config.time_interval_ms
            fraction = max(0.0, min(1.0, snapshot.time_remaining_ms / interval))
            bar_width = self.window.width - 48
            color = ACCENT if snapshot.time_remaining_ms < TIMER_WARNING_MS else TIMER_OK
            arcade.draw_lbwh_rectangle_filled(24, top - 112, bar_width, 8, (241, 245, 249))
            arcade.draw_lbwh_rectangle_filled(24, top - 112, bar_width * fraction, 8, color)

    def _draw_board(self, arcade, snapshot: RoundSnapshot) -> None:
        dims = board_dimensions(self.world)
        if dims is None:
            return
        rows, cols = dims
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        arcade.draw_lbwh_rectangle_filled(start_x, start_y, cols * tile_size, rows * tile_size, (255, 255, 255))
        # Danger band over the death row.
        arcade.draw_lbwh_rectangle_filled(start_x, start_y + (rows - 1) * tile_size, cols * tile_size, tile_size, (255, 228, 230))

        fade_alpha = {fade.tile_id: fade.alpha for _, fade in self.world.get_component(FadeAnimation)}
        selected = set(snapshot.selection)
        for row, row_cells in enumerate(snapshot.grid):
            for col, tile in enumerate(row_cells):
                if tile is None:
                    continue
                left, bottom, size = cell_origin(row, col, self.window.width, self.window.height, rows, cols)
                fill, text = VALUE_COLORS.get(tile.value, DEFAULT_TILE_COLORS)
                alpha = int(255 * fade_alpha.get(tile.id, 1.0))
                inner = size - TILE_GAP
                x = left + TILE_GAP / 2
                y = bottom + TILE_GAP / 2
                if tile.id in snapshot.clearing_ids:
                    fill = (255, 255, 255)
                arcade.draw_lbwh_rectangle_filled(x, y, inner, inner, (*fill, alpha))
                if tile.id in selected:
                    arcade.draw_lbwh_rectangle_outline(x, y, inner, inner, ACCENT, border_width=4)
                arcade.draw_text(
                    str(tile.value),
                    x + inner / 2,
                    y + inner / 2,
                    (*text, alpha),
                    int(inner * 0.45),
                    anchor_x="center",
                    anchor_y="center",
                    bold=True,
                )
        if self.celebrating:
            arcade.draw_text(
                f"{self._celebration_count} cleared!",
                self.window.width / 2,
                start_y + rows * tile_size / 2,
                ACCENT,
                32,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )

    def _draw_overlay(self, arcade, snapshot: RoundSnapshot, title: str, subtitle: str | None) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, (15, 23, 42, 200))
        cy = self.window.height / 2
        arcade.draw_text(title, self.window.width / 2, cy + 80, (255, 255, 255), 34, anchor_x="center", anchor_y="center", bold=True)
        if subtitle:
            arcade.draw_text(subtitle, self.window.width / 2, cy + 30, (226, 232, 240), 16, anchor_x="center", anchor_y="center")
        for button in overlay_buttons(snapshot.phase, self.window.width, self.window.height):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, ACCENT)
            arcade.draw_text(button.label, button.x, button.y, (255, 255, 255), 18, anchor_x="center", anchor_y="center", bold=True)
