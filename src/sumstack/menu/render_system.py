"""Rendering system responsible for drawing the main menu."""
import arcade
from esper import World

from sumstack.components.game_state import RoundPhase
from sumstack.constants import WINDOW_TITLE
from sumstack.menu.components import MenuBackground, MenuButton
from sumstack.utils.game_state import get_round_state


class MenuRenderSystem:
    """Renders menu entities while no round is running."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> None:
        state = get_round_state(self.world)
        if state.phase != RoundPhase.IDLE:
            return

        for _, background in self.world.get_component(MenuBackground):
            arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, background.color)

        arcade.draw_text(
            WINDOW_TITLE,
            self.window.width / 2,
            self.window.height * 0.78,
            (15, 23, 42),
            48,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        arcade.draw_text(
            "Add numbers up to the target. Keep the stack off the top.",
            self.window.width / 2,
            self.window.height * 0.78 - 50,
            (100, 116, 139),
            12,
            anchor_x="center",
            anchor_y="center",
        )

        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, arcade.color.WHITE)
            arcade.draw_lbwh_rectangle_outline(left, bottom, button.width, button.height, (220, 38, 38), border_width=2)
            arcade.draw_text(button.label, left + 20, button.y + 10, (15, 23, 42), 22, anchor_y="center", bold=True)
            arcade.draw_text(button.subtitle, left + 20, button.y - 18, (100, 116, 139), 12, anchor_y="center")

        arcade.draw_text(
            f"BEST  {state.high_score}",
            self.window.width / 2,
            self.window.height * 0.18,
            (15, 23, 42),
            18,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
