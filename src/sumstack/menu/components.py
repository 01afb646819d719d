"""Components used by the main menu ECS subsystem."""
from dataclasses import dataclass
from enum import Enum

from sumstack.components.game_state import GameMode


class MenuAction(Enum):
    """Actions that a menu button can trigger."""
    CLASSIC = GameMode.CLASSIC
    TIMED = GameMode.TIMED


@dataclass
class MenuButton:
    """Interactive button displayed in the main menu."""
    label: str
    subtitle: str
    action: MenuAction
    x: float
    y: float
    width: float = 360.0
    height: float = 84.0
    enabled: bool = True


@dataclass
class MenuBackground:
    """Background styling data for the menu screen."""
    color: tuple[int, int, int] = (254, 242, 242)


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
