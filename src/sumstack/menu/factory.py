"""Factory helpers for creating the main menu entities."""
from esper import World

from sumstack.menu.components import MenuAction, MenuBackground, MenuButton, MenuTag


def spawn_main_menu(world: World, width: int, height: int) -> None:
    """Create the menu background and one button per game mode."""
    clear_main_menu(world)
    center_x = width / 2
    center_y = height / 2

    world.create_entity(MenuBackground(), MenuTag())

    button_specs = (
        ("Classic", "A new row after every clear", MenuAction.CLASSIC, center_y + 50.0),
        ("Timed", "A new row every 8 seconds", MenuAction.TIMED, center_y - 60.0),
    )
    for label, subtitle, action, y_position in button_specs:
        world.create_entity(
            MenuButton(label=label, subtitle=subtitle, action=action, x=center_x, y=y_position),
            MenuTag(),
        )


def clear_main_menu(world: World) -> None:
    """Remove all entities that are part of the menu UI."""
    to_delete: set[int] = set()
    for component_type in (MenuButton, MenuBackground, MenuTag):
        for ent, _ in world.get_component(component_type):
            to_delete.add(ent)
    for ent in to_delete:
        world.delete_entity(ent, immediate=True)
