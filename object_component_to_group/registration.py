# Blender add-on to convert components to groups.
# Copyright (C) 2020 Julia Christina Eneroth
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Host integration state: the one-time load guard and the context-menu hook.

Both are independent of Blender.  ``__init__.register()`` hands its installer
to :meth:`Registration.register`, and the Blender menu draw function hands its
layout (wrapped to the small menu protocol below) to
:func:`populate_context_menu`.
"""

from typing import Callable

from .common.logging import debug
from .constants import COMMAND_NAME
from .convert import selected_components

__all__ = ["Registration", "populate_context_menu"]


class Registration:
    """Tracks whether the add-on has been loaded into the host.

    The host may load an add-on module more than once (script reloads,
    enabling from preferences after a startup load).  The command and menu
    entry must only be installed the first time.
    """

    def __init__(self, name: str = COMMAND_NAME):
        self.name = name
        self.loaded = False

    def register(self, install: Callable[[], None]) -> bool:
        """Run *install* unless already loaded. Returns whether it ran."""
        if self.loaded:
            debug(f"{self.name} already loaded, skipping registration")
            return False
        install()
        self.loaded = True
        debug(f"{self.name} registered")
        return True

    def unregister(self, uninstall: Callable[[], None]) -> bool:
        """Run *uninstall* if loaded. Returns whether it ran."""
        if not self.loaded:
            return False
        uninstall()
        self.loaded = False
        debug(f"{self.name} unregistered")
        return True


def populate_context_menu(menu, model, command) -> bool:
    """
    Add the command to a context menu when the selection holds components.

    :param menu: Object with ``add_separator()`` and ``add_item(command)``.
    :param model: Host model whose selection decides visibility.
    :param command: Whatever the menu's ``add_item`` accepts for the command.
    :return: Whether the item was added.
    """
    if not selected_components(model):
        return False

    menu.add_separator()
    menu.add_item(command)
    return True
