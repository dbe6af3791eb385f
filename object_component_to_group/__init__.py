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
Convert selected component instances into groups.

Adds "Component to Group" to the 3D viewport's object context menu.  The menu
item only shows while the selection holds at least one component instance.
"""

from .constants import (
    EXTENSION_NAME,
    EXTENSION_DESCRIPTION,
    EXTENSION_VERSION,
    EXTENSION_CREATOR,
    EXTENSION_COPYRIGHT,
)
from .registration import Registration

# IDE and Documentation support.
__all__ = [
    "bl_info",
    "register",
    "unregister",
]

bl_info = {
    "name": EXTENSION_NAME,
    "description": EXTENSION_DESCRIPTION,
    "author": EXTENSION_CREATOR,
    "copyright": EXTENSION_COPYRIGHT,
    "version": EXTENSION_VERSION,
    "blender": (4, 2, 0),
    "location": "3D Viewport > Object Context Menu",
    "category": "Object",
}

_registration = Registration()


def register() -> None:
    # Imported here so the document model and conversion load without bpy.
    from . import blender_host

    _registration.register(blender_host.register)


def unregister() -> None:
    from . import blender_host

    _registration.unregister(blender_host.unregister)


# Allow the add-on to be ran directly without installation.
if __name__ == "__main__":
    register()
