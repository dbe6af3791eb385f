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
Blender integration: registers the behavior property group, the operator and
the object context-menu entry.
"""

import bpy.types
import bpy.utils

from . import properties
from .model import BlenderModel
from .operator import OBJECT_OT_component_to_group, menu_context

__all__ = [
    "BlenderModel",
    "OBJECT_OT_component_to_group",
    "register",
    "unregister",
]

classes = (OBJECT_OT_component_to_group,)


def register() -> None:
    properties.register()
    for cls in classes:
        bpy.utils.register_class(cls)

    bpy.types.VIEW3D_MT_object_context_menu.append(menu_context)


def unregister() -> None:
    bpy.types.VIEW3D_MT_object_context_menu.remove(menu_context)

    for cls in reversed(classes):
        bpy.utils.unregister_class(cls)
    properties.unregister()
