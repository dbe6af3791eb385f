# Blender add-on to convert components to groups.
# Copyright (C) 2020 Julia Christina Eneroth
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

# <pep8 compliant>

"""
The Component to Group operator and its context-menu entry.
"""

from typing import Set

import bpy
import bpy.types

from ..api import component_to_group
from ..common.logging import safe_report
from ..constants import COMMAND_NAME, EXTENSION_DESCRIPTION, OPERATOR_IDNAME
from ..convert import selected_components
from ..registration import populate_context_menu
from .model import BlenderModel

__all__ = ["OBJECT_OT_component_to_group", "menu_context"]


class OBJECT_OT_component_to_group(bpy.types.Operator):
    """Convert the selected component instances to groups."""

    bl_idname = OPERATOR_IDNAME
    bl_label = COMMAND_NAME
    bl_description = EXTENSION_DESCRIPTION
    bl_options = {"REGISTER", "UNDO"}

    @classmethod
    def poll(cls, context: bpy.types.Context) -> bool:
        return bool(selected_components(BlenderModel(context)))

    def execute(self, context: bpy.types.Context) -> Set[str]:
        model = BlenderModel(context)
        try:
            groups = component_to_group(model)
        except (RuntimeError, TypeError, ValueError) as e:
            safe_report(self, {"ERROR"}, f"{COMMAND_NAME} failed: {e}")
            return {"CANCELLED"}

        view_layer_objects = context.view_layer.objects
        for group in groups:
            if group.obj.name in view_layer_objects:
                group.obj.select_set(True)

        safe_report(self, {"INFO"}, f"Converted {len(groups)} component(s) to groups")
        return {"FINISHED"}


class _LayoutMenu:
    """Menu protocol of :func:`populate_context_menu` over a Blender UI layout."""

    def __init__(self, layout: bpy.types.UILayout):
        self.layout = layout

    def add_separator(self) -> None:
        self.layout.separator()

    def add_item(self, idname: str) -> None:
        self.layout.operator(idname, text=COMMAND_NAME)


def menu_context(self, context) -> None:
    """
    Adds the operator to the object context menu while components are selected.
    """
    populate_context_menu(_LayoutMenu(self.layout), BlenderModel(context), OBJECT_OT_component_to_group.bl_idname)
