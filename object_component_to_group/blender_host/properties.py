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
Definition behavior stored on Blender collections.

A collection used as an ``instance_collection`` is a component definition.
Its behavior flags, and whether it is the definition of a group, live in
``Collection.component_behavior``.
"""

import bpy
import bpy.props
import bpy.types

from ..common.types import SNAP_TO_ITEMS, NO_SCALE_MASK_MAX

__all__ = ["ComponentBehavior"]

_SNAP_TO_DESCRIPTIONS = {
    "NONE": "Does not glue to faces",
    "ANY": "Glues to faces of any orientation",
    "HORIZONTAL": "Glues to horizontal faces",
    "VERTICAL": "Glues to vertical faces",
    "SLOPED": "Glues to sloped faces",
}


class ComponentBehavior(bpy.types.PropertyGroup):
    """Behavior flags of a component definition."""

    always_face_camera: bpy.props.BoolProperty(
        name="Always Face Camera",
        description="Instances rotate about their vertical axis to face the view",
        default=False,
    )
    cuts_opening: bpy.props.BoolProperty(
        name="Cut Opening",
        description="Instances cut an opening into the face they are glued to",
        default=False,
    )
    is2d: bpy.props.BoolProperty(
        name="2D",
        description="Instances are flat and only glue to faces",
        default=False,
    )
    no_scale_mask: bpy.props.IntProperty(
        name="No Scale Mask",
        description="Bitmask of scale handles hidden on instances",
        default=0,
        min=0,
        max=NO_SCALE_MASK_MAX,
    )
    shadows_face_sun: bpy.props.BoolProperty(
        name="Shadows Face Sun",
        description="Shadows are cast as if the instance faced the sun",
        default=False,
    )
    snapto: bpy.props.EnumProperty(
        name="Glue To",
        description="Which faces instances glue to",
        items=[(value, value.title(), _SNAP_TO_DESCRIPTIONS[value]) for value in SNAP_TO_ITEMS],
        default="NONE",
    )
    is_group: bpy.props.BoolProperty(
        name="Group Definition",
        description="The collection holds the unshared contents of groups",
        default=False,
    )


classes = (ComponentBehavior,)


def register():
    for cls in classes:
        bpy.utils.register_class(cls)
    bpy.types.Collection.component_behavior = bpy.props.PointerProperty(type=ComponentBehavior)


def unregister():
    del bpy.types.Collection.component_behavior
    for cls in reversed(classes):
        bpy.utils.unregister_class(cls)
