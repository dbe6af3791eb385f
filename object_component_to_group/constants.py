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
This module defines the fixed names used by the Component to Group add-on.
"""

from typing import Tuple

# IDE and Documentation support.
__all__ = [
    "EXTENSION_NAME",
    "EXTENSION_DESCRIPTION",
    "EXTENSION_VERSION",
    "EXTENSION_CREATOR",
    "EXTENSION_COPYRIGHT",
    "COMMAND_NAME",
    "OPERATOR_IDNAME",
    "CONTRIBUTORS_INFO_DICTIONARY",
    "BEHAVIOR_FLAGS",
    "DEFAULT_LAYER_NAME",
    "UNDO_LIMIT",
]

# Extension descriptor.
EXTENSION_NAME: str = "Eneroth Component to Group"
EXTENSION_DESCRIPTION: str = "Convert components to groups."
EXTENSION_VERSION: Tuple[int, int, int] = (1, 0, 0)
EXTENSION_CREATOR: str = "Julia Christina Eneroth"
EXTENSION_COPYRIGHT: str = f"2020 {EXTENSION_CREATOR}"

# Name of the command, used for the menu item and the undo step.
COMMAND_NAME: str = "Component to Group"
OPERATOR_IDNAME: str = "object.component_to_group"

# Private host dictionary holding contributor info. Never copied onto groups.
CONTRIBUTORS_INFO_DICTIONARY: str = "GSU_ContributorsInfo"

# Definition behavior flags mirrored from the source definition, in copy order.
BEHAVIOR_FLAGS: Tuple[str, ...] = (
    "always_face_camera",
    "cuts_opening",
    "is2d",
    "no_scale_mask",
    "shadows_face_sun",
    "snapto",
)

# Layer every new entity is placed on.
DEFAULT_LAYER_NAME: str = "Layer0"

# Committed operations a document keeps for undo. Each one holds a full snapshot.
UNDO_LIMIT: int = 100
