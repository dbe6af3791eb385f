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
Headless entry point.

Runs the Component to Group command against any host model without going
through a menu::

    from object_component_to_group.api import component_to_group
    from object_component_to_group.document import Document

    groups = component_to_group(document)
"""

from typing import List, Optional, Sequence

from .constants import COMMAND_NAME
from .convert import convert_to_groups, selected_components
from .transaction import operation

__all__ = ["component_to_group"]


def component_to_group(model, components: Optional[Sequence] = None) -> List:
    """
    Convert component instances to groups in one undoable operation.

    :param model: Host model (``Document`` or ``BlenderModel``).
    :param components: Instances to convert; defaults to the selected ones.
    :return: The created groups. Empty when there was nothing to convert,
        in which case the committed operation changed nothing.
    """
    with operation(model, COMMAND_NAME):
        if components is None:
            components = selected_components(model)
        return convert_to_groups(components)
