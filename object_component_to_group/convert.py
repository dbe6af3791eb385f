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
Conversion of component instances into groups.

The functions here only use the host model's entity protocol (``definition``,
``parent.entities``, ``add_group()``, ``add_instance()``, ``explode()``,
``erase()``, ``layer``, ``material``, ``transformation``, ``behavior`` and the
attribute dictionary accessors), so the same code converts instances in the
in-memory :class:`~.document.Document` and in a Blender scene.
"""

from typing import Dict, List, Sequence

from .common.logging import debug
from .common.types import IDENTITY
from .constants import BEHAVIOR_FLAGS, CONTRIBUTORS_INFO_DICTIONARY

__all__ = [
    "convert_to_groups",
    "mimic",
    "mimic_definition",
    "copy_attributes",
    "selected_components",
]


def _group_by_definition(components: Sequence) -> Dict[object, list]:
    """Partition instances by definition, keeping first-occurrence order on both levels."""
    by_definition: Dict[object, list] = {}
    for instance in dict.fromkeys(components):
        by_definition.setdefault(instance.definition, []).append(instance)
    return by_definition


def convert_to_groups(components: Sequence) -> List:
    """
    Replace component instances with groups that look and behave the same.

    All instances of one definition become groups sharing one new group
    definition, which holds an exploded copy of the original geometry.  Each
    group is created in its instance's own parent container.

    :param components: Component instances, possibly of several definitions
        and in several containers.
    :return: The created groups, in the order of *components*.
    """
    created = {}

    for definition, instances in _group_by_definition(components).items():
        debug(f"Converting {len(instances)} instance(s) of {definition.name!r}")

        first_group = instances[0].parent.entities.add_group()
        first_group.entities.add_instance(definition, IDENTITY).explode()
        mimic(first_group, instances[0])
        mimic_definition(first_group.definition, definition)
        created[instances[0]] = first_group

        for instance in instances[1:]:
            group = instance.parent.entities.add_instance(first_group.definition, instance.transformation)
            mimic(group, instance)
            created[instance] = group

        # Erased before the next definition is exploded, so a definition
        # holding an already converted instance only copies its group.
        for instance in instances:
            instance.erase()

    return [created[instance] for instance in dict.fromkeys(components)]


def mimic(target, reference) -> None:
    """
    Copy instance properties from reference to target, making target mimic the reference.

    :param target: The group to modify.
    :param reference: Component instance or group to copy from.
    """
    target.layer = reference.layer
    target.material = reference.material
    target.transformation = reference.transformation
    # Glue is not copied, the host offers no way to set it.
    copy_attributes(target, reference)


def mimic_definition(target, reference) -> None:
    """
    Copy behavior flags and attributes from one definition to another.

    :param target: Definition to modify.
    :param reference: Definition to copy from.
    """
    for flag in BEHAVIOR_FLAGS:
        setattr(target.behavior, flag, getattr(reference.behavior, flag))
    copy_attributes(target, reference)


def copy_attributes(target, reference) -> None:
    """
    Copy all attribute dictionaries from one entity to another, recursing into nested dictionaries.

    Existing keys on the target are overwritten.
    """
    # attribute_dictionaries is None, not empty, when there are none.
    for dictionary in reference.attribute_dictionaries or []:
        if dictionary.name == CONTRIBUTORS_INFO_DICTIONARY:
            continue

        for key, value in dictionary.items():
            target.set_attribute(dictionary.name, key, value)
        copy_attributes(target.attribute_dictionary(dictionary.name, create=True), dictionary)


def selected_components(model) -> List:
    """Component instances in the model's selection, in selection order."""
    return [entity for entity in model.selection if entity.typename == "ComponentInstance"]
