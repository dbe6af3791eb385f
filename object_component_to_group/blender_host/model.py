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
Blender side of the host model protocol used by :mod:`..convert`.

How host concepts map onto Blender data:

- A component definition is a collection used as an ``instance_collection``;
  its behavior lives in ``collection.component_behavior``.
- A component instance is an empty instancing such a collection.  It is a
  group when the collection's ``component_behavior.is_group`` is set.
- The parent container is the instance's first collection, together with its
  parent object.  The layer is the set of collections it is linked to.  The
  material is its object color.  The transformation is ``matrix_world``.
- Attribute dictionaries are custom properties holding ID property groups.
  Groups inside them are nested dictionaries.

Nothing is removed while an operation is running: erased objects are removed
on commit.  Every ID created during the operation is tracked so that an abort
can remove them again, leaving the scene as it was.
"""

from typing import List, Optional

import bpy
import bpy.types
import idprop.types
import mathutils

from ..common.logging import debug
from ..common.types import Transformation, IDENTITY

__all__ = [
    "BlenderModel",
    "BlenderEntities",
    "BlenderDefinition",
    "BlenderElement",
    "BlenderInstance",
    "BlenderAttributeDictionary",
    "is_component_object",
    "to_matrix",
]


def to_matrix(transformation) -> mathutils.Matrix:
    """Convert a :class:`Transformation` (or any 4x4 sequence) to a ``mathutils.Matrix``."""
    if isinstance(transformation, Transformation):
        return mathutils.Matrix(transformation.rows)
    return mathutils.Matrix(transformation)


def is_component_object(obj: bpy.types.Object) -> bool:
    """Whether *obj* places a collection, i.e. is a component instance or a group."""
    return obj.type == "EMPTY" and obj.instance_type == "COLLECTION" and obj.instance_collection is not None


def _plain(value):
    if isinstance(value, idprop.types.IDPropertyArray):
        return value.to_list()
    if isinstance(value, idprop.types.IDPropertyGroup):
        return value.to_dict()
    return value


# ---------------------------------------------------------------------------
# Attribute dictionaries
# ---------------------------------------------------------------------------

class BlenderAttributeStore:
    """Attribute dictionary accessors over an ID, or over an ID property group."""

    def _container(self):
        raise NotImplementedError

    def _reserved_names(self) -> frozenset:
        return frozenset()

    def _group(self, name: str):
        container = self._container()
        if name in container.keys() and isinstance(container[name], idprop.types.IDPropertyGroup):
            return container[name]
        return None

    @property
    def attribute_dictionaries(self) -> Optional[List["BlenderAttributeDictionary"]]:
        """All attached dictionaries, or None when there are none."""
        reserved = self._reserved_names()
        dictionaries = [
            BlenderAttributeDictionary(self._group(key), key)
            for key in self._container().keys()
            if key not in reserved and self._group(key) is not None
        ]
        return dictionaries or None

    def attribute_dictionary(self, name: str, create: bool = False) -> Optional["BlenderAttributeDictionary"]:
        group = self._group(name)
        if group is None:
            if not create:
                return None
            self._container()[name] = {}
            group = self._container()[name]
        return BlenderAttributeDictionary(group, name)

    def set_attribute(self, dictionary_name: str, key: str, value) -> None:
        self.attribute_dictionary(dictionary_name, create=True)[key] = value

    def get_attribute(self, dictionary_name: str, key: str, default=None):
        dictionary = self.attribute_dictionary(dictionary_name)
        if dictionary is None:
            return default
        return dictionary.get(key, default)


class BlenderAttributeDictionary(BlenderAttributeStore):
    """One ID property group seen as a named dictionary."""

    def __init__(self, group: idprop.types.IDPropertyGroup, name: str):
        self.group = group
        self.name = name

    def _container(self):
        return self.group

    def __getitem__(self, key: str):
        return _plain(self.group[key])

    def __setitem__(self, key: str, value) -> None:
        self.group[key] = value

    def get(self, key: str, default=None):
        if key not in self.group.keys():
            return default
        return self[key]

    def keys(self) -> List[str]:
        return [key for key, _ in self.items()]

    def items(self) -> list:
        """Plain key/value pairs; nested groups are dictionaries, not values."""
        return [
            (key, _plain(value)) for key, value in self.group.items()
            if not isinstance(value, idprop.types.IDPropertyGroup)
        ]

    def to_dict(self) -> dict:
        return self.group.to_dict()


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

class BlenderElement(BlenderAttributeStore):
    """Any Blender object placed in the scene."""

    def __init__(self, model: "BlenderModel", obj: bpy.types.Object):
        self.model = model
        self.obj = obj

    @property
    def typename(self) -> str:
        return self.obj.type.title()

    @property
    def name(self) -> str:
        return self.obj.name

    def _container(self):
        return self.obj

    def _reserved_names(self) -> frozenset:
        return frozenset(self.obj.bl_rna.properties.keys())

    def erase(self) -> None:
        self.model._erase(self.obj)

    def __eq__(self, other) -> bool:
        return isinstance(other, BlenderElement) and self.obj == other.obj

    def __hash__(self) -> int:
        return hash(self.obj)

    def __repr__(self) -> str:
        return f"<{self.typename} {self.obj.name!r}>"


class BlenderInstance(BlenderElement):
    """An empty instancing a definition collection."""

    @property
    def typename(self) -> str:
        return "Group" if self.definition.group else "ComponentInstance"

    @property
    def definition(self) -> "BlenderDefinition":
        return BlenderDefinition(self.model, self.obj.instance_collection)

    @property
    def entities(self) -> "BlenderEntities":
        return self.definition.entities

    @property
    def parent(self) -> "BlenderContainer":
        return BlenderContainer(self.model, self.obj.users_collection[0], self.obj.parent)

    @property
    def layer(self) -> tuple:
        return tuple(self.obj.users_collection)

    @layer.setter
    def layer(self, collections) -> None:
        for collection in collections:
            if self.obj.name not in collection.objects:
                collection.objects.link(self.obj)
        for collection in list(self.obj.users_collection):
            if collection not in collections:
                collection.objects.unlink(self.obj)

    @property
    def material(self) -> tuple:
        return tuple(self.obj.color)

    @material.setter
    def material(self, color) -> None:
        self.obj.color = color

    @property
    def transformation(self) -> mathutils.Matrix:
        return self.obj.matrix_world.copy()

    @transformation.setter
    def transformation(self, transformation) -> None:
        self.obj.matrix_world = to_matrix(transformation)

    def explode(self) -> List[BlenderElement]:
        """Replace this empty by copies of the instanced objects, with their data copied too."""
        source = self.obj.instance_collection
        target = self.obj.users_collection[0]
        placement = self.obj.matrix_world @ mathutils.Matrix.Translation(-source.instance_offset)

        copies = {}
        for original in source.all_objects:
            # Erased earlier in this operation, only removed on commit.
            if original in self.model._pending_erase:
                continue
            duplicate = original.copy()
            if original.data is not None:
                duplicate.data = original.data.copy()
                self.model._track(duplicate.data)
            target.objects.link(duplicate)
            self.model._track(duplicate)
            copies[original] = duplicate

        for original, duplicate in copies.items():
            if original.parent in copies:
                duplicate.parent = copies[original.parent]
            else:
                duplicate.parent = self.obj.parent
                duplicate.matrix_world = placement @ original.matrix_world

        self.erase()
        debug(f"Exploded {source.name!r} into {len(copies)} objects")
        return [self.model.wrap(duplicate) for duplicate in copies.values()]


class BlenderDefinition(BlenderAttributeStore):
    """A collection used as a component or group definition."""

    def __init__(self, model: "BlenderModel", collection: bpy.types.Collection):
        self.model = model
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    @property
    def behavior(self):
        return self.collection.component_behavior

    @property
    def group(self) -> bool:
        return self.behavior.is_group

    @property
    def entities(self) -> "BlenderEntities":
        return BlenderEntities(self.model, self.collection, None)

    @property
    def instances(self) -> List[BlenderInstance]:
        return [
            BlenderInstance(self.model, obj) for obj in bpy.data.objects
            if is_component_object(obj) and obj.instance_collection == self.collection
        ]

    def _container(self):
        return self.collection

    def _reserved_names(self) -> frozenset:
        return frozenset(self.collection.bl_rna.properties.keys())

    def __eq__(self, other) -> bool:
        return isinstance(other, BlenderDefinition) and self.collection == other.collection

    def __hash__(self) -> int:
        return hash(self.collection)

    def __repr__(self) -> str:
        return f"<ComponentDefinition {self.collection.name!r}>"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class BlenderEntities:
    """Objects of one collection; new objects get *parent_object* as parent."""

    def __init__(self, model: "BlenderModel", collection: bpy.types.Collection,
                 parent_object: Optional[bpy.types.Object]):
        self.model = model
        self.collection = collection
        self.parent_object = parent_object

    def __iter__(self):
        return iter([self.model.wrap(obj) for obj in self.collection.objects])

    def __len__(self) -> int:
        return len(self.collection.objects)

    def add_instance(self, definition: BlenderDefinition, transformation) -> BlenderInstance:
        if definition.collection == self.collection:
            raise ValueError(f"Definition {definition.name!r} cannot be placed inside itself")

        empty = bpy.data.objects.new(definition.name, None)
        empty.instance_type = "COLLECTION"
        empty.instance_collection = definition.collection
        self.collection.objects.link(empty)
        self.model._track(empty)
        empty.parent = self.parent_object
        empty.matrix_world = to_matrix(transformation)
        return BlenderInstance(self.model, empty)

    def add_group(self) -> BlenderInstance:
        collection = bpy.data.collections.new("Group")
        collection.component_behavior.is_group = True
        self.model._track(collection)
        return self.add_instance(BlenderDefinition(self.model, collection), IDENTITY)


class BlenderContainer:
    """The place an object lives in: its collection and its parent object."""

    def __init__(self, model: "BlenderModel", collection: bpy.types.Collection,
                 parent_object: Optional[bpy.types.Object]):
        self.model = model
        self.collection = collection
        self.parent_object = parent_object

    @property
    def entities(self) -> BlenderEntities:
        return BlenderEntities(self.model, self.collection, self.parent_object)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class BlenderModel:
    """The current Blender scene seen through the host model protocol."""

    typename = "Model"

    def __init__(self, context: bpy.types.Context):
        self.context = context
        self._operation: Optional[str] = None
        self._created: List[bpy.types.ID] = []
        self._pending_erase: List[bpy.types.Object] = []

    def wrap(self, obj: bpy.types.Object) -> BlenderElement:
        if is_component_object(obj):
            return BlenderInstance(self, obj)
        return BlenderElement(self, obj)

    @property
    def selection(self) -> List[BlenderElement]:
        return [self.wrap(obj) for obj in self.context.selected_objects]

    @property
    def operation_active(self) -> bool:
        return self._operation is not None

    def _track(self, id_block: bpy.types.ID) -> None:
        if self._operation is not None:
            self._created.append(id_block)

    def _erase(self, obj: bpy.types.Object) -> None:
        if self._operation is None:
            bpy.data.objects.remove(obj, do_unlink=True)
        elif obj in self._created:
            self._created.remove(obj)
            bpy.data.objects.remove(obj, do_unlink=True)
        elif obj not in self._pending_erase:
            self._pending_erase.append(obj)

    def start_operation(self, name: str) -> None:
        if self._operation is not None:
            raise RuntimeError(f"Operation {self._operation!r} is still active, cannot start {name!r}")
        self._operation = name
        self._created = []
        self._pending_erase = []

    def commit_operation(self) -> None:
        if self._operation is None:
            raise RuntimeError("No active operation to commit")
        bpy.data.batch_remove(self._pending_erase)
        debug(f"Committed {self._operation!r}: {len(self._created)} created, {len(self._pending_erase)} removed")
        self._operation = None
        self._created = []
        self._pending_erase = []

    def abort_operation(self) -> None:
        if self._operation is None:
            raise RuntimeError("No active operation to abort")
        bpy.data.batch_remove(self._created)
        debug(f"Aborted {self._operation!r}: removed {len(self._created)} created blocks")
        self._operation = None
        self._created = []
        self._pending_erase = []
