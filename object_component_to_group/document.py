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
In-memory host document model.

Plays the host role for headless use and for the test suite: the conversion
routine in :mod:`.convert` runs against it exactly as it runs against the
Blender bridge in :mod:`.blender_host`.

Every entity lives in one table on :class:`Document`, keyed by an integer
``entity_id``.  Entities refer to each other (an instance to its definition,
an element to its parent container, a face to its layer) by id, resolved
through the document on access.  A snapshot of the table is therefore a
complete copy of the document, which is what operations use to roll back.
"""

from __future__ import annotations

import copy
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .common.logging import debug
from .common.types import Behavior, Transformation, IDENTITY
from .constants import DEFAULT_LAYER_NAME, UNDO_LIMIT

__all__ = [
    "AttributeDictionary",
    "Entity",
    "Layer",
    "Material",
    "Drawingelement",
    "Face",
    "ComponentInstance",
    "Group",
    "ComponentDefinition",
    "Entities",
    "NamedEntityList",
    "Selection",
    "Document",
]


# ---------------------------------------------------------------------------
# Attribute dictionaries
# ---------------------------------------------------------------------------

class AttributeStore:
    """Mixin for anything that can carry named attribute dictionaries."""

    def _init_attributes(self) -> None:
        self._dictionaries: Dict[str, AttributeDictionary] = {}

    def _before_change(self) -> None:
        pass

    @property
    def attribute_dictionaries(self) -> Optional[List[AttributeDictionary]]:
        """All attached dictionaries, or None when there are none."""
        if not self._dictionaries:
            return None
        return list(self._dictionaries.values())

    def attribute_dictionary(self, name: str, create: bool = False) -> Optional[AttributeDictionary]:
        dictionary = self._dictionaries.get(name)
        if dictionary is None and create:
            self._before_change()
            dictionary = AttributeDictionary(name, self)
            self._dictionaries[name] = dictionary
        return dictionary

    def set_attribute(self, dictionary_name: str, key: str, value) -> None:
        self.attribute_dictionary(dictionary_name, create=True)[key] = value

    def get_attribute(self, dictionary_name: str, key: str, default=None):
        dictionary = self._dictionaries.get(dictionary_name)
        if dictionary is None:
            return default
        return dictionary.get(key, default)

    def delete_attribute(self, dictionary_name: str, key: Optional[str] = None) -> bool:
        """Delete one key, or the whole dictionary when *key* is None."""
        self._before_change()
        dictionary = self._dictionaries.get(dictionary_name)
        if dictionary is None:
            return False
        if key is None:
            del self._dictionaries[dictionary_name]
            return True
        return dictionary.pop(key)


class AttributeDictionary(AttributeStore):
    """A named, ordered key/value store that can nest further dictionaries."""

    def __init__(self, name: str, owner: Optional[AttributeStore] = None):
        self.name = name
        self._owner = owner
        self._values: Dict[str, object] = {}
        self._init_attributes()

    def _before_change(self) -> None:
        if self._owner is not None:
            self._owner._before_change()

    def __getitem__(self, key: str):
        return self._values[key]

    def __setitem__(self, key: str, value) -> None:
        self._before_change()
        # Stored by value, like the host does.
        self._values[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def get(self, key: str, default=None):
        return self._values.get(key, default)

    def pop(self, key: str) -> bool:
        self._before_change()
        if key not in self._values:
            return False
        del self._values[key]
        return True

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def items(self) -> List[Tuple[str, object]]:
        return list(self._values.items())

    def to_dict(self) -> dict:
        """Plain-dict view, nested dictionaries included, for comparisons and debugging."""
        result = dict(self._values)
        for nested in self._dictionaries.values():
            result[nested.name] = nested.to_dict()
        return result

    def __repr__(self) -> str:
        return f"<AttributeDictionary {self.name!r} {self._values!r}>"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

class Entity(AttributeStore):
    """Base class for everything stored in the document table."""

    typename = "Entity"

    def __init__(self, document: Document, entity_id: int):
        self.document = document
        self.entity_id = entity_id
        self._init_attributes()

    @property
    def valid(self) -> bool:
        return self.document._entities.get(self.entity_id) is self

    def _check_valid(self) -> None:
        if not self.valid:
            raise ValueError(f"{self.typename} {self.entity_id} has been erased")

    def _before_change(self) -> None:
        self._check_valid()

    def __repr__(self) -> str:
        return f"<{self.typename} {self.entity_id}>"


class Layer(Entity):
    typename = "Layer"

    def __init__(self, document: Document, entity_id: int, name: str):
        super().__init__(document, entity_id)
        self.name = name


class Material(Entity):
    typename = "Material"

    def __init__(self, document: Document, entity_id: int, name: str,
                 color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)):
        super().__init__(document, entity_id)
        self.name = name
        self.color = tuple(color)


class Drawingelement(Entity):
    """An entity placed in a container: the model root or a definition."""

    typename = "Drawingelement"

    def __init__(self, document: Document, entity_id: int, parent_id: Optional[int]):
        super().__init__(document, entity_id)
        self._parent_id = parent_id
        self._layer_id = document._default_layer_id
        self._material_id: Optional[int] = None

    @property
    def parent(self):
        """The container holding this element: the Document or a ComponentDefinition."""
        if self._parent_id is None:
            return self.document
        return self.document.entity(self._parent_id)

    @property
    def layer(self) -> Layer:
        return self.document.entity(self._layer_id)

    @layer.setter
    def layer(self, layer: Layer) -> None:
        self._check_valid()
        self._layer_id = self.document._own(layer, Layer).entity_id

    @property
    def material(self) -> Optional[Material]:
        if self._material_id is None:
            return None
        return self.document.entity(self._material_id)

    @material.setter
    def material(self, material: Optional[Material]) -> None:
        self._check_valid()
        self._material_id = None if material is None else self.document._own(material, Material).entity_id

    def erase(self) -> None:
        self._check_valid()
        self.document._remove(self)

    def _copy_into(self, entities: Entities, transformation: Transformation) -> Drawingelement:
        raise NotImplementedError

    def _copy_common(self, other: Drawingelement) -> None:
        other._layer_id = self._layer_id
        other._material_id = self._material_id
        # Copied dictionaries report changes to the copy, not to this entity.
        other._dictionaries = copy.deepcopy(self._dictionaries, memo={id(self): other})


class Face(Drawingelement):
    """Minimal geometry leaf: a polygon given by its corner points."""

    typename = "Face"

    def __init__(self, document: Document, entity_id: int, parent_id: Optional[int],
                 points: Sequence[Tuple[float, float, float]]):
        super().__init__(document, entity_id, parent_id)
        if len(points) < 3:
            raise ValueError(f"A face needs at least 3 points, got {len(points)}")
        self.points = tuple(tuple(float(c) for c in p) for p in points)

    def _copy_into(self, entities: Entities, transformation: Transformation) -> Face:
        face = entities.add_face([transformation.apply(p) for p in self.points])
        self._copy_common(face)
        return face


class ComponentInstance(Drawingelement):
    """A placement of a component definition."""

    typename = "ComponentInstance"

    def __init__(self, document: Document, entity_id: int, parent_id: Optional[int],
                 definition_id: int, transformation: Transformation):
        super().__init__(document, entity_id, parent_id)
        self._definition_id = definition_id
        self._transformation = transformation

    @property
    def definition(self) -> ComponentDefinition:
        return self.document.entity(self._definition_id)

    @property
    def transformation(self) -> Transformation:
        return self._transformation

    @transformation.setter
    def transformation(self, transformation: Transformation) -> None:
        self._check_valid()
        if not isinstance(transformation, Transformation):
            raise TypeError(f"Expected a Transformation, got {type(transformation).__name__}")
        self._transformation = transformation

    def explode(self) -> List[Drawingelement]:
        """Replace this placement by a copy of its definition's contents.

        The copies land in this instance's own container, with this instance's
        transformation applied.  The instance itself is erased.
        """
        self._check_valid()
        target = self.parent.entities
        created = [entity._copy_into(target, self._transformation) for entity in self.definition.entities]
        self.erase()
        debug(f"Exploded {self!r} into {len(created)} entities")
        return created

    def _copy_into(self, entities: Entities, transformation: Transformation) -> ComponentInstance:
        instance = entities.add_instance(self.definition, transformation @ self._transformation)
        self._copy_common(instance)
        return instance


class Group(ComponentInstance):
    """A placement of a group definition, i.e. one not meant to be shared."""

    typename = "Group"

    @property
    def entities(self) -> Entities:
        return self.definition.entities


class ComponentDefinition(Entity):
    """Shared contents and behavior of the instances placed from it."""

    typename = "ComponentDefinition"

    def __init__(self, document: Document, entity_id: int, name: str, group: bool = False):
        super().__init__(document, entity_id)
        self.name = name
        self.group = group
        self.behavior = Behavior()
        self._entity_ids: List[int] = []

    @property
    def entities(self) -> Entities:
        return Entities(self.document, self.entity_id)

    @property
    def instances(self) -> List[ComponentInstance]:
        return [
            entity for entity in self.document._entities.values()
            if isinstance(entity, ComponentInstance) and entity._definition_id == self.entity_id
        ]

    def contains(self, definition: ComponentDefinition) -> bool:
        """Whether *definition* is placed anywhere inside this definition, at any depth."""
        for entity in self.entities:
            if isinstance(entity, ComponentInstance):
                nested = entity.definition
                if nested is definition or nested.contains(definition):
                    return True
        return False


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

class Entities:
    """Ordered contents of a container, resolved through the document on access."""

    def __init__(self, document: Document, owner_id: Optional[int]):
        self.document = document
        self.owner_id = owner_id

    def _ids(self) -> List[int]:
        if self.owner_id is None:
            return self.document._root_ids
        return self.document.entity(self.owner_id)._entity_ids

    def __iter__(self) -> Iterator[Drawingelement]:
        return iter([self.document.entity(entity_id) for entity_id in self._ids()])

    def __len__(self) -> int:
        return len(self._ids())

    def __contains__(self, entity) -> bool:
        return isinstance(entity, Entity) and entity.entity_id in self._ids()

    def add_face(self, points: Sequence[Tuple[float, float, float]]) -> Face:
        return self.document._add(Face, self, points)

    def add_instance(self, definition: ComponentDefinition, transformation: Transformation) -> ComponentInstance:
        """Place *definition* in this container. Group definitions give a :class:`Group`."""
        definition = self.document._own(definition, ComponentDefinition)
        if not isinstance(transformation, Transformation):
            raise TypeError(f"Expected a Transformation, got {type(transformation).__name__}")
        if self.owner_id is not None:
            owner = self.document.entity(self.owner_id)
            if owner is definition or definition.contains(owner):
                raise ValueError(f"Definition {definition.name!r} cannot be placed inside itself")
        cls = Group if definition.group else ComponentInstance
        return self.document._add(cls, self, definition.entity_id, transformation)

    def add_group(self) -> Group:
        """Add an empty group at the container's origin."""
        definition = self.document.definitions.add("Group", group=True)
        return self.add_instance(definition, IDENTITY)


class NamedEntityList:
    """Named entities of one kind (definitions, layers, materials) in creation order."""

    def __init__(self, document: Document, cls: type):
        self.document = document
        self.cls = cls

    def __iter__(self) -> Iterator[Entity]:
        return iter([e for e in self.document._entities.values() if type(e) is self.cls])

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getitem__(self, name: str) -> Entity:
        for entity in self:
            if entity.name == name:
                return entity
        raise KeyError(name)

    def __contains__(self, name: str) -> bool:
        return any(entity.name == name for entity in self)

    def unique_name(self, name: str) -> str:
        if name not in self:
            return name
        index = 1
        while f"{name}#{index}" in self:
            index += 1
        return f"{name}#{index}"

    def add(self, name: str, **kwargs) -> Entity:
        return self.document._add(self.cls, None, self.unique_name(name), **kwargs)


class Selection:
    """Ordered set of selected entities."""

    def __init__(self, document: Document):
        self.document = document

    def __iter__(self) -> Iterator[Entity]:
        return iter([self.document.entity(entity_id) for entity_id in self.document._selection_ids])

    def __len__(self) -> int:
        return len(self.document._selection_ids)

    def __contains__(self, entity) -> bool:
        return isinstance(entity, Entity) and entity.entity_id in self.document._selection_ids

    def add(self, *entities: Entity) -> None:
        for entity in entities:
            entity._check_valid()
            if entity.entity_id not in self.document._selection_ids:
                self.document._selection_ids.append(entity.entity_id)

    def remove(self, *entities: Entity) -> None:
        for entity in entities:
            if entity.entity_id in self.document._selection_ids:
                self.document._selection_ids.remove(entity.entity_id)

    def clear(self) -> None:
        self.document._selection_ids.clear()


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class Document:
    """The host document: the entity table, the root container and the operation stack."""

    typename = "Model"

    def __init__(self, undo_limit: int = UNDO_LIMIT):
        if undo_limit < 0:
            raise ValueError(f"undo_limit must not be negative, got {undo_limit}")
        self._entities: Dict[int, Entity] = {}
        self._next_id = 1
        self._root_ids: List[int] = []
        self._selection_ids: List[int] = []
        self._default_layer_id: Optional[int] = None
        self._operation: Optional[Tuple[str, dict]] = None
        self._undo: List[Tuple[str, dict]] = []
        self._undo_limit = undo_limit

        self._default_layer_id = self.layers.add(DEFAULT_LAYER_NAME).entity_id

    # --- Collections --------------------------------------------------------

    @property
    def entities(self) -> Entities:
        return Entities(self, None)

    @property
    def definitions(self) -> NamedEntityList:
        return NamedEntityList(self, ComponentDefinition)

    @property
    def layers(self) -> NamedEntityList:
        return NamedEntityList(self, Layer)

    @property
    def materials(self) -> NamedEntityList:
        return NamedEntityList(self, Material)

    @property
    def selection(self) -> Selection:
        return Selection(self)

    @property
    def default_layer(self) -> Layer:
        return self.entity(self._default_layer_id)

    def entity(self, entity_id: int) -> Entity:
        try:
            return self._entities[entity_id]
        except KeyError:
            raise ValueError(f"No entity with id {entity_id}") from None

    def __len__(self) -> int:
        return len(self._entities)

    # --- Table maintenance --------------------------------------------------

    def _own(self, entity, cls: type):
        if not isinstance(entity, cls):
            raise TypeError(f"Expected a {cls.__name__}, got {type(entity).__name__}")
        if entity.document is not self:
            raise ValueError(f"{entity!r} belongs to another document")
        entity._check_valid()
        return entity

    def _add(self, cls: type, entities: Optional[Entities], *args, **kwargs) -> Entity:
        entity_id = self._next_id
        if entities is None:
            entity = cls(self, entity_id, *args, **kwargs)
        else:
            entity = cls(self, entity_id, entities.owner_id, *args, **kwargs)
        self._next_id += 1
        self._entities[entity_id] = entity
        if entities is not None:
            entities._ids().append(entity_id)
        return entity

    def _remove(self, entity: Drawingelement) -> None:
        if entity.entity_id in self._selection_ids:
            self._selection_ids.remove(entity.entity_id)
        Entities(self, entity._parent_id)._ids().remove(entity.entity_id)
        del self._entities[entity.entity_id]

    # --- Operations ---------------------------------------------------------

    def _snapshot(self) -> dict:
        state = {
            "entities": self._entities,
            "next_id": self._next_id,
            "root_ids": self._root_ids,
            "selection_ids": self._selection_ids,
            "default_layer_id": self._default_layer_id,
        }
        # Keep entity back-references pointing at this document.
        return copy.deepcopy(state, memo={id(self): self})

    def _restore(self, state: dict) -> None:
        self._entities = state["entities"]
        self._next_id = state["next_id"]
        self._root_ids = state["root_ids"]
        self._selection_ids = state["selection_ids"]
        self._default_layer_id = state["default_layer_id"]

    @property
    def operation_active(self) -> bool:
        return self._operation is not None

    @property
    def undo_stack(self) -> List[str]:
        """Names of the committed operations, oldest first."""
        return [name for name, _ in self._undo]

    def start_operation(self, name: str) -> None:
        if self._operation is not None:
            raise RuntimeError(f"Operation {self._operation[0]!r} is still active, cannot start {name!r}")
        self._operation = (name, self._snapshot())
        debug(f"Started operation {name!r}")

    def commit_operation(self) -> None:
        if self._operation is None:
            raise RuntimeError("No active operation to commit")
        self._undo.append(self._operation)
        # Oldest snapshots are dropped first.
        del self._undo[:max(0, len(self._undo) - self._undo_limit)]
        debug(f"Committed operation {self._operation[0]!r}")
        self._operation = None

    def abort_operation(self) -> None:
        if self._operation is None:
            raise RuntimeError("No active operation to abort")
        name, state = self._operation
        self._operation = None
        self._restore(state)
        debug(f"Aborted operation {name!r}")

    def undo(self) -> str:
        """Revert the last committed operation and return its name."""
        if self._operation is not None:
            raise RuntimeError("Cannot undo while an operation is active")
        if not self._undo:
            raise RuntimeError("Nothing to undo")
        name, state = self._undo.pop()
        self._restore(state)
        return name
