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
Value types shared by the conversion routine and the host models.

Pure Python, no ``bpy`` or ``mathutils``, so the document model and its tests
run outside Blender too.  The Blender bridge converts :class:`Transformation`
to ``mathutils.Matrix`` where it talks to Blender.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

__all__ = [
    "Transformation",
    "IDENTITY",
    "SNAP_TO_ITEMS",
    "NO_SCALE_MASK_MAX",
    "Behavior",
]

Row = Tuple[float, float, float, float]
Point = Tuple[float, float, float]


@dataclass(frozen=True)
class Transformation:
    """A 4x4 affine transformation matrix, stored row-major.

    The translation lives in the last column, like ``mathutils.Matrix``, so
    ``Transformation(tuple(map(tuple, matrix)))`` round-trips a Blender matrix.
    """

    rows: Tuple[Row, Row, Row, Row] = (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )

    def __post_init__(self):
        if len(self.rows) != 4 or any(len(row) != 4 for row in self.rows):
            raise ValueError(f"Transformation needs 4x4 values, got {self.rows!r}")
        object.__setattr__(self, "rows", tuple(tuple(float(v) for v in row) for row in self.rows))

    @classmethod
    def from_translation(cls, x: float, y: float, z: float) -> "Transformation":
        return cls((
            (1.0, 0.0, 0.0, x),
            (0.0, 1.0, 0.0, y),
            (0.0, 0.0, 1.0, z),
            (0.0, 0.0, 0.0, 1.0),
        ))

    @classmethod
    def from_scale(cls, x: float, y: float, z: float) -> "Transformation":
        return cls((
            (x, 0.0, 0.0, 0.0),
            (0.0, y, 0.0, 0.0),
            (0.0, 0.0, z, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        ))

    @property
    def translation(self) -> Point:
        return (self.rows[0][3], self.rows[1][3], self.rows[2][3])

    def is_identity(self) -> bool:
        return self == IDENTITY

    def __matmul__(self, other: "Transformation") -> "Transformation":
        """Compose two transformations; ``a @ b`` applies ``b`` first."""
        if not isinstance(other, Transformation):
            return NotImplemented
        columns = list(zip(*other.rows))
        return Transformation(tuple(
            tuple(sum(a * b for a, b in zip(row, column)) for column in columns)
            for row in self.rows
        ))

    def apply(self, point: Point) -> Point:
        """Transform a 3D point."""
        x, y, z = point
        return tuple(row[0] * x + row[1] * y + row[2] * z + row[3] for row in self.rows[:3])


IDENTITY = Transformation()
"""Transformation that places an entity at its container's origin, unrotated and unscaled."""


# Snap-to behavior values, in the order Blender's enum property shows them.
SNAP_TO_ITEMS: Tuple[str, ...] = ("NONE", "ANY", "HORIZONTAL", "VERTICAL", "SLOPED")

# ``no_scale_mask`` is a bitmask over the seven scale handles.
NO_SCALE_MASK_MAX: int = 0b1111111


@dataclass
class Behavior:
    """Behavior flags of a component definition."""

    always_face_camera: bool = False
    cuts_opening: bool = False
    is2d: bool = False
    no_scale_mask: int = 0
    shadows_face_sun: bool = False
    snapto: str = field(default="NONE")

    def __setattr__(self, name, value):
        if name == "snapto" and value not in SNAP_TO_ITEMS:
            raise ValueError(f"Unknown snap-to behavior {value!r}, expected one of {SNAP_TO_ITEMS}")
        if name == "no_scale_mask" and not 0 <= int(value) <= NO_SCALE_MASK_MAX:
            raise ValueError(f"no_scale_mask out of range: {value!r}")
        super().__setattr__(name, value)
