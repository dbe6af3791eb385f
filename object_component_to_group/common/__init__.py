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
Common utilities shared by the conversion routine and the host models.

Re-exports the most frequently used symbols for convenient access::

    from ..common import debug, warn, error
    from ..common import IDENTITY, Transformation, Behavior
"""

# Logging
from .logging import DEBUG_MODE, debug, warn, error, safe_report

# Value types
from .types import Transformation, IDENTITY, Behavior, SNAP_TO_ITEMS, NO_SCALE_MASK_MAX

__all__ = [
    # Logging
    "DEBUG_MODE",
    "debug",
    "warn",
    "error",
    "safe_report",
    # Value types
    "Transformation",
    "IDENTITY",
    "Behavior",
    "SNAP_TO_ITEMS",
    "NO_SCALE_MASK_MAX",
]
