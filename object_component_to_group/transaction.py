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
Scoped host operations.

Every change the command makes happens inside one named operation, so the host
records it as a single undo step and a failure halfway through leaves the
document as it was::

    with operation(model, COMMAND_NAME):
        convert_to_groups(selected_components(model))

*model* is any host model with ``start_operation(name)``,
``commit_operation()`` and ``abort_operation()``: the in-memory
:class:`~.document.Document` or the Blender bridge's ``BlenderModel``.
"""

from contextlib import contextmanager

from .common.logging import debug

__all__ = ["operation"]


@contextmanager
def operation(model, name: str):
    """Run the body in one operation; commit on success, roll back on any exception."""
    model.start_operation(name)
    try:
        yield model
    except BaseException:
        model.abort_operation()
        debug(f"Rolled back {name!r}")
        raise
    model.commit_operation()
