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
Console output for the Component to Group add-on.

Blender configures no handlers for Python's ``logging`` module, so records sent
through it never show up.  All console output goes through the functions here
instead::

    from ..common import debug, warn, error

    debug(f"Converting {len(instances)} instances of {definition.name}")
    warn("Selection holds no components")
    error(f"Conversion failed: {e}")
"""

__all__ = ["DEBUG_MODE", "debug", "warn", "error", "safe_report"]


DEBUG_MODE = False
"""Set to True to print every conversion step to the console."""


def debug(*args, **kwargs):
    """Print to console only when DEBUG_MODE is enabled."""
    if DEBUG_MODE:
        print(*args, **kwargs)


def warn(*args, **kwargs):
    """Always print a warning message to the console."""
    print("WARNING:", *args, **kwargs)


def error(*args, **kwargs):
    """Always print an error message to the console."""
    print("ERROR:", *args, **kwargs)


def safe_report(operator, level, message):
    """Report a message through an operator, falling back to the console.

    The conversion also runs headless (from ``api`` or from tests) where there
    is no operator, or where the operator is not bound to a running Blender
    context.  In those cases the message goes to :func:`error`, :func:`warn`
    or :func:`debug` according to *level*.

    :param operator: A ``bpy.types.Operator`` instance, or None.
    :param level: Report level set, e.g. ``{'INFO'}``, ``{'WARNING'}``, ``{'ERROR'}``.
    :param message: The message string.
    """
    if operator is not None:
        try:
            operator.report(level, message)
            return
        except (AttributeError, RuntimeError, TypeError):
            pass  # Not bound to a Blender context.

    if "ERROR" in level:
        error(message)
    elif "WARNING" in level:
        warn(message)
    else:
        debug(message)
