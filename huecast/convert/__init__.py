# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Conversion between color types.

Declare edges with ``unclamped_conversion``; convert single colors with
``from_color_unclamped`` / ``into_color_unclamped`` (or the ``Color`` mixin
methods) and whole buffers with the ``*_list`` / ``*_array`` functions.
"""

from huecast.convert.bulk import from_color_unclamped_array, from_color_unclamped_list
from huecast.convert.unclamped import (
    Color,
    conversion_edges,
    from_color_unclamped,
    has_conversion,
    into_color_unclamped,
    unclamped_conversion,
)

__all__ = [
    "Color",
    "unclamped_conversion",
    "from_color_unclamped",
    "into_color_unclamped",
    "has_conversion",
    "conversion_edges",
    "from_color_unclamped_list",
    "from_color_unclamped_array",
]
