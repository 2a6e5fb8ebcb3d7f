# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Layout descriptors and zero-copy reinterpretation of color buffers.

User-defined color types should get their descriptor from
``huecast.derive.derive_array_cast`` rather than building one by hand.
"""

from huecast.cast.array_cast import (
    ArrayCast,
    ArrayShape,
    array_cast_of,
    has_array_cast,
    implement_array_cast,
)
from huecast.cast.buffer import (
    ColorArray,
    as_records,
    from_arrays,
    from_components,
    into_arrays,
    into_components,
)

__all__ = [
    # Descriptor
    "ArrayCast",
    "ArrayShape",
    "array_cast_of",
    "has_array_cast",
    "implement_array_cast",
    # Buffers
    "ColorArray",
    "from_arrays",
    "from_components",
    "into_arrays",
    "into_components",
    "as_records",
]
