# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Whole-buffer unclamped conversion, in place.

Converting a buffer of ``T`` into a buffer of ``U`` reuses the input's
storage: each slot is read as a ``T``, converted, and written back as a
``U``. That is only valid when both types are laid out as the same array
``[C; N]``, which is checked from their ``ArrayCast`` descriptors before any
element is touched.

Both operations take the input buffer over. For a ``list`` the same list
object comes back holding the converted colors; a ``ColorArray`` is released
and a new one sharing its storage is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from huecast.cast.array_cast import ArrayCast, array_cast_of
from huecast.cast.buffer import ColorArray
from huecast.convert.unclamped import from_color_unclamped, has_conversion
from huecast.errors import LayoutMismatchError, UndefinedConversionError

logger = logging.getLogger(__name__)

U = TypeVar("U")


def _check_convertible(source: type, target: type) -> tuple[ArrayCast, ArrayCast]:
    source_cast = array_cast_of(source)
    target_cast = array_cast_of(target)
    if source_cast.array != target_cast.array:
        raise LayoutMismatchError(
            f"Cannot convert {source.__qualname__} {source_cast.array} in place "
            f"to {target.__qualname__} {target_cast.array}"
        )
    if not has_conversion(source, target):
        raise UndefinedConversionError(source, target)
    return source_cast, target_cast


def from_color_unclamped_list(
    colors: list[Any],
    target: type[U],
    *,
    source: Optional[type] = None,
) -> list[U]:
    """
    Convert every color in a list, in place.

    Args:
        colors: Colors to convert. The list is modified and returned.
        target: Color type to convert to
        source: Color type of the elements (default: type of the first one)

    Returns:
        The same list, now holding ``target`` colors in the same order

    Raises:
        MissingArrayCastError: If either type has no layout descriptor
        LayoutMismatchError: If their array types differ
        UndefinedConversionError: If an element type has no edge to ``target``

    Every element type is checked before the first slot is written.
    """
    if source is None:
        if not colors:
            array_cast_of(target)
            return colors
        source = type(colors[0])
    _check_convertible(source, target)
    for element_type in {type(color) for color in colors} - {source}:
        _check_convertible(element_type, target)

    logger.debug(
        "Converting %d colors %s -> %s in place",
        len(colors), source.__qualname__, target.__qualname__,
    )
    for i, color in enumerate(colors):
        colors[i] = from_color_unclamped(target, color)
    return colors


def from_color_unclamped_array(colors: ColorArray[Any], target: type[U]) -> ColorArray[U]:
    """
    Convert a fixed-length buffer, reusing its storage.

    The input buffer is released; the returned buffer owns the same
    storage, holding ``target`` colors in the same order.

    Raises:
        MissingArrayCastError: If either type has no layout descriptor
        LayoutMismatchError: If their array types differ
        UndefinedConversionError: If no edge to ``target`` is declared
        ValueError: If ``colors`` is a view of another buffer

    All checks run before the input is released.
    """
    source = colors.color_type
    source_cast, target_cast = _check_convertible(source, target)

    storage = colors.release()
    logger.debug(
        "Converting %d colors %s -> %s in place",
        storage.shape[0], source.__qualname__, target.__qualname__,
    )
    for i in range(storage.shape[0]):
        value = source_cast.from_array(source, storage[i].tolist())
        storage[i] = target_cast.to_array(from_color_unclamped(target, value))
    return ColorArray(target, storage)
