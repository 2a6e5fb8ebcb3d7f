# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Unclamped conversion between color types.

Each conversion edge ``source -> target`` is declared once, as a pure
function building a ``target`` from a ``source``. Edges are directed: a
declared ``A -> B`` says nothing about ``B -> A``.

The result of an unclamped conversion may lie outside the target space's
normal range (out of gamut, negative channels, ...). That is a valid value,
not an error; clamping or rejecting it is the job of a layer above this one.

There are two spellings of every conversion::

    Oklch.from_color_unclamped(rgb)   # from_color_unclamped(Oklch, rgb)
    rgb.into_color_unclamped(Oklch)   # into_color_unclamped(rgb, Oklch)

Only the first is ever implemented. The second is derived from it and
cannot be declared separately.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, TypeVar

from huecast.errors import UndefinedConversionError

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

_EDGES: dict[tuple[type, type], Callable[[Any], Any]] = {}


def unclamped_conversion(
    source: type[S], target: type[T],
) -> Callable[[Callable[[S], T]], Callable[[S], T]]:
    """
    Declare the conversion edge ``source -> target``.

    The decorated function takes a ``source`` value and returns a new
    ``target`` value. It must be pure and must not fail for any ``source``
    value.

    Raises:
        ValueError: If the edge is already declared
    """
    def register(fn: Callable[[S], T]) -> Callable[[S], T]:
        key = (source, target)
        if key in _EDGES:
            raise ValueError(
                f"Conversion from {source.__qualname__} to {target.__qualname__} "
                f"is already declared"
            )
        _EDGES[key] = fn
        logger.debug("Conversion %s -> %s", source.__qualname__, target.__qualname__)
        return fn

    return register


def _find(source: type, target: type) -> Callable[[Any], Any] | None:
    for base in source.__mro__:
        fn = _EDGES.get((base, target))
        if fn is not None:
            return fn
    return None


def has_conversion(source: type, target: type) -> bool:
    """True if a value of type ``source`` can be converted to ``target``."""
    return source is target or _find(source, target) is not None


def conversion_edges() -> frozenset[tuple[type, type]]:
    """All declared edges, as (source, target) pairs."""
    return frozenset(_EDGES)


def from_color_unclamped(target: type[T], value: Any) -> T:
    """
    Build a ``target`` color from ``value``.

    A value that already is a ``target`` converts to a copy of itself.

    Raises:
        UndefinedConversionError: If no edge from ``type(value)`` is declared
    """
    source = type(value)
    fn = _find(source, target)
    if fn is not None:
        return fn(value)
    if source is target:
        return copy.copy(value)
    raise UndefinedConversionError(source, target)


def into_color_unclamped(value: Any, target: type[T]) -> T:
    """Convert ``value`` into a ``target`` color.

    Same as ``from_color_unclamped(target, value)``.
    """
    return from_color_unclamped(target, value)


class Color:
    """
    Mixin adding the conversion methods to a color type.

    Has no fields and no state, so it can be mixed into slotted dataclasses.
    """

    __slots__ = ()

    @classmethod
    def from_color_unclamped(cls: type[T], value: Any) -> T:
        """Build a color of this type from ``value``, without clamping."""
        return from_color_unclamped(cls, value)

    def into_color_unclamped(self, target: type[T]) -> T:
        """Convert this color into ``target``, without clamping."""
        return into_color_unclamped(self, target)
