# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
The `ArrayCast` layout descriptor.

A descriptor is a promise that a color type is laid out exactly like a
fixed-size homogeneous array ``[C; N]``: N channels of one numeric type,
in declaration order, with nothing in between. A contiguous run of k colors
is therefore byte-identical to a run of k*N channel values.

Nothing in this module checks the promise. Descriptors are produced by the
layout generator in ``huecast.derive``, which is the only place the
preconditions are verified, and installed with ``implement_array_cast``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from huecast.errors import MissingArrayCastError

logger = logging.getLogger(__name__)

_ATTRIBUTE = "__array_cast__"


@dataclass(frozen=True, slots=True)
class ArrayShape:
    """
    The array type ``[channel_type; length]`` a color is equivalent to.

    Attributes:
        channel_type: Canonical numpy dtype name of every channel (e.g. "float32")
        length: Number of channels, always >= 1
    """
    channel_type: str
    length: int

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Array length must be >= 1, got {self.length}")

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype of a single channel."""
        return np.dtype(self.channel_type)

    def __str__(self) -> str:
        return f"[{self.channel_type}; {self.length}]"

    def to_dict(self) -> dict:
        return {"channel_type": self.channel_type, "length": self.length}

    @classmethod
    def from_dict(cls, data: dict) -> ArrayShape:
        return cls(channel_type=data["channel_type"], length=data["length"])


@dataclass(frozen=True, slots=True)
class ArrayCast:
    """
    Layout descriptor of a color type.

    Attributes:
        array: The equivalent array type
        fields: Channel field names in declaration order. Field ``fields[i]``
            occupies slot ``i`` of the array.
    """
    array: ArrayShape
    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.fields) != self.array.length:
            raise ValueError(
                f"Descriptor names {len(self.fields)} fields "
                f"for an array of length {self.array.length}"
            )

    def to_array(self, color: Any) -> tuple:
        """Read the channels of a color, in array order."""
        return tuple(getattr(color, name) for name in self.fields)

    def from_array(self, color_type: type, values: Iterable[Any]) -> Any:
        """
        Build a color from its channels.

        Excluded fields are not part of the array and take their defaults.
        """
        values = tuple(values)
        if len(values) != self.array.length:
            raise ValueError(
                f"Expected {self.array.length} channel values, got {len(values)}"
            )
        return color_type(**dict(zip(self.fields, values)))

    def structured_dtype(self) -> np.dtype:
        """Record dtype with one named field per channel.

        Has the same itemsize and byte layout as ``(channel_type, length)``.
        """
        return np.dtype([(name, self.array.dtype) for name in self.fields])

    def to_dict(self) -> dict:
        return {"array": self.array.to_dict(), "fields": list(self.fields)}

    @classmethod
    def from_dict(cls, data: dict) -> ArrayCast:
        return cls(
            array=ArrayShape.from_dict(data["array"]),
            fields=tuple(data["fields"]),
        )


def implement_array_cast(color_type: type, descriptor: ArrayCast) -> type:
    """
    Install a layout descriptor on a color type.

    Only generator output calls this: the ``derive_array_cast`` decorator and
    modules rendered by ``huecast.derive``.
    """
    if not isinstance(descriptor, ArrayCast):
        raise TypeError(f"Expected ArrayCast, got {type(descriptor).__name__}")
    setattr(color_type, _ATTRIBUTE, descriptor)
    logger.debug("ArrayCast for %s = %s", color_type.__qualname__, descriptor.array)
    return color_type


def has_array_cast(color_type: type) -> bool:
    """True if the type itself (not a base class) carries a descriptor."""
    return isinstance(vars(color_type).get(_ATTRIBUTE), ArrayCast)


def array_cast_of(color_type: type) -> ArrayCast:
    """
    Get the layout descriptor of a color type.

    Descriptors are never inherited: a subclass may add fields, so it needs
    its own.

    Raises:
        MissingArrayCastError: If the type has no descriptor
    """
    descriptor = vars(color_type).get(_ATTRIBUTE)
    if not isinstance(descriptor, ArrayCast):
        raise MissingArrayCastError(color_type)
    return descriptor
