# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Fixed-length color buffers and zero-copy reinterpretation.

A ``ColorArray`` stores k colors of one type as a ``(k, N)`` numpy array of
channel values, using the type's ``ArrayCast`` descriptor to move values in
and out. Because the descriptor guarantees the color is equivalent to
``[C; N]``, the same storage can be viewed as k*N components, as k arrays of
N, or as k records, without copying.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar, Union, overload

import numpy as np
from numpy.typing import NDArray

from huecast.cast.array_cast import ArrayCast, array_cast_of
from huecast.errors import LayoutMismatchError, ReleasedBufferError

C = TypeVar("C")


def _check_storage(descriptor: ArrayCast, components: NDArray) -> None:
    shape = descriptor.array
    if components.dtype != shape.dtype:
        raise LayoutMismatchError(
            f"Components have dtype {components.dtype}, expected {shape.dtype}"
        )
    if components.ndim != 2 or components.shape[1] != shape.length:
        raise LayoutMismatchError(
            f"Components have shape {components.shape}, expected (k, {shape.length})"
        )


class ColorArray(Generic[C]):
    """
    A fixed-length buffer of colors backed by channel storage.

    The buffer owns its storage until it is released, either explicitly or
    by an operation that takes the storage over (bulk conversion,
    ``into_components``). Any use after that raises ``ReleasedBufferError``.

    A slice is a view sharing its parent's storage. It does not own that
    storage and cannot be released; ``copy()`` gives an owning buffer.
    """

    __slots__ = ("_color_type", "_descriptor", "_components", "_owns_storage")

    def __init__(
        self, color_type: type[C], components: NDArray, *, owns_storage: bool = True
    ) -> None:
        descriptor = array_cast_of(color_type)
        if not isinstance(components, np.ndarray):
            raise TypeError(
                f"Expected a numpy array, got {type(components).__name__}"
            )
        _check_storage(descriptor, components)
        self._color_type = color_type
        self._descriptor = descriptor
        self._components: NDArray | None = components
        self._owns_storage = owns_storage

    @classmethod
    def from_colors(cls, color_type: type[C], colors: Iterable[C]) -> ColorArray[C]:
        """Allocate a buffer holding a copy of ``colors``."""
        descriptor = array_cast_of(color_type)
        rows = [descriptor.to_array(color) for color in colors]
        storage = np.empty((len(rows), descriptor.array.length), dtype=descriptor.array.dtype)
        for i, row in enumerate(rows):
            storage[i] = row
        return cls(color_type, storage)

    @property
    def color_type(self) -> type[C]:
        return self._color_type

    @property
    def descriptor(self) -> ArrayCast:
        return self._descriptor

    @property
    def released(self) -> bool:
        return self._components is None

    @property
    def owns_storage(self) -> bool:
        return self._owns_storage

    @property
    def components(self) -> NDArray:
        """The ``(k, N)`` channel storage (a view, not a copy)."""
        return self._live()

    def release(self) -> NDArray:
        """
        Give up the storage and return it.

        Raises:
            ReleasedBufferError: If the buffer was already released
            ValueError: If the buffer is a view of another buffer's storage
        """
        components = self._live()
        if not self._owns_storage:
            raise ValueError(
                f"ColorArray of {self._color_type.__qualname__} is a view of another "
                "buffer and cannot be released; copy() it first"
            )
        self._components = None
        return components

    def copy(self) -> ColorArray[C]:
        """An owning buffer holding a copy of the storage."""
        return ColorArray(self._color_type, self._live().copy())

    def _live(self) -> NDArray:
        if self._components is None:
            raise ReleasedBufferError(
                f"ColorArray of {self._color_type.__qualname__} has been released"
            )
        return self._components

    def __len__(self) -> int:
        return self._live().shape[0]

    @overload
    def __getitem__(self, index: int) -> C: ...

    @overload
    def __getitem__(self, index: slice) -> ColorArray[C]: ...

    def __getitem__(self, index: Union[int, slice]) -> Any:
        components = self._live()
        if isinstance(index, slice):
            return ColorArray(self._color_type, components[index], owns_storage=False)
        return self._descriptor.from_array(self._color_type, components[index].tolist())

    def __setitem__(self, index: int, color: C) -> None:
        if not isinstance(color, self._color_type):
            raise TypeError(
                f"Expected {self._color_type.__qualname__}, got {type(color).__qualname__}"
            )
        self._live()[index] = self._descriptor.to_array(color)

    def __iter__(self) -> Iterator[C]:
        for row in self._live():
            yield self._descriptor.from_array(self._color_type, row.tolist())

    def to_list(self) -> list[C]:
        return list(self)

    def __repr__(self) -> str:
        if self._components is None:
            return f"ColorArray[{self._color_type.__qualname__}](released)"
        return (
            f"ColorArray[{self._color_type.__qualname__}]"
            f"(len={len(self)}, array={self._descriptor.array})"
        )


# =============================================================================
# Reinterpretation
# =============================================================================


def from_arrays(color_type: type[C], arrays: NDArray) -> ColorArray[C]:
    """
    View a ``(k, N)`` array of channel values as k colors.

    The dtype must be exactly the channel type; no conversion is done.
    """
    return ColorArray(color_type, arrays)


def from_components(color_type: type[C], components: NDArray) -> ColorArray[C]:
    """
    View a flat, contiguous array of k*N channel values as k colors.

    Raises:
        TypeError: If ``components`` is not a numpy array
        LayoutMismatchError: If the dtype differs from the channel type or the
            length is not a multiple of N
        ValueError: If the array is not C-contiguous
    """
    descriptor = array_cast_of(color_type)
    if not isinstance(components, np.ndarray):
        raise TypeError(f"Expected a numpy array, got {type(components).__name__}")
    shape = descriptor.array
    if components.ndim != 1:
        raise LayoutMismatchError(
            f"Components must be one-dimensional, got shape {components.shape}"
        )
    if components.shape[0] % shape.length != 0:
        raise LayoutMismatchError(
            f"{components.shape[0]} components do not divide into colors of "
            f"{shape.length} channels"
        )
    if not components.flags.c_contiguous:
        raise ValueError("Components must be C-contiguous to be reinterpreted")
    return ColorArray(color_type, components.reshape(-1, shape.length))


def into_arrays(colors: ColorArray[Any]) -> NDArray:
    """Release a buffer and return its ``(k, N)`` storage."""
    return colors.release()


def into_components(colors: ColorArray[Any]) -> NDArray:
    """
    Release a buffer and return its storage as k*N flat components.

    Field ``i`` of color ``j`` is component ``j * N + i``.
    """
    storage = colors.components
    if not storage.flags.c_contiguous:
        raise ValueError("Buffer storage is not C-contiguous")
    return colors.release().reshape(-1)


def as_records(colors: ColorArray[Any]) -> NDArray:
    """View a buffer as a 1-D record array with one named field per channel."""
    storage = colors.components
    if not storage.flags.c_contiguous:
        raise ValueError("Buffer storage is not C-contiguous")
    return storage.view(colors.descriptor.structured_dtype()).reshape(-1)
