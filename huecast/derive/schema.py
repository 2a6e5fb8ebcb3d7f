# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Type declarations read by the layout generator.

A declaration is the static shape of a color type: its kind, its fields in
declaration order, its layout attribute and its field configuration. It can
be read from a live class by reflection or from a JSON schema file, so the
generator itself never touches classes.
"""

from __future__ import annotations

import ctypes
import dataclasses
import enum
import inspect
import json
import typing
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

import numpy as np

# Field metadata keys
EXCLUDE_KEY = "huecast.zero_sized"
SAME_LAYOUT_KEY = "huecast.same_layout_as"

LAYOUT_ATTRIBUTE = "__layout__"
ALLOWED_LAYOUTS = ("C", "transparent")

_BUILTIN_NUMBERS = (float, int, bool, complex)


class TypeKind(Enum):
    """Shape of a type declaration."""

    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"


def type_name(tp: Any) -> str:
    """
    Canonical name of a declared field type.

    Numpy scalar types, dtypes, dtype strings, builtin numbers and ctypes
    scalars all name their numpy dtype, so ``np.float32``, ``"f4"`` and
    ``ctypes.c_float`` are the same type. Anything else is named as written.
    """
    if isinstance(tp, np.dtype):
        return tp.name
    if isinstance(tp, str):
        try:
            return np.dtype(tp).name
        except TypeError:
            return tp
    if isinstance(tp, type) and (
        issubclass(tp, np.generic)
        or tp in _BUILTIN_NUMBERS
        or issubclass(tp, ctypes._SimpleCData)
    ):
        return np.dtype(tp).name
    name = getattr(tp, "__name__", None)
    return name if isinstance(name, str) else repr(tp)


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """A single declared field: its name and canonical type name."""
    name: str
    type: str

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict) -> FieldDeclaration:
        return cls(name=data["name"], type=type_name(data["type"]))


@dataclass(frozen=True)
class TypeDeclaration:
    """
    Static declaration of a color type.

    Attributes:
        name: Type name
        module: Module the type is importable from (used by rendered code)
        kind: Struct, enum or union
        fields: Fields in declaration order
        layout: Layout attribute items, e.g. ("C",). Only "C" and
            "transparent" give a fixed layout.
        exclude: Names of fields carrying no channel data
        overrides: Field name -> type name to use instead of the declared
            type when checking that channels are homogeneous
    """
    name: str
    module: str = "__main__"
    kind: TypeKind = TypeKind.STRUCT
    fields: tuple[FieldDeclaration, ...] = ()
    layout: tuple[str, ...] = ()
    exclude: frozenset[str] = frozenset()
    overrides: Mapping[str, str] = field(default_factory=dict, hash=False)

    @property
    def has_fixed_layout(self) -> bool:
        return any(item in ALLOWED_LAYOUTS for item in self.layout)

    def configure(
        self,
        *,
        exclude: Iterable[str] = (),
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> TypeDeclaration:
        """Return a copy with extra excluded fields and type overrides."""
        merged = dict(self.overrides)
        merged.update({name: type_name(tp) for name, tp in (overrides or {}).items()})
        return dataclasses.replace(
            self,
            exclude=self.exclude | frozenset(exclude),
            overrides=merged,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "module": self.module,
            "kind": self.kind.value,
            "fields": [f.to_dict() for f in self.fields],
            "layout": list(self.layout),
            "exclude": sorted(self.exclude),
            "overrides": dict(self.overrides),
        }

    @classmethod
    def from_dict(cls, data: dict) -> TypeDeclaration:
        """Deserialize from a schema entry.

        Raises:
            ValueError: If the entry is missing a name or has an unknown kind
        """
        if "name" not in data:
            raise ValueError(f"Type declaration has no name: {data!r}")
        try:
            kind = TypeKind(data.get("kind", "struct"))
        except ValueError:
            raise ValueError(
                f"Unknown kind {data.get('kind')!r} for type {data['name']!r}"
            ) from None
        return cls(
            name=data["name"],
            module=data.get("module", "__main__"),
            kind=kind,
            fields=tuple(FieldDeclaration.from_dict(f) for f in data.get("fields", ())),
            layout=tuple(data.get("layout", ())),
            exclude=frozenset(data.get("exclude", ())),
            overrides={k: type_name(v) for k, v in data.get("overrides", {}).items()},
        )


# =============================================================================
# Field configuration helpers
# =============================================================================


def fixed_layout(kind: str = "C"):
    """
    Class decorator giving a color type a fixed memory layout.

    Declares that channels are stored in declaration order with no padding
    or reordering. Must be applied before (below) ``derive_array_cast``.

    Args:
        kind: "C" for a struct of channels, "transparent" for a wrapper
            around a single channel
    """
    if kind not in ALLOWED_LAYOUTS:
        raise ValueError(f"Layout must be one of {ALLOWED_LAYOUTS}, got {kind!r}")

    def decorate(cls: type) -> type:
        setattr(cls, LAYOUT_ATTRIBUTE, (kind,))
        return cls

    return decorate


def zero_sized(default: Any, **kwargs: Any) -> Any:
    """A dataclass field that carries no channel data, e.g. a marker tag.

    Excluded fields must have a default, since buffers do not store them.
    """
    metadata = dict(kwargs.pop("metadata", {}))
    metadata[EXCLUDE_KEY] = True
    return field(default=default, metadata=metadata, **kwargs)


def same_layout_as(tp: Any, **kwargs: Any) -> Any:
    """A dataclass field whose type is layout-compatible with ``tp``."""
    metadata = dict(kwargs.pop("metadata", {}))
    metadata[SAME_LAYOUT_KEY] = tp
    return field(metadata=metadata, **kwargs)


# =============================================================================
# Reflection
# =============================================================================


def _annotated_fields(cls: type) -> list[tuple[str, Any]]:
    hints = typing.get_type_hints(cls)
    own = inspect.get_annotations(cls)
    return [
        (name, hints[name])
        for name in own
        if typing.get_origin(hints[name]) is not typing.ClassVar
        and hints[name] is not typing.ClassVar
    ]


def declaration_from_type(cls: type) -> TypeDeclaration:
    """
    Read the declaration of a class.

    - ``enum.Enum`` subclasses are enums.
    - ``ctypes.Union`` subclasses are unions.
    - ``ctypes.Structure`` subclasses are C-layout structs with ``_fields_``.
    - Dataclasses are structs; ``zero_sized`` and ``same_layout_as`` field
      metadata become the field configuration.
    - Any other class is a struct of its own annotated attributes.
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a class, got {type(cls).__name__}")

    name = cls.__qualname__
    module = cls.__module__
    layout = tuple(vars(cls).get(LAYOUT_ATTRIBUTE, ()))

    if issubclass(cls, enum.Enum):
        return TypeDeclaration(name=name, module=module, kind=TypeKind.ENUM, layout=layout)
    if issubclass(cls, ctypes.Union):
        return TypeDeclaration(name=name, module=module, kind=TypeKind.UNION, layout=layout)

    if issubclass(cls, ctypes.Structure):
        fields = tuple(
            FieldDeclaration(name=entry[0], type=type_name(entry[1]))
            for entry in getattr(cls, "_fields_", ())
        )
        return TypeDeclaration(
            name=name, module=module, fields=fields, layout=layout or ("C",),
        )

    exclude: set[str] = set()
    overrides: dict[str, str] = {}
    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls)
        declared = []
        for f in dataclasses.fields(cls):
            declared.append(FieldDeclaration(name=f.name, type=type_name(hints[f.name])))
            if f.metadata.get(EXCLUDE_KEY):
                exclude.add(f.name)
            if SAME_LAYOUT_KEY in f.metadata:
                overrides[f.name] = type_name(f.metadata[SAME_LAYOUT_KEY])
        fields = tuple(declared)
    else:
        fields = tuple(
            FieldDeclaration(name=fname, type=type_name(tp))
            for fname, tp in _annotated_fields(cls)
        )

    return TypeDeclaration(
        name=name,
        module=module,
        fields=fields,
        layout=layout,
        exclude=frozenset(exclude),
        overrides=overrides,
    )


def load_declarations(path: Union[str, Path]) -> list[TypeDeclaration]:
    """
    Load type declarations from a JSON schema file.

    The file holds either a single declaration or ``{"types": [...]}``::

        {
          "types": [
            {
              "name": "Rgba", "module": "mypkg.colors", "layout": ["C"],
              "fields": [
                {"name": "r", "type": "float32"},
                {"name": "g", "type": "float32"},
                {"name": "b", "type": "float32"},
                {"name": "a", "type": "float32"}
              ]
            }
          ]
        }
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict) and "types" in data:
        entries = data["types"]
    elif isinstance(data, dict):
        entries = [data]
    else:
        raise ValueError(f"Schema file {path} must hold an object, got {type(data).__name__}")
    return [TypeDeclaration.from_dict(entry) for entry in entries]
