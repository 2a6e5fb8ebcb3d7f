# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""Applying generator results to live classes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

from huecast.cast.array_cast import implement_array_cast
from huecast.derive.array_cast import DeriveResult, derive
from huecast.derive.schema import declaration_from_type
from huecast.errors import ArrayCastDeriveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeriveConfig:
    """Configuration for applying the layout generator."""

    # Address the descriptor definition the way the library's own types do
    internal: bool = False

    # Refuse to install a descriptor when any diagnostic was reported.
    # With False, only fatal diagnostics (enums, unions, no channels) refuse;
    # the rest are logged and the descriptor is installed anyway.
    fatal_diagnostics: bool = True


def apply(result: DeriveResult, cls: type, config: Optional[DeriveConfig] = None) -> type:
    """
    Install the descriptor from a generator result on ``cls``.

    Raises:
        ArrayCastDeriveError: If the result cannot be installed under the
            configured policy. Nothing is installed in that case.
    """
    config = config or DeriveConfig()
    if result.implementation is None or (config.fatal_diagnostics and result.diagnostics):
        raise ArrayCastDeriveError(result.declaration.name, result.diagnostics)
    if result.diagnostics:
        logger.warning(
            "Installing ArrayCast for %s despite %d diagnostic(s)",
            result.declaration.name,
            len(result.diagnostics),
        )
    return implement_array_cast(cls, result.implementation.descriptor())


def derive_array_cast(
    cls: Optional[type] = None,
    *,
    exclude: Iterable[str] = (),
    overrides: Optional[Mapping[str, Any]] = None,
    internal: bool = False,
    config: Optional[DeriveConfig] = None,
) -> Any:
    """
    Class decorator deriving the ``ArrayCast`` layout descriptor.

    Usable bare or with arguments::

        @derive_array_cast
        @fixed_layout("C")
        @dataclass(frozen=True)
        class Rgb:
            red: np.float32
            green: np.float32
            blue: np.float32

        @derive_array_cast(exclude=["tag"], overrides={"hue": np.float32})
        @fixed_layout("C")
        @dataclass(frozen=True)
        class Hsv: ...

    Args:
        exclude: Extra fields carrying no channel data
        overrides: Extra field -> layout-compatible type substitutions
        internal: Address the descriptor definition without going through the
            package root (same as ``DeriveConfig(internal=True)``)
        config: Addressing mode and diagnostic policy

    Raises:
        ArrayCastDeriveError: If the generator reports diagnostics
    """
    config = config or DeriveConfig()
    if internal and not config.internal:
        config = replace(config, internal=True)

    def decorate(target: type) -> type:
        declaration = declaration_from_type(target).configure(
            exclude=exclude, overrides=overrides,
        )
        return apply(derive(declaration, internal=config.internal), target, config)

    if cls is not None:
        return decorate(cls)
    return decorate
