"""A registry mapping group/version/kind identifiers to resource types."""

from __future__ import annotations

from typing import Any

from operatorapi.resources import (
    KnativeEventing,
    KnativeEventingList,
    KnativeServing,
    KnativeServingList,
)
from operatorapi.schema import SCHEME_GROUP_VERSION, GroupVersion, GroupVersionKind


class Scheme:
    """Known resource types, keyed by their group, version and kind."""

    def __init__(self) -> None:
        self._types: dict[GroupVersionKind, type] = {}

    def add_known_types(self, group_version: GroupVersion, *args: type) -> None:
        """Register each type under ``group_version`` with its class name as kind."""
        for known in args:
            gvk = group_version.with_kind(known.__name__)
            existing = self._types.get(gvk)
            if existing is not None and existing is not known:
                raise ValueError(
                    f"double registration of different types for {gvk}: "
                    f"{existing.__name__} and {known.__name__}"
                )
            self._types[gvk] = known

    def recognizes(self, gvk: GroupVersionKind) -> bool:
        """Whether a type is registered for ``gvk``."""
        return gvk in self._types

    def new(self, gvk: GroupVersionKind) -> Any:
        """Create an empty instance of the type registered for ``gvk``."""
        try:
            known = self._types[gvk]
        except KeyError:
            raise LookupError(f"no kind is registered for {gvk}") from None
        return known()


def register_known_types(scheme: Scheme) -> None:
    """Add the operator resource types to ``scheme``."""
    scheme.add_known_types(
        SCHEME_GROUP_VERSION,
        KnativeServing,
        KnativeServingList,
        KnativeEventing,
        KnativeEventingList,
    )


def add_to_scheme(scheme: Scheme) -> None:
    """Add all of this API's types to ``scheme``."""
    register_known_types(scheme)