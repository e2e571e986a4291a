"""Observed status of the KnativeServing and KnativeEventing resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from operatorapi.conditions import (
    DEPENDENCIES_INSTALLED,
    DEPLOYMENTS_AVAILABLE,
    INSTALL_SUCCEEDED,
    VERSION_MIGRATION_ELIGIBLE,
    Condition,
    ConditionManager,
    ConditionSet,
    Status,
    new_living_condition_set,
)


@dataclass
class ComponentStatus(Status):
    """Status of an installed component: conditions, version and manifests."""

    version: str = ""
    manifests: list[str] = field(default_factory=list)

    _CONDITION_SET: ClassVar[ConditionSet] = new_living_condition_set(
        DEPENDENCIES_INSTALLED,
        DEPLOYMENTS_AVAILABLE,
        INSTALL_SUCCEEDED,
        VERSION_MIGRATION_ELIGIBLE,
    )

    def _manager(self) -> ConditionManager:
        return self._CONDITION_SET.manage(self)

    def get_condition(self, condition_type: str) -> Condition | None:
        """Return the condition of the given type, or None if it is absent."""
        return self._manager().get_condition(condition_type)

    def initialize_conditions(self) -> None:
        """Add every managed condition that is not yet present."""
        self._manager().initialize_conditions()

    def is_ready(self) -> bool:
        """Whether all conditions are satisfied."""
        return self._manager().is_happy()

    def mark_install_succeeded(self) -> None:
        """Mark the install as succeeded; dependencies of unknown state count as installed."""
        self._manager().mark_true(INSTALL_SUCCEEDED)
        dependencies = self.get_condition(DEPENDENCIES_INSTALLED)
        if dependencies is None or dependencies.is_unknown():
            self.mark_dependencies_installed()

    def mark_install_failed(self, msg: str) -> None:
        self._manager().mark_false(
            INSTALL_SUCCEEDED, "Error", f"Install failed with message: {msg}"
        )

    def mark_deployments_available(self) -> None:
        self._manager().mark_true(DEPLOYMENTS_AVAILABLE)

    def mark_deployments_not_ready(self, deployments: list[str]) -> None:
        """Mark the deployments as not available, naming those waited on."""
        self._manager().mark_false(
            DEPLOYMENTS_AVAILABLE,
            "NotReady",
            f"Waiting on deployments: {', '.join(deployments)}",
        )

    def mark_version_migration_eligible(self) -> None:
        self._manager().mark_true(VERSION_MIGRATION_ELIGIBLE)

    def mark_version_migration_not_eligible(self, msg: str) -> None:
        self._manager().mark_false(
            VERSION_MIGRATION_ELIGIBLE,
            "Error",
            f"Version migration is not eligible with message: {msg}",
        )

    def mark_dependencies_installed(self) -> None:
        self._manager().mark_true(DEPENDENCIES_INSTALLED)

    def mark_dependency_installing(self, msg: str) -> None:
        self._manager().mark_false(
            DEPENDENCIES_INSTALLED, "Installing", f"Dependency installing: {msg}"
        )

    def mark_dependency_missing(self, msg: str) -> None:
        self._manager().mark_false(
            DEPENDENCIES_INSTALLED, "Error", f"Dependency missing: {msg}"
        )


@dataclass
class KnativeServingStatus(ComponentStatus):
    """Observed state of a KnativeServing."""


@dataclass
class KnativeEventingStatus(ComponentStatus):
    """Observed state of a KnativeEventing."""