"""Status conditions and the living condition set that manages them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

READY = "Ready"
"""The top-level condition of a living condition set."""

DEPENDENCIES_INSTALLED = "DependenciesInstalled"
"""Potential dependencies have been installed correctly."""

INSTALL_SUCCEEDED = "InstallSucceeded"
"""The installation of the component itself has been successful."""

DEPLOYMENTS_AVAILABLE = "DeploymentsAvailable"
"""The deployments of the component have come up successfully."""

VERSION_MIGRATION_ELIGIBLE = "VersionMigrationEligible"
"""The installed version may be upgraded or downgraded to the requested one."""


class ConditionStatus(str, Enum):
    """The tri-state value of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Severity(str, Enum):
    """How much a condition matters; errors are the empty string."""

    ERROR = ""
    WARNING = "Warning"
    INFO = "Info"


@dataclass
class Condition:
    """One observed aspect of a resource's state."""

    type: str
    status: ConditionStatus = ConditionStatus.UNKNOWN
    severity: Severity = Severity.ERROR
    reason: str = ""
    message: str = ""
    last_transition_time: datetime | None = field(default=None, compare=False)

    def is_true(self) -> bool:
        return self.status is ConditionStatus.TRUE

    def is_false(self) -> bool:
        return self.status is ConditionStatus.FALSE

    def is_unknown(self) -> bool:
        return self.status is ConditionStatus.UNKNOWN


@dataclass
class Status:
    """The common status block: observed generation, conditions, annotations."""

    observed_generation: int = 0
    conditions: list[Condition] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ConditionSet:
    """A happy condition and the terminal conditions it depends on."""

    happy: str
    dependents: tuple[str, ...] = ()

    def manage(self, status: Status) -> ConditionManager:
        """Return a manager that operates on the conditions of ``status``."""
        return ConditionManager(self, status)


def new_living_condition_set(*args: str) -> ConditionSet:
    """Build a condition set whose happy condition is ``Ready``."""
    dependents = tuple(dict.fromkeys(t for t in args if t != READY))
    return ConditionSet(happy=READY, dependents=dependents)


class ConditionManager:
    """Reads and mutates the conditions of a status under a condition set."""

    def __init__(self, condition_set: ConditionSet, status: Status) -> None:
        self._set = condition_set
        self._status = status

    def get_condition(self, condition_type: str) -> Condition | None:
        """Return the condition of the given type, or None if it is absent."""
        return next(
            (c for c in self._status.conditions if c.type == condition_type), None
        )

    def initialize_conditions(self) -> None:
        """Add the happy and terminal conditions that are not yet present."""
        happy = self.get_condition(self._set.happy)
        if happy is None:
            happy = Condition(type=self._set.happy)
            self._put(happy)
        status = ConditionStatus.TRUE if happy.is_true() else ConditionStatus.UNKNOWN
        for condition_type in self._set.dependents:
            if self.get_condition(condition_type) is None:
                self._put(Condition(type=condition_type, status=status))

    def is_happy(self) -> bool:
        """Whether the happy condition is true."""
        return _is_true(self.get_condition(self._set.happy))

    def mark_true(self, condition_type: str) -> None:
        """Mark a condition true, and the happy one too once all terminals are."""
        self._put(
            Condition(
                type=condition_type,
                status=ConditionStatus.TRUE,
                severity=self._severity(condition_type),
            )
        )
        if all(_is_true(self.get_condition(t)) for t in self._set.dependents):
            self._put(
                Condition(
                    type=self._set.happy,
                    status=ConditionStatus.TRUE,
                    severity=self._severity(self._set.happy),
                )
            )

    def mark_false(self, condition_type: str, reason: str, message: str) -> None:
        """Mark a condition false; a terminal one drags the happy one with it."""
        types = [condition_type]
        if condition_type in self._set.dependents:
            types.append(self._set.happy)
        for t in types:
            self._put(
                Condition(
                    type=t,
                    status=ConditionStatus.FALSE,
                    severity=self._severity(t),
                    reason=reason,
                    message=message,
                )
            )

    def mark_unknown(self, condition_type: str, reason: str, message: str) -> None:
        """Mark a condition unknown; a failed terminal keeps the happy one false."""
        self._put(
            Condition(
                type=condition_type,
                status=ConditionStatus.UNKNOWN,
                severity=self._severity(condition_type),
                reason=reason,
                message=message,
            )
        )
        for t in self._set.dependents:
            if _is_false(self.get_condition(t)):
                if not _is_false(self.get_condition(self._set.happy)):
                    self.mark_false(self._set.happy, reason, message)
                return
        if condition_type in self._set.dependents:
            self._put(
                Condition(
                    type=self._set.happy,
                    status=ConditionStatus.UNKNOWN,
                    severity=self._severity(self._set.happy),
                    reason=reason,
                    message=message,
                )
            )

    def _severity(self, condition_type: str) -> Severity:
        if condition_type == self._set.happy or condition_type in self._set.dependents:
            return Severity.ERROR
        return Severity.INFO

    def _put(self, condition: Condition) -> None:
        existing = self.get_condition(condition.type)
        if existing is not None and existing == condition:
            return
        condition = replace(condition, last_transition_time=datetime.now(timezone.utc))
        others = [c for c in self._status.conditions if c.type != condition.type]
        self._status.conditions = sorted([*others, condition], key=lambda c: c.type)


def _is_true(condition: Condition | None) -> bool:
    return condition is not None and condition.is_true()


def _is_false(condition: Condition | None) -> bool:
    return condition is not None and condition.is_false()