"""Group, version, kind and resource identifiers for the operator API."""

from __future__ import annotations

from dataclasses import dataclass

GROUP_NAME = "operator.knative.dev"
"""The API group of the operator resources."""

KIND_KNATIVE_EVENTING = "KnativeEventing"
"""Kind of Knative Eventing in a group/version/kind context."""

KIND_KNATIVE_SERVING = "KnativeServing"
"""Kind of Knative Serving in a group/version/kind context."""

SCHEMA_VERSION = "v1beta1"
"""The current version of the API."""


@dataclass(frozen=True)
class GroupResource:
    """A resource qualified by its API group."""

    group: str = ""
    resource: str = ""

    def __str__(self) -> str:
        if not self.group:
            return self.resource
        return f"{self.resource}.{self.group}"


@dataclass(frozen=True)
class GroupKind:
    """A kind qualified by its API group."""

    group: str = ""
    kind: str = ""

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str = ""
    version: str = ""

    def with_kind(self, kind: str) -> GroupVersionKind:
        """Return the fully qualified kind within this group version."""
        return GroupVersionKind(self.group, self.version, kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        """Return the fully qualified resource within this group version."""
        return GroupVersionResource(self.group, self.version, resource)

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


@dataclass(frozen=True)
class GroupVersionKind:
    """A kind qualified by API group and version."""

    group: str = ""
    version: str = ""
    kind: str = ""

    def group_kind(self) -> GroupKind:
        """Drop the version."""
        return GroupKind(self.group, self.kind)

    def group_version(self) -> GroupVersion:
        """Drop the kind."""
        return GroupVersion(self.group, self.version)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


@dataclass(frozen=True)
class GroupVersionResource:
    """A resource qualified by API group and version."""

    group: str = ""
    version: str = ""
    resource: str = ""

    def group_resource(self) -> GroupResource:
        """Drop the version."""
        return GroupResource(self.group, self.resource)

    def group_version(self) -> GroupVersion:
        """Drop the resource."""
        return GroupVersion(self.group, self.version)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Resource={self.resource}"


SCHEME_GROUP_VERSION = GroupVersion(group=GROUP_NAME, version=SCHEMA_VERSION)
"""The group version under which the operator types are registered."""

KNATIVE_SERVING_RESOURCE = GroupResource(group=GROUP_NAME, resource="knativeservings")
"""The KnativeServing resource."""

KNATIVE_EVENTING_RESOURCE = GroupResource(group=GROUP_NAME, resource="knativeeventings")
"""The KnativeEventing resource."""


def kind(kind: str) -> GroupKind:
    """Qualify an unqualified kind with the operator API group."""
    return SCHEME_GROUP_VERSION.with_kind(kind).group_kind()


def resource(resource: str) -> GroupResource:
    """Qualify an unqualified resource with the operator API group."""
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()