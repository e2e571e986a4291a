"""The KnativeServing and KnativeEventing resources and their specs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from operatorapi.base import CommonSpec, CustomCerts, _put
from operatorapi.configurations import (
    CephSourceConfiguration,
    ContourIngressConfiguration,
    GithubSourceConfiguration,
    GitlabSourceConfiguration,
    IstioIngressConfiguration,
    KafkaSourceConfiguration,
    KourierIngressConfiguration,
    RabbitmqSourceConfiguration,
    RedisSourceConfiguration,
    SecurityGuardConfiguration,
)
from operatorapi.schema import (
    KIND_KNATIVE_EVENTING,
    KIND_KNATIVE_SERVING,
    SCHEME_GROUP_VERSION,
    GroupVersionKind,
)
from operatorapi.status import KnativeEventingStatus, KnativeServingStatus


class ConversionError(Exception):
    """Raised when a resource cannot be converted to or from another version."""


def _highest_version_error(other: Any) -> ConversionError:
    return ConversionError(
        f"{SCHEME_GROUP_VERSION.version} is the highest known version, "
        f"got: {type(other).__name__}"
    )


@dataclass
class ObjectMeta:
    """The identifying metadata of a resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    generation: int = 0


# ---------------------------------------------------------------------------
# Option groups


@dataclass
class IngressConfigs:
    """Which ingress adapters are shipped, and their options."""

    istio: IstioIngressConfiguration = field(default_factory=IstioIngressConfiguration)
    kourier: KourierIngressConfiguration = field(default_factory=KourierIngressConfiguration)
    contour: ContourIngressConfiguration = field(default_factory=ContourIngressConfiguration)

    def _to_dict(self) -> dict[str, Any]:
        return {
            "istio": self.istio.to_dict(),
            "kourier": self.kourier.to_dict(),
            "contour": self.contour._to_dict(),
        }


@dataclass
class SecurityConfigs:
    """Which security adapters are shipped."""

    security_guard: SecurityGuardConfiguration = field(
        default_factory=SecurityGuardConfiguration
    )

    def _to_dict(self) -> dict[str, Any]:
        return {"securityGuard": self.security_guard._to_dict()}


@dataclass
class SourceConfigs:
    """Which eventing sources are shipped."""

    ceph: CephSourceConfiguration = field(default_factory=CephSourceConfiguration)
    github: GithubSourceConfiguration = field(default_factory=GithubSourceConfiguration)
    gitlab: GitlabSourceConfiguration = field(default_factory=GitlabSourceConfiguration)
    kafka: KafkaSourceConfiguration = field(default_factory=KafkaSourceConfiguration)
    rabbitmq: RabbitmqSourceConfiguration = field(default_factory=RabbitmqSourceConfiguration)
    redis: RedisSourceConfiguration = field(default_factory=RedisSourceConfiguration)

    def _to_dict(self) -> dict[str, Any]:
        return {
            "ceph": self.ceph._to_dict(),
            "github": self.github._to_dict(),
            "gitlab": self.gitlab._to_dict(),
            "kafka": self.kafka._to_dict(),
            "rabbitmq": self.rabbitmq._to_dict(),
            "redis": self.redis._to_dict(),
        }


# ---------------------------------------------------------------------------
# KnativeServing


@dataclass
class KnativeServingSpec(CommonSpec):
    """Desired state of a KnativeServing."""

    controller_custom_certs: CustomCerts = field(default_factory=CustomCerts)
    ingress: IngressConfigs | None = None
    security: SecurityConfigs | None = None

    def to_dict(self) -> dict[str, Any]:
        """Encode the spec as its JSON object, leaving out empty fields."""
        out = super().to_dict()
        out["controller-custom-certs"] = self.controller_custom_certs._to_dict()
        if self.ingress is not None:
            out["ingress"] = self.ingress._to_dict()
        if self.security is not None:
            out["security"] = self.security._to_dict()
        return out


@dataclass
class KnativeServing:
    """A request to install Knative Serving."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: KnativeServingSpec = field(default_factory=KnativeServingSpec)
    status: KnativeServingStatus = field(default_factory=KnativeServingStatus)

    def group_version_kind(self) -> GroupVersionKind:
        return SCHEME_GROUP_VERSION.with_kind(KIND_KNATIVE_SERVING)

    def convert_to(self, sink: Any) -> None:
        """Convert into a higher version; there is none, so this always fails."""
        raise _highest_version_error(sink)

    def convert_from(self, source: Any) -> None:
        """Convert from a higher version; there is none, so this always fails."""
        raise _highest_version_error(source)


@dataclass
class KnativeServingList:
    """A list of KnativeServing resources."""

    items: list[KnativeServing] = field(default_factory=list)


# ---------------------------------------------------------------------------
# KnativeEventing


@dataclass
class KnativeEventingSpec(CommonSpec):
    """Desired state of a KnativeEventing."""

    default_broker_class: str = ""
    sink_binding_selection_mode: str = ""
    source: SourceConfigs | None = None

    def to_dict(self) -> dict[str, Any]:
        """Encode the spec as its JSON object, leaving out empty fields."""
        out = super().to_dict()
        _put(out, "defaultBrokerClass", self.default_broker_class)
        _put(out, "sinkBindingSelectionMode", self.sink_binding_selection_mode)
        if self.source is not None:
            out["source"] = self.source._to_dict()
        return out


@dataclass
class KnativeEventing:
    """A request to install Knative Eventing."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: KnativeEventingSpec = field(default_factory=KnativeEventingSpec)
    status: KnativeEventingStatus = field(default_factory=KnativeEventingStatus)

    def group_version_kind(self) -> GroupVersionKind:
        return SCHEME_GROUP_VERSION.with_kind(KIND_KNATIVE_EVENTING)

    def convert_to(self, sink: Any) -> None:
        """Convert into a higher version; there is none, so this always fails."""
        raise _highest_version_error(sink)

    def convert_from(self, source: Any) -> None:
        """Convert from a higher version; there is none, so this always fails."""
        raise _highest_version_error(source)


@dataclass
class KnativeEventingList:
    """A list of KnativeEventing resources."""

    items: list[KnativeEventing] = field(default_factory=list)