"""Ingress, security and eventing source options of the operator resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from operatorapi.base import _bool, _int, _mapping, _objects, _put, _str, _str_map


def _enabled(data: Any, name: str) -> bool:
    return bool(_bool(_mapping(data, name).get("enabled"), "enabled"))


@dataclass
class _Toggle:
    """An option that only switches a component on or off."""

    enabled: bool = False

    def _to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled}

    @classmethod
    def _from_dict(cls, data: Any) -> Any:
        return cls(enabled=_enabled(data, cls.__name__))


# ---------------------------------------------------------------------------
# Ingress


@dataclass
class IstioGatewayOverride:
    """Overrides for the knative-ingress-gateway or knative-local-gateway."""

    selector: dict[str, str] = field(default_factory=dict)
    servers: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Encode as the JSON object, leaving out empty fields."""
        out: dict[str, Any] = {}
        _put(out, "selector", dict(self.selector))
        _put(out, "servers", [dict(s) for s in self.servers])
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> IstioGatewayOverride:
        d = _mapping(data, "gateway")
        return cls(
            selector=_str_map(d.get("selector"), "selector"),
            servers=_objects(d.get("servers"), "servers"),
        )


@dataclass
class IstioIngressConfiguration:
    """Options for the Istio ingress."""

    enabled: bool = False
    knative_ingress_gateway: IstioGatewayOverride | None = None
    knative_local_gateway: IstioGatewayOverride | None = None

    def to_dict(self) -> dict[str, Any]:
        """Encode as the JSON object, leaving out unset gateways."""
        out: dict[str, Any] = {"enabled": self.enabled}
        if self.knative_ingress_gateway is not None:
            out["knative-ingress-gateway"] = self.knative_ingress_gateway.to_dict()
        if self.knative_local_gateway is not None:
            out["knative-local-gateway"] = self.knative_local_gateway.to_dict()
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> IstioIngressConfiguration:
        d = _mapping(data, "istio")
        ingress = d.get("knative-ingress-gateway")
        local = d.get("knative-local-gateway")
        return cls(
            enabled=_enabled(d, "istio"),
            knative_ingress_gateway=(
                None if ingress is None else IstioGatewayOverride._from_dict(ingress)
            ),
            knative_local_gateway=(
                None if local is None else IstioGatewayOverride._from_dict(local)
            ),
        )


@dataclass
class KourierIngressConfiguration:
    """Options for the Kourier ingress."""

    enabled: bool = False
    service_type: str = ""
    service_load_balancer_ip: str = ""
    http_port: int = 0
    https_port: int = 0
    bootstrap_configmap_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Encode as the JSON object, leaving out empty fields."""
        out: dict[str, Any] = {"enabled": self.enabled}
        _put(out, "service-type", self.service_type)
        _put(out, "service-load-balancer-ip", self.service_load_balancer_ip)
        _put(out, "http-port", self.http_port)
        _put(out, "https-port", self.https_port)
        _put(out, "bootstrap-configmap", self.bootstrap_configmap_name)
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> KourierIngressConfiguration:
        d = _mapping(data, "kourier")
        return cls(
            enabled=_enabled(d, "kourier"),
            service_type=_str(d.get("service-type"), "service-type"),
            service_load_balancer_ip=_str(
                d.get("service-load-balancer-ip"), "service-load-balancer-ip"
            ),
            http_port=_int(d.get("http-port"), "http-port") or 0,
            https_port=_int(d.get("https-port"), "https-port") or 0,
            bootstrap_configmap_name=_str(
                d.get("bootstrap-configmap"), "bootstrap-configmap"
            ),
        )


@dataclass
class ContourIngressConfiguration(_Toggle):
    """Whether the Contour ingress is enabled."""


# ---------------------------------------------------------------------------
# Security


@dataclass
class SecurityGuardConfiguration(_Toggle):
    """Whether the security guard component is enabled."""


# ---------------------------------------------------------------------------
# Eventing sources


@dataclass
class AwssqsSourceConfiguration(_Toggle):
    """Whether the AWS SQS source is enabled."""


@dataclass
class CephSourceConfiguration(_Toggle):
    """Whether the Ceph source is enabled."""


@dataclass
class CouchdbSourceConfiguration(_Toggle):
    """Whether the CouchDB source is enabled."""


@dataclass
class GithubSourceConfiguration(_Toggle):
    """Whether the GitHub source is enabled."""


@dataclass
class GitlabSourceConfiguration(_Toggle):
    """Whether the GitLab source is enabled."""


@dataclass
class KafkaSourceConfiguration(_Toggle):
    """Whether the Kafka source is enabled."""


@dataclass
class NatssSourceConfiguration(_Toggle):
    """Whether the NATS Streaming source is enabled."""


@dataclass
class PrometheusSourceConfiguration(_Toggle):
    """Whether the Prometheus source is enabled."""


@dataclass
class RabbitmqSourceConfiguration(_Toggle):
    """Whether the RabbitMQ source is enabled."""


@dataclass
class RedisSourceConfiguration(_Toggle):
    """Whether the Redis source is enabled."""