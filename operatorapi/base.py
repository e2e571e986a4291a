"""Common spec and status types shared by every operator-managed component."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from operatorapi.schema import GroupVersionKind

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

ConfigMapData = dict[str, dict[str, str]]
"""Overrides for upstream ConfigMaps: ConfigMap key to the data filled into it."""


# ---------------------------------------------------------------------------
# Decoding helpers


def _mapping(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{name}: expected an object, got {type(value).__name__}")
    return value


def _str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{name}: expected a string, got {type(value).__name__}")
    return value


def _opt_str(value: Any, name: str) -> str | None:
    return None if value is None else _str(value, name)


def _bool(value: Any, name: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise TypeError(f"{name}: expected a boolean, got {type(value).__name__}")
    return value


def _int(value: Any, name: str, low: int = _INT32_MIN, high: int = _INT32_MAX) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name}: expected an integer, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"{name}: {value} is out of range")
    return value


def _int_or_str(value: Any, name: str) -> int | str | None:
    if value is None or isinstance(value, str):
        return value
    return _int(value, name)


def _str_map(value: Any, name: str) -> dict[str, str]:
    if value is None:
        return {}
    return {str(k): _str(v, f"{name}.{k}") for k, v in _mapping(value, name).items()}


def _quantities(value: Any, name: str) -> dict[str, str]:
    if value is None:
        return {}
    result: dict[str, str] = {}
    for key, quantity in _mapping(value, name).items():
        if isinstance(quantity, bool) or not isinstance(quantity, (str, int, float)):
            raise TypeError(f"{name}.{key}: expected a quantity")
        result[str(key)] = str(quantity)
    return result


def _list(value: Any, name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{name}: expected a list, got {type(value).__name__}")
    return value


def _objects(value: Any, name: str) -> list[dict[str, Any]]:
    return [dict(_mapping(item, name)) for item in _list(value, name)]


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    """Store ``value`` unless it is empty, mirroring omitempty."""
    if value is None or value == "" or value == 0 and not isinstance(value, bool):
        return
    if isinstance(value, (dict, list)) and not value:
        return
    if value is False:
        return
    out[key] = value


# ---------------------------------------------------------------------------
# Override and option types


@dataclass
class Manifest:
    """A link to a manifest to install."""

    url: str = ""

    def _to_dict(self) -> dict[str, Any]:
        return {"URL": self.url}

    @classmethod
    def _from_dict(cls, data: Any) -> Manifest:
        d = _mapping(data, "manifest")
        return cls(url=_str(d.get("URL"), "URL"))


@dataclass
class HighAvailability:
    """The number of replicas the HA parts of the control plane scale to."""

    replicas: int | None = None

    def _to_dict(self) -> dict[str, Any]:
        return {"replicas": self.replicas}

    @classmethod
    def _from_dict(cls, data: Any) -> HighAvailability:
        d = _mapping(data, "high-availability")
        return cls(replicas=_int(d.get("replicas"), "replicas"))


@dataclass
class CustomCerts:
    """A ConfigMap or Secret holding trusted CA certificates."""

    type: str = ""
    name: str = ""

    def _to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "name": self.name}

    @classmethod
    def _from_dict(cls, data: Any) -> CustomCerts:
        d = _mapping(data, "custom-certs")
        return cls(type=_str(d.get("type"), "type"), name=_str(d.get("name"), "name"))


@dataclass
class Registry:
    """Image overrides for the component's images.

    ``default`` is a template such as ``registry.example.com/path/${NAME}:tag``;
    ``override`` maps a container or image name to a full image reference;
    ``image_pull_secrets`` names the secrets used to pull the images.
    """

    default: str = ""
    override: dict[str, str] = field(default_factory=dict)
    image_pull_secrets: list[str] = field(default_factory=list)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "default", self.default)
        _put(out, "override", dict(self.override))
        _put(out, "imagePullSecrets", [{"name": n} for n in self.image_pull_secrets])
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> Registry:
        d = _mapping(data, "registry")
        secrets = [
            _str(_mapping(s, "imagePullSecrets").get("name"), "imagePullSecrets.name")
            for s in _list(d.get("imagePullSecrets"), "imagePullSecrets")
        ]
        return cls(
            default=_str(d.get("default"), "default"),
            override=_str_map(d.get("override"), "override"),
            image_pull_secrets=secrets,
        )


@dataclass
class ResourceRequirementsOverride:
    """Resource requests and limits for one container."""

    container: str = ""
    limits: dict[str, str] = field(default_factory=dict)
    requests: dict[str, str] = field(default_factory=dict)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"container": self.container}
        _put(out, "limits", dict(self.limits))
        _put(out, "requests", dict(self.requests))
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> ResourceRequirementsOverride:
        d = _mapping(data, "resources")
        return cls(
            container=_str(d.get("container"), "container"),
            limits=_quantities(d.get("limits"), "limits"),
            requests=_quantities(d.get("requests"), "requests"),
        )


@dataclass
class EnvRequirementsOverride:
    """Environment variables for one container."""

    container: str = ""
    env_vars: list[dict[str, Any]] = field(default_factory=list)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"container": self.container}
        _put(out, "envVars", [dict(v) for v in self.env_vars])
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> EnvRequirementsOverride:
        d = _mapping(data, "env")
        return cls(
            container=_str(d.get("container"), "container"),
            env_vars=_objects(d.get("envVars"), "envVars"),
        )


@dataclass
class ProbesRequirementsOverride:
    """Probe timings for one container; zero means unset."""

    container: str = ""
    initial_delay_seconds: int = 0
    timeout_seconds: int = 0
    period_seconds: int = 0
    success_threshold: int = 0
    failure_threshold: int = 0
    termination_grace_period_seconds: int | None = None

    _KEYS = (
        ("initial_delay_seconds", "initialDelaySeconds"),
        ("timeout_seconds", "timeoutSeconds"),
        ("period_seconds", "periodSeconds"),
        ("success_threshold", "successThreshold"),
        ("failure_threshold", "failureThreshold"),
    )

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"container": self.container}
        for attr, key in self._KEYS:
            _put(out, key, getattr(self, attr))
        if self.termination_grace_period_seconds is not None:
            out["terminationGracePeriodSeconds"] = self.termination_grace_period_seconds
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> ProbesRequirementsOverride:
        d = _mapping(data, "probes")
        timings = {attr: _int(d.get(key), key) or 0 for attr, key in cls._KEYS}
        return cls(
            container=_str(d.get("container"), "container"),
            termination_grace_period_seconds=_int(
                d.get("terminationGracePeriodSeconds"),
                "terminationGracePeriodSeconds",
                _INT64_MIN,
                _INT64_MAX,
            ),
            **timings,
        )


@dataclass
class WorkloadOverride:
    """Overrides for one deployment or other workload."""

    name: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    replicas: int | None = None
    node_selector: dict[str, str] = field(default_factory=dict)
    topology_spread_constraints: list[dict[str, Any]] = field(default_factory=list)
    tolerations: list[dict[str, Any]] = field(default_factory=list)
    affinity: dict[str, Any] | None = None
    resources: list[ResourceRequirementsOverride] = field(default_factory=list)
    env: list[EnvRequirementsOverride] = field(default_factory=list)
    readiness_probes: list[ProbesRequirementsOverride] = field(default_factory=list)
    liveness_probes: list[ProbesRequirementsOverride] = field(default_factory=list)
    host_network: bool | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "labels", dict(self.labels))
        _put(out, "annotations", dict(self.annotations))
        if self.replicas is not None:
            out["replicas"] = self.replicas
        _put(out, "nodeSelector", dict(self.node_selector))
        _put(out, "topologySpreadConstraints", [dict(c) for c in self.topology_spread_constraints])
        _put(out, "tolerations", [dict(t) for t in self.tolerations])
        if self.affinity is not None:
            out["affinity"] = dict(self.affinity)
        _put(out, "resources", [r._to_dict() for r in self.resources])
        _put(out, "env", [e._to_dict() for e in self.env])
        _put(out, "readinessProbes", [p._to_dict() for p in self.readiness_probes])
        _put(out, "livenessProbes", [p._to_dict() for p in self.liveness_probes])
        if self.host_network is not None:
            out["hostNetwork"] = self.host_network
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> WorkloadOverride:
        d = _mapping(data, "workload")
        affinity = d.get("affinity")
        return cls(
            name=_str(d.get("name"), "name"),
            labels=_str_map(d.get("labels"), "labels"),
            annotations=_str_map(d.get("annotations"), "annotations"),
            replicas=_int(d.get("replicas"), "replicas"),
            node_selector=_str_map(d.get("nodeSelector"), "nodeSelector"),
            topology_spread_constraints=_objects(
                d.get("topologySpreadConstraints"), "topologySpreadConstraints"
            ),
            tolerations=_objects(d.get("tolerations"), "tolerations"),
            affinity=None if affinity is None else dict(_mapping(affinity, "affinity")),
            resources=[
                ResourceRequirementsOverride._from_dict(r)
                for r in _list(d.get("resources"), "resources")
            ],
            env=[EnvRequirementsOverride._from_dict(e) for e in _list(d.get("env"), "env")],
            readiness_probes=[
                ProbesRequirementsOverride._from_dict(p)
                for p in _list(d.get("readinessProbes"), "readinessProbes")
            ],
            liveness_probes=[
                ProbesRequirementsOverride._from_dict(p)
                for p in _list(d.get("livenessProbes"), "livenessProbes")
            ],
            host_network=_bool(d.get("hostNetwork"), "hostNetwork"),
        )


@dataclass
class ServiceOverride:
    """Overrides for one service."""

    name: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    selector: dict[str, str] = field(default_factory=dict)

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "labels", dict(self.labels))
        _put(out, "annotations", dict(self.annotations))
        _put(out, "selector", dict(self.selector))
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> ServiceOverride:
        d = _mapping(data, "service")
        return cls(
            name=_str(d.get("name"), "name"),
            labels=_str_map(d.get("labels"), "labels"),
            annotations=_str_map(d.get("annotations"), "annotations"),
            selector=_str_map(d.get("selector"), "selector"),
        )


@dataclass
class PodDisruptionBudgetOverride:
    """Overrides for one PodDisruptionBudget."""

    name: str = ""
    min_available: int | str | None = None
    max_unavailable: int | str | None = None
    selector: dict[str, Any] | None = None
    unhealthy_pod_eviction_policy: str | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.min_available is not None:
            out["minAvailable"] = self.min_available
        if self.selector is not None:
            out["selector"] = dict(self.selector)
        if self.max_unavailable is not None:
            out["maxUnavailable"] = self.max_unavailable
        if self.unhealthy_pod_eviction_policy is not None:
            out["unhealthyPodEvictionPolicy"] = self.unhealthy_pod_eviction_policy
        return out

    @classmethod
    def _from_dict(cls, data: Any) -> PodDisruptionBudgetOverride:
        d = _mapping(data, "podDisruptionBudget")
        selector = d.get("selector")
        return cls(
            name=_str(d.get("name"), "name"),
            min_available=_int_or_str(d.get("minAvailable"), "minAvailable"),
            max_unavailable=_int_or_str(d.get("maxUnavailable"), "maxUnavailable"),
            selector=None if selector is None else dict(_mapping(selector, "selector")),
            unhealthy_pod_eviction_policy=_opt_str(
                d.get("unhealthyPodEvictionPolicy"), "unhealthyPodEvictionPolicy"
            ),
        )


# ---------------------------------------------------------------------------
# Common spec


@dataclass
class CommonSpec:
    """The spec fields shared by all components."""

    config: ConfigMapData = field(default_factory=dict)
    registry: Registry = field(default_factory=Registry)
    deprecated_resources: list[ResourceRequirementsOverride] = field(default_factory=list)
    deployment_override: list[WorkloadOverride] = field(default_factory=list)
    workloads: list[WorkloadOverride] = field(default_factory=list)
    service_override: list[ServiceOverride] = field(default_factory=list)
    version: str = ""
    manifests: list[Manifest] = field(default_factory=list)
    additional_manifests: list[Manifest] = field(default_factory=list)
    high_availability: HighAvailability | None = None
    pod_disruption_budget_override: list[PodDisruptionBudgetOverride] = field(
        default_factory=list
    )

    def workload_overrides(self) -> list[WorkloadOverride]:
        """The deprecated deployment overrides followed by the workload overrides."""
        return [*self.deployment_override, *self.workloads]

    def to_dict(self) -> dict[str, Any]:
        """Encode the spec as its JSON object, leaving out empty fields."""
        out: dict[str, Any] = {}
        _put(out, "config", {k: dict(v) for k, v in self.config.items()})
        out["registry"] = self.registry._to_dict()
        _put(out, "resources", [r._to_dict() for r in self.deprecated_resources])
        _put(out, "deployments", [w._to_dict() for w in self.deployment_override])
        _put(out, "workloads", [w._to_dict() for w in self.workloads])
        _put(out, "services", [s._to_dict() for s in self.service_override])
        _put(out, "version", self.version)
        _put(out, "manifests", [m._to_dict() for m in self.manifests])
        _put(out, "additionalManifests", [m._to_dict() for m in self.additional_manifests])
        if self.high_availability is not None:
            out["high-availability"] = self.high_availability._to_dict()
        _put(
            out,
            "podDisruptionBudgets",
            [p._to_dict() for p in self.pod_disruption_budget_override],
        )
        return out


def _common_kwargs(data: Any) -> dict[str, Any]:
    """Decode the common spec fields of a JSON object into constructor arguments."""
    d = _mapping(data, "spec")
    config_data = d.get("config")
    config: ConfigMapData = {}
    if config_data is not None:
        config = {
            str(k): _str_map(v, f"config.{k}") if v is not None else {}
            for k, v in _mapping(config_data, "config").items()
        }
    registry = d.get("registry")
    ha = d.get("high-availability")
    return {
        "config": config,
        "registry": Registry() if registry is None else Registry._from_dict(registry),
        "deprecated_resources": [
            ResourceRequirementsOverride._from_dict(r)
            for r in _list(d.get("resources"), "resources")
        ],
        "deployment_override": [
            WorkloadOverride._from_dict(w) for w in _list(d.get("deployments"), "deployments")
        ],
        "workloads": [
            WorkloadOverride._from_dict(w) for w in _list(d.get("workloads"), "workloads")
        ],
        "service_override": [
            ServiceOverride._from_dict(s) for s in _list(d.get("services"), "services")
        ],
        "version": _str(d.get("version"), "version"),
        "manifests": [Manifest._from_dict(m) for m in _list(d.get("manifests"), "manifests")],
        "additional_manifests": [
            Manifest._from_dict(m)
            for m in _list(d.get("additionalManifests"), "additionalManifests")
        ],
        "high_availability": None if ha is None else HighAvailability._from_dict(ha),
        "pod_disruption_budget_override": [
            PodDisruptionBudgetOverride._from_dict(p)
            for p in _list(d.get("podDisruptionBudgets"), "podDisruptionBudgets")
        ],
    }


def common_spec_from_dict(data: Any) -> CommonSpec:
    """Decode a common spec from its JSON object."""
    return CommonSpec(**_common_kwargs(data))


# ---------------------------------------------------------------------------
# Component interfaces


@runtime_checkable
class KComponentSpec(Protocol):
    """The spec every component exposes."""

    config: ConfigMapData
    registry: Registry
    deprecated_resources: list[ResourceRequirementsOverride]
    version: str
    manifests: list[Manifest]
    additional_manifests: list[Manifest]
    high_availability: HighAvailability | None
    service_override: list[ServiceOverride]
    pod_disruption_budget_override: list[PodDisruptionBudgetOverride]

    def workload_overrides(self) -> list[WorkloadOverride]: ...


@runtime_checkable
class KComponentStatus(Protocol):
    """The status mutations every component supports."""

    version: str
    manifests: list[str]

    def mark_install_succeeded(self) -> None: ...

    def mark_install_failed(self, msg: str) -> None: ...

    def mark_deployments_available(self) -> None: ...

    def mark_deployments_not_ready(self, deployments: list[str]) -> None: ...

    def mark_version_migration_eligible(self) -> None: ...

    def mark_version_migration_not_eligible(self, msg: str) -> None: ...

    def mark_dependencies_installed(self) -> None: ...

    def mark_dependency_installing(self, msg: str) -> None: ...

    def mark_dependency_missing(self, msg: str) -> None: ...

    def is_ready(self) -> bool: ...


@runtime_checkable
class KComponent(Protocol):
    """A component resource with a common spec and status."""

    spec: KComponentSpec
    status: KComponentStatus

    def group_version_kind(self) -> GroupVersionKind: ...