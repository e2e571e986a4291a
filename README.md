# operatorapi

A plain-Python model of the `operator.knative.dev/v1beta1` API. It covers the
`KnativeServing` and `KnativeEventing` resources, their common spec, their
status conditions, and a small scheme that registers the known kinds and
creates instances of them.

It has no runtime dependencies and needs Python 3.10 or later.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Group, version, kind

`operatorapi.schema` holds the identifiers of the API group. These types are
frozen dataclasses:

- `GroupVersion`
- `GroupVersionKind`
- `GroupVersionResource`
- `GroupKind`
- `GroupResource`

The module also defines these constants:

- `GROUP_NAME`
- `SCHEMA_VERSION`
- `SCHEME_GROUP_VERSION`
- `KNATIVE_SERVING_RESOURCE`
- `KNATIVE_EVENTING_RESOURCE`

Two helpers, `kind()` and `resource()`, qualify a bare name with the
`operator.knative.dev` group.

```python
from operatorapi.schema import kind, resource

print(resource("knativeservings"))   # knativeservings.operator.knative.dev
print(kind("KnativeServing"))        # KnativeServing.operator.knative.dev
```

## Common spec

`operatorapi.base.CommonSpec` holds the spec fields that every component
shares:

- `config`: per-ConfigMap overrides
- `registry`
- `deprecated_resources`
- `deployment_override` and `workloads`
- `service_override`
- `version`
- `manifests` and `additional_manifests`
- `high_availability`
- `pod_disruption_budget_override`

`workload_overrides()` returns the deprecated deployment overrides followed by
the workload overrides.

`to_dict()` encodes a spec as its JSON object. Empty fields are left out, and
the JSON field names are used, such as `deployments`, `services` and
`high-availability`. `common_spec_from_dict()` decodes a common spec from such
an object. It raises `TypeError` when a value has the wrong type, and
`ValueError` when an integer is out of range.

The module also defines the protocols `KComponent`, `KComponentSpec` and
`KComponentStatus`, which the resource types satisfy.

## Option types

`operatorapi.configurations` holds the ingress options:

- `IstioIngressConfiguration`, with `IstioGatewayOverride`
- `KourierIngressConfiguration`
- `ContourIngressConfiguration`

It also holds `SecurityGuardConfiguration` and the on/off eventing source
options, such as `KafkaSourceConfiguration` and `RedisSourceConfiguration`.

## Resources

`operatorapi.resources` defines `KnativeServing` and `KnativeEventing`. Each
one has `metadata` (an `ObjectMeta`), a `spec` and a `status`.

- `KnativeServingSpec` extends `CommonSpec` with `controller_custom_certs`,
  `ingress` (an `IngressConfigs`) and `security` (a `SecurityConfigs`).
- `KnativeEventingSpec` extends `CommonSpec` with `default_broker_class`,
  `sink_binding_selection_mode` and `source` (a `SourceConfigs`).

```python
from operatorapi.resources import KnativeServing, KnativeServingSpec

ks = KnativeServing(spec=KnativeServingSpec(version="1.2"))
print(ks.group_version_kind())   # operator.knative.dev/v1beta1, Kind=KnativeServing
print(ks.spec.to_dict()["version"])  # 1.2
```

`v1beta1` is the highest known version. For that reason `convert_to` and
`convert_from` always raise `ConversionError`.

## Status and conditions

`KnativeServingStatus` and `KnativeEventingStatus` both derive from
`operatorapi.status.ComponentStatus`. Each one records a `version`, a list of
`manifests`, and these four conditions:

- `DependenciesInstalled`
- `DeploymentsAvailable`
- `InstallSucceeded`
- `VersionMigrationEligible`

The `Ready` condition becomes true once all four are true. It becomes false as
soon as any one of them is marked false.

```python
from operatorapi.status import KnativeServingStatus

status = KnativeServingStatus()
status.initialize_conditions()
status.mark_install_succeeded()      # also marks dependencies installed if their state is unknown
status.mark_version_migration_eligible()
status.mark_deployments_available()
print(status.is_ready())             # True

status.mark_deployments_not_ready(["controller", "webhook"])
print(status.get_condition("DeploymentsAvailable").message)
# Waiting on deployments: controller, webhook
```

The generic machinery lives in `operatorapi.conditions`. It provides:

- `Condition`, `ConditionStatus` and `Severity`
- `new_living_condition_set`
- `ConditionSet.manage`
- `ConditionManager`, with `get_condition`, `initialize_conditions`,
  `is_happy`, `mark_true`, `mark_false` and `mark_unknown`

## Scheme

`operatorapi.scheme.Scheme` maps group/version/kind identifiers to types. Each
type is registered under its class name as the kind. `add_to_scheme()`
registers these four types under `operator.knative.dev/v1beta1`:

- `KnativeServing`
- `KnativeServingList`
- `KnativeEventing`
- `KnativeEventingList`

```python
from operatorapi.scheme import Scheme, add_to_scheme
from operatorapi.schema import SCHEME_GROUP_VERSION

scheme = Scheme()
add_to_scheme(scheme)
gvk = SCHEME_GROUP_VERSION.with_kind("KnativeEventing")
print(scheme.recognizes(gvk))   # True
obj = scheme.new(gvk)           # an empty KnativeEventing
```

`new()` raises `LookupError` for a kind that is not registered.
`add_known_types()` raises `ValueError` if a different type is registered
under a kind that is already taken.

## What it does not do

This package is a data model only. It does not:

- talk to a cluster, or watch or reconcile resources;
- serve a conversion webhook;
- download release manifests;
- provide any command.

It also has no decoder for a whole `KnativeServing` or `KnativeEventing`
object. Only the common spec can be decoded, with `common_spec_from_dict()`.