import pytest

from operatorapi.base import (
    CommonSpec,
    CustomCerts,
    EnvRequirementsOverride,
    HighAvailability,
    KComponentSpec,
    Manifest,
    PodDisruptionBudgetOverride,
    ProbesRequirementsOverride,
    Registry,
    ResourceRequirementsOverride,
    ServiceOverride,
    WorkloadOverride,
    common_spec_from_dict,
)


def _full_spec() -> CommonSpec:
    return CommonSpec(
        config={"logging": {"loglevel.controller": "debug"}, "defaults": {}},
        registry=Registry(
            default="registry.example.com/knative/${NAME}:v1",
            override={"controller": "registry.example.com/ctrl:v2"},
            image_pull_secrets=["pull-secret"],
        ),
        deprecated_resources=[
            ResourceRequirementsOverride(
                container="activator", limits={"cpu": "1"}, requests={"memory": "64Mi"}
            )
        ],
        deployment_override=[WorkloadOverride(name="controller", replicas=0)],
        workloads=[
            WorkloadOverride(
                name="webhook",
                labels={"a": "b"},
                annotations={"c": "d"},
                replicas=3,
                node_selector={"disk": "ssd"},
                tolerations=[{"key": "k", "operator": "Exists"}],
                affinity={"nodeAffinity": {}},
                env=[
                    EnvRequirementsOverride(
                        container="webhook", env_vars=[{"name": "X", "value": "1"}]
                    )
                ],
                readiness_probes=[
                    ProbesRequirementsOverride(container="webhook", period_seconds=5)
                ],
                liveness_probes=[
                    ProbesRequirementsOverride(
                        container="webhook", termination_grace_period_seconds=0
                    )
                ],
                host_network=False,
            )
        ],
        service_override=[ServiceOverride(name="svc", selector={"app": "x"})],
        version="1.2",
        manifests=[Manifest(url="https://example.com/a.yaml")],
        additional_manifests=[Manifest(url="https://example.com/b.yaml")],
        high_availability=HighAvailability(replicas=2),
        pod_disruption_budget_override=[
            PodDisruptionBudgetOverride(name="pdb", min_available="50%")
        ],
    )


def test_workload_overrides_puts_deployments_first():
    first = WorkloadOverride(name="first")
    second = WorkloadOverride(name="second")
    spec = CommonSpec(deployment_override=[first], workloads=[second])
    assert spec.workload_overrides() == [first, second]


def test_workload_overrides_does_not_alias_fields():
    spec = CommonSpec(deployment_override=[WorkloadOverride(name="x")])
    spec.workload_overrides().append(WorkloadOverride(name="y"))
    assert [w.name for w in spec.deployment_override] == ["x"]


def test_empty_spec_encodes_only_registry():
    assert CommonSpec().to_dict() == {"registry": {}}


def test_round_trip_full_spec():
    spec = _full_spec()
    assert common_spec_from_dict(spec.to_dict()) == spec


def test_json_keys_follow_source_tags():
    encoded = _full_spec().to_dict()
    assert set(encoded) == {
        "config",
        "registry",
        "resources",
        "deployments",
        "workloads",
        "services",
        "version",
        "manifests",
        "additionalManifests",
        "high-availability",
        "podDisruptionBudgets",
    }
    assert encoded["manifests"] == [{"URL": "https://example.com/a.yaml"}]
    assert encoded["registry"]["imagePullSecrets"] == [{"name": "pull-secret"}]


def test_pointer_fields_kept_when_zero():
    encoded = _full_spec().to_dict()
    assert encoded["deployments"] == [{"name": "controller", "replicas": 0}]
    webhook = encoded["workloads"][0]
    assert webhook["hostNetwork"] is False
    assert webhook["livenessProbes"] == [
        {"container": "webhook", "terminationGracePeriodSeconds": 0}
    ]
    assert webhook["readinessProbes"] == [{"container": "webhook", "periodSeconds": 5}]


def test_high_availability_without_replicas_encodes_null():
    spec = CommonSpec(high_availability=HighAvailability())
    assert spec.to_dict()["high-availability"] == {"replicas": None}


def test_decode_from_source_shaped_document():
    spec = common_spec_from_dict(
        {
            "version": "1.2",
            "config": {"network": {"ingress.class": "kourier.ingress.networking.knative.dev"}},
            "high-availability": {"replicas": 2},
        }
    )
    assert spec.version == "1.2"
    assert spec.config["network"]["ingress.class"] == "kourier.ingress.networking.knative.dev"
    assert spec.high_availability == HighAvailability(replicas=2)
    assert spec.registry == Registry()


def test_numeric_quantities_are_read_as_strings():
    spec = common_spec_from_dict(
        {"resources": [{"container": "c", "limits": {"cpu": 2}}]}
    )
    assert spec.deprecated_resources[0].limits == {"cpu": "2"}


def test_decode_rejects_non_object():
    with pytest.raises(TypeError):
        common_spec_from_dict(["not", "an", "object"])


def test_decode_rejects_wrong_field_types():
    with pytest.raises(TypeError):
        common_spec_from_dict({"version": 12})
    with pytest.raises(TypeError):
        common_spec_from_dict({"workloads": [{"name": "w", "replicas": "three"}]})
    with pytest.raises(TypeError):
        common_spec_from_dict({"workloads": [{"name": "w", "hostNetwork": "yes"}]})


def test_decode_rejects_int32_overflow():
    with pytest.raises(ValueError):
        common_spec_from_dict({"high-availability": {"replicas": 2**31}})


def test_common_spec_satisfies_spec_protocol():
    spec = CommonSpec(version="1.2", workloads=[WorkloadOverride(name="w")])
    assert isinstance(spec, KComponentSpec) is True
    assert isinstance(Manifest(), KComponentSpec) is False
    assert spec.version == "1.2"
    assert [w.name for w in spec.workload_overrides()] == ["w"]


def test_custom_certs_round_trip():
    certs = CustomCerts(type="Secret", name="certs")
    assert CustomCerts._from_dict(certs._to_dict()) == certs
    assert set(certs._to_dict()) == {"type", "name"}


def test_pdb_int_or_string_round_trip():
    pdb = PodDisruptionBudgetOverride(name="p", max_unavailable=1, selector={"matchLabels": {}})
    spec = CommonSpec(pod_disruption_budget_override=[pdb])
    decoded = common_spec_from_dict(spec.to_dict())
    assert decoded.pod_disruption_budget_override == [pdb]
    assert "minAvailable" not in spec.to_dict()["podDisruptionBudgets"][0]