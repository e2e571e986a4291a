"""Data model for the operator.knative.dev v1beta1 API: resources, specs, status conditions and a type scheme."""

__version__ = "0.1.0"

__all__ = ["base", "conditions", "configurations", "resources", "schema", "scheme", "status"]