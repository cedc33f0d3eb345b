"""clusterlens: point-in-time resource, density and cost views of a Kubernetes cluster."""

__version__ = "0.1.0"
