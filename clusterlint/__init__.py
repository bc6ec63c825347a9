"""Best-practice checks for the objects in a Kubernetes cluster."""

__version__ = "0.1.0"