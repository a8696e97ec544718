"""helmgen -- turns a Kubernetes resource graph into an umbrella chart plan."""

__version__ = "0.1.0"
