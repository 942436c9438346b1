"""kubetally - fleet-wide workload compliance and CPU request audit."""

__version__ = "0.3.0"
