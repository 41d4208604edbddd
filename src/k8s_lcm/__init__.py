"""
k8s_lcm: Inventory container images running in a Kubernetes cluster.

Collects the images used by containers and init containers across
namespaces, deduplicates them, and parses each reference into registry,
name and version so a lifecycle-management step can compare them against
upstream releases.
"""

__version__ = "0.1.0"
