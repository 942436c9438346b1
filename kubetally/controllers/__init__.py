"""Controllers module for kubetally.

This module provides controllers for fetching workload inventories from a
Kubernetes cluster and turning them into compliance records.
"""
