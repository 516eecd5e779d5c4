"""
kafka-sizer: ECKU capacity and cost estimator for managed Kafka clusters.

This package sizes throughput, storage, capacity units and cost for a fixed
taxonomy of business domains across deployment environments, and rolls the
results up under a shared or per-domain cluster topology.
"""

from kafka_sizer.version import __version__

__all__ = ["__version__"]
