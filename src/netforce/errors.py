# MIT License (see LICENSE)
"""
Exception types raised by the layout simulator.

Configuration and topology problems are rejected eagerly, at construction
or update time. Problems that appear while the simulation runs (unknown node
ids in mutation calls, non-finite numbers) are contained and reported as
anomalies rather than raised; see ``Simulation.on_anomaly``.
"""
from __future__ import annotations


class NetforceError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(NetforceError, ValueError):
    """Invalid parameter, viewport, stress value or node type."""


class TopologyError(NetforceError, ValueError):
    """Duplicate node id, dangling edge or self-loop."""


class NodeNotFoundError(NetforceError, KeyError):
    """Strict lookup of a node id that does not exist."""


class SimulationError(NetforceError, RuntimeError):
    """The simulation was driven incorrectly, e.g. a reentrant step."""
