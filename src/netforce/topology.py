# MIT License (see LICENSE)
"""
Built-in supply-chain network.

Three suppliers feed three warehouse/distribution hubs, which serve five
retail stores. Positions are laid out for a 1000x700 viewport.
"""
from __future__ import annotations
from typing import Any

from .config import SimulationConfig
from .simulation import Simulation

SUPPLY_CHAIN_NODES: tuple[dict[str, Any], ...] = (
    {"id": 0, "type": "SUPPLIER", "x": 400, "y": 100, "stress": 0.2, "label": "Raw Materials S1"},
    {"id": 1, "type": "SUPPLIER", "x": 600, "y": 100, "stress": 0.4, "label": "Raw Materials S2"},
    {"id": 2, "type": "SUPPLIER", "x": 500, "y": 200, "stress": 0.1, "label": "Raw Materials S3"},
    {"id": 3, "type": "WAREHOUSE", "x": 300, "y": 350, "stress": 0.6, "label": "Central Hub W1"},
    {"id": 4, "type": "WAREHOUSE", "x": 700, "y": 350, "stress": 0.3, "label": "Central Hub W2"},
    {"id": 5, "type": "WAREHOUSE", "x": 500, "y": 450, "stress": 0.8, "label": "Distribution D1"},
    {"id": 6, "type": "RETAILER", "x": 150, "y": 550, "stress": 0.2, "label": "Store R1"},
    {"id": 7, "type": "RETAILER", "x": 350, "y": 550, "stress": 0.5, "label": "Store R2"},
    {"id": 8, "type": "RETAILER", "x": 500, "y": 580, "stress": 0.4, "label": "Store R3"},
    {"id": 9, "type": "RETAILER", "x": 650, "y": 550, "stress": 0.3, "label": "Store R4"},
    {"id": 10, "type": "RETAILER", "x": 800, "y": 520, "stress": 0.7, "label": "Store R5"},
)

SUPPLY_CHAIN_EDGES: tuple[dict[str, Any], ...] = (
    {"source": 0, "target": 3},
    {"source": 0, "target": 2},
    {"source": 1, "target": 2},
    {"source": 1, "target": 4},
    {"source": 2, "target": 3},
    {"source": 2, "target": 4},
    {"source": 2, "target": 5},
    {"source": 3, "target": 5},
    {"source": 3, "target": 6},
    {"source": 3, "target": 7},
    {"source": 4, "target": 5},
    {"source": 4, "target": 9},
    {"source": 4, "target": 10},
    {"source": 5, "target": 7},
    {"source": 5, "target": 8},
    {"source": 5, "target": 9},
    {"id": 16, "source": 6, "target": 7},
    {"id": 17, "source": 7, "target": 8},
    {"id": 18, "source": 8, "target": 9},
    {"id": 19, "source": 9, "target": 10},
)


def supply_chain(
    width: float = 1000.0,
    height: float = 700.0,
    config: SimulationConfig | None = None,
    **kwargs: Any,
) -> Simulation:
    """Simulation preloaded with the built-in supply-chain network."""
    return Simulation.from_graph(
        SUPPLY_CHAIN_NODES, SUPPLY_CHAIN_EDGES, width=width, height=height, config=config, **kwargs
    )
