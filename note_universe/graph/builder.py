from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Iterable

from note_universe.core.links import valid_links
from note_universe.core.models import Note
from note_universe.settings import DEFAULT_COLOR

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    color: str
    val: int = 1


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str


@dataclass(frozen=True)
class GraphBuildResult:
    nodes: list[GraphNode]
    edges: list[GraphEdge]
    stats: dict

    def to_payload(self) -> dict:
        return {
            "nodes": [asdict(n) for n in self.nodes],
            "edges": [asdict(e) for e in self.edges],
        }


def build_graph_snapshot(notes: Iterable[Note]) -> GraphBuildResult:
    """
    Node/edge structure for a force-layout renderer.

    One node per note; one edge per link whose target exists. Repeated links
    to the same target produce repeated edges.
    """
    t0 = time.perf_counter()
    notes = list(notes)

    nodes = [
        GraphNode(id=n.id, label=n.title, color=n.color or DEFAULT_COLOR)
        for n in notes
    ]

    edges: list[GraphEdge] = []
    for src, targets in valid_links(notes).items():
        for dst in targets:
            edges.append(GraphEdge(source=src, target=dst))

    links_total = sum(len(n.links) for n in notes)
    dt_ms = (time.perf_counter() - t0) * 1000.0
    stats = {
        "nodes": len(nodes),
        "edges": len(edges),
        "dangling": links_total - len(edges),
        "time_ms": dt_ms,
    }
    log.debug("Graph built: nodes=%d edges=%d dangling=%d time_ms=%.2f",
              stats["nodes"], stats["edges"], stats["dangling"], dt_ms)
    return GraphBuildResult(nodes=nodes, edges=edges, stats=stats)
