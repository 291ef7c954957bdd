from .builder import GraphBuildResult, GraphEdge, GraphNode, build_graph_snapshot

__all__ = ["GraphNode", "GraphEdge", "GraphBuildResult", "build_graph_snapshot"]
