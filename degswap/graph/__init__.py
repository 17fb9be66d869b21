"""Edge-list containers, adjacency conversion, validation and storage."""

from degswap.graph.convert import (
    degree_sequences,
    edges_from_adjacency,
    edges_to_adjacency,
)
from degswap.graph.io import load_edges, save_edges
from degswap.graph.types import EdgeListData
from degswap.graph.validation import (
    InvalidGraphError,
    check_inputs,
    validate_edge_list,
    validate_forbidden,
    validate_weights,
)

__all__ = [
    "EdgeListData",
    "InvalidGraphError",
    "check_inputs",
    "degree_sequences",
    "edges_from_adjacency",
    "edges_to_adjacency",
    "load_edges",
    "save_edges",
    "validate_edge_list",
    "validate_forbidden",
    "validate_weights",
]
