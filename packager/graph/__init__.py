from .base import BundleGraphAccessor
from .memory import InMemoryBundleGraph
from .loader import GraphManifest, build_bundle_graph, load_bundle_graph

__all__ = [
    "BundleGraphAccessor",
    "InMemoryBundleGraph",
    "GraphManifest",
    "build_bundle_graph",
    "load_bundle_graph",
]
