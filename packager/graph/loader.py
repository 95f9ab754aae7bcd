"""Bundle graph manifest - contract between the build pipeline and the packager CLI."""

import json
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger
from pydantic import BaseModel, Field

from packager.errors import ManifestError
from packager.graph.memory import InMemoryBundleGraph
from packager.models import Bundle, BundleGroup, Dependency


class GraphManifest(BaseModel):
    """Serialized bundle graph."""

    bundles: List[Bundle] = Field(default_factory=list)
    bundle_groups: List[BundleGroup] = Field(default_factory=list)
    dependencies: List[Dependency] = Field(default_factory=list)


def build_bundle_graph(data: Dict[str, Any]) -> InMemoryBundleGraph:
    """Validate manifest data and build an in-memory bundle graph from it."""
    manifest = GraphManifest.model_validate(data)
    graph = InMemoryBundleGraph()

    for bundle in manifest.bundles:
        graph.add_bundle(bundle)

    for group in manifest.bundle_groups:
        unknown = [bid for bid in group.bundle_ids if bid not in graph.bundles]
        if unknown:
            raise ManifestError(f"Bundle group {group.id} references unknown bundles: {', '.join(unknown)}")
        graph.add_bundle_group(group)

    for dependency in manifest.dependencies:
        if dependency.source_bundle_id not in graph.bundles:
            raise ManifestError(
                f"Dependency {dependency.id} has unknown source bundle {dependency.source_bundle_id}"
            )
        if dependency.bundle_group_id is not None and dependency.bundle_group_id not in graph.bundle_groups:
            raise ManifestError(
                f"Dependency {dependency.id} references unknown bundle group {dependency.bundle_group_id}"
            )
        graph.add_dependency(dependency)

    logger.debug(
        f"Loaded bundle graph: {len(graph.bundles)} bundles, "
        f"{len(graph.bundle_groups)} groups, {len(graph.dependencies)} dependencies"
    )
    return graph


def load_bundle_graph(path: Path) -> InMemoryBundleGraph:
    """Load a bundle graph manifest from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid manifest {path}: {e}")

    if not isinstance(data, dict):
        raise ManifestError(f"Invalid manifest {path}: expected a JSON object")

    return build_bundle_graph(data)
