from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from packager.graph.base import BundleGraphAccessor
from packager.models import Bundle, BundleGroup, Dependency


@dataclass
class InMemoryBundleGraph(BundleGraphAccessor):
    """Bundle graph held in memory, with indices for the packager's queries."""

    bundles: Dict[str, Bundle] = field(default_factory=dict)  # id -> bundle
    bundle_groups: Dict[str, BundleGroup] = field(default_factory=dict)  # id -> group
    dependencies: Dict[str, Dependency] = field(default_factory=dict)  # id -> dependency

    # Indices for fast lookup
    groups_by_bundle: Dict[str, List[str]] = field(default_factory=dict)  # bundle_id -> [group_ids]
    dependencies_by_bundle: Dict[str, List[str]] = field(default_factory=dict)  # bundle_id -> [dep_ids]

    def add_bundle(self, bundle: Bundle) -> None:
        """Add a bundle to the graph"""
        self.bundles[bundle.id] = bundle

    def add_bundle_group(self, bundle_group: BundleGroup) -> None:
        """Add a bundle group and update the bundle -> group index"""
        self.bundle_groups[bundle_group.id] = bundle_group

        for bundle_id in bundle_group.bundle_ids:
            if bundle_id not in self.groups_by_bundle:
                self.groups_by_bundle[bundle_id] = []
            if bundle_group.id not in self.groups_by_bundle[bundle_id]:
                self.groups_by_bundle[bundle_id].append(bundle_group.id)

    def add_dependency(self, dependency: Dependency) -> None:
        """Add a dependency and update the source bundle index"""
        self.dependencies[dependency.id] = dependency

        source_id = dependency.source_bundle_id
        if source_id not in self.dependencies_by_bundle:
            self.dependencies_by_bundle[source_id] = []
        if dependency.id not in self.dependencies_by_bundle[source_id]:
            self.dependencies_by_bundle[source_id].append(dependency.id)

    def get_bundle(self, bundle_id: str) -> Bundle:
        return self.bundles[bundle_id]

    def get_external_dependencies(self, bundle: Bundle) -> List[Dependency]:
        dep_ids = self.dependencies_by_bundle.get(bundle.id, [])
        return [self.dependencies[did] for did in dep_ids if did in self.dependencies]

    def get_url_dependencies(self, bundle: Bundle) -> List[Dependency]:
        return [dep for dep in self.get_external_dependencies(bundle) if dep.is_url]

    def resolve_external_dependency(self, dependency: Dependency) -> Optional[BundleGroup]:
        if dependency.bundle_group_id is None:
            return None
        return self.bundle_groups.get(dependency.bundle_group_id)

    def get_bundles_in_bundle_group(self, bundle_group: BundleGroup) -> List[Bundle]:
        return [self.bundles[bid] for bid in bundle_group.bundle_ids if bid in self.bundles]

    def get_sibling_bundles(self, bundle: Bundle) -> List[Bundle]:
        siblings: List[Bundle] = []
        seen = {bundle.id}
        for group_id in self.groups_by_bundle.get(bundle.id, []):
            for sibling in self.get_bundles_in_bundle_group(self.bundle_groups[group_id]):
                if sibling.id not in seen:
                    seen.add(sibling.id)
                    siblings.append(sibling)
        return siblings

    def traverse_bundles(self) -> Iterator[Bundle]:
        return iter(self.bundles.values())
