from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from packager.models import Bundle, BundleGroup, Dependency


class BundleGraphAccessor(ABC):
    """
    Read-only view over the build graph.
    The packager never mutates bundles or the graph, it only queries them.
    """

    @abstractmethod
    def get_bundle(self, bundle_id: str) -> Bundle:
        """Get a bundle by id. Raises KeyError for unknown ids."""
        pass

    @abstractmethod
    def get_external_dependencies(self, bundle: Bundle) -> List[Dependency]:
        """Dependencies of the bundle pointing outside its own bundle group."""
        pass

    @abstractmethod
    def resolve_external_dependency(self, dependency: Dependency) -> Optional[BundleGroup]:
        """Resolve a dependency to its bundle group, or None when it has none."""
        pass

    @abstractmethod
    def get_bundles_in_bundle_group(self, bundle_group: BundleGroup) -> List[Bundle]:
        pass

    @abstractmethod
    def get_sibling_bundles(self, bundle: Bundle) -> List[Bundle]:
        """Other bundles sharing a bundle group with the given bundle."""
        pass

    @abstractmethod
    def traverse_bundles(self) -> Iterator[Bundle]:
        """
        Lazily iterate over every bundle in the build.

        Consumers that only need the first match stop iterating early.
        """
        pass

    @abstractmethod
    def get_url_dependencies(self, bundle: Bundle) -> List[Dependency]:
        """Dependencies left as URL placeholders in the bundle's rendered contents."""
        pass
