"""HTML bundle packager."""

from .config import PackagerConfig, load_config
from .errors import PackagingError, PreconditionViolation, MissingBundleFieldError, ManifestError
from .graph import BundleGraphAccessor, InMemoryBundleGraph, load_bundle_graph
from .html import HTMLPackager, package_html
from .models import Asset, Bundle, BundleGroup, BundleResult, Dependency, Environment, OutputFormat, Target
from .renderer import DefaultInlineRenderer
from .urls import url_join, replace_url_references

__version__ = "1.0.0"

__all__ = [
    "PackagerConfig",
    "load_config",
    "PackagingError",
    "PreconditionViolation",
    "MissingBundleFieldError",
    "ManifestError",
    "BundleGraphAccessor",
    "InMemoryBundleGraph",
    "load_bundle_graph",
    "HTMLPackager",
    "package_html",
    "Asset",
    "Bundle",
    "BundleGroup",
    "BundleResult",
    "Dependency",
    "Environment",
    "OutputFormat",
    "Target",
    "DefaultInlineRenderer",
    "url_join",
    "replace_url_references",
]
