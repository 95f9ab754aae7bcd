from .tree import METADATA_CONTENT, parse_html, serialize_html, find_tag, walk
from .references import plan_bundle_references, insert_bundle_references
from .inline import replace_inline_content, find_inline_bundle
from .packager import HTMLPackager, package_html

__all__ = [
    "METADATA_CONTENT",
    "parse_html",
    "serialize_html",
    "find_tag",
    "walk",
    "plan_bundle_references",
    "insert_bundle_references",
    "replace_inline_content",
    "find_inline_bundle",
    "HTMLPackager",
    "package_html",
]
