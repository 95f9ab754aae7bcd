"""
Core models for the HTML packager.

Bundles, bundle groups, assets and dependencies are read-only snapshots handed
over by the build pipeline. The packager only reads them.
"""

from enum import Enum
from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Environment / Target
# ============================================================================


class OutputFormat(str, Enum):
    """Module format a bundle was emitted in"""

    GLOBAL = "global"
    COMMONJS = "commonjs"
    ESMODULE = "esmodule"


ESMODULE_FORMAT = OutputFormat.ESMODULE


class Target(BaseModel):
    """Deployment target of a bundle"""

    model_config = ConfigDict(frozen=True)

    public_url: str = Field(default="/", description="Public URL prefix the bundle is served from")
    dist_dir: Optional[str] = Field(default=None, description="Output directory on disk")


class Environment(BaseModel):
    """Environment a bundle was compiled for"""

    model_config = ConfigDict(frozen=True)

    output_format: OutputFormat = OutputFormat.GLOBAL
    context: Optional[str] = None


# ============================================================================
# Graph Models
# ============================================================================


class Asset(BaseModel):
    """A compiled source unit"""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    unique_key: Optional[str] = Field(default=None, description="Key used by inline placeholders")
    code: str = ""
    file_path: Optional[str] = None


class Bundle(BaseModel):
    """One build output unit (a JS file, a CSS file, an HTML page...)"""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    name: Optional[str] = None
    target: Optional[Target] = None
    env: Environment = Field(default_factory=Environment)
    is_inline: bool = False
    assets: List[Asset] = Field(default_factory=list)
    entry_asset_ids: List[str] = Field(default_factory=list)

    def traverse_assets(self) -> Iterator[Asset]:
        """Iterate over the assets contained in the bundle"""
        return iter(self.assets)

    def get_entry_assets(self) -> List[Asset]:
        """Get entry assets in entry order"""
        by_id = {asset.id: asset for asset in self.assets}
        return [by_id[aid] for aid in self.entry_asset_ids if aid in by_id]

    def get_main_entry(self) -> Optional[Asset]:
        """Get the main entry asset (the last entry), if any"""
        entries = self.get_entry_assets()
        return entries[-1] if entries else None

    @property
    def is_esmodule(self) -> bool:
        return self.env.output_format == ESMODULE_FORMAT


class BundleGroup(BaseModel):
    """Bundles sharing a common entry point"""

    model_config = ConfigDict(frozen=True)

    id: str
    entry_asset_id: str
    bundle_ids: List[str] = Field(default_factory=list)


class Dependency(BaseModel):
    """A reference from a bundle to another bundle group"""

    model_config = ConfigDict(frozen=True)

    id: str
    source_bundle_id: str
    bundle_group_id: Optional[str] = Field(default=None, description="Resolved bundle group, None if unresolved")
    is_url: bool = Field(default=False, description="Left as a URL placeholder in rendered contents")
    specifier: Optional[str] = None


class BundleResult(BaseModel):
    """Rendered contents of a bundle"""

    contents: str
