"""Packager configuration."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "HTML_PACKAGER_"


class PackagerConfig(BaseModel):
    """Settings shared by every stage of the HTML packager"""

    placeholder_attribute: str = Field(
        default="data-parcel-key", description="Attribute marking nodes whose content is an inline bundle"
    )
    parser: Literal["html.parser"] = Field(
        default="html.parser", description="BeautifulSoup tree builder; only html.parser keeps the authored structure"
    )
    dedupe_references: bool = Field(
        default=False, description="Drop repeated bundles from the planned references"
    )
    asset_separator: str = Field(default="\n", description="Joins asset code when rendering inline bundles")


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in PackagerConfig.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def load_config(path: Optional[Path] = None) -> PackagerConfig:
    """Load config from an optional JSON file, then apply HTML_PACKAGER_* env overrides."""
    data: Dict[str, Any] = {}
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

    data.update(_env_overrides())
    return PackagerConfig.model_validate(data)
