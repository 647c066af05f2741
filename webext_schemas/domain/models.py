from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# A single parsed namespace declaration. Only the "namespace" key is relied upon.
Fragment = Dict[str, Any]

MOZ_REPO = "mozilla-unified"
MOZ_ARCHIVE_URL = "https://hg.mozilla.org/mozilla-unified/archive"
MOZ_LATEST_FX_URL = "https://download.mozilla.org/?product=firefox-latest&os=linux64&lang=en-US"

# Resolve project root (not the Python package root)
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_OUT_DIR = _PROJECT_ROOT / ".schemas"


class LoaderConfig(BaseModel):
    """
    Everything the schema loader needs to know about where schemas come from
    and where they are extracted to.

    The config is treated as immutable: resolving the latest tag produces a
    new instance via with_tag() instead of changing this one.
    """

    tag: Optional[str] = Field(
        default=None,
        description="Version tag of the source snapshot, e.g. FIREFOX_128_0_3_RELEASE. "
        "None means the latest stable release is resolved on run.",
    )
    out_dir: Path = Field(
        default=DEFAULT_OUT_DIR,
        description="Extraction root; holds one directory per version tag.",
    )
    repo_name: str = Field(
        default=MOZ_REPO,
        description="Repository name, used as prefix of the extracted tag directory.",
    )
    archive_base_url: str = Field(default=MOZ_ARCHIVE_URL)
    latest_release_url: str = Field(
        default=MOZ_LATEST_FX_URL,
        description="Endpoint that redirects to the latest stable Firefox release.",
    )
    areas: List[str] = Field(
        default_factory=lambda: ["browser", "toolkit"],
        description="Product areas of the source tree that carry a schema directory.",
    )
    schema_subpath: List[str] = Field(
        default_factory=lambda: ["components", "extensions", "schemas"],
    )
    http_timeout: float = Field(default=60.0, gt=0)
    force_download: bool = Field(
        default=False,
        description="Download and extract even if the tag directory already exists.",
    )

    @property
    def tag_dir(self) -> Path:
        if not self.tag:
            raise ValueError("tag is not set; resolve it before asking for the tag directory")
        return self.out_dir / f"{self.repo_name}-{self.tag}"

    def area_schema_dir(self, area: str) -> Path:
        return self.tag_dir.joinpath(area, *self.schema_subpath)

    def with_tag(self, tag: Optional[str]) -> "LoaderConfig":
        return self.model_copy(update={"tag": tag})


class SchemaSet(BaseModel):
    """Result of a completed loader run."""

    tag: str
    raw: Dict[str, List[Fragment]] = Field(default_factory=dict)
    namespaces: Dict[str, List[Fragment]] = Field(default_factory=dict)

    def namespace_names(self) -> List[str]:
        return sorted(self.namespaces)

    def get_namespace(self, name: str) -> Optional[List[Fragment]]:
        return self.namespaces.get(name)
