"""
Resolve the Firefox release tag and download/extract the schema archives.
"""
from __future__ import annotations

import asyncio
import io
import logging
import re
import zipfile
from pathlib import Path

import aiofiles.os
import httpx

from webext_schemas.domain.models import LoaderConfig

logger = logging.getLogger(__name__)

RELEASE_PATH_RE = re.compile(r"/pub/firefox/releases/([^/]+)/")


class SchemaLoaderError(Exception):
    """Base class for failures while loading schemas."""


class TagResolutionError(SchemaLoaderError):
    """The latest stable release could not be determined."""


class ArchiveDownloadError(SchemaLoaderError):
    """An archive download did not return a successful response."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(
            f"http status {status_code} while trying to download {url} - probably invalid tag name"
        )


def release_to_tag(release: str) -> str:
    """Convert a dotted release number (128.0.3) into a repository tag."""
    return f"FIREFOX_{release.replace('.', '_')}_RELEASE"


async def resolve_latest_tag(client: httpx.AsyncClient, config: LoaderConfig) -> str:
    """
    Follow the "latest Firefox" download link by hand and read the release
    number out of the redirect target.
    """
    logger.debug(f"Resolving latest stable tag via {config.latest_release_url}")
    response = await client.head(config.latest_release_url, follow_redirects=False)
    if response.status_code != 302:
        raise TagResolutionError(
            f"resolution failed: expected redirect from {config.latest_release_url}, "
            f"got http status {response.status_code}"
        )

    location = response.headers.get("location", "")
    match = RELEASE_PATH_RE.search(location)
    if not match:
        raise TagResolutionError(f"could not parse version from redirect target {location!r}")

    tag = release_to_tag(match.group(1))
    logger.info(f"Resolved latest stable tag: {tag}")
    return tag


def archive_url(config: LoaderConfig, area: str) -> str:
    if not config.tag:
        raise SchemaLoaderError("tag is not set; resolve it before downloading archives")
    return "/".join([config.archive_base_url, f"{config.tag}.zip", area, *config.schema_subpath])


def _extract_zip(data: bytes, out_dir: Path) -> int:
    out_dir.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(io.BytesIO(data), "r") as zip_ref:
        zip_ref.extractall(out_dir)
        return len(zip_ref.namelist())


async def download_area(client: httpx.AsyncClient, config: LoaderConfig, area: str) -> None:
    """Download the schema directory archive of one product area and unpack it."""
    url = archive_url(config, area)
    logger.info(f"Downloading {area} schemas from {url}")

    response = await client.get(url)
    if not response.is_success:
        raise ArchiveDownloadError(url, response.status_code)

    # zipfile is blocking; keep it off the event loop.
    count = await asyncio.to_thread(_extract_zip, response.content, config.out_dir)
    logger.info(f"Extracted {count} entries for {area} into {config.out_dir}")


async def download_archives(client: httpx.AsyncClient, config: LoaderConfig) -> None:
    """Fetch all product areas concurrently. The first failure propagates."""
    await asyncio.gather(*(download_area(client, config, area) for area in config.areas))


async def tag_dir_exists(config: LoaderConfig) -> bool:
    return await aiofiles.os.path.isdir(config.tag_dir)
