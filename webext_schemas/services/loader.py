"""
Schema loader: resolve a tag, make sure its schemas are extracted locally,
parse every schema file and index the fragments by namespace.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import aiofiles
import aiofiles.os
import httpx

from webext_schemas.domain.json_comments import loads_with_comments
from webext_schemas.domain.models import Fragment, LoaderConfig, SchemaSet
from webext_schemas.services.downloader import (
    SchemaLoaderError,
    download_archives,
    resolve_latest_tag,
    tag_dir_exists,
)

logger = logging.getLogger(__name__)


def extract_namespaces(raw: Dict[str, List[Fragment]]) -> Dict[str, List[Fragment]]:
    """
    Group every fragment of every file by its "namespace" field.

    A namespace can be declared in several files, so entries accumulate.
    """
    namespaces: Dict[str, List[Fragment]] = {}
    for fragments in raw.values():
        for fragment in fragments:
            namespaces.setdefault(fragment["namespace"], []).append(fragment)
    return namespaces


async def _read_schema_file(path: Path) -> List[Fragment]:
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        text = await f.read()
    logger.debug(f"Parsing {path}")
    return loads_with_comments(text)


async def _parse_area(schema_dir: Path) -> List[Tuple[str, List[Fragment]]]:
    files = sorted(
        name for name in await aiofiles.os.listdir(schema_dir) if Path(name).suffix == ".json"
    )
    parsed = await asyncio.gather(*(_read_schema_file(schema_dir / name) for name in files))
    return list(zip(files, parsed))


class SchemaLoader:
    """
    Loads the WebExtension JSON schemas of one Firefox source snapshot.

    Usage:
        loader = await SchemaLoader().configure("FIREFOX_128_0_3_RELEASE").run()
        loader.namespaces()["privacy"]
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or LoaderConfig()
        self.client = client
        self._result: Optional[SchemaSet] = None

    def configure(self, tag: Optional[str] = None) -> "SchemaLoader":
        """Set the target tag. Without a tag the latest stable release is used."""
        self.config = self.config.with_tag(tag)
        return self

    async def run(self) -> "SchemaLoader":
        if self.client is not None:
            await self._run(self.client)
        else:
            async with httpx.AsyncClient(timeout=self.config.http_timeout) as client:
                await self._run(client)
        return self

    async def _run(self, client: httpx.AsyncClient) -> None:
        config = self.config
        if not config.tag:
            config = config.with_tag(await resolve_latest_tag(client, config))

        if config.force_download or not await tag_dir_exists(config):
            await download_archives(client, config)
        else:
            logger.info(f"Using existing extraction at {config.tag_dir}")

        raw = await self.parse_schemas(config)
        namespaces = extract_namespaces(raw)
        logger.info(f"Loaded {len(raw)} schema files with {len(namespaces)} namespaces for {config.tag}")

        self.config = config
        # raw and namespaces share the same fragment objects.
        self._result = SchemaSet.model_construct(tag=config.tag, raw=raw, namespaces=namespaces)

    async def parse_schemas(self, config: LoaderConfig) -> Dict[str, List[Fragment]]:
        """
        Read and parse every *.json file of every area.

        Areas are merged in configured order; if two areas ship the same file
        name, the later area wins.
        """
        per_area = await asyncio.gather(
            *(_parse_area(config.area_schema_dir(area)) for area in config.areas)
        )

        raw: Dict[str, List[Fragment]] = {}
        for area, entries in zip(config.areas, per_area):
            for file_name, fragments in entries:
                if file_name in raw:
                    logger.warning(f"Schema file {file_name} from {area} replaces an earlier one")
                raw[file_name] = fragments
        return raw

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._result is not None

    def schema_set(self) -> SchemaSet:
        if self._result is None:
            raise SchemaLoaderError("schemas are not loaded yet; call run() first")
        return self._result

    def raw_schemas(self) -> Dict[str, List[Fragment]]:
        return self.schema_set().raw

    def namespaces(self) -> Dict[str, List[Fragment]]:
        return self.schema_set().namespaces

    def resolved_tag(self) -> str:
        return self.schema_set().tag


async def load_schemas(
    tag: Optional[str] = None,
    out_dir: Optional[Path] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> SchemaSet:
    """One-shot helper: run a loader and return its SchemaSet."""
    config = LoaderConfig(tag=tag)
    if out_dir is not None:
        config = config.model_copy(update={"out_dir": Path(out_dir)})
    loader = await SchemaLoader(config, client=client).run()
    return loader.schema_set()
