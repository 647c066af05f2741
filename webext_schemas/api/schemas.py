from __future__ import annotations

from typing import Dict, List
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from webext_schemas.core.dependencies import get_schema_loader
from webext_schemas.domain.models import Fragment
from webext_schemas.services.loader import SchemaLoader

logger = logging.getLogger(__name__)
router = APIRouter()

# ---------------------------------------------------------------------------
# Tag
# ---------------------------------------------------------------------------

@router.get("/tag")
async def get_tag(loader: SchemaLoader = Depends(get_schema_loader)) -> dict:
    return {"tag": loader.resolved_tag()}


# ---------------------------------------------------------------------------
# Raw schema files
# ---------------------------------------------------------------------------

@router.get("/raw")
async def get_raw_schemas(
    loader: SchemaLoader = Depends(get_schema_loader),
) -> Dict[str, List[Fragment]]:
    """
    All parsed schema files, keyed by file name (e.g. "privacy.json").
    """
    return loader.raw_schemas()


@router.get("/raw/{file_name}")
async def get_raw_schema(
    file_name: str,
    loader: SchemaLoader = Depends(get_schema_loader),
) -> List[Fragment]:
    fragments = loader.raw_schemas().get(file_name)
    if fragments is None:
        logger.debug(f"Unknown schema file requested: {file_name}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Schema file {file_name} not found",
        )
    return fragments


# ---------------------------------------------------------------------------
# Namespaces
# ---------------------------------------------------------------------------

@router.get("/namespaces")
async def list_namespaces(loader: SchemaLoader = Depends(get_schema_loader)) -> List[str]:
    return loader.schema_set().namespace_names()


@router.get("/namespaces/{namespace}")
async def get_namespace(
    namespace: str,
    loader: SchemaLoader = Depends(get_schema_loader),
) -> List[Fragment]:
    """
    Every fragment declared under the namespace, across all schema files.
    """
    fragments = loader.schema_set().get_namespace(namespace)
    if fragments is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Namespace {namespace} not found",
        )
    return fragments
