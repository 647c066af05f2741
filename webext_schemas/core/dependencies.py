from pathlib import Path
from typing import Optional
import os

from fastapi import HTTPException, status

from webext_schemas.domain.models import DEFAULT_OUT_DIR, LoaderConfig
from webext_schemas.services.loader import SchemaLoader

OUT_DIR_ENV_VAR = "WEBEXT_SCHEMAS_DIR"
TAG_ENV_VAR = "WEBEXT_SCHEMAS_TAG"

_schema_loader: Optional[SchemaLoader] = None

def get_out_dir() -> Path:
    env_path = os.environ.get(OUT_DIR_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_OUT_DIR

def get_loader_config() -> LoaderConfig:
    tag = os.environ.get(TAG_ENV_VAR) or None
    return LoaderConfig(tag=tag, out_dir=get_out_dir())

def set_schema_loader(loader: Optional[SchemaLoader]) -> None:
    global _schema_loader
    _schema_loader = loader

def get_schema_loader() -> SchemaLoader:
    """FastAPI dependency returning the loader populated at startup."""
    if _schema_loader is None or not _schema_loader.is_loaded:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Schemas are not loaded yet",
        )
    return _schema_loader
