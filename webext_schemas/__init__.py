"""
Download, parse and index the WebExtension JSON schemas shipped in the
Firefox source tree.
"""
from webext_schemas.domain.models import LoaderConfig, SchemaSet
from webext_schemas.services.downloader import (
    ArchiveDownloadError,
    SchemaLoaderError,
    TagResolutionError,
)
from webext_schemas.services.loader import SchemaLoader, load_schemas

__all__ = [
    "ArchiveDownloadError",
    "LoaderConfig",
    "SchemaLoader",
    "SchemaLoaderError",
    "SchemaSet",
    "TagResolutionError",
    "load_schemas",
]
