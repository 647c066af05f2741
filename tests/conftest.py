"""Shared fixtures: a fake extracted schema tree and fake archive responses."""

import io
import zipfile
from pathlib import Path

import httpx
import pytest

from webext_schemas.domain.models import LoaderConfig

TAG = "FIREFOX_128_0_3_RELEASE"
SCHEMA_SUBPATH = ("components", "extensions", "schemas")

PRIVACY_JSON = """// This Source Code Form is subject to the terms of the Mozilla Public
// License, v. 2.0.

[
  {
    "namespace": "privacy",
    "permissions": ["privacy"],
    /* nested namespaces are declared as separate entries */
    "properties": {}
  },
  {
    "namespace": "privacy.network",
    "description": "http://example.invalid/not-a-comment"
  }
]
"""

MANIFEST_JSON = """/* license */
[
  {
    "namespace": "manifest",
    "types": [{"id": "WebExtensionManifest", "type": "object"}] // trailing note
  },
  {
    "namespace": "privacy",
    "permissions": ["privacy"]
  }
]
"""

BROWSER_FILES = {"privacy.json": PRIVACY_JSON, "README.md": "not a schema"}
TOOLKIT_FILES = {"manifest.json": MANIFEST_JSON}


def area_dir(out_dir: Path, area: str, tag: str = TAG) -> Path:
    return out_dir.joinpath(f"mozilla-unified-{tag}", area, *SCHEMA_SUBPATH)


def write_area(out_dir: Path, area: str, files: dict, tag: str = TAG) -> Path:
    target = area_dir(out_dir, area, tag)
    target.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (target / name).write_text(content, encoding="utf-8")
    return target


def make_archive(area: str, files: dict, tag: str = TAG) -> bytes:
    """Zip laid out the way hg.mozilla.org serves a subdirectory archive."""
    buf = io.BytesIO()
    prefix = "/".join([f"mozilla-unified-{tag}", area, *SCHEMA_SUBPATH])
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(f"{prefix}/{name}", content)
    return buf.getvalue()


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / ".schemas"


@pytest.fixture
def schema_tree(out_dir):
    """An already extracted tree for TAG."""
    write_area(out_dir, "browser", BROWSER_FILES)
    write_area(out_dir, "toolkit", TOOLKIT_FILES)
    return out_dir


@pytest.fixture
def config(out_dir):
    return LoaderConfig(tag=TAG, out_dir=out_dir)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def archive_handler(tag: str = TAG):
    archives = {
        "browser": make_archive("browser", BROWSER_FILES, tag),
        "toolkit": make_archive("toolkit", TOOLKIT_FILES, tag),
    }

    def handler(request):
        path = request.url.path
        if f"/{tag}.zip/" not in path:
            return httpx.Response(404)
        for area, body in archives.items():
            if f".zip/{area}/" in path:
                return httpx.Response(200, content=body)
        return httpx.Response(404)

    return handler
