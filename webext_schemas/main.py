import logging

from fastapi import FastAPI

from webext_schemas.api.schemas import router as schemas_router
from webext_schemas.core.dependencies import get_loader_config, get_schema_loader, set_schema_loader
from webext_schemas.services.loader import SchemaLoader

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="WebExtension Schemas",
    version="0.1.0",
    description="Serves the WebExtension JSON schemas of a Firefox source snapshot.",
)


@app.on_event("startup")
async def startup_event() -> None:
    """
    Resolve the configured (or latest stable) tag, make sure its schemas are
    extracted locally and load them into memory.
    """
    config = get_loader_config()
    loader = await SchemaLoader(config).run()
    set_schema_loader(loader)
    logger.info(f"Serving schemas for {loader.resolved_tag()}")


@app.get("/")
async def index() -> dict:
    """
    Small summary of what is loaded.
    """
    loader = get_schema_loader()
    schemas = loader.schema_set()
    return {
        "tag": schemas.tag,
        "files": len(schemas.raw),
        "namespaces": len(schemas.namespaces),
    }


@app.get("/health")
async def health() -> dict:
    """
    Lightweight health check endpoint.
    """
    return {"status": "ok"}


app.include_router(schemas_router, prefix="/schemas", tags=["schemas"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "webext_schemas.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
