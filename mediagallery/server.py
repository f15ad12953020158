"""FastAPI server for viewing a gallery."""

from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from .config import GalleryConfig
from .gallery import ALL_CATEGORIES, GalleryContext, build_page, filter_by_category, get_categories
from .models import GalleryDocument

app = FastAPI(title="Media Gallery")


def _load_context() -> GalleryContext:
    """Reload the document for this request."""
    if not hasattr(app.state, 'data_path'):
        raise HTTPException(500, "Server not configured")
    document = GalleryDocument.load_or_empty(app.state.data_path)
    return GalleryContext(document=document, config=app.state.config)


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the gallery page."""
    page = build_page(_load_context())
    if page is None:
        raise HTTPException(500, "Gallery could not be rendered")
    return page


@app.get("/data/images.json")
async def get_document() -> dict:
    """Get the gallery document in the shape it is stored in."""
    return _load_context().document.to_data()


@app.get("/api/categories")
async def categories() -> list[str]:
    return get_categories(_load_context().document)


@app.get("/api/render", response_class=HTMLResponse)
async def render_category(category: str = ALL_CATEGORIES):
    """Render the items of one category as a flat list."""
    return filter_by_category(_load_context(), category)


def create_app(data_path: Path, config: GalleryConfig | None = None) -> FastAPI:
    app.state.data_path = data_path
    app.state.config = config or GalleryConfig()
    return app


def run_server(data_path: Path, host: str = "127.0.0.1", port: int = 8000):
    """Run the server."""
    import uvicorn

    create_app(data_path)

    print(f"Serving gallery at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)
