"""HTTP server exposing the POS terminal as a REST API."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import load_settings
from .errors import LineItemNotFound
from .messages import LANGUAGES
from .presenter import session_payload
from .terminal import PosTerminal, build_terminal

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("pos-http-server")

# Global state
terminal: PosTerminal


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    global terminal

    # Startup
    logger.info("Starting POS HTTP Server...")
    terminal = build_terminal(load_settings())

    yield

    # Shutdown
    logger.info("Shutting down POS HTTP Server...")
    terminal.close()


app = FastAPI(
    title="POS Terminal",
    description="HTTP API for a point-of-sale terminal: product lookup, purchase list and checkout",
    version="0.1.0",
    lifespan=lifespan,
)


# Request Models
class CodeRequest(BaseModel):
    code: str


class LookupRequest(BaseModel):
    code: Optional[str] = None


class RemoveFromCartRequest(BaseModel):
    line_id: Optional[str] = None
    position: Optional[int] = None


class LanguageRequest(BaseModel):
    language: str


def _session() -> dict:
    return session_payload(terminal.state, terminal.language)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "POS Terminal",
        "version": "0.1.0",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "session": "GET /session",
            "code": "POST /code",
            "lookup": "POST /lookup",
            "cart": {"get": "GET /cart", "add": "POST /cart/add", "remove": "POST /cart/remove"},
            "purchase": "POST /purchase",
            "settings": {"language": "POST /settings/language", "get_language": "GET /settings/language"},
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "backend": terminal.client.base_url}


@app.get("/session")
async def get_session():
    """Current terminal session."""
    return _session()


@app.post("/code")
async def enter_code(request: CodeRequest):
    """Type into the code field."""
    terminal.enter_code(request.code)
    return _session()


@app.post("/lookup")
async def lookup(request: LookupRequest):
    """Look up a product and stage it. Failures are reported in the session body."""
    terminal.lookup(request.code)
    return _session()


@app.get("/cart")
async def get_cart():
    """Current purchase list."""
    state = terminal.state
    return {
        "count": len(state.cart),
        "total": state.cart_total,
        "items": [item.model_dump() for item in state.cart],
    }


@app.post("/cart/add")
async def add_to_cart():
    """Add the staged product to the purchase list."""
    if not terminal.state.can_add:
        raise HTTPException(status_code=409, detail="No product staged")
    terminal.add_to_cart()
    return _session()


@app.post("/cart/remove")
async def remove_from_cart(request: RemoveFromCartRequest):
    """Remove a line by line id or by 1-based position."""
    try:
        if request.line_id:
            terminal.remove_line(request.line_id)
        elif request.position is not None:
            terminal.remove_at(request.position - 1)
        else:
            raise HTTPException(status_code=400, detail="Either line_id or position must be provided")
    except LineItemNotFound as e:
        raise HTTPException(status_code=404, detail=f"No cart line {e}")
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session()


@app.post("/purchase")
async def purchase():
    """Submit the purchase list. Failures are reported in the session body."""
    terminal.purchase()
    return _session()


@app.post("/settings/language")
async def set_language(request: LanguageRequest):
    """Set the message language."""
    if request.language not in LANGUAGES:
        raise HTTPException(status_code=400, detail=f"Language must be one of: {', '.join(LANGUAGES)}")
    terminal.set_language(request.language)
    return {"success": True, "language": terminal.language}


@app.get("/settings/language")
async def get_language():
    """Get current language setting."""
    return {"language": terminal.language}


def run_http_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the HTTP server."""
    import uvicorn

    if reload:
        uvicorn.run("pos_server.http_server:app", host=host, port=port, reload=True, log_level="info")
    else:
        uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run_http_server()
