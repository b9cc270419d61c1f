"""
Graphset FastAPI + Socket.IO server.

Start with:
    python -m graphset.server.main

Or via uvicorn directly:
    uvicorn graphset.server.main:socket_app --port 3001 --reload
"""
from __future__ import annotations

import logging
import os

# Load .env before anything reads GRAPHSET_* settings (graph_state is built
# from the environment when the routes module is imported).
from dotenv import load_dotenv

load_dotenv(os.environ.get("GRAPHSET_ENV_FILE", ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from graphset.server.routes.graph_routes import router
from graphset.server.trace.socket_server import create_socket_app

# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Graphset Builder API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Wrap with Socket.IO ASGI layer
# ---------------------------------------------------------------------------

# socket_app is the top-level ASGI app passed to uvicorn.
# Socket.IO connections are handled at the root; all other requests are
# forwarded to the inner FastAPI app.
socket_app = create_socket_app(app)

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.environ.get("GRAPHSET_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "graphset.server.main:socket_app",
        host=os.environ.get("GRAPHSET_HOST", "0.0.0.0"),
        port=int(os.environ.get("GRAPHSET_PORT", "3001")),
        reload=True,
    )
