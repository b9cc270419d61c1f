"""
Graphset REST routes.

All routes are mounted under /api by main.py.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel

from graphset.core.Errors import UnknownItemError
from graphset.server.state import graph_state

logger = logging.getLogger(__name__)

router = APIRouter()


# ── GET /graphset ─────────────────────────────────────────────────────────────

@router.get("/graphset")
async def get_graphset() -> Dict[str, Any]:
    return graph_state.snapshot()


# ── GET /graphset/nodes ───────────────────────────────────────────────────────

@router.get("/graphset/nodes")
async def get_nodes() -> Dict[str, Any]:
    snapshot = graph_state.snapshot()
    return {
        "nodes": snapshot["nodes"],
        "connections": snapshot["connections"],
        "returnPath": snapshot["returnPath"],
    }


# ── GET /graphset/items ───────────────────────────────────────────────────────

@router.get("/graphset/items")
async def get_items() -> List[Dict[str, Any]]:
    return graph_state.snapshot()["items"]


# ── GET /graphset/open-zone ───────────────────────────────────────────────────

@router.get("/graphset/open-zone")
async def get_open_zone() -> Dict[str, Any]:
    return graph_state.snapshot()["openZone"]


# ── POST /pointer/down ────────────────────────────────────────────────────────

class PointerDownBody(BaseModel):
    itemId: str
    x: float
    y: float


@router.post("/pointer/down")
async def pointer_down(body: PointerDownBody) -> Dict[str, Any]:
    try:
        started = graph_state.pointer_down(body.itemId, body.x, body.y)
    except UnknownItemError as exc:
        logger.warning(f"pointer down on unknown item: {exc}")
        raise HTTPException(status_code=404, detail=str(exc))
    return {"started": started, "dragging": graph_state.controller.dragging_item_id}


# ── POST /pointer/move ────────────────────────────────────────────────────────

class PointerMoveBody(BaseModel):
    x: float
    y: float


@router.post("/pointer/move", status_code=204)
async def pointer_move(body: PointerMoveBody) -> Response:
    graph_state.pointer_move(body.x, body.y)
    return Response(status_code=204)


# ── POST /pointer/up ──────────────────────────────────────────────────────────

@router.post("/pointer/up")
async def pointer_up() -> Dict[str, Any]:
    outcome = graph_state.pointer_up()
    result = graph_state.snapshot()
    result["outcome"] = outcome.value
    return result


# ── POST /reset ───────────────────────────────────────────────────────────────

@router.post("/reset")
async def reset() -> Dict[str, Any]:
    graph_state.reset()
    return graph_state.snapshot()
