#!/usr/bin/env python3
"""
FastAPI server exposing a catalog session over HTTP.

Meant for a single operator on the local machine. Every request runs under
one lock, so mutations, sorts and searches never interleave. Browsers may
only call it from localhost pages, and exports are written inside the
directory the server was started in.
"""
import itertools
import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .catalog import Catalog
from .items import DEFAULT_UNIT, Item, items_constructed

logger = logging.getLogger(__name__)

LOCAL_ORIGINS = r"https?://(localhost|127\.0\.0\.1|\[::1\])(:\d+)?"


class CatalogSession:
    """A catalog with its lock and the id sequence used for new items."""

    def __init__(self, catalog: Optional[Catalog] = None, export_dir: Optional[Path] = None):
        self.catalog = catalog if catalog is not None else Catalog()
        self.export_dir = Path(export_dir or Path.cwd()).resolve()
        self.lock = threading.Lock()
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def export_path(self, name: str) -> Optional[Path]:
        """Resolve ``name`` inside the export directory, or None if it points elsewhere."""
        target = (self.export_dir / name).resolve()
        if target == self.export_dir or not target.is_relative_to(self.export_dir):
            return None
        return target


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start every server run with an empty catalog exporting to the current directory."""
    app.state.session = CatalogSession(export_dir=Path.cwd())
    logger.info("Catalog session started, exports go to %s", app.state.session.export_dir)

    yield

    app.state.session = None


app = FastAPI(title="Inventory Tracker", lifespan=lifespan)

# Only pages served from this machine may call the API from a browser
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=LOCAL_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ItemCreate(BaseModel):
    """New item; the fields used depend on ``kind``."""
    kind: Literal["general", "electronics", "grocery"] = "general"
    name: str
    price: float
    quantity: int
    weight: float = 0.0
    unit: str = DEFAULT_UNIT
    warranty_months: int = 0
    brand: str = ""
    perishable: bool = False


class ItemUpdate(BaseModel):
    quantity: Optional[int] = None
    price: Optional[float] = None
    weight: Optional[float] = None
    unit: Optional[str] = None
    category: Optional[str] = None


class ExportRequest(BaseModel):
    path: str


def get_session(request: Request) -> CatalogSession:
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=500, detail="Catalog not initialized")
    return session


def build_item(item_id: int, data: ItemCreate) -> Item:
    if data.kind == "electronics":
        return Item.electronics(item_id, data.name, data.price, data.quantity,
                                data.warranty_months, data.brand)
    if data.kind == "grocery":
        return Item.grocery(item_id, data.name, data.price, data.quantity,
                            data.weight, data.unit, data.perishable)
    return Item(item_id, data.name, data.price, data.quantity, data.weight, data.unit)


@app.get("/api/items")
def list_items(request: Request) -> dict:
    """All items in current catalog order."""
    session = get_session(request)
    with session.lock:
        return {"items": [item.to_dict() for item in session.catalog]}


@app.post("/api/items")
def add_item(data: ItemCreate, request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        item = build_item(session.next_id(), data)
        session.catalog.add(item)
        return {"success": True, "item": item.to_dict()}


@app.delete("/api/items")
def clear_items(request: Request) -> dict:
    """Remove every item from the catalog."""
    session = get_session(request)
    with session.lock:
        session.catalog.clear()
        return {"success": True, "message": "Cleared all products"}


@app.get("/api/items/{item_id}")
def get_item(item_id: int, request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        item = session.catalog.find_by_id(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
        return item.to_dict()


@app.patch("/api/items/{item_id}")
def update_item(item_id: int, data: ItemUpdate, request: Request) -> dict:
    """Update the stock fields of an item."""
    session = get_session(request)
    with session.lock:
        item = session.catalog.find_by_id(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
        for field_name, value in data.model_dump(exclude_none=True).items():
            setattr(item, field_name, value)
        return {"success": True, "item": item.to_dict()}


@app.delete("/api/items/{item_id}")
def remove_item(item_id: int, request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        if not session.catalog.remove(item_id):
            raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
        return {"success": True, "message": f"Removed item {item_id}"}


@app.post("/api/sort/{key}")
def sort_items(key: Literal["name", "price", "quantity"], request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        sorters = {
            "name": session.catalog.sort_by_name,
            "price": session.catalog.sort_by_price,
            "quantity": session.catalog.sort_by_quantity,
        }
        sorters[key]()
        return {"items": [item.to_dict() for item in session.catalog]}


@app.get("/api/search")
def search_items(q: str, request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        results = session.catalog.search_by_name(q)
        return {"count": len(results), "items": [item.to_dict() for item in results]}


@app.get("/api/statistics")
def statistics(request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        stats = session.catalog.statistics()
        return {
            "count": stats.count,
            "total_value": round(stats.total_value, 2),
            "total_quantity": stats.total_quantity,
            "items_constructed": items_constructed(),
        }


@app.get("/api/log")
def transaction_log(request: Request) -> dict:
    session = get_session(request)
    with session.lock:
        return {"entries": list(session.catalog.transaction_log)}


@app.get("/api/grid")
def grid(request: Request, cols: int = Query(3, ge=1)) -> dict:
    """Items laid out row-major in ``cols`` columns."""
    session = get_session(request)
    with session.lock:
        rows = session.catalog.grid(cols)
        return {"rows": [[item.id if item is not None else None for item in row] for row in rows]}


@app.post("/api/export")
def export_csv(data: ExportRequest, request: Request) -> dict:
    """Export the catalog to a file inside the server's export directory."""
    session = get_session(request)
    target = session.export_path(data.path)
    if target is None:
        raise HTTPException(status_code=400, detail=f"Export path must be inside {session.export_dir}")

    with session.lock:
        try:
            session.catalog.export(target)
        except OSError as e:
            logger.warning("Export to %s failed: %s", target, e)
            raise HTTPException(status_code=500, detail=f"Error exporting: {e}")
        return {"success": True, "message": f"Exported successfully to {target}"}


@app.get("/health")
def health(request: Request) -> dict:
    """Health check endpoint."""
    session = getattr(request.app.state, "session", None)
    return {
        "status": "ok",
        "catalog_loaded": session is not None,
        "item_count": len(session.catalog) if session else 0,
    }
