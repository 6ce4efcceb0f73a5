import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

import config
from database import get_database
from seed_data import DEFAULT_COURSES, FALLBACK_STUDENTS

logger = logging.getLogger(__name__)


def create_app(database=None) -> FastAPI:
    app = FastAPI(title="Student Dashboard Mock API")
    app.state.db = database if database is not None else get_database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s %s", request.method, request.url.path, response.status_code)
        return response

    register_routes(app)
    return app


def get_db(request: Request):
    return request.app.state.db


def require_resource(db, resource: str) -> None:
    if not db.has_resource(resource):
        raise HTTPException(status_code=404, detail=f"Unknown resource '{resource}'")


def register_routes(app: FastAPI) -> None:

    @app.get("/")
    def read_root():
        return {"message": "Student Dashboard Mock API"}

    @app.get("/health")
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/test")
    def test_database(db=Depends(get_db)):
        resp = {
            "backend": "✅ Running",
            "database": "❌ Not Available",
            "database_type": getattr(db, "name", None),
            "collections": [],
        }
        try:
            resp["collections"] = db.resources()[:10]
            resp["database"] = "✅ Connected & Working"
        except Exception as e:
            resp["database"] = f"⚠️  Connected but Error: {str(e)[:50]}"
        resp["database_url"] = "✅ Set" if os.getenv("DATABASE_URL") else "❌ Not Set"
        return resp

    # Demo seed
    @app.post("/seed")
    def seed(db=Depends(get_db)):
        counts = {
            "courses": db.seed("courses", DEFAULT_COURSES),
            "students": db.seed("students", FALLBACK_STUDENTS),
        }
        if not any(counts.values()):
            return {"message": "Already seeded"}
        return {"message": "Seeded", "count": counts}

    # Generic resources
    @app.get("/{resource}")
    def list_resource(resource: str, request: Request, q: Optional[str] = None, db=Depends(get_db)):
        require_resource(db, resource)
        filters = {k: v for k, v in request.query_params.items() if k != "q"}
        return db.list_documents(resource, filters, q)

    @app.post("/{resource}", status_code=201)
    def create_resource(resource: str, payload: Dict[str, Any], db=Depends(get_db)):
        require_resource(db, resource)
        return db.create_document(resource, payload)

    @app.get("/{resource}/{item_id}")
    def get_resource(resource: str, item_id: str, db=Depends(get_db)):
        require_resource(db, resource)
        doc = db.get_document(resource, item_id)
        if doc is None:
            raise HTTPException(status_code=404, detail="Not found")
        return doc

    @app.put("/{resource}/{item_id}")
    def replace_resource(resource: str, item_id: str, payload: Dict[str, Any], db=Depends(get_db)):
        require_resource(db, resource)
        doc = db.replace_document(resource, item_id, payload)
        if doc is None:
            raise HTTPException(status_code=404, detail="Not found")
        return doc

    @app.patch("/{resource}/{item_id}")
    def patch_resource(resource: str, item_id: str, payload: Dict[str, Any], db=Depends(get_db)):
        require_resource(db, resource)
        doc = db.update_document(resource, item_id, payload)
        if doc is None:
            raise HTTPException(status_code=404, detail="Not found")
        return doc

    @app.delete("/{resource}/{item_id}")
    def delete_resource(resource: str, item_id: str, db=Depends(get_db)):
        require_resource(db, resource)
        if not db.delete_document(resource, item_id):
            raise HTTPException(status_code=404, detail="Not found")
        return {}


app = create_app()


if __name__ == "__main__":
    import uvicorn
    config.configure_logging()
    logger.info("Mock API running on port %s, health check at /health", config.PORT)
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
