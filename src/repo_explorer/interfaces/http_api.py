"""HTTP API: FastAPI app wired to the exploration operations."""

from __future__ import annotations

import hmac
import logging
import os
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from repo_explorer.application import explore, explore_many
from repo_explorer.config import served_root
from repo_explorer.domain import ExplorerError, PathTraversalError
from repo_explorer.infrastructure.sandbox import normalize_root

logger = logging.getLogger(__name__)

app = FastAPI(title="repo-explorer")


@app.middleware("http")
async def _auth_middleware(request: Request, call_next):
    """Optional bearer-token authentication.

    Active only when the ``EXPLORER_API_KEY`` environment variable is set.
    When active, every endpoint except ``GET /health`` requires an
    ``Authorization: Bearer <key>`` header, compared in constant time.
    """
    api_key = os.environ.get("EXPLORER_API_KEY", "").strip()
    if api_key and request.url.path != "/health":
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "detail": "Authorization: Bearer <key> header required"},
                headers={"WWW-Authenticate": "Bearer"},
            )
        token = auth_header[len("Bearer "):]
        if not hmac.compare_digest(token.encode(), api_key.encode()):
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "detail": "Invalid API key"},
                headers={"WWW-Authenticate": "Bearer"},
            )
    return await call_next(request)


class ExploreRequest(BaseModel):
    """One request: the root, the operation, and its camelCase parameters as extra fields."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    root_path: Optional[str] = Field(None, alias="rootPath")
    operation: str = ""

    def params(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class BatchRequest(BaseModel):
    requests: List[Dict[str, Any]]
    continue_on_fail: bool = Field(False, alias="continueOnFail")

    model_config = ConfigDict(populate_by_name=True)


def _status_for(error: ExplorerError) -> int:
    return 403 if isinstance(error, PathTraversalError) else 400


def _bind_root(root_path: Optional[str]) -> str:
    """The served root. A request may omit ``rootPath`` or repeat it, never choose another."""
    root = served_root()
    if root_path and normalize_root(root_path) != normalize_root(root):
        logger.warning("refusing rootPath %r outside served root %r", root_path, root)
        raise HTTPException(status_code=403, detail=f"rootPath is not the served root: {root_path}")
    return root


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/explore")
def explore_endpoint(req: ExploreRequest):
    logger.info("POST /explore operation=%s root=%s", req.operation, req.root_path)
    try:
        return explore(_bind_root(req.root_path), req.operation, req.params())
    except ExplorerError as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))


@app.post("/explore/batch")
def explore_batch_endpoint(req: BatchRequest):
    logger.info("POST /explore/batch items=%d continue_on_fail=%s", len(req.requests), req.continue_on_fail)
    requests = [{**item, "rootPath": _bind_root(item.get("rootPath"))} for item in req.requests]
    try:
        return {"results": explore_many(requests, continue_on_fail=req.continue_on_fail)}
    except ExplorerError as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))
