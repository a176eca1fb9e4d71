"""Public and admin endpoints for CMS collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel

from site_cms.api.admin import is_admin, require_admin
from site_cms.api.rate_limit import RateLimited
from site_cms.domain.content import get_collection

if TYPE_CHECKING:
    from site_cms.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["content"], dependencies=[Depends(RateLimited("api"))]
)


class ReorderRequest(BaseModel):
    """New display order for a collection, as a list of document ids."""

    ids: list[str]


def _ensure_readable(collection_name: str, admin: bool, include_all: bool) -> None:
    collection = get_collection(collection_name)
    if (include_all or not collection.public) and not admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/pages/navbar")
async def navbar_pages(request: Request) -> dict[str, object]:
    """Published pages shown in the site navigation."""
    container: AppContainer = request.app.state.container
    return {"success": True, "pages": await container.content_service.navbar_pages()}


@router.get("/{collection_name}")
async def list_documents(
    collection_name: str,
    request: Request,
    include_all: bool = Query(default=False, alias="includeAll"),
    admin: bool = Depends(is_admin),
) -> dict[str, object]:
    """List a collection; drafts and inactive items need `includeAll` and admin."""
    _ensure_readable(collection_name, admin, include_all)
    container: AppContainer = request.app.state.container
    documents = await container.content_service.list_items(
        collection_name, include_all=include_all
    )
    return {"success": True, collection_name: documents}


@router.get("/{collection_name}/slug/{slug}")
async def get_document_by_slug(
    collection_name: str,
    slug: str,
    request: Request,
    admin: bool = Depends(is_admin),
) -> dict[str, object]:
    """Fetch by slug; anonymous callers only see publicly visible statuses."""
    _ensure_readable(collection_name, admin, include_all=False)
    container: AppContainer = request.app.state.container
    document = await container.content_service.get_by_slug(
        collection_name, slug, include_all=admin
    )
    return {"success": True, get_collection(collection_name).item_prefix: document}


@router.get("/{collection_name}/{document_id}")
async def get_document(
    collection_name: str,
    document_id: str,
    request: Request,
    admin: bool = Depends(is_admin),
) -> dict[str, object]:
    _ensure_readable(collection_name, admin, include_all=False)
    container: AppContainer = request.app.state.container
    document = await container.content_service.get(collection_name, document_id)
    return {"success": True, get_collection(collection_name).item_prefix: document}


@router.post("/{collection_name}", dependencies=[Depends(require_admin)])
async def create_document(
    collection_name: str,
    request: Request,
    payload: dict[str, object] = Body(...),
) -> dict[str, object]:
    """Create a document and invalidate cached listings."""
    container: AppContainer = request.app.state.container
    document = container.content_service.create(collection_name, payload)
    return {"success": True, get_collection(collection_name).item_prefix: document}


@router.post("/{collection_name}/reorder", dependencies=[Depends(require_admin)])
async def reorder_documents(
    collection_name: str, body: ReorderRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.content_service.reorder(collection_name, body.ids)
    return {"success": True, "message": f"{collection_name} reordered"}


@router.put("/{collection_name}/{document_id}", dependencies=[Depends(require_admin)])
async def update_document(
    collection_name: str,
    document_id: str,
    request: Request,
    payload: dict[str, object] = Body(...),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    document = container.content_service.update(collection_name, document_id, payload)
    return {"success": True, get_collection(collection_name).item_prefix: document}


@router.delete(
    "/{collection_name}/{document_id}", dependencies=[Depends(require_admin)]
)
async def delete_document(
    collection_name: str, document_id: str, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.content_service.delete(collection_name, document_id)
    return {"success": True, "message": f"{collection_name} document deleted"}
