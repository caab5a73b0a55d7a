"""Route set shared by every record type, built from its EntityType."""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from sahaya_api.api.deps import get_current_user, get_optional_user, require_admin
from sahaya_api.api.schemas import (
    AssignRequest,
    CommentCreate,
    CommentResponse,
    Envelope,
    PageEnvelope,
    Pagination,
    StatusChange,
)
from sahaya_api.database import get_db
from sahaya_api.exceptions import NotFoundError
from sahaya_api.security import Actor
from sahaya_api.services.entity_service import MAX_PAGE_LIMIT, EntityService
from sahaya_api.services.registry import EntityType


@dataclass
class EntitySchemas:
    create: Type[BaseModel]
    update: Type[BaseModel]
    response: Type[BaseModel]


def actor_id(actor: Optional[Actor], fallback: Optional[int] = None) -> Optional[int]:
    """The token's user wins over any user id named in the body."""
    return actor.user_id if actor is not None else fallback


def not_found(entity_type: EntityType) -> NotFoundError:
    return NotFoundError(f"{entity_type.label} not found")


def page_of(items: List[Any], total: int, page: int, limit: int, schema: Type[BaseModel]) -> Dict[str, Any]:
    limit = min(limit, MAX_PAGE_LIMIT)
    return {
        "success": True,
        "data": [schema.model_validate(item) for item in items],
        "pagination": Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    }


def build_entity_router(entity_type: EntityType, schemas: EntitySchemas, auth_required: bool = False) -> APIRouter:
    """
    Build the standard routes for one record type.

    With auth_required every route needs a valid bearer token; otherwise a
    token is optional and only used to attribute history and comments.
    """
    dependencies = [Depends(get_current_user)] if auth_required else []
    router = APIRouter(prefix=f"/{entity_type.name}", tags=[entity_type.label], dependencies=dependencies)
    current_actor = get_current_user if auth_required else get_optional_user
    Response = schemas.response
    Create = schemas.create
    Update = schemas.update

    @router.get("", response_model=PageEnvelope[Response])
    def list_entities(
        request: Request,
        page: int = Query(1, ge=1),
        limit: int = Query(50, ge=1),
        db: Session = Depends(get_db),
    ):
        """List records, newest first. Any declared filter field may be passed as a query parameter."""
        service = EntityService(db, entity_type)
        items, total = service.list(request.query_params, page=page, limit=limit)
        return page_of(items, total, page, limit, Response)

    @router.get("/stats/summary", response_model=Envelope[Dict[str, Any]])
    def entity_stats(request: Request, db: Session = Depends(get_db)):
        """Counts by status and category, pending count and amount totals."""
        service = EntityService(db, entity_type)
        return Envelope[Dict[str, Any]](data=service.stats(request.query_params))

    if entity_type.stats_path != "/stats/summary":
        router.add_api_route(
            entity_type.stats_path,
            entity_stats,
            methods=["GET"],
            response_model=Envelope[Dict[str, Any]],
            include_in_schema=False,
        )

    @router.get("/{identifier}", response_model=Envelope[Response])
    def get_entity(identifier: str, db: Session = Depends(get_db)):
        """Fetch by surrogate id or human id."""
        entity = EntityService(db, entity_type).get(identifier)
        if not entity:
            raise not_found(entity_type)
        return Envelope[Response](data=Response.model_validate(entity))

    @router.post("", response_model=Envelope[Response], status_code=status.HTTP_201_CREATED)
    def create_entity(
        payload: Create,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Create a record with a generated human id, default status and one history entry."""
        entity = EntityService(db, entity_type).create(payload.model_dump(), actor_id(actor))
        return Envelope[Response](
            message=f"{entity_type.label} created successfully",
            data=Response.model_validate(entity),
        )

    @router.put("/{identifier}", response_model=Envelope[Response])
    def update_entity(
        identifier: str,
        payload: Update,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        """Partial update. A changed status appends a history entry."""
        changes = payload.model_dump(exclude_unset=True)
        status_comment = changes.pop("status_comment", None)
        entity = EntityService(db, entity_type).update(identifier, changes, actor_id(actor), status_comment)
        if not entity:
            raise not_found(entity_type)
        return Envelope[Response](
            message=f"{entity_type.label} updated successfully",
            data=Response.model_validate(entity),
        )

    @router.patch("/{identifier}/status", response_model=Envelope[Response])
    def change_status(
        identifier: str,
        payload: StatusChange,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        service = EntityService(db, entity_type)
        extra = payload.model_dump(include={"action_taken", "closure_notes"}, exclude_none=True)
        entity = service.change_status(
            identifier,
            payload.status,
            actor_id(actor, service.require_user("changed_by", payload.changed_by)),
            payload.comments or payload.notes,
            extra,
        )
        if not entity:
            raise not_found(entity_type)
        return Envelope[Response](
            message=f"{entity_type.label} status updated successfully",
            data=Response.model_validate(entity),
        )

    @router.patch("/{identifier}/assign", response_model=Envelope[Response])
    def assign_entity(
        identifier: str,
        payload: AssignRequest,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        extra = payload.model_dump(include={"priority", "coordinator_id"}, exclude_none=True)
        entity = EntityService(db, entity_type).assign(
            identifier, payload.assigned_to, actor_id(actor), payload.notes, extra
        )
        if not entity:
            raise not_found(entity_type)
        return Envelope[Response](
            message=f"{entity_type.label} assigned successfully",
            data=Response.model_validate(entity),
        )

    @router.post("/{identifier}/comments", response_model=Envelope[List[CommentResponse]])
    def add_comment(
        identifier: str,
        payload: CommentCreate,
        db: Session = Depends(get_db),
        actor: Optional[Actor] = Depends(current_actor),
    ):
        service = EntityService(db, entity_type)
        comments = service.add_comment(
            identifier, actor_id(actor, service.require_user("author", payload.author)), payload.text
        )
        if comments is None:
            raise not_found(entity_type)
        return Envelope[List[CommentResponse]](
            message="Comment added successfully",
            data=[CommentResponse.model_validate(comment) for comment in comments],
        )

    @router.delete("/{identifier}", response_model=Envelope[Response])
    def close_entity(
        identifier: str,
        db: Session = Depends(get_db),
        actor: Actor = Depends(require_admin),
    ):
        """Soft close: moves the record to its closed status. Admins only."""
        entity = EntityService(db, entity_type).delete(identifier, actor.user_id)
        if not entity:
            raise not_found(entity_type)
        return Envelope[Response](
            message=f"{entity_type.label} closed successfully",
            data=Response.model_validate(entity),
        )

    return router
