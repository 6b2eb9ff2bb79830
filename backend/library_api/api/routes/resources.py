"""Resources — the multimedia library catalogue (list, create, delete).

Invariants:
    - List is ordered newest first (created_at, then id as tie-breaker)
    - Create inserts once, then re-reads the row so created_at comes from the store
    - Delete takes the id from the path only; unparsable id → 400 before any query
    - There is no update endpoint for resources
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.api.routes.request_helpers import read_json_object, validate_payload
from library_api.core.errors import NotFoundError, ValidationError
from library_api.core.identifiers import (
    is_storable_identifier, parse_identifier,
)
from library_api.infrastructure.database import get_db, storage_errors
from library_api.models.resource import Resource
from library_api.schemas.resource import ResourceCreate, ResourceResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.get("", response_model=list[ResourceResponse])
async def list_resources(db: AsyncSession = Depends(get_db)):
    """List all resources, most recent first."""
    async with storage_errors("fetch resources"):
        result = await db.execute(
            select(Resource).order_by(
                Resource.created_at.desc(), Resource.id.desc(),
            ),
        )
        resources = result.scalars().all()
    return [ResourceResponse.model_validate(r) for r in resources]


@router.post(
    "", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED,
)
async def create_resource(
    request: Request, db: AsyncSession = Depends(get_db),
):
    """Create a resource, defaulting description/type/platform."""
    payload = validate_payload(ResourceCreate, await read_json_object(request))
    async with storage_errors("create resource"):
        resource = Resource(
            title=payload.title,
            description=payload.description,
            url=payload.url,
            type=payload.type,
            platform=payload.platform,
        )
        db.add(resource)
        await db.commit()
        await db.refresh(resource)
    logger.info(
        f"Resource {resource.id} created", extra={"entity_id": resource.id},
    )
    return ResourceResponse.model_validate(resource)


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: str, db: AsyncSession = Depends(get_db),
):
    """Delete a resource by path id."""
    entity_id = parse_identifier(resource_id)
    if entity_id is None:
        raise ValidationError("A valid integer id is required", field="id")
    if not is_storable_identifier(entity_id):
        raise NotFoundError("Resource", entity_id)

    async with storage_errors("delete resource"):
        result = await db.execute(
            delete(Resource)
            .where(Resource.id == entity_id)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await db.rollback()
            raise NotFoundError("Resource", entity_id)
        await db.commit()
    logger.info(f"Resource {entity_id} deleted", extra={"entity_id": entity_id})
    return {"success": True, "message": "Resource deleted successfully"}
