"""Database Routes — list, create, drop, and stats for the caller's session.

Invariants:
    - Routes never contain business logic: they unwrap the service's AdminResult
    - Every failure reaches the client through the MongoAdminError handler
    - Handlers are sync: the service blocks on the driver, FastAPI runs them in its threadpool
"""

from fastapi import APIRouter, Depends, status

from mongo_admin.api.dependencies import get_admin_service
from mongo_admin.core.domain_types import DatabaseName
from mongo_admin.schemas.database import (
    DatabaseCreate,
    DatabaseListResponse,
    DatabaseStatsResponse,
    MessageResponse,
    StatEntryResponse,
)
from mongo_admin.services.database_admin import DatabaseAdminService

router = APIRouter(prefix="/api/v1/databases", tags=["databases"])


@router.get("", response_model=DatabaseListResponse)
def list_databases(service: DatabaseAdminService = Depends(get_admin_service)):
    return DatabaseListResponse(databases=service.list_databases())


@router.post(
    "", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_database(
    body: DatabaseCreate,
    service: DatabaseAdminService = Depends(get_admin_service),
):
    return MessageResponse(message=service.create_database(body.name).unwrap())


@router.delete("/{name}", response_model=MessageResponse)
def drop_database(
    name: str, service: DatabaseAdminService = Depends(get_admin_service),
):
    result = service.drop_database(DatabaseName(name))
    return MessageResponse(message=result.unwrap())


@router.get("/{name}/stats", response_model=DatabaseStatsResponse)
def get_database_stats(
    name: str, service: DatabaseAdminService = Depends(get_admin_service),
):
    entries = service.get_stats(DatabaseName(name)).unwrap()
    return DatabaseStatsResponse(
        database=name,
        stats=[StatEntryResponse.from_entry(e) for e in entries],
    )
