"""Route Dependencies — resolve the connection provider and per-request admin service.

Invariants:
    - The provider lives on app.state (created by the lifespan), never in a module global
    - A DatabaseAdminService is built per request for the X-Session-Key header
    - A missing header resolves as an empty key → CONNECTION_UNAVAILABLE from the provider
"""

from fastapi import Depends, Header, Request

from mongo_admin.core.domain_types import SessionKey
from mongo_admin.infrastructure.session_connections import SessionConnectionProvider
from mongo_admin.services.database_admin import DatabaseAdminService


def get_connection_provider(request: Request) -> SessionConnectionProvider:
    return request.app.state.connections


def get_session_key(
    x_session_key: str = Header("", alias="X-Session-Key"),
) -> SessionKey:
    return SessionKey(x_session_key.strip())


def get_admin_service(
    provider: SessionConnectionProvider = Depends(get_connection_provider),
    session_key: SessionKey = Depends(get_session_key),
) -> DatabaseAdminService:
    return DatabaseAdminService(provider, session_key)
