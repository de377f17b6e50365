"""Session Routes — bind and release storage-server connections.

Invariants:
    - POST returns a fresh opaque session key every other route expects in X-Session-Key
    - Connect failures surface as CONNECTION_UNAVAILABLE (401), never a driver error
    - DELETE is idempotent: releasing an unbound key still returns 204
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from mongo_admin.api.dependencies import get_connection_provider, get_session_key
from mongo_admin.config import get_settings
from mongo_admin.core.domain_types import (
    SessionKey, describe_binding, redact_session_key,
)
from mongo_admin.infrastructure.session_connections import SessionConnectionProvider
from mongo_admin.schemas.database import SessionConnect, SessionConnectResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post(
    "", response_model=SessionConnectResponse,
    status_code=status.HTTP_201_CREATED,
)
def connect_session(
    body: SessionConnect,
    provider: SessionConnectionProvider = Depends(get_connection_provider),
):
    """Connect to a storage server and return the session key."""
    settings = get_settings()
    host = body.host or settings.mongo_default_host
    port = body.port or settings.mongo_default_port
    session_key = provider.connect(body.user, host, port, body.password)
    return SessionConnectResponse(
        session_key=session_key, binding=describe_binding(body.user, host, port),
    )


@router.delete("/current", status_code=status.HTTP_204_NO_CONTENT)
def disconnect_session(
    session_key: SessionKey = Depends(get_session_key),
    provider: SessionConnectionProvider = Depends(get_connection_provider),
):
    """Close the caller's connection."""
    if not provider.disconnect(session_key):
        logger.info(
            "Disconnect for unbound session",
            extra={"session_key": redact_session_key(session_key)},
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
