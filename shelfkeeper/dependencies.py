import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from shelfkeeper.core.errors import ConfigurationError, NotAuthenticatedError, StoreError
from shelfkeeper.core.security import authenticate_request
from shelfkeeper.services.gemini_service import GeminiAdvisoryGateway
from shelfkeeper.services.workspace import InventoryWorkspace

logger = logging.getLogger(__name__)


def current_user(authorization: Optional[str] = Header(None)) -> str:
    try:
        return authenticate_request(authorization)
    except NotAuthenticatedError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except ConfigurationError as exc:
        logger.error("Authentication is misconfigured: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def get_gateway(request: Request, user_id: str = Depends(current_user)):
    factory = request.app.state.gateway_factory
    try:
        return factory.for_user(user_id)
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


def get_workspace(gateway=Depends(get_gateway)) -> InventoryWorkspace:
    try:
        return InventoryWorkspace(gateway).load()
    except StoreError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def get_advisor() -> GeminiAdvisoryGateway:
    try:
        return GeminiAdvisoryGateway.from_settings()
    except ConfigurationError as exc:
        logger.error("Advisory service is misconfigured: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


__all__ = ["current_user", "get_advisor", "get_gateway", "get_workspace"]
