from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from taskflow.database import get_db
from taskflow.services.credentials import CredentialStore
from taskflow.services.policy import authorize_admin_only
from taskflow.services.tasks import TaskService
from taskflow.services.tokens import Claims, TokenService


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer ...`` header."""
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_current_claims(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Claims:
    return tokens.validate(_extract_token(authorization))


def require_admin(claims: Claims = Depends(get_current_claims)) -> Claims:
    authorize_admin_only(claims)
    return claims


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)
