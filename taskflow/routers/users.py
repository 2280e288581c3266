from typing import List

from fastapi import APIRouter, Depends

from taskflow.deps import get_credential_store, require_admin
from taskflow.schemas.user import UserDetail
from taskflow.services.credentials import CredentialStore

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[UserDetail])
def list_users(store: CredentialStore = Depends(get_credential_store)):
    return store.list_users()
