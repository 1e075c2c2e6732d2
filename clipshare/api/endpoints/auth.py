"""
Signup and login endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from clipshare.api.deps import get_credential_store
from clipshare.services.credential_store import CredentialStore

router = APIRouter()


class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


@router.post("/signup", response_model=MessageResponse)
def signup(credentials: Credentials, store: CredentialStore = Depends(get_credential_store)):
    store.register(credentials.username, credentials.password)
    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=MessageResponse)
def login(credentials: Credentials, store: CredentialStore = Depends(get_credential_store)):
    """Stateless: nothing is issued, the client keeps track of the outcome"""
    store.authenticate(credentials.username, credentials.password)
    return MessageResponse(message="Login successful!")
