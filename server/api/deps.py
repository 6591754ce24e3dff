# server/api/deps.py

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from core.codename import CodenameGenerator
from core.credentials import CredentialStore
from core.gadgets import GadgetManager
from core.security import PasswordHasher, TokenService
from database import get_db


# auto_error=False so a missing header reaches TokenService.verify and becomes a 401,
# while a bad token becomes a 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_codename_generator(request: Request) -> CodenameGenerator:
    return request.app.state.codename_generator


def get_credential_store(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CredentialStore:
    return CredentialStore(db, hasher)


def get_gadget_manager(
    db: Session = Depends(get_db),
    codenames: CodenameGenerator = Depends(get_codename_generator),
) -> GadgetManager:
    return GadgetManager(db, codenames)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    token = credentials.credentials if credentials else None
    return tokens.verify(token)
