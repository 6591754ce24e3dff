# server/api/auth.py

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from fastapi import APIRouter, Depends, status

from api.deps import get_credential_store, get_current_user_id, get_token_service
from core.credentials import CredentialStore
from core.security import TokenService


router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    # Optional so a missing field is answered by the store (400 / 401), not with a 422.
    username: str | None = None
    password: str | None = None


class Token(BaseModel):
    access_token: str = Field(
        validation_alias=AliasChoices("access_token", "accessToken"),
        serialization_alias="accessToken",
    )
    token_type: str = "bearer"


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register(body: Credentials, store: CredentialStore = Depends(get_credential_store)):
    user = store.register(body.username, body.password)
    return User.model_validate(user)


@router.post("/login", response_model=Token)
def login(
    body: Credentials,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = store.verify(body.username, body.password)
    return Token(access_token=tokens.issue(user.id))


@router.get("/me", response_model=User)
def read_users_me(
    user_id: int = Depends(get_current_user_id),
    store: CredentialStore = Depends(get_credential_store),
):
    return User.model_validate(store.get(user_id))
