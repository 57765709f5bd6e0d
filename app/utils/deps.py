from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError

from app.core.config import Settings
from app.core.security import decode_access_token
from app.crud.user import user as user_crud
from app.models.user import User
from app.schemas.token import TokenPayload
from app.schemas.user import UserUpsert
from app.store.base import EntityStore

# auto_error=False so a missing header is a 401 rather than a 403
http_bearer = HTTPBearer(auto_error=False)

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> Iterator[EntityStore]:
    with request.app.state.store_provider.session() as store:
        yield store

def get_current_user(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer)
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(credentials.credentials, settings)
        token_data = TokenPayload(**payload)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # The identity provider owns the profile, we mirror it on every request
    return user_crud.upsert(store, UserUpsert(
        id=token_data.sub,
        email=token_data.email,
        display_name=token_data.name,
        avatar_url=token_data.picture,
    ))
