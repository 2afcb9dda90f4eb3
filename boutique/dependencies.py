# boutique/dependencies.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from boutique.auth import authenticate, authorize
from boutique.config import Settings
from boutique.db.models import RoleEnum

# auto_error off: a missing token must become our own 401 envelope
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/login", auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(token: Optional[str] = Depends(oauth2_scheme),
                     settings: Settings = Depends(get_settings)) -> dict:
    return authenticate(token, settings)


def require_admin(claims: dict = Depends(get_current_user)) -> dict:
    authorize(claims, RoleEnum.admin)
    return claims
