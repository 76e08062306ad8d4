from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import PyJWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import CacheStore, get_cache
from app.core.config import settings
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.core.security import decode_access_token
from app.db.models import User
from app.db.session import get_session
from app.services.auth_service import AuthService
from app.services.rate_limiter import RateLimiter
from app.services.sms_provider import SmsProvider, get_sms_provider
from app.services.sms_verification_service import SmsVerificationService
from app.services.verification_store import VerificationCodeStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)

def get_verification_store(cache: CacheStore = Depends(get_cache)) -> VerificationCodeStore:
    return VerificationCodeStore(cache)

def get_sms_verification_service(
    cache: CacheStore = Depends(get_cache),
    provider: SmsProvider = Depends(get_sms_provider),
) -> SmsVerificationService:
    return SmsVerificationService(VerificationCodeStore(cache), RateLimiter(cache), provider)

def get_auth_service(
    session: AsyncSession = Depends(get_session),
    cache: CacheStore = Depends(get_cache),
) -> AuthService:
    return AuthService(session, cache)

async def _resolve_user(token: str, service: AuthService) -> User:
    try:
        payload = decode_access_token(token)
    except PyJWTError:
        raise AuthenticationError()
    user_id: str = payload.get("sub")
    if user_id is None:
        raise AuthenticationError()
    return await service.get_user_for_token(token, user_id)

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    service: AuthService = Depends(get_auth_service),
) -> User:
    return await _resolve_user(token, service)

async def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    service: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    if not token:
        return None
    return await _resolve_user(token, service)

async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin access required.")
    return current_user
