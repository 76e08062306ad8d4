import json
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.cache import CacheStore
from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.security import verify_password, create_access_token
from app.db.models import User
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.user import UserResponse

def token_cache_key(token: str) -> str:
    return f"token:{token}"

class AuthService:
    def __init__(self, session: AsyncSession, cache: CacheStore):
        self.session = session
        self.cache = cache

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        # 1. Find User by email
        stmt = select(User).where(User.email == str(login_data.email))
        result = await self.session.execute(stmt)
        user = result.scalars().first()

        if not user:
            raise AuthenticationError("Invalid email or password")

        # 2. Verify Password
        if not verify_password(login_data.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        # 3. Generate Token
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(
            data={"sub": str(user.id)}, expires_delta=access_token_expires
        )

        # 4. Store in cache so logout can revoke it
        token_data = {
            "user_id": str(user.id),
            "role": user.role,
        }
        await self.cache.put(
            token_cache_key(access_token),
            json.dumps(token_data),
            settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            user=UserResponse.model_validate(user),
        )

    async def logout(self, token: str):
        await self.cache.forget(token_cache_key(token))

    async def get_user_for_token(self, token: str, user_id: str) -> User:
        if not await self.cache.get(token_cache_key(token)):
            raise AuthenticationError()
        try:
            user = await self.session.get(User, UUID(user_id))
        except ValueError:
            raise AuthenticationError()
        if user is None:
            raise AuthenticationError()
        return user
