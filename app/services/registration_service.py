from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_
from sqlmodel import select

from app.core.exceptions import ValidationError
from app.core.logger import logger, mask_phone
from app.core.security import get_password_hash
from app.core.utils import utcnow
from app.db.models import User, UserRole
from app.schemas.auth import RegisterRequest
from app.services.verification_store import VerificationCodeStore

INVALID_CODE_MESSAGE = "Invalid or expired SMS verification code."


class RegistrationService:
    def __init__(self, session: AsyncSession, store: VerificationCodeStore):
        self.session = session
        self.store = store

    async def check_unique(self, email: str, phone: str):
        stmt = select(User).where(or_(User.email == email, User.phone == phone))
        result = await self.session.execute(stmt)
        errors = {}
        for user in result.scalars().all():
            if user.email == email:
                errors["email"] = "The email has already been taken."
            if user.phone == phone:
                errors["phone"] = "The phone has already been taken."
        if errors:
            raise ValidationError(errors=errors)

    async def register_user(self, data: RegisterRequest) -> User:
        email = str(data.email)
        await self.check_unique(email, data.phone)

        if not await self.store.code_matches(data.phone, data.sms_code):
            raise ValidationError(errors={"sms_code": INVALID_CODE_MESSAGE})

        # Registration stands in for the verification event when no mark exists
        verified_at = await self.store.get_verified_at(data.phone) or utcnow()

        user = User(
            name=data.name,
            email=email,
            phone=data.phone,
            password_hash=get_password_hash(data.password),
            role=UserRole.CONSUMER.value,
            phone_verified_at=verified_at,
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same phone or email
            await self.session.rollback()
            await self.check_unique(email, data.phone)
            raise
        await self.session.refresh(user)

        await self.store.clear(data.phone)

        logger.info(f"Registered user {user.id} with phone {mask_phone(user.phone)}")
        return user
