# folio/app/services/users.py
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.models.user import User
from folio.app.schemas.user import SignupRequest
from folio.app.security import hashing

logger = logging.getLogger(__name__)


class DuplicateUserError(Exception):
    """Username, email or phone number is already registered."""


async def find_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(
        select(User).where(func.lower(User.username) == username.strip().lower())
    )
    return result.scalars().first()


async def find_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(
        select(User).where(func.lower(User.email) == email.strip().lower())
    )
    return result.scalars().first()


async def find_user_by_phone(db: AsyncSession, phone_number: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.phone_number == phone_number))
    return result.scalars().first()


async def find_user_by_id(db: AsyncSession, user_id: str) -> Optional[User]:
    return await db.get(User, user_id)


async def find_user_by_login(db: AsyncSession, email_or_username: str) -> Optional[User]:
    """An identifier containing '@' is an email, anything else a username."""
    if "@" in email_or_username:
        return await find_user_by_email(db, email_or_username)
    return await find_user_by_username(db, email_or_username)


async def duplicate_field(db: AsyncSession, data: SignupRequest) -> Optional[str]:
    """The message for the first already-registered field, or None."""
    if await find_user_by_username(db, data.username):
        return "Username already exists"
    if await find_user_by_email(db, data.email):
        return "Email already exists"
    if await find_user_by_phone(db, data.phone_number):
        return "Phone number already exists"
    return None


async def create_user(db: AsyncSession, data: SignupRequest, is_admin: bool = False) -> User:
    message = await duplicate_field(db, data)
    if message:
        raise DuplicateUserError(message)

    user = User(
        username=data.username,
        email=data.email,
        phone_number=data.phone_number,
        gender=data.gender,
        password_hash=hashing.get_password_hash(data.password),
        is_admin=is_admin,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent signup got there between the lookup and the insert
        await db.rollback()
        message = await duplicate_field(db, data)
        if message is None:
            raise
        logger.info("Signup for %s hit a unique constraint: %s", data.username, message)
        raise DuplicateUserError(message) from None

    await db.refresh(user)
    logger.info("Created user %s", user.username)
    return user


async def authenticate(db: AsyncSession, email_or_username: str, password: str) -> Optional[User]:
    """
    The user if the password matches, otherwise None.

    Unknown account and wrong password are deliberately indistinguishable.
    """
    user = await find_user_by_login(db, email_or_username)
    if user is None or not hashing.verify_password(password, user.password_hash):
        return None
    return user


async def set_admin(db: AsyncSession, user: User, is_admin: bool = True) -> User:
    user.is_admin = is_admin
    db.add(user)
    await db.commit()
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.commit()
    logger.info("Deleted user %s", user.username)
