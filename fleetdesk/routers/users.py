"""
User management routes. Master users only.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.auth import CurrentUser, require_master
from fleetdesk.database import get_db
from fleetdesk.errors import NotFoundError, ValidationError
from fleetdesk.models.user import User
from fleetdesk.schemas.user import User as UserSchema, UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


async def _ensure_email_free(db: AsyncSession, email: str, user_id: int = None) -> None:
    result = await db.execute(select(User).where(User.email == email))
    existing = result.scalar_one_or_none()
    if existing is not None and existing.id != user_id:
        raise ValidationError("Email already registered", fields={"email": "already registered"})


@router.get("/", response_model=List[UserSchema])
async def get_users(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_master)
):
    result = await db.execute(select(User).order_by(User.id))
    return result.scalars().all()


@router.post("/", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_master)
):
    """
    Register a user profile and its role. Credentials are managed by the
    identity provider.
    """
    await _ensure_email_free(db, user.email)

    db_user = User(**user.model_dump())
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)

    return db_user


@router.put("/{user_id}", response_model=UserSchema)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_master)
):
    db_user = await _get_user_or_404(db, user_id)

    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in update_data:
        await _ensure_email_free(db, update_data["email"], user_id)
    for field, value in update_data.items():
        setattr(db_user, field, value)

    await db.commit()
    await db.refresh(db_user)

    return db_user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_master)
):
    db_user = await _get_user_or_404(db, user_id)
    await db.delete(db_user)
    await db.commit()

    return None
