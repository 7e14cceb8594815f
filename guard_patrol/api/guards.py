"""Routes Agents / Guard API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guard_patrol.database import get_db
from guard_patrol.models.user import User, UserRole
from guard_patrol.schemas.user import GuardCreate, GuardUpdate, UserRead

router = APIRouter()


async def _get_guard(db: AsyncSession, guard_id: int) -> User:
    guard = await db.get(User, guard_id)
    if not guard or guard.role != UserRole.GUARD:
        raise HTTPException(status_code=404, detail="Guard not found")
    return guard


async def _ensure_username_free(db: AsyncSession, username: str, exclude_id: int | None = None) -> None:
    query = select(User.id).where(User.username == username)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Username already exists")


@router.get("/", response_model=list[UserRead])
async def list_guards(db: AsyncSession = Depends(get_db)):
    """Lister les agents / List guards."""
    result = await db.execute(select(User).where(User.role == UserRole.GUARD).order_by(User.id))
    return result.scalars().all()


@router.get("/{guard_id}", response_model=UserRead)
async def get_guard(guard_id: int, db: AsyncSession = Depends(get_db)):
    """Obtenir un agent par ID / Get guard by ID."""
    return await _get_guard(db, guard_id)


@router.post("/", response_model=UserRead, status_code=201)
async def create_guard(data: GuardCreate, db: AsyncSession = Depends(get_db)):
    """Créer un agent / Create a guard."""
    await _ensure_username_free(db, data.username)
    guard = User(**data.model_dump(), role=UserRole.GUARD, is_active=True)
    db.add(guard)
    await db.flush()
    await db.refresh(guard)
    return guard


@router.put("/{guard_id}", response_model=UserRead)
async def update_guard(guard_id: int, data: GuardUpdate, db: AsyncSession = Depends(get_db)):
    """Modifier un agent / Update a guard."""
    guard = await _get_guard(db, guard_id)
    updates = data.model_dump(exclude_unset=True)
    if "username" in updates:
        await _ensure_username_free(db, updates["username"], exclude_id=guard_id)
    for key, value in updates.items():
        setattr(guard, key, value)
    await db.flush()
    await db.refresh(guard)
    return guard


@router.delete("/{guard_id}", status_code=204)
async def delete_guard(guard_id: int, db: AsyncSession = Depends(get_db)):
    """Supprimer un agent / Delete a guard."""
    guard = await _get_guard(db, guard_id)
    await db.delete(guard)
