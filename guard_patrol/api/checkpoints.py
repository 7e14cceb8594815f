"""Routes Points de contrôle / Checkpoint API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guard_patrol.database import get_db
from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.schemas.checkpoint import CheckpointCreate, CheckpointRead, CheckpointUpdate

router = APIRouter()


@router.get("/", response_model=list[CheckpointRead])
async def list_checkpoints(db: AsyncSession = Depends(get_db)):
    """Lister les points de contrôle / List checkpoints."""
    result = await db.execute(select(Checkpoint).order_by(Checkpoint.id))
    return result.scalars().all()


@router.get("/{checkpoint_id}", response_model=CheckpointRead)
async def get_checkpoint(checkpoint_id: int, db: AsyncSession = Depends(get_db)):
    """Obtenir un point par ID / Get checkpoint by ID."""
    checkpoint = await db.get(Checkpoint, checkpoint_id)
    if not checkpoint:
        raise HTTPException(status_code=404, detail="Checkpoint not found")
    return checkpoint


@router.post("/", response_model=CheckpointRead, status_code=201)
async def create_checkpoint(data: CheckpointCreate, db: AsyncSession = Depends(get_db)):
    """Créer un point de contrôle / Create a checkpoint."""
    checkpoint = Checkpoint(**data.model_dump())
    db.add(checkpoint)
    await db.flush()
    await db.refresh(checkpoint)
    return checkpoint


@router.put("/{checkpoint_id}", response_model=CheckpointRead)
async def update_checkpoint(checkpoint_id: int, data: CheckpointUpdate, db: AsyncSession = Depends(get_db)):
    """Modifier un point de contrôle / Update a checkpoint."""
    checkpoint = await db.get(Checkpoint, checkpoint_id)
    if not checkpoint:
        raise HTTPException(status_code=404, detail="Checkpoint not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(checkpoint, key, value)
    await db.flush()
    await db.refresh(checkpoint)
    return checkpoint


@router.delete("/{checkpoint_id}", status_code=204)
async def delete_checkpoint(checkpoint_id: int, db: AsyncSession = Depends(get_db)):
    """Supprimer un point ; les rondes passées restent intactes / Delete a checkpoint; past patrols stay intact."""
    checkpoint = await db.get(Checkpoint, checkpoint_id)
    if not checkpoint:
        raise HTTPException(status_code=404, detail="Checkpoint not found")
    await db.delete(checkpoint)
