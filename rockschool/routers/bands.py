from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.feed_schemas import BandDetail, BandSummary
from ..services.band_service import BandService

router = APIRouter(prefix="/api/v1/bands", tags=["Bands"])

@router.get("/", response_model=List[BandSummary])
async def list_bands(
    search: Optional[str] = Query(None, description="Part of a band name"),
    db: AsyncSession = Depends(get_db)
):
    """Bands with their members and teachers"""
    return await BandService(db).list_bands(search)

@router.get("/{band_id}", response_model=BandDetail)
async def get_band(
    band_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Band page: members with their latest song comment and the current season's setlist"""
    return await BandService(db).get_band(band_id)
