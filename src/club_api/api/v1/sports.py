from fastapi import APIRouter, Depends, status

from club_api.core.dependencies import get_sport_service
from club_api.schemas.sport import SportCreate, SportRead, SportUpdate
from club_api.services.sport_service import SportService

router = APIRouter(prefix="/sports", tags=["sports"])


@router.post("/create", response_model=SportRead, status_code=status.HTTP_201_CREATED)
async def create_sport(payload: SportCreate, service: SportService = Depends(get_sport_service)):
    return await service.create_sport(payload)


# Declared before "/{sport_id}" so "all" is never read as an id
@router.get("/all", response_model=list[SportRead])
async def get_sports(service: SportService = Depends(get_sport_service)):
    return await service.get_sports()


@router.post("/refresh-cache", response_model=list[SportRead])
async def refresh_cache(service: SportService = Depends(get_sport_service)):
    return await service.refresh_cache()


@router.get("/{sport_id}", response_model=SportRead)
async def get_sport(sport_id: int, service: SportService = Depends(get_sport_service)):
    return await service.get_sport_by_id(sport_id)


@router.patch("/update/{sport_id}", response_model=SportRead)
async def update_sport(sport_id: int, payload: SportUpdate, service: SportService = Depends(get_sport_service)):
    return await service.update_sport(sport_id, payload)


@router.delete("/delete/{sport_id}", response_model=SportRead)
async def delete_sport(sport_id: int, service: SportService = Depends(get_sport_service)):
    return await service.delete_sport(sport_id)
