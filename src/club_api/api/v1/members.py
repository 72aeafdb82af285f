from fastapi import APIRouter, Depends, status

from club_api.core.dependencies import get_member_service
from club_api.schemas.member import MemberCreate, MemberRead, MemberUpdate
from club_api.services.member_service import MemberService

router = APIRouter(prefix="/members", tags=["members"])


@router.post("/create", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
async def create_member(payload: MemberCreate, service: MemberService = Depends(get_member_service)):
    return await service.create_member(payload)


@router.get("", response_model=list[MemberRead])
async def list_members(service: MemberService = Depends(get_member_service)):
    return await service.list_members()


@router.get("/{member_id}", response_model=MemberRead)
async def get_member(member_id: int, service: MemberService = Depends(get_member_service)):
    return await service.get_member(member_id)


@router.patch("/update/{member_id}", response_model=MemberRead)
async def update_member(member_id: int, payload: MemberUpdate, service: MemberService = Depends(get_member_service)):
    return await service.update_member(member_id, payload)


@router.delete("/delete/{member_id}", response_model=MemberRead)
async def delete_member(member_id: int, service: MemberService = Depends(get_member_service)):
    return await service.delete_member(member_id)
