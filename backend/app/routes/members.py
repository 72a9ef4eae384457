"""TravelMap Backend - Team Member Handlers (GET /members, POST /addmember, DELETE /deletemember)."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.member import TeamMemberCreate, TeamMemberDelete, TeamMemberResponse
from app.services.member_service import team_member_service

router = APIRouter(tags=["Team Members"])


@router.get("/members", response_model=List[TeamMemberResponse], summary="List the team roster")
async def list_members(db: AsyncSession = Depends(get_db_session)) -> List[TeamMemberResponse]:
    return await team_member_service.list_members(db)


@router.post(
    "/addmember",
    response_model=TeamMemberResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Add a team member",
)
async def add_member(
    payload: TeamMemberCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TeamMemberResponse:
    return await team_member_service.create_member(db, payload)


@router.delete(
    "/deletemember",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Remove a team member (idempotent)",
)
async def delete_member(
    payload: TeamMemberDelete,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    return await team_member_service.delete_member(db, payload.id)
