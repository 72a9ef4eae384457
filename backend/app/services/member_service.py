"""TravelMap Backend - Team Member Service (roster listing, creation, deletion)."""

import logging
from typing import List

from sqlalchemy import asc, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import TeamMember
from app.schemas.common import SuccessResponse
from app.schemas.member import TeamMemberCreate, TeamMemberResponse
from app.services.base import BaseService

logger = logging.getLogger(__name__)

MEMBER_COLUMNS = (
    TeamMember.id,
    TeamMember.name,
    TeamMember.role,
    TeamMember.avatar,
    TeamMember.page_link,
)


class TeamMemberService(BaseService):

    async def list_members(self, db: AsyncSession) -> List[TeamMemberResponse]:
        """The whole roster in ascending id order."""
        query = select(*MEMBER_COLUMNS).order_by(asc(TeamMember.id))
        rows = await self._fetch_all(db, query, "list_members")
        return [TeamMemberResponse.model_validate(row) for row in rows]

    async def create_member(
        self,
        db: AsyncSession,
        payload: TeamMemberCreate,
    ) -> TeamMemberResponse:
        statement = (
            insert(TeamMember)
            .values(**payload.model_dump())
            .returning(*MEMBER_COLUMNS)
        )
        rows = await self._fetch_all(db, statement, "create_member", commit=True)
        member = TeamMemberResponse.model_validate(rows[0])
        logger.info("Team member %s created (%s)", member.id, member.name)
        return member

    async def delete_member(self, db: AsyncSession, member_id: int) -> SuccessResponse:
        statement = (
            delete(TeamMember)
            .where(TeamMember.id == member_id)
            .execution_options(synchronize_session=False)
        )
        await self._execute(db, statement, "delete_member")
        logger.info("Team member %s deleted", member_id)
        return SuccessResponse()


team_member_service = TeamMemberService()
