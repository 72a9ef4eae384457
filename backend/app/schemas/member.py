"""TravelMap Backend - Team Member Request/Response Schemas."""

from pydantic import BaseModel, Field

from app.schemas.common import MAX_SERIAL_ID


class TeamMemberCreate(BaseModel):
    """Body of POST /addmember."""
    name: str
    role: str
    avatar: str = Field(description="URL of the member's picture")
    page_link: str = Field(description="URL of the member's personal page")


class TeamMemberDelete(BaseModel):
    """Body of DELETE /deletemember."""
    id: int = Field(ge=1, le=MAX_SERIAL_ID)


class TeamMemberResponse(BaseModel):
    id: int
    name: str
    role: str
    avatar: str
    page_link: str

    model_config = {"from_attributes": True}
