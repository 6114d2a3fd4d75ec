"""
Skill match schemas.

Dependencies: pydantic
System role: Match finder API contracts
"""

from pydantic import Field

from skillswap.models.common import CamelModel


class SkillMatchRequest(CamelModel):
    """Request schema for finding matches."""

    teaching_skill_id: int = Field(description="Requester's teaching skill")
    learning_skill_id: int = Field(description="Requester's learning skill")


class SkillRef(CamelModel):
    """Skill reference inside a match candidate."""

    id: int
    name: str


class MatchCandidate(CamelModel):
    """
    Mutually compatible trading partner.

    teaching_skill is what the candidate teaches (the requester's wanted
    skill); learning_skill is what the candidate wants to learn.
    """

    user_id: int
    username: str
    name: str
    avatar: str | None = None
    university: str | None = None
    rating: float
    teaching_skill: SkillRef
    learning_skill: SkillRef
    match_percentage: int
