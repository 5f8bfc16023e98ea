"""Skill catalogue and the coach/skill association with proficiency level."""

from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.enums import SkillLevel


class Skill(SQLModel, table=True):
    __tablename__ = "skills"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=100, nullable=False, unique=True)


class CoachSkill(SQLModel, table=True):
    """A skill held by a coach, at a given level."""

    __tablename__ = "coach_skills"

    coach_id: int = Field(foreign_key="coaches.id", primary_key=True)
    skill_id: int = Field(foreign_key="skills.id", primary_key=True)
    skill_level: SkillLevel = Field(default=SkillLevel.INTERMEDIATE, nullable=False)
