"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.member import Member  # noqa: F401
from app.models.coach import Coach  # noqa: F401
from app.models.skill import Skill, CoachSkill  # noqa: F401
from app.models.member_coach import MemberCoach  # noqa: F401
from app.models.request import Request  # noqa: F401
