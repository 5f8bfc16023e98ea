"""Actor reference: a role-tagged profile id."""

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ActorRole


class ActorRef(BaseModel):
    """Identifies a member or a coach without loading the profile."""

    model_config = ConfigDict(frozen=True)

    role: ActorRole
    id: int = Field(..., gt=0)

    def __str__(self) -> str:
        return f"{self.role.value}#{self.id}"
