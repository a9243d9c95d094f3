# This project was developed with assistance from AI tools.
"""Acting-user identity passed into workflow mutations."""

from pydantic import BaseModel, ConfigDict

from ..enums import UserRole


class Actor(BaseModel):
    """Staff member (or the system) performing an engine operation.

    Authentication happens upstream; the engine only reads the identity
    for audit records and the role for override permission checks.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    role: UserRole = UserRole.RECRUITER


SYSTEM_ACTOR = Actor(user_id="system", name="System", role=UserRole.SYSTEM)
