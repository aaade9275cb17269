"""Actor identity

The authenticated identity that places, edits or settles an order. It is
passed explicitly into every use case rather than read from request state.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ActorKind(str, Enum):
    """Roles an actor can hold"""
    ADMIN = "admin"
    STAFF = "staff"
    DISTRIBUTOR = "distributor"


# Kinds that may place orders and run the settlement flow
BACK_OFFICE_KINDS = frozenset({ActorKind.ADMIN, ActorKind.STAFF})


class Actor(BaseModel):
    """
    Acting identity: a tagged reference (kind + id) plus a display name

    Serialized as ``{"role", "id", "name"}`` to match the ``updatedBy``
    payload clients send and receive.
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: ActorKind = Field(..., alias="role", description="Actor role")
    id: int = Field(..., description="Identifier of the admin/staff/distributor record")
    name: Optional[str] = Field(default=None, description="Display name")

    @property
    def is_back_office(self) -> bool:
        return self.kind in BACK_OFFICE_KINDS

    def owns(self, kind: ActorKind, actor_id: int) -> bool:
        return self.kind == kind and self.id == actor_id
