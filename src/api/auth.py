"""Acting identity

Authentication happens upstream; it forwards the authenticated identity in
``X-Actor-Role`` / ``X-Actor-Id`` / ``X-Actor-Name`` headers. Routes receive
it as an ``Actor`` and pass it into the use cases.
"""

from typing import Optional
from fastapi import Depends, Header, Request
from libs.result import Error
from src.api.error import ClientError
from src.domain.actor import Actor, ActorKind

DEFAULT_ACTOR = Actor(kind=ActorKind.ADMIN, id=1, name="admin")


async def get_actor(
    request: Request,
    role: Optional[str] = Header(default=None, alias="X-Actor-Role"),
    actor_id: Optional[int] = Header(default=None, alias="X-Actor-Id"),
    name: Optional[str] = Header(default=None, alias="X-Actor-Name"),
) -> Actor:
    if role is None or actor_id is None:
        if request.app.state.config.AUTH_DISABLED:
            return DEFAULT_ACTOR
        raise ClientError(
            Error(code="UNAUTHORIZED", message="Authenticated actor required")
        )

    try:
        kind = ActorKind(role.lower())
    except ValueError:
        raise ClientError(
            Error(code="UNAUTHORIZED", message=f"Unknown actor role '{role}'")
        )

    return Actor(kind=kind, id=actor_id, name=name)


async def require_back_office(actor: Actor = Depends(get_actor)) -> Actor:
    """Admin or staff only"""
    if not actor.is_back_office:
        raise ClientError(
            Error(code="FORBIDDEN", message="Admin or staff access required")
        )
    return actor
