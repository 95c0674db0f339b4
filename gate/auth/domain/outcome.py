from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from gate.auth.infrastructure.user import User


class DenialReason(str, Enum):
    NOT_SUBSCRIBED = "not subscribed"
    NOT_FOLLOWING  = "not following"
    PROVIDER_ERROR = "provider error"


@dataclass(frozen=True)
class Allowed:
    user: "User"
    allowed = True


@dataclass(frozen=True)
class Denied:
    reason: DenialReason
    detail: str = ""
    allowed = False


# Resultado de un intento de login; solo vive dentro del request
AuthOutcome = Union[Allowed, Denied]
