"""Request and response models for PDP evaluations.

PdpRequest is an optional typed convenience: it encodes to the same JSON
object a caller would get by passing the equivalent dict. PdpResponse is the
raw response artifact of a single evaluation.
"""

from __future__ import annotations

__all__ = [
    "PdpRequest",
    "PdpResponse",
]

from dataclasses import dataclass

from pydantic import BaseModel, JsonValue


class PdpRequest(BaseModel):
    """Domain-level authorization query.

    All attributes are free-form JSON values; the PDP's policy decides
    what they mean.

    Attributes:
        subject: Who is asking (user id, claims, roles, ...).
        action: What they want to do.
        resource: What they want to do it to.
        context: Anything else the policy needs (time, network, ...).
    """

    subject: JsonValue = None
    action: JsonValue = None
    resource: JsonValue = None
    context: JsonValue = None


@dataclass(frozen=True, slots=True)
class PdpResponse:
    """Raw PDP response: status code plus the full body.

    The body has already been read and the underlying connection released.
    """

    status_code: int
    content: bytes

    @property
    def is_error(self) -> bool:
        """True if the PDP answered with status >= 400."""
        return self.status_code >= 400
