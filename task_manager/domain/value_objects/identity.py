"""Identity value object: the authenticated actor behind a request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Authenticated actor, issued by the external auth provider.

    Attributes:
        id: Stable user id (JWT ``sub``); becomes Task.owner_id on create.
        email: Optional email claim.
        role: Optional role claim (e.g. "authenticated").
    """

    id: str
    email: str | None = None
    role: str | None = None

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Identity id must be a non-empty string")
