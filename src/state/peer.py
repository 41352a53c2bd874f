"""Connected peer bookkeeping (dataclasses only)."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any
from dataclasses import field, dataclass


class PeerRole(str, Enum):
    UNCLASSIFIED = "unclassified"
    BOT = "bot"
    AUDIO_SOURCE = "audio_source"


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(eq=False, slots=True)
class Peer:
    """A live proxy connection. Hashes by identity so it can live in a set."""

    ws: Any
    role: PeerRole = PeerRole.UNCLASSIFIED
    closed: bool = False
    peer_id: str = field(default_factory=_short_id)

    def assign_role(self, role: PeerRole) -> None:
        if self.role is not PeerRole.UNCLASSIFIED:
            raise RuntimeError(f"peer {self.peer_id} already classified as {self.role.value}")
        self.role = role

    @property
    def is_open(self) -> bool:
        return not self.closed


__all__ = ["Peer", "PeerRole"]
