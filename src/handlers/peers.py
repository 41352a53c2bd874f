"""Bookkeeping for the proxy's connected peers."""

from __future__ import annotations

from src.state.peer import Peer, PeerRole


class PeerRegistry:
    """At most one bot peer plus an unordered set of audio-source peers.

    All mutation happens on the event loop thread, so no locking is needed.
    """

    def __init__(self) -> None:
        self._known: set[Peer] = set()
        self._audio_sources: set[Peer] = set()
        self._bot: Peer | None = None

    @property
    def bot(self) -> Peer | None:
        return self._bot

    @property
    def audio_source_count(self) -> int:
        return len(self._audio_sources)

    def audio_sources(self) -> list[Peer]:
        # Snapshot: sends await, and the set may change underneath.
        return list(self._audio_sources)

    def known(self) -> list[Peer]:
        return list(self._known)

    def track(self, peer: Peer) -> None:
        self._known.add(peer)

    def set_bot(self, peer: Peer) -> Peer | None:
        """Make ``peer`` the transcript target and return the one it replaces."""
        previous = self._bot
        self._known.add(peer)
        self._bot = peer
        return previous if previous is not peer else None

    def add_audio_source(self, peer: Peer) -> bool:
        """Add ``peer``; True when the set goes from empty to non-empty."""
        was_empty = not self._audio_sources
        self._known.add(peer)
        self._audio_sources.add(peer)
        return was_empty

    def remove(self, peer: Peer) -> bool:
        """Forget ``peer``; True when it was the last audio source."""
        self._known.discard(peer)
        if peer.role is PeerRole.BOT:
            if self._bot is peer:
                self._bot = None
            return False
        if peer.role is PeerRole.AUDIO_SOURCE and peer in self._audio_sources:
            self._audio_sources.discard(peer)
            return not self._audio_sources
        return False

    def clear(self) -> None:
        self._known.clear()
        self._audio_sources.clear()
        self._bot = None


__all__ = ["PeerRegistry"]
