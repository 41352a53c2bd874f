from .peer import Peer, PeerRole
from .runtime import RuntimeDeps
from .session import SessionState
from .settings import AppSettings
from .transcript import TranscriptEvent

__all__ = ["AppSettings", "Peer", "PeerRole", "RuntimeDeps", "SessionState", "TranscriptEvent"]
