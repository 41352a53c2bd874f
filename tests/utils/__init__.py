"""Test utilities.

Focused modules:
- fakes.py: in-memory peers, upstream session and meeting bot for unit tests
- audio.py: PCM loading and paced streaming for the e2e clients
"""

from __future__ import annotations

from .fakes import FakeMeeting, FakeSession, FakeUpstream, FakePeerSocket, wait_until, make_settings

__all__ = [
    "FakeMeeting",
    "FakePeerSocket",
    "FakeSession",
    "FakeUpstream",
    "make_settings",
    "wait_until",
]
