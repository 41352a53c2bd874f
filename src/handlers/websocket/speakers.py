"""Active-speaker tracking for MeetingBaas speaker notifications."""

from __future__ import annotations

from src.state.messages import SpeakerInfo, SpeakerUpdate


class SpeakerTracker:
    def __init__(self) -> None:
        self._last_speaker: str | None = None

    @property
    def last_speaker(self) -> str | None:
        return self._last_speaker

    def observe(self, update: SpeakerUpdate) -> SpeakerInfo | None:
        """Return the speaker to announce, or None if nothing changed.

        Only the first record counts, and only while it is speaking; a
        participant who keeps talking is announced once.
        """
        if not update.speakers:
            return None
        speaker = update.speakers[0]
        if not speaker.is_speaking or speaker.name == self._last_speaker:
            return None
        self._last_speaker = speaker.name
        return speaker

    def reset(self) -> None:
        self._last_speaker = None


__all__ = ["SpeakerTracker"]
