from .client import MeetingBotClient

__all__ = ["MeetingBotClient"]
