from .client import TranscriptionSessionClient

__all__ = ["TranscriptionSessionClient"]
