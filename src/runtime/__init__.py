"""Runtime package.

Everything with a live socket or HTTP client is built here, once, from an
explicit settings value; nothing is constructed at import time.
"""

__all__: list[str] = []
