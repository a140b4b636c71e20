from __future__ import annotations


class PlatformError(Exception):
    pass


class PlatformConnectionError(PlatformError):
    pass


class NotFoundError(PlatformError):
    pass
