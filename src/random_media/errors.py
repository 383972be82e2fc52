from __future__ import annotations


class RandomMediaError(Exception):
    """Base class for errors surfaced to callers of the picker."""

    message_key = "fetch_failed"
    status_code = 500


class ProviderNotConfigured(RandomMediaError):
    message_key = "not_configured"
    status_code = 500


class ProviderError(RandomMediaError):
    # network failures, bad status codes, malformed payloads
    message_key = "fetch_failed"
    status_code = 502


class NoMediaFound(RandomMediaError):
    message_key = "no_media"
    status_code = 404
