"""Failures reported by the collaborators around the search core."""

from __future__ import annotations


class PartsAssistantError(Exception):
    """Base error; ``reason`` is the machine-readable code shown to callers."""

    reason = "error"
    status_code = 500

    def __init__(self, message: str = ""):
        self.message = message or self.reason
        super().__init__(self.message)


class InvalidModelError(PartsAssistantError):
    """The identified vehicle is not a Suzuki Celerio or S-Presso."""

    reason = "invalid_model"
    status_code = 422


class ServiceUnavailableError(PartsAssistantError):
    """The external service failed or its answer could not be used."""

    reason = "service_unavailable"
    status_code = 503
