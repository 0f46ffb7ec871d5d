"""Language-model coaching collaborator."""

from ss_tracker.advisor.gemini_client import (
    CHAT_EMPTY_RESPONSE,
    CHAT_FAILURE_RESPONSE,
    HealthAdvisor,
    fallback_advice,
)

__all__ = [
    "CHAT_EMPTY_RESPONSE",
    "CHAT_FAILURE_RESPONSE",
    "HealthAdvisor",
    "fallback_advice",
]
