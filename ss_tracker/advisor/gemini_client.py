"""Gemini client for coaching insights and chat replies.

Both calls are best-effort: any failure (network error, timeout, empty
response, invalid JSON, wrong shape) is logged and replaced by a fixed
fallback so callers never see an exception.

DESIGN DECISIONS:
- Models are injected so tests can substitute a mock
- Structured advice is requested as JSON and validated with pydantic
- Each call is bounded by ``asyncio.wait_for``; expiry counts as failure
"""

import asyncio
import logging
import os
from typing import Any, List, Literal, Optional, Sequence

import google.generativeai as genai
from pydantic import BaseModel, ValidationError
from typing_extensions import TypedDict

from ss_tracker.data_layer.models import AdviceType, AIAdvice, UserProfile
from ss_tracker.metrics.calculator import format_bmi

logger = logging.getLogger(__name__)

# Flash keeps replies quick
MODEL_ID = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 15.0

COACH_INSTRUCTION = (
    "You are a supportive, knowledgeable, and friendly fitness coach. "
    "You provide scientific, balanced advice focused on longevity and wellness."
)
CHAT_INSTRUCTION = "You are a helpful health assistant. Keep answers concise and encouraging."

CHAT_FAILURE_RESPONSE = "Connection issue. Stay focused."
CHAT_EMPTY_RESPONSE = "I'm ready to train when you are."

FALLBACK_NUTRITION = ("Drink more water", "Eat whole foods", "Avoid processed sugar")
FALLBACK_WORKOUT = ("30 min walk", "Pushups", "Stretching")
FALLBACK_MOTIVATION = "Keep pushing forward."


def fallback_advice() -> AIAdvice:
    """Advice returned whenever the insights call fails."""
    return AIAdvice(
        nutrition=list(FALLBACK_NUTRITION),
        workout=list(FALLBACK_WORKOUT),
        motivation=FALLBACK_MOTIVATION,
        type=AdviceType.GENERAL,
    )


class AdviceSchema(TypedDict):
    """Response schema sent to the model."""

    nutrition: List[str]
    workout: List[str]
    motivation: str
    type: str


class AdviceResponse(BaseModel):
    """Validator for the model's JSON reply."""

    nutrition: List[str]
    workout: List[str]
    motivation: str
    type: Literal["General", "Recovery"]

    def to_advice(self) -> AIAdvice:
        return AIAdvice(
            nutrition=list(self.nutrition),
            workout=list(self.workout),
            motivation=self.motivation,
            type=AdviceType(self.type),
        )


class AdviceUnavailableError(Exception):
    """Internal signal that a reply could not be turned into advice."""


def build_insights_prompt(profile: UserProfile) -> str:
    return f"""
    Analyze this user profile:
    Name: {profile.name}
    Age: {profile.age}
    BMI: {format_bmi(profile.bmi)}
    Activity Level: {profile.activity_level.value}
    Goal: Maintenance and General Health.

    Provide:
    1. 3 specific nutrition tips.
    2. 3 specific workout suggestions suitable for their activity level.
    3. A short, punchy motivational quote.
    """


def build_chat_contents(message: str, history: Sequence[str]) -> str:
    return "History: " + "\n".join(history) + "\nUser: " + message


def response_text(response: Any) -> Optional[str]:
    """Text of a model response, or None when it has no text parts."""
    try:
        return response.text
    except ValueError:
        # Raised by the SDK when the candidate has no parts (e.g. blocked)
        return None


class HealthAdvisor:
    """Client for coaching insights and chat.

    Usage:
        advisor = HealthAdvisor.from_env()  # reads GEMINI_API_KEY

        advice = await advisor.get_health_insights(profile)
        reply = await advisor.get_chat_response("How do I start?", history)
    """

    API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

    def __init__(
        self,
        insights_model: Any,
        chat_model: Any,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Initialize advisor.

        Args:
            insights_model: Model used for structured advice (coach instruction)
            chat_model: Model used for chat replies (assistant instruction)
            timeout_seconds: Upper bound for each call
        """
        self.insights_model = insights_model
        self.chat_model = chat_model
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_env(
        cls,
        model_id: str = MODEL_ID,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "HealthAdvisor":
        """Create advisor from environment variables.

        Raises:
            ValueError: If no API key variable is set
        """
        api_key = next(
            (os.environ[var] for var in cls.API_KEY_ENV_VARS if os.environ.get(var)),
            None,
        )
        if not api_key:
            raise ValueError(
                f"Environment variable {cls.API_KEY_ENV_VARS[0]} not set. "
                "Get an API key at https://aistudio.google.com/app/apikey"
            )
        genai.configure(api_key=api_key)
        return cls(
            insights_model=genai.GenerativeModel(model_id, system_instruction=COACH_INSTRUCTION),
            chat_model=genai.GenerativeModel(model_id, system_instruction=CHAT_INSTRUCTION),
            timeout_seconds=timeout_seconds,
        )

    async def get_health_insights(self, profile: UserProfile) -> AIAdvice:
        """Ask the model for nutrition tips, workouts and a motivational line.

        Args:
            profile: Profile with metrics already recomputed

        Returns:
            AIAdvice from the model, or ``fallback_advice()`` on any failure
        """
        try:
            response = await asyncio.wait_for(
                self.insights_model.generate_content_async(
                    build_insights_prompt(profile),
                    generation_config={
                        "response_mime_type": "application/json",
                        "response_schema": AdviceSchema,
                    },
                ),
                timeout=self.timeout_seconds,
            )
            text = response_text(response)
            if not text:
                raise AdviceUnavailableError("No response text")
            return AdviceResponse.model_validate_json(text).to_advice()
        except asyncio.TimeoutError:
            logger.error("Gemini API timed out after %.1fs", self.timeout_seconds)
        except ValidationError as e:
            logger.error("Gemini API returned malformed advice: %s", e)
        except Exception as e:
            logger.error("Gemini API Error: %s", e)
        return fallback_advice()

    async def get_chat_response(self, message: str, history: Sequence[str]) -> str:
        """Reply to a chat message.

        Args:
            message: Latest user message
            history: Prior transcript texts, oldest first

        Returns:
            Model reply; CHAT_EMPTY_RESPONSE for an empty reply,
            CHAT_FAILURE_RESPONSE on failure
        """
        try:
            response = await asyncio.wait_for(
                self.chat_model.generate_content_async(build_chat_contents(message, history)),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Gemini chat timed out after %.1fs", self.timeout_seconds)
            return CHAT_FAILURE_RESPONSE
        except Exception as e:
            logger.warning("Gemini chat error: %s", e)
            return CHAT_FAILURE_RESPONSE
        return response_text(response) or CHAT_EMPTY_RESPONSE
