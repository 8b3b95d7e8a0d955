"""
Career Advisor - AI proxy for the career-guidance chat.

Uses an OpenAI-compatible chat endpoint through the openai library.
Replies are short motivational advice; any provider failure turns into a
static reply so the caller always gets something to show.
"""
from typing import Optional

from openai import OpenAI

from udyog_saathi.core.config import get_settings
from udyog_saathi.core.logging import get_logger

logger = get_logger(__name__)

FALLBACK_REPLY = "AI is updating. Keep focused on your goals!"


class CareerAdvisor:
    """
    Wrapper for the hosted LLM.
    """

    def __init__(self, client: Optional[OpenAI] = None):
        settings = get_settings()
        self.client = client or OpenAI(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url
        )
        self.model = settings.ai_model

    def _call_api(self, prompt: str, max_tokens: int = 120) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=0.7
        )
        return response.choices[0].message.content

    @staticmethod
    def build_prompt(name: str, query: str, lang: Optional[str]) -> str:
        language = "Hindi" if lang == "hi" else "English"
        return (
            f"Professional career mentor advice for {name}. "
            f"Topic: {query}. "
            f"Max 30 words. Motivational. "
            f"Language: {language}."
        )

    def advise(self, name: str, query: str, lang: Optional[str] = None) -> str:
        """Ask for advice; never raises."""
        try:
            reply = self._call_api(self.build_prompt(name or "the user", query, lang))
            return (reply or "").strip() or FALLBACK_REPLY
        except Exception:
            logger.exception("Career guidance call failed")
            return FALLBACK_REPLY

    def test_connection(self) -> bool:
        """Test if the provider is reachable"""
        try:
            return bool(self._call_api("Reply with exactly: OK", max_tokens=10))
        except Exception as e:
            logger.error("AI provider connection failed: %s", e)
            return False


# Singleton instance
_advisor: CareerAdvisor = None


def get_career_advisor() -> CareerAdvisor:
    """Get or create the advisor (singleton pattern)"""
    global _advisor
    if _advisor is None:
        _advisor = CareerAdvisor()
    return _advisor
