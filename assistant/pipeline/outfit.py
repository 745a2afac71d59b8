"""Outfit advisor: weather lookup followed by a generated clothing suggestion."""

import logging
from datetime import date

from assistant.ingest.genai_client import GenAIClient
from assistant.models.chat import ChatMessage, OutfitSuggestion, Role
from assistant.models.common import utc_now
from assistant.pipeline.weather_lookup import WeatherLookup
from assistant.prompts.templates import build_outfit_prompt

logger = logging.getLogger(__name__)

EMPTY_SUGGESTION = "小助手沒有想到建議呢！"


class OutfitAdvisor:
    def __init__(self, lookup: WeatherLookup, genai: GenAIClient):
        self.lookup = lookup
        self.genai = genai

    def suggest(
        self, city: str, date_text: str, today: date | None = None
    ) -> OutfitSuggestion:
        """Look up the forecast and ask the model for outfit advice.

        When no sample matches the date the model is not called and the
        suggestion text is None.
        """
        outcome = self.lookup.lookup(city, date_text)
        if not outcome.found:
            return OutfitSuggestion(outcome=outcome, text=None)

        prompt = build_outfit_prompt(
            outcome.series.city_name or city.strip(),
            outcome.result.sample,
            today or utc_now().date(),
        )
        reply = self.genai.generate([ChatMessage(Role.USER, prompt).to_content()])
        if not reply:
            logger.warning("Empty outfit suggestion for %s", city)
        return OutfitSuggestion(outcome=outcome, text=reply or EMPTY_SUGGESTION)
