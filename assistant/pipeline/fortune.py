"""Fortune teller: one chat turn against the generative model."""

import logging
from collections.abc import Sequence
from datetime import date

from assistant.errors import PreconditionViolation
from assistant.ingest.genai_client import GenAIClient
from assistant.models.chat import ChatMessage, FortuneReply, Role
from assistant.models.common import utc_now
from assistant.prompts.fortune_card import extract_fortune_card
from assistant.prompts.templates import build_fortune_prompt, is_fortune_query

logger = logging.getLogger(__name__)

EMPTY_REPLY = "[No content]"


class FortuneTeller:
    def __init__(self, genai: GenAIClient):
        self.genai = genai

    def reply(
        self,
        history: Sequence[ChatMessage],
        message: str,
        today: date | None = None,
    ) -> FortuneReply:
        """Send `message` with the prior history and return the model's answer.

        Fortune queries get the fortune-teller prompt as an extra user turn,
        and the JSON card at the end of the reply is parsed when present.
        The returned history holds the user message and the reply, not the
        expanded prompt.
        """
        content = (message or "").strip()
        if not content:
            raise PreconditionViolation("Message must not be empty")

        turns = [*history, ChatMessage(Role.USER, content)]
        contents = [m.to_content() for m in turns]
        if is_fortune_query(content):
            prompt = build_fortune_prompt(content, today or utc_now().date())
            contents.append(ChatMessage(Role.USER, prompt).to_content())

        text = self.genai.generate(contents) or EMPTY_REPLY
        card = extract_fortune_card(text)
        if card is not None:
            logger.info("Parsed fortune card with keys %s", sorted(card))
        return FortuneReply(
            text=text,
            card=card,
            history=(*turns, ChatMessage(Role.MODEL, text)),
        )
