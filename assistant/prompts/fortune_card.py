"""Extract the trailing JSON fortune card from a model reply."""

import json
import logging
import re

logger = logging.getLogger(__name__)

# Greedy: spans from the first "{" to the last "}"
_JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


def extract_fortune_card(reply: str) -> dict | None:
    match = _JSON_BLOCK_RE.search(reply or "")
    if match is None:
        return None
    try:
        card = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.debug("Reply contained an undecodable JSON block")
        return None
    return card if isinstance(card, dict) else None
