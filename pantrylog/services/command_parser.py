"""
Command Parser

Turns a transcribed kitchen command ("add two kilos of apples") into a
structured intent using the OpenAI chat completions API.
Never raises: anything it cannot understand becomes an UNKNOWN intent.
"""

import json
import logging
from typing import Any, Dict, Optional

from pantrylog.models.commands import CommandAction, CommandIntent

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

PROMPT_TEMPLATE = """
You are the assistant of a kitchen inventory app.
Extract the action, the item, the quantity and the unit from the command below.

Command: "{text}"

RULES:
- "add", "put in", "we bought" -> action: "add"
- "remove", "delete", "used up", "we ate", "take out" -> action: "remove"
- Quantity is always a number. "a", "an", "one" -> 1.
- Unit: extract units such as "liter", "gram", "piece", "pack", "kg", "ml". If none is given, use null.

Answer ONLY with a JSON object in this format:
{{
  "action": "add",
  "item": "name of the item (e.g. apples, milk)",
  "quantity": 1,
  "unit": "kg"
}}
"""


def _strip_code_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def intent_from_payload(payload: Dict[str, Any]) -> CommandIntent:
    """Coerce a loosely-typed parser answer into a CommandIntent."""
    action = payload.get("action")
    if action not in (CommandAction.ADD.value, CommandAction.REMOVE.value):
        action = CommandAction.UNKNOWN.value

    quantity = payload.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or quantity < 0:
        quantity = 1

    item = payload.get("item")
    if not isinstance(item, str) or not item.strip():
        item = None

    unit = payload.get("unit")
    if not isinstance(unit, str) or not unit.strip():
        unit = None

    return CommandIntent(action=action, item=item, quantity=float(quantity), unit=unit)


class CommandParser:
    """LLM-backed natural-language command parser."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def parse(self, text: str) -> CommandIntent:
        """Parse a spoken command into an intent."""
        if not self.api_key and self._client is None:
            logger.error("OPENAI_API_KEY is not configured - cannot parse commands")
            return CommandIntent(action=CommandAction.UNKNOWN)

        try:
            client = self._get_client()
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": PROMPT_TEMPLATE.format(text=text)}],
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content or ""
            response_text = _strip_code_fences(content)
            if not response_text:
                return CommandIntent(action=CommandAction.UNKNOWN)

            payload = json.loads(response_text)
            if not isinstance(payload, dict):
                return CommandIntent(action=CommandAction.UNKNOWN)
            return intent_from_payload(payload)

        except Exception as e:
            logger.error(f"Command parsing failed: {e}")
            return CommandIntent(action=CommandAction.UNKNOWN)
