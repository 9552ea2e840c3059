"""Clients for the external text-generation service.

The live client talks to an OpenAI-compatible chat-completions endpoint
(OpenRouter by default). The mock client is selected through configuration
for local runs and tests; its behaviour is fixed by the mode it is built with.
"""
import json
import logging
import re
from enum import Enum
from json import JSONDecodeError
from typing import Any, Optional, Protocol

import httpx
import openai
from openai import AsyncOpenAI

from mealplan.utilities.config import Settings
from mealplan.utilities.constants import LOADING_PLACEHOLDER_TEXT, MAX_MOCK_ALTERNATIVES, SLOT_NAMES
from mealplan.utilities.errors import GenerationRequestError

logger = logging.getLogger(__name__)


class GenerationMode(str, Enum):
    LIVE = "live"
    NORMAL = "normal"    # mock: answers with valid picks from the prompt
    LOADING = "loading"  # mock: answers with text that is not a plan


class GenerationClient(Protocol):
    async def generate(self, prompt: str) -> Any:
        ...


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\s*\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text.strip())
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove trailing commas before a closing brace/bracket."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if in_string:
            if ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            if start is not None:
                in_string = True
            continue
        if ch in "{[":
            if start is None:
                start = i
            stack.append(ch)
        elif ch in "}]":
            if not stack:
                continue
            opening = stack.pop()
            if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                return None
            if not stack and start is not None:
                return text[start:i + 1]
    return None


def parse_generated_text(text: str) -> Any:
    """Parse the model's text as JSON, or hand the raw text back unchanged."""
    try:
        return json.loads(text)
    except JSONDecodeError:
        pass

    cleaned = _remove_trailing_commas(_strip_code_fences(text))
    candidate = _extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.debug("Extracted JSON candidate from generation output is still invalid")
    logger.warning("Generation output is not valid JSON; passing raw text through")
    return text


class OpenRouterGenerationClient:
    """Single-turn chat completion against an OpenAI-compatible endpoint."""

    def __init__(self, api_key: str, model: str, base_url: str, timeout: float = 60.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    def _get_openai_client(self) -> Optional[AsyncOpenAI]:
        """Return the async client if an API key is configured, otherwise None."""
        if not self.api_key:
            return None
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url,
                                       timeout=self.timeout, max_retries=0,
                                       http_client=self.http_client)
        return self._client

    async def generate(self, prompt: str) -> Any:
        if not isinstance(prompt, str):
            raise TypeError("Input must be a string")
        client = self._get_openai_client()
        if client is None:
            raise GenerationRequestError("OPENROUTER_API_KEY is not set")

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "user", "content": [{"type": "text", "text": prompt}]},
                ],
            )
        except openai.APITimeoutError as e:
            raise GenerationRequestError("Generation request timed out") from e
        except openai.APIStatusError as e:
            raise GenerationRequestError(f"Generation service returned HTTP {e.status_code}") from e
        except openai.APIError as e:
            raise GenerationRequestError(f"Generation request failed: {e}") from e

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise GenerationRequestError("Generation response did not contain any text content")
        logger.debug("Generation output: %s", content)
        return parse_generated_text(content)


def _candidates_from_prompt(prompt: str) -> dict:
    """The slotted-candidate JSON is the last block of a composed prompt."""
    start = prompt.rfind("\n{")
    if start == -1:
        return {}
    try:
        data = json.loads(prompt[start + 1:])
    except JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


class MockGenerationClient:
    """Offline stand-in for the generation service."""

    def __init__(self, mode: GenerationMode = GenerationMode.NORMAL):
        if mode == GenerationMode.LIVE:
            raise ValueError("MockGenerationClient cannot run in live mode")
        self.mode = GenerationMode(mode)
        self.calls = 0

    async def generate(self, prompt: str) -> Any:
        if not isinstance(prompt, str):
            raise TypeError("Input must be a string")
        self.calls += 1
        if self.mode == GenerationMode.LOADING:
            logger.info("Mock generation in loading mode, returning placeholder text")
            return parse_generated_text(LOADING_PLACEHOLDER_TEXT)

        candidates = _candidates_from_prompt(prompt)
        plan = {}
        used = []
        for slot in SLOT_NAMES:
            options = candidates.get(slot) or []
            if options:
                plan[slot] = str(options[0].get("id", ""))
                used.append(plan[slot])
        alternatives = []
        for slot in SLOT_NAMES:
            for option in candidates.get(slot) or []:
                identifier = str(option.get("id", ""))
                if identifier and identifier not in used and identifier not in alternatives:
                    alternatives.append(identifier)
        plan["alternatives"] = alternatives[:MAX_MOCK_ALTERNATIVES]
        return parse_generated_text(json.dumps(plan))


def create_generation_client(settings: Settings) -> GenerationClient:
    """Pick the generation backend named by settings.generation_mode."""
    try:
        mode = GenerationMode(settings.generation_mode)
    except ValueError:
        logger.warning(f"Unknown GENERATION_MODE {settings.generation_mode!r}; using live client")
        mode = GenerationMode.LIVE
    if mode == GenerationMode.LIVE:
        return OpenRouterGenerationClient(
            api_key=settings.openrouter_api_key,
            model=settings.generation_model,
            base_url=settings.generation_base_url,
            timeout=settings.generation_timeout,
        )
    return MockGenerationClient(mode)
