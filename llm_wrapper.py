"""
LLM access and request orchestration for the Symptom Triage backend.

Provides:
- OpenRouterClient: one non-streaming chat completion per call, no retries
- MockLLMClient: canned answer in the expected heading format (LLM_MOCK=1)
- get_llm_client: picks the client from settings
- get_ai_guidance: validate -> prompt -> completion -> match local data
"""

import logging
from typing import Any, Optional

import httpx
import openai

from data_store import LocalDataStore
from errors import UpstreamError
from prompts import build_prompt
from pydantic_models import DiagnosisRequest, DiagnosisResponse
from response_matcher import build_structured_data
from settings import Settings

logger = logging.getLogger(__name__)

GUIDANCE_MESSAGE = "AI guidance generated. Remember this is not a medical diagnosis."


class OpenRouterClient:
    """Chat completions against OpenRouter's OpenAI-compatible endpoint."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.model = settings.openrouter_model
        if not settings.openrouter_api_key:
            logger.warning("OPENROUTER_API_KEY is not set; completion calls will be rejected upstream")
        self._client = openai.OpenAI(
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
            timeout=settings.llm_timeout_secs,
            max_retries=0,
            default_headers={
                "HTTP-Referer": settings.openrouter_http_referer,
                "X-Title": settings.openrouter_x_title,
            },
            http_client=http_client,
        )

    def complete(self, prompt: str) -> str:
        """Returns the answer text, or raises UpstreamError."""
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                stream=False,
            )
        except openai.APIStatusError as e:
            raise UpstreamError(
                f"Completion endpoint returned HTTP {e.status_code}",
                status_code=e.status_code,
                details=_response_body(e.response),
            ) from e
        except openai.APIError as e:
            # connection errors and timeouts
            raise UpstreamError(str(e)) from e
        except ValueError as e:
            # body labelled JSON that does not decode
            raise UpstreamError(f"Completion endpoint returned a malformed body: {e}") from e
        return _answer_text(completion)


def _response_body(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


def _answer_text(completion: Any) -> str:
    choices = getattr(completion, "choices", None)
    if not choices or len(choices) != 1:
        raise UpstreamError("Completion response did not contain exactly one choice", details=_describe(completion))
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        raise UpstreamError("Completion response has no message content", details=_describe(completion))
    return content


def _describe(completion: Any):
    if hasattr(completion, "model_dump"):
        return completion.model_dump()
    return str(completion)


class MockLLMClient:
    """Offline stand-in that answers in the five-heading format."""

    ANSWER = (
        "**Condition:** Common Cold\n"
        "**Description:** A mild viral infection of the nose and throat.\n"
        "**Self-Care:** Rest, drink fluids, and use saline rinses for congestion.\n"
        "**When to See a Doctor:** If fever lasts more than three days, breathing becomes "
        "difficult, or symptoms worsen after a week, contact a healthcare provider.\n"
        "**Important Disclaimer:** This information is for general guidance only, "
        "**is not a medical diagnosis**, and does not replace professional medical advice.\n"
    )

    def complete(self, prompt: str) -> str:
        logger.info("LLM_MOCK enabled; returning canned answer")
        return self.ANSWER


def get_llm_client(settings: Settings):
    if settings.llm_mock:
        return MockLLMClient()
    return OpenRouterClient(settings)


def get_ai_guidance(request: DiagnosisRequest, store: LocalDataStore, llm) -> DiagnosisResponse:
    """
    Primary orchestration:
    - build the prompt (InvalidInputError propagates, no external call)
    - single completion call (UpstreamError propagates, no retry)
    - attach curated recommendations and fallback resources
    """
    source = build_prompt(request, store)
    if source.mode == "chat":
        logger.info("Generating AI guidance for chat input: %s", source.inputs)
    else:
        logger.info("Generating AI guidance for selected symptoms: %s", source.inputs)

    ai_text = llm.complete(source.prompt)

    return DiagnosisResponse(
        ai_response=ai_text,
        structured_data=build_structured_data(ai_text, store),
        message=GUIDANCE_MESSAGE,
    )
