"""OpenAICompatBackend - chat-completions transport for OpenAI-compatible proxies."""
from openai import AsyncOpenAI

from snapsolve.backends.client import VisionBackend
from snapsolve.config import Config
from snapsolve.constants import MSG_ERR_EMPTY
from snapsolve.errors import ParseError
from snapsolve.models import AnalysisRequest


def build_messages(request: AnalysisRequest) -> list[dict]:
    return [
        {"role": "system", "content": request.system_instruction},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": request.user_prompt},
                {"type": "image_url", "image_url": {"url": request.data_url}},
            ],
        },
    ]


class OpenAICompatBackend(VisionBackend):
    """POSTs to ``<base_url>/chat/completions``.

    The proxy decides how the model name maps to a provider, so the reasoning
    budget is never forwarded. SDK retries are disabled: one attempt is one
    HTTP call, and the solver owns the fallback policy.
    """

    name = "openai-compatible"

    def __init__(self, config: Config) -> None:
        match config.api_base_url:
            case None | "":
                raise ValueError("OpenAICompatBackend requires API_BASE_URL")
            case _:
                pass
        self._api_key = config.api_key
        self._base_url = config.api_base_url.rstrip("/")
        self._temperature = config.temperature
        self._timeout = config.request_timeout

    async def generate(
        self,
        request: AnalysisRequest,
        model: str,
        thinking_budget: int | None = None,
    ) -> str:
        client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )
        response = await client.chat.completions.create(
            model=model,
            messages=build_messages(request),
            temperature=self._temperature,
        )
        content = response.choices[0].message.content if response.choices else None
        match content:
            case None | "":
                raise ParseError(MSG_ERR_EMPTY)
            case text:
                return text.strip()
