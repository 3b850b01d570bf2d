"""GeminiBackend - native google-genai generate_content transport."""
import base64

from google import genai
from google.genai import types

from snapsolve.backends.client import VisionBackend
from snapsolve.config import Config
from snapsolve.constants import MSG_ERR_EMPTY, RESPONSE_MIME_TYPE
from snapsolve.errors import ParseError
from snapsolve.models import AnalysisRequest


class GeminiBackend(VisionBackend):
    name = "gemini"

    def __init__(self, config: Config) -> None:
        self._api_key = config.api_key
        self._temperature = config.temperature
        self._timeout_ms = config.request_timeout * 1000

    def _build_config(
        self, request: AnalysisRequest, thinking_budget: int | None
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            response_mime_type=RESPONSE_MIME_TYPE,
            temperature=self._temperature,
            thinking_config=(
                types.ThinkingConfig(thinking_budget=thinking_budget)
                if thinking_budget
                else None
            ),
        )

    async def generate(
        self,
        request: AnalysisRequest,
        model: str,
        thinking_budget: int | None = None,
    ) -> str:
        client = genai.Client(
            api_key=self._api_key,
            http_options=types.HttpOptions(timeout=self._timeout_ms),
        )
        response = await client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(
                    data=base64.standard_b64decode(request.image_data),
                    mime_type=request.mime_type,
                ),
                types.Part.from_text(text=request.user_prompt),
            ],
            config=self._build_config(request, thinking_budget),
        )
        match response.text:
            case None | "":
                raise ParseError(MSG_ERR_EMPTY)
            case text:
                return text.strip()
