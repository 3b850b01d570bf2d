"""Solver - one photo in, one validated AnalysisResult out."""
import logging

from snapsolve.backends.client import VisionBackend
from snapsolve.config import Config
from snapsolve.constants import IMAGE_MIME_TYPE, MSG_CALLING_MODEL, MSG_FALLBACK
from snapsolve.errors import AuthError, ConfigError, SolveError, classify_error
from snapsolve.models import AnalysisRequest, AnalysisResult, Language
from snapsolve.normalizer import parse_result
from snapsolve.prompts import build_request

logger = logging.getLogger(__name__)

PROXY_KEY_PREFIX = "sk-"


def mask_key(api_key: str | None) -> str:
    match api_key:
        case None | "":
            return "(missing)"
        case key:
            return key[:4] + "..."


class Solver:
    """Calls the primary model, retries once on the fallback model for
    fallback-eligible failures, then normalizes the text.

    Auth, quota, network and parse failures are terminal. The fallback call
    is only ever issued after the primary call has finished failing.
    """

    def __init__(self, config: Config, backend: VisionBackend) -> None:
        self._config = config
        self._backend = backend
        logger.info(
            "Solver config: backend=%s key=%s base_url=%s primary=%s fallback=%s",
            backend.name,
            mask_key(config.api_key),
            config.api_base_url or "(default Google)",
            config.primary_model,
            config.fallback_model,
        )

    async def solve(
        self, image_bytes: bytes, language: Language, mime_type: str = IMAGE_MIME_TYPE
    ) -> AnalysisResult:
        match self._config.api_key:
            case None | "":
                raise ConfigError("API_KEY is not configured")
            case _:
                pass

        request = build_request(image_bytes, language, mime_type)
        text = await self._generate_with_fallback(request)
        return parse_result(text, language)

    async def _generate_with_fallback(self, request: AnalysisRequest) -> str:
        primary = self._config.primary_model
        try:
            logger.info(MSG_CALLING_MODEL, primary, self._backend.name)
            return await self._backend.generate(
                request, primary, thinking_budget=self._config.thinking_budget
            )
        except Exception as exc:
            error = self._classify(exc)
            match error.fallback_eligible:
                case False:
                    logger.error("Model call failed (%s): %s", error.kind, exc)
                    raise error from (None if error is exc else exc)
                case True:
                    logger.warning(MSG_FALLBACK, primary, error.kind, self._config.fallback_model)

        fallback = self._config.fallback_model
        try:
            logger.info(MSG_CALLING_MODEL, fallback, self._backend.name)
            return await self._backend.generate(request, fallback, thinking_budget=None)
        except Exception as exc:
            error = self._classify(exc)
            logger.error("Fallback model failed (%s): %s", error.kind, exc)
            raise error from (None if error is exc else exc)

    def _classify(self, exc: Exception) -> SolveError:
        error = classify_error(exc)
        match error:
            case AuthError() if (
                self._config.api_key.startswith(PROXY_KEY_PREFIX)
                and not self._config.api_base_url
            ):
                return AuthError(str(error), proxy_key_hint=True)
            case _:
                return error
