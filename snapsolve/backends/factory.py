from snapsolve.backends.client import VisionBackend
from snapsolve.backends.gemini import GeminiBackend
from snapsolve.backends.openai_compat import OpenAICompatBackend
from snapsolve.config import Config


def make_backend(config: Config) -> VisionBackend:
    """Pick the transport once at startup: a configured base URL means an
    OpenAI-compatible proxy, otherwise the native Gemini SDK."""
    match config.uses_openai_compat:
        case True:
            return OpenAICompatBackend(config)
        case False:
            return GeminiBackend(config)
