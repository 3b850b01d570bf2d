"""All magic values live here - no inline literals anywhere else."""

# Languages
LANG_EN = "en"
LANG_ZH = "zh"
SUPPORTED_LANGUAGES = (LANG_EN, LANG_ZH)

# Model defaults
DEFAULT_PRIMARY_MODEL = "gemini-3-pro-preview"
DEFAULT_FALLBACK_MODEL = "gemini-2.5-flash"
DEFAULT_THINKING_BUDGET = 2048
DEFAULT_TEMPERATURE = 0.2
DEFAULT_REQUEST_TIMEOUT = 120

# Request payload
IMAGE_MIME_TYPE = "image/jpeg"
RESPONSE_MIME_TYPE = "application/json"

# Telegram typing indicator re-send interval (seconds).
# The TYPING action expires after ~5 s, so we refresh every 4 s.
TELEGRAM_TYPING_INTERVAL: float = 4.0
TELEGRAM_MAX_MESSAGE_LENGTH = 4096

# Inline keyboard callback data
QUIZ_CALLBACK_PREFIX = "quiz:"

# Commands
CMD_START = "start"
CMD_HELP = "help"
CMD_LANG = "lang"
CMD_UNLOCK = "unlock"

# Log messages
MSG_BOT_STARTING = "Starting SnapSolve bot…"
MSG_BLOCKED_CHAT = "Blocked update from locked chat_id: %s"
MSG_SEND_OK = "✓ Sent solution (%.1fs)"
MSG_SEND_FAIL = "✗ Send failed (%.1fs)"
MSG_CALLING_MODEL = "→ %s (%s)"
MSG_FALLBACK = "Primary model %s failed (%s), retrying once with %s"
MSG_SUPERSEDED = "Superseded in-flight request for chat %s"

# Localized fallback answer when the model omits one
DEFAULT_ANSWER = {
    LANG_EN: "See explanation below",
    LANG_ZH: "见详细解析",
}

# Localized error messages
MSG_ERR_CONFIG = {
    LANG_EN: "API Key not configured. Please set API_KEY in your environment variables.",
    LANG_ZH: "系统未配置 API Key。请在环境变量中设置 API_KEY。",
}
MSG_ERR_AUTH = {
    LANG_EN: "API Key is invalid.",
    LANG_ZH: "API Key 无效，请检查配置。",
}
MSG_ERR_AUTH_PROXY_KEY = {
    LANG_EN: (
        "Invalid API Key. You are using a proxy key (sk-...) but API_BASE_URL is not set. "
        "Set API_BASE_URL and restart the bot."
    ),
    LANG_ZH: "API Key 无效。检测到您使用的是代理 Key (sk-...)，但未配置 API_BASE_URL。请设置后重启。",
}
MSG_ERR_QUOTA = {
    LANG_EN: "Quota exceeded or too many requests. Please wait a moment and try again.",
    LANG_ZH: "请求过于频繁或额度已用完，请稍后再试。",
}
MSG_ERR_NOT_FOUND = {
    LANG_EN: "Model not found or not supported by this endpoint.",
    LANG_ZH: "模型不存在或当前接口不支持该模型。",
}
MSG_ERR_UNAVAILABLE = {
    LANG_EN: "The AI service is busy right now. Please try again shortly.",
    LANG_ZH: "AI 服务繁忙，请稍后再试。",
}
MSG_ERR_NETWORK = {
    LANG_EN: (
        "Network request failed. Please check: 1. VPN/proxy connection; "
        "2. API_BASE_URL configuration."
    ),
    LANG_ZH: "网络连接失败。请检查：1. 是否开启代理/VPN；2. API_BASE_URL 是否正确。",
}
MSG_ERR_PARSE = {
    LANG_EN: "Invalid JSON response from AI.",
    LANG_ZH: "AI 返回数据格式错误。",
}
MSG_ERR_UNKNOWN = {
    LANG_EN: "Failed to analyze the image.",
    LANG_ZH: "图片分析失败。",
}
MSG_ERR_EMPTY = "No explanation generated"

# Localized UI text
UI_TEXT = {
    LANG_EN: {
        "answer_title": "💡 The Answer",
        "explanation_title": "📖 Detailed Analysis",
        "quiz_title": "✏️ Practice - Test your understanding",
        "select_option": "Select an option:",
        "correct": "Correct! 🎉",
        "incorrect": "Not quite. The correct answer is:",
        "explanation": "Explanation:",
        "prompt_next": "Ready to try another one? Send the next photo.",
        "analyzing": "Analyzing your question…",
        "locked": "This bot is locked. Send /start <access code> to unlock it.",
        "unlocked": "Unlocked - send a photo of a question to get started.",
        "wrong_code": "Wrong access code.",
        "lang_set": "Language set to English.",
        "lang_usage": "Usage: /lang en | /lang zh",
        "no_image": "Please send a photo of the question.",
        "quiz_expired": "This quiz is no longer active.",
        "welcome": "Send me a photo of any question and I'll explain it, then quiz you.",
    },
    LANG_ZH: {
        "answer_title": "💡 最终答案",
        "explanation_title": "📖 详细解析",
        "quiz_title": "✏️ 练一练 - 巩固知识点",
        "select_option": "请选择一个选项：",
        "correct": "回答正确！🎉",
        "incorrect": "不太对哦。正确答案是：",
        "explanation": "解析：",
        "prompt_next": "准备好尝试下一题了吗？请发送下一张照片。",
        "analyzing": "正在分析题目…",
        "locked": "机器人已锁定。请发送 /start <访问码> 解锁。",
        "unlocked": "已解锁，发送题目照片即可开始。",
        "wrong_code": "访问码错误。",
        "lang_set": "语言已切换为中文。",
        "lang_usage": "用法：/lang en | /lang zh",
        "no_image": "请发送题目的照片。",
        "quiz_expired": "该测验已失效。",
        "welcome": "发送任意题目的照片，我会为你讲解并出一道练习题。",
    },
}

OPTION_LABELS = ("A", "B", "C", "D")
QUIZ_OPTION_COUNT = len(OPTION_LABELS)

MSG_HELP = (
    "SnapSolve - photo tutor on Telegram\n"
    "\n"
    "Commands:\n"
    "  /help              - show this message\n"
    "  /start <code>      - unlock the bot (when an access code is set)\n"
    "  /lang en | zh      - switch answer language\n"
    "\n"
    "Media:\n"
    "  Photo              - answer, detailed explanation and a practice quiz\n"
    "  Image file         - same as a photo\n"
    "\n"
    "Sending a new photo while one is still being analyzed cancels the old one.\n"
)

# Lower-cased substrings used to classify untyped provider errors
AUTH_ERROR_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "invalid api key",
    "incorrect api key",
    "unauthenticated",
    "401",
)
QUOTA_ERROR_MARKERS = ("429", "quota", "resource_exhausted", "rate limit")
NOT_FOUND_ERROR_MARKERS = ("404", "not found", "not_found")
UNAVAILABLE_ERROR_MARKERS = ("503", "unavailable", "overloaded")
NETWORK_ERROR_MARKERS = ("failed to fetch", "load failed", "networkerror", "connection")
