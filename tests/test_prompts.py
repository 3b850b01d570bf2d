"""Request builder tests."""
import base64

import pytest

from snapsolve.models import AnalysisRequest, normalize_language
from snapsolve.prompts import (
    SYSTEM_INSTRUCTION_EN,
    SYSTEM_INSTRUCTION_ZH,
    USER_PROMPT_EN,
    USER_PROMPT_ZH,
    build_request,
)


def test_build_request_base64_encodes_image():
    request = build_request(b"\xff\xd8jpeg-bytes", "en")

    assert base64.standard_b64decode(request.image_data) == b"\xff\xd8jpeg-bytes"
    assert request.mime_type == "image/jpeg"


def test_build_request_english_prompts():
    request = build_request(b"img", "en")

    assert request.system_instruction == SYSTEM_INSTRUCTION_EN
    assert request.user_prompt == USER_PROMPT_EN


def test_build_request_chinese_prompts():
    request = build_request(b"img", "zh")

    assert request.system_instruction == SYSTEM_INSTRUCTION_ZH
    assert request.user_prompt == USER_PROMPT_ZH


def test_build_request_rejects_empty_image():
    with pytest.raises(ValueError):
        build_request(b"", "en")


def test_request_is_immutable():
    request = build_request(b"img", "en")

    with pytest.raises(Exception):
        request.language = "zh"


def test_data_url_embeds_mime_type_and_payload():
    request = AnalysisRequest(image_data="QUJD", language="en", system_instruction="s", user_prompt="u")

    assert request.data_url == "data:image/jpeg;base64,QUJD"


def test_system_instruction_asks_for_double_escaped_latex():
    assert "\\\\frac{1}{2}" in SYSTEM_INSTRUCTION_EN
    assert '"correctIndex"' in SYSTEM_INSTRUCTION_EN


@pytest.mark.parametrize(
    "tag, expected",
    [("en", "en"), ("ZH", "zh"), ("zh-CN", "zh"), ("fr", "en"), (None, "en"), ("", "en")],
)
def test_normalize_language(tag, expected):
    assert normalize_language(tag) == expected


def test_build_request_keeps_given_mime_type():
    request = build_request(b"img", "en", "image/webp")

    assert request.mime_type == "image/webp"
