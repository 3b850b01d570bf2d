"""Chat action indicator tests."""
import asyncio

from unittest.mock import AsyncMock, MagicMock

from telegram.constants import ChatAction

from snapsolve.telegram.typing import TelegramTypingIndicator


async def test_indicator_sends_chat_action_until_stopped():
    bot = MagicMock()
    bot.send_chat_action = AsyncMock()
    indicator = TelegramTypingIndicator(bot, "123")

    await indicator.start()
    await asyncio.sleep(0)
    assert indicator.active
    await indicator.stop()

    bot.send_chat_action.assert_awaited_with(chat_id=123, action=ChatAction.TYPING)
    assert not indicator.active


async def test_indicator_works_as_async_context_manager():
    bot = MagicMock()
    bot.send_chat_action = AsyncMock()

    async with TelegramTypingIndicator(bot, "123") as indicator:
        await asyncio.sleep(0)
        assert indicator.active

    assert not indicator.active


async def test_indicator_swallows_chat_action_failures():
    bot = MagicMock()
    bot.send_chat_action = AsyncMock(side_effect=RuntimeError("flood"))
    indicator = TelegramTypingIndicator(bot, "123")

    await indicator.start()
    await asyncio.sleep(0)
    await indicator.stop()

    assert not indicator.active


async def test_stop_without_start_is_a_noop():
    indicator = TelegramTypingIndicator(MagicMock(), "123")

    await indicator.stop()

    assert not indicator.active
