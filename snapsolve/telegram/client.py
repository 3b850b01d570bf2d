"""TelegramClient - event-driven transport via python-telegram-bot."""
import logging
import time
from typing import Callable, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Message, Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from snapsolve.access import AccessGate
from snapsolve.bot_client import BotClient, OnPhoto
from snapsolve.config import Config
from snapsolve.constants import (
    CMD_HELP,
    CMD_LANG,
    CMD_START,
    CMD_UNLOCK,
    IMAGE_MIME_TYPE,
    MSG_BLOCKED_CHAT,
    MSG_ERR_UNKNOWN,
    MSG_HELP,
    MSG_SEND_FAIL,
    MSG_SEND_OK,
    QUIZ_CALLBACK_PREFIX,
    SUPPORTED_LANGUAGES,
    LANG_EN,
)
from snapsolve.errors import SolveError
from snapsolve.models import AnalysisResult, normalize_language
from snapsolve.render import (
    option_label,
    render_answer,
    render_explanation,
    render_quiz_chunks,
    render_quiz_feedback,
    split_message,
    ui_text,
)
from snapsolve.sessions import ChatSession, InFlightRequests, SessionStore, SupersededError
from snapsolve.telegram.typing import TelegramTypingIndicator

logger = logging.getLogger(__name__)


class TelegramClient(BotClient):

    def __init__(
        self,
        config: Config,
        gate: Optional[AccessGate] = None,
        sessions: Optional[SessionStore] = None,
        in_flight: Optional[InFlightRequests] = None,
    ) -> None:
        self._token = config.telegram_bot_token
        self._gate = gate or AccessGate(config.access_code)
        self._sessions = sessions or SessionStore(config.default_language)
        self._in_flight = in_flight or InFlightRequests()
        self._app: Optional[Application] = None

    # -- BotClient interface ---------------------------------------------------

    def run(self, on_photo: OnPhoto) -> None:
        # Updates must run concurrently so a new photo can supersede one in flight.
        self._app = Application.builder().token(self._token).concurrent_updates(True).build()
        self._app.add_handler(CommandHandler(CMD_START, self._make_unlock_handler(welcome=True)))
        self._app.add_handler(CommandHandler(CMD_UNLOCK, self._make_unlock_handler(welcome=False)))
        self._app.add_handler(CommandHandler(CMD_HELP, self._make_help_handler()))
        self._app.add_handler(CommandHandler(CMD_LANG, self._make_lang_handler()))
        self._app.add_handler(
            TGMessageHandler(filters.PHOTO | filters.Document.IMAGE, self._make_photo_handler(on_photo))
        )
        self._app.add_handler(
            TGMessageHandler(filters.TEXT & ~filters.COMMAND, self._make_text_handler())
        )
        self._app.add_handler(
            CallbackQueryHandler(self._make_quiz_handler(), pattern=f"^{QUIZ_CALLBACK_PREFIX}")
        )
        self._app.run_polling()

    async def send_message(
        self, to: str, text: str, reply_markup: Optional[InlineKeyboardMarkup] = None
    ) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case app:
                try:
                    await app.bot.send_message(chat_id=int(to), text=text, reply_markup=reply_markup)
                    return True
                except Exception as exc:
                    logger.error("Telegram send_message failed: %s", exc)
                    return False

    # -- helpers (also used in tests) -------------------------------------------

    @staticmethod
    def _chat_id(update: Update) -> str:
        return str(update.effective_chat.id) if update.effective_chat else ""

    def _is_allowed(self, update: Update) -> bool:
        if update.effective_chat is None:
            return False
        return self._gate.should_process(self._chat_id(update)).allowed

    def _language(self, chat_id: str) -> str:
        return self._sessions.get(chat_id).language

    @staticmethod
    def _image_attachment(message: Optional[Message]):
        """The largest photo size, or an image sent as a file; None otherwise."""
        match message:
            case None:
                return None
            case m if m.photo:
                return m.photo[-1]
            case m if m.document and (m.document.mime_type or "").startswith("image/"):
                return m.document
            case _:
                return None

    @staticmethod
    def _image_mime_type(message: Message) -> str:
        """Telegram re-encodes photos as JPEG; image files keep their own type."""
        match message:
            case m if m.photo:
                return IMAGE_MIME_TYPE
            case m:
                return m.document.mime_type or IMAGE_MIME_TYPE

    @staticmethod
    def _quiz_callback_data(generation: int, index: int) -> str:
        return f"{QUIZ_CALLBACK_PREFIX}{generation}:{index}"

    @staticmethod
    def _parse_quiz_callback(data: str) -> tuple[int, int] | None:
        """Parse 'quiz:<generation>:<index>' -> (generation, index) or None."""
        parts = data.removeprefix(QUIZ_CALLBACK_PREFIX).split(":")
        match (data.startswith(QUIZ_CALLBACK_PREFIX), parts):
            case (True, [gen, idx]) if gen.isdigit() and idx.isdigit():
                return (int(gen), int(idx))
            case _:
                return None

    def _quiz_keyboard(self, session: ChatSession) -> InlineKeyboardMarkup:
        buttons = [
            InlineKeyboardButton(option_label(i), callback_data=self._quiz_callback_data(session.generation, i))
            for i in range(len(session.quiz.quiz.options))
        ]
        return InlineKeyboardMarkup([buttons])

    # -- internal handler factory ----------------------------------------------

    async def _reject(self, update: Update) -> None:
        chat_id = self._chat_id(update)
        logger.warning(MSG_BLOCKED_CHAT, chat_id or "?")
        if chat_id:
            await self.send_message(chat_id, ui_text(self._language(chat_id), "locked"))

    def _make_unlock_handler(self, welcome: bool) -> Callable:
        """/start [code] and /unlock <code>: present the access code if one is set."""
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            chat_id = self._chat_id(update)
            language = self._language(chat_id)
            code = " ".join(context.args or [])
            match (self._is_allowed(update), code):
                case (True, _):
                    key = "welcome" if welcome else "unlocked"
                case (False, ""):
                    key = "locked"
                case (False, c) if self._gate.unlock(chat_id, c):
                    key = "unlocked"
                case _:
                    key = "wrong_code"
            await self.send_message(chat_id, ui_text(language, key))

        return _handler

    def _make_help_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    await self._reject(update)
                    return
                case True:
                    pass
            await self.send_message(self._chat_id(update), MSG_HELP)

        return _handler

    def _make_lang_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    await self._reject(update)
                    return
                case True:
                    pass
            chat_id = self._chat_id(update)
            match context.args or []:
                case [raw] if normalize_language(raw, default="") in SUPPORTED_LANGUAGES:
                    lang = normalize_language(raw)
                    self._sessions.set_language(chat_id, lang)
                    await self.send_message(chat_id, ui_text(lang, "lang_set"))
                case _:
                    await self.send_message(chat_id, ui_text(self._language(chat_id), "lang_usage"))

        return _handler

    def _make_text_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    await self._reject(update)
                    return
                case True:
                    pass
            chat_id = self._chat_id(update)
            await self.send_message(chat_id, ui_text(self._language(chat_id), "no_image"))

        return _handler

    def _make_photo_handler(self, on_photo: OnPhoto) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    await self._reject(update)
                    return
                case True:
                    pass

            chat_id = self._chat_id(update)
            attachment = self._image_attachment(update.message)
            match attachment:
                case None:
                    await self.send_message(chat_id, ui_text(self._language(chat_id), "no_image"))
                case image:
                    mime_type = self._image_mime_type(update.message)
                    await self._process(chat_id, image, mime_type, context.bot, on_photo)

        return _handler

    def _make_quiz_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            query = update.callback_query
            if query is None:
                return
            match self._is_allowed(update):
                case False:
                    await query.answer()
                    return
                case True:
                    pass

            chat_id = self._chat_id(update)
            language = self._language(chat_id)
            parsed = self._parse_quiz_callback(query.data or "")
            state = self._sessions.quiz_for(chat_id, parsed[0]) if parsed else None
            match (parsed, state):
                case (None, _):
                    await query.answer()
                case (_, None):
                    await query.answer(ui_text(language, "quiz_expired"))
                case ((_, index), quiz_state) if index >= len(quiz_state.quiz.options):
                    await query.answer()
                case ((_, index), quiz_state) if quiz_state.select(index):
                    verdict = "correct" if quiz_state.is_correct else "incorrect"
                    await query.answer(ui_text(language, verdict))
                    await self._show_quiz_feedback(query, chat_id, quiz_state, language)
                case _:
                    await query.answer()

        return _handler

    async def _show_quiz_feedback(self, query, chat_id: str, state, language: str) -> None:
        match render_quiz_chunks(state, language):
            case [text]:
                await query.edit_message_text(text)
            case _:
                # The options stay where they are; the verdict follows as new messages.
                await query.edit_message_reply_markup(reply_markup=None)
                for chunk in split_message(render_quiz_feedback(state, language)):
                    await self.send_message(chat_id, chunk)

    @staticmethod
    async def _download_and_solve(
        attachment, language: str, mime_type: str, on_photo: OnPhoto
    ) -> AnalysisResult:
        tg_file = await attachment.get_file()
        image_bytes = bytes(await tg_file.download_as_bytearray())
        return await on_photo(image_bytes, language, mime_type)

    async def _process(
        self, chat_id: str, attachment, mime_type: str, bot: Bot, on_photo: OnPhoto
    ) -> None:
        start = time.time()
        # One language for the whole request, even if /lang arrives mid-solve.
        language = self._language(chat_id)
        # Claim the chat before any await so the newest photo always wins.
        task = self._in_flight.submit(
            chat_id, self._download_and_solve(attachment, language, mime_type, on_photo)
        )
        try:
            async with TelegramTypingIndicator(bot, chat_id):
                result = await self._in_flight.wait(chat_id, task)
        except SupersededError:
            return
        except SolveError as err:
            logger.warning("Solve failed for chat %s (%s): %s", chat_id, err.kind, err)
            await self.send_message(chat_id, err.user_message(language))
            return
        except Exception:
            logger.exception("Image analysis failed")
            await self.send_message(chat_id, MSG_ERR_UNKNOWN.get(language, MSG_ERR_UNKNOWN[LANG_EN]))
            return

        session = self._sessions.show(chat_id, result)
        success = await self._send_solution(chat_id, session, language)
        elapsed = time.time() - start
        match success:
            case True:
                logger.info(MSG_SEND_OK, elapsed)
            case False:
                logger.error(MSG_SEND_FAIL, elapsed)

    async def _send_solution(self, chat_id: str, session: ChatSession, language: str) -> bool:
        texts = [render_answer(session.result, language)] + render_explanation(session.result, language)
        *quiz_head, quiz_tail = render_quiz_chunks(session.quiz, language)
        sent = [await self.send_message(chat_id, text) for text in texts + quiz_head]
        quiz_sent = await self.send_message(chat_id, quiz_tail, reply_markup=self._quiz_keyboard(session))
        return all(sent) and quiz_sent
