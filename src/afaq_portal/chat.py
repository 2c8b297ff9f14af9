"""Conversation with the site's AI assistant."""

import logging
import time

from .context import AppContext
from .errors import PortalError
from .models import ChatMessage

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 5


def _message_id(suffix: str) -> str:
    return f"{int(time.time() * 1000)}-{suffix}"


class ChatSession:
    """One assistant conversation, opened with a localized welcome."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx
        self.messages: list[ChatMessage] = [
            ChatMessage(id="welcome", role="assistant", content=ctx.t("chat.welcome"))
        ]
        self.pending = False

    async def send(self, text: str) -> ChatMessage | None:
        """Send a user message and append the assistant's answer.

        Blank input (or a send while another is in flight) is ignored and
        returns None. Failures are answered with a localized apology.
        """
        text = (text or "").strip()
        if not text or self.pending:
            return None

        history = [message.to_wire() for message in self.messages[-HISTORY_WINDOW:]]
        self.messages.append(ChatMessage(id=_message_id("user"), role="user", content=text))

        self.pending = True
        try:
            reply = await self.ctx.cache.mutate(
                lambda: self.ctx.client.send_chat(text, self.ctx.i18n.language, history)
            )
        except PortalError as e:
            logger.warning("Chat request failed: %s", e)
            answer = ChatMessage(
                id=_message_id("error"), role="assistant", content=self.ctx.t("chat.error")
            )
        else:
            answer = ChatMessage(
                id=_message_id("assistant"), role="assistant", content=reply.message
            )
        finally:
            self.pending = False

        self.messages.append(answer)
        return answer
