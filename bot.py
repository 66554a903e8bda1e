# bot.py: ChopiBot: bienvenida, QnA Maker primero y LUIS como respaldo
import logging
from typing import List

from botbuilder.core import ActivityHandler, ConversationState, TurnContext
from botbuilder.schema import ActivityTypes, ChannelAccount

import presenters
from bot_backend.resolver import Reply, ReplyKind, resolve_answer
from bot_backend.state import ConversationData

log = logging.getLogger("chopibot.bot")

CONVERSATION_DATA_PROPERTY = "ConversationData"


class ChopiBot(ActivityHandler):
    def __init__(
        self,
        conversation_state: ConversationState,
        qna_maker,
        recognizer,
        intent_debug_replies: bool = True,
    ):
        if conversation_state is None:
            raise TypeError("[ChopiBot]: Missing parameter. conversation_state is required")
        self.conversation_state = conversation_state
        self.conversation_data = conversation_state.create_property(CONVERSATION_DATA_PROPERTY)
        self.qna_maker = qna_maker
        self.recognizer = recognizer
        self.intent_debug_replies = intent_debug_replies

    async def on_turn(self, turn_context: TurnContext):
        activity_type = turn_context.activity.type
        if activity_type in (ActivityTypes.message, ActivityTypes.conversation_update):
            await super().on_turn(turn_context)
        else:
            await self._send(turn_context, Reply(ReplyKind.GENERIC, presenters.event_detected(activity_type)))

        # Guarda cambios de estado en cada turno, sea cual sea la rama
        await self.conversation_state.save_changes(turn_context)

    async def on_message_activity(self, turn_context: TurnContext):
        data: ConversationData = await self.conversation_data.get(turn_context, ConversationData)
        data.turn_count += 1
        log.debug("turno %s en conversación", data.turn_count)

        if not data.did_welcome_user:
            # Primer mensaje de la conversación
            user = turn_context.activity.from_property
            user_name = getattr(user, "name", None)
            await self._send(turn_context, Reply(ReplyKind.WELCOME, presenters.promo_greeting(user_name)))
            data.did_welcome_user = True
        await self.conversation_data.set(turn_context, data)

        reply = await resolve_answer(
            turn_context, self.qna_maker, self.recognizer, intent_debug_replies=self.intent_debug_replies
        )
        await self._send(turn_context, reply)

    async def on_members_added_activity(self, members_added: List[ChannelAccount], turn_context: TurnContext):
        recipient_id = getattr(turn_context.activity.recipient, "id", None)
        for member in members_added:
            if member.id != recipient_id:
                await self._send(turn_context, Reply(ReplyKind.WELCOME, presenters.member_welcome(member.name)))
                await turn_context.send_activity(presenters.suggested_actions())

    async def _send(self, turn_context: TurnContext, reply: Reply):
        log.info("[REPLY] kind=%s", reply.kind.value)
        await turn_context.send_activity(reply.text)
