# bot_backend/resolver.py
# -----------------------------------------------------------------------------
# Resolución de la respuesta a un mensaje:
#   1) QnA Maker con el texto del usuario; si hay respuesta, se usa y se corta.
#   2) LUIS con el turno completo; "None" => no entendí, otro => diagnóstico.
#   3) Si alguno de los servicios falla => respuesta degradada.
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from botbuilder.core import RecognizerResult, TurnContext

import presenters

logger = logging.getLogger("chopibot.resolver")

NONE_INTENT = "None"


class ReplyKind(str, Enum):
    WELCOME = "welcome"
    QNA_ANSWER = "qna_answer"
    INTENT_ANSWER = "intent_answer"
    FALLBACK = "fallback"
    GENERIC = "generic"
    UNAVAILABLE = "unavailable"


@dataclass
class Reply:
    kind: ReplyKind
    text: str
    intent: Optional[str] = None
    score: Optional[float] = None


def top_scoring_intent(result: RecognizerResult) -> Tuple[str, Any]:
    """Intent y score principales; prefiere el topScoringIntent crudo de LUIS."""
    luis_result = (getattr(result, "properties", None) or {}).get("luisResult")
    top = getattr(luis_result, "top_scoring_intent", None)
    if top is not None and top.intent:
        return top.intent, top.score

    intents = getattr(result, "intents", None) or {}
    if not intents:
        return NONE_INTENT, 0.0
    name = max(intents, key=lambda k: intents[k].score or 0.0)
    return name, intents[name].score


async def resolve_answer(
    turn_context: TurnContext, qna_maker, recognizer, intent_debug_replies: bool = True
) -> Reply:
    try:
        answers = await qna_maker.get_answers(turn_context)
    except Exception as e:
        logger.error("[QNA] error consultando QnA Maker: %s", e, exc_info=True)
        return Reply(ReplyKind.UNAVAILABLE, presenters.SERVICE_UNAVAILABLE)

    if answers and answers[0].answer:
        top = answers[0]
        logger.info("[QNA] respuesta encontrada score=%s", top.score)
        return Reply(ReplyKind.QNA_ANSWER, top.answer, score=top.score)

    try:
        result = await recognizer.recognize(turn_context)
    except Exception as e:
        logger.error("[LUIS] error reconociendo intent: %s", e, exc_info=True)
        return Reply(ReplyKind.UNAVAILABLE, presenters.SERVICE_UNAVAILABLE)

    intent, score = top_scoring_intent(result)
    logger.info("[LUIS] top intent=%s score=%s", intent, score)

    if intent == NONE_INTENT or not intent_debug_replies:
        return Reply(ReplyKind.FALLBACK, presenters.NOT_UNDERSTOOD, intent=intent, score=score)
    return Reply(
        ReplyKind.INTENT_ANSWER, presenters.intent_diagnostic(intent, score), intent=intent, score=score
    )
