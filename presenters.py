from typing import List

from botbuilder.core import MessageFactory
from botbuilder.schema import ActionTypes, Activity, CardAction

SUGGESTED_PROMPT = "Estos son algunos ejemplos de lo que puedes decir"
SUGGESTED_ACTIONS: List[str] = ["¿Que es un bot?", "¿Cuál es su telefono?"]

NOT_UNDERSTOOD = "Esto es nuevo para mi, no he entendido lo que quieres decir 🤔"
SERVICE_UNAVAILABLE = (
    "⚠️ El servicio de respuestas no está disponible en este momento. "
    "Intenta nuevamente más tarde."
)
TURN_ERROR = "Ocurrió un error procesando tu mensaje. Estamos corrigiéndolo."


def promo_greeting(user_name: str | None) -> str:
    return (
        f"{user_name}, te recuerdo que siempre "
        "puedes estar pendiente de nuestras últimas ofertas y "
        "promociones desde nuestra página en Facebook."
    )


def member_welcome(member_name: str | None) -> str:
    return (
        f"Hola {member_name} 😀! "
        " Mi nombre es ChopiBot, estoy para contestar preguntas "
        "que tengas acerca de nuestra tienda o nuestros productos."
    )


def intent_diagnostic(intent: str, score) -> str:
    return f"LUIS Top Scoring Intent: {intent}, Score: {score}"


def event_detected(activity_type) -> str:
    # ActivityTypes es un Enum; en 3.11+ su format() incluye el nombre de la clase
    activity_type = getattr(activity_type, "value", activity_type)
    return f"[{activity_type} event detected.]"


def suggested_actions() -> Activity:
    actions = [CardAction(type=ActionTypes.im_back, title=a, value=a) for a in SUGGESTED_ACTIONS]
    return MessageFactory.suggested_actions(actions, SUGGESTED_PROMPT)
