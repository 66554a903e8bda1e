# bot_backend/services.py
# Clientes de QnA Maker y LUIS construidos desde BotSettings.
import logging

from botbuilder.ai.luis import LuisApplication, LuisPredictionOptions, LuisRecognizer
from botbuilder.ai.qna import QnAMaker, QnAMakerEndpoint, QnAMakerOptions

from settings import BotSettings

logger = logging.getLogger("chopibot.services")


def _with_scheme(host: str) -> str:
    if host.startswith("http://") or host.startswith("https://"):
        return host
    return "https://" + host


def build_qna_maker(settings: BotSettings) -> QnAMaker:
    settings.require("qna_kb_id", "qna_endpoint_key", "qna_host")
    endpoint = QnAMakerEndpoint(
        knowledge_base_id=settings.qna_kb_id,
        endpoint_key=settings.qna_endpoint_key,
        host=_with_scheme(settings.qna_host),
    )
    logger.info("QnA Maker kb=%s host=%s", settings.qna_kb_id, settings.qna_host)
    return QnAMaker(endpoint, QnAMakerOptions(timeout=settings.qna_timeout_ms))


def build_luis_recognizer(settings: BotSettings) -> LuisRecognizer:
    settings.require("luis_app_id", "luis_api_key", "luis_host")
    application = LuisApplication(
        settings.luis_app_id, settings.luis_api_key, _with_scheme(settings.luis_host)
    )
    options = LuisPredictionOptions(include_all_intents=True, timeout=settings.luis_timeout_ms)
    logger.info("LUIS app=%s host=%s", settings.luis_app_id, settings.luis_host)
    # include_api_results=True para leer topScoringIntent del resultado crudo
    return LuisRecognizer(application, prediction_options=options, include_api_results=True)
