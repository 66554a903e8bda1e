# app.py: ChopiBot con CloudAdapter (aiohttp) + Diagnóstico y App Insights
import logging
import os
from typing import Optional

from aiohttp import web

from botbuilder.core import ConversationState, MemoryStorage, TelemetryLoggerMiddleware, TurnContext
from botbuilder.schema import Activity
from botbuilder.integration.aiohttp.cloud_adapter import CloudAdapter
from botbuilder.integration.aiohttp.configuration_bot_framework_authentication import (
    ConfigurationBotFrameworkAuthentication,
)

# Telemetría (Application Insights)
from botbuilder.applicationinsights import ApplicationInsightsTelemetryClient, bot_telemetry_processor

import presenters
from bot import ChopiBot
from bot_backend.services import build_luis_recognizer, build_qna_maker
from conectores.bf_msft_comandos import acquire_bf_token, authority_for, diagnose_activity
from settings import BotSettings, public_env_snapshot


# ----------------------
# Logging básico
# ----------------------
def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or os.getenv("LOG_LEVEL", "INFO"),
        format="%(levelname)s:%(name)s:%(message)s",
    )


configure_logging()
log = logging.getLogger("chopibot")

ADAPTER_KEY = web.AppKey("adapter", CloudAdapter)
BOT_KEY = web.AppKey("bot", ChopiBot)
SETTINGS_KEY = web.AppKey("settings", BotSettings)


def create_adapter(settings: BotSettings) -> CloudAdapter:
    auth = ConfigurationBotFrameworkAuthentication(configuration=settings.adapter_config())
    adapter = CloudAdapter(auth)

    # Telemetría opcional a App Insights
    if settings.ai_connection_string:
        try:
            ai_client = ApplicationInsightsTelemetryClient(
                connection_string=settings.ai_connection_string, telemetry_processor=bot_telemetry_processor
            )
            # Loguea actividades entrantes/salientes sin PII
            adapter.use(TelemetryLoggerMiddleware(ai_client, log_personal_information=False))
            log.info("[AI] Application Insights habilitado")
        except Exception as e:
            log.warning("[AI] No se pudo inicializar App Insights: %s", e)

    async def on_error(context: TurnContext, error: Exception):
        log.error("[BOT ERROR] %s", error, exc_info=True)
        try:
            await context.send_activity(presenters.TURN_ERROR)
        except Exception as e:
            log.error("[BOT ERROR][send_activity] %s", e, exc_info=True)

    adapter.on_turn_error = on_error
    return adapter


def create_bot(settings: BotSettings) -> ChopiBot:
    conversation_state = ConversationState(MemoryStorage())
    return ChopiBot(
        conversation_state,
        build_qna_maker(settings),
        build_luis_recognizer(settings),
        intent_debug_replies=settings.intent_debug_replies,
    )


# ==========
# Handlers
# ==========
async def messages(req: web.Request) -> web.Response:
    if "application/json" not in req.headers.get("Content-Type", ""):
        return web.Response(status=415, text="Content-Type must be application/json")

    body = await req.json()
    activity: Activity = Activity().deserialize(body)
    auth_header = req.headers.get("Authorization", "")
    log.info("[DIAG] %s", diagnose_activity(activity))

    adapter = req.app[ADAPTER_KEY]
    bot = req.app[BOT_KEY]
    # Orden CloudAdapter: (auth_header, activity, callback)
    response = await adapter.process_activity(auth_header, activity, bot.on_turn)
    if response:
        return web.json_response(data=response.body, status=response.status)
    return web.Response(status=201)


async def health(_: web.Request) -> web.Response:
    return web.json_response({"ok": True})


async def diag_env(_: web.Request) -> web.Response:
    return web.json_response(public_env_snapshot())


# --- Diagnóstico de token MSAL (para validar secreto) ---
async def diag_msal(req: web.Request) -> web.Response:
    settings = req.app[SETTINGS_KEY]
    if not settings.app_id or not settings.app_password:
        return web.json_response({"ok": False, "error": "Faltan AppId/Secret"}, status=500)
    authority = authority_for(settings.app_type, settings.app_tenant)
    log.info("Initializing with Entra authority: %s", authority)
    try:
        token = acquire_bf_token(settings.app_id, settings.app_password, authority)
    except Exception as e:
        return web.json_response({"ok": False, "exception": str(e)}, status=500)
    ok = token["has_access_token"]
    return web.json_response({"ok": ok, **token}, status=200 if ok else 500)


# ==========
# App AIOHTTP
# ==========
def create_app(
    settings: Optional[BotSettings] = None,
    bot: Optional[ChopiBot] = None,
    adapter: Optional[CloudAdapter] = None,
) -> web.Application:
    settings = settings or BotSettings()
    app = web.Application()
    app[SETTINGS_KEY] = settings
    app[ADAPTER_KEY] = adapter or create_adapter(settings)
    app[BOT_KEY] = bot or create_bot(settings)
    app.router.add_post("/api/messages", messages)
    app.router.add_get("/health", health)
    app.router.add_get("/diag/env", diag_env)
    app.router.add_get("/diag/msal", diag_msal)
    return app


if __name__ == "__main__":
    settings = BotSettings()
    web.run_app(create_app(settings), host="0.0.0.0", port=settings.port)
