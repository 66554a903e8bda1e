import os
from types import SimpleNamespace


class ConfigurationError(RuntimeError):
    """Falta una variable de entorno obligatoria."""


# Acepta MAYÚSCULAS y camelCase (compat App Service)
_ALIASES = {
    "MICROSOFT_APP_ID": "MicrosoftAppId",
    "MICROSOFT_APP_PASSWORD": "MicrosoftAppPassword",
    "MICROSOFT_APP_TENANT_ID": "MicrosoftAppTenantId",
    "MICROSOFT_APP_TYPE": "MicrosoftAppType",
}


def get_env(name: str, fallback: str = "") -> str:
    return os.getenv(name, os.getenv(_ALIASES.get(name, ""), fallback))


def get_flag(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


class BotSettings:
    """Configuración del bot leída del entorno al momento de construirla."""

    def __init__(self):
        self.app_id = get_env("MICROSOFT_APP_ID")
        self.app_password = get_env("MICROSOFT_APP_PASSWORD")
        self.app_tenant = get_env("MICROSOFT_APP_TENANT_ID")
        self.app_type = get_env("MICROSOFT_APP_TYPE", "MultiTenant")

        self.qna_kb_id = os.getenv("QNA_KNOWLEDGEBASE_ID", "")
        self.qna_endpoint_key = os.getenv("QNA_ENDPOINT_KEY", "")
        self.qna_host = os.getenv("QNA_ENDPOINT_HOST", "")
        self.qna_timeout_ms = int(os.getenv("QNA_TIMEOUT_MS", "10000"))

        self.luis_app_id = os.getenv("LUIS_APP_ID", "")
        self.luis_api_key = os.getenv("LUIS_API_KEY", "")
        self.luis_host = os.getenv("LUIS_API_HOST_NAME", "")
        self.luis_timeout_ms = int(os.getenv("LUIS_TIMEOUT_MS", "10000"))

        self.intent_debug_replies = get_flag("INTENT_DEBUG_REPLIES", True)
        self.ai_connection_string = os.getenv("APPLICATIONINSIGHTS_CONNECTION_STRING", "")
        self.port = int(os.getenv("PORT", "3978"))

    def adapter_config(self) -> SimpleNamespace:
        # ConfigurationBotFrameworkAuthentication lee atributos, no claves
        return SimpleNamespace(
            APP_ID=self.app_id,
            APP_PASSWORD=self.app_password,
            APP_TENANTID=self.app_tenant,
            APP_TYPE=self.app_type,  # SingleTenant | MultiTenant | UserAssignedMSI
        )

    def require(self, *names: str) -> None:
        missing = [n for n in names if not getattr(self, n)]
        if missing:
            raise ConfigurationError("Faltan variables de configuración: " + ", ".join(missing))


class DeploySettings:
    """Destino de publicación (Kudu zip deploy)."""

    def __init__(self, root_folder: str | None = None):
        self.site = os.getenv("DEPLOY_SITE", "chopibot")
        self.username = os.getenv("DEPLOY_USERNAME", f"${self.site}")
        self.password = os.getenv("DEPLOY_PASSWORD", "")
        self.url = os.getenv(
            "DEPLOY_URL", f"https://{self.site}.scm.azurewebsites.net/api/zip/site/wwwroot"
        )
        self.timeout = int(os.getenv("DEPLOY_TIMEOUT", "300"))
        self.root_folder = os.path.abspath(root_folder or os.getcwd())
        self.zip_path = os.getenv(
            "DEPLOY_ZIP_PATH", os.path.join(os.path.dirname(self.root_folder), f"{self.site}.zip")
        )


def public_env_snapshot() -> dict:
    s = BotSettings()
    keys = [
        "MICROSOFT_APP_ID", "MICROSOFT_APP_PASSWORD", "MICROSOFT_APP_TENANT_ID", "MICROSOFT_APP_TYPE",
        "QNA_KNOWLEDGEBASE_ID", "QNA_ENDPOINT_KEY", "QNA_ENDPOINT_HOST",
        "LUIS_APP_ID", "LUIS_API_KEY", "LUIS_API_HOST_NAME",
        "APPLICATIONINSIGHTS_CONNECTION_STRING", "PORT",
    ]
    out = {k: "SET(***masked***)" if get_env(k) else "MISSING" for k in keys}
    out["EFFECTIVE_APP_ID"] = s.app_id
    out["EFFECTIVE_TENANT"] = s.app_tenant
    out["EFFECTIVE_APP_TYPE"] = s.app_type
    out["INTENT_DEBUG_REPLIES"] = s.intent_debug_replies
    return out
