# conectores/bf_msft_comandos.py
import logging
from typing import Any, Dict, Optional

import msal

logger = logging.getLogger("chopibot.bf_msft")

SCOPE = ["https://api.botframework.com/.default"]


def authority_for(app_type: str, tenant: Optional[str]) -> str:
    if app_type == "SingleTenant" and tenant:
        return f"https://login.microsoftonline.com/{tenant}"
    return "https://login.microsoftonline.com/botframework.com"


def acquire_bf_token(app_id: str, app_secret: str, authority: str) -> Dict[str, Any]:
    """Obtiene un token para Bot Framework con MSAL (client credentials), sin exponerlo."""
    cca = msal.ConfidentialClientApplication(client_id=app_id, client_credential=app_secret, authority=authority)
    res = cca.acquire_token_for_client(scopes=SCOPE)
    out: Dict[str, Any] = {k: v for k, v in res.items() if k not in ("access_token", "refresh_token", "id_token")}
    out["has_access_token"] = "access_token" in res
    out["authority"] = authority
    return out


def diagnose_activity(activity) -> Dict[str, Any]:
    recipient = getattr(activity, "recipient", None)
    return {
        "type": getattr(activity, "type", None),
        "channelId": getattr(activity, "channel_id", None),
        "serviceUrl": getattr(activity, "service_url", None),
        "recipientId": getattr(recipient, "id", None),
    }
