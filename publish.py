# publish.py: empaqueta el proyecto y lo sube por Kudu zip deploy
import logging
import os
import sys
import zipfile
from typing import Callable, Optional

import requests
from requests.auth import HTTPBasicAuth

from settings import DeploySettings

logger = logging.getLogger("chopibot.publish")

SKIP_DIRS = {"__pycache__", ".git", ".venv", "venv", ".pytest_cache", "node_modules"}

Callback = Callable[[Optional[object]], None]


def zip_folder(root_folder: str, zip_path: str) -> None:
    zip_abs = os.path.abspath(zip_path)
    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
        for dirpath, dirnames, filenames in os.walk(root_folder):
            dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
            for name in filenames:
                full = os.path.join(dirpath, name)
                if os.path.abspath(full) == zip_abs:
                    continue
                zf.write(full, os.path.relpath(full, root_folder))


def upload_zip(settings: DeploySettings, callback: Callback) -> None:
    """PUT del zip; 2xx borra el archivo local, cualquier otro resultado lo conserva."""
    try:
        with open(settings.zip_path, "rb") as fh:
            resp = requests.put(
                settings.url,
                data=fh,
                auth=HTTPBasicAuth(settings.username, settings.password),
                headers={"Content-Type": "application/zip"},
                timeout=settings.timeout,
            )
    except (OSError, requests.RequestException) as err:
        callback(err)
        return

    if 200 <= resp.status_code < 300:
        os.unlink(settings.zip_path)
        callback(None)
    else:
        logger.warning("deploy respondió %s: %s", resp.status_code, resp.text[:500])
        callback(resp)


def publish(settings: DeploySettings, callback: Callback) -> None:
    try:
        zip_folder(settings.root_folder, settings.zip_path)
    except (OSError, ValueError, zipfile.BadZipFile) as err:
        callback(err)
        return
    upload_zip(settings, callback)


def main() -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format="%(levelname)s:%(name)s:%(message)s")
    settings = DeploySettings()
    errors = []

    def done(err):
        if err is None:
            logger.info("%s publish", settings.site)
        else:
            logger.error("failed to publish %s: %s", settings.site, err)
            errors.append(err)

    publish(settings, done)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
