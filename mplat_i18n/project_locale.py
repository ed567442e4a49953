"""
Détection de la locale déclarée par le projet.

Ordre de recherche:
1. champ "locale" du package.json
2. `locale: '...'` dans vue.config.js, vite.config.ts, vite.config.js

Un échec de lecture est loggé; la locale configurée par défaut s'applique.
"""

import json
import logging
import re
from pathlib import Path

from .constants import ProjectLocaleConfig
from .errors import I18nErrorCode
from .locales import normalize_locale

logger = logging.getLogger(__name__)

LOCALE_DECLARATION_RE = re.compile(r"""locale:\s*['"`]([^'"`]+)['"`]""")


def _locale_from_manifest(manifest_path: Path) -> str | None:
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("%s: %s: %s", I18nErrorCode.PROJECT_LOCALE_FAILED.value, manifest_path, e)
        return None

    locale = data.get("locale") if isinstance(data, dict) else None
    return locale if isinstance(locale, str) and locale else None


def _locale_from_build_config(config_path: Path) -> str | None:
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("%s: %s: %s", I18nErrorCode.PROJECT_LOCALE_FAILED.value, config_path, e)
        return None

    match = LOCALE_DECLARATION_RE.search(content)
    return match.group(1) if match else None


def detect_project_locale(workspace_root: Path) -> str | None:
    """Retourne la locale normalisée déclarée par le projet, ou None."""
    root = Path(workspace_root)

    manifest = root / ProjectLocaleConfig.MANIFEST_FILE
    if manifest.is_file():
        locale = _locale_from_manifest(manifest)
        if locale:
            logger.info("Detected project locale: %s (%s)", locale, manifest.name)
            return normalize_locale(locale)

    for config_name in ProjectLocaleConfig.BUILD_CONFIG_FILES:
        config_path = root / config_name
        if not config_path.is_file():
            continue
        locale = _locale_from_build_config(config_path)
        if locale:
            logger.info("Detected project locale: %s (%s)", locale, config_name)
            return normalize_locale(locale)

    return None
