"""
Configuration du moteur i18n.

Deux niveaux:
- Valeurs par défaut du processus, surchargées par variables d'environnement
  (fichier .env chargé au démarrage).
- Réglages du workspace (I18nSettings), lus dans .vscode/settings.json sous le
  préfixe "mplat-i18n." comme le ferait l'éditeur.
"""

import logging
import os
from pathlib import Path
from typing import Any

import json5
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .constants import DiscoveryConfig, RefreshConfig
from .errors import I18nError, I18nErrorCode

logger = logging.getLogger(__name__)

# Charger les variables d'environnement
load_dotenv()

# =============================================================================
# VALEURS PAR DÉFAUT DU PROCESSUS
# =============================================================================
DEFAULT_LOCALE = os.getenv("MPLAT_I18N_DEFAULT_LOCALE", "zhCN")
FALLBACK_LOCALE = os.getenv("MPLAT_I18N_FALLBACK_LOCALE", "en")
LOG_LEVEL = os.getenv("MPLAT_I18N_LOG_LEVEL", "INFO")


def parse_debounce_ms(value: str | None) -> float:
    """Délai d'anti-rebond en secondes depuis une valeur en ms (défaut si absente ou invalide)."""
    if not value:
        return RefreshConfig.DEBOUNCE_SECONDS
    try:
        return int(value) / 1000
    except ValueError:
        logger.warning(
            "Invalid MPLAT_I18N_DEBOUNCE_MS=%r, using %.0f ms",
            value,
            RefreshConfig.DEBOUNCE_SECONDS * 1000,
        )
        return RefreshConfig.DEBOUNCE_SECONDS


DEBOUNCE_SECONDS = parse_debounce_ms(os.getenv("MPLAT_I18N_DEBOUNCE_MS"))

# =============================================================================
# RÉGLAGES DU WORKSPACE
# =============================================================================
SETTINGS_PREFIX = "mplat-i18n."
SETTINGS_FILE = Path(".vscode") / "settings.json"


class I18nSettings(BaseModel):
    """Réglages reconnus par le moteur (noms camelCase de l'éditeur en alias)."""

    auto_discovery: bool = Field(default=True, alias="autoDiscovery")
    scan_patterns: list[str] = Field(
        default_factory=lambda: list(DiscoveryConfig.DEFAULT_SCAN_PATTERNS),
        alias="scanPatterns",
    )
    manual_paths: list[str] = Field(default_factory=list, alias="manualPaths")
    default_locale: str = Field(default_factory=lambda: DEFAULT_LOCALE, alias="defaultLocale")
    fallback_locale: str = Field(default_factory=lambda: FALLBACK_LOCALE, alias="fallbackLocale")
    enable_hover: bool = Field(default=True, alias="enableHover")
    enable_definition: bool = Field(default=True, alias="enableDefinition")
    enable_completion: bool = Field(default=True, alias="enableCompletion")
    enable_inline_translation: bool = Field(default=True, alias="enableInlineTranslation")

    model_config = {"populate_by_name": True, "frozen": True}


def _read_workspace_settings(workspace_root: Path) -> dict[str, Any]:
    """Extrait les clés "mplat-i18n.*" du settings.json du workspace (JSONC)."""
    settings_path = workspace_root / SETTINGS_FILE
    if not settings_path.is_file():
        return {}

    try:
        raw = json5.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Cannot read %s: %s", settings_path, e)
        return {}

    if not isinstance(raw, dict):
        logger.warning("Ignoring %s: top-level value is not an object", settings_path)
        return {}

    return {
        key[len(SETTINGS_PREFIX) :]: value
        for key, value in raw.items()
        if isinstance(key, str) and key.startswith(SETTINGS_PREFIX)
    }


def load_settings(workspace_root: Path, overrides: dict[str, Any] | None = None) -> I18nSettings:
    """
    Construit les réglages effectifs d'un workspace.

    Args:
        workspace_root: Racine du workspace (premier dossier uniquement)
        overrides: Valeurs prioritaires (noms camelCase ou snake_case)

    Returns:
        I18nSettings avec les défauts appliqués

    Raises:
        I18nError: SETTINGS_INVALID si les overrides explicites sont invalides
    """
    values = _read_workspace_settings(Path(workspace_root))
    try:
        base = I18nSettings.model_validate(values)
    except ValidationError as e:
        logger.warning("Invalid workspace settings, using defaults: %s", e)
        base = I18nSettings()

    if not overrides:
        return base

    aliases = {field.alias: name for name, field in I18nSettings.model_fields.items()}
    merged = base.model_dump()
    merged.update({aliases.get(key, key): value for key, value in overrides.items()})
    try:
        return I18nSettings.model_validate(merged)
    except ValidationError as e:
        raise I18nError(I18nErrorCode.SETTINGS_INVALID, details=str(e)) from e
