"""
Gestion des erreurs du moteur i18n.

Contient les codes d'erreur, l'exception I18nError et leur classification.
"""

from enum import Enum
from pathlib import Path


class I18nErrorCode(str, Enum):
    """Codes d'erreur du moteur (clés pointées, affichables telles quelles)."""

    DISCOVERY_NO_MATCH = "discovery.no_match"
    DISCOVERY_MISSING_PATH = "discovery.missing_path"
    PARSE_NO_EXPORT = "parse.no_export"
    PARSE_FAILED = "parse.failed"
    PARSE_INVALID_TREE = "parse.invalid_tree"
    PROJECT_LOCALE_FAILED = "project_locale.failed"
    SETTINGS_INVALID = "settings.invalid"
    REFRESH_FAILED = "refresh.failed"


class I18nError(Exception):
    """Exception i18n avec code d'erreur typé."""

    def __init__(self, code: I18nErrorCode, path: str | Path = "", details: str = ""):
        self.code = code
        self.path = str(path)
        self.details = details
        message = code.value
        if self.path:
            message = f"{message} ({self.path})"
        super().__init__(f"{message}: {details}" if details else message)


# =============================================================================
# CLASSIFICATION DES ERREURS
# =============================================================================


class ErrorSeverity:
    """Classification des erreurs pour la politique de propagation."""

    RECOVERABLE = "recoverable"  # Un fichier / pattern ignoré, le refresh continue
    FATAL = "fatal"  # Le refresh est abandonné, l'ancien cache est conservé
    UNKNOWN = "unknown"


ERROR_SEVERITY_MAP: dict[I18nErrorCode, str] = {
    I18nErrorCode.DISCOVERY_NO_MATCH: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.DISCOVERY_MISSING_PATH: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.PARSE_NO_EXPORT: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.PARSE_FAILED: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.PARSE_INVALID_TREE: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.PROJECT_LOCALE_FAILED: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.SETTINGS_INVALID: ErrorSeverity.RECOVERABLE,
    I18nErrorCode.REFRESH_FAILED: ErrorSeverity.FATAL,
}


def get_error_severity(code: I18nErrorCode) -> str:
    """Retourne la sévérité d'une erreur i18n."""
    return ERROR_SEVERITY_MAP.get(code, ErrorSeverity.UNKNOWN)
