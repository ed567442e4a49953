"""
Moteur de résolution des clés de traduction pour projets TS/JS.

Découvre les fichiers de locale (`export default { ... }`), fusionne les
arbres par locale, indexe la provenance des clés et sert la résolution,
la localisation et l'autocomplétion des clés.

Ce package réexporte l'API publique: from mplat_i18n import I18nService
"""

# Errors
from .errors import ErrorSeverity, I18nError, I18nErrorCode, get_error_severity

# Config
from .config import I18nSettings, load_settings

# Models
from .models import CallInfo, CallSite, CompletionItem, KeyLocation, RefreshReport, TranslationResult

# Parsing
from .call_site import find_call_sites, parse_call_info, partial_key_at
from .parser import extract_export_object, parse_locale_file, parse_locale_source

# Service
from .scheduler import RefreshScheduler
from .service import I18nService, LocaleSnapshot, build_snapshot

__all__ = [
    # Models
    "CallInfo",
    "CallSite",
    "CompletionItem",
    # Errors
    "ErrorSeverity",
    "I18nError",
    "I18nErrorCode",
    # Service
    "I18nService",
    # Config
    "I18nSettings",
    "KeyLocation",
    "LocaleSnapshot",
    "RefreshReport",
    "RefreshScheduler",
    "TranslationResult",
    "build_snapshot",
    # Parsing
    "extract_export_object",
    "find_call_sites",
    "get_error_severity",
    "load_settings",
    "parse_call_info",
    "parse_locale_file",
    "parse_locale_source",
    "partial_key_at",
]
