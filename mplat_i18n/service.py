"""
Service de traduction: cache des locales et résolution des clés.

Contient:
- LocaleSnapshot: état immuable produit par un refresh (arbres, provenance,
  liste globale des clés, locale du projet, réglages utilisés)
- build_snapshot: découverte -> parsing -> fusion -> indexation
- I18nService: détient le snapshot courant et répond aux consommateurs
  (hover, définition, complétion, CLI)

⚠️ REFRESH:
Un refresh construit un NOUVEAU snapshot puis le substitue à l'ancien sous
verrou. Une lecture concurrente voit l'ancien ou le nouveau, jamais un état
partiel. Le dernier refresh terminé l'emporte.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .call_site import parse_call_info
from .config import I18nSettings, load_settings
from .constants import CompletionConfig
from .discovery import discover_locale_files
from .errors import I18nError, I18nErrorCode
from .fuzzy import rank_keys
from .indexer import KeyIndex
from .interpolation import detect_interpolation_type, extract_interpolation_keys
from .locales import normalize_locale
from .merger import deep_merge
from .models import CallInfo, KeyLocation, LocaleTree, RefreshReport, TranslationResult
from .parser import parse_locale_file
from .project_locale import detect_project_locale

logger = logging.getLogger(__name__)

_MISSING_LOCATION = KeyLocation(file_path="", line=0)


@dataclass(frozen=True)
class LocaleSnapshot:
    """Cache complet issu d'un refresh. Jamais modifié après construction."""

    settings: I18nSettings
    trees: dict[str, LocaleTree] = field(default_factory=dict)
    locations: dict[str, dict[str, KeyLocation]] = field(default_factory=dict)
    all_keys: tuple[str, ...] = ()
    project_locale: str | None = None
    files: tuple[Path, ...] = ()
    skipped_files: tuple[str, ...] = ()
    built_at: float = 0.0

    @property
    def primary_locale(self) -> str:
        """Locale du projet si détectée, sinon locale par défaut configurée."""
        return normalize_locale(self.project_locale or self.settings.default_locale)

    @property
    def fallback_locale(self) -> str:
        return normalize_locale(self.settings.fallback_locale)


def build_snapshot(workspace_root: Path, settings: I18nSettings) -> LocaleSnapshot:
    """
    Construit un snapshot complet à partir des fichiers du workspace.

    Les fichiers illisibles sont loggés et ignorés. Les erreurs inattendues
    (permissions lors de la découverte...) remontent à l'appelant.
    """
    project_locale = detect_project_locale(workspace_root)
    files = discover_locale_files(settings, workspace_root)

    trees: dict[str, LocaleTree] = {}
    index = KeyIndex()
    skipped: list[str] = []

    for file_path in files:
        try:
            parsed = parse_locale_file(file_path)
        except I18nError as e:
            logger.warning("Failed to parse locale file %s: %s", file_path, e)
            skipped.append(str(file_path))
            continue
        if parsed is None:
            continue

        deep_merge(trees.setdefault(parsed.locale, {}), parsed.tree)
        index.record(parsed.locale, parsed.tree, parsed.path, parsed.lines)

    snapshot = LocaleSnapshot(
        settings=settings,
        trees=trees,
        locations=index.locations,
        all_keys=tuple(index.all_keys),
        project_locale=project_locale,
        files=tuple(files),
        skipped_files=tuple(skipped),
        built_at=time.time(),
    )
    logger.info(
        "Loaded locales: %s (%d keys, project locale: %s)",
        sorted(trees),
        len(snapshot.all_keys),
        project_locale,
    )
    return snapshot


def _get_nested(data: LocaleTree, key: str) -> str | None:
    """Récupère une valeur imbriquée par clé pointée (ex: 'user.profile.title')."""
    value: Any = data
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return None
    return value if isinstance(value, str) else None


class I18nService:
    """
    Moteur de résolution des clés d'un workspace.

    Usage:
        service = I18nService(Path("."))
        result = service.resolve("user.greeting", {"name": "Bob"})
        if result is None:
            ...  # "translation not found"
    """

    def __init__(
        self,
        workspace_root: str | Path,
        settings: I18nSettings | None = None,
        settings_loader: Callable[[], I18nSettings] | None = None,
        load: bool = True,
    ) -> None:
        self.workspace_root = Path(workspace_root).resolve()
        self._fixed_settings = settings
        self._settings_loader = settings_loader

        self._lock = threading.RLock()
        self._refresh_lock = threading.Lock()
        self._snapshot = LocaleSnapshot(settings=settings or I18nSettings())

        if load:
            self.refresh()

    # =========================================================================
    # CACHE
    # =========================================================================

    @property
    def snapshot(self) -> LocaleSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def settings(self) -> I18nSettings:
        return self.snapshot.settings

    def _load_settings(self) -> I18nSettings:
        """Réglages lus au moment du refresh (loader > réglages fixes > workspace)."""
        if self._settings_loader is not None:
            return self._settings_loader()
        if self._fixed_settings is not None:
            return self._fixed_settings
        return load_settings(self.workspace_root)

    def refresh(self) -> RefreshReport:
        """
        Reconstruit le cache et le substitue à l'ancien.

        Ne lève pas: un échec inattendu est loggé une fois, l'ancien cache est
        conservé et le rapport porte ok=False.
        """
        started = time.monotonic()
        with self._refresh_lock:
            try:
                settings = self._load_settings()
                snapshot = build_snapshot(self.workspace_root, settings)
            except Exception as e:
                logger.exception("%s: %s", I18nErrorCode.REFRESH_FAILED.value, self.workspace_root)
                return RefreshReport(
                    ok=False,
                    error=str(e) or type(e).__name__,
                    duration_ms=int((time.monotonic() - started) * 1000),
                )

            with self._lock:
                self._snapshot = snapshot

        return RefreshReport(
            ok=True,
            files=len(snapshot.files),
            locales=sorted(snapshot.trees),
            keys=len(snapshot.all_keys),
            project_locale=snapshot.project_locale,
            skipped_files=list(snapshot.skipped_files),
            duration_ms=int((time.monotonic() - started) * 1000),
        )

    def dispose(self) -> None:
        """Vide le cache (les réglages courants sont conservés)."""
        with self._lock:
            self._snapshot = LocaleSnapshot(settings=self._snapshot.settings)

    # =========================================================================
    # RÉSOLUTION
    # =========================================================================

    @staticmethod
    def _resolve_in_locale(
        snapshot: LocaleSnapshot, key: str, locale: str, interpolation: Any
    ) -> TranslationResult | None:
        tree = snapshot.trees.get(locale)
        if tree is None:
            return None

        value = _get_nested(tree, key)
        if value is None:
            return None

        location = snapshot.locations.get(locale, {}).get(key, _MISSING_LOCATION)
        return TranslationResult(
            value=value,
            file_path=location.file_path,
            line=location.line,
            locale=locale,
            interpolation_keys=extract_interpolation_keys(value),
            interpolation_type=detect_interpolation_type(interpolation),
        )

    def resolve(self, key: str, interpolation: Any = None) -> TranslationResult | None:
        """
        Résout une clé pointée: locale principale, puis locale de secours.

        Returns:
            TranslationResult, ou None si la clé est absente des deux locales
        """
        snapshot = self.snapshot
        primary = snapshot.primary_locale
        result = self._resolve_in_locale(snapshot, key, primary, interpolation)
        if result is not None:
            return result

        fallback = snapshot.fallback_locale
        if fallback != primary:
            return self._resolve_in_locale(snapshot, key, fallback, interpolation)
        return None

    def get_key_location(self, key: str) -> KeyLocation | None:
        """Fichier et ligne d'une clé: locale principale d'abord, puis toutes."""
        snapshot = self.snapshot
        primary_map = snapshot.locations.get(snapshot.primary_locale, {})
        if key in primary_map:
            return primary_map[key]

        for key_map in snapshot.locations.values():
            if key in key_map:
                return key_map[key]
        return None

    def get_all_keys(self) -> list[str]:
        """Toutes les clés connues, dans l'ordre de première apparition."""
        return list(self.snapshot.all_keys)

    def get_locales(self) -> list[str]:
        return list(self.snapshot.trees)

    def parse_call_info(self, text: str) -> CallInfo | None:
        return parse_call_info(text)

    def complete(self, partial: str, limit: int = CompletionConfig.MAX_RESULTS) -> list[str]:
        """Clés classées pour une saisie partielle (max `limit`)."""
        return rank_keys(partial, self.snapshot.all_keys, limit)
