"""
Surveillance du workspace: déclenche un refresh quand les sources changent.

Utilise watchfiles; les événements passent par le RefreshScheduler qui
regroupe les rafales (sauvegarde de plusieurs fichiers, checkout git...).
"""

import logging
import threading
from pathlib import Path

from watchfiles import Change, watch

from .config import SETTINGS_FILE
from .constants import DiscoveryConfig, ProjectLocaleConfig
from .scheduler import RefreshScheduler
from .service import I18nService

logger = logging.getLogger(__name__)

_ROOT_FILES = (ProjectLocaleConfig.MANIFEST_FILE, *ProjectLocaleConfig.BUILD_CONFIG_FILES)


def is_relevant_change(path: str | Path, workspace_root: Path) -> bool:
    """Vrai si la modification peut changer le cache (locales, réglages, projet)."""
    candidate = Path(path)
    try:
        relative = candidate.resolve().relative_to(workspace_root.resolve())
    except ValueError:
        return False

    if any(part in DiscoveryConfig.EXCLUDED_DIRS for part in relative.parts):
        return False
    if relative == SETTINGS_FILE:
        return True
    if len(relative.parts) == 1 and relative.name in _ROOT_FILES:
        return True
    return relative.suffix in DiscoveryConfig.SOURCE_EXTENSIONS


def watch_workspace(
    service: I18nService,
    scheduler: RefreshScheduler | None = None,
    stop_event: threading.Event | None = None,
) -> None:
    """Bloque et rafraîchit le service à chaque lot de changements pertinents."""
    root = service.workspace_root
    scheduler = scheduler or RefreshScheduler(service.refresh)

    def _filter(_change: Change, path: str) -> bool:
        return is_relevant_change(path, root)

    logger.info("Watching %s for locale changes", root)
    try:
        for changes in watch(root, watch_filter=_filter, stop_event=stop_event):
            logger.debug("Changes: %s", sorted(path for _, path in changes))
            scheduler.trigger(f"{len(changes)} file(s) changed")
    finally:
        scheduler.cancel()
