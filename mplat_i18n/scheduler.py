"""
Planificateur de refresh avec anti-rebond.

Chaque déclenchement (changement de réglage, fichier modifié, commande
manuelle) réarme le minuteur: seul le dernier déclenchement d'une rafale
exécute le refresh, une fois la fenêtre de silence écoulée.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from .config import DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """
    Anti-rebond des demandes de refresh.

    Usage:
        scheduler = RefreshScheduler(service.refresh)
        scheduler.trigger("file changed")   # réarme le minuteur
        scheduler.flush()                    # exécute tout de suite si en attente
    """

    def __init__(self, callback: Callable[[], Any], delay_seconds: float = DEBOUNCE_SECONDS):
        self.callback = callback
        self.delay_seconds = delay_seconds

        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._reason = ""
        self._triggers = 0
        self._runs = 0

    def trigger(self, reason: str = "") -> None:
        """Demande un refresh; annule et remplace la demande en attente."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._reason = reason
            self._triggers += 1
            self._timer = threading.Timer(self.delay_seconds, self._run, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()
        logger.debug("Refresh scheduled in %.2fs (%s)", self.delay_seconds, reason or "trigger")

    def _run(self, generation: int) -> None:
        with self._lock:
            # Un trigger plus récent a pris la main
            if generation != self._generation or self._timer is None:
                return
            self._timer = None
            reason = self._reason
        self._execute(reason)

    def _execute(self, reason: str) -> None:
        self._runs += 1
        logger.info("Refreshing locales (%s)", reason or "trigger")
        try:
            self.callback()
        except Exception:
            logger.exception("Scheduled refresh failed")

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def flush(self) -> bool:
        """Exécute immédiatement le refresh en attente. Retourne False si aucun."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
            reason = self._reason
        self._execute(reason)
        return True

    def cancel(self) -> None:
        """Abandonne le refresh en attente."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def get_status(self) -> dict[str, Any]:
        with self._lock:
            return {
                "pending": self._timer is not None,
                "triggers": self._triggers,
                "runs": self._runs,
                "delay_seconds": self.delay_seconds,
            }
