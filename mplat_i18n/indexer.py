"""
Index des clés de traduction.

Aplati chaque fichier parsé en clés pointées, enregistre la provenance
(fichier, ligne) par locale et accumule la liste globale des clés.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .constants import ParserConfig
from .models import KeyLocation


def flatten_keys(tree: dict[str, Any], prefix: str = "") -> Iterator[tuple[str, str]]:
    """Produit (clé pointée, valeur) pour chaque feuille chaîne de l'arbre."""
    for key, value in tree.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, str):
            yield full_key, value
        elif isinstance(value, dict):
            yield from flatten_keys(value, full_key)


class KeyIndex:
    """Provenance des clés par locale + liste globale ordonnée (premier vu)."""

    def __init__(self) -> None:
        self.locations: dict[str, dict[str, KeyLocation]] = {}
        self._all_keys: list[str] = []
        self._seen: set[str] = set()

    def record(
        self,
        locale: str,
        tree: dict[str, Any],
        file_path: str | Path,
        lines: dict[str, int] | None = None,
    ) -> int:
        """
        Indexe les feuilles d'un fichier. Un fichier indexé plus tard écrase
        la provenance d'une clé déjà vue dans la même locale.

        Returns:
            Nombre de feuilles indexées
        """
        lines = lines or {}
        locale_map = self.locations.setdefault(locale, {})
        count = 0

        for full_key, _value in flatten_keys(tree):
            line = lines.get(full_key, ParserConfig.PLACEHOLDER_LINE)
            locale_map[full_key] = KeyLocation(file_path=str(file_path), line=line)
            if full_key not in self._seen:
                self._seen.add(full_key)
                self._all_keys.append(full_key)
            count += 1

        return count

    @property
    def all_keys(self) -> list[str]:
        return list(self._all_keys)
