"""Fusion profonde des arbres de messages d'une même locale."""

import copy
from typing import Any


def deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """
    Fusionne `source` dans `target` (en place) et retourne `target`.

    - dict des deux côtés: fusion récursive
    - sinon (feuille, tableau, type différent): la valeur de `source` remplace
    """
    for key, value in source.items():
        if isinstance(value, dict):
            if not isinstance(target.get(key), dict):
                target[key] = {}
            deep_merge(target[key], value)
        else:
            target[key] = copy.copy(value) if isinstance(value, list) else value
    return target
