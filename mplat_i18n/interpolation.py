"""
Extraction des paramètres d'interpolation d'une traduction.

Trois conventions, appliquées indépendamment puis réunies:
- {{name}}  (double accolade)
- {name}    (simple accolade)
- {0}, {1}  (positionnel)

Le motif simple accolade voit aussi "{{name}": le nom ressort deux fois et
n'est gardé qu'une fois (ordre de première apparition).
"""

import re
from typing import Any

from .models import InterpolationType

DOUBLE_BRACE_RE = re.compile(r"\{\{([^}]+)\}\}")
SINGLE_BRACE_RE = re.compile(r"\{([^}]+)\}")
NUMERIC_RE = re.compile(r"\{\d+\}")

_BRACES_RE = re.compile(r"[{}]")


def extract_interpolation_keys(template: str) -> list[str]:
    """Retourne les noms de paramètres trouvés dans `template`, sans doublon."""
    keys: list[str] = []
    for pattern in (DOUBLE_BRACE_RE, SINGLE_BRACE_RE, NUMERIC_RE):
        for match in pattern.finditer(template):
            name = _BRACES_RE.sub("", match.group(0)).strip()
            if name and name not in keys:
                keys.append(name)
    return keys


def detect_interpolation_type(interpolation: Any = None) -> InterpolationType:
    """Classe l'argument d'interpolation fourni à l'appel."""
    if interpolation is None or interpolation == "":
        return "none"
    if isinstance(interpolation, (list, tuple)):
        return "array"
    if isinstance(interpolation, dict):
        return "object"
    return "rest"
