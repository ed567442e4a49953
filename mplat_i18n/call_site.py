"""
Reconnaissance des appels de traduction dans le code source.

Heuristique à base de regex (pas d'AST):
- formes reconnues: t('k'), $t('k'), obj.t('k'), précédées d'un début de
  ligne, d'un espace, de "(", "{" ou ","
- faux positifs possibles: toute fonction nommée `t` sans rapport avec l'i18n
- faux négatifs: clé non littérale (t(key)), clé contenant une quote,
  second argument contenant des parenthèses (coupé à la première ")")
"""

import logging
import re

from .errors import I18nError
from .models import CallInfo, CallSite
from .parser import parse_literal

logger = logging.getLogger(__name__)

CALL_RE = re.compile(
    r"""(?:\$t|\.t|(?:^|[\s({,])t)\s*\(\s*['"`]([^'"`]+)['"`]\s*(?:,\s*(.+?))?\s*\)"""
)

CALL_SITE_RE = re.compile(r"""(\$t|(?:^|[\s({,])t|\.t)\s*\(\s*(['"`])([^'"`]+)\2([^)]*)\)""")

# Saisie en cours: curseur juste après l'ouverture de la chaîne
PARTIAL_KEY_PATTERNS = (
    re.compile(r"""(?:\$t|\.t|^t|[\s({,]t|this\.t|i18n\.t)\s*\(\s*['"`]([^'"`]*)$"""),
    re.compile(r"""(?:translate|trans)\s*\(\s*['"`]([^'"`]*)$"""),
)


def parse_call_info(text: str) -> CallInfo | None:
    """
    Extrait la clé et l'argument d'interpolation du premier appel de la ligne.

    Le second argument est classé:
    - {...} -> "object" (littéral lu comme donnée)
    - [...] -> "array"
    - autre -> "rest" (texte brut)
    Un second argument illisible n'empêche jamais la résolution de la clé.
    """
    match = CALL_RE.search(text)
    if not match:
        return None

    key = match.group(1)
    raw = match.group(2)
    if not raw:
        return CallInfo(key=key, interpolation_type="none")

    trimmed = raw.strip()
    try:
        if trimmed.startswith("{") and trimmed.endswith("}"):
            return CallInfo(key=key, interpolation=parse_literal(trimmed), interpolation_type="object")
        if trimmed.startswith("[") and trimmed.endswith("]"):
            return CallInfo(key=key, interpolation=parse_literal(trimmed), interpolation_type="array")
    except I18nError as e:
        logger.debug("Interpolation argument ignored for %s: %s", key, e)
        return CallInfo(key=key, interpolation_type="none")

    return CallInfo(key=key, interpolation=trimmed, interpolation_type="rest")


def find_call_sites(text: str) -> list[CallSite]:
    """Liste tous les appels d'un document avec la position de la clé littérale."""
    sites: list[CallSite] = []
    for line_index, line in enumerate(text.split("\n")):
        for match in CALL_SITE_RE.finditer(line):
            sites.append(
                CallSite(
                    key=match.group(3),
                    line=line_index,
                    start=match.start(3),
                    end=match.end(3),
                )
            )
    return sites


def partial_key_at(text_before_cursor: str) -> str | None:
    """
    Clé partiellement saisie si le curseur est dans un appel ouvert.

    "const a = t('user.na" -> "user.na"; hors appel -> None.
    """
    for pattern in PARTIAL_KEY_PATTERNS:
        match = pattern.search(text_before_cursor)
        if match:
            return match.group(1) or ""
    return None
