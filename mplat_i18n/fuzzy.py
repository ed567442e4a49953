"""
Correspondance floue et classement des clés pour l'autocomplétion.

Règles, par priorité (insensibles à la casse):
1. exact        "user.name"  pour "user.name"
2. préfixe      "user.name"  pour "user"
3. sous-chaîne  "profile.user" pour "user"
4. hiérarchique un segment commence par la saisie ("a.user_id" pour "user")
5. sous-séquence les caractères apparaissent dans l'ordre ("usrnm"), saisie >= 2

Poids de tri: 10 / 20 / 30 / 30 / 40, plus une pénalité de longueur
plafonnée (les clés courtes passent devant).
"""

from collections.abc import Iterable
from typing import Literal

from .constants import CompletionConfig

MatchKind = Literal["exact", "prefix", "substring", "hierarchical", "subsequence"]

_WEIGHTS: dict[str, int] = {
    "exact": CompletionConfig.WEIGHT_EXACT,
    "prefix": CompletionConfig.WEIGHT_PREFIX,
    "substring": CompletionConfig.WEIGHT_SUBSTRING,
    "hierarchical": CompletionConfig.WEIGHT_SUBSTRING,
    "subsequence": CompletionConfig.WEIGHT_SUBSEQUENCE,
}


def is_subsequence(partial: str, text: str) -> bool:
    """Vrai si chaque caractère de `partial` apparaît dans `text`, dans l'ordre."""
    position = 0
    for ch in partial:
        position = text.find(ch, position)
        if position == -1:
            return False
        position += 1
    return True


def match_kind(key: str, partial: str) -> MatchKind | None:
    """Première règle satisfaite par `key` pour la saisie `partial`."""
    key_lower = key.lower()
    partial_lower = partial.lower()

    if key_lower == partial_lower:
        return "exact"
    if key_lower.startswith(partial_lower):
        return "prefix"
    if partial_lower in key_lower:
        return "substring"
    if partial and any(part.startswith(partial_lower) for part in key_lower.split(".")):
        return "hierarchical"
    if len(partial) >= CompletionConfig.MIN_SUBSEQUENCE_LENGTH and is_subsequence(
        partial_lower, key_lower
    ):
        return "subsequence"
    return None


def sort_weight(key: str, partial: str) -> float:
    """Poids de présentation (plus bas = mieux classé)."""
    kind = match_kind(key, partial)
    base = _WEIGHTS[kind] if kind else CompletionConfig.WEIGHT_SUBSEQUENCE
    bonus = min(len(key) / CompletionConfig.LENGTH_BONUS_DIVISOR, CompletionConfig.LENGTH_BONUS_CAP)
    return base + bonus


def rank_keys(
    partial: str, keys: Iterable[str], limit: int = CompletionConfig.MAX_RESULTS
) -> list[str]:
    """
    Filtre et classe les clés pour une saisie partielle.

    Le tri est stable: à poids égal, l'ordre d'origine des clés est conservé.
    """
    weighted = [(sort_weight(key, partial), key) for key in keys if match_kind(key, partial)]
    weighted.sort(key=lambda item: item[0])
    return [key for _weight, key in weighted[: max(0, limit)]]
