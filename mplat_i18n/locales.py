"""
Identifiants de locale.

Les fichiers sont nommés d'après leur langue (zh-CN.ts, en.js, ...). Le nom est
ramené à un identifiant court via une table fixe; les noms inconnus sont
conservés tels quels.
"""

from pathlib import Path

LOCALE_ALIASES: dict[str, str] = {
    "zh-CN": "zhCN",
    "zh-cn": "zhCN",
    "zh": "zhCN",
    "en-US": "en",
    "en-us": "en",
    "en": "en",
}

# Fichiers d'entrée d'un répertoire de langue (locales/zh-CN/index.ts)
INDEX_STEMS = ("index",)


def normalize_locale(name: str) -> str:
    """Normalise un nom de locale (idempotent, total)."""
    return LOCALE_ALIASES.get(name, name)


def locale_from_path(file_path: str | Path) -> str | None:
    """
    Déduit la locale d'un fichier de messages.

    - /locales/zh-CN.ts -> zhCN
    - /locales/lang/en-US.js -> en
    - /locales/fr/index.ts -> fr

    Returns:
        Identifiant normalisé, ou None si le nom est vide
    """
    path = Path(file_path)
    stem = path.stem
    if stem in INDEX_STEMS and path.parent.name:
        stem = path.parent.name
    if not stem:
        return None
    return normalize_locale(stem)
