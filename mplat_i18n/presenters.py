"""
Rendu des résultats pour l'affichage (hover, complétion, traduction en ligne).

Produit du texte markdown / des CompletionItem; aucun appel à l'éditeur.
"""

import os
from pathlib import Path
from typing import Any

from .call_site import find_call_sites
from .constants import CompletionConfig, HoverConfig
from .fuzzy import rank_keys, sort_weight
from .models import CallInfo, CompletionItem, TranslationResult
from .service import I18nService


def _relative_path(file_path: str, workspace_root: Path | None) -> str:
    if not workspace_root:
        return file_path
    try:
        return os.path.relpath(file_path, workspace_root)
    except ValueError:
        return file_path


def _current_values(call_info: CallInfo) -> list[tuple[str, Any]]:
    interpolation = call_info.interpolation
    if call_info.interpolation_type == "object" and isinstance(interpolation, dict):
        return list(interpolation.items())
    if call_info.interpolation_type == "array" and isinstance(interpolation, list):
        return [(str(i), value) for i, value in enumerate(interpolation)]
    if call_info.interpolation_type == "rest" and interpolation:
        return [("0", interpolation)]
    return []


def render_not_found(key: str, all_keys: list[str]) -> str:
    """Bloc markdown pour une clé introuvable, avec quelques clés d'exemple."""
    lines = [
        "## ⚠️ Translation not found",
        "",
        f"**Key**: `{key}`",
        "",
        "- Check the key spelling",
        "- Check that a locale file defines it",
        "- Refresh the cache (`python -m mplat_i18n scan`)",
        "",
    ]
    if all_keys:
        lines.append(f"**Available keys** ({len(all_keys)}):")
        lines.extend(f"- `{k}`" for k in all_keys[: HoverConfig.SAMPLE_KEYS])
        remaining = len(all_keys) - HoverConfig.SAMPLE_KEYS
        if remaining > 0:
            lines.append(f"- ... {remaining} more")
    return "\n".join(lines)


def render_hover(
    call_info: CallInfo,
    result: TranslationResult | None,
    all_keys: list[str] | None = None,
    workspace_root: Path | None = None,
) -> str:
    """Contenu markdown du survol d'un appel de traduction."""
    if result is None:
        return render_not_found(call_info.key, all_keys or [])

    lines = [
        "**Translation**",
        "",
        f"📝 `{result.value}`",
        "",
        "**Details**",
        "",
        f"🔑 **Key**: `{call_info.key}`",
        "",
        f"🌍 **Locale**: `{result.locale}`",
        "",
    ]

    if result.interpolation_keys:
        lines.append(f"🔧 **Interpolation Keys**: `{', '.join(result.interpolation_keys)}`")
        lines.append("")
        values = _current_values(call_info)
        if values:
            lines.append("📊 **Current Values**:")
            lines.extend(f"- `{name}`: `{value}`" for name, value in values)
            lines.append("")

    if result.file_path:
        source = _relative_path(result.file_path, workspace_root)
        lines.append(f"📁 **Source**: `{source}:{result.line}`")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _usage_example(key: str, params: list[str]) -> str:
    if params:
        example = ", ".join(f"{p}: 'value'" for p in params)
        return f"t('{key}', {{ {example} }})"
    return f"t('{key}')"


def build_completion_item(key: str, partial: str, result: TranslationResult | None) -> CompletionItem:
    """Item de complétion pour une clé (aperçu, snippet de paramètres, tri)."""
    weight = sort_weight(key, partial)
    sort_text = f"{weight:05.2f}_{key}"

    if result is None:
        return CompletionItem(
            label=key, detail="Translation not found", insert_text=key, sort_text=sort_text
        )

    value = result.value
    max_chars = CompletionConfig.DETAIL_MAX_CHARS
    detail = value[:max_chars] + ("..." if len(value) > max_chars else "")
    params = result.interpolation_keys

    documentation = "\n".join(
        [
            "**🌍 Translation**",
            "",
            f"`{value}`",
            "",
            "**📋 Details**",
            "",
            f"• **Key**: `{key}`",
            f"• **Locale**: `{result.locale}`",
            *([f"• **Parameters**: `{', '.join(params)}`"] if params else []),
            "",
            "**💡 Usage Example**",
            "",
            "```typescript",
            _usage_example(key, params),
            "```",
        ]
    )

    if params:
        placeholders = ", ".join(f"${{{i + 2}:{p}}}" for i, p in enumerate(params))
        insert_text = f"{key}$1, {{ {placeholders} }}"
    else:
        insert_text = key

    return CompletionItem(
        label=key,
        detail=detail,
        documentation=documentation,
        insert_text=insert_text,
        is_snippet=bool(params),
        sort_text=sort_text,
        kind="function" if params else "constant",
    )


def build_completion_items(
    service: I18nService, partial: str, limit: int = CompletionConfig.MAX_RESULTS
) -> list[CompletionItem]:
    """Items de complétion classés pour une saisie partielle."""
    keys = rank_keys(partial, service.get_all_keys(), limit)
    return [build_completion_item(key, partial, service.resolve(key)) for key in keys]


def render_inline(text: str, service: I18nService) -> str:
    """Réécrit un document en insérant la traduction après chaque clé résolue."""
    sites_by_line: dict[int, list[tuple[int, str]]] = {}
    for site in find_call_sites(text):
        result = service.resolve(site.key)
        if result is not None:
            sites_by_line.setdefault(site.line, []).append((site.end, result.value))

    lines = text.split("\n")
    for line_index, inserts in sites_by_line.items():
        line = lines[line_index]
        # De droite à gauche pour garder les colonnes valides; après la quote fermante
        for end, value in sorted(inserts, reverse=True):
            line = f"{line[: end + 1]} /* {value} */{line[end + 1 :]}"
        lines[line_index] = line
    return "\n".join(lines)
