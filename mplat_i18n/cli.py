"""
Interface en ligne de commande du moteur i18n.

Usage:
    python -m mplat_i18n scan
    python -m mplat_i18n resolve user.greeting
    python -m mplat_i18n locate user.greeting
    python -m mplat_i18n complete usr --limit 10
    python -m mplat_i18n call "this.\\$t('user.greeting', { name: 'Bob' })"
    python -m mplat_i18n annotate src/views/Profile.vue
    python -m mplat_i18n watch

Options globales:
    --root DIR        Racine du workspace (défaut: répertoire courant)
    --default-locale  Surcharge de defaultLocale
    --fallback-locale Surcharge de fallbackLocale
    --verbose         Logs DEBUG
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import DEBOUNCE_SECONDS, LOG_LEVEL, I18nSettings, load_settings
from .fuzzy import sort_weight
from .locales import normalize_locale
from .presenters import build_completion_items, render_hover, render_inline
from .service import I18nService

logger = logging.getLogger(__name__)


def _build_service(args: argparse.Namespace) -> I18nService:
    """Service dont chaque refresh relit settings.json, overrides de la ligne de commande en dernier."""
    overrides: dict[str, Any] = {}
    if args.default_locale:
        overrides["defaultLocale"] = args.default_locale
    if args.fallback_locale:
        overrides["fallbackLocale"] = args.fallback_locale

    root = Path(args.root)
    # Lève SETTINGS_INVALID dès le démarrage si un override est invalide
    load_settings(root, overrides)

    def _load() -> I18nSettings:
        return load_settings(root, overrides)

    return I18nService(root, settings_loader=_load)


def cmd_scan(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: refresh et rapport."""
    report = service.refresh()
    if args.json:
        print(json.dumps(report.model_dump(), ensure_ascii=False, indent=2))
        return 0 if report.ok else 1

    if not report.ok:
        print(f"❌ Refresh failed: {report.error}")
        return 1

    print(f"\n{'=' * 60}")
    print(f"  Workspace: {service.workspace_root}")
    print(f"{'=' * 60}")
    print(f"  Locale files:   {report.files}")
    print(f"  Locales:        {', '.join(report.locales) or '-'}")
    print(f"  Keys:           {report.keys}")
    print(f"  Project locale: {report.project_locale or '-'}")
    print(f"  Primary/fallback: {service.snapshot.primary_locale} / {service.snapshot.fallback_locale}")
    if report.skipped_files:
        print(f"\n  ⚠️  Skipped files ({len(report.skipped_files)}):")
        for path in report.skipped_files:
            print(f"    - {path}")
    return 0


def cmd_keys(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: liste des clés."""
    if args.locale:
        keys = list(service.snapshot.locations.get(normalize_locale(args.locale), {}))
    else:
        keys = service.get_all_keys()
    for key in keys:
        print(key)
    return 0


def cmd_resolve(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: résolution d'une clé."""
    result = service.resolve(args.key)
    if result is None:
        print(f"Translation not found: {args.key}")
        return 1
    print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))
    return 0


def cmd_locate(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: fichier et ligne d'une clé."""
    location = service.get_key_location(args.key)
    if location is None:
        print(f"Key not found: {args.key}")
        return 1
    print(f"{location.file_path}:{location.line}")
    return 0


def cmd_complete(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: autocomplétion floue."""
    if args.details:
        for item in build_completion_items(service, args.partial, args.limit):
            print(f"{item.sort_text:<50} {item.detail}")
        return 0

    for key in service.complete(args.partial, args.limit):
        print(f"{sort_weight(key, args.partial):6.2f}  {key}")
    return 0


def cmd_call(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: analyse d'une ligne de code et rendu hover."""
    call_info = service.parse_call_info(args.line)
    if call_info is None:
        print("No translation call found")
        return 1
    result = service.resolve(call_info.key, call_info.interpolation)
    print(render_hover(call_info, result, service.get_all_keys(), service.workspace_root))
    return 0 if result is not None else 1


def cmd_annotate(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: affiche un fichier avec les traductions en ligne."""
    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Cannot read {path}: {e}")
        return 1
    print(render_inline(text, service))
    return 0


def cmd_watch(service: I18nService, args: argparse.Namespace) -> int:
    """Commande: surveillance et refresh automatique."""
    from .scheduler import RefreshScheduler
    from .watcher import watch_workspace

    def _refresh() -> None:
        report = service.refresh()
        status = "✅" if report.ok else "❌"
        print(f"{status} {report.keys} keys, {len(report.locales)} locales ({report.duration_ms} ms)")

    scheduler = RefreshScheduler(_refresh, args.debounce_ms / 1000)
    try:
        watch_workspace(service, scheduler)
    except KeyboardInterrupt:
        pass
    return 0


def _get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mplat-i18n", description="Translation key resolution for TS/JS locale files"
    )
    parser.add_argument("--root", default=".", help="Workspace root")
    parser.add_argument("--default-locale", help="Override defaultLocale")
    parser.add_argument("--fallback-locale", help="Override fallbackLocale")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p_scan = sub.add_parser("scan", help="Refresh the cache and print a report")
    p_scan.add_argument("--json", action="store_true", help="JSON output")

    p_keys = sub.add_parser("keys", help="List known keys")
    p_keys.add_argument("--locale", help="Only keys defined for this locale")

    p_resolve = sub.add_parser("resolve", help="Resolve a dotted key")
    p_resolve.add_argument("key")

    p_locate = sub.add_parser("locate", help="Print file:line of a key")
    p_locate.add_argument("key")

    p_complete = sub.add_parser("complete", help="Rank keys for a partial input")
    p_complete.add_argument("partial", nargs="?", default="")
    p_complete.add_argument("--limit", type=int, default=50)
    p_complete.add_argument("--details", action="store_true", help="Show translation previews")

    p_call = sub.add_parser("call", help="Parse a source line and render the hover")
    p_call.add_argument("line")

    p_annotate = sub.add_parser("annotate", help="Print a file with inline translations")
    p_annotate.add_argument("file")

    p_watch = sub.add_parser("watch", help="Refresh on file changes")
    p_watch.add_argument("--debounce-ms", type=int, default=int(DEBOUNCE_SECONDS * 1000))

    return parser


COMMANDS = {
    "scan": cmd_scan,
    "keys": cmd_keys,
    "resolve": cmd_resolve,
    "locate": cmd_locate,
    "complete": cmd_complete,
    "call": cmd_call,
    "annotate": cmd_annotate,
    "watch": cmd_watch,
}


def main(argv: list[str] | None = None) -> int:
    args = _get_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = _build_service(args)
    return COMMANDS[args.command](service, args)


if __name__ == "__main__":
    sys.exit(main())
