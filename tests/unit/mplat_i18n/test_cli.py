"""Tests pour cli.py - Interface en ligne de commande."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from mplat_i18n import cli
from mplat_i18n.cli import _build_service, _get_parser, main
from mplat_i18n.errors import I18nError


def run_cli(workspace: Path, *args: str) -> int:
    return main(
        ["--root", str(workspace), "--default-locale", "zhCN", "--fallback-locale", "en", *args]
    )


class TestCli:
    """Tests des sous-commandes."""

    def test_scan_json(self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """scan --json: rapport du refresh."""
        assert run_cli(locale_workspace, "scan", "--json") == 0
        report = json.loads(capsys.readouterr().out)
        assert report["ok"] is True
        assert report["keys"] == 5
        assert report["locales"] == ["en", "zhCN"]

    def test_scan_text(self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """scan: résumé lisible."""
        assert run_cli(locale_workspace, "scan") == 0
        out = capsys.readouterr().out
        assert "Keys:           5" in out
        assert "zhCN / en" in out

    def test_keys_for_locale(
        self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """keys --locale: clés d'une locale (nom normalisé)."""
        assert run_cli(locale_workspace, "keys", "--locale", "zh-CN") == 0
        assert capsys.readouterr().out.split() == ["user.greeting", "user.title", "common.ok"]

    def test_resolve(self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """resolve: TranslationResult en JSON."""
        assert run_cli(locale_workspace, "resolve", "user.farewell") == 0
        result = json.loads(capsys.readouterr().out)
        assert result["locale"] == "en"
        assert result["interpolationKeys"] == ["name", "0"]
        assert result["filePath"].endswith("en.ts")

    def test_resolve_missing(
        self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """resolve d'une clé inconnue: code 1."""
        assert run_cli(locale_workspace, "resolve", "missing") == 1
        assert "Translation not found: missing" in capsys.readouterr().out

    def test_locate(self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """locate: fichier:ligne."""
        assert run_cli(locale_workspace, "locate", "user.title") == 0
        assert capsys.readouterr().out.strip().endswith("zh-CN.ts:5")
        assert run_cli(locale_workspace, "locate", "missing") == 1

    def test_complete(self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """complete: clés classées avec leur poids."""
        assert run_cli(locale_workspace, "complete", "common", "--limit", "1") == 0
        assert capsys.readouterr().out.split() == ["20.90", "common.ok"]

    def test_call(self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """call: rendu hover d'une ligne."""
        assert run_cli(locale_workspace, "call", "this.$t('user.greeting', { name: 'Bob' })") == 0
        out = capsys.readouterr().out
        assert "你好 {name}" in out
        assert "`name`: `Bob`" in out

    def test_call_without_translation_call(
        self, locale_workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """call sur une ligne sans appel: code 1."""
        assert run_cli(locale_workspace, "call", "const x = 5") == 1
        assert "No translation call found" in capsys.readouterr().out

    def test_annotate(
        self, locale_workspace: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """annotate: fichier avec traductions en ligne."""
        source = tmp_path / "Profile.vue"
        source.write_text("<h1>{{ $t('user.title') }}</h1>\n", encoding="utf-8")

        assert run_cli(locale_workspace, "annotate", str(source)) == 0
        assert "$t('user.title' /* 用户资料 */)" in capsys.readouterr().out

    def test_annotate_missing_file(self, locale_workspace: Path) -> None:
        """annotate d'un fichier absent: code 1."""
        assert run_cli(locale_workspace, "annotate", str(locale_workspace / "nope.vue")) == 1

    def test_watch(self, locale_workspace: Path) -> None:
        """watch délègue à watch_workspace."""
        with patch("mplat_i18n.watcher.watch_workspace") as mock_watch:
            assert run_cli(locale_workspace, "watch", "--debounce-ms", "50") == 0

        mock_watch.assert_called_once()
        scheduler = mock_watch.call_args.args[1]
        assert scheduler.delay_seconds == pytest.approx(0.05)


class TestBuildService:
    """Tests de _build_service."""

    def test_settings_file_reread_on_refresh(
        self, locale_workspace: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Une modification de settings.json est prise en compte au refresh suivant."""
        write_file(
            ".vscode/settings.json",
            '{ "mplat-i18n.defaultLocale": "zhCN", "mplat-i18n.fallbackLocale": "en" }',
        )
        service = _build_service(_get_parser().parse_args(["--root", str(locale_workspace), "scan"]))
        greeting = service.resolve("user.greeting")
        assert greeting is not None
        assert greeting.locale == "zhCN"

        write_file(".vscode/settings.json", '{ "mplat-i18n.defaultLocale": "en" }')
        service.refresh()

        assert service.settings.default_locale == "en"
        greeting = service.resolve("user.greeting")
        assert greeting is not None
        assert greeting.locale == "en"

    def test_command_line_overrides_settings_file(
        self, locale_workspace: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """--default-locale l'emporte sur settings.json, même après un refresh."""
        write_file(".vscode/settings.json", '{ "mplat-i18n.defaultLocale": "en" }')
        args = _get_parser().parse_args(
            ["--root", str(locale_workspace), "--default-locale", "zhCN", "scan"]
        )
        service = _build_service(args)
        service.refresh()

        assert service.settings.default_locale == "zhCN"

    def test_invalid_override_fails_fast(self, locale_workspace: Path) -> None:
        """Un override invalide lève SETTINGS_INVALID à la construction."""
        args = _get_parser().parse_args(["--root", str(locale_workspace), "scan"])
        args.default_locale = ["zhCN"]
        with pytest.raises(I18nError):
            _build_service(args)


class TestParser:
    """Tests de _get_parser."""

    def test_debounce_default_follows_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """La valeur par défaut de --debounce-ms suit DEBOUNCE_SECONDS."""
        monkeypatch.setattr(cli, "DEBOUNCE_SECONDS", 1.5)
        assert _get_parser().parse_args(["watch"]).debounce_ms == 1500
