"""Tests pour config.py - Réglages du moteur."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from mplat_i18n import config
from mplat_i18n.config import I18nSettings, load_settings, parse_debounce_ms
from mplat_i18n.constants import DiscoveryConfig, RefreshConfig
from mplat_i18n.errors import I18nError, I18nErrorCode

WORKSPACE_SETTINGS = """\
{
  // Réglages du workspace
  "editor.tabSize": 2,
  "mplat-i18n.defaultLocale": "en",
  "mplat-i18n.autoDiscovery": false,
  "mplat-i18n.manualPaths": ["lang", "i18n"],
}
"""


class TestI18nSettings:
    """Tests du modèle I18nSettings."""

    def test_defaults(self) -> None:
        """Valeurs par défaut documentées."""
        settings = I18nSettings()
        assert settings.auto_discovery is True
        assert settings.scan_patterns == list(DiscoveryConfig.DEFAULT_SCAN_PATTERNS)
        assert settings.manual_paths == []
        assert settings.default_locale == config.DEFAULT_LOCALE
        assert settings.fallback_locale == config.FALLBACK_LOCALE
        assert settings.enable_hover and settings.enable_completion

    def test_default_locale_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """La locale par défaut suit la valeur du processus."""
        monkeypatch.setattr(config, "DEFAULT_LOCALE", "fr")
        assert I18nSettings().default_locale == "fr"

    def test_accepts_alias_and_field_name(self) -> None:
        """Noms camelCase et snake_case acceptés."""
        assert I18nSettings(defaultLocale="en").default_locale == "en"
        assert I18nSettings(default_locale="en").default_locale == "en"

    def test_is_frozen(self) -> None:
        """Les réglages ne sont pas modifiables après construction."""
        settings = I18nSettings()
        with pytest.raises(ValueError):
            settings.default_locale = "fr"  # type: ignore[misc]


class TestLoadSettings:
    """Tests de load_settings."""

    def test_defaults_without_settings_file(self, tmp_path: Path) -> None:
        """Pas de settings.json: valeurs par défaut."""
        assert load_settings(tmp_path) == I18nSettings()

    def test_reads_prefixed_keys(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Les clés mplat-i18n.* du settings.json (JSONC) sont appliquées."""
        write_file(".vscode/settings.json", WORKSPACE_SETTINGS)
        settings = load_settings(tmp_path)

        assert settings.default_locale == "en"
        assert settings.auto_discovery is False
        assert settings.manual_paths == ["lang", "i18n"]

    def test_malformed_file_uses_defaults(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Un settings.json illisible donne les valeurs par défaut."""
        write_file(".vscode/settings.json", '{ "mplat-i18n.defaultLocale": ')
        assert load_settings(tmp_path) == I18nSettings()

    def test_invalid_values_use_defaults(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Des valeurs de mauvais type sont ignorées."""
        write_file(".vscode/settings.json", '{ "mplat-i18n.scanPatterns": 42 }')
        assert load_settings(tmp_path) == I18nSettings()

    def test_overrides_win(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Les overrides s'appliquent après le fichier."""
        write_file(".vscode/settings.json", WORKSPACE_SETTINGS)
        settings = load_settings(tmp_path, {"defaultLocale": "fr", "fallback_locale": "de"})

        assert settings.default_locale == "fr"
        assert settings.fallback_locale == "de"
        assert settings.auto_discovery is False

    def test_invalid_override_raises(self, tmp_path: Path) -> None:
        """Un override invalide est une erreur explicite."""
        with pytest.raises(I18nError) as exc_info:
            load_settings(tmp_path, {"autoDiscovery": "maybe"})
        assert exc_info.value.code == I18nErrorCode.SETTINGS_INVALID


class TestParseDebounceMs:
    """Tests de parse_debounce_ms."""

    def test_missing_value_uses_default(self) -> None:
        """Variable absente ou vide: délai par défaut."""
        assert parse_debounce_ms(None) == RefreshConfig.DEBOUNCE_SECONDS
        assert parse_debounce_ms("") == RefreshConfig.DEBOUNCE_SECONDS

    def test_converts_milliseconds(self) -> None:
        """La valeur est exprimée en millisecondes."""
        assert parse_debounce_ms("250") == pytest.approx(0.25)

    def test_invalid_value_warns_and_uses_default(self, caplog: pytest.LogCaptureFixture) -> None:
        """Une valeur non numérique ne fait pas échouer l'import."""
        with caplog.at_level(logging.WARNING, logger="mplat_i18n.config"):
            assert parse_debounce_ms("abc") == RefreshConfig.DEBOUNCE_SECONDS
        assert "MPLAT_I18N_DEBOUNCE_MS='abc'" in caplog.text
