"""Tests pour project_locale.py - Locale déclarée par le projet."""

from collections.abc import Callable
from pathlib import Path

from mplat_i18n.project_locale import detect_project_locale


class TestDetectProjectLocale:
    """Tests de detect_project_locale."""

    def test_reads_package_json(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Le champ locale du package.json est normalisé."""
        write_file("package.json", '{"name": "app", "locale": "zh-CN"}')
        assert detect_project_locale(tmp_path) == "zhCN"

    def test_reads_build_config(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Déclaration `locale: '...'` dans vite.config.ts."""
        write_file("vite.config.ts", "export default defineConfig({ i18n: { locale: 'en-US' } })")
        assert detect_project_locale(tmp_path) == "en"

    def test_manifest_wins_over_build_config(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """package.json est lu en premier."""
        write_file("package.json", '{"locale": "fr"}')
        write_file("vue.config.js", "module.exports = { locale: 'en' }")
        assert detect_project_locale(tmp_path) == "fr"

    def test_build_config_order(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """vue.config.js avant vite.config.*."""
        write_file("vue.config.js", "module.exports = { locale: \"de\" }")
        write_file("vite.config.js", "export default { locale: 'en' }")
        assert detect_project_locale(tmp_path) == "de"

    def test_invalid_manifest_falls_through(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Un package.json invalide n'empêche pas la suite."""
        write_file("package.json", "{ not json")
        write_file("vite.config.js", "export default { locale: 'en' }")
        assert detect_project_locale(tmp_path) == "en"

    def test_manifest_without_locale(
        self, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """package.json sans champ locale: on continue."""
        write_file("package.json", '{"name": "app"}')
        assert detect_project_locale(tmp_path) is None

    def test_nothing_declared(self, tmp_path: Path) -> None:
        """Aucune déclaration: None."""
        assert detect_project_locale(tmp_path) is None
