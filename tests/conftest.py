"""
Fixtures partagées pour tous les tests.

Ces fixtures construisent des workspaces de locale sur disque (tmp_path).
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from mplat_i18n.config import I18nSettings
from mplat_i18n.service import I18nService

# =============================================================================
# CONTENUS DE LOCALE
# =============================================================================

ZH_CN_SOURCE = """\
// Messages chinois
export default {
  user: {
    greeting: '你好 {name}',
    title: `用户资料`,
  },
  common: {
    ok: '确定',
  },
};
"""

EN_SOURCE = """\
export default {
  user: {
    greeting: 'Hello {name}',
    title: 'Profile',
    farewell: 'Bye {{name}}, see you {0}',
  },
  common: {
    ok: 'OK',
    cancel: 'Cancel',
  },
}
"""


# =============================================================================
# FIXTURES WORKSPACE
# =============================================================================


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Écrit un fichier relatif à tmp_path (répertoires créés au besoin)."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def locale_workspace(tmp_path: Path, write_file: Callable[[str, str], Path]) -> Path:
    """Workspace avec src/locales/zh-CN.ts et src/locales/en.ts."""
    write_file("src/locales/zh-CN.ts", ZH_CN_SOURCE)
    write_file("src/locales/en.ts", EN_SOURCE)
    return tmp_path


@pytest.fixture
def settings() -> I18nSettings:
    """Réglages explicites (indépendants des variables d'environnement)."""
    return I18nSettings(default_locale="zhCN", fallback_locale="en")


@pytest.fixture
def service(locale_workspace: Path, settings: I18nSettings) -> I18nService:
    """Service chargé sur le workspace de test."""
    return I18nService(locale_workspace, settings=settings)


@pytest.fixture
def en_source() -> str:
    """Source de en.ts du workspace de test."""
    return EN_SOURCE
