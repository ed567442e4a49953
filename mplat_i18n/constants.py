"""
Constantes globales du moteur i18n.

Centralise les magic numbers pour documentation et configuration.
Chaque constante est documentée avec son usage et sa valeur par défaut.
"""


class DiscoveryConfig:
    """Configuration de la découverte des fichiers de locale."""

    SOURCE_EXTENSIONS = (".ts", ".js")
    """Extensions retenues en mode répertoires explicites."""

    EXCLUDED_DIRS = ("node_modules",)
    """Répertoires ignorés en mode glob."""

    MAX_FILES = 2_000
    """Nombre max de fichiers de locale chargés par refresh."""

    PATTERN_TIMEOUT_SECONDS = 10.0
    """Temps max d'énumération d'un pattern glob avant abandon."""

    DEFAULT_SCAN_PATTERNS = (
        "packages/*/src/locales/**/*.{ts,js}",
        "packages/*/src/i18n/**/*.{ts,js}",
        "src/locales/**/*.{ts,js}",
        "src/i18n/**/*.{ts,js}",
    )
    """Patterns glob par défaut, relatifs à la racine du workspace."""


class ParserConfig:
    """Configuration du parseur de fichiers de locale."""

    PLACEHOLDER_LINE = 1
    """Ligne utilisée quand une clé n'a pas pu être localisée dans le source."""


class CompletionConfig:
    """Configuration de l'autocomplétion floue."""

    MAX_RESULTS = 50
    """Nombre max de clés proposées."""

    WEIGHT_EXACT = 10
    WEIGHT_PREFIX = 20
    WEIGHT_SUBSTRING = 30
    WEIGHT_SUBSEQUENCE = 40
    """Poids de tri (plus bas = mieux classé)."""

    LENGTH_BONUS_DIVISOR = 10
    """Pénalité de longueur: len(key) / diviseur."""

    LENGTH_BONUS_CAP = 10
    """Pénalité de longueur maximale."""

    MIN_SUBSEQUENCE_LENGTH = 2
    """Longueur min de la saisie pour tenter la correspondance par sous-séquence."""

    DETAIL_MAX_CHARS = 50
    """Longueur max de l'aperçu de traduction dans un item de complétion."""


class RefreshConfig:
    """Configuration du rafraîchissement du cache."""

    DEBOUNCE_SECONDS = 0.3
    """Fenêtre de silence avant d'exécuter un refresh déclenché."""


class ProjectLocaleConfig:
    """Détection de la locale déclarée par le projet."""

    MANIFEST_FILE = "package.json"
    """Manifeste lu en premier (champ "locale")."""

    BUILD_CONFIG_FILES = ("vue.config.js", "vite.config.ts", "vite.config.js")
    """Fichiers de build inspectés ensuite, dans cet ordre."""


class HoverConfig:
    """Configuration du rendu hover."""

    SAMPLE_KEYS = 10
    """Nombre de clés d'exemple affichées quand une traduction est introuvable."""
