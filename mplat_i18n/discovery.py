"""
Découverte des fichiers de locale.

Deux modes, selon les réglages:
- autoDiscovery: patterns glob relatifs à la racine du workspace
  (accolades {ts,js} développées, `*`, `?` et `**` supportés, node_modules exclu)
- manualPaths: répertoires explicites parcourus récursivement, seuls les
  fichiers .ts / .js sont retenus

Les deux modes partagent le même parcours: liens symboliques de répertoire
non suivis, délai max par pattern / répertoire vérifié à chaque répertoire
visité, nombre de fichiers plafonné.

Les erreurs attendues (pattern sans résultat, répertoire absent ou illisible)
sont loggées et n'interrompent pas la découverte.
"""

import logging
import os
import re
import time
from collections.abc import Iterator
from pathlib import Path

from .config import I18nSettings
from .constants import DiscoveryConfig
from .errors import I18nErrorCode

logger = logging.getLogger(__name__)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")
_WILDCARD_RE = re.compile(r"[*?]")


def expand_braces(pattern: str) -> list[str]:
    """
    Développe les alternatives entre accolades d'un pattern glob.

    "src/**/*.{ts,js}" -> ["src/**/*.ts", "src/**/*.js"]
    """
    match = _BRACE_RE.search(pattern)
    if not match:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        for candidate in expand_braces(f"{head}{option}{tail}"):
            if candidate not in expanded:
                expanded.append(candidate)
    return expanded


def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """Traduit un pattern glob (sans accolades) en regex sur chemin relatif posix."""
    if not pattern:
        raise ValueError("empty pattern")

    out: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:[^/]+/)*")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(out) + r"\Z")


def _is_excluded(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part in DiscoveryConfig.EXCLUDED_DIRS for part in parts)


def _walk_files(
    base: Path, deadline: float, label: str, excluded: tuple[str, ...] = ()
) -> Iterator[Path]:
    """
    Fichiers sous `base`, répertoires triés, liens de répertoire non suivis.

    S'arrête (warning) dès que `deadline` est dépassée, qu'il y ait des
    correspondances ou non.
    """

    def _on_error(error: OSError) -> None:
        logger.warning("Cannot read directory %s: %s", error.filename, error)

    for dirpath, dirnames, filenames in os.walk(base, onerror=_on_error):
        if time.monotonic() > deadline:
            logger.warning(
                "%s exceeded %.0fs, walk stopped", label, DiscoveryConfig.PATTERN_TIMEOUT_SECONDS
            )
            return
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        for name in sorted(filenames):
            yield Path(dirpath) / name


def _glob_pattern(root: Path, pattern: str, budget: int) -> list[Path]:
    """Énumère un pattern (déjà développé) avec limite de temps et de nombre."""
    pattern = pattern.lstrip("/")
    regex = _compile_pattern(pattern)
    deadline = time.monotonic() + DiscoveryConfig.PATTERN_TIMEOUT_SECONDS

    # Parcours limité au préfixe littéral du pattern (ex: "src/locales")
    prefix: list[str] = []
    for segment in pattern.split("/")[:-1]:
        if _WILDCARD_RE.search(segment):
            break
        prefix.append(segment)
    base = root.joinpath(*prefix)
    if not base.is_dir() or _is_excluded(base, root):
        return []

    found: list[Path] = []
    for path in _walk_files(
        base, deadline, f"Pattern {pattern}", DiscoveryConfig.EXCLUDED_DIRS
    ):
        if not regex.match(path.relative_to(root).as_posix()) or not path.is_file():
            continue
        found.append(path.resolve())
        if len(found) >= budget:
            break

    return sorted(found)


def find_by_patterns(root: Path, patterns: list[str], max_files: int | None = None) -> list[Path]:
    """
    Trouve les fichiers correspondant aux patterns glob, dans l'ordre des patterns.

    Args:
        root: Racine du workspace
        patterns: Patterns glob relatifs (accolades et ** supportés)
        max_files: Nombre max de fichiers (défaut: DiscoveryConfig.MAX_FILES)

    Returns:
        Chemins absolus, sans doublon
    """
    limit = max_files if max_files is not None else DiscoveryConfig.MAX_FILES
    files: list[Path] = []
    seen: set[Path] = set()

    for pattern in patterns:
        matched = 0
        for expanded in expand_braces(pattern):
            budget = limit - len(files)
            if budget <= 0:
                break
            try:
                candidates = _glob_pattern(root, expanded, budget)
            except ValueError as e:
                logger.warning("Failed to find files with pattern %s: %s", pattern, e)
                continue
            for path in candidates:
                if path not in seen:
                    seen.add(path)
                    files.append(path)
                    matched += 1

        if matched == 0:
            logger.debug("%s: %s", I18nErrorCode.DISCOVERY_NO_MATCH.value, pattern)
        if len(files) >= limit:
            logger.warning("Locale file limit reached (%d), remaining patterns skipped", limit)
            break

    return files


def _walk_directory(directory: Path, budget: int) -> list[Path]:
    deadline = time.monotonic() + DiscoveryConfig.PATTERN_TIMEOUT_SECONDS
    files: list[Path] = []
    for path in _walk_files(directory, deadline, f"Directory {directory}"):
        if path.suffix not in DiscoveryConfig.SOURCE_EXTENSIONS or not path.is_file():
            continue
        files.append(path.resolve())
        if len(files) >= budget:
            break
    return files


def find_in_directories(
    root: Path, directories: list[str], max_files: int | None = None
) -> list[Path]:
    """
    Parcourt récursivement des répertoires explicites (relatifs à la racine).

    Les répertoires absents ou illisibles sont loggés et ignorés.
    """
    limit = max_files if max_files is not None else DiscoveryConfig.MAX_FILES
    files: list[Path] = []

    for dir_path in directories:
        budget = limit - len(files)
        if budget <= 0:
            logger.warning("Locale file limit reached (%d), remaining paths skipped", limit)
            break

        full_path = (root / dir_path).resolve()
        if not full_path.is_dir():
            logger.warning("%s: %s", I18nErrorCode.DISCOVERY_MISSING_PATH.value, full_path)
            continue
        for path in _walk_directory(full_path, budget):
            if path not in files:
                files.append(path)

    return files


def discover_locale_files(settings: I18nSettings, workspace_root: Path) -> list[Path]:
    """Liste les fichiers de locale du workspace selon les réglages."""
    root = Path(workspace_root).resolve()
    if settings.auto_discovery:
        files = find_by_patterns(root, settings.scan_patterns)
    else:
        files = find_in_directories(root, settings.manual_paths)

    logger.info("Found %d locale files", len(files))
    return files
