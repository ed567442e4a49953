"""
Parseur des fichiers de locale.

Format supporté: un module TS/JS dont le dernier `export default` est suivi
d'un littéral objet jusqu'à la fin du fichier:

    export default {
      user: {
        greeting: 'Bonjour {name}',
        title: `Profil`,
      },
    };

Le littéral est lu comme une donnée (json5), jamais exécuté. Les template
literals sans ${...} sont convertis en chaînes entre guillemets avant lecture.
Un second passage, ligne par ligne, retrouve la ligne de chaque clé.
"""

import bisect
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple

import json5

from .errors import I18nError, I18nErrorCode
from .locales import locale_from_path
from .models import LocaleTree

logger = logging.getLogger(__name__)

_EXPORT_RE = re.compile(r"export\s+default\s+")
_TS_SUFFIX_RE = re.compile(r"\s*(?:as\s+const|satisfies\s+[\w.$<>\[\], ]+)\s*$")
_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER_RE = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# =============================================================================
# LEXER MINIMAL
# =============================================================================


class _Token(NamedTuple):
    kind: str  # "string" | "template" | "ident" | "number" | "punct"
    value: str
    start: int
    end: int


def _read_quoted(text: str, start: int) -> tuple[int, str]:
    """Lit une chaîne délimitée à partir de `start`. Retourne (fin, contenu brut)."""
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1, text[start + 1 : i]
        i += 1
    raise I18nError(I18nErrorCode.PARSE_FAILED, details=f"unterminated string at offset {start}")


def _tokenize(text: str, start: int = 0) -> Iterator[_Token]:
    """Découpe le texte en tokens, commentaires et espaces ignorés."""
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
            continue
        if ch in "'\"`":
            end, value = _read_quoted(text, i)
            yield _Token("template" if ch == "`" else "string", value, i, end)
            i = end
            continue
        match = _IDENT_RE.match(text, i) or _NUMBER_RE.match(text, i)
        if match:
            kind = "ident" if match.re is _IDENT_RE else "number"
            yield _Token(kind, match.group(), i, match.end())
            i = match.end()
            continue
        yield _Token("punct", ch, i, i + 1)
        i += 1


# =============================================================================
# EXTRACTION ET NORMALISATION
# =============================================================================


def _find_export_body(content: str) -> tuple[int, int] | None:
    """Bornes (début, fin) du littéral qui suit le dernier `export default`."""
    matches = list(_EXPORT_RE.finditer(content))
    if not matches:
        return None

    start = matches[-1].end()
    body = content[start:].rstrip()
    if body.endswith(";"):
        body = body[:-1].rstrip()
    body = _TS_SUFFIX_RE.sub("", body)
    if not (body.startswith("{") and body.endswith("}")):
        return None
    return start, start + len(body)


def extract_export_object(content: str) -> str | None:
    """Retourne le texte du littéral objet exporté par défaut, ou None."""
    bounds = _find_export_body(content)
    if bounds is None:
        return None
    return content[bounds[0] : bounds[1]]


def _to_double_quoted(body: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append("`" if nxt == "`" else body[i : i + 2])
            i += 2
            continue
        if ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch != "\r":
            out.append(ch)
        i += 1
    return '"' + "".join(out) + '"'


def normalize_template_literals(text: str) -> str:
    """
    Remplace les template literals `...` par des chaînes "...".

    Les template literals contenant ${...} sont laissés tels quels: ils ne sont
    pas des données et feront échouer la lecture du littéral.
    """
    pieces: list[str] = []
    cursor = 0
    for token in _tokenize(text):
        if token.kind != "template" or "${" in token.value:
            continue
        pieces.append(text[cursor : token.start])
        pieces.append(_to_double_quoted(token.value))
        cursor = token.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def parse_literal(text: str, source: str | Path = "") -> Any:
    """
    Évalue un littéral objet / tableau / primitif comme donnée.

    Raises:
        I18nError: PARSE_FAILED si le texte sort de la grammaire supportée
    """
    try:
        return json5.loads(normalize_template_literals(text))
    except I18nError as e:
        raise I18nError(e.code, source, e.details) from e
    except (ValueError, RecursionError) as e:
        raise I18nError(I18nErrorCode.PARSE_FAILED, source, str(e)) from e


def _validate_tree(node: dict[str, Any], source: str | Path, prefix: str = "") -> None:
    """Vérifie que les feuilles sont des chaînes (les tableaux sont opaques)."""
    for key, value in node.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            _validate_tree(value, source, full_key)
        elif not isinstance(value, (str, list)):
            raise I18nError(
                I18nErrorCode.PARSE_INVALID_TREE,
                source,
                f"leaf '{full_key}' must be a string, got {type(value).__name__}",
            )


def parse_locale_source(content: str, source: str | Path = "<string>") -> LocaleTree | None:
    """
    Parse le contenu d'un fichier de locale.

    Returns:
        Arbre de messages, ou None si aucun `export default {...}` n'est trouvé

    Raises:
        I18nError: PARSE_FAILED / PARSE_INVALID_TREE si le littéral est invalide
    """
    body = extract_export_object(content)
    if body is None:
        logger.warning("%s: %s", I18nErrorCode.PARSE_NO_EXPORT.value, source)
        return None

    tree = parse_literal(body, source)
    if not isinstance(tree, dict):
        raise I18nError(I18nErrorCode.PARSE_INVALID_TREE, source, "default export is not an object")
    _validate_tree(tree, source)
    return tree


# =============================================================================
# LOCALISATION DES CLÉS (numéros de ligne)
# =============================================================================


@dataclass
class _Frame:
    kind: str  # "object" | "opaque"
    path: tuple[str, ...] = ()
    candidate: tuple[str, int] | None = None
    value_key: str | None = None


def locate_keys(content: str) -> dict[str, int]:
    """
    Associe chaque clé pointée du littéral exporté à sa ligne (1-based).

    Les clés intermédiaires (sous-objets) sont aussi reportées. Les contenus de
    tableaux sont ignorés. Ne lève jamais: un source illisible donne un
    résultat partiel.
    """
    bounds = _find_export_body(content)
    if bounds is None:
        return {}

    line_starts = [0] + [m.end() for m in re.finditer("\n", content)]
    lines: dict[str, int] = {}
    stack: list[_Frame] = []

    try:
        for token in _tokenize(content[: bounds[1]], bounds[0]):
            top = stack[-1] if stack else None

            if token.kind == "punct":
                ch = token.value
                if ch == "{":
                    if top is None:
                        stack.append(_Frame("object"))
                    elif top.kind == "object" and top.value_key is not None:
                        stack.append(_Frame("object", top.path + (top.value_key,)))
                    else:
                        stack.append(_Frame("opaque"))
                elif ch == "[":
                    stack.append(_Frame("opaque"))
                elif ch in "}]":
                    if stack:
                        stack.pop()
                    if not stack:
                        break
                elif ch == ":" and top is not None and top.kind == "object":
                    if top.candidate is not None and top.value_key is None:
                        name, offset = top.candidate
                        top.value_key = name
                        lines[".".join(top.path + (name,))] = bisect.bisect_right(
                            line_starts, offset
                        )
                elif ch == "," and top is not None:
                    top.candidate = None
                    top.value_key = None
                continue

            if top is not None and top.kind == "object" and top.value_key is None:
                if token.kind in ("string", "ident", "number"):
                    top.candidate = (token.value, token.start)
    except I18nError as e:
        logger.debug("Partial key location: %s", e)

    return lines


# =============================================================================
# FICHIERS
# =============================================================================


@dataclass
class ParsedLocaleFile:
    """Fichier de locale lu: locale déduite du nom, arbre et lignes des clés."""

    path: Path
    locale: str
    tree: LocaleTree
    lines: dict[str, int] = field(default_factory=dict)


def parse_locale_file(file_path: str | Path) -> ParsedLocaleFile | None:
    """
    Lit et parse un fichier de locale.

    Returns:
        ParsedLocaleFile, ou None si le fichier n'exporte pas de messages

    Raises:
        I18nError: PARSE_FAILED (lecture ou littéral invalide), PARSE_INVALID_TREE
    """
    path = Path(file_path)
    locale = locale_from_path(path)
    if not locale:
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise I18nError(I18nErrorCode.PARSE_FAILED, path, str(e)) from e

    tree = parse_locale_source(content, path)
    if tree is None:
        return None

    return ParsedLocaleFile(path=path, locale=locale, tree=tree, lines=locate_keys(content))
