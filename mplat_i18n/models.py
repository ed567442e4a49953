"""
Modèles Pydantic du moteur i18n.

Structures renvoyées aux consommateurs (hover, définition, complétion, CLI).
Toutes sont éphémères sauf KeyLocation, stockée dans l'index.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

InterpolationType = Literal["object", "array", "rest", "none"]

# Arbre de messages d'une locale: str aux feuilles, dict imbriqués, listes opaques
LocaleTree = dict[str, Any]


class KeyLocation(BaseModel):
    """Provenance d'une clé: dernier fichier l'ayant définie, ligne 1-based."""

    file_path: str = Field(alias="filePath")
    line: int

    model_config = {"populate_by_name": True, "frozen": True}


class TranslationResult(BaseModel):
    """Traduction résolue pour une clé pointée."""

    value: str
    file_path: str = Field(alias="filePath")
    line: int
    locale: str
    interpolation_keys: list[str] = Field(default_factory=list, alias="interpolationKeys")
    interpolation_type: InterpolationType = Field(default="none", alias="interpolationType")

    model_config = {"populate_by_name": True}


class CallInfo(BaseModel):
    """Appel de fonction de traduction reconnu sur une ligne de source."""

    key: str
    interpolation: Any = None
    interpolation_type: InterpolationType = Field(default="none", alias="interpolationType")

    model_config = {"populate_by_name": True}


class CallSite(BaseModel):
    """Position d'une clé littérale dans un document (ligne et colonnes 0-based)."""

    key: str
    line: int
    start: int
    end: int


class CompletionItem(BaseModel):
    """Proposition d'autocomplétion prête à afficher."""

    label: str
    detail: str
    documentation: str = ""
    insert_text: str = Field(alias="insertText")
    is_snippet: bool = Field(default=False, alias="isSnippet")
    sort_text: str = Field(alias="sortText")
    kind: Literal["constant", "function"] = "constant"

    model_config = {"populate_by_name": True}


class RefreshReport(BaseModel):
    """Résumé d'un refresh du cache."""

    ok: bool = True
    files: int = 0
    locales: list[str] = Field(default_factory=list)
    keys: int = 0
    project_locale: str | None = None
    skipped_files: list[str] = Field(default_factory=list)
    error: str | None = None
    duration_ms: int = 0
