"""Tests pour indexer.py - Index des clés."""

from mplat_i18n.indexer import KeyIndex, flatten_keys


class TestFlattenKeys:
    """Tests de flatten_keys."""

    def test_yields_dotted_string_leaves(self) -> None:
        """Chaque feuille chaîne donne sa clé pointée."""
        tree = {"user": {"name": "Name", "profile": {"title": "Title"}}, "ok": "OK"}
        assert list(flatten_keys(tree)) == [
            ("user.name", "Name"),
            ("user.profile.title", "Title"),
            ("ok", "OK"),
        ]

    def test_skips_arrays(self) -> None:
        """Les tableaux ne sont pas des clés."""
        assert list(flatten_keys({"days": ["Mon", "Tue"], "ok": "OK"})) == [("ok", "OK")]


class TestKeyIndex:
    """Tests de KeyIndex."""

    def test_records_locations_with_lines(self) -> None:
        """La ligne localisée est enregistrée avec le fichier."""
        index = KeyIndex()
        count = index.record("en", {"user": {"name": "Name"}}, "/w/en.ts", {"user.name": 3})

        assert count == 1
        location = index.locations["en"]["user.name"]
        assert location.file_path == "/w/en.ts"
        assert location.line == 3

    def test_uses_placeholder_line_when_unknown(self) -> None:
        """Une clé non localisée prend la ligne 1."""
        index = KeyIndex()
        index.record("en", {"ok": "OK"}, "/w/en.ts")
        assert index.locations["en"]["ok"].line == 1

    def test_later_file_overwrites_location(self) -> None:
        """Le dernier fichier indexé donne la provenance."""
        index = KeyIndex()
        index.record("en", {"ok": "OK"}, "/w/a.ts", {"ok": 2})
        index.record("en", {"ok": "Okay"}, "/w/b.ts", {"ok": 5})

        assert index.locations["en"]["ok"].file_path == "/w/b.ts"
        assert index.locations["en"]["ok"].line == 5

    def test_all_keys_first_seen_order_and_unique(self) -> None:
        """La liste globale garde l'ordre de première apparition, sans doublon."""
        index = KeyIndex()
        index.record("en", {"b": "B", "a": "A"}, "/w/en.ts")
        index.record("zhCN", {"a": "A", "c": "C"}, "/w/zh-CN.ts")

        assert index.all_keys == ["b", "a", "c"]

    def test_all_keys_returns_copy(self) -> None:
        """Modifier la liste retournée ne touche pas l'index."""
        index = KeyIndex()
        index.record("en", {"a": "A"}, "/w/en.ts")
        index.all_keys.append("x")
        assert index.all_keys == ["a"]
