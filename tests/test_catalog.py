"""Tests for the archetype catalog."""

import json

import pytest
from pydantic import ValidationError

from podium.persona.catalog import default_catalog, dump_catalog, load_catalog, parse_catalog


class TestDefaultCatalog:
    """Test the built-in catalog."""

    def test_ids_unique(self):
        """Archetype ids are unique."""
        ids = [a.id for a in default_catalog()]
        assert len(ids) == len(set(ids))

    def test_icons(self):
        """Every built-in icon identifier is used."""
        icons = {a.icon for a in default_catalog()}
        assert icons == {"brain", "heart", "scale", "sword", "lightbulb", "book", "star", "target"}

    def test_starter_archetype_has_no_requirements(self):
        """The first archetype is always available."""
        first = default_catalog()[0]
        assert first.id == "thinker"
        assert first.unlock_requirements == []

    def test_fresh_list_each_call(self):
        """Callers get independent lists."""
        first = default_catalog()
        first.clear()
        assert len(default_catalog()) == 8


class TestLoadCatalog:
    """Test loading catalogs from JSON."""

    def test_none_returns_default(self):
        """No path -> built-in catalog."""
        assert load_catalog(None) == default_catalog()

    def test_load_from_file(self, tmp_path):
        """A JSON file round-trips through dump_catalog."""
        path = tmp_path / "catalog.json"
        path.write_bytes(dump_catalog(default_catalog()))
        assert load_catalog(path) == default_catalog()

    def test_hand_written_file(self, tmp_path):
        """A minimal hand-written catalog loads in document order."""
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "rookie",
                        "name": "Rookie",
                        "icon": "star",
                        "color": "#fff",
                        "description": "Just getting started",
                    },
                    {
                        "id": "veteran",
                        "name": "Veteran",
                        "icon": "sword",
                        "color": "#000",
                        "description": "Seen it all",
                        "unlock_requirements": [
                            {"kind": "min_session_count", "description": "50", "count": 50}
                        ],
                    },
                ]
            )
        )
        catalog = load_catalog(path)
        assert [a.id for a in catalog] == ["rookie", "veteran"]
        assert catalog[1].unlock_requirements[0].count == 50

    def test_invalid_document(self):
        """Schema violations raise ValidationError."""
        with pytest.raises(ValidationError):
            parse_catalog('[{"id": "x"}]')

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")
