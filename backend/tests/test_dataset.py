import json

import pytest

from sunshine.config import settings
from sunshine.errors import DatasetError, StartupFatal
from sunshine.services.dataset_service import load_departments, parse_departments


class TestParseDepartments:
    def test_builds_departments_with_slugs(self, departments):
        fire = departments["Fire Department"]
        assert fire.name == "Fire Department"
        assert fire.name_slug == "fire-department"
        assert fire.email == "fire@x.gov"
        assert fire.contact_name == "Records Unit"

    def test_missing_attributes_default_to_empty(self, departments):
        library = departments["Public Library"]
        assert library.contact_name == ""
        assert library.notes == ""
        assert library.url == ""

    def test_null_attributes_become_empty(self, departments):
        assert departments["Ethics Commission"].email == ""

    def test_unknown_keys_ignored(self):
        result = parse_departments(json.dumps({"Fire": {"email": "f@x.gov", "phone": "555"}}))
        assert result["Fire"].email == "f@x.gov"

    def test_colliding_names_get_unique_slugs(self):
        result = parse_departments(json.dumps({"A/B": {}, "A B": {}}))
        assert {d.name_slug for d in result.values()} == {"a-b", "a-b-2"}

    def test_preserves_document_order(self):
        result = parse_departments(json.dumps({"Zoo": {}, "Airport": {}}))
        assert list(result) == ["Zoo", "Airport"]

    def test_accepts_bytes(self):
        result = parse_departments(b'{"Fire": {"email": "f@x.gov"}}')
        assert result["Fire"].name_slug == "fire"

    @pytest.mark.parametrize("payload", ["not json", "[]", '{"Fire": "f@x.gov"}', '{"Fire": {"email": 5}}'])
    def test_malformed_documents_rejected(self, payload):
        with pytest.raises(DatasetError):
            parse_departments(payload)

    def test_empty_name_rejected(self):
        with pytest.raises(DatasetError, match="empty"):
            parse_departments('{"": {}}')

    def test_whitespace_name_accepted(self):
        result = parse_departments('{" ": {"email": "blank@x.gov"}}')
        assert result[" "].name_slug == "-"


class TestLoadDepartments:
    def test_loads_file(self, dataset_file):
        result = load_departments(dataset_file)
        assert "Police Department" in result

    def test_missing_file_is_startup_fatal(self, tmp_path):
        with pytest.raises(StartupFatal):
            load_departments(tmp_path / "missing.json")

    def test_bundled_dataset_loads(self):
        result = load_departments(settings.dataset_path)
        assert len(result) > 0
        slugs = [d.name_slug for d in result.values()]
        assert len(slugs) == len(set(slugs))
