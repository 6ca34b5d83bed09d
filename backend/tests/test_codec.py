"""Tests for the record <-> document codec."""

from datetime import datetime, timezone

from bson import ObjectId

from app.models.catalog import Container, InstanceType
from app.services.store.codec import from_document, to_document


class TestToDocument:
    def test_none_values_omitted_recursively(self):
        assert to_document({"a": 1, "b": None, "c": {"d": None, "e": "x"}}) == {
            "a": 1,
            "c": {"e": "x"},
        }

    def test_none_kept_inside_lists(self):
        assert to_document({"items": [1, None, {"k": None}]}) == {"items": [1, None, {}]}

    def test_enums_and_tuples(self):
        assert to_document({"type": InstanceType.VIDEO, "ids": ("a", "b")}) == {
            "type": "video",
            "ids": ["a", "b"],
        }

    def test_scalars_pass_through(self):
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        oid = ObjectId()
        assert to_document({"at": when, "_id": oid}) == {"at": when, "_id": oid}

    def test_models_dumped_by_alias(self):
        container = Container(_id="c1", name="Pecahan", **{"short-id": "lp001"})
        doc = to_document(container)

        assert doc["_id"] == "c1"
        assert doc["short-id"] == "lp001"
        assert doc["content-instances"] == []
        assert "instances-summary" not in doc


class TestFromDocument:
    def test_object_ids_become_strings(self):
        oid = ObjectId()
        doc = from_document({"_id": oid, "content-instances": [{"_id": oid, "type": "video"}]})

        assert doc == {
            "_id": str(oid),
            "content-instances": [{"_id": str(oid), "type": "video"}],
        }

    def test_decoded_document_builds_model(self):
        oid = ObjectId()
        container = Container(**from_document({"_id": oid, "name": "Aljabar"}))
        assert container.id == str(oid)
