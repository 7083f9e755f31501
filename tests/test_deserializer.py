"""
Tests for compound document deserialization.
"""

import json

import pytest

from drupal_fetch.serializers.base import JSONAPIDeserializer, Resource


def article(resource_id, author_id="u-1", **attributes):
    return {
        "type": "node--article",
        "id": resource_id,
        "attributes": {"title": f"Article {resource_id}", **attributes},
        "relationships": {
            "uid": {
                "data": {"type": "user--user", "id": author_id},
                "links": {"related": {"href": f"https://drupal.test/{resource_id}/uid"}},
            },
        },
    }


AUTHOR = {"type": "user--user", "id": "u-1", "attributes": {"display_name": "Ada"}}


class TestJSONAPIDeserializer:
    """Test cases for the JSON:API deserializer."""

    def setup_method(self):
        self.deserializer = JSONAPIDeserializer()

    @pytest.mark.parametrize("document", [None, {}, "", b""])
    def test_empty_input(self, document):
        assert self.deserializer.deserialize(document) is None

    def test_null_data(self):
        assert self.deserializer.deserialize({"data": None, "meta": {}}) is None

    def test_single_resource(self):
        result = self.deserializer.deserialize({"data": article("a-1"), "included": [AUTHOR]})

        assert isinstance(result, Resource)
        assert result.id == "a-1"
        assert result.type == "node--article"
        assert result.title == "Article a-1"
        assert result["uid"]["display_name"] == "Ada"
        assert result.uid.is_stub is False
        assert result.relationship_links["uid"]["related"]["href"].endswith("/a-1/uid")

    def test_collection_keeps_order(self):
        result = self.deserializer.deserialize(
            {"data": [article("a-2"), article("a-1")], "included": [AUTHOR]}
        )
        assert [item.id for item in result] == ["a-2", "a-1"]

    def test_shared_relationship_is_one_object(self):
        result = self.deserializer.deserialize(
            {"data": [article("a-1"), article("a-2")], "included": [AUTHOR]}
        )
        assert result[0].uid is result[1].uid

    def test_duplicates_are_merged(self):
        partial = {"type": "user--user", "id": "u-1", "attributes": {"mail": "ada@example.com"}}
        result = self.deserializer.deserialize(
            {"data": [article("a-1")], "included": [AUTHOR, partial]}
        )
        author = result[0].uid
        assert author.display_name == "Ada"
        assert author.mail == "ada@example.com"

    def test_missing_target_becomes_stub(self):
        result = self.deserializer.deserialize({"data": article("a-1", author_id="u-9")})
        author = result.uid
        assert author.is_stub is True
        assert author.identifier() == {"type": "user--user", "id": "u-9"}
        assert author.attributes == {}

    def test_relationships_between_primary_resources(self):
        first = article("a-1")
        first["relationships"]["field_related"] = {"data": [{"type": "node--article", "id": "a-2"}]}
        result = self.deserializer.deserialize({"data": [first, article("a-2")]})
        assert result[0].field_related[0] is result[1]

    def test_cycles_are_allowed(self):
        user = dict(AUTHOR, relationships={"favourite": {"data": {"type": "node--article", "id": "a-1"}}})
        result = self.deserializer.deserialize({"data": article("a-1"), "included": [user]})
        assert result.uid.favourite is result

    def test_identifier_meta_is_kept_per_reference(self):
        media = {
            "type": "node--article",
            "id": "a-1",
            "relationships": {
                "field_image": {
                    "data": {"type": "file--file", "id": "f-1", "meta": {"alt": "A cat"}}
                },
                "field_gallery": {
                    "data": [
                        {"type": "file--file", "id": "f-1", "meta": {"alt": "Same cat"}},
                    ]
                },
            },
        }
        result = self.deserializer.deserialize({"data": media})
        assert result.relationship_meta["field_image"] == {"alt": "A cat"}
        assert result.relationship_meta["field_gallery"] == [{"alt": "Same cat"}]
        assert result.field_image is result.field_gallery[0]
        assert result.field_image.meta == {}

    def test_empty_and_null_relationships(self):
        doc = article("a-1")
        doc["relationships"]["field_tags"] = {"data": []}
        doc["relationships"]["field_image"] = {"data": None}
        doc["relationships"]["revision_uid"] = {"links": {"self": {"href": "x"}}}
        result = self.deserializer.deserialize({"data": doc})
        assert result.field_tags == []
        assert result.field_image is None
        assert "revision_uid" not in result

    def test_accepts_json_text(self):
        payload = json.dumps({"data": article("a-1"), "included": [AUTHOR]})
        assert self.deserializer.deserialize(payload).uid.display_name == "Ada"

    def test_rejects_non_documents(self):
        with pytest.raises(TypeError):
            self.deserializer.deserialize([1, 2])


class TestResource:
    """Typed access on deserialized resources."""

    def setup_method(self):
        self.resource = JSONAPIDeserializer().deserialize(
            {"data": article("a-1", path={"alias": "/blog/a-1"}, sticky=False), "included": [AUTHOR]}
        )

    def test_get_typed(self):
        assert self.resource.get_typed("title", str) == "Article a-1"
        assert self.resource.get_typed("title", int) is None
        assert self.resource.get_typed("missing", dict, {}) == {}

    def test_get_and_contains(self):
        assert self.resource.get("sticky") is False
        assert self.resource.get("nope", "fallback") == "fallback"
        assert "uid" in self.resource
        assert "nope" not in self.resource

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            self.resource.nope
        with pytest.raises(KeyError):
            self.resource["nope"]

    def test_equality_by_identity_key(self):
        assert self.resource == Resource("node--article", "a-1")
        assert len({self.resource, Resource("node--article", "a-1")}) == 1

    def test_to_dict_is_flat(self):
        data = self.resource.to_dict()
        assert data["id"] == "a-1"
        assert data["title"] == "Article a-1"
        assert data["path"] == {"alias": "/blog/a-1"}
        assert data["uid"] == {"type": "user--user", "id": "u-1"}

    def test_iteration(self):
        assert list(self.resource) == ["id", "type", "title", "path", "sticky", "uid"]
