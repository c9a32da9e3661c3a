"""Tests for _id normalization of query documents."""

from bson import ObjectId

from docstore.db.ids import is_object_id_string, new_string_id, transform_id_to_object_id

HEX_ID = "5f2b7c9e8d1a4b3c2e1f0a9b"


class TestIsObjectIdString:
    def test_accepts_24_hex_chars(self):
        assert is_object_id_string(HEX_ID) is True

    def test_accepts_uppercase_hex(self):
        assert is_object_id_string(HEX_ID.upper()) is True

    def test_rejects_wrong_length(self):
        assert is_object_id_string(HEX_ID[:-1]) is False

    def test_rejects_non_hex(self):
        assert is_object_id_string("zz2b7c9e8d1a4b3c2e1f0a9b") is False

    def test_rejects_non_strings(self):
        assert is_object_id_string(ObjectId(HEX_ID)) is False
        assert is_object_id_string(None) is False


class TestTransformIdToObjectId:
    def test_converts_top_level_id(self):
        result = transform_id_to_object_id({"_id": HEX_ID})
        assert result == {"_id": ObjectId(HEX_ID)}

    def test_leaves_other_keys_alone(self):
        result = transform_id_to_object_id({"_id": HEX_ID, "prev_slide_id": HEX_ID, "batch": "b1"})
        assert result["prev_slide_id"] == HEX_ID
        assert result["batch"] == "b1"

    def test_leaves_invalid_id_strings(self):
        result = transform_id_to_object_id({"_id": "not-an-object-id"})
        assert result == {"_id": "not-an-object-id"}

    def test_converts_inside_operator_expression(self):
        other = "5f2b7c9e8d1a4b3c2e1f0a9c"
        result = transform_id_to_object_id({"_id": {"$in": [HEX_ID, other]}})
        assert result == {"_id": {"$in": [ObjectId(HEX_ID), ObjectId(other)]}}

    def test_converts_inside_logical_operators(self):
        result = transform_id_to_object_id({"$or": [{"_id": HEX_ID}, {"name": "x"}]})
        assert result == {"$or": [{"_id": ObjectId(HEX_ID)}, {"name": "x"}]}

    def test_does_not_mutate_input(self):
        query = {"_id": HEX_ID}
        transform_id_to_object_id(query)
        assert query == {"_id": HEX_ID}

    def test_is_idempotent(self):
        once = transform_id_to_object_id({"_id": {"$ne": HEX_ID}})
        twice = transform_id_to_object_id(once)
        assert once == twice

    def test_none_becomes_empty_query(self):
        assert transform_id_to_object_id(None) == {}

    def test_empty_query_stays_empty(self):
        assert transform_id_to_object_id({}) == {}


class TestNewStringId:
    def test_is_hex_string(self):
        value = new_string_id()
        assert isinstance(value, str)
        assert is_object_id_string(value)

    def test_is_unique(self):
        assert new_string_id() != new_string_id()
