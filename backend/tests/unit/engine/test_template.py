"""
Unit Tests for Schema Templates
Tests for: parsing, structure preservation, literal passthrough, list generation
"""
import pytest
from unittest.mock import patch

from app.core.exceptions import InvalidSchemaDefinitionError
from app.modules.mock_engine import template
from app.modules.mock_engine.template import (
    ArrayNode,
    Directive,
    Literal,
    ObjectNode,
    generate,
    generate_many,
    parse_template,
)


NESTED_SCHEMA = {
    "id": "(random:uuid)",
    "profile": {
        "name": "(random:name)",
        "tags": ["(random:string)", "fixed", 3],
        "address": {"street": "(random:address)", "country": "IN"},
    },
    "active": True,
    "score": 9.5,
    "note": None,
}


def _shape(value):
    """Keys and array lengths of a value, with leaves erased"""
    if isinstance(value, dict):
        return {key: _shape(child) for key, child in value.items()}
    if isinstance(value, list):
        return [_shape(child) for child in value]
    return None


class TestParseTemplate:
    """Test building the template tree"""

    def test_object_fields_keep_order(self):
        node = parse_template({"b": 1, "a": "(random:uuid)"})

        assert isinstance(node, ObjectNode)
        assert [key for key, _ in node.fields] == ["b", "a"]
        assert node.fields[0][1] == Literal(1)
        assert node.fields[1][1] == Directive(type_name="uuid", raw="(random:uuid)")

    def test_array_node(self):
        node = parse_template(["x", 1])

        assert node == ArrayNode((Literal("x"), Literal(1)))

    def test_json_text_is_decoded(self):
        node = parse_template('{"id": "(random:uuid)"}')

        assert isinstance(node, ObjectNode)
        assert node.fields[0][0] == "id"

    def test_plain_string_is_a_literal(self):
        assert parse_template("hello") == Literal("hello")

    def test_parsed_tree_is_accepted_as_is(self):
        node = parse_template({"a": 1})

        assert parse_template(node) is node

    def test_malformed_json_text_fails(self):
        with pytest.raises(InvalidSchemaDefinitionError) as exc_info:
            parse_template('{"id": ')

        assert "malformed JSON" in exc_info.value.message

    def test_non_finite_number_fails(self):
        with pytest.raises(InvalidSchemaDefinitionError):
            parse_template({"x": float("nan")})

    def test_unsupported_value_fails(self):
        with pytest.raises(InvalidSchemaDefinitionError):
            parse_template({"x": object()})

    def test_non_string_key_fails(self):
        with pytest.raises(InvalidSchemaDefinitionError):
            parse_template({1: "one"})

    def test_deep_json_text_fails(self):
        deep = "[" * 100000 + "]" * 100000

        with pytest.raises(InvalidSchemaDefinitionError) as exc_info:
            parse_template(deep)

        assert "nested too deeply" in exc_info.value.message

    def test_depth_limit(self):
        nested = "leaf"
        for _ in range(template.MAX_DEPTH):
            nested = {"child": nested}
        assert isinstance(parse_template(nested), ObjectNode)

        with pytest.raises(InvalidSchemaDefinitionError) as exc_info:
            parse_template([nested])

        assert "nested too deeply" in exc_info.value.message


class TestGenerate:
    """Test generating data from templates"""

    def test_structure_is_preserved(self):
        generated = generate(NESTED_SCHEMA)

        assert _shape(generated) == _shape(NESTED_SCHEMA)

    def test_literals_pass_through(self):
        generated = generate(NESTED_SCHEMA)

        assert generated["active"] is True
        assert generated["score"] == 9.5
        assert generated["note"] is None
        assert generated["profile"]["tags"][1:] == ["fixed", 3]
        assert generated["profile"]["address"]["country"] == "IN"

    def test_directives_are_replaced(self):
        generated = generate(NESTED_SCHEMA)

        assert generated["id"] != "(random:uuid)"
        assert generated["profile"]["name"] != "(random:name)"

    def test_unknown_directive_stays_literal(self):
        assert generate({"x": "(random:spaceship)"}) == {"x": "(random:spaceship)"}

    def test_scalar_template(self):
        assert generate(5) == 5

    def test_input_is_not_mutated(self):
        schema = {"id": "(random:uuid)", "items": ["(random:number)"]}
        generate(schema)

        assert schema == {"id": "(random:uuid)", "items": ["(random:number)"]}


class TestGenerateMany:
    """Test list generation"""

    def test_count(self):
        assert len(generate_many({"id": "(random:uuid)"}, 4)) == 4

    def test_items_are_independent(self):
        items = generate_many({"id": "(random:uuid)"}, 5)

        assert len({item["id"] for item in items}) == 5

    def test_zero_and_negative_counts(self):
        assert generate_many({"id": "(random:uuid)"}, 0) == []
        assert generate_many({"id": "(random:uuid)"}, -3) == []

    def test_template_parsed_once(self):
        with patch.object(template, "parse_template", wraps=template.parse_template) as parse:
            generate_many({"id": "(random:uuid)"}, 10)

        assert parse.call_count == 1
