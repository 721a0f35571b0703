"""
Unit Tests for Directive Resolution
Tests for: directive parsing, per-type generation, aliases, unknown types
"""
import re
import uuid
from datetime import date, datetime

import pytest

from app.modules.mock_engine import directives
from app.modules.mock_engine.directives import (
    DirectiveType,
    lookup_directive_type,
    parse_directive,
    resolve,
    resolve_type,
)


class TestParseDirective:
    """Test recognizing (random:<type>) tokens"""

    def test_parses_type_name(self):
        assert parse_directive("(random:uuid)") == "uuid"

    def test_whole_string_must_be_token(self):
        assert parse_directive("id: (random:uuid)") is None
        assert parse_directive("(random:uuid) ") is None

    def test_non_strings_are_not_directives(self):
        assert parse_directive(42) is None
        assert parse_directive(None) is None
        assert parse_directive(["(random:uuid)"]) is None

    def test_malformed_tokens(self):
        assert parse_directive("(random:)") is None
        assert parse_directive("random:uuid") is None
        assert parse_directive("(rand:uuid)") is None


class TestLookupDirectiveType:
    """Test type-name lookup"""

    def test_every_type_resolves_by_value(self):
        for directive_type in DirectiveType:
            assert lookup_directive_type(directive_type.value) is directive_type

    def test_lookup_is_case_insensitive(self):
        assert lookup_directive_type("UUID") is DirectiveType.UUID
        assert lookup_directive_type("Email") is DirectiveType.EMAIL

    def test_aliases(self):
        assert lookup_directive_type("fullname") is DirectiveType.NAME
        assert lookup_directive_type("integer") is DirectiveType.NUMBER
        assert lookup_directive_type("timestamp") is DirectiveType.DATETIME

    def test_unknown_type(self):
        assert lookup_directive_type("spaceship") is None


class TestResolve:
    """Test value generation for each directive type"""

    @pytest.mark.parametrize("directive_type", list(DirectiveType))
    def test_every_type_generates_a_value(self, directive_type):
        value = resolve(f"(random:{directive_type.value})")

        assert value is not None
        assert value != f"(random:{directive_type.value})"

    def test_uuid_is_valid(self):
        value = resolve("(random:uuid)")

        assert str(uuid.UUID(value)) == value

    def test_email_shape(self):
        assert "@" in resolve("(random:email)")

    def test_number_is_int_in_range(self):
        value = resolve("(random:number)")

        assert isinstance(value, int) and not isinstance(value, bool)
        assert 1 <= value <= 1000

    def test_float_has_two_decimals(self):
        value = resolve("(random:float)")

        assert isinstance(value, float)
        assert round(value, 2) == value

    def test_boolean(self):
        assert isinstance(resolve("(random:boolean)"), bool)

    def test_date_is_iso(self):
        date.fromisoformat(resolve("(random:date)"))

    def test_datetime_is_iso_with_timezone(self):
        parsed = datetime.fromisoformat(resolve("(random:datetime)"))

        assert parsed.tzinfo is not None

    def test_objectid_is_24_hex_chars(self):
        assert re.fullmatch(r"[0-9a-f]{24}", resolve("(random:objectid)"))

    def test_values_vary_between_calls(self):
        values = {resolve("(random:uuid)") for _ in range(10)}

        assert len(values) == 10

    def test_unknown_type_returns_literal(self):
        assert resolve("(random:spaceship)") == "(random:spaceship)"
        assert resolve_type("spaceship", "(random:spaceship)") == "(random:spaceship)"

    def test_plain_values_pass_through(self):
        assert resolve("hello") == "hello"
        assert resolve(7) == 7
        assert resolve(None) is None

    def test_seed_makes_output_reproducible(self):
        directives.seed(1234)
        first = [resolve("(random:name)"), resolve("(random:number)")]
        directives.seed(1234)
        second = [resolve("(random:name)"), resolve("(random:number)")]

        assert first == second
