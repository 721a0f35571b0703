"""
Schema templates: parse stored JSON once into a node tree, then walk it to
produce data. Only leaf values change during generation; keys, array
lengths and literal values come through exactly as stored.
"""
import json
import math
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from app.core.exceptions import InvalidSchemaDefinitionError
from app.modules.mock_engine import directives


@dataclass(frozen=True)
class Literal:
    value: Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Directive:
    type_name: str
    raw: str


@dataclass(frozen=True)
class ObjectNode:
    fields: Tuple[Tuple[str, "TemplateNode"], ...]


@dataclass(frozen=True)
class ArrayNode:
    items: Tuple["TemplateNode", ...]


TemplateNode = Union[Literal, Directive, ObjectNode, ArrayNode]

_NODE_TYPES = (Literal, Directive, ObjectNode, ArrayNode)

# Keeps generation well inside the interpreter recursion limit
MAX_DEPTH = 64


def _parse_node(value: Any, location: str, depth: int = 0) -> TemplateNode:
    if depth > MAX_DEPTH:
        raise InvalidSchemaDefinitionError(f"schema nested too deeply at {location}")

    if isinstance(value, str):
        type_name = directives.parse_directive(value)
        if type_name is not None:
            return Directive(type_name=type_name, raw=value)
        return Literal(value)

    # bool is an int subclass; both are literals either way
    if value is None or isinstance(value, (bool, int)):
        return Literal(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise InvalidSchemaDefinitionError(f"non-finite number at {location}")
        return Literal(value)

    if isinstance(value, dict):
        fields = []
        for key, child in value.items():
            if not isinstance(key, str):
                raise InvalidSchemaDefinitionError(f"non-string key {key!r} at {location}")
            fields.append((key, _parse_node(child, f"{location}.{key}", depth + 1)))
        return ObjectNode(tuple(fields))

    if isinstance(value, (list, tuple)):
        return ArrayNode(tuple(
            _parse_node(child, f"{location}[{index}]", depth + 1) for index, child in enumerate(value)
        ))

    raise InvalidSchemaDefinitionError(
        f"unsupported value of type {type(value).__name__} at {location}"
    )


def parse_template(raw: Any) -> TemplateNode:
    """
    Parse a stored schema definition into a template tree.

    A string that looks like a JSON document (starts with ``{`` or ``[``) is
    decoded first, since some clients store the schema as JSON text.
    Raises InvalidSchemaDefinitionError when the value cannot be used.
    """
    if isinstance(raw, _NODE_TYPES):
        return raw

    if isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if text.lstrip().startswith(("{", "[")):
            try:
                raw = json.loads(text)
            except json.JSONDecodeError as e:
                raise InvalidSchemaDefinitionError(f"malformed JSON ({e.msg} at position {e.pos})")
            except RecursionError:
                raise InvalidSchemaDefinitionError("schema nested too deeply")
        else:
            raw = text

    return _parse_node(raw, "$")


def _walk(node: TemplateNode) -> Any:
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Directive):
        return directives.resolve_type(node.type_name, node.raw)
    if isinstance(node, ObjectNode):
        return {key: _walk(child) for key, child in node.fields}
    if isinstance(node, ArrayNode):
        return [_walk(child) for child in node.items]
    raise TypeError(f"Unknown template node {type(node).__name__}")


def generate(template: Any) -> Any:
    """Generate one value from a template (raw JSON or a parsed tree)"""
    return _walk(parse_template(template))


def generate_many(template: Any, count: int) -> List[Any]:
    """
    Generate ``count`` independent values. Negative counts are treated as 0.
    """
    node = parse_template(template)
    return [_walk(node) for _ in range(max(0, count))]
