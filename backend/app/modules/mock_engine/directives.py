"""
Directive resolution: ``(random:<type>)`` tokens -> generated scalars.

Every directive type is a member of ``DirectiveType`` and has exactly one
generator; unknown type names resolve to the literal token so a typo in a
schema degrades to text instead of failing the response.
"""
import re
from datetime import timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from faker import Faker

from app.core.config import settings


DIRECTIVE_PATTERN = re.compile(r"^\(random:(\w+)\)$")


class DirectiveType(str, Enum):
    UUID = "uuid"
    STRING = "string"
    NAME = "name"
    EMAIL = "email"
    NUMBER = "number"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    URL = "url"
    IMAGE = "image"
    COMPANY = "company"
    ADDRESS = "address"
    PHONE = "phone"
    PARAGRAPH = "paragraph"
    SENTENCES = "sentences"
    OBJECT_ID = "objectid"


# Alternate spellings accepted in schemas
ALIASES: Dict[str, DirectiveType] = {
    "fullname": DirectiveType.NAME,
    "integer": DirectiveType.NUMBER,
    "timestamp": DirectiveType.DATETIME,
    "id": DirectiveType.UUID,
}


_faker = Faker(settings.MOCK_FAKER_LOCALE)
if settings.MOCK_FAKER_SEED is not None:
    _faker.seed_instance(settings.MOCK_FAKER_SEED)


def seed(value: int) -> None:
    """Make subsequent generated values reproducible"""
    _faker.seed_instance(value)


def _sentences(fake: Faker) -> str:
    return " ".join(fake.sentences(nb=fake.random_int(min=2, max=6)))


_GENERATORS: Dict[DirectiveType, Callable[[Faker], Any]] = {
    DirectiveType.UUID: lambda fake: fake.uuid4(),
    DirectiveType.STRING: lambda fake: fake.word(),
    DirectiveType.NAME: lambda fake: fake.name(),
    DirectiveType.EMAIL: lambda fake: fake.email(),
    DirectiveType.NUMBER: lambda fake: fake.random_int(min=1, max=1000),
    DirectiveType.FLOAT: lambda fake: fake.pyfloat(right_digits=2, min_value=1, max_value=1000),
    DirectiveType.BOOLEAN: lambda fake: fake.pybool(),
    DirectiveType.DATE: lambda fake: fake.date_between(start_date="-30d", end_date="today").isoformat(),
    DirectiveType.DATETIME: lambda fake: fake.date_time_between(
        start_date="-1d", end_date="now", tzinfo=timezone.utc
    ).isoformat(),
    DirectiveType.URL: lambda fake: fake.url(),
    DirectiveType.IMAGE: lambda fake: fake.image_url(),
    DirectiveType.COMPANY: lambda fake: fake.company(),
    DirectiveType.ADDRESS: lambda fake: fake.street_address(),
    DirectiveType.PHONE: lambda fake: fake.phone_number(),
    DirectiveType.PARAGRAPH: lambda fake: fake.paragraph(),
    DirectiveType.SENTENCES: _sentences,
    DirectiveType.OBJECT_ID: lambda fake: fake.hexify(text="^" * 24),
}

_missing = set(DirectiveType) - set(_GENERATORS)
if _missing:
    raise RuntimeError(f"Directive types without a generator: {sorted(m.value for m in _missing)}")


def lookup_directive_type(name: str) -> Optional[DirectiveType]:
    """Map a type name (case-insensitive, aliases included) to its DirectiveType"""
    key = name.lower()
    if key in ALIASES:
        return ALIASES[key]
    try:
        return DirectiveType(key)
    except ValueError:
        return None


def parse_directive(value: Any) -> Optional[str]:
    """Return the type name inside a directive token, or None for anything else"""
    if not isinstance(value, str):
        return None
    match = DIRECTIVE_PATTERN.match(value)
    return match.group(1) if match else None


def resolve_type(type_name: str, literal: str) -> Any:
    """Generate a value for ``type_name``; unknown names give back ``literal``"""
    directive_type = lookup_directive_type(type_name)
    if directive_type is None:
        return literal
    return _GENERATORS[directive_type](_faker)


def resolve(value: Any) -> Any:
    """
    Resolve a single directive token.

    Strings that are not directives, and non-strings, are returned unchanged.
    """
    type_name = parse_directive(value)
    if type_name is None:
        return value
    return resolve_type(type_name, value)
