"""Card catalog: the immutable deck every match is dealt from."""

import enum
import json
import math
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from duel.errors import CatalogError


class Direction(enum.Enum):
    MAXIMIZE = 'max'
    MINIMIZE = 'min'


_DIRECTION_ALIASES = {
    'max': Direction.MAXIMIZE,
    'maximize': Direction.MAXIMIZE,
    'min': Direction.MINIMIZE,
    'minimize': Direction.MINIMIZE,
}


@dataclass(frozen=True)
class AttributeRule:
    name: str
    direction: Direction
    label: Optional[str] = None


@dataclass(frozen=True)
class Card:
    id: str
    attrs: Mapping[str, Real]
    # Remaining catalog fields (name, image, ...) passed through to clients
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data['id'] = self.id
        data['attrs'] = dict(self.attrs)
        return data


@dataclass(frozen=True)
class Catalog:
    cards: Tuple[Card, ...]
    attributes: Mapping[str, AttributeRule]

    def __len__(self) -> int:
        return len(self.cards)

    def rule(self, attribute: str) -> Optional[AttributeRule]:
        return self.attributes.get(attribute)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def parse_catalog(raw: Any, path: Optional[str] = None) -> Catalog:
    """Validate decoded catalog JSON and build an immutable Catalog."""
    if not isinstance(raw, dict):
        raise CatalogError('catalog must be a JSON object', path)

    raw_attrs = raw.get('attributes')
    if not isinstance(raw_attrs, dict) or not raw_attrs:
        raise CatalogError("'attributes' must be a non-empty object", path)
    attributes = {}
    for name, options in raw_attrs.items():
        if not isinstance(options, dict):
            raise CatalogError(f"attribute {name!r} must be an object", path)
        direction = _DIRECTION_ALIASES.get(str(options.get('direction', '')).lower())
        if direction is None:
            raise CatalogError(f"attribute {name!r} has invalid direction {options.get('direction')!r}", path)
        attributes[name] = AttributeRule(name=name, direction=direction, label=options.get('label'))

    raw_cards = raw.get('cards')
    if not isinstance(raw_cards, list) or len(raw_cards) < 2:
        raise CatalogError("'cards' must be a list of at least two cards", path)
    cards = []
    seen_ids = set()
    for index, entry in enumerate(raw_cards):
        if not isinstance(entry, dict):
            raise CatalogError(f"card #{index} must be an object", path)
        card_id = entry.get('id')
        if card_id is None or str(card_id) in seen_ids:
            raise CatalogError(f"card #{index} has a missing or duplicate id", path)
        card_id = str(card_id)
        seen_ids.add(card_id)
        values = entry.get('attrs')
        if not isinstance(values, dict):
            raise CatalogError(f"card {card_id!r} has no 'attrs' object", path)
        for name in attributes:
            if not _is_number(values.get(name)):
                raise CatalogError(f"card {card_id!r} attribute {name!r} must be a finite number", path)
        extra = {k: v for k, v in entry.items() if k not in ('id', 'attrs')}
        cards.append(Card(
            id=card_id,
            attrs=MappingProxyType({name: values[name] for name in attributes}),
            extra=MappingProxyType(extra),
        ))

    return Catalog(cards=tuple(cards), attributes=MappingProxyType(attributes))


def load_catalog(path: str) -> Catalog:
    """Read and validate the catalog file at ``path``."""
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            raw = json.load(fh)
    except OSError as exc:
        raise CatalogError(f'cannot read catalog ({exc.strerror or exc})', path) from exc
    except ValueError as exc:
        raise CatalogError(f'invalid JSON ({exc})', path) from exc
    return parse_catalog(raw, path)
