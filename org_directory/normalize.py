"""
Record normalization: one raw directory record -> one Organization.

Responsibilities:
- alias-based field lookup (first present alias wins)
- delimited list parsing (";" before ",")
- linked sub-record resolution with same-record fallback
- assembly of the fixed Organization shape
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from . import rules
from .models import (
    ContactInfo,
    FundingInfo,
    Location,
    Organization,
    RawRecord,
    ReferenceTable,
    SocialLinks,
    TokenInfo,
)


class _Missing:
    """Marker for a field none of whose aliases is present."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

Fields = Mapping[str, Any]


def get_field(fields: Fields, names: Iterable[str], default: Any = MISSING) -> Any:
    """
    Return the value of the first alias present in ``fields``.

    Presence is strict: an alias holding ``""`` or ``0`` still wins over
    later aliases. ``default`` is returned only when no alias is present.
    """
    for name in names:
        if name in fields:
            return fields[name]
    return default


def _first_truthy(fields: Fields, names: Iterable[str], default: Any = "") -> Any:
    # Linked records are read leniently: an empty alias falls through to the next.
    for name in names:
        value = fields.get(name)
        if value:
            return value
    return default


def _split(value: str) -> List[str]:
    for delimiter in rules.LIST_DELIMITERS:
        if delimiter in value:
            return [part.strip() for part in value.split(delimiter)]
    return [value]


def parse_delimited(value: Any, split_items: bool = True) -> List[Any]:
    """
    Coerce a list-ish field into a flat list.

    With ``split_items`` false, list input is returned as a copy without
    re-splitting its elements.

    >>> parse_delimited("a; b; c")
    ['a', 'b', 'c']
    >>> parse_delimited(["a;b", "c"])
    ['a', 'b', 'c']
    >>> parse_delimited(42)
    [42]
    """
    if not value:
        return []

    if isinstance(value, (list, tuple)):
        if not split_items:
            return list(value)
        flattened: List[Any] = []
        for item in value:
            if isinstance(item, str):
                flattened.extend(_split(item))
            elif isinstance(item, (list, tuple)):
                flattened.extend(item)
            else:
                flattened.append(item)
        return flattened

    if isinstance(value, str):
        return _split(value)

    return [value]


def _is_link(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 0


def _linked_fields(
    fields: Fields,
    link_aliases: Sequence[str],
    collection_keys: Sequence[str],
    references: ReferenceTable,
) -> Any:
    """
    Return the linked record for a sub-record link field.

    Only the first linked id is considered. Returns ``None`` when the field is
    present but the id is not in ``references``, and ``MISSING`` when there is
    no usable link field at all.
    """
    link = get_field(fields, link_aliases)
    if not _is_link(link):
        return MISSING

    record_id = link[0]
    if not isinstance(record_id, str):
        return None
    for key in collection_keys:
        linked = references.get(key, {}).get(record_id)
        if linked is not None:
            return linked
    return None


def _from_linked(linked: Fields, field_aliases: Mapping[str, Sequence[str]]) -> dict:
    return {name: _first_truthy(linked, aliases) for name, aliases in field_aliases.items()}


def _from_record(
    fields: Fields,
    field_aliases: Mapping[str, Sequence[str]],
    defaults: Optional[Mapping[str, Any]] = None,
) -> dict:
    defaults = defaults or {}
    return {
        name: get_field(fields, aliases) or defaults.get(name, "")
        for name, aliases in field_aliases.items()
    }


def _sub_record_source(fields: Fields, references: ReferenceTable, kind: str) -> Any:
    return _linked_fields(fields, rules.LINK_ALIASES[kind], rules.COLLECTION_KEYS[kind], references)


def build_token_info(fields: Fields, references: ReferenceTable) -> Optional[TokenInfo]:
    """Token info is the only sub-record left ``None`` when no link field exists."""
    linked = _sub_record_source(fields, references, "token_information")
    if linked is MISSING:
        return None
    if isinstance(linked, Mapping):
        return TokenInfo(**_from_linked(linked, rules.TOKEN_FIELDS))
    return TokenInfo(**_from_record(fields, rules.TOKEN_FALLBACK_FIELDS, rules.TOKEN_FALLBACK_DEFAULTS))


def build_funding_info(fields: Fields, references: ReferenceTable) -> FundingInfo:
    linked = _sub_record_source(fields, references, "funding_financial_information")
    if isinstance(linked, Mapping):
        return FundingInfo(
            funding_sources=parse_delimited(
                _first_truthy(linked, rules.FUNDING_SOURCES_ALIASES, None), split_items=False
            ),
            revenue=_first_truthy(linked, rules.REVENUE_ALIASES, rules.UNKNOWN),
        )
    return FundingInfo(
        funding_sources=parse_delimited(get_field(fields, rules.FUNDING_SOURCES_ALIASES), split_items=False),
        revenue=get_field(fields, rules.REVENUE_ALIASES) or rules.UNKNOWN,
    )


def build_contact_info(fields: Fields, references: ReferenceTable) -> ContactInfo:
    linked = _sub_record_source(fields, references, "contact_information")
    if isinstance(linked, Mapping):
        return ContactInfo(**_from_linked(linked, rules.CONTACT_FIELDS))
    return ContactInfo(**_from_record(fields, rules.CONTACT_FIELDS))


def build_social_links(fields: Fields, references: ReferenceTable) -> SocialLinks:
    linked = _sub_record_source(fields, references, "links_social_media")
    if isinstance(linked, Mapping):
        return SocialLinks(**_from_linked(linked, rules.LINK_FIELDS))
    return SocialLinks(**_from_record(fields, rules.LINK_FIELDS))


def build_location(fields: Fields, references: ReferenceTable) -> Location:
    linked = _sub_record_source(fields, references, "headquarters_location")
    if isinstance(linked, Mapping):
        return Location(**_from_linked(linked, rules.LOCATION_FIELDS))
    return Location(**_from_record(fields, rules.LOCATION_FIELDS))


def normalize_record(record: RawRecord, references: ReferenceTable) -> Organization:
    fields = record.fields

    scalars = {name: get_field(fields, aliases, None) for name, aliases in rules.SCALAR_ALIASES.items()}
    scalars["id"] = scalars["id"] or record.id
    scalars["name"] = scalars["name"] or rules.UNNAMED_ORGANIZATION

    lists = {name: parse_delimited(get_field(fields, aliases)) for name, aliases in rules.LIST_ALIASES.items()}

    return Organization(
        **scalars,
        **lists,
        headquarters_location=build_location(fields, references),
        funding_financial_information=build_funding_info(fields, references),
        token_information=build_token_info(fields, references),
        links_social_media=build_social_links(fields, references),
        contact_information=build_contact_info(fields, references),
    )


def normalize_records(records: Iterable[RawRecord], references: ReferenceTable) -> List[Organization]:
    return [normalize_record(record, references) for record in records]
