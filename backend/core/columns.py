"""Protected-attribute column detection.

Column names are matched against an ordered keyword table; the first column in
header order that contains one of an attribute's keywords is used for it.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import ConfigurationError
from .schema import AttributeType

logger = logging.getLogger(__name__)

KeywordTable = List[Tuple[AttributeType, Tuple[str, ...]]]

DEFAULT_KEYWORD_TABLE: KeywordTable = [
    (AttributeType.GENDER, ("gender", "sex")),
    (AttributeType.AGE, ("age",)),
    (AttributeType.RACE_ETHNICITY, ("race", "ethnicity")),
]


def normalize_keyword_table(
    table: Union[Mapping, Sequence[Tuple], None],
) -> KeywordTable:
    """Coerce a user-supplied keyword table into ``(AttributeType, keywords)`` pairs.

    Accepts a mapping or an ordered sequence of pairs. Attribute types may be
    given as enum members or their string values; keywords as a single string
    or an iterable of strings. ``None`` yields the default table.
    """
    if table is None:
        return list(DEFAULT_KEYWORD_TABLE)

    pairs = table.items() if isinstance(table, Mapping) else table
    normalized: KeywordTable = []
    seen = set()
    for entry in pairs:
        try:
            raw_type, raw_keywords = entry
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Keyword table entries must be (attribute_type, keywords) pairs, got {entry!r}"
            ) from None
        try:
            attribute_type = AttributeType(raw_type)
        except ValueError:
            choices = ", ".join(a.value for a in AttributeType)
            raise ConfigurationError(
                f"Unknown attribute type {raw_type!r}. Choose from: {choices}"
            ) from None
        if attribute_type in seen:
            raise ConfigurationError(f"Attribute type {attribute_type.value!r} declared twice")
        if isinstance(raw_keywords, str):
            raw_keywords = (raw_keywords,)
        keywords = tuple(str(k).strip().lower() for k in raw_keywords if str(k).strip())
        if not keywords:
            raise ConfigurationError(f"No keywords given for {attribute_type.value!r}")
        seen.add(attribute_type)
        normalized.append((attribute_type, keywords))
    return normalized


def classify_columns(
    columns: Iterable[str],
    keyword_table: Optional[KeywordTable] = None,
) -> Dict[AttributeType, str]:
    """Map each attribute type to the first header column matching its keywords.

    Attribute types with no matching column are left out of the result.
    """
    table = DEFAULT_KEYWORD_TABLE if keyword_table is None else keyword_table
    header = [str(c) for c in columns]
    lowered = [c.lower() for c in header]

    detected: Dict[AttributeType, str] = {}
    for attribute_type, keywords in table:
        for name, name_lower in zip(header, lowered):
            if any(k in name_lower for k in keywords):
                detected[attribute_type] = name
                logger.debug("Column %r detected as %s", name, attribute_type.value)
                break
    return detected
