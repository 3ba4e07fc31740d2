import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# JSON ELM libraries use either spelling for the same collection
VALUE_SET_KEYS = ('valueSets', 'valuesets')


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _members(collection: Any) -> List[Any]:
    if collection is None:
        return []
    if isinstance(collection, Mapping):
        return list(collection.values())
    return list(collection)


def extract_set_of_value_sets_from_library(
    library: Any,
    extract_from_included: bool = True,
    value_sets: Optional[Dict[int, Any]] = None
) -> List[Any]:
    """
    Collect the value set references declared by a CQL library.

    The library may be a JSON ELM style mapping or an object with attributes.
    References are kept as given and de-duplicated by identity only, so two
    declarations of the same OID in different libraries are both returned.
    Included libraries are searched recursively when requested.

    Args:
        library: Library exposing ``valueSets``/``valuesets`` and optional ``includes``
        extract_from_included: Also walk the values of ``includes``
        value_sets: Accumulator shared across the recursion (id -> reference)

    Returns:
        The references in the order they were first found
    """
    if value_sets is None:
        value_sets = {}

    collections = [_get(library, key) for key in VALUE_SET_KEYS]
    if all(collection is None for collection in collections):
        return list(value_sets.values())

    for collection in collections:
        for reference in _members(collection):
            value_sets.setdefault(id(reference), reference)
    logger.debug(f"Collected {len(value_sets)} valueset references so far")

    if extract_from_included:
        for included in _members(_get(library, 'includes')):
            extract_set_of_value_sets_from_library(included, extract_from_included, value_sets)

    return list(value_sets.values())


def reference_id_and_version(reference: Any) -> Tuple[Optional[str], Optional[str]]:
    """Read the identifier and optional version from a string, mapping or object reference."""
    if isinstance(reference, str):
        return reference, None
    return _get(reference, 'id'), _get(reference, 'version')
