import re
from typing import Optional

from cql_vsac.models.vsac_models import CanonicalKey

# VSAC FHIR canonical URL, optionally followed by |version (http accepted too)
VSAC_FHIR_URL_PATTERN = re.compile(r'https?://cts\.nlm\.nih\.gov/fhir/ValueSet/([^|]+)(\|(.+))?', re.DOTALL)
URN_OID_PATTERN = re.compile(r'urn:oid:(.+)', re.DOTALL)


def extract_oid_and_version(id: Optional[str]) -> CanonicalKey:
    """
    Extract the OID and optional version from a VSAC FHIR URL, urn:oid URN or bare OID.

    Only the URL form can carry a version (after a ``|``). Anything that is not a
    URL or URN is returned unchanged as the OID. ``None`` gives a key with no OID,
    which callers treat as unresolvable.
    """
    if id is None:
        return CanonicalKey(None, None)

    match = VSAC_FHIR_URL_PATTERN.fullmatch(id)
    if match:
        return CanonicalKey(match.group(1), match.group(3))

    match = URN_OID_PATTERN.fullmatch(id)
    if match:
        return CanonicalKey(match.group(1), None)

    return CanonicalKey(id, None)
