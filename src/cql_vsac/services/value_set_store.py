import logging
from typing import Any, Dict, List, Optional

from cql_vsac.models.vsac_models import Code, ValueSet
from cql_vsac.utils.identifiers import extract_oid_and_version

logger = logging.getLogger(__name__)


class ValueSetStore:
    """
    In-memory value sets indexed by oid, then version.

    A value set without a version is stored under the ``None`` version key.
    Entries are only ever replaced whole; storing a new version of an oid
    leaves its other versions in place.
    """

    def __init__(self):
        self.value_sets: Dict[str, Dict[Optional[str], ValueSet]] = {}

    def put(self, value_set: ValueSet) -> None:
        versions = self.value_sets.setdefault(value_set.id, {})
        if value_set.version in versions:
            logger.debug(f"Replacing valueset {value_set.id} version {value_set.version}")
        versions[value_set.version] = value_set

    def get(self, oid: str, version: Optional[str] = None) -> Optional[ValueSet]:
        """Exact (oid, version) lookup; no identifier normalization."""
        return self.value_sets.get(oid, {}).get(version)

    def find(self, id: Optional[str], version: Optional[str] = None) -> List[ValueSet]:
        """
        Return the stored value sets matching an identifier (OID, URN or VSAC FHIR URL).

        If no version is given, a version embedded in the URL is used; if there
        is none of either, every stored version is returned in insertion order.
        """
        oid, embedded_version = extract_oid_and_version(id)
        if version is None and embedded_version is not None:
            version = embedded_version

        versions = self.value_sets.get(oid) if oid is not None else None
        if not versions:
            return []
        return [vs for found_version, vs in versions.items() if version is None or found_version == version]

    def find_one(self, id: Optional[str], version: Optional[str] = None) -> Optional[ValueSet]:
        """
        Return the single best match for an identifier.

        When several versions match, the one with the greatest version string
        wins under plain string comparison (so "2" beats "10"). A missing
        version sorts lowest; on equal versions the later entry wins.
        """
        results = self.find(id, version)
        if not results:
            return None
        if len(results) == 1:
            return results[0]

        best = results[0]
        for candidate in results[1:]:
            if not self._version_greater(best.version, candidate.version):
                best = candidate
        return best

    def expand(self, oid: Optional[str], version: Optional[str] = None) -> List[Code]:
        """Codes of the matching value set with exact duplicates removed, first occurrence kept."""
        value_set = self.find_one(oid, version)
        if value_set is None:
            return []

        seen = set()
        results = []
        for code in value_set.codes:
            if code not in seen:
                seen.add(code)
                results.append(code)
        return results

    def clear(self) -> None:
        self.value_sets.clear()

    def stats(self) -> Dict[str, Any]:
        return {
            "size": len(self),
            "keys": [
                f"{oid}|{version}" if version is not None else oid
                for oid, versions in self.value_sets.items()
                for version in versions
            ]
        }

    def __len__(self) -> int:
        return sum(len(versions) for versions in self.value_sets.values())

    def __contains__(self, key) -> bool:
        oid, version = key
        return self.get(oid, version) is not None

    @staticmethod
    def _version_greater(a: Optional[str], b: Optional[str]) -> bool:
        if a is None:
            return False
        if b is None:
            return True
        return a > b
