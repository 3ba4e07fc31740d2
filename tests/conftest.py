"""
Shared fixtures: httpx clients backed by MockTransport, and builders for
VSAC FHIR expansion pages and SVS XML documents.
"""

import httpx
import pytest

API_KEY = "test-api-key"
SNOMED_OID = "2.16.840.1.113883.6.96"
LOINC_OID = "2.16.840.1.113883.6.1"
UNKNOWN_OID = "9.9.9.9"


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def seen_requests():
    return []


@pytest.fixture
def mock_client(seen_requests):
    """Return a factory for AsyncClients whose requests are recorded and answered by ``handler``."""

    def _make(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            seen_requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(_record))

    return _make


@pytest.fixture
def fhir_page():
    def _build(oid, version, total, offset, codes, system="http://snomed.info/sct"):
        return {
            "resourceType": "ValueSet",
            "id": oid,
            "version": version,
            "expansion": {
                "total": total,
                "offset": offset,
                "contains": [{"code": code, "system": system, "version": "2023-09"} for code in codes]
            }
        }

    return _build


@pytest.fixture
def svs_xml():
    def _build(oid, version, concepts):
        concept_xml = "\n".join(
            f'<ns0:Concept code="{code}" codeSystem="{system}" codeSystemName="X" '
            f'codeSystemVersion="{system_version}" displayName="Concept {code}"/>'
            for code, system, system_version in concepts
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<ns0:RetrieveValueSetResponse xmlns:ns0="urn:ihe:iti:svs:2008">\n'
            f'<ns0:ValueSet ID="{oid}" displayName="Test" version="{version}">\n'
            f'<ns0:ConceptList>\n{concept_xml}\n</ns0:ConceptList>\n'
            '</ns0:ValueSet>\n'
            '</ns0:RetrieveValueSetResponse>'
        )

    return _build
