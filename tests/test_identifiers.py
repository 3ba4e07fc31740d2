import pytest

from cql_vsac.models.vsac_models import CanonicalKey
from cql_vsac.utils.identifiers import extract_oid_and_version

OID = "2.16.840.1.113883.3.464.1003.103.12.1001"


def test_bare_oid_is_returned_as_is():
    assert extract_oid_and_version(OID) == (OID, None)


def test_urn_oid():
    assert extract_oid_and_version(f"urn:oid:{OID}") == (OID, None)


def test_fhir_url_without_version():
    assert extract_oid_and_version(f"https://cts.nlm.nih.gov/fhir/ValueSet/{OID}") == (OID, None)


def test_fhir_url_with_version():
    key = extract_oid_and_version("https://cts.nlm.nih.gov/fhir/ValueSet/1.2.3|20210101")
    assert key == CanonicalKey("1.2.3", "20210101")
    assert key.oid == "1.2.3"
    assert key.version == "20210101"


def test_http_fhir_url_is_accepted():
    assert extract_oid_and_version("http://cts.nlm.nih.gov/fhir/ValueSet/1.2.3|v1") == ("1.2.3", "v1")


def test_version_is_everything_after_first_pipe():
    url = "https://cts.nlm.nih.gov/fhir/ValueSet/1.2.3|eCQM Update 2024-05-02|x"
    assert extract_oid_and_version(url) == ("1.2.3", "eCQM Update 2024-05-02|x")


def test_none_is_unresolvable():
    key = extract_oid_and_version(None)
    assert key.oid is None
    assert key.version is None


@pytest.mark.parametrize("identifier", [
    "",
    "not an oid",
    "https://example.org/fhir/ValueSet/1.2.3|1",
    "https://cts.nlm.nih.gov/fhir/ValueSet/1.2.3|",
    "urn:oid:",
])
def test_unrecognised_forms_fall_back_to_bare_oid(identifier):
    assert extract_oid_and_version(identifier) == (identifier, None)
