import base64

import httpx
import pytest

from cql_vsac.models.vsac_models import Code, CustomResolver, UrlTemplate
from cql_vsac.services.code_service import VSAC_FHIR_URL_TEMPLATE
from cql_vsac.services.fhir_service import FHIRValueSetService
from cql_vsac.services.http_client import VSACHttpClient
from cql_vsac.utils.error_handlers import VSACError

OID = "2.16.840.1.113883.3.464.1003.103.12.1001"
FHIR_URL = UrlTemplate(template=VSAC_FHIR_URL_TEMPLATE)


def paged_handler(fhir_page, total, page_size, version="20240101"):
    all_codes = [f"C{i:04d}" for i in range(total)]

    def handler(request: httpx.Request) -> httpx.Response:
        offset = int(request.url.params["offset"])
        codes = all_codes[offset:offset + page_size]
        return httpx.Response(200, json=fhir_page(OID, version, total, offset, codes))

    return handler, all_codes


@pytest.mark.asyncio
async def test_pages_are_requested_in_order_and_concatenated(mock_client, seen_requests, fhir_page, api_key):
    handler, all_codes = paged_handler(fhir_page, total=250, page_size=100)
    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    value_set = await service.download_value_set(api_key, OID, None, FHIR_URL)

    assert [r.url.params["offset"] for r in seen_requests] == ["0", "100", "200"]
    assert len(value_set.codes) == 250
    assert [c.code for c in value_set.codes] == all_codes
    assert value_set.codes[0] == Code(code="C0000", system="http://snomed.info/sct", version="2023-09")


@pytest.mark.asyncio
async def test_single_page_needs_one_request(mock_client, seen_requests, fhir_page, api_key):
    handler, _ = paged_handler(fhir_page, total=40, page_size=100)
    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    value_set = await service.download_value_set(api_key, OID, None, FHIR_URL)

    assert len(seen_requests) == 1
    assert len(value_set.codes) == 40


@pytest.mark.asyncio
async def test_request_carries_auth_oid_and_version(mock_client, seen_requests, fhir_page, api_key):
    handler, _ = paged_handler(fhir_page, total=1, page_size=100)
    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    await service.download_value_set(api_key, OID, "20240101", FHIR_URL)

    request = seen_requests[0]
    expected = base64.b64encode(f"apikey:{api_key}".encode()).decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.url.host == "cts.nlm.nih.gov"
    assert f"/fhir/ValueSet/{OID}/" in request.url.path
    assert request.url.params["valueSetVersion"] == "20240101"
    assert request.url.params["offset"] == "0"


@pytest.mark.asyncio
async def test_version_parameter_omitted_when_not_requested(mock_client, seen_requests, fhir_page, api_key):
    handler, _ = paged_handler(fhir_page, total=1, page_size=100)
    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    await service.download_value_set(api_key, OID, None, FHIR_URL)

    assert "valueSetVersion" not in seen_requests[0].url.params


@pytest.mark.asyncio
async def test_server_reported_id_and_version_are_used(mock_client, fhir_page, api_key):
    handler, _ = paged_handler(fhir_page, total=2, page_size=100, version="20250505")
    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    value_set = await service.download_value_set(api_key, OID, None, FHIR_URL)

    assert value_set.id == OID
    assert value_set.version == "20250505"


@pytest.mark.asyncio
async def test_response_without_expansion_records_nothing(mock_client, seen_requests, api_key):
    service = FHIRValueSetService(VSACHttpClient(mock_client(
        lambda request: httpx.Response(200, json={"resourceType": "ValueSet", "id": OID})
    )))

    assert await service.download_value_set(api_key, OID, None, FHIR_URL) is None
    assert len(seen_requests) == 1


@pytest.mark.asyncio
async def test_http_error_carries_status(mock_client, api_key):
    service = FHIRValueSetService(VSACHttpClient(mock_client(lambda request: httpx.Response(404))))

    with pytest.raises(VSACError) as exc_info:
        await service.download_value_set(api_key, OID, None, FHIR_URL)

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "VALUESET_NOT_FOUND"


@pytest.mark.asyncio
async def test_failure_on_later_page_fails_whole_download(mock_client, fhir_page, api_key):
    def handler(request):
        if request.url.params["offset"] == "0":
            return httpx.Response(200, json=fhir_page(OID, "1", 3, 0, ["A", "B"]))
        return httpx.Response(503)

    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    with pytest.raises(VSACError) as exc_info:
        await service.download_value_set(api_key, OID, None, FHIR_URL)
    assert exc_info.value.status_code == 503


def truncated_later_pages():
    return [
        {"resourceType": "ValueSet", "id": OID},
        {"resourceType": "ValueSet", "id": OID, "expansion": {"total": 250, "offset": 100, "contains": []}},
        {"resourceType": "ValueSet", "id": OID, "expansion": {"contains": [{"code": "X", "system": "http://loinc.org"}]}},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("later_page", truncated_later_pages())
async def test_later_page_that_cannot_continue_fails_whole_download(mock_client, fhir_page, api_key, later_page):
    def handler(request):
        if request.url.params["offset"] == "0":
            return httpx.Response(200, json=fhir_page(OID, "1", 250, 0, [f"C{i}" for i in range(100)]))
        return httpx.Response(200, json=later_page)

    service = FHIRValueSetService(VSACHttpClient(mock_client(handler)))

    with pytest.raises(VSACError) as exc_info:
        await service.download_value_set(api_key, OID, None, FHIR_URL)
    assert exc_info.value.code == "PARSE_ERROR"


@pytest.mark.asyncio
async def test_empty_first_page_short_of_total_fails(mock_client, fhir_page, api_key):
    service = FHIRValueSetService(VSACHttpClient(mock_client(
        lambda request: httpx.Response(200, json=fhir_page(OID, "1", 5, 0, []))
    )))

    with pytest.raises(VSACError) as exc_info:
        await service.download_value_set(api_key, OID, None, FHIR_URL)
    assert exc_info.value.code == "PARSE_ERROR"


@pytest.mark.asyncio
async def test_unpaged_expansion_is_a_single_page(mock_client, seen_requests, api_key):
    page = {"id": OID, "version": "1", "expansion": {"contains": [{"code": "A", "system": "http://loinc.org"}]}}
    service = FHIRValueSetService(VSACHttpClient(mock_client(lambda request: httpx.Response(200, json=page))))

    value_set = await service.download_value_set(api_key, OID, None, FHIR_URL)

    assert len(seen_requests) == 1
    assert value_set.codes == (Code(code="A", system="http://loinc.org"),)


@pytest.mark.asyncio
async def test_missing_id_is_a_parse_error(mock_client, api_key):
    page = {"expansion": {"total": 1, "offset": 0, "contains": [{"code": "A", "system": "http://loinc.org"}]}}
    service = FHIRValueSetService(VSACHttpClient(mock_client(lambda request: httpx.Response(200, json=page))))

    with pytest.raises(VSACError) as exc_info:
        await service.download_value_set(api_key, OID, None, FHIR_URL)
    assert exc_info.value.code == "PARSE_ERROR"


@pytest.mark.asyncio
async def test_invalid_json_is_a_parse_error(mock_client, api_key):
    service = FHIRValueSetService(VSACHttpClient(mock_client(
        lambda request: httpx.Response(200, text="<html>oops</html>")
    )))

    with pytest.raises(VSACError) as exc_info:
        await service.download_value_set(api_key, OID, None, FHIR_URL)
    assert exc_info.value.code == "PARSE_ERROR"


@pytest.mark.asyncio
async def test_custom_resolver_bypasses_http(fhir_page, api_key):
    calls = []

    async def resolve(oid, version, offset, key):
        calls.append((oid, version, offset, key))
        return fhir_page(oid, "7", 3, offset, ["A", "B", "C"][offset:offset + 2])

    service = FHIRValueSetService()
    value_set = await service.download_value_set(api_key, OID, "7", CustomResolver(resolve=resolve))

    assert calls == [(OID, "7", 0, api_key), (OID, "7", 2, api_key)]
    assert [c.code for c in value_set.codes] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_custom_resolver_may_be_synchronous(fhir_page, api_key):
    service = FHIRValueSetService()
    resolver = CustomResolver(resolve=lambda oid, version, offset, key: fhir_page(oid, "1", 1, 0, ["Z"]))

    value_set = await service.download_value_set(api_key, OID, None, resolver)

    assert value_set.codes == (Code(code="Z", system="http://snomed.info/sct", version="2023-09"),)
