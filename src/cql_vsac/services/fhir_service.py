import inspect
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from cql_vsac.models.vsac_models import Code, DownloadOptions, ValueSet, VSACAccessor
from cql_vsac.services.http_client import VSACHttpClient
from cql_vsac.utils.error_handlers import VSACError

logger = logging.getLogger(__name__)


class FHIRValueSetService:
    """Downloads value set expansions from the VSAC FHIR ``$expand`` operation, following pagination."""

    name = "FHIR"

    def __init__(self, http: Optional[VSACHttpClient] = None):
        self.http = http or VSACHttpClient()

    async def download_value_set(
        self,
        api_key: str,
        oid: str,
        version: Optional[str],
        vsac_access: VSACAccessor,
        options: Optional[DownloadOptions] = None
    ) -> Optional[ValueSet]:
        """
        Download every page of a value set expansion and combine them into one ValueSet.

        The id and version are taken from the server's response, which may
        differ from what was requested. Returns None when the server sends
        no expansion.
        """
        pages = await self.get_value_set_pages(api_key, oid, version, vsac_access)
        if not pages:
            logger.info(f"No expansion returned for valueset {oid}")
            return None

        value_set_id = pages[0].get('id')
        if value_set_id is None:
            raise VSACError(f"FHIR expansion for {oid} has no id", "PARSE_ERROR")

        codes = []
        for page in pages:
            for concept in page['expansion'].get('contains') or []:
                codes.append(self._to_code(concept, oid))

        value_set = ValueSet(id=value_set_id, version=pages[0].get('version'), codes=tuple(codes))
        logger.info(f"Downloaded {len(codes)} codes for valueset {value_set.id} in {len(pages)} page(s)")
        return value_set

    async def get_value_set_pages(
        self,
        api_key: str,
        oid: str,
        version: Optional[str],
        vsac_access: VSACAccessor
    ) -> List[Dict[str, Any]]:
        """
        Request pages until the expansion's total is covered. Each offset depends on the page before it.

        Only the first response may come back without an expansion, which
        gives no pages. Once paging has started, a page that cannot continue
        the expansion is a PARSE_ERROR so a truncated value set is never returned.
        """
        pages = []
        offset = 0
        while True:
            page = await self.get_value_set(api_key, oid, version, vsac_access, offset)
            if not isinstance(page, dict) or page.get('expansion') is None:
                if pages:
                    raise VSACError(f"Expansion of {oid} ended without an expansion at offset {offset}", "PARSE_ERROR")
                break
            pages.append(page)

            expansion = page['expansion']
            total = expansion.get('total')
            page_offset = expansion.get('offset')
            contains = expansion.get('contains')
            if total is None or page_offset is None or contains is None:
                if len(pages) > 1:
                    raise VSACError(
                        f"Expansion page of {oid} at offset {offset} has no total, offset or contains",
                        "PARSE_ERROR"
                    )
                # Unpaged expansion
                break
            if total <= page_offset + len(contains):
                break
            if not contains:
                raise VSACError(
                    f"Empty page for valueset {oid} at offset {offset} before total {total} was reached",
                    "PARSE_ERROR"
                )
            offset += len(contains)

        return pages

    async def get_value_set(
        self,
        api_key: str,
        oid: str,
        version: Optional[str],
        vsac_access: VSACAccessor,
        offset: int = 0
    ) -> Any:
        version_label = f" version {version}" if version is not None else ""
        logger.debug(f"Getting ValueSet: {oid}{version_label} (offset: {offset})")

        if vsac_access.kind == "url":
            return await self.fetch_value_set(api_key, oid, version, vsac_access.template, offset)
        elif vsac_access.kind == "custom":
            result = vsac_access.resolve(oid, version, offset, api_key)
            if inspect.isawaitable(result):
                result = await result
            return result
        raise VSACError(f"Unsupported VSAC accessor: {vsac_access.kind}", "CONFIG_ERROR")

    async def fetch_value_set(
        self,
        api_key: str,
        oid: str,
        version: Optional[str],
        vsac_url: str,
        offset: int = 0
    ) -> Dict[str, Any]:
        params = {"offset": str(offset)}
        if version is not None:
            params["valueSetVersion"] = version

        url = vsac_url.replace('{{oid}}', oid)
        response = await self.http.get(url, api_key, params, "application/fhir+json", oid)

        try:
            return response.json()
        except ValueError as error:
            raise VSACError(f"Invalid JSON response from VSAC for {oid}: {error}", "PARSE_ERROR") from error

    def _to_code(self, concept: Dict[str, Any], oid: str) -> Code:
        try:
            return Code(code=concept['code'], system=concept['system'], version=concept.get('version'))
        except (KeyError, TypeError, ValidationError) as error:
            raise VSACError(f"Malformed concept in expansion of {oid}: {concept!r}", "PARSE_ERROR") from error
