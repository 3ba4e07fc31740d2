import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

import httpx

from cql_vsac.models.vsac_models import (
    CanonicalKey,
    Code,
    DownloadOptions,
    UrlTemplate,
    ValueSet,
    VSACAccessor,
)
from cql_vsac.services.fhir_service import FHIRValueSetService
from cql_vsac.services.http_client import VSACHttpClient
from cql_vsac.services.svs_service import SVSValueSetService
from cql_vsac.services.value_set_store import ValueSetStore
from cql_vsac.utils.error_handlers import MissingApiKeyError, ValueSetDownloadError, ValueSetDownloadErrors
from cql_vsac.utils.extractors import extract_set_of_value_sets_from_library, reference_id_and_version
from cql_vsac.utils.identifiers import extract_oid_and_version

logger = logging.getLogger(__name__)

VSAC_SVS_URL_TEMPLATE = 'https://vsac.nlm.nih.gov/vsac/svs/RetrieveValueSet'
VSAC_FHIR_URL_TEMPLATE = 'https://cts.nlm.nih.gov/fhir/ValueSet/{{oid}}/$expand'


def _as_accessor(access: Union[str, VSACAccessor]) -> VSACAccessor:
    if isinstance(access, str):
        return UrlTemplate(template=access)
    return access


class CodeService:
    """
    Code service for a CQL engine, backed by the NLM Value Set Authority Center.

    Value sets are downloaded on demand with ``ensure_value_sets`` and kept in
    an in-memory store; the ``find_*`` and ``expand_value_set`` lookups never
    touch the network.

    Args:
        use_default_url: Use the public VSAC endpoints and ignore the URL arguments
        use_fhir: Use the paginated FHIR $expand API instead of SVS
        vsac_svs_url: SVS URL or accessor, used when use_default_url is False
        vsac_fhir_url: FHIR URL template (with ``{{oid}}``) or accessor, used when use_default_url is False
        api_key: UMLS API key used when a call does not pass one
        store: Store to populate; a new one is created if omitted
        client: httpx client shared by all requests
        timeout: Per-request timeout in seconds when no client is given; None waits indefinitely
    """

    def __init__(
        self,
        use_default_url: bool = True,
        use_fhir: bool = False,
        vsac_svs_url: Union[str, VSACAccessor] = VSAC_SVS_URL_TEMPLATE,
        vsac_fhir_url: Union[str, VSACAccessor] = VSAC_FHIR_URL_TEMPLATE,
        api_key: Optional[str] = None,
        store: Optional[ValueSetStore] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None
    ):
        http = VSACHttpClient(client, timeout)
        self.api = FHIRValueSetService(http) if use_fhir else SVSValueSetService(http)

        if use_default_url:
            access = VSAC_FHIR_URL_TEMPLATE if use_fhir else VSAC_SVS_URL_TEMPLATE
        else:
            access = vsac_fhir_url if use_fhir else vsac_svs_url
        self.vsac_access = _as_accessor(access)

        self.api_key = api_key
        self.store = store if store is not None else ValueSetStore()

    @property
    def value_sets(self) -> Dict[str, Dict[Optional[str], ValueSet]]:
        return self.store.value_sets

    async def ensure_value_sets(
        self,
        value_set_list: Iterable[Any] = (),
        api_key: Optional[str] = None,
        options: Optional[DownloadOptions] = None
    ) -> None:
        """
        Make sure every referenced value set has a local definition, downloading the missing ones.

        References may be identifier strings, ``ValueSetReference`` objects, or
        mappings/objects with ``id`` and optional ``version``. All downloads run
        concurrently. Successful downloads are stored even if others fail;
        the failures are then raised together as ``ValueSetDownloadErrors``.

        Raises:
            MissingApiKeyError: Something needs downloading and no API key is available
            ValueSetDownloadErrors: One or more downloads failed
        """
        options = options or DownloadOptions()

        # First, filter out the value sets we already have
        missing = []
        for reference in value_set_list:
            ref_id, ref_version = reference_id_and_version(reference)
            if ref_id is None:
                logger.warning(f"Skipping valueset reference without an id: {reference!r}")
                continue
            if self.find_value_set(ref_id, ref_version) is None:
                missing.append((ref_id, ref_version))

        if not missing:
            return

        api_key = (api_key or self.api_key or "").strip()
        if not api_key:
            raise MissingApiKeyError()

        keys: List[CanonicalKey] = []
        for ref_id, version in missing:
            oid, embedded_version = extract_oid_and_version(ref_id)
            if version is None and embedded_version is not None:
                version = embedded_version
            key = CanonicalKey(oid, version)
            if key not in self.store and key not in keys:
                keys.append(key)

        if not keys:
            return

        logger.info(f"Downloading {len(keys)} valueset(s) from VSAC using {self.api.name}")

        results = await asyncio.gather(*(self._download(api_key, key, options) for key in keys))
        errors = [result for result in results if result is not None]

        logger.info(f"Downloaded {len(keys) - len(errors)} of {len(keys)} valueset(s)")
        if errors:
            raise ValueSetDownloadErrors(errors)

    async def ensure_value_sets_in_library(
        self,
        library: Any,
        check_included: bool = True,
        api_key: Optional[str] = None,
        options: Optional[DownloadOptions] = None
    ) -> None:
        """Download any value sets referenced by a CQL library (and, optionally, its includes) that are not stored yet."""
        value_sets = extract_set_of_value_sets_from_library(library, check_included)
        await self.ensure_value_sets(value_sets, api_key, options)

    async def _download(
        self,
        api_key: str,
        key: CanonicalKey,
        options: DownloadOptions
    ) -> Optional[ValueSetDownloadError]:
        try:
            value_set = await self.api.download_value_set(api_key, key.oid, key.version, self.vsac_access, options)
        except Exception as error:
            download_error = ValueSetDownloadError(key.oid, key.version)
            download_error.__cause__ = error
            logger.error(f"{download_error}: {error}")
            return download_error

        if value_set is not None:
            self.store.put(value_set)
        return None

    def find_value_sets_by_oid(self, oid: str) -> List[ValueSet]:
        """Kept for engines that still call it; same as ``find_value_sets(oid)``."""
        return self.find_value_sets(oid)

    def find_value_sets(self, id: str, version: Optional[str] = None) -> List[ValueSet]:
        return self.store.find(id, version)

    def find_value_set(self, id: str, version: Optional[str] = None) -> Optional[ValueSet]:
        return self.store.find_one(id, version)

    def expand_value_set(self, oid: str, version: Optional[str] = None) -> List[Code]:
        return self.store.expand(oid, version)

    def get_cache_stats(self) -> Dict[str, Any]:
        return self.store.stats()

    def clear_cache(self):
        self.store.clear()
        logger.info("VSAC cache cleared")
