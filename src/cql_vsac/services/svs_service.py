import inspect
import logging
from typing import List, Optional, Union

from lxml import etree

from cql_vsac.models.vsac_models import Code, CodeSystemType, DownloadOptions, ValueSet, VSACAccessor
from cql_vsac.resources.code_systems import get_vsac_code_system
from cql_vsac.services.http_client import VSACHttpClient
from cql_vsac.utils.error_handlers import VSACError

logger = logging.getLogger(__name__)


class SVSValueSetService:
    """Downloads value sets from the VSAC Sharing Value Sets (SVS) API, which returns one XML document."""

    name = "SVS"

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
        version_label = f" version {version}" if version is not None else ""
        logger.debug(f"Getting ValueSet: {oid}{version_label}")

        if vsac_access.kind == "url":
            data = await self.fetch_value_set(api_key, oid, version, vsac_access.template)
        elif vsac_access.kind == "custom":
            data = vsac_access.resolve(oid, version, api_key)
            if inspect.isawaitable(data):
                data = await data
        else:
            raise VSACError(f"Unsupported VSAC accessor: {vsac_access.kind}", "CONFIG_ERROR")

        return self.parse_vsac_xml(data, options or DownloadOptions())

    async def fetch_value_set(self, api_key: str, oid: str, version: Optional[str], vsac_url: str) -> str:
        params = {"id": oid}
        if version is not None:
            params["version"] = version

        response = await self.http.get(vsac_url, api_key, params, "application/xml", oid)
        logger.debug(f"Response length: {len(response.text)} characters")
        return response.text

    def parse_vsac_xml(self, xml_string: Optional[Union[str, bytes]], options: DownloadOptions) -> Optional[ValueSet]:
        """
        Parse a RetrieveValueSetResponse document into a ValueSet.

        A blank or non-XML body gives None: VSAC sometimes answers certain
        errors with an empty body. Otherwise the document must contain the
        ValueSet element, its ID and a ConceptList.
        """
        if xml_string is None or not xml_string.strip():
            logger.warning("Empty SVS response body; no value set recorded")
            return None

        raw = xml_string.encode('utf-8') if isinstance(xml_string, str) else xml_string
        try:
            root = etree.fromstring(raw)
        except etree.XMLSyntaxError as e:
            logger.warning(f"Unparsable SVS response body; no value set recorded: {e}")
            logger.debug(f"Problematic XML: {raw[:1000]!r}")
            return None

        if etree.QName(root).localname == 'RetrieveValueSetResponse':
            retrieve_response = root
        else:
            retrieve_response = root.find('.//{*}RetrieveValueSetResponse')
        if retrieve_response is None:
            raise VSACError("Invalid SVS response structure: no RetrieveValueSetResponse", "PARSE_ERROR")

        value_set = retrieve_response.find('{*}ValueSet')
        if value_set is None:
            raise VSACError("Invalid SVS response structure: no ValueSet", "PARSE_ERROR")

        vs_oid = value_set.get('ID')
        vs_version = value_set.get('version')
        if vs_oid is None:
            raise VSACError("Invalid SVS response structure: ValueSet has no ID", "PARSE_ERROR")

        concept_list = value_set.find('{*}ConceptList')
        if concept_list is None:
            raise VSACError(f"Invalid SVS response structure: no ConceptList in {vs_oid}", "PARSE_ERROR")

        codes: List[Code] = []
        for concept in concept_list.findall('{*}Concept'):
            code = concept.get('code')
            system = concept.get('codeSystem')
            if code is None or system is None:
                raise VSACError(f"Concept in {vs_oid} is missing code or codeSystem", "PARSE_ERROR")
            codes.extend(
                self._concept_codes(code, system, concept.get('codeSystemVersion'), options.svs_code_system_type)
            )

        logger.info(f"Parsed {len(codes)} codes for valueset {vs_oid}")
        return ValueSet(id=vs_oid, version=vs_version, codes=tuple(codes))

    def _concept_codes(
        self,
        code: str,
        system: str,
        version: Optional[str],
        code_system_type: CodeSystemType
    ) -> List[Code]:
        system_oid = f"urn:oid:{system}"
        system_uri = get_vsac_code_system(system)

        if code_system_type == CodeSystemType.OID:
            return [Code(code=code, system=system_oid, version=version)]
        elif code_system_type == CodeSystemType.BOTH:
            codes = []
            if system_uri is not None:
                codes.append(Code(code=code, system=system_uri, version=version))
            codes.append(Code(code=code, system=system_oid, version=version))
            return codes
        return [Code(code=code, system=system_uri or system_oid, version=version)]
