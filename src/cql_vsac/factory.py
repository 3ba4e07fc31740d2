from typing import Optional

import httpx

from cql_vsac.config.settings import Settings, get_settings
from cql_vsac.services.code_service import CodeService


def create_code_service(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None
) -> CodeService:
    """Build a CodeService from environment/.env configuration."""
    settings = settings or get_settings()
    return CodeService(
        use_default_url=settings.vsac_use_default_url,
        use_fhir=settings.vsac_use_fhir,
        vsac_svs_url=settings.vsac_svs_url,
        vsac_fhir_url=settings.vsac_fhir_url,
        api_key=settings.umls_api_key,
        client=client,
        timeout=settings.vsac_request_timeout
    )
