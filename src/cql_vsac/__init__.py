"""
VSAC-backed code service for CQL execution.

Usage:
    from cql_vsac import CodeService

    service = CodeService(use_fhir=True, api_key=api_key)
    await service.ensure_value_sets_in_library(library)
    codes = service.expand_value_set("2.16.840.1.113883.3.464.1003.103.12.1001")
"""

from cql_vsac.models.vsac_models import (
    CanonicalKey,
    Code,
    CodeSystemType,
    CustomResolver,
    DownloadOptions,
    UrlTemplate,
    ValueSet,
    ValueSetReference,
)
from cql_vsac.services.code_service import CodeService, VSAC_FHIR_URL_TEMPLATE, VSAC_SVS_URL_TEMPLATE
from cql_vsac.services.value_set_store import ValueSetStore
from cql_vsac.utils.error_handlers import (
    MissingApiKeyError,
    ValueSetDownloadError,
    ValueSetDownloadErrors,
    VSACError,
)
from cql_vsac.utils.extractors import extract_set_of_value_sets_from_library
from cql_vsac.utils.identifiers import extract_oid_and_version

__all__ = [
    # Service
    "CodeService",
    "ValueSetStore",
    "VSAC_FHIR_URL_TEMPLATE",
    "VSAC_SVS_URL_TEMPLATE",
    # Models
    "CanonicalKey",
    "Code",
    "CodeSystemType",
    "CustomResolver",
    "DownloadOptions",
    "UrlTemplate",
    "ValueSet",
    "ValueSetReference",
    # Errors
    "MissingApiKeyError",
    "ValueSetDownloadError",
    "ValueSetDownloadErrors",
    "VSACError",
    # Helpers
    "extract_oid_and_version",
    "extract_set_of_value_sets_from_library",
]
