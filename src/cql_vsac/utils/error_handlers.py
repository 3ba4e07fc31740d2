import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class VSACError(Exception):
    """Custom exception for VSAC-related errors."""

    def __init__(self, message: str, code: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class MissingApiKeyError(VSACError):
    """Raised before any download when no UMLS API key is available."""

    def __init__(self, message: str = "Failed to download value sets since UMLS_API_KEY is not set."):
        super().__init__(message, "AUTH_REQUIRED")


class ValueSetDownloadError(VSACError):
    """A single (oid, version) download that failed. The underlying error is chained as ``__cause__``."""

    def __init__(self, oid: str, version: Optional[str] = None):
        label = f"{oid} version {version}" if version is not None else oid
        super().__init__(f"Error downloading valueset: {label}", "DOWNLOAD_FAILED")
        self.oid = oid
        self.version = version


class ValueSetDownloadErrors(VSACError):
    """One or more downloads in a batch failed; successful ones were still stored."""

    def __init__(self, errors: List[ValueSetDownloadError]):
        summary = "; ".join(str(error) for error in errors)
        super().__init__(f"{len(errors)} value set download(s) failed: {summary}", "DOWNLOAD_ERRORS")
        self.errors = errors


def handle_vsac_error(response, value_set_id: str):
    """Raise a VSACError describing a non-success VSAC response."""
    status = response.status_code
    logger.error(f"VSAC Error for {value_set_id}: HTTP {status}")

    if status == 401:
        raise VSACError(
            'VSAC authentication failed. Check your UMLS API key.',
            'AUTH_FAILED',
            401
        )
    elif status == 403:
        raise VSACError(
            'VSAC access forbidden. Ensure your UMLS account has VSAC access enabled.',
            'ACCESS_FORBIDDEN',
            403
        )
    elif status == 404:
        raise VSACError(
            f'Value set not found: {value_set_id}. Verify the OID is correct.',
            'VALUESET_NOT_FOUND',
            404
        )
    elif status == 429:
        raise VSACError(
            'VSAC rate limit exceeded. Please wait before retrying.',
            'RATE_LIMIT',
            429
        )
    elif status >= 500:
        raise VSACError(
            'VSAC service temporarily unavailable. Please try again later.',
            'SERVICE_UNAVAILABLE',
            status
        )
    raise VSACError(
        f'VSAC API error ({status}): {response.text[:200]}',
        'API_ERROR',
        status
    )
