import base64
import logging
from typing import Dict, Optional

import httpx

from cql_vsac.utils.error_handlers import VSACError, handle_vsac_error

logger = logging.getLogger(__name__)

USER_AGENT = "cql-vsac/1.0"


class VSACHttpClient:
    """
    Authenticated GET requests against VSAC.

    If an ``httpx.AsyncClient`` is supplied it is reused for every request and
    left open; otherwise each request opens its own short-lived client.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        self.client = client
        self.timeout = timeout

    def create_basic_auth(self, api_key: str) -> str:
        """Create the basic authentication header VSAC expects for a UMLS API key."""
        if not api_key or not api_key.strip():
            raise VSACError("A UMLS API key is required", "AUTH_REQUIRED")

        credentials = f"apikey:{api_key.strip()}"
        encoded = base64.b64encode(credentials.encode('utf-8')).decode('utf-8')
        return f"Basic {encoded}"

    async def get(
        self,
        url: str,
        api_key: str,
        params: Dict[str, str],
        accept: str,
        value_set_id: str
    ) -> httpx.Response:
        headers = {
            "Authorization": self.create_basic_auth(api_key),
            "Accept": accept,
            "User-Agent": USER_AGENT
        }

        logger.debug(f"Making request to: {url}")
        logger.debug(f"Parameters: {params}")

        try:
            if self.client is not None:
                response = await self.client.get(url, headers=headers, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as error:
            logger.error(f"HTTP error querying VSAC for {value_set_id}: {error}")
            raise VSACError(f"Network error connecting to VSAC: {error}", "NETWORK_ERROR") from error

        logger.info(f"Response for {response.request.url} is {response.status_code}")

        if not response.is_success:
            logger.debug(f"Response content: {response.text[:1000]}")
            handle_vsac_error(response, value_set_id)

        return response
