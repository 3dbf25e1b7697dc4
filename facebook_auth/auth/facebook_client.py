"""Facebook Graph API client used to verify access tokens."""

from typing import Optional

import httpx

from facebook_auth.config import (
    FACEBOOK_GRAPH_URL, FACEBOOK_API_VERSION, FACEBOOK_PROFILE_FIELDS,
    FACEBOOK_AUTH_SCHEME, FACEBOOK_TIMEOUT,
)


class FacebookClient:
    """Fetches the profile that belongs to an access token.

    The response body is returned as-is; deciding whether it describes a
    valid user is up to the caller.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = FACEBOOK_GRAPH_URL,
        api_version: str = FACEBOOK_API_VERSION,
        fields: str = FACEBOOK_PROFILE_FIELDS,
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=FACEBOOK_TIMEOUT)
        self.profile_url = f"{base_url.rstrip('/')}/{api_version}/me"
        self.fields = fields

    async def fetch_profile(self, access_token: str) -> str:
        """
        GET /me for the given token.

        Returns:
            Raw response text

        Raises:
            httpx.HTTPError: on transport failure or a non-2xx status
        """
        response = await self._http.get(
            self.profile_url,
            params={"fields": self.fields},
            headers={
                "Content-Type": "application/json",
                "Authorization": f"{FACEBOOK_AUTH_SCHEME} {access_token}",
            },
        )
        response.raise_for_status()
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
