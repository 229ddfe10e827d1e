"""
OAuth2 token acquisition clients.

Each flow speaks one authorization server dialect: token path, grant body and
header shape. All of them resolve their inputs from a free-form credential bag
and return the raw token payload; caching is handled by the service layer.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol
from urllib.parse import quote

import httpx

from api_console.models.token import TokenResponse
from api_console.utils.credentials import mask_secret, resolve_credential
from api_console.utils.http import FORM_CONTENT_TYPE, basic_authorization, build_async_client

logger = logging.getLogger(__name__)


class TokenRequestError(Exception):
    """Raised when an authorization server rejects a token request."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Token request failed: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


class TokenFlow(Protocol):
    """Capability shared by every token dialect."""

    async def acquire(self, credentials: Mapping[str, Any]) -> TokenResponse:
        ...


class TokenEndpointClient:
    """Posts form-encoded grant requests and validates the token payload."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def post_form(
        self, url: str, *, headers: dict[str, str], body: str
    ) -> TokenResponse:
        async with build_async_client(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(url, headers=headers, content=body)

        if not response.is_success:
            logger.error(
                "Token request to %s failed with status %s", url, response.status_code
            )
            raise TokenRequestError(response.status_code, response.text)

        token = TokenResponse.model_validate(response.json())
        if not token.access_token:
            raise TokenRequestError(
                response.status_code, "Incomplete token payload returned."
            )
        return token


class EnterpriseClientCredentialsFlow:
    """Client-credentials grant with an application key (property APIs)."""

    TOKEN_PATH = "/oauth/v1/tokens"
    GRANT_BODY = "grant_type=client_credentials&scope=urn:opc:hgbu:ws:__myscopes__"

    def __init__(self, client: TokenEndpointClient | None = None) -> None:
        self._client = client or TokenEndpointClient()

    async def acquire(self, credentials: Mapping[str, Any]) -> TokenResponse:
        host = resolve_credential(credentials, "HostName", "HOSTNAME", "hostname", "Host")
        app_key = resolve_credential(credentials, "AppKey", "APP_KEY", "appKey", "x-app-key")
        client_id = resolve_credential(
            credentials, "ClientId", "CLIENT_ID", "clientId", "client_id"
        )
        client_secret = resolve_credential(
            credentials, "ClientSecret", "CLIENT_SECRET", "clientSecret", "client_secret"
        )
        enterprise_id = resolve_credential(
            credentials, "EnterpriseId", "ENTERPRISE_ID", "enterpriseId"
        )

        url = f"{host}{self.TOKEN_PATH}"
        logger.info(
            "Requesting client-credentials token from %s (app key %s, client %s, enterprise %s)",
            url,
            mask_secret(app_key, visible=8),
            mask_secret(client_id, visible=8),
            enterprise_id or "MISSING",
        )

        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "x-app-key": app_key,
            "Authorization": basic_authorization(client_id, client_secret),
        }
        if enterprise_id:
            headers["enterpriseId"] = enterprise_id

        return await self._client.post_form(url, headers=headers, body=self.GRANT_BODY)


class ResourceOwnerPasswordFlow:
    """Password grant used by the distribution APIs."""

    TOKEN_PATH = "/hdpba/oauth2/v1/token"

    def __init__(self, client: TokenEndpointClient | None = None) -> None:
        self._client = client or TokenEndpointClient()

    async def acquire(self, credentials: Mapping[str, Any]) -> TokenResponse:
        host = resolve_credential(credentials, "HostName", "HOSTNAME", "hostname")
        app_key = resolve_credential(credentials, "AppKey", "APP_KEY", "appKey")
        client_id = resolve_credential(credentials, "ClientId", "CLIENT_ID", "clientId")
        client_secret = resolve_credential(
            credentials, "ClientSecret", "CLIENT_SECRET", "clientSecret"
        )
        username = resolve_credential(credentials, "Username", "USERNAME", "username")
        password = resolve_credential(credentials, "Password", "PASSWORD", "password")

        url = f"{host}{self.TOKEN_PATH}"
        logger.info(
            "Requesting password-grant token from %s (app key %s, client %s)",
            url,
            mask_secret(app_key),
            mask_secret(client_id),
        )

        body = (
            f"username={quote(username, safe='')}"
            f"&password={quote(password, safe='')}"
            "&grant_type=password"
        )
        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "x-app-key": app_key,
            "Authorization": basic_authorization(client_id, client_secret),
        }
        return await self._client.post_form(url, headers=headers, body=body)


class IdentityDomainClientCredentialsFlow:
    """Client-credentials grant against the identity domain (R&A storage)."""

    TOKEN_PATH = "/oauth2/v1/token"
    GRANT_BODY = "grant_type=client_credentials&scope=urn:opc:idm:__myscopes__"

    def __init__(self, client: TokenEndpointClient | None = None) -> None:
        self._client = client or TokenEndpointClient()

    async def acquire(self, credentials: Mapping[str, Any]) -> TokenResponse:
        idcs_host = resolve_credential(
            credentials, "IDCSHostName", "IDCS_HOSTNAME", "idcsHostName"
        )
        app_id = resolve_credential(
            credentials, "APPId", "APP_ID", "appId", "ClientId", "CLIENT_ID"
        )
        app_secret = resolve_credential(
            credentials,
            "APPSecret",
            "APP_SECRET",
            "appSecret",
            "ClientSecret",
            "CLIENT_SECRET",
        )

        url = f"{idcs_host}{self.TOKEN_PATH}"
        logger.info(
            "Requesting identity-domain token from %s (app id %s)",
            url,
            mask_secret(app_id),
        )

        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "Authorization": basic_authorization(app_id, app_secret),
        }
        return await self._client.post_form(url, headers=headers, body=self.GRANT_BODY)


__all__ = [
    "EnterpriseClientCredentialsFlow",
    "IdentityDomainClientCredentialsFlow",
    "ResourceOwnerPasswordFlow",
    "TokenEndpointClient",
    "TokenFlow",
    "TokenRequestError",
]
