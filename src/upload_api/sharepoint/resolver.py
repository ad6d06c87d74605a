"""Download file content from a SharePoint document library."""

import logging
from typing import Optional
from urllib.parse import quote

import msal
import requests

from upload_api.config.settings import Settings
from upload_api.errors import (
    SharePointFetchError,
    SharePointNotConfiguredError,
)
from upload_api.sharepoint.config import (
    AUTHORITY_TEMPLATE,
    GRAPH_API_ENDPOINT,
    SCOPES,
)

logger = logging.getLogger(__name__)


class SharePointResolver:
    """
    Fetches drive items through Microsoft Graph using app-only (client credentials) auth.

    Create one resolver per request and reuse it for every file in the batch: it holds
    a single MSAL application, whose in-memory token cache spares a token request per
    file, and a single HTTP session.

    When any credential is missing the resolver is inert: ``fetch_file`` raises
    ``SharePointNotConfiguredError`` without touching the network.
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        msal_app: Optional[msal.ConfidentialClientApplication] = None,
    ):
        self.timeout = settings.sharepoint_timeout
        self.is_configured = settings.sharepoint_configured
        self._settings = settings
        self._session = session
        self._app = msal_app

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _get_app(self) -> msal.ConfidentialClientApplication:
        # MSAL fetches the tenant's OpenID configuration while it is being built
        if self._app is None:
            self._app = msal.ConfidentialClientApplication(
                client_id=self._settings.sharepoint_client_id,
                authority=AUTHORITY_TEMPLATE.format(tenant_id=self._settings.sharepoint_tenant_id),
                client_credential=self._settings.sharepoint_client_secret,
            )
        return self._app

    def get_access_token(self) -> str:
        """Acquire an app-only token; MSAL serves it from cache until it nears expiry."""
        if not self.is_configured:
            raise SharePointNotConfiguredError("SharePoint client not initialized - missing credentials")

        try:
            result = self._get_app().acquire_token_for_client(scopes=SCOPES)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(f"Failed to reach the Microsoft identity platform: {e}")
            raise SharePointFetchError(f"Failed to acquire access token: {e}") from e

        if "access_token" not in result:
            description = result.get("error_description") or result.get("error") or "unknown error"
            logger.error(f"Failed to acquire Graph access token: {description}")
            raise SharePointFetchError(f"Failed to acquire access token: {description}")
        return result["access_token"]

    def get_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.get_access_token()}"}

    def fetch_file(self, site_id: str, drive_id: str, item_id: str) -> bytes:
        """
        Download the full content of a drive item.

        Args:
            site_id: SharePoint site ID
            drive_id: Document library (drive) ID
            item_id: Drive item ID

        Returns:
            The file content

        Raises:
            SharePointNotConfiguredError: if credentials are missing
            SharePointFetchError: if the token request or the download fails
        """
        headers = self.get_headers()
        url = (
            f"{GRAPH_API_ENDPOINT}/sites/{quote(site_id, safe='')}"
            f"/drives/{quote(drive_id, safe='')}/items/{quote(item_id, safe='')}/content"
        )

        try:
            # Graph answers with a 302 to a pre-authenticated download URL
            response = self.session.get(url, headers=headers, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            message = _graph_error_message(e.response) or str(e)
            logger.error(f"Graph returned an error for item {item_id} in drive {drive_id}: {message}")
            raise SharePointFetchError(f"Failed to fetch file from SharePoint: {message}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request for item {item_id} in drive {drive_id} failed: {e}")
            raise SharePointFetchError(f"Failed to fetch file from SharePoint: {e}") from e

        logger.info(f"Fetched item {item_id} from drive {drive_id} ({len(response.content)} bytes)")
        return response.content


def _graph_error_message(response: Optional[requests.Response]) -> Optional[str]:
    """Extract ``error.message`` from a Graph error body, if there is one."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message")
    return None
