from __future__ import annotations

import requests

from ..core.domain.exceptions import ContentApiError


class GitHubContentClient:
    """Reads single files through the GitHub contents API.

    Files are requested with the raw media type so the body is the file itself
    rather than a base64 JSON envelope.
    """

    RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"

    def __init__(
        self,
        *,
        api_base_url: str = "https://api.github.com",
        token: str | None = None,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_base_url = api_base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_file(self, owner: str, repo: str, path: str, branch: str = "main") -> str | None:
        """Return the file's text, or None when the API answers 404.

        Raises:
            ContentApiError: On any other non-2xx status or transport failure
        """
        url = f"{self._api_base_url}/repos/{owner}/{repo}/contents/{path}"
        headers = {"Accept": self.RAW_MEDIA_TYPE}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            resp = self._session.get(url, params={"ref": branch}, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise ContentApiError(str(e)) from e

        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise ContentApiError(f"Status {resp.status_code}: {resp.reason}", status_code=resp.status_code)
        return resp.text
