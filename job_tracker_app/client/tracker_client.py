"""
HTTP client for the Job Application Tracker API.

The session cookie issued at login is kept on the underlying
``requests.Session``, so calls made after ``login`` are authenticated.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10


class TrackerClientError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class TrackerClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, session=None, timeout: int = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        # Anything with requests' get/post/put/delete interface works here
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        if isinstance(self.session, requests.Session):
            kwargs.setdefault("timeout", self.timeout)
        response = self.session.request(method, url, **kwargs)
        if response.status_code >= 400:
            try:
                body = response.json()
                detail = body.get("detail", body) if isinstance(body, dict) else body
            except ValueError:
                detail = response.text
            logger.warning("%s %s failed with %s: %s", method, path, response.status_code, detail)
            raise TrackerClientError(response.status_code, detail)
        if not response.content:
            return None
        return response.json()

    # --- account -------------------------------------------------------------

    def register(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/register", json={"email": email, "password": password})["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/login", json={"email": email, "password": password})["user"]

    def logout(self) -> None:
        self._request("POST", "/api/auth/logout")

    def me(self) -> Optional[Dict[str, Any]]:
        return self._request("GET", "/api/auth/me")["user"]

    # --- applications --------------------------------------------------------

    @staticmethod
    def listing_params(
        statuses: Optional[Iterable[str]] = None,
        q: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if statuses:
            params["status"] = list(statuses)
        if q and q.strip():
            params["q"] = q.strip()
        if sort_direction:
            params["sort"] = sort_direction
        if sort_by:
            params["sortBy"] = sort_by
        return params

    def list_applications(
        self,
        statuses: Optional[Iterable[str]] = None,
        q: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = self.listing_params(statuses, q, sort_by, sort_direction)
        return self._request("GET", "/api/applications", params=params)

    def summary(self, statuses: Optional[Iterable[str]] = None, q: Optional[str] = None) -> Dict[str, Any]:
        return self._request("GET", "/api/applications/summary", params=self.listing_params(statuses, q))

    def get_application(self, application_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/applications/{application_id}")

    def create_application(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/applications", json=fields)

    def update_application(self, application_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/applications/{application_id}", json=fields)

    def delete_application(self, application_id: int) -> None:
        self._request("DELETE", f"/api/applications/{application_id}")
