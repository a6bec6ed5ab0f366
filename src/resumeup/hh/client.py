"""Thin hh.ru client for listing and publishing the user's resumes."""

import logging
from typing import Any, Dict, Optional

import requests

from ..errors import HttpStatusError, SchemaError, TransportError


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
PUBLISH_OK_STATUS = 204


class ResumeClient:
    def __init__(
        self,
        api_url: str = "https://api.hh.ru",
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ):
        self.api_url = api_url.rstrip("/")
        self.user_agent = user_agent
        self.session = session or requests.Session()
        self.timeout = timeout

    def list_mine(self, access_token: str) -> Dict[str, Any]:
        """
        Fetch the raw "my resumes" listing.

        Raises:
            TransportError: On network failure
            HttpStatusError: On any status other than 200
            SchemaError: If the body is not JSON
        """
        url = f"{self.api_url}/resumes/mine"
        # hh.ru treats clients without a browser user agent differently
        headers = {
            "Authorization": f"Bearer {access_token}",
            "User-Agent": self.user_agent,
        }
        logger.debug("GET %s", url)

        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error sending mine request: %s", e)
            raise TransportError(f"Listing request failed: {e}") from e

        if resp.status_code != 200:
            logger.error("Mine status code error %s: %s", resp.status_code, resp.text)
            raise HttpStatusError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise SchemaError(f"Listing response is not JSON: {resp.text}") from e

    def publish(self, resume_id: str, access_token: str) -> int:
        """
        Republish one resume. hh.ru answers 204 on success.

        Returns:
            HTTP status code of the publish call

        Raises:
            TransportError: On network failure
        """
        url = f"{self.api_url}/resumes/{resume_id}/publish"
        headers = {"Authorization": f"Bearer {access_token}"}
        logger.debug("POST %s", url)

        try:
            resp = self.session.post(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error sending up request for %s: %s", resume_id, e)
            raise TransportError(f"Publish request failed: {e}") from e

        if resp.status_code != PUBLISH_OK_STATUS:
            logger.warning("Resume %s update status code %s", resume_id, resp.status_code)

        return resp.status_code
