# memberdir_core/client.py
import os
from typing import List, Optional
import requests
from memberdir_core.constants import DEFAULT_DIRECTORY_URL
from memberdir_core.entry import Entry, Sibling
from memberdir_core.logger import get_logger

log = get_logger("memberdir.client")


class DirectoryClientError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class DirectoryRejectedError(DirectoryClientError):
    """The directory refused the request (4xx): fix the entry, do not retry as-is."""


class DirectoryTransientError(DirectoryClientError):
    """Network failure or 5xx: the caller may retry."""


class DirectoryClient:
    """
    HTTP client for a deployed directory service.

    - submit(): POST a signed entry to `/`, returns the other members
      registered under the same authority key.
    - remote_address(): GET `/addr`, the caller's address as seen by the
      directory.
    """
    def __init__(self, base_url: Optional[str] = None, timeout: float = 5):
        base_url = base_url or os.getenv("MEMBERDIR_URL", DEFAULT_DIRECTORY_URL)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _raise_for(self, res) -> None:
        if res.ok:
            return
        try:
            payload = res.json()
        except ValueError:
            payload = None
        message = payload.get("error", res.text) if isinstance(payload, dict) else res.text
        log.error(f"[HTTP] {res.status_code}: {message}")
        if res.status_code >= 500:
            raise DirectoryTransientError(message, res.status_code)
        raise DirectoryRejectedError(message, res.status_code)

    def submit(self, entry: Entry) -> List[Sibling]:
        url = f"{self.base_url}/"
        log.debug(f"[HTTP SUBMIT] → {url} | member={entry.member.key}")
        try:
            res = requests.post(url, json=entry.to_dict(), timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"[HTTP SUBMIT] {e}")
            raise DirectoryTransientError(str(e)) from e

        self._raise_for(res)
        siblings = [Sibling.from_dict(item) for item in res.json()]
        log.info(f"[HTTP SUBMIT] {res.status_code} siblings={len(siblings)}")
        return siblings

    def remote_address(self) -> str:
        url = f"{self.base_url}/addr"
        try:
            res = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"[HTTP ADDR] {e}")
            raise DirectoryTransientError(str(e)) from e

        self._raise_for(res)
        return res.text.strip()
