# factexplorer/sources/awx.py
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests

from factexplorer import settings
from factexplorer.facts import MODIFIED_KEY, HostFactSnapshot
from .base import SourceError, SourceNotConfigured

log = logging.getLogger(__name__)

HOSTS_PATH = "/api/v2/hosts/?page_size=100"
PING_PATH = "/api/v2/ping/"
PROGRESS_EVERY = 25


class AwxSource:
    """
    Live facts from an AWX / Ansible Tower instance.

    Lists every host (following pagination), then fetches each host's
    ansible_facts with a bounded pool of worker threads.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        concurrency: Optional[int] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = url if url is not None else settings.AWX_URL
        self.token = token if token is not None else settings.AWX_TOKEN
        self.concurrency = max(1, concurrency or settings.AWX_CONCURRENCY_LIMIT)
        self.timeout = timeout or settings.AWX_REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        })

    def is_configured(self) -> bool:
        return bool(self.url) and bool(self.token) \
            and self.url != settings.AWX_PLACEHOLDER_URL \
            and self.token != settings.AWX_PLACEHOLDER_TOKEN

    # -------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------
    def _get(self, path_or_url: str) -> requests.Response:
        return self.session.get(urljoin(self.url, path_or_url), timeout=self.timeout)

    def list_hosts(self) -> List[Dict[str, Any]]:
        hosts: List[Dict[str, Any]] = []
        next_url: Optional[str] = HOSTS_PATH
        while next_url:
            try:
                r = self._get(next_url)
            except requests.RequestException as e:
                raise SourceError(f"Could not reach AWX: {e}") from e
            if not r.ok:
                raise SourceError(f"Failed to fetch hosts list: {r.reason} ({r.status_code})")
            page = r.json()
            hosts.extend(page.get("results") or [])
            next_url = page.get("next")
        return hosts

    def host_facts(self, host: Dict[str, Any]) -> Dict[str, Any]:
        """Facts for one host. Per-host failures are recorded in the facts, never raised."""
        name = host.get("name")
        facts_url = (host.get("related") or {}).get("ansible_facts")
        if not facts_url:
            return {}
        try:
            r = self._get(facts_url)
            if r.status_code == 404:
                return {}
            if not r.ok:
                log.error("failed to fetch facts for %s: %s", name, r.reason)
                return {"error": f"Failed to fetch facts ({r.reason})"}
            facts = r.json()
        except (requests.RequestException, ValueError):
            log.exception("error processing facts for %s", name)
            return {"error": "Network or parsing error while fetching facts."}

        if not isinstance(facts, dict):
            return {"error": "Unexpected facts payload."}
        if host.get("ansible_facts_modified"):
            facts[MODIFIED_KEY] = host["ansible_facts_modified"]
        return facts

    def fetch_facts(self) -> HostFactSnapshot:
        if not self.is_configured():
            raise SourceNotConfigured(
                "AWX is not configured on the backend. Please set AWX_URL and AWX_TOKEN environment variables."
            )

        log.info("fetching hosts from AWX at %s", self.url)
        hosts = self.list_hosts()
        total = len(hosts)
        log.info("found %d hosts, fetching facts for each", total)
        if not total:
            return {}

        results: Dict[str, Dict[str, Any]] = {}
        done = 0
        with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
            future_to_name = {executor.submit(self.host_facts, h): h.get("name") for h in hosts}
            for future in as_completed(future_to_name):
                results[future_to_name[future]] = future.result()
                done += 1
                if done % PROGRESS_EVERY == 0 or done == total:
                    log.info("[AWX fetch progress] processed %d of %d hosts", done, total)

        # keep the host listing order, not completion order
        return {h.get("name"): results[h.get("name")] for h in hosts}

    def test_connection(self) -> None:
        """Ping AWX; raises SourceError with a readable message when it is unusable."""
        try:
            r = self._get(PING_PATH)
        except requests.RequestException as e:
            raise SourceError("Invalid AWX URL format or network error.") from e
        if r.status_code == 401:
            raise SourceError("Authentication failed. Please check your AWX Token.")
        if r.status_code == 404:
            raise SourceError("Connection failed. Please check your AWX URL.")
        if not r.ok:
            raise SourceError(f"Connection failed: {r.reason} ({r.status_code})")
        try:
            ping = r.json() or {}
        except ValueError as e:
            raise SourceError("AWX ping did not return JSON. Please check your AWX URL.") from e
        if not ping.get("instances"):
            raise SourceError("Could not find any active AWX instance nodes.")
