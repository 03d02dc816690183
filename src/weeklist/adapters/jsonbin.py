"""JSONBin adapter - HTTP client for the task document."""

import logging

import requests

from weeklist.config import Config
from weeklist.core.tasks import TaskDocument
from weeklist.ports.task_store import SaveResult

logger = logging.getLogger(__name__)


class JsonBinStore:
    """
    JSONBin.io storage adapter.

    Implements TaskStore protocol. Every load is a fresh GET of the latest
    record and every save is a full PUT; there is no caching and no version
    check, so the last save wins.
    """

    def __init__(
        self,
        bin_url: str,
        master_key: str,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.bin_url = bin_url.rstrip("/")
        self.master_key = master_key
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config) -> "JsonBinStore":
        return cls(config.jsonbin_url, config.jsonbin_key, timeout=config.jsonbin_timeout)

    def load(self) -> TaskDocument:
        """Fetch the latest record. Returns an empty document on any failure."""
        try:
            resp = self._session.get(
                f"{self.bin_url}/latest",
                headers={"X-Master-Key": self.master_key},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to fetch data: {e}")
            return TaskDocument()

        record = data.get("record") if isinstance(data, dict) else None
        return TaskDocument.from_dict(record)

    def save(self, doc: TaskDocument) -> SaveResult:
        """PUT the full document, with bin versioning disabled."""
        try:
            resp = self._session.put(
                self.bin_url,
                json=doc.to_dict(),
                headers={
                    "X-Master-Key": self.master_key,
                    "X-Bin-Versioning": "false",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Failed to save data: {e}")
            return SaveResult(ok=False, error=str(e))

        if not resp.ok:
            logger.error(f"JSONBin save failed ({resp.status_code}): {resp.text}")
            return SaveResult(ok=False, error=f"HTTP {resp.status_code}")

        logger.info("Data saved to JSONBin.")
        return SaveResult(ok=True)
