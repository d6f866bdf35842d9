import threading

from core.errors import MintError
from core.tuid import generate
from internal.logging import get_logger
from utils.timestamp import format_timestamp


class Minter:
    """Mints TUIDs for the service, keeping counters and feeding the ledger."""

    def __init__(self, max_batch=1000, ledger=None):
        self.max_batch = max_batch
        self.ledger = ledger
        self._lock = threading.Lock()
        self._log = get_logger()
        self.minted = 0
        self.last_id = None
        self.started_at = format_timestamp()

    def _record(self, ids):
        with self._lock:
            self.minted += len(ids)
            self.last_id = ids[-1]
        if self.ledger is not None:
            for tuid in ids:
                self.ledger.try_log("mint", {"id": tuid})

    def mint(self):
        tuid = generate()
        self._record([tuid])
        return tuid

    def mint_batch(self, count):
        if not 1 <= count <= self.max_batch:
            raise MintError(f"batch size must be between 1 and {self.max_batch}", count=count)
        ids = [generate() for _ in range(count)]
        self._record(ids)
        self._log.debug("minted batch", count=count, first=ids[0], last=ids[-1])
        return ids

    def get_stats(self):
        with self._lock:
            return {
                "minted": self.minted,
                "last_id": self.last_id,
                "started_at": self.started_at,
                "max_batch": self.max_batch,
            }
