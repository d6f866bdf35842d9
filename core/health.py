import asyncio
import time
from enum import Enum

from core.errors import HealthCheckError
from core.packing import unpack_entropy
from core.tuid import MAX_ID, MIN_ID, first_at, generate, is_valid
from utils import base62
from utils.timestamp import Timestamp, format_timestamp


class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"


class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name,
                "status": self.status.value,
                "msg": self.msg}


class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}


class HealthChecker:
    def __init__(self, ttl=1.0, timeout=5.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._timeout = timeout
        self._start_time = time.time()

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def _run(self, name, check_fn):
        try:
            return await asyncio.wait_for(check_fn(), timeout=self._timeout)
        except asyncio.TimeoutError:
            return CheckResult(name, Status.FAIL, "timeout")
        except HealthCheckError as exc:
            return CheckResult(name, Status.FAIL, str(exc))
        except Exception as exc:
            return CheckResult(name, Status.FAIL, f"{type(exc).__name__}: {exc}")

    async def check(self):
        now = time.time()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = [(await self._run(name, check_fn), critical)
                   for name, (check_fn, critical) in self._checks.items()]

        status = Status.OK
        for result, critical in results:
            if result.status == Status.FAIL and critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache


# Checks
async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)


async def check_codec():
    """Bounds must survive a decode/encode round trip and re-derive from their instants."""
    for bound in (MIN_ID, MAX_ID):
        if base62.encode(base62.decode(bound)) != bound:
            raise HealthCheckError(f"round trip failed for {bound}", component="codec")
        if unpack_entropy(bound.to_int()) != 0 or first_at(bound.to_timestamp()) != bound:
            raise HealthCheckError(f"bound {bound} does not re-derive", component="codec")
    return CheckResult("codec", Status.OK)


async def check_clock():
    """The wall clock must lie in the era valid identifiers cover."""
    tuid = generate()
    if not is_valid(tuid):
        return CheckResult("clock", Status.FAIL, f"out of range@{Timestamp.now().isoformat()}")
    return CheckResult("clock", Status.OK, tuid)


def create_minter_check(minter):
    async def check():
        stats = minter.get_stats()
        return CheckResult("minter", Status.OK, f"{stats['minted']} minted")
    return check


def create_ledger_check(ledger):
    async def check():
        queue_size, max_size = ledger.queue.qsize(), ledger.queue.maxsize

        if queue_size / max_size > 0.9:
            return CheckResult("ledger", Status.DEGRADED, f"{queue_size}/{max_size}")

        if not ledger.running:
            return CheckResult("ledger", Status.DEGRADED, "stopped")

        return CheckResult("ledger", Status.OK)
    return check
