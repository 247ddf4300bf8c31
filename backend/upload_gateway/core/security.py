import secrets
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from fastapi import Request

from upload_gateway.core.config import Settings
from upload_gateway.core.errors import Forbidden, GatewayError, Unauthorized


@dataclass(frozen=True)
class RequestMeta:
    presented_key: str | None
    client_address: str | None


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    error: GatewayError | None = None
    reason: str = ""

    @classmethod
    def admit(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, error: GatewayError, reason: str) -> "AccessDecision":
        return cls(allowed=False, error=error, reason=reason)


class Guard(ABC):
    """Inspects request metadata and admits or denies it."""

    @abstractmethod
    def check(self, meta: RequestMeta) -> AccessDecision:
        raise NotImplementedError


class ApiKeyGuard(Guard):
    def __init__(self, secret: str) -> None:
        self._secret = secret

    def check(self, meta: RequestMeta) -> AccessDecision:
        presented = meta.presented_key
        # An unset secret must not be matched by an empty header.
        if not self._secret or presented is None:
            return AccessDecision.deny(Unauthorized(), "missing or unconfigured API key")
        if not secrets.compare_digest(presented.encode("utf-8"), self._secret.encode("utf-8")):
            return AccessDecision.deny(Unauthorized(), "API key mismatch")
        return AccessDecision.admit()


class IPAllowListGuard(Guard):
    def __init__(self, allowlist: Iterable[str]) -> None:
        self._allowlist = frozenset(address for address in allowlist if address)

    def check(self, meta: RequestMeta) -> AccessDecision:
        if not meta.client_address or meta.client_address not in self._allowlist:
            return AccessDecision.deny(Forbidden(), "client address not allow-listed")
        return AccessDecision.admit()


class GuardChain:
    """Applies guards in declared order and stops at the first denial."""

    def __init__(self, guards: Iterable[Guard]) -> None:
        self.guards: tuple[Guard, ...] = tuple(guards)

    def evaluate(self, meta: RequestMeta) -> AccessDecision:
        for guard in self.guards:
            decision = guard.check(meta)
            if not decision.allowed:
                return decision
        return AccessDecision.admit()


def build_guard_chain(settings: Settings) -> GuardChain:
    return GuardChain(
        [
            ApiKeyGuard(settings.api_key),
            IPAllowListGuard(settings.ip_allowlist),
        ]
    )


def resolve_client_address(request: Request, trust_forwarded: bool = False) -> str | None:
    if trust_forwarded:
        forwarded_for = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
        real_ip = request.headers.get("x-real-ip", "").strip()
        if real_ip:
            return real_ip
    if request.client is None:
        return None
    return request.client.host or None
