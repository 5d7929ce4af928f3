#!/usr/bin/env python3
"""
Position Actions for DLMM Terminal

Opening a position or claiming fees needs a DLMM transaction builder and a
signer. This module stops at a validated request; building and sending the
transaction is the job of a PositionBackend supplied by the caller.
"""

import importlib
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .errors import PositionActionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenPositionRequest:
    pool_address: str
    pool_name: str
    amount: float
    min_price: float
    max_price: float
    owner: Optional[str] = None


@dataclass(frozen=True)
class ClaimFeesRequest:
    pool_address: str
    pool_name: str
    owner: Optional[str] = None


class PositionBackend(Protocol):
    """Builds, signs and submits DLMM position transactions"""

    def open_position(self, request: OpenPositionRequest, keypair: Any) -> str:
        """Return the transaction signature."""
        ...

    def claim_fees(self, request: ClaimFeesRequest, keypair: Any) -> str:
        """Return the transaction signature."""
        ...


def load_backend(backend_path):
    """Instantiate a backend from "package.module:ClassName", None when unset"""
    if not backend_path:
        return None
    module_name, _, attr = backend_path.partition(":")
    if not module_name or not attr:
        raise PositionActionError(f'Backend must look like "package.module:ClassName", got "{backend_path}"')
    try:
        module = importlib.import_module(module_name)
        backend_cls = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise PositionActionError(f"Could not load position backend {backend_path}: {e}") from e
    return backend_cls()


def resolve_price_bounds(range_bounds=None, min_price=None, max_price=None):
    """--range wins over --min/--max; both bounds must end up finite"""
    if range_bounds is not None:
        min_price, max_price = range_bounds
    if min_price is None or max_price is None:
        raise PositionActionError("Provide --range <min-max> (e.g. 0.98-1.02) OR both --min and --max.")
    if not (math.isfinite(min_price) and math.isfinite(max_price)):
        raise PositionActionError("Price range bounds must be finite numbers.")
    return float(min_price), float(max_price)


class PositionActions:
    """Resolves a pool and prepares or submits open/claim actions"""

    def __init__(self, resolver, backend=None):
        self.resolver = resolver
        self.backend = backend

    def prepare_open(self, target, amount, min_price, max_price, owner=None):
        if not target:
            raise PositionActionError("Provide either --pool <address> or --pair <SYMA-SYMB>.")
        if not math.isfinite(amount) or amount <= 0:
            raise PositionActionError(f"Deposit amount must be positive, got {amount}")
        if not (math.isfinite(min_price) and math.isfinite(max_price)):
            raise PositionActionError("Price range bounds must be finite numbers.")
        if min_price >= max_price:
            raise PositionActionError(f"Range minimum {min_price} must be below maximum {max_price}")

        pool = self.resolver.resolve(target)
        logger.debug("Prepared open on %s (%s): amount=%s range=%s-%s",
                     pool.name, pool.address, amount, min_price, max_price)
        return OpenPositionRequest(
            pool_address=pool.address,
            pool_name=pool.name,
            amount=amount,
            min_price=min_price,
            max_price=max_price,
            owner=owner,
        )

    def prepare_claim(self, target, owner=None):
        if not target:
            raise PositionActionError("Provide either --pool or --pair.")
        pool = self.resolver.resolve(target)
        return ClaimFeesRequest(pool_address=pool.address, pool_name=pool.name, owner=owner)

    def require_backend(self):
        if self.backend is None:
            raise PositionActionError(
                "No DLMM transaction backend configured (positions.backend); "
                "rerun with --dry-run to preview the action."
            )
        return self.backend

    def open_position(self, target, amount, min_price, max_price, keypair):
        backend = self.require_backend()
        request = self.prepare_open(target, amount, min_price, max_price, owner=str(keypair.pubkey()))
        return request, backend.open_position(request, keypair)

    def claim_fees(self, target, keypair):
        backend = self.require_backend()
        request = self.prepare_claim(target, owner=str(keypair.pubkey()))
        return request, backend.claim_fees(request, keypair)
