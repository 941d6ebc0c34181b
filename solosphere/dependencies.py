"""
Dependency Injection container.

Wires the abstract StorePort to a concrete adapter and builds the domain
services on top of it. To swap the store (in-memory → Supabase), change
`STORE_BACKEND`; nothing else in the codebase changes.
"""

from functools import lru_cache

from fastapi import Depends

from solosphere.adapters.memory_adapter import InMemoryStore
from solosphere.config import settings
from solosphere.ports.store_port import StorePort
from solosphere.services.bid_service import BidService
from solosphere.services.job_query import JobQueryBuilder
from solosphere.services.job_service import JobService
from solosphere.services.reconciliation_service import ReconciliationService


# ── Singletons (cached) ──────────────────────────────────────


@lru_cache(maxsize=1)
def _get_supabase_client():
    from supabase import create_client

    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "STORE_BACKEND=supabase requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
        )
    # Use service role key — bypasses RLS for server-side operations
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


@lru_cache(maxsize=1)
def _get_store() -> StorePort:
    if settings.store_backend == "supabase":
        from solosphere.adapters.supabase_adapter import SupabaseStore

        return SupabaseStore(client=_get_supabase_client())
    return InMemoryStore()


# ── FastAPI Dependencies (return abstract types) ──────────────


def get_store() -> StorePort:
    """Inject the long-lived store handle."""
    return _get_store()


def get_job_service(store: StorePort = Depends(get_store)) -> JobService:
    return JobService(store=store)


def get_bid_service(store: StorePort = Depends(get_store)) -> BidService:
    """Bid service shares the store with the job service it increments."""
    return BidService(store=store, jobs=JobService(store=store))


def get_query_builder(store: StorePort = Depends(get_store)) -> JobQueryBuilder:
    return JobQueryBuilder(store=store)


def get_reconciliation_service(
    store: StorePort = Depends(get_store),
) -> ReconciliationService:
    return ReconciliationService(store=store)
