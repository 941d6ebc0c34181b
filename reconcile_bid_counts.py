"""
Recount bids per job and repair drifted bid_count values (no backend needed).
Run from backend folder: python reconcile_bid_counts.py
"""
import asyncio

from dotenv import load_dotenv

load_dotenv()

from solosphere.dependencies import get_store  # noqa: E402
from solosphere.services.reconciliation_service import ReconciliationService  # noqa: E402


async def main():
    print("Reconciling bid counts...")
    report = await ReconciliationService(get_store()).reconcile_bid_counts()
    print(f"Done! Checked {report.jobs_checked} jobs, corrected {report.jobs_corrected}.")


if __name__ == "__main__":
    asyncio.run(main())
