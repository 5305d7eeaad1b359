"""
Payment polling for links, for integrations that cannot receive callbacks.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Dict, Optional, Set

from gatepay_sdk.apis.links import LinksApi
from gatepay_sdk.core.observability import log_event
from gatepay_sdk.models import Payment

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_POLLS = 120


async def watch_link_payments(
    links: LinksApi,
    link_uuid: str,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    max_polls: Optional[int] = DEFAULT_MAX_POLLS,
    limit: int = 50,
    seen: Optional[Set[str]] = None,
) -> AsyncIterator[Payment]:
    """
    Poll the first page of a link's payments and yield each payment once.

    Stops after ``max_polls`` polls (``None`` polls until the consumer stops
    iterating). Pass ``seen`` to skip payments already handled, e.g. when
    resuming after an error; it is updated in place. Errors from a poll are
    raised to the consumer.
    """
    if poll_interval < 0:
        raise ValueError("poll_interval must be >= 0")
    if max_polls is not None and max_polls < 1:
        raise ValueError("max_polls must be >= 1")

    seen = seen if seen is not None else set()
    polls = 0
    while max_polls is None or polls < max_polls:
        if polls:
            await asyncio.sleep(poll_interval)
        polls += 1

        page = await links.get_links_by_link_uuid_payments(
            link_uuid, page=1, limit=limit
        )
        fresh: Dict[str, Payment] = {}
        for payment in page.payments:
            if payment.uuid not in seen:
                fresh.setdefault(payment.uuid, payment)
        log_event(
            "payments_polled",
            link_uuid=link_uuid,
            attempt=polls,
            total=len(page.payments),
            new=len(fresh),
        )
        # Only payments handed to the consumer count as seen.
        for payment in fresh.values():
            seen.add(payment.uuid)
            yield payment


__all__ = ["watch_link_payments", "DEFAULT_POLL_INTERVAL", "DEFAULT_MAX_POLLS"]
