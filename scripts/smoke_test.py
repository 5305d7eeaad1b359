from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from gatepay_sdk import Gatepay, GatepayHTTPError, LinkCreationError
from gatepay_sdk.core.logging import setup_logging


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    try:
        gatepay = Gatepay.from_env()
    except ValueError as exc:
        return _fail(str(exc))

    destination = _env("TEST_DESTINATION_ADDRESS")
    network = _env("TEST_ASSET_NETWORK", "base")
    asset = _env(
        "TEST_ASSET_ADDRESS", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
    )  # USDC on Base
    amount = _env("TEST_AMOUNT", "10000")
    callback_url = _env("TEST_CALLBACK_URL")

    print("Config:")
    print(f"  base_path: {gatepay.get_configuration().base_path}")
    print(f"  network: {network}")
    print(f"  destination: {destination}")
    print(f"  callback_url: {callback_url}")

    async with gatepay:
        # --- Networks ---
        _print_step("List networks")
        try:
            networks = await gatepay.networks.get_networks()
        except GatepayHTTPError as exc:
            return _fail(f"List networks failed: {exc}")
        print(f"Networks: {[n.name for n in networks.networks]}")

        # --- Balance ---
        _print_step("Account balance")
        try:
            balance = await gatepay.account.get_account_balance()
        except GatepayHTTPError as exc:
            return _fail(f"Balance failed: {exc}")
        print(f"Balance: {balance.model_dump()}")

        # --- Create link ---
        _print_step("Create link")
        name = f"Smoke Test {datetime.now(timezone.utc).isoformat(timespec='seconds')}"
        options: dict = {
            "name": name,
            "description": "Automated smoke test artifact.",
            "resource": {"type": "link", "data": {"url": "https://example.com/"}},
        }
        if destination:
            options["toll"] = {
                "tollPaymentRequirements": [
                    {
                        "assetNetwork": network,
                        "assetAddress": asset,
                        "amount": amount,
                        "destinationAddress": destination,
                    }
                ]
            }
        if callback_url:
            options["actions"] = [
                {
                    "type": "callback",
                    "trigger": "payment_success",
                    "data": {"url": callback_url, "method": "POST"},
                }
            ]
        try:
            link = await gatepay.create_link(options)
        except LinkCreationError as exc:
            if exc.link_uuid:
                print(f"Partially created link left in place: {exc.link_uuid}")
            return _fail(f"Create failed ({exc.step}): {exc}")
        print(f"Created link uuid={link.uuid}, url={link.url}")

        # --- Verify ---
        _print_step("Verify")
        fetched = await gatepay.links.get_links_by_uuid_or_alias(link.uuid or "")
        if fetched.uuid != link.uuid:
            return _fail(f"Verification failed: got uuid {fetched.uuid!r}")
        if fetched.resource is None or fetched.resource.type != "link":
            return _fail("Verification failed: resource missing on link")
        print("Verification OK")

        _print_step("Cleanup")
        print("No delete API; link left in place.")

    print("\nPASSED smoke test.")
    return 0


def main() -> None:
    if _env("SMOKE_TEST_DEBUG") == "1":
        setup_logging("DEBUG")
    sys.exit(asyncio.run(run_smoke_test()))


if __name__ == "__main__":
    main()
