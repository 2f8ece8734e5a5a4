#!/usr/bin/env python3
"""Client CRUD smoke test against a running dashboard API.

Steps:
1) list existing clients,
2) create a test client,
3) read it back and compare with what was sent,
4) patch name and priority,
5) read it back again and check only those fields changed,
6) list clients again.

The API base URL comes from ``--base-url`` or ``FLEETDASH_API_URL``.
Exit status is non-zero when any step fails; the failure is logged with
its stack trace.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from fleetdash import ClientCreate, ClientUpdate, DashboardConfig, FleetDashboard, FleetDashError  # noqa: E402
from fleetdash.models import Client  # noqa: E402

_logger = logging.getLogger("crud_smoke")

NEW_CLIENT: dict[str, Any] = {
    "name": "Cliente de Prueba",
    "email": "test@cliente.com",
    "phone": "+57 300 123 4567",
    "address": "Dirección de Prueba 123",
    "clientType": "customer",
    "priority": "normal",
}

CLIENT_PATCH: dict[str, Any] = {
    "name": "Cliente de Prueba Actualizado",
    "priority": "high",
}


def _wire_fields(client: Client) -> dict[str, Any]:
    return client.model_dump(mode="json", by_alias=True, include={"name", "email", "phone", "address", "client_type", "priority"})


def _check(condition: bool, what: str) -> None:
    if not condition:
        raise AssertionError(what)


async def run(config: DashboardConfig) -> None:
    async with FleetDashboard(config) as dash:
        api = dash.api

        existing = await api.get_clients()
        _logger.info("Existing clients: %d", len(existing))

        created = await api.create_client(ClientCreate.model_validate(NEW_CLIENT))
        _check(bool(created.id), "created client has no id")
        _logger.info("Created client %s", created.id)

        fetched = await api.get_client(created.id)
        _check(fetched.id == created.id, "read-back id differs")
        _check(_wire_fields(fetched) == NEW_CLIENT, f"read-back differs: {_wire_fields(fetched)}")

        await api.update_client(created.id, ClientUpdate.model_validate(CLIENT_PATCH))
        updated = await api.get_client(created.id)
        expected = {**NEW_CLIENT, **CLIENT_PATCH}
        _check(_wire_fields(updated) == expected, f"patched client differs: {_wire_fields(updated)}")
        _logger.info("Updated client %s", created.id)

        final = await api.get_clients()
        _logger.info("Total clients: %d", len(final))
        for client in final:
            _logger.info("  %s %s %s %s", client.id, client.name, client.client_type, client.priority)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", help="API base URL (default: FLEETDASH_API_URL or http://localhost:5000)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url

    try:
        asyncio.run(run(DashboardConfig.from_env(**overrides)))
    except (FleetDashError, AssertionError) as exc:
        _logger.error("CRUD smoke test failed: %s", exc, exc_info=exc)
        return 1
    _logger.info("All client CRUD checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
