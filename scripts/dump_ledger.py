#!/usr/bin/env python3
"""Print the contents of a persisted hold ledger.

Reads the ledger from the slot configured through ``PYVEHOLD_*``
environment variables (or ``--path``/``--key``) and prints every record
with its remaining hold time.

Usage
-----
::

    export PYVEHOLD_STORE_PATH="holds.sqlite"
    python scripts/dump_ledger.py

Options::

    --path FILE          Slot file (JSON, or .db/.sqlite for SQLite)
    --key NAME           Slot key holding the ledger blob
    --expire             Run lazy expiry on the active hold before printing
    --json               Output as machine-readable JSON
    --show-emails        Print holder e-mails unmasked
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyvehold import HoldConfig, HoldRecord, open_ledger  # noqa: E402
from pyvehold._redact import mask_email  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _record_row(record: HoldRecord, remaining: int | None, duration: str, show_emails: bool) -> dict[str, Any]:
    email = record.holder_email
    if email and not show_emails:
        email = mask_email(email)
    row = record.to_payload()
    row["holderEmail"] = email
    row["remainingSeconds"] = remaining
    row["remaining"] = duration
    return row


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump a persisted vehicle hold ledger for debugging / development.",
    )
    parser.add_argument("--path", help="Slot file (default: PYVEHOLD_STORE_PATH)")
    parser.add_argument("--key", help="Slot key (default: PYVEHOLD_STORE_KEY or the built-in key)")
    parser.add_argument("--expire", action="store_true", help="Expire the active hold if its window has passed")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--show-emails", action="store_true", help="Do not mask holder e-mails")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.path:
        overrides["store_path"] = args.path
    if args.key:
        overrides["store_key"] = args.key
    config = HoldConfig.from_env(**overrides)
    if not config.store_path:
        parser.error("no ledger location: pass --path or set PYVEHOLD_STORE_PATH")

    rows = []
    with open_ledger(config) as store:
        if args.expire:
            active = store.get_active_hold_vehicle_id()
            if active is not None:
                store.expire_if_needed(active)

        ledger = store.read_ledger()
        for record in ledger.holds.values():
            remaining = store.compute_remaining_seconds(record)
            rows.append(_record_row(record, remaining, store.format_duration(remaining), args.show_emails))

    if args.json_mode:
        payload = {
            "path": config.store_path,
            "key": config.store_key,
            "activeVehicleId": ledger.active_vehicle_id(),
            "holds": rows,
        }
        print(json.dumps(payload, indent=2))
        return

    out: list[str] = [_section("pyvehold dump_ledger")]
    out.append(f"  path      : {config.store_path}")
    out.append(f"  key       : {config.store_key}")
    out.append(f"  active    : {ledger.active_vehicle_id() or '-'}")
    out.append(f"  records   : {len(rows)}")
    for row in rows:
        out.append(_section(f"Vehicle {row['vehicleId']}"))
        for key, value in row.items():
            out.append(f"  {key:<17}: {value}")
    print("\n".join(out))


if __name__ == "__main__":
    main()
