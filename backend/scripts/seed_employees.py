#!/usr/bin/env python3
"""Seed the payroll employee API with the demo employees.

Run from the backend/ directory with EMPLOYEE_API_BASE_URL set:

    python3 scripts/seed_employees.py [--dry-run] [--verbose]

Each demo employee is normalized exactly like a form submission and created
through the REST API. Failures (e.g. an employee number that already exists)
are logged and counted; the remaining employees are still created.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from payroll_app.core.config import Settings  # noqa: E402
from payroll_app.core.exceptions import RepositoryError  # noqa: E402
from payroll_app.services.employee_repository import EmployeeRepository, HttpEmployeeRepository  # noqa: E402
from payroll_app.services.memory_repository import demo_payloads  # noqa: E402

logger = logging.getLogger(__name__)


async def seed_payloads(
    repository: EmployeeRepository,
    payloads: list[dict[str, Any]],
    *,
    dry_run: bool = False,
) -> tuple[int, int]:
    if dry_run:
        for payload in payloads:
            logger.info("[DRY RUN] Would create employee %s", payload.get("employee_number"))
        return len(payloads), 0

    succeeded = 0
    failed = 0
    for payload in payloads:
        try:
            created = await repository.create_employee(payload)
        except RepositoryError as err:
            logger.error("Employee %s not created: %s", payload.get("employee_number"), err)
            failed += 1
            continue
        logger.info("Created employee %s (id=%s)", payload.get("employee_number"), created.get("id") if created else None)
        succeeded += 1
    return succeeded, failed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the demo employees through the payroll employee API",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the payloads without calling the API",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def seed(args: argparse.Namespace) -> int:
    settings = Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    payloads = demo_payloads()
    logger.info("Prepared %d demo employees", len(payloads))

    repository = HttpEmployeeRepository()
    if not args.dry_run:
        await repository.initialize(settings)
        if not repository.initialized:
            logger.error("EMPLOYEE_API_BASE_URL is not set. Exiting.")
            return 1

    try:
        succeeded, failed = await seed_payloads(repository, payloads, dry_run=args.dry_run)
    finally:
        await repository.close()

    logger.info("Seeding complete: %d succeeded, %d failed", succeeded, failed)
    if args.dry_run:
        logger.info("[DRY RUN] No employees were actually created.")
    return 1 if failed else 0


def main() -> None:
    args = parse_args()
    sys.exit(asyncio.run(seed(args)))


if __name__ == "__main__":
    main()
