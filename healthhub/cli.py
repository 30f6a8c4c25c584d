"""Command line sync: pull every supported metric from one provider into the store.

Usage:
    healthhub-sync garmin_connect --user-id <uuid> --username runner@example.com

Secrets are read from the environment, never from arguments:
HEALTHHUB_PROVIDER_PASSWORD, HEALTHHUB_PROVIDER_ACCESS_TOKEN or
HEALTHHUB_PROVIDER_API_KEY.
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, List, Optional

from healthhub.core.logger import get_logger
from healthhub.database.connection import async_session
from healthhub.domain import UserId
from healthhub.exceptions.errors import ApplicationException
from healthhub.providers import (
    ApiKeyCredentials,
    OAuthTokenCredentials,
    PasswordCredentials,
    ProviderCredentials,
    ProviderRegistry,
    provider_registry,
)
from healthhub.services.ingest_service import MetricIngestService

logger = get_logger("healthhub-sync")

PASSWORD_ENV = "HEALTHHUB_PROVIDER_PASSWORD"
ACCESS_TOKEN_ENV = "HEALTHHUB_PROVIDER_ACCESS_TOKEN"
API_KEY_ENV = "HEALTHHUB_PROVIDER_API_KEY"


class CredentialsError(Exception):
    """No usable credentials were supplied."""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync a user's metrics from a registered provider into the metric store."
    )
    parser.add_argument("provider_id", help="Registered provider id, e.g. garmin_connect")
    parser.add_argument("--user-id", required=True, help="User id (UUID) the data belongs to")
    parser.add_argument(
        "--username",
        help=f"Login for password-based providers; the password is read from {PASSWORD_ENV}",
    )
    return parser.parse_args(argv)


def build_credentials(username: Optional[str], environ=None) -> ProviderCredentials:
    environ = os.environ if environ is None else environ

    if username:
        password = environ.get(PASSWORD_ENV)
        if not password:
            raise CredentialsError(f"{PASSWORD_ENV} must be set when --username is given")
        return PasswordCredentials(username=username, password=password)
    if environ.get(ACCESS_TOKEN_ENV):
        return OAuthTokenCredentials(access_token=environ[ACCESS_TOKEN_ENV])
    if environ.get(API_KEY_ENV):
        return ApiKeyCredentials(api_key=environ[API_KEY_ENV])

    raise CredentialsError(
        f"No credentials: pass --username with {PASSWORD_ENV}, or set {ACCESS_TOKEN_ENV} or {API_KEY_ENV}"
    )


async def run_sync(
    provider_id: str,
    user_id: UserId,
    credentials: ProviderCredentials,
    registry: ProviderRegistry = provider_registry,
    session_factory=async_session,
) -> Dict[str, Dict[str, Any]]:
    """Sync all kinds the provider supports; returns the per-kind summary."""
    provider = registry.get(provider_id)
    logger.info(f"Starting sync: provider={provider_id} user={user_id}")

    async with session_factory() as db:
        service = MetricIngestService(db)
        results = await service.sync_provider(provider, user_id, credentials)

    failed = [kind for kind, summary in results.items() if "error" in summary]
    if failed:
        logger.warning(f"Sync finished with failures for: {', '.join(failed)}")
    else:
        logger.info(f"Sync finished for {len(results)} metric(s)")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Exit code 0 when every kind synced, 1 when some kind failed, 2 on bad input."""
    ns = parse_args(argv)

    try:
        user_id = UserId.parse(ns.user_id)
        credentials = build_credentials(ns.username)
        results = asyncio.run(run_sync(ns.provider_id, user_id, credentials))
    except (ApplicationException, CredentialsError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(results, indent=2, sort_keys=True))
    return 1 if any("error" in summary for summary in results.values()) else 0


if __name__ == "__main__":
    sys.exit(main())
