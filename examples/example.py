"""Example usage of the pyonelogin SDK."""
# Copyright (c) 2025 AuthFramework Team. All rights reserved.

import asyncio
import logging

from pyonelogin import (
    Authenticated,
    OneLoginClient,
    VerificationPending,
    VerificationRequired,
)
from pyonelogin.exceptions import AuthError, OneLoginError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main() -> None:
    """Execute main example function."""
    # Reads ONELOGIN_CLIENT_ID, ONELOGIN_CLIENT_SECRET, ONELOGIN_REGION, ...
    async with OneLoginClient.from_env() as client:
        try:
            # Example 1: Password login, MFA allowed to be pending
            logger.info("=== Login Example ===")

            result = await client.login.authenticate_password("user@example.com", "password")
            if isinstance(result, Authenticated):
                logger.info("Welcome, %s!", result.user.first_name)
                return

            if isinstance(result, VerificationRequired):
                logger.info(
                    "Second factor required, devices: %s",
                    ", ".join(d.device_type for d in result.devices),
                )

            # Example 2: Push a code to a device and complete the login
            logger.info("=== Push Verification Example ===")

            pending = await client.login.verify_factor("OneLogin SMS", do_not_notify=False)
            if isinstance(pending, VerificationPending):
                code = await asyncio.to_thread(input, "Enter passcode: ")
                verified = await client.login.complete_push_verification(code)
                logger.info("Verified %s", verified.user.username)

            # Example 3: Keep the API token fresh
            logger.info("=== Token Example ===")

            if client.oauth.is_near_expiry(threshold=300):
                await client.oauth.refresh_token()
                logger.info("Token refreshed")

            # Example 4: Directory lookups
            logger.info("=== Directory Example ===")

            roles = await client.roles.list_roles()
            logger.info("Found %d roles", len(roles))

        except AuthError:
            logger.exception("OneLogin rejected the request")
        except OneLoginError:
            logger.exception("Request failed")


if __name__ == "__main__":
    asyncio.run(main())
