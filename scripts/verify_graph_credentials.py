"""
Verify Microsoft Graph application credentials by acquiring an access token.

Uses the client-credentials flow against the tenant's token endpoint, the same
way the mail transport does before each send. Nothing is sent.

Usage:
    python scripts/verify_graph_credentials.py
    python scripts/verify_graph_credentials.py --tenant contoso.onmicrosoft.com

Required environment variables in .env:
    GRAPH_CLIENT_ID=your-client-id
    GRAPH_CLIENT_SECRET=your-client-secret

Optional:
    GRAPH_TENANT_ID=your-tenant-id   (defaults to "common")
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv


def print_header(text: str) -> None:
    """Print a formatted header."""
    print(f"\n{'='*60}")
    print(f"  {text}")
    print(f"{'='*60}\n")


def print_success(text: str) -> None:
    """Print success message."""
    print(f"[OK] {text}")


def print_error(text: str) -> None:
    """Print error message."""
    print(f"[ERROR] {text}")


def print_info(text: str) -> None:
    """Print info message."""
    print(f"[INFO] {text}")


async def verify_application(tenant_override: str | None) -> bool:
    """Acquire a client-credentials token and report the outcome."""
    import httpx

    from graph_mail.auth.token_cache import MemoryTokenStore, TokenCache
    from graph_mail.config import GraphMailConfig
    from graph_mail.errors import ServiceUnreachable, TokenAcquisitionFailed

    print_header("Microsoft Graph API - Application Permissions")

    print_info("Checking environment variables...")
    required_vars = {
        "GRAPH_CLIENT_ID": os.getenv("GRAPH_CLIENT_ID"),
        "GRAPH_CLIENT_SECRET": os.getenv("GRAPH_CLIENT_SECRET"),
    }
    missing = [k for k, v in required_vars.items() if not v]
    if missing:
        print_error(f"Missing environment variables: {', '.join(missing)}")
        print_info("Please add these to your .env file:")
        for var in missing:
            print(f"    {var}=your-value-here")
        return False

    config = GraphMailConfig(
        tenant=tenant_override or os.getenv("GRAPH_TENANT_ID", ""),
        client=required_vars["GRAPH_CLIENT_ID"],
        secret=required_vars["GRAPH_CLIENT_SECRET"],
    )
    print_success("All required environment variables found")
    print(f"    Tenant:    {config.tenant}")
    print(f"    Client ID: {config.client[:8]}...")

    print_header("Testing Authentication")
    async with httpx.AsyncClient(timeout=httpx.Timeout(30.0)) as http:
        tokens = TokenCache(config, http, store=MemoryTokenStore())
        print_info(f"Requesting token from {tokens.token_url}")
        try:
            token = await tokens.get_token()
        except TokenAcquisitionFailed as e:
            print_error(f"Token endpoint rejected the credentials: {e.error}")
            print_info(e.description)
            if e.error == "invalid_client":
                print_info("Check GRAPH_CLIENT_SECRET (value, not secret ID) and its expiry")
            elif e.error == "unauthorized_client":
                print_info("Check GRAPH_CLIENT_ID and that the app exists in this tenant")
            return False
        except ServiceUnreachable as e:
            print_error(str(e))
            return False

    print_success(f"Access token acquired ({len(token)} characters)")
    print_header("Verification Complete")
    print_success("Credentials are valid. Sending also requires the Mail.Send application permission")
    print("with admin consent for the sending mailbox.")
    return True


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(description="Verify Microsoft Graph application credentials")
    parser.add_argument(
        "--tenant",
        default=None,
        help="Tenant ID or domain (overrides GRAPH_TENANT_ID)",
    )
    args = parser.parse_args()

    # Load environment variables
    load_dotenv()

    from graph_mail.utils.logger import setup_logging

    setup_logging()

    success = asyncio.run(verify_application(args.tenant))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
