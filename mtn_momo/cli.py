"""
MTN MoMo command line interface

Credentials come from the MTN_MOMO_* environment variables
(see MomoCredentials.from_env).

Usage:
    mtn-momo token
    mtn-momo transfer 250788123456 500 --currency RWF
    mtn-momo request-to-pay 250788123456 500 --currency RWF
    mtn-momo status <reference-id>
    mtn-momo balance
    mtn-momo validate 250788123456
"""

import argparse
import asyncio
import json
import logging
import sys
import time
from typing import List, Optional

import pydantic

from .async_client import MtnMomoApiClient
from .exceptions import MomoError
from .models import ClientConfig, MomoCredentials, Party, RequestToPayRequest, TransferRequest

logger = logging.getLogger("mtn_momo.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mtn-momo", description="MTN Mobile Money API client")
    parser.add_argument("--base-url", help="Override the API base URL (e.g. a local mock server)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("token", help="Fetch an access token")

    for name, help_text in (
        ("transfer", "Send money to a recipient (Disbursement)"),
        ("request-to-pay", "Request payment from a customer (Collection)"),
    ):
        payment_parser = subparsers.add_parser(name, help=help_text)
        payment_parser.add_argument("phone_number", help="MSISDN, e.g. 250788123456")
        payment_parser.add_argument("amount", help="Amount")
        payment_parser.add_argument("--currency", default="RWF", help="Currency code")
        payment_parser.add_argument("--external-id", help="Your internal transaction id")
        payment_parser.add_argument("--payer-message", help="Message for the payer")
        payment_parser.add_argument("--payee-note", help="Note for the payee")

    status_parser = subparsers.add_parser("status", help="Get transaction status")
    status_parser.add_argument("reference_id", help="Reference id returned by transfer/request-to-pay")

    subparsers.add_parser("balance", help="Get account balance")

    validate_parser = subparsers.add_parser("validate", help="Check if an account holder is active")
    validate_parser.add_argument("phone_number", help="MSISDN to validate")

    return parser


async def run_command(client: MtnMomoApiClient, args: argparse.Namespace):
    """Dispatch one parsed command and return its JSON-serializable result"""
    if args.command == "token":
        return {"access_token": await client.get_access_token()}

    if args.command in ("transfer", "request-to-pay"):
        fields = dict(
            amount=args.amount,
            currency=args.currency,
            external_id=args.external_id or str(int(time.time() * 1000)),
            payer_message=args.payer_message,
            payee_note=args.payee_note,
        )
        party = Party(party_id=args.phone_number)
        if args.command == "transfer":
            reference_id = await client.transfer(TransferRequest(payee=party, **fields))
        else:
            reference_id = await client.request_to_pay(RequestToPayRequest(payer=party, **fields))
        return {"referenceId": reference_id, "externalId": fields["external_id"]}

    if args.command == "status":
        return await client.get_transaction_status(args.reference_id)

    if args.command == "balance":
        return await client.get_account_balance()

    if args.command == "validate":
        return await client.validate_account_holder(args.phone_number)

    raise ValueError(f"Unknown command: {args.command}")


async def _run(credentials: MomoCredentials, config: ClientConfig, args: argparse.Namespace):
    async with MtnMomoApiClient(credentials, config) as client:
        return await run_command(client, args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        credentials = MomoCredentials.from_env()
        config = ClientConfig(base_url=args.base_url, debug=args.debug)
        result = asyncio.run(_run(credentials, config, args))
    except MomoError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except pydantic.ValidationError as e:
        logger.error(f"Invalid arguments: {e}")
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
