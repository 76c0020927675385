"""
Create an admin account.

    python add_admin.py --first-name Store --last-name Admin \
        --phone-number 9000000000 --address "Head office" --password s3cret

Reads DATABASE_URL / JWT_SECRET like the API does.
"""
import argparse
import logging
import sys

from config import get_settings, setup_logging
from database import get_db
from errors import ServiceError
from payloads import RegisterPayload, build_payload
from services import AuthService

log = logging.getLogger("add_admin")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Register a user with the admin role")
    parser.add_argument("--first-name", required=True)
    parser.add_argument("--last-name", required=True)
    parser.add_argument("--phone-number", required=True)
    parser.add_argument("--address", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--email-address")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(get_settings().log_level)

    body = {
        "firstName": args.first_name,
        "lastName": args.last_name,
        "phoneNumber": args.phone_number,
        "address": args.address,
        "password": args.password,
        "role": "admin",
    }
    if args.email_address:
        body["emailAddress"] = args.email_address

    payload = build_payload(RegisterPayload, body)
    if payload is None:
        log.error("Invalid admin details")
        return 2

    try:
        user = AuthService(get_db()).register(payload)
    except ServiceError as exc:
        log.error("Could not create admin: %s", exc.message)
        return 1

    log.info("Admin %s created", user["id"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
