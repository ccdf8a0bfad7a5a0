#!/usr/bin/env python3
"""
Generate a development PKCS#12 key container for the token provider.

Usage:
    ./generate_keystore.py                                  # jrp/resources/keystore.p12
    ./generate_keystore.py --out /etc/jrp/signing.p12 --alias signing
    ./generate_keystore.py --password "$JRP_KEYSTORE_PASSWORD"

The container holds one RSA-2048 key entry with a self-signed certificate.
Point JRP_KEYSTORE_PATH at the output (or keep the default
classpath:keystore.p12 when writing into jrp/resources).
"""

import argparse
import getpass
import sys
from pathlib import Path

from jrp.crypto.keys import (
    build_pkcs12_container,
    build_self_signed_certificate,
    generate_rsa_key,
)

DEFAULT_OUT = Path(__file__).resolve().parent.parent / "jrp" / "resources" / "keystore.p12"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--out", type=Path, default=DEFAULT_OUT)
    parser.add_argument("--alias", default="jwt-signing")
    parser.add_argument("--common-name", default="jwt-rsa-provider")
    parser.add_argument("--password", default=None, help="prompted when omitted")
    parser.add_argument("--force", action="store_true", help="overwrite an existing file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.out.exists() and not args.force:
        print(f"{args.out} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    password = args.password
    if password is None:
        password = getpass.getpass("Keystore password: ")

    key = generate_rsa_key()
    cert = build_self_signed_certificate(key, args.common_name)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(build_pkcs12_container(key, cert, args.alias, password))
    print(f"Wrote {args.out} (alias={args.alias})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
