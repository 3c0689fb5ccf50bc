"""Command line interface for ring-signed anonymous voting."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from ringvote.ballot import cast_vote, decode_ring, generate_keys, sign_vote, verify_vote
from ringvote.config import get_settings
from ringvote.encoding import dearmor, pem_to_private_key, point_to_hex
from ringvote.errors import RingSignatureError
from ringvote.ring import create_key_image
from ringvote.store import KeyImageStore


def parse_args(argv: list[str]) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--store",
        default=settings.key_image_store,
        help=f"Location of the key image registry (default: {settings.key_image_store})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    keygen_parser = subparsers.add_parser("keygen", help="Generate a ring member key pair")
    keygen_parser.add_argument("--output", help="Optional file path to store the key pair JSON")

    def add_ring_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--ring",
            required=True,
            help="Path to a JSON list of armoured public keys, in canonical ring order",
        )
        sub.add_argument(
            "--case",
            default=settings.default_case_id,
            help="Case identifier scoping key image linkability",
        )

    image_parser = subparsers.add_parser("key-image", help="Derive the key image for a private key")
    add_ring_arguments(image_parser)
    image_parser.add_argument("--key", required=True, help="Armoured private key")

    sign_parser = subparsers.add_parser("sign", help="Sign a message on behalf of the ring")
    add_ring_arguments(sign_parser)
    sign_parser.add_argument("--key", required=True, help="Armoured private key")
    sign_parser.add_argument("message", help="Message to sign")

    for name, text in (("verify", "Verify a ring signature"), ("cast", "Verify and spend a vote")):
        sub = subparsers.add_parser(name, help=text)
        add_ring_arguments(sub)
        sub.add_argument("--signature", required=True, help="Base64 encoded signature")
        sub.add_argument("--key-image", required=True, help="Hex encoded key image")
        sub.add_argument("message", help="Signed message")

    return parser.parse_args(argv)


def load_ring(path: str) -> List[str]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("publicKeys", [])
    return [str(value) for value in payload]


def run(namespace: argparse.Namespace) -> dict:
    if namespace.command == "keygen":
        payload = generate_keys()
        if namespace.output:
            Path(namespace.output).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return payload

    public_keys = load_ring(namespace.ring)

    if namespace.command == "key-image":
        ring = decode_ring(public_keys)
        secret = pem_to_private_key(dearmor(namespace.key))
        return {"keyImage": point_to_hex(create_key_image(secret, ring, namespace.case))}

    if namespace.command == "sign":
        return sign_vote(namespace.key, public_keys, namespace.message, namespace.case)

    if namespace.command == "verify":
        valid = verify_vote(public_keys, namespace.signature, namespace.key_image, namespace.message, namespace.case)
        return {"isValid": valid}

    if namespace.command == "cast":
        store = KeyImageStore(namespace.store)
        return cast_vote(
            store,
            public_keys,
            namespace.signature,
            namespace.key_image,
            namespace.message,
            namespace.case,
        )

    raise RuntimeError("Unreachable")


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=get_settings().log_level.upper())
    namespace = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        payload = run(namespace)
    except (RingSignatureError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
