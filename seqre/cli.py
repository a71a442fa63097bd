"""
Command line front end.

  seqre keygen                          print a fresh key token
  seqre encrypt --text "..." [--short]  seal a secret, print the submission
  seqre decrypt --link URL --data B64   open a sealed secret
  seqre link SHORT TOKEN                build a share link on the server
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from seqre import __version__
from seqre.config import get_settings
from seqre.errors import AuthenticationFailure, InvalidEncoding, MalformedEnvelope, SeqreError
from seqre.keys import export_key, generate_key
from seqre.links import build_share_link, resource_url, split_share_link
from seqre.request import SecretKind, SecretRequest, open_sealed, seal

logger = logging.getLogger("seqre.cli")

DECRYPT_FAILED = "cannot decrypt"


def _read_request(args: argparse.Namespace) -> SecretRequest:
    if args.file:
        return SecretRequest.binary(Path(args.file).read_bytes())
    if args.url:
        return SecretRequest.url(args.url)
    if args.text is not None:
        return SecretRequest.text(args.text)
    return SecretRequest.text(sys.stdin.read())


def cmd_keygen(args: argparse.Namespace) -> int:
    print(export_key(generate_key()))
    return 0


def cmd_encrypt(args: argparse.Namespace) -> int:
    sealed = seal(_read_request(args))
    metadata = {}
    if args.onetime:
        metadata["onetime"] = True
    output = {"submission": sealed.submission(**metadata), "token": sealed.token}
    if args.short:
        url = resource_url(get_settings().server, args.short, sealed.kind)
        output["link"] = build_share_link(url, sealed.token)
    print(json.dumps(output, indent=2))
    return 0


def cmd_decrypt(args: argparse.Namespace) -> int:
    if args.link:
        _, token = split_share_link(args.link)
    elif args.token:
        token = args.token
    else:
        print("error: --link or --token is required", file=sys.stderr)
        return 2

    data = Path(args.data_file).read_text() if args.data_file else args.data
    if not data:
        print("error: --data or --data-file is required", file=sys.stderr)
        return 2

    opened = open_sealed(data.strip(), token, SecretKind(args.kind))
    if args.output:
        Path(args.output).write_bytes(opened.payload)
    elif opened.kind is SecretKind.BINARY:
        sys.stdout.buffer.write(opened.payload)
    else:
        print(opened.as_text())
    return 0


def cmd_link(args: argparse.Namespace) -> int:
    url = resource_url(get_settings().server, args.short, SecretKind(args.kind))
    print(build_share_link(url, args.token))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqre",
        description="Client-side encryption with keys carried in URL fragments.",
    )
    parser.add_argument("--version", action="version", version=f"seqre {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    keygen = sub.add_parser("keygen", help="Print a fresh 128-bit key token")
    keygen.set_defaults(func=cmd_keygen)

    encrypt = sub.add_parser("encrypt", help="Encrypt a secret for submission")
    source = encrypt.add_mutually_exclusive_group()
    source.add_argument("--text", type=str, default=None, help="Text to encrypt (default: stdin)")
    source.add_argument("--url", type=str, default=None, help="URL to encrypt")
    source.add_argument("--file", "-f", type=str, default=None, help="Binary file to encrypt")
    encrypt.add_argument("--short", type=str, default=None,
                         help="Short code returned by the server, to print the share link")
    encrypt.add_argument("--onetime", action="store_true", help="Mark the submission as one-time")
    encrypt.set_defaults(func=cmd_encrypt)

    decrypt = sub.add_parser("decrypt", help="Decrypt a sealed secret")
    decrypt.add_argument("--link", type=str, default=None, help="Share link with key fragment")
    decrypt.add_argument("--token", type=str, default=None, help="Key token")
    decrypt.add_argument("--data", type=str, default=None, help="Base64 envelope")
    decrypt.add_argument("--data-file", type=str, default=None, help="File holding the base64 envelope")
    decrypt.add_argument("--kind", choices=[k.value for k in SecretKind], default=SecretKind.TEXT.value)
    decrypt.add_argument("--output", "-o", type=str, default=None, help="Write plaintext to a file")
    decrypt.set_defaults(func=cmd_decrypt)

    link = sub.add_parser("link", help="Build a share link for a stored secret")
    link.add_argument("short", help="Short code returned by the server")
    link.add_argument("token", help="Key token")
    link.add_argument("--kind", choices=[k.value for k in SecretKind], default=SecretKind.TEXT.value)
    link.set_defaults(func=cmd_link)

    return parser


def main(argv: list[str] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        logging.basicConfig(
            level=get_settings().log_level,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return args.func(args)
    except (MalformedEnvelope, AuthenticationFailure, InvalidEncoding) as e:
        logger.debug("%s failed: %s: %s", args.command, type(e).__name__, e)
        print(f"error: {DECRYPT_FAILED}", file=sys.stderr)
        return 1
    except SeqreError as e:
        logger.debug("%s failed: %s", args.command, type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
