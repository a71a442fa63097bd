"""
seqre — Basic Usage Example

Seals a secret on the client, shows what the server would receive, builds
the share link, then opens the secret the way the viewing side does.
"""

import json
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from seqre import (
    AuthenticationFailure,
    SecretKind,
    SecretRequest,
    build_share_link,
    export_key,
    generate_key,
    open_sealed,
    resource_url,
    seal,
    split_share_link,
)


def main():
    print("=" * 50)
    print("  seqre — Zero-Knowledge Secret Sharing")
    print("=" * 50)

    # Sender: encrypt locally, submit only the envelope
    sealed = seal(SecretRequest.text("the database password is hunter2"))
    body = sealed.submission(onetime=True)
    print(f"\nSent to server:\n{json.dumps(body, indent=2)}")

    # The server answers with a short code; the key goes after '#'
    short = "a1b2c3"
    link = build_share_link(resource_url("https://seq.re", short), sealed.token)
    print(f"\nShare link: {link}")
    print(f"Key token ({len(sealed.token)} chars) never left the client")

    # Receiver: read the fragment locally, fetch the envelope by short code
    _, token = split_share_link(link)
    opened = open_sealed(body["data"], token, SecretKind(body["kind"]))
    print(f"\nDecrypted: {opened.as_text()}")

    # A different key cannot open it
    print("\nAttempting open with the wrong key...")
    try:
        open_sealed(body["data"], export_key(generate_key()), SecretKind.TEXT)
        print("  ERROR: Should have failed!")
    except AuthenticationFailure as e:
        print(f"  Correctly rejected: {e}")


if __name__ == "__main__":
    main()
