#!/usr/bin/env python3

"""Create keyrings, sign a transaction hash and a message, and round-trip a keystore"""

import json
import logging

from klaytn_client import KeyRole, KeyringFactory
from klaytn_client.crypto import keccak256


def main():
    """Main example function"""
    logging.basicConfig(level=logging.DEBUG)
    print("=== Klaytn Keyring Basics ===")

    # Single key keyring with a derived address
    single = KeyringFactory.generate()
    print(f"Single keyring address: {single.address}")
    print(f"Klaytn wallet key:      {single.get_klaytn_wallet_key()[:10]}...")

    # Multiple keys behind one address
    multiple = KeyringFactory.create_with_multiple_key(
        single.address, KeyringFactory.generate_multiple_keys(3)
    )
    tx_hash = "0x" + keccak256(b"example transaction").hex()
    signatures = multiple.sign_with_keys(tx_hash, 1001, KeyRole.TRANSACTION_KEY)
    print(f"Signed with {len(signatures)} keys, first v={signatures[0].v}")

    account = multiple.to_account()
    print("Account for key update:")
    print(json.dumps(account.to_dict(), indent=2))

    # Role-based keys: fee payer role left empty falls back to transaction keys
    role_based = KeyringFactory.create_with_role_based_key(
        single.address, KeyringFactory.generate_role_based_keys([2, 1, 0])
    )
    signed = role_based.sign_message("Hello Klaytn")
    print(f"Message hash: {signed['message_hash']}")
    print(f"Fee payer keys: {len(role_based.role_fee_payer_key)}")

    # Keystore v4 round trip (cheap scrypt parameters for the demo)
    keystore = role_based.encrypt("password", {"n": 1024})
    restored = KeyringFactory.decrypt(json.dumps(keystore), "password")
    assert restored.get_public_key() == role_based.get_public_key()
    print("Keystore round trip OK")


if __name__ == "__main__":
    main()
