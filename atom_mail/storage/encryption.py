"""
Preference Encryption Utilities

Provides passphrase-based encryption and decryption of JSON-serializable
values for storage in the extension's local key-value store.

Design Considerations:
- AES-256-CBC with PKCS#7 padding
- Key derived per record with PBKDF2-HMAC-SHA256 over a fresh random salt
- Fresh random IV per record; IV and salt travel with the ciphertext
- Uniform failure on decryption so callers cannot tell padding errors
  from payload errors

The PBKDF2 iteration count (1000) is low by current standards. It is kept
as-is because stored records can only be read back with the same count.
"""

import base64
import json
import logging
import os
from typing import Any, Optional

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from atom_mail.auth.token_validator import NoOpTokenValidator, TokenValidator
from atom_mail.email_processing.models import EncryptedData
from atom_mail.errors import CryptoFailure

logger = logging.getLogger(__name__)

# Key derivation and cipher parameters
PBKDF2_ITERATIONS = 1000
KEY_LENGTH = 32
IV_SIZE = 16
SALT_SIZE = 16


def derive_key(passphrase: str, salt: bytes) -> bytes:
    """
    Derive a 256-bit AES key from a passphrase and salt.

    Args:
        passphrase: Secret passphrase
        salt: Random salt stored alongside the ciphertext

    Returns:
        bytes: 32-byte key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(passphrase.encode('utf-8'))


def encrypt_value(passphrase: str, value: Any) -> EncryptedData:
    """
    Encrypt a JSON-serializable value with a passphrase.

    Args:
        passphrase: Secret passphrase
        value: Any value accepted by ``json.dumps``

    Returns:
        EncryptedData: Base64 ciphertext with hex IV and salt

    Raises:
        CryptoFailure: If serialization or encryption fails
    """
    try:
        plaintext = json.dumps(value, separators=(',', ':'), allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        logger.error(f"Encryption error: value is not JSON-serializable ({type(e).__name__})")
        raise CryptoFailure(f"Failed to encrypt value: {str(e)}") from e

    iv = os.urandom(IV_SIZE)
    salt = os.urandom(SALT_SIZE)

    try:
        key = derive_key(passphrase, salt)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except (TypeError, ValueError) as e:
        logger.error(f"Encryption error: {str(e)}")
        raise CryptoFailure(f"Failed to encrypt value: {str(e)}") from e

    return EncryptedData(
        data=base64.b64encode(ciphertext).decode('ascii'),
        iv=iv.hex(),
        salt=salt.hex(),
    )


def decrypt_value(passphrase: str, encrypted: EncryptedData) -> Any:
    """
    Decrypt a record produced by :func:`encrypt_value`.

    Every failure raises the same error with the same message, whether the
    record was malformed, the padding was wrong or the payload was not JSON.

    Args:
        passphrase: Secret passphrase used for encryption
        encrypted: Stored ciphertext, IV and salt

    Returns:
        The original value

    Raises:
        CryptoFailure: If the record cannot be decrypted
    """
    try:
        salt = bytes.fromhex(encrypted.salt)
        iv = bytes.fromhex(encrypted.iv)
        ciphertext = base64.b64decode(encrypted.data, validate=True)

        key = derive_key(passphrase, salt)

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()

        # UnicodeDecodeError and JSONDecodeError are both ValueErrors
        return json.loads(plaintext.decode('utf-8'))
    except (TypeError, ValueError):
        logger.error("Decryption error: record could not be decrypted")
        raise CryptoFailure("Failed to decrypt value") from None


class SecurityManager:
    """
    Holds the preference passphrase and a token validator.

    Stateless apart from the immutable passphrase, so one instance can be
    shared by every orchestrator in the process.
    """

    def __init__(self, passphrase: str, token_validator: Optional[TokenValidator] = None):
        if not passphrase:
            raise ValueError("An encryption passphrase must be provided")
        self._passphrase = passphrase
        self.token_validator = token_validator or NoOpTokenValidator()

    def encrypt_data(self, value: Any) -> EncryptedData:
        return encrypt_value(self._passphrase, value)

    def decrypt_data(self, encrypted: EncryptedData) -> Any:
        return decrypt_value(self._passphrase, encrypted)

    def validate_token(self, token: str) -> bool:
        return self.token_validator.validate_token(token)

    async def refresh_token_if_needed(self) -> None:
        await self.token_validator.refresh_token_if_needed()
