"""RSA key material for access-token signing.

Keys are read from PEM files once at startup. Both common private-key
encodings are accepted (PKCS#1 ``BEGIN RSA PRIVATE KEY`` and PKCS#8
``BEGIN PRIVATE KEY``), as are SubjectPublicKeyInfo and PKCS#1 public keys.
Anything else fails fast with ``KeyMaterialError``.
"""

import logging
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from warden_auth.exceptions import KeyMaterialError

logger = logging.getLogger(__name__)

DEFAULT_KEY_SIZE = 4096


def _read_pem(path: Path, kind: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        msg = f"Cannot read {kind} key file {path}: {e.strerror or e}"
        raise KeyMaterialError(msg) from e


def load_private_key(path: Path) -> rsa.RSAPrivateKey:
    """Load an unencrypted RSA private key from a PEM file.

    Raises
    ------
    KeyMaterialError
        If the file is missing, not PEM, encrypted, or not an RSA key
    """
    data = _read_pem(path, "private")
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        msg = f"Failed to parse private key {path}: {e}"
        raise KeyMaterialError(msg) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        msg = f"{path} is not an RSA private key"
        raise KeyMaterialError(msg)

    logger.debug("Loaded %d-bit RSA private key from %s", key.key_size, path)
    return key


def load_public_key(path: Path) -> rsa.RSAPublicKey:
    """Load an RSA public key from a PEM file.

    Raises
    ------
    KeyMaterialError
        If the file is missing, not PEM, or not an RSA key
    """
    data = _read_pem(path, "public")
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        msg = f"Failed to parse public key {path}: {e}"
        raise KeyMaterialError(msg) from e

    if not isinstance(key, rsa.RSAPublicKey):
        msg = f"{path} is not an RSA public key"
        raise KeyMaterialError(msg)

    logger.debug("Loaded %d-bit RSA public key from %s", key.key_size, path)
    return key


def ensure_key_pair(
    private_key: rsa.RSAPrivateKey,
    public_key: rsa.RSAPublicKey,
) -> None:
    """Raise ``KeyMaterialError`` unless the public key belongs to the private key."""
    if private_key.public_key().public_numbers() != public_key.public_numbers():
        msg = "Public key does not match the private signing key"
        raise KeyMaterialError(msg)


def generate_key_pair_pem(bits: int = DEFAULT_KEY_SIZE) -> tuple[bytes, bytes]:
    """Generate a fresh RSA key pair.

    Returns
    -------
    Tuple of (private key as PKCS#8 PEM, public key as SubjectPublicKeyInfo PEM)
    """
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem
