"""Key import for signing, and Fernet encryption of stored key material."""

import base64
import binascii
import logging
from collections.abc import Callable
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, rsa

from jencoder.core.errors import KeyFormatError
from jencoder.crypto.algorithms import signature_primitive
from jencoder.crypto.pem import PEM_LABELS, extract_pem_body
from jencoder.crypto.types import (
    AlgorithmFamily,
    AlgorithmSpec,
    KeyEncoding,
    KeyMaterial,
    SigningKey,
)

logger = logging.getLogger(__name__)

_LABEL_BY_ENCODING = {encoding: label for label, encoding in PEM_LABELS.items()}
_OKP_KEY_TYPES = (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)


def _key_format_error(
    material: KeyMaterial, spec: AlgorithmSpec, reason: str | None = None
) -> KeyFormatError:
    return KeyFormatError(
        algorithm=spec.id,
        detected_encoding=material.detected_encoding.label,
        accepted_encodings=tuple(e.value for e in spec.accepted_encodings),
        reason=reason,
    )


def _load_private_key(material: KeyMaterial, spec: AlgorithmSpec) -> Any:
    """Parse the DER body of a PEM private key.

    The body is decoded here rather than handed to the PEM loader so that
    bodies of any line length are accepted. The DER loader understands
    PKCS#8 as well as the traditional PKCS#1 and SEC1 structures.
    """
    if material.detected_encoding not in spec.accepted_encodings:
        raise _key_format_error(material, spec)
    label = _LABEL_BY_ENCODING[material.detected_encoding]
    body = extract_pem_body(material.text, label)
    if body is None:
        raise _key_format_error(material, spec, "missing PEM footer")
    try:
        der = base64.b64decode("".join(body.split()), validate=True)
        return serialization.load_der_private_key(der, password=None)
    except (binascii.Error, ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise _key_format_error(material, spec, "key could not be parsed") from exc


def _import_hmac(material: KeyMaterial, spec: AlgorithmSpec) -> Any:
    # The secret is the text exactly as entered; surrounding whitespace counts.
    if not material.raw:
        raise _key_format_error(material, spec, "secret is empty")
    return material.raw.encode("utf-8")


def _import_rsa(material: KeyMaterial, spec: AlgorithmSpec) -> Any:
    key = _load_private_key(material, spec)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise _key_format_error(material, spec, "not an RSA private key")
    return key


def _import_ec(material: KeyMaterial, spec: AlgorithmSpec) -> Any:
    key = _load_private_key(material, spec)
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise _key_format_error(material, spec, "not an EC private key")
    if key.curve.name != spec.curve:
        raise _key_format_error(
            material,
            spec,
            f"curve {key.curve.name} does not match required {spec.curve}",
        )
    return key


def _import_okp(material: KeyMaterial, spec: AlgorithmSpec) -> Any:
    key = _load_private_key(material, spec)
    if not isinstance(key, _OKP_KEY_TYPES):
        raise _key_format_error(material, spec, "not an Ed25519 or Ed448 key")
    return key


_IMPORTERS: dict[AlgorithmFamily, Callable[[KeyMaterial, AlgorithmSpec], Any]] = {
    AlgorithmFamily.HMAC: _import_hmac,
    AlgorithmFamily.RSA: _import_rsa,
    AlgorithmFamily.RSA_PSS: _import_rsa,
    AlgorithmFamily.ECDSA: _import_ec,
    AlgorithmFamily.EDDSA: _import_okp,
}


def import_signing_key(material: KeyMaterial, spec: AlgorithmSpec) -> SigningKey:
    """Turn normalized key material into a signing handle for ``spec``.

    Raises:
        KeyFormatError: if the detected encoding is not accepted by the
            algorithm family, or the key cannot be parsed or has the wrong
            type or curve.
    """
    logger.debug(
        "Importing %s key detected as %s", spec.id, material.detected_encoding
    )
    key = _IMPORTERS[spec.family](material, spec)
    return SigningKey(
        algorithm=spec.id,
        family=spec.family,
        key=key,
        primitive=signature_primitive(spec),
    )


def encrypt_key_material(plain: str, fernet_key: str) -> str:
    """Encrypt a secret or PEM private key with Fernet for storage."""
    cipher = Fernet(fernet_key.encode())
    return cipher.encrypt(plain.encode()).decode()


def decrypt_key_material(encrypted: str, fernet_key: str) -> str:
    """Decrypt Fernet-encrypted key material."""
    cipher = Fernet(fernet_key.encode())
    return cipher.decrypt(encrypted.encode()).decode()
