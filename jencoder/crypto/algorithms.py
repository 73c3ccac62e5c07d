"""Static registry of supported JWS algorithms."""

from types import MappingProxyType

from jwt.algorithms import Algorithm, get_default_algorithms

from jencoder.core.errors import UnsupportedAlgorithmError
from jencoder.crypto.types import AlgorithmFamily, AlgorithmSpec, KeyEncoding

ACCEPTED_ENCODINGS: dict[AlgorithmFamily, tuple[KeyEncoding, ...]] = {
    AlgorithmFamily.HMAC: (KeyEncoding.RAW,),
    AlgorithmFamily.RSA: (KeyEncoding.PKCS1_RSA, KeyEncoding.PKCS8),
    AlgorithmFamily.RSA_PSS: (KeyEncoding.PKCS1_RSA, KeyEncoding.PKCS8),
    AlgorithmFamily.ECDSA: (KeyEncoding.SEC1_EC, KeyEncoding.PKCS8),
    AlgorithmFamily.EDDSA: (KeyEncoding.PKCS8,),
}

EC_CURVES = {
    "ES256": "secp256r1",
    "ES384": "secp384r1",
    "ES512": "secp521r1",
}

_CATALOGUE = (
    ("HS256", "HMAC using SHA-256"),
    ("HS384", "HMAC using SHA-384"),
    ("HS512", "HMAC using SHA-512"),
    ("RS256", "RSA using SHA-256"),
    ("RS384", "RSA using SHA-384"),
    ("RS512", "RSA using SHA-512"),
    ("PS256", "RSA-PSS using SHA-256"),
    ("ES256", "ECDSA using P-256 and SHA-256"),
    ("ES384", "ECDSA using P-384 and SHA-384"),
    ("ES512", "ECDSA using P-521 and SHA-512"),
    ("EdDSA", "EdDSA signature algorithms"),
)


def family_from_prefix(alg_id: str) -> AlgorithmFamily | None:
    """Derive the family of an identifier from its JOSE prefix."""
    if alg_id == "EdDSA":
        return AlgorithmFamily.EDDSA
    prefixes = {
        "HS": AlgorithmFamily.HMAC,
        "RS": AlgorithmFamily.RSA,
        "PS": AlgorithmFamily.RSA_PSS,
        "ES": AlgorithmFamily.ECDSA,
    }
    return prefixes.get(alg_id[:2])


def _build_registry() -> MappingProxyType[str, AlgorithmSpec]:
    entries: dict[str, AlgorithmSpec] = {}
    for alg_id, description in _CATALOGUE:
        family = family_from_prefix(alg_id)
        assert family is not None
        entries[alg_id] = AlgorithmSpec(
            id=alg_id,
            family=family,
            accepted_encodings=ACCEPTED_ENCODINGS[family],
            description=description,
            curve=EC_CURVES.get(alg_id),
        )
    return MappingProxyType(entries)


_REGISTRY = _build_registry()
_PRIMITIVES: dict[str, Algorithm] = {
    alg_id: primitive
    for alg_id, primitive in get_default_algorithms().items()
    if alg_id in _REGISTRY
}


def find_algorithm(alg_id: str) -> AlgorithmSpec | None:
    """Return the registry entry for ``alg_id`` or ``None``."""
    return _REGISTRY.get(alg_id)


def lookup_algorithm(alg_id: str) -> AlgorithmSpec:
    """Return the registry entry for ``alg_id``.

    Raises:
        UnsupportedAlgorithmError: if the identifier is not registered.
    """
    spec = find_algorithm(alg_id)
    if spec is None:
        raise UnsupportedAlgorithmError(alg_id)
    return spec


def algorithm_family(alg_id: str) -> AlgorithmFamily:
    return lookup_algorithm(alg_id).family


def list_algorithms() -> list[AlgorithmSpec]:
    """All registered algorithms in catalogue order."""
    return list(_REGISTRY.values())


def signature_primitive(spec: AlgorithmSpec) -> Algorithm:
    """PyJWT signature primitive implementing ``spec``."""
    primitive = _PRIMITIVES.get(spec.id)
    if primitive is None:
        raise UnsupportedAlgorithmError(spec.id)
    return primitive
