"""Key material classification and PEM line-break repair."""

import re

from jencoder.crypto.types import KeyEncoding, KeyMaterial

PEM_LABELS: dict[str, KeyEncoding] = {
    "RSA PRIVATE KEY": KeyEncoding.PKCS1_RSA,
    "EC PRIVATE KEY": KeyEncoding.SEC1_EC,
    "PRIVATE KEY": KeyEncoding.PKCS8,
}

_ANY_PEM_HEADER = "-----BEGIN "


def pem_header(label: str) -> str:
    return f"-----BEGIN {label}-----"


def pem_footer(label: str) -> str:
    return f"-----END {label}-----"


def _detect_label(text: str) -> str | None:
    for label in PEM_LABELS:
        if pem_header(label) in text:
            return label
    return None


def classify_key_material(text: str) -> KeyEncoding:
    """Tag key text by its PEM header.

    Text without any PEM framing is a raw symmetric secret; framed text whose
    label is not a supported private key type is ``UNKNOWN``.
    """
    label = _detect_label(text)
    if label is not None:
        return PEM_LABELS[label]
    if _ANY_PEM_HEADER in text:
        return KeyEncoding.UNKNOWN
    return KeyEncoding.RAW


def _repair_line_breaks(text: str, label: str) -> str:
    """Put header and footer of a single-line PEM block on their own lines."""
    if "\n" in text or "\r" in text:
        return text
    header, footer = pem_header(label), pem_footer(label)
    pattern = re.compile(
        rf"({re.escape(header)})[ \t]*(.*?)[ \t]*({re.escape(footer)})",
        re.DOTALL,
    )
    return pattern.sub(r"\1\n\2\n\3", text, count=1)


def normalize_key_material(raw: str) -> KeyMaterial:
    """Trim, repair and classify user-supplied key text. Never raises."""
    text = raw.strip()
    label = _detect_label(text)
    if label is not None and pem_footer(label) in text:
        text = _repair_line_breaks(text, label)
    return KeyMaterial(
        raw=raw,
        text=text,
        detected_encoding=classify_key_material(text),
    )


def extract_pem_body(text: str, label: str) -> str | None:
    """Return the base64 body between a matching header/footer pair."""
    pattern = re.compile(
        rf"{re.escape(pem_header(label))}(.*?){re.escape(pem_footer(label))}",
        re.DOTALL,
    )
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1)
