"""Best-effort repair and pretty-printing of payload JSON text."""

import json
import logging

from json_repair import repair_json

from jencoder.tokens.claims import parse_claims

logger = logging.getLogger(__name__)

PRETTY_INDENT = 2


def repair_payload(text: str) -> str:
    """Repair ``text`` if possible and return it as indented JSON.

    Raises:
        InvalidPayloadError: if even the repaired text is not a JSON object.
    """
    try:
        repaired = repair_json(text)
    except (ValueError, RecursionError) as exc:
        logger.debug("JSON repair failed, using original text: %s", exc)
        repaired = text
    claims = parse_claims(repaired)
    return json.dumps(claims, indent=PRETTY_INDENT, ensure_ascii=False)
