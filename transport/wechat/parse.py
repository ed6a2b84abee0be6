"""
WeChat Inbound Parsing

PURE CONVERSION - NO LOGIC, NO MODEL CALLS

Converts the XML body of a callback POST into an InboundMessage.
Every direct child of the root element becomes a field; unknown elements
are ignored and missing ones take their defaults.
"""

import xml.etree.ElementTree as ET

from pydantic import ValidationError

from .schemas import InboundMessage


class MalformedMessageError(Exception):
    """Callback body could not be parsed."""
    pass


def parse_message(body: bytes | str) -> InboundMessage:
    """
    Parse a WeChat callback XML document.

    Args:
        body: Raw request body

    Returns:
        InboundMessage

    Raises:
        MalformedMessageError: Body is empty, not XML, or has bad field values
    """

    if not body or not body.strip():
        raise MalformedMessageError("Empty body")

    try:
        root = ET.fromstring(body)
    except (ET.ParseError, ValueError) as e:
        raise MalformedMessageError(f"Invalid XML: {e}")

    fields = {child.tag: (child.text or "") for child in root}

    # An empty CreateTime is treated as absent
    if "CreateTime" in fields and not fields["CreateTime"].strip():
        del fields["CreateTime"]

    try:
        return InboundMessage(**fields)
    except ValidationError as e:
        raise MalformedMessageError(f"Invalid field value: {e}")
