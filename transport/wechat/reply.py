"""
WeChat Passive Reply Rendering

Builds the XML document returned in the body of the callback response.
No formatting intelligence.
"""

import time
from typing import Optional

REPLY_CONTENT_TYPE = "application/xml"


def cdata(text: str) -> str:
    """Wrap text in CDATA, splitting any ']]>' so the document stays well-formed."""
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def render_text_reply(
    to_user: str,
    from_user: str,
    content: str,
    create_time: Optional[int] = None,
) -> str:
    """
    Render a passive text reply.

    Args:
        to_user: Recipient (the original sender's OpenID)
        from_user: The official account ID (the original recipient)
        content: Reply text
        create_time: Unix timestamp; defaults to now

    Returns:
        XML document as text
    """
    if create_time is None:
        create_time = int(time.time())

    return (
        "<xml>"
        f"<ToUserName>{cdata(to_user)}</ToUserName>"
        f"<FromUserName>{cdata(from_user)}</FromUserName>"
        f"<CreateTime>{create_time}</CreateTime>"
        f"<MsgType>{cdata('text')}</MsgType>"
        f"<Content>{cdata(content)}</Content>"
        "</xml>"
    )
