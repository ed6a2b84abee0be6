"""
WeChat Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the contract between the WeChat callback and the bridge.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ============================================================================
# INBOUND MESSAGE (THE CONTRACT)
# ============================================================================

class InboundMessage(BaseModel):
    """
    One message pushed by the WeChat Official Account callback.

    Field aliases are the XML element names. Elements WeChat leaves out
    default to empty values, so events and media parse as well as text.
    """

    to_user_name: str = Field("", alias="ToUserName", description="Official account ID")
    from_user_name: str = Field("", alias="FromUserName", description="Sender OpenID")
    create_time: int = Field(0, alias="CreateTime", description="Unix timestamp")
    msg_type: str = Field("", alias="MsgType", description="text, event, image, voice, ...")
    content: str = Field("", alias="Content", description="Text body (text messages)")
    event: str = Field("", alias="Event", description="Event name (event messages)")
    msg_id: Optional[str] = Field(None, alias="MsgId", description="Message ID (non-events), kept opaque")

    class Config:
        """Pydantic config."""
        frozen = True  # Immutable - transport shouldn't mutate
        populate_by_name = True
