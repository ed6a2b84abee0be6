"""
WeChat Webhook Handler

Receives WeChat Official Account callbacks and answers them through the
bridge's reply policy.

Security:
  - GET handshake verified against WECHAT_TOKEN (fails closed)

Message Flow:
  webhook → parse_message → reply_policy → render_text_reply
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from infra import InfraBootstrap
from transport.wechat import (
    MalformedMessageError,
    REPLY_CONTENT_TYPE,
    SignatureVerificationError,
    parse_message,
    render_text_reply,
    verify_webhook_challenge,
)

# Setup logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=["webhook"])


def get_bridge(request: Request) -> InfraBootstrap:
    """Bridge components owned by the running app."""
    return request.app.state.bridge


@router.get("/wx")
async def wechat_handshake(
    signature: str = "",
    timestamp: str = "",
    nonce: str = "",
    echostr: str = "",
    bridge: InfraBootstrap = Depends(get_bridge),
):
    """
    Validate the callback URL.

    WeChat calls GET /wx with signature, timestamp, nonce and echostr.
    The echostr is echoed back only if the signature matches.
    """
    try:
        echo = verify_webhook_challenge(
            bridge.wechat_token, signature, timestamp, nonce, echostr
        )
    except SignatureVerificationError:
        logger.warning("WeChat handshake rejected")
        return PlainTextResponse("Forbidden", status_code=403)

    logger.info("WeChat handshake accepted")
    return PlainTextResponse(echo)


@router.post("/wx")
async def wechat_message(request: Request, bridge: InfraBootstrap = Depends(get_bridge)):
    """
    Receive a WeChat message and reply synchronously.

    Expected payload:
        <xml>
          <ToUserName><![CDATA[gh_account]]></ToUserName>
          <FromUserName><![CDATA[openid]]></FromUserName>
          <CreateTime>1700000000</CreateTime>
          <MsgType><![CDATA[text]]></MsgType>
          <Content><![CDATA[你好]]></Content>
          <MsgId>1234567890</MsgId>
        </xml>

    Returns:
        Passive text reply XML (application/xml), or 400 on a bad body
    """
    body = await request.body()

    try:
        msg = parse_message(body)
    except MalformedMessageError as e:
        logger.error(f"Failed to parse WeChat message: {e}")
        return PlainTextResponse("Bad Request", status_code=400)

    logger.info(
        f"Received {msg.msg_type} from {msg.from_user_name}",
        extra={"sender_id": msg.from_user_name, "msg_type": msg.msg_type},
    )

    reply_text = await bridge.get_reply_policy().reply(
        sender_id=msg.from_user_name,
        msg_type=msg.msg_type,
        content=msg.content,
        event=msg.event,
    )

    reply = render_text_reply(
        to_user=msg.from_user_name,
        from_user=msg.to_user_name,
        content=reply_text,
    )
    return Response(content=reply, media_type=REPLY_CONTENT_TYPE)
