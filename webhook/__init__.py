"""
Webhook module - FastAPI route handlers for different platforms.

Includes:
- wechat.py: WeChat Official Account callback (handshake + messages)
"""

from webhook.wechat import router as wechat_router

__all__ = ["wechat_router"]
