"""Channel senders and the dispatch table that routes to them.

Each ``NotificationChannel`` has exactly one ``ChannelSender``.  Adding a
channel means one sender here and one entry per lookup table in
``fanfare.channels.catalog``; the batch processor and orchestrator are
unaffected.
"""

from fanfare.channels.base import ChannelSender
from fanfare.channels.email import EmailChannel
from fanfare.channels.factory import build_dispatch_table, build_template_store
from fanfare.channels.in_app import IN_APP_ENDPOINT, InAppChannel
from fanfare.channels.push import PushChannel
from fanfare.channels.sms import SmsChannel
from fanfare.channels.stubs import ChatAppChannel, WebhookChannel
from fanfare.channels.table import ChannelDispatchTable, IncompleteDispatchTableError

__all__ = [
    "ChannelSender",
    "ChannelDispatchTable",
    "IncompleteDispatchTableError",
    "EmailChannel",
    "SmsChannel",
    "PushChannel",
    "InAppChannel",
    "IN_APP_ENDPOINT",
    "WebhookChannel",
    "ChatAppChannel",
    "build_dispatch_table",
    "build_template_store",
]
