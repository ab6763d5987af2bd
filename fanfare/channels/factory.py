"""Builds the dispatch table from configuration.

Each provider is chosen by its selector in ``FanfareConfig``: the real
backend or its degraded-mode mock.  Tests and the CLI may pass prebuilt
providers to override individual selections.
"""

from __future__ import annotations

import logging

from fanfare.channels.email import EmailChannel
from fanfare.channels.in_app import InAppChannel
from fanfare.channels.push import PushChannel
from fanfare.channels.sms import SmsChannel
from fanfare.channels.stubs import ChatAppChannel, WebhookChannel
from fanfare.channels.table import ChannelDispatchTable
from fanfare.config import FanfareConfig
from fanfare.providers import (
    ApiClient,
    EmailProvider,
    GotifyPushProvider,
    HttpSmsProvider,
    MockEmailProvider,
    MockParentServiceClient,
    MockPushProvider,
    MockSmsProvider,
    ParentServiceClient,
    ParentServiceProvider,
    PushProvider,
    SendGridEmailProvider,
    SmsProvider,
)
from fanfare.templating.renderer import TemplateRenderer
from fanfare.templating.resources import (
    ChainedTemplateStore,
    DirectoryTemplateStore,
    PackageTemplateStore,
    TemplateStore,
)

logger = logging.getLogger(__name__)


def build_template_store(config: FanfareConfig) -> TemplateStore:
    """Configured template directory first, packaged templates second."""
    if config.template_dir is None:
        return PackageTemplateStore()
    return ChainedTemplateStore(
        DirectoryTemplateStore(config.template_dir), PackageTemplateStore()
    )


def build_email_provider(config: FanfareConfig) -> EmailProvider:
    if config.email_provider == "sendgrid":
        return SendGridEmailProvider(
            config.sendgrid_api_key, timeout=config.request_timeout_seconds
        )
    return MockEmailProvider()


def build_sms_provider(config: FanfareConfig, api_client: ApiClient) -> SmsProvider:
    if config.sms_provider == "http":
        return HttpSmsProvider(config.sms_api_url, config.sms_api_key, api_client)
    return MockSmsProvider()


def build_push_provider(config: FanfareConfig, api_client: ApiClient) -> PushProvider:
    if config.push_provider == "gotify":
        return GotifyPushProvider(config.gotify_url, config.gotify_token, api_client)
    return MockPushProvider()


def build_parent_client(config: FanfareConfig, api_client: ApiClient) -> ParentServiceProvider:
    if config.in_app_provider == "parent":
        return ParentServiceClient(
            config.parent_server_url,
            config.parent_api_key,
            config.parent_secret_key,
            api_client,
        )
    return MockParentServiceClient()


def build_dispatch_table(
    config: FanfareConfig,
    *,
    renderer: TemplateRenderer | None = None,
    api_client: ApiClient | None = None,
    email_provider: EmailProvider | None = None,
    sms_provider: SmsProvider | None = None,
    push_provider: PushProvider | None = None,
    parent_client: ParentServiceProvider | None = None,
) -> ChannelDispatchTable:
    """Assemble a complete ``ChannelDispatchTable``.

    Parameters
    ----------
    config:
        Provides provider selectors, credentials and timeouts.
    renderer:
        Shared template renderer.  Built from ``config.template_dir`` when
        omitted.
    api_client:
        Shared HTTP client for the HTTP-based providers.  Built with
        ``config.request_timeout_seconds`` when omitted.  Callers that must
        close it pass their own, as ``NotificationOrchestrator`` does.
    email_provider, sms_provider, push_provider, parent_client:
        Prebuilt providers overriding the configured selection.

    Raises
    ------
    IncompleteDispatchTableError
        If the assembled table does not cover every channel.
    """
    renderer = renderer or TemplateRenderer(build_template_store(config))
    api_client = api_client or ApiClient(timeout=config.request_timeout_seconds)

    email_provider = email_provider or build_email_provider(config)
    sms_provider = sms_provider or build_sms_provider(config, api_client)
    push_provider = push_provider or build_push_provider(config, api_client)
    parent_client = parent_client or build_parent_client(config, api_client)

    table = ChannelDispatchTable(
        [
            EmailChannel(email_provider, renderer, config.email_from),
            SmsChannel(sms_provider, renderer, config.sms_sender_id),
            PushChannel(push_provider, renderer),
            InAppChannel(parent_client, renderer),
            WebhookChannel(),
            ChatAppChannel(),
        ]
    )
    logger.info(
        "Dispatch table built: email=%s sms=%s push=%s in_app=%s",
        email_provider.provider_name,
        sms_provider.provider_name,
        push_provider.provider_name,
        parent_client.provider_name,
    )
    return table
