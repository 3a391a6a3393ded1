"""AvaTax tenant configuration stored in Saleor private metadata.

Two metadata entries make up the configuration:

- ``provider-connections``: JSON list of AvaTax connections (credentials,
  company, ship-from address)
- ``channel-configuration``: JSON list mapping channel slugs to connections
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from src.infrastructure.saleor.models import SaleorModel

PROVIDER_CONNECTIONS_KEY = "provider-connections"
CHANNEL_CONFIGURATION_KEY = "channel-configuration"


class AvataxCredentials(SaleorModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AvataxCompanyAddress(SaleorModel):
    """Ship-from address of the merchant."""

    country: str = ""
    zip: str = ""
    state: str = ""
    city: str = ""
    street: str = ""
    street2: str | None = None


class AvataxConnectionConfig(SaleorModel):
    name: str
    credentials: AvataxCredentials
    is_sandbox: bool = False
    company_code: str = "DEFAULT"
    is_autocommit: bool = False
    shipping_tax_code: str = "FR000000"
    is_document_recording_enabled: bool = True
    address: AvataxCompanyAddress


class ProviderConnection(SaleorModel):
    id: str
    provider: Literal["avatax"] = "avatax"
    config: AvataxConnectionConfig


class ChannelConfigProperties(SaleorModel):
    channel_slug: str
    provider_connection_id: str | None = None


class ChannelConfig(SaleorModel):
    id: str
    config: ChannelConfigProperties


class AppConfig(SaleorModel):
    """Complete AvaTax configuration of one tenant."""

    provider_connections: list[ProviderConnection] = Field(default_factory=list)
    channels: list[ChannelConfig] = Field(default_factory=list)

    def get_channel_config(self, channel_slug: str) -> ChannelConfig | None:
        for channel in self.channels:
            if channel.config.channel_slug == channel_slug:
                return channel
        return None

    def get_connection_for_channel(
        self, channel_slug: str
    ) -> ProviderConnection | None:
        """Resolve the provider connection assigned to a channel.

        Returns:
            ProviderConnection | None: None when the channel is not mapped or
                points at a connection that no longer exists.
        """
        channel = self.get_channel_config(channel_slug)
        if channel is None or channel.config.provider_connection_id is None:
            return None
        for connection in self.provider_connections:
            if connection.id == channel.config.provider_connection_id:
                return connection
        return None
