"""Azure SDK client factory — credential selection and lazy client construction."""

from __future__ import annotations

import logging
from typing import Any, Optional

from azure.identity import ClientSecretCredential, DefaultAzureCredential
from azure.mgmt.logic import LogicManagementClient

from ...config import Settings, settings as default_settings
from ...errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_credential(cfg: Settings) -> Any:
    """Service principal when fully configured, otherwise the default chain."""
    if cfg.has_service_principal:
        logger.debug("Using service principal credential (client %s)", cfg.client_id)
        return ClientSecretCredential(
            tenant_id=cfg.tenant_id,
            client_id=cfg.client_id,
            client_secret=cfg.client_secret,
        )
    logger.debug("Using DefaultAzureCredential")
    return DefaultAzureCredential()


class AzureClients:
    """Lazily-initialised container for the Azure management clients."""

    def __init__(self, cfg: Optional[Settings] = None, credential: Any = None):
        self._settings = cfg or default_settings
        self._credential = credential
        self._logic: Optional[LogicManagementClient] = None

    @property
    def subscription_id(self) -> str:
        if not self._settings.subscription_id:
            raise ConfigurationError("No subscription configured — set AZLOGIC_SUBSCRIPTION_ID")
        return self._settings.subscription_id

    @property
    def credential(self) -> Any:
        if self._credential is None:
            self._credential = build_credential(self._settings)
        return self._credential

    @property
    def logic(self) -> LogicManagementClient:
        if self._logic is None:
            self._logic = LogicManagementClient(
                credential=self.credential,
                subscription_id=self.subscription_id,
            )
        return self._logic

    @property
    def workflows(self) -> Any:
        """The ``workflows`` operation group of the Logic client."""
        return self.logic.workflows
