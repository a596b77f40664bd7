import os

import yaml

import vmsnapshot_webhook.constants as const
from vmsnapshot_webhook.exceptions import (
    InvalidConfigurationFormatError,
    NotFoundException,
)
from vmsnapshot_webhook.util import RES_DIR, validate_schema


class Config:
    """
    Config object that contains the webhook's settings. Values that aren't
    configured fall back to the defaults in `constants`.
    """

    __PATH = "/app/config/config.yaml"
    __SCHEMA_PATH = os.path.join(RES_DIR, "config_schema.json")
    snapshot_group: str = const.SNAPSHOT_GROUP
    snapshot_resource: str = const.SNAPSHOT_RESOURCE
    vm_api_version: str = const.VIRTUAL_MACHINE_API_VERSION
    kube_api_timeout: float = const.KUBE_API_TIMEOUT_SECONDS

    def __init__(self):
        """
        Create a Config object. Read the configuration file, if there is one,
        and validate its contents.

        Raise `NotFoundException` if the configuration file is empty.

        Raise `InvalidConfigurationFormatError` if the configuration file has an
        invalid format.
        """
        if not os.path.exists(self.__PATH):
            return

        with open(self.__PATH, "r", encoding="utf-8") as configfile:
            config = yaml.safe_load(configfile)

        if not config:
            msg = "Error loading webhook config file {path}."
            raise NotFoundException(message=msg, path=self.__PATH)

        validate_schema(
            config,
            self.__SCHEMA_PATH,
            "Webhook configuration",
            InvalidConfigurationFormatError,
        )

        snapshot = config.get("snapshot", {})
        self.snapshot_group = snapshot.get("group", self.snapshot_group)
        self.snapshot_resource = snapshot.get("resource", self.snapshot_resource)
        self.vm_api_version = config.get("virtualMachine", {}).get(
            "apiVersion", self.vm_api_version
        )
        self.kube_api_timeout = config.get("kubeApi", {}).get(
            "timeout", self.kube_api_timeout
        )
