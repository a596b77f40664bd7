import os

from vmsnapshot_webhook.exceptions import InvalidFormatException
from vmsnapshot_webhook.util import RES_DIR, validate_schema


class AdmissionRequest:
    __SCHEMA_PATH = os.path.join(RES_DIR, "ad_request_schema.json")

    def __init__(self, ad_request: dict):
        validate_schema(
            ad_request, self.__SCHEMA_PATH, "AdmissionRequest", InvalidFormatException
        )

        request = ad_request["request"]
        self.api_version = ad_request["apiVersion"]
        self.uid = request["uid"]
        self.kind = request["kind"]["kind"]
        self.resource_group = request["resource"]["group"]
        self.resource_version = request["resource"]["version"]
        self.resource = request["resource"]["resource"]
        self.namespace = request.get("namespace", "")
        self.operation = request["operation"]
        self.user = request.get("userInfo", {}).get("username")
        self.dry_run = request.get("dryRun", False)
        self.object = request.get("object")
        self.old_object = request.get("oldObject")
        self.name = request.get("name") or (
            ((self.object or {}).get("metadata") or {}).get("name")
        )

    @property
    def resource_descriptor(self):
        return {
            "group": self.resource_group,
            "version": self.resource_version,
            "resource": self.resource,
        }

    @property
    def context(self):
        return {
            "user": self.user,
            "operation": self.operation,
            "kind": self.kind,
            "name": self.name,
            "namespace": self.namespace,
            "dry_run": self.dry_run,
        }
