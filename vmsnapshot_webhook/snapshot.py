import json
import os
from typing import Optional

from vmsnapshot_webhook.exceptions import InvalidSnapshotFormatError
from vmsnapshot_webhook.util import RES_DIR, validate_schema


class SourceReference:
    """
    A populated variant of a snapshot's source, pointing to the entity that
    is meant to be snapshotted.
    """

    field: str
    kind: str

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        return type(self) is type(other) and self.name == other.name

    def __str__(self):
        return f"{self.kind}/{self.name}"


class VirtualMachineReference(SourceReference):
    field = "virtualMachineName"
    kind = "VirtualMachine"


class SnapshotSource:
    # order defines precedence, if more than one variant is set
    variants = [VirtualMachineReference]

    def __init__(self, source: Optional[dict]):
        source = source or {}
        self.__references = {
            variant.field: source.get(variant.field) for variant in self.variants
        }

    @property
    def virtual_machine_name(self):
        return self.__references[VirtualMachineReference.field]

    @property
    def reference(self) -> Optional[SourceReference]:
        """
        Return the first populated source variant, or None if no recognized
        variant is set.
        """
        for variant in self.variants:
            name = self.__references[variant.field]
            if name is not None:
                return variant(name)
        return None

    def __eq__(self, other):
        if not isinstance(other, SnapshotSource):
            return NotImplemented
        return all(
            self.__references[variant.field] == other.__references[variant.field]
            for variant in self.variants
        )


class SnapshotSpec:
    source: SnapshotSource

    def __init__(self, spec: Optional[dict]):
        spec = spec or {}
        self.source = SnapshotSource(spec.get("source"))

    def __eq__(self, other):
        if not isinstance(other, SnapshotSpec):
            return NotImplemented
        return self.source == other.source


class VirtualMachineSnapshot:
    """
    Decoded VirtualMachineSnapshot object, as submitted to the webhook.

    Accepts the already parsed object or its serialized JSON form. Fields
    that are not known are ignored.
    """

    __SCHEMA_PATH = os.path.join(RES_DIR, "vmsnapshot_schema.json")

    name: Optional[str]
    namespace: Optional[str]
    spec: SnapshotSpec

    def __init__(self, raw):
        if isinstance(raw, (bytes, str)):
            try:
                raw = json.loads(raw)
            except ValueError as err:
                msg = "VirtualMachineSnapshot is not valid JSON: {decode_err}."
                raise InvalidSnapshotFormatError(
                    message=msg, decode_err=str(err)
                ) from err

        validate_schema(
            raw, self.__SCHEMA_PATH, "VirtualMachineSnapshot", InvalidSnapshotFormatError
        )

        metadata = raw.get("metadata") or {}
        self.name = metadata.get("name")
        self.namespace = metadata.get("namespace")
        self.spec = SnapshotSpec(raw.get("spec"))
