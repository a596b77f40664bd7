from vmsnapshot_webhook.exceptions import InvalidFormatException


class VirtualMachine:
    """
    Point-in-time view of a kubevirt VirtualMachine, as read from the
    kubernetes API.
    """

    name: str
    namespace: str

    def __init__(self, data: dict):
        if not isinstance(data, dict):
            msg = "VirtualMachine has an invalid format: {data_type} is not an object."
            raise InvalidFormatException(message=msg, data_type=type(data).__name__)
        if data.get("kind") != "VirtualMachine":
            msg = "Expected a VirtualMachine, got {kind}."
            raise InvalidFormatException(message=msg, kind=data.get("kind"))

        metadata = data.get("metadata") or {}
        self.name = metadata.get("name")
        self.namespace = metadata.get("namespace")
        self._spec = data.get("spec") or {}

    @property
    def running(self):
        # an unset or null `running` means stopped
        return self._spec.get("running") is True

    def __str__(self):
        return f"{self.namespace}/{self.name}"
