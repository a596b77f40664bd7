# Webhooks time out after 30s at most, a hanging API server call has to fail before that
KUBE_API_TIMEOUT_SECONDS = 10
SNAPSHOT_GROUP = "snapshot.kubevirt.io"
SNAPSHOT_RESOURCE = "virtualmachinesnapshots"
VIRTUAL_MACHINE_API_VERSION = "kubevirt.io/v1alpha3"
VALIDATE_PATH = "/virtualmachinesnapshots-validate"

CREATE = "CREATE"
UPDATE = "UPDATE"

# metav1.CauseType values
CAUSE_FIELD_VALUE_NOT_FOUND = "FieldValueNotFound"
CAUSE_FIELD_VALUE_INVALID = "FieldValueInvalid"
STATUS_REASON_INVALID = "Invalid"
