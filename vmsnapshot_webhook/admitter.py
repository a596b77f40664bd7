import logging

import vmsnapshot_webhook.constants as const
from vmsnapshot_webhook.admission_request import AdmissionRequest
from vmsnapshot_webhook.causes import FieldPath, StatusCause
from vmsnapshot_webhook.exceptions import (
    BaseWebhookException,
    NotFoundException,
    UnexpectedOperationError,
    UnexpectedResourceError,
)
from vmsnapshot_webhook.snapshot import VirtualMachineReference, VirtualMachineSnapshot

SPEC_FIELD = FieldPath("spec")
SOURCE_FIELD = SPEC_FIELD.child("source")


class Decision:
    """
    Outcome of an admission that didn't fail. The request is allowed iff no
    causes were found.
    """

    causes: list

    def __init__(self, causes: list = None):
        self.causes = list(causes or [])

    @property
    def allowed(self):
        return not self.causes

    @property
    def message(self):
        return " ".join(cause.message for cause in self.causes)

    def __eq__(self, other):
        if not isinstance(other, Decision):
            return NotImplemented
        return self.causes == other.causes

    def __repr__(self):
        return f"Decision({self.causes!r})"


class VMSnapshotAdmitter:
    """
    Validates VirtualMachineSnapshots on creation and update.
    """

    def __init__(
        self,
        vm_api,
        group: str = const.SNAPSHOT_GROUP,
        resource: str = const.SNAPSHOT_RESOURCE,
    ):
        self.vm_api = vm_api
        self.group = group
        self.resource = resource
        self.__reference_validators = {
            VirtualMachineReference.field: self.validate_create_vm,
        }

    def admit(self, admission_request: AdmissionRequest) -> Decision:
        """
        Decide on the `admission_request`. Return a `Decision`, holding the
        causes for a denial if there are any.

        Raise `UnexpectedResourceError` if the request is for another resource,
        `InvalidSnapshotFormatError` if an object can't be decoded and
        `UnexpectedOperationError` for operations other than CREATE and UPDATE.
        Errors of the VirtualMachine lookup, other than it not existing,
        propagate.
        """
        try:
            if (
                admission_request.resource_group != self.group
                or admission_request.resource != self.resource
            ):
                msg = "Unexpected resource {resource}."
                raise UnexpectedResourceError(
                    message=msg, resource=admission_request.resource_descriptor
                )

            snapshot = VirtualMachineSnapshot(admission_request.object)

            operation = admission_request.operation.upper()
            if operation == const.CREATE:
                causes = self.__admit_create(snapshot, admission_request.namespace)
            elif operation == const.UPDATE:
                previous = VirtualMachineSnapshot(admission_request.old_object)
                causes = self.__admit_update(previous, snapshot)
            else:
                msg = "unexpected operation {operation}"
                raise UnexpectedOperationError(message=msg, operation=operation)
        except BaseWebhookException as err:
            err.update_context(**admission_request.context)
            raise err

        decision = Decision(causes)
        if decision.allowed:
            logging.info(
                "admitted VirtualMachineSnapshot.", extra=admission_request.context
            )
        else:
            logging.info(
                'rejected VirtualMachineSnapshot: "%s"',
                decision.message,
                extra=admission_request.context,
            )
        return decision

    def __admit_create(self, snapshot: VirtualMachineSnapshot, namespace: str):
        reference = snapshot.spec.source.reference
        if reference is None:
            return [
                StatusCause(
                    const.CAUSE_FIELD_VALUE_NOT_FOUND,
                    "missing source name",
                    SOURCE_FIELD,
                )
            ]

        validate = self.__reference_validators[reference.field]
        return validate(SOURCE_FIELD.child(reference.field), namespace, reference.name)

    @staticmethod
    def __admit_update(previous: VirtualMachineSnapshot, snapshot: VirtualMachineSnapshot):
        if previous.spec != snapshot.spec:
            return [
                StatusCause(
                    const.CAUSE_FIELD_VALUE_INVALID,
                    "spec in immutable after creation",
                    SPEC_FIELD,
                )
            ]
        return []

    def validate_create_vm(self, field: FieldPath, namespace: str, name: str):
        """
        Check that the VirtualMachine `name` exists in `namespace` and isn't
        running. Return the found causes, bound to `field`.
        """
        try:
            vm = self.vm_api.get(namespace, name)
        except NotFoundException:
            # kept as FieldValueInvalid, clients depend on it
            return [
                StatusCause(
                    const.CAUSE_FIELD_VALUE_INVALID,
                    f'VirtualMachine "{name}" does not exist',
                    field,
                )
            ]

        causes = []
        if vm.running:
            causes.append(
                StatusCause(
                    const.CAUSE_FIELD_VALUE_INVALID,
                    f'VirtualMachine "{name}" is running',
                    field,
                )
            )
        return causes
