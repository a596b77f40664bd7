import pytest
import vmsnapshot_webhook.exceptions as exc


@pytest.mark.parametrize(
    "message, kwargs, out_msg, out_context",
    [
        ("An error occurred.", {}, "An error occurred.", {}),
        (
            "unexpected operation {operation}",
            {"operation": "DELETE"},
            "unexpected operation DELETE",
            {"operation": "DELETE"},
        ),
    ],
)
def test_exception(message, kwargs, out_msg, out_context):
    err = exc.BaseWebhookException(message, **kwargs)
    assert err.message == out_msg
    assert err.user_msg == out_msg
    assert err.context == out_context
    assert str(err) == str({"message": out_msg, "context": out_context})


def test_update_context():
    err = exc.UnexpectedOperationError("unexpected operation {operation}", operation="DELETE")
    err.update_context(namespace="default", user="admin")
    assert err.context == {"operation": "DELETE", "namespace": "default", "user": "admin"}


@pytest.mark.parametrize(
    "err_class, status_code",
    [
        (exc.BaseWebhookException, 400),
        (exc.InvalidSnapshotFormatError, 400),
        (exc.UnexpectedResourceError, 400),
        (exc.UnreachableError, 500),
    ],
)
def test_status_code(err_class, status_code):
    assert err_class().status_code == status_code


def test_hierarchy():
    assert issubclass(exc.InvalidSnapshotFormatError, exc.InvalidFormatException)
    assert issubclass(exc.ResourceNotFoundError, exc.NotFoundException)
    assert not issubclass(exc.UnreachableError, exc.NotFoundException)
