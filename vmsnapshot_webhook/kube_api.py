import logging
import os

import requests

import vmsnapshot_webhook.constants as const
from vmsnapshot_webhook.exceptions import (
    InvalidResourceNameError,
    ResourceNotFoundError,
    UnreachableError,
)
from vmsnapshot_webhook.virtual_machine import VirtualMachine


def request_kube_api(path: str, timeout: float = const.KUBE_API_TIMEOUT_SECONDS):
    """
    Make an API call to the underlying Kubernetes API server with the given
    `path`.

    Raise `ResourceNotFoundError` if the server answers with 404.
    """

    token_path = os.environ.get("KUBE_API_TOKEN_PATH")
    ca_path = os.environ.get("KUBE_API_CA_PATH")
    kube_ip = os.environ.get("KUBERNETES_SERVICE_HOST")
    kube_port = os.environ.get("KUBERNETES_SERVICE_PORT")

    token = __get_token(token_path)

    url = f"https://{kube_ip}:{kube_port}/{path}"
    headers = {"Authorization": f"Bearer {token}"}

    response = requests.get(url, verify=ca_path, headers=headers, timeout=timeout)
    if response.status_code == 404:
        msg = "Resource {path} could not be found."
        raise ResourceNotFoundError(message=msg, path=path)
    response.raise_for_status()

    return response.json()


def __get_token(path: str):
    """
    Get the API token from the container's file system.
    """
    with open(path, "r", encoding="utf-8") as file:
        return file.read()


def validate_path_segment(kind: str, value: str):
    """
    Check that `value` can be used as a single segment of an API path.

    Raise `InvalidResourceNameError` otherwise.
    """
    if not value:
        msg = "{kind} name may not be empty."
        raise InvalidResourceNameError(message=msg, kind=kind)
    if value in (".", "..") or "/" in value or "%" in value:
        msg = "{kind} name {name} may not be \".\", \"..\" or contain \"/\" or \"%\"."
        raise InvalidResourceNameError(message=msg, kind=kind, name=value)


class VirtualMachineAPI:
    """
    Read access to kubevirt VirtualMachines. Holds no state besides the API
    version and timeout it was created with.
    """

    def __init__(
        self,
        api_version: str = const.VIRTUAL_MACHINE_API_VERSION,
        timeout: float = const.KUBE_API_TIMEOUT_SECONDS,
    ):
        self.api_version = api_version
        self.timeout = timeout

    def get(self, namespace: str, name: str) -> VirtualMachine:
        """
        Return the VirtualMachine `name` in `namespace`.

        Raise `InvalidResourceNameError` if `namespace` or `name` aren't valid path
        segments, `ResourceNotFoundError` if it doesn't exist and `UnreachableError`
        if it couldn't be looked up for any other reason.
        """
        validate_path_segment("Namespace", namespace)
        validate_path_segment("VirtualMachine", name)
        path = f"apis/{self.api_version}/namespaces/{namespace}/virtualmachines/{name}"
        logging.debug("looking up VirtualMachine %s/%s.", namespace, name)
        try:
            return VirtualMachine(request_kube_api(path, timeout=self.timeout))
        except requests.exceptions.RequestException as err:
            msg = "Unable to get VirtualMachine {namespace}/{name}: {error}"
            raise UnreachableError(
                message=msg, namespace=namespace, name=name, error=str(err)
            ) from err
