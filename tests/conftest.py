import json
import os
import re
from contextlib import contextmanager

import pytest
import requests

import vmsnapshot_webhook.kube_api
from vmsnapshot_webhook.exceptions import ResourceNotFoundError
from vmsnapshot_webhook.virtual_machine import VirtualMachine


"""
This file is used for sharing fixtures across all other test files.
https://docs.pytest.org/en/stable/fixture.html#scope-sharing-fixtures-across-classes-modules-packages-or-session
"""

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


@contextmanager
def no_exc():
    yield


def get_json(path):
    with open(path, "r") as file:
        return json.load(file)


def get_admreq(adm_type):
    try:
        return get_json(
            f"{DATA_DIR}/sample_admission_requests/ad_request_{adm_type}.json"
        )
    except FileNotFoundError:
        return None


def get_k8s_res(path):
    return get_json(f"{DATA_DIR}/sample_kube_resources/{path}.json")


def snapshot_object(vm_name=None, name="snap", labels=None, **source):
    if vm_name is not None:
        source["virtualMachineName"] = vm_name
    return {
        "apiVersion": "snapshot.kubevirt.io/v1alpha1",
        "kind": "VirtualMachineSnapshot",
        "metadata": {"name": name, "namespace": "default", "labels": labels or {}},
        "spec": {"source": source},
    }


def ad_review(
    operation="CREATE",
    obj=None,
    old_obj=None,
    group="snapshot.kubevirt.io",
    resource="virtualmachinesnapshots",
    namespace="default",
):
    request = {
        "uid": "705ab4f5-6393-11e8-b7cc-42010a800002",
        "kind": {
            "group": "snapshot.kubevirt.io",
            "version": "v1alpha1",
            "kind": "VirtualMachineSnapshot",
        },
        "resource": {"group": group, "version": "v1alpha1", "resource": resource},
        "namespace": namespace,
        "operation": operation,
        "userInfo": {"username": "admin"},
        "object": obj,
    }
    if old_obj is not None:
        request["oldObject"] = old_obj
    return {
        "apiVersion": "admission.k8s.io/v1",
        "kind": "AdmissionReview",
        "request": request,
    }


@pytest.fixture
def adm_req_samples():
    return [
        get_admreq(t)
        for t in (
            "create",
            "create_running",
            "create_missing_vm",
            "create_no_source",
            "update_unchanged",
            "update_changed",
            "wrong_resource",
            "delete",
            "err",
        )
    ]


@pytest.fixture
def m_request(monkeypatch):
    monkeypatch.setattr(requests, "get", mock_get_request)
    monkeypatch.setattr(vmsnapshot_webhook.kube_api, "__get_token", kube_token)


class MockResponse:
    content: dict
    headers: dict
    status_code: int = 200

    def __init__(self, content: dict, headers: dict = None, status_code: int = 200):
        self.content = content
        self.headers = headers
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code != 200:
            raise requests.exceptions.HTTPError

    def json(self):
        return self.content


def mock_get_request(url, **kwargs):
    vm_regex = [
        (
            r"https:\/\/[^\/]+\/apis\/([^\/]+\/[^\/]+)"
            r"\/namespaces\/([^\/]+)\/virtualmachines\/([^\/]+)"
        ),
        mock_request_vm,
    ]

    for reg in (vm_regex,):
        match = re.search(reg[0], url)

        if match:
            return reg[1](match, **kwargs)
    return MockResponse({}, status_code=500)


def mock_request_vm(match: re.Match, **kwargs):
    api_version, namespace, name = match.group(1), match.group(2), match.group(3)

    if name == "vm-unreachable":
        raise requests.exceptions.ConnectionError
    if name == "vm-broken":
        return MockResponse({}, status_code=500)
    try:
        return MockResponse(get_k8s_res(f"virtualmachines/{name}"))
    except FileNotFoundError:
        return MockResponse({}, status_code=404)


def kube_token(path: str):
    return ""


class FakeVirtualMachineAPI:
    """
    In-memory stand in for the VirtualMachine read-back, recording its calls.
    """

    def __init__(self, vms: dict = None, error: Exception = None):
        self.vms = vms or {}
        self.error = error
        self.calls = []

    def get(self, namespace: str, name: str):
        self.calls.append((namespace, name))
        if self.error:
            raise self.error
        try:
            return VirtualMachine(self.vms[(namespace, name)])
        except KeyError as err:
            raise ResourceNotFoundError(message="not found") from err


def vm_resource(name, namespace="default", running=None):
    vm = {
        "apiVersion": "kubevirt.io/v1alpha3",
        "kind": "VirtualMachine",
        "metadata": {"name": name, "namespace": namespace},
        "spec": {"template": {"spec": {}}},
    }
    if running is not None:
        vm["spec"]["running"] = running
    return vm


@pytest.fixture
def fake_vm_api():
    return FakeVirtualMachineAPI(
        {
            ("default", "vm1"): vm_resource("vm1", running=True),
            ("default", "vm-stopped"): vm_resource("vm-stopped", running=False),
            ("default", "vm-unset"): vm_resource("vm-unset"),
        }
    )
