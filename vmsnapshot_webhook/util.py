import json
import os
import re
from typing import Optional

from jsonschema import FormatChecker, validate, ValidationError

import vmsnapshot_webhook.constants as const

RES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "res")


def get_admission_review(
    uid: str,
    allowed: bool,
    causes: Optional[list] = None,
    msg: Optional[str] = None,
    code: Optional[int] = None,
    api_version: Optional[str] = None,
):
    """
    Get a standardized response object for the request, carrying either the
    structured causes of a denial or the message of an error.

    Parameters
    ----------
    uid : str
        The uid of the request that was sent to the webhook.
    allowed : bool
        The decision, whether the request will be accepted or denied.
    causes : list (optional)
        A list of `StatusCause` objects. If given, the response is an
        `Invalid` denial with the causes attached as status details.
    msg : str (optional)
        The message, which will be displayed, should allowed be 'False'.
    code : int (optional)
        The status code. Defaults to 200 for allowed requests, 422 for
        requests denied with causes and 403 otherwise.
    api_version : str (optional)
        The apiVersion of the incoming AdmissionReview, which the response
        must repeat. Derived from the kubernetes version if not given.

    Return
    ----------
    AdmissionReview : dict
        Response is an AdmissionReview with following structure:

        {
          "apiVersion": "admission.k8s.io/v1",
          "kind": "AdmissionReview",
          "response": {
            "uid": uid,
            "allowed": false,
            "status": {
                "code": 422,
                "reason": "Invalid",
                "message": "spec in immutable after creation",
                "details": {
                    "causes": [
                        {
                            "type": "FieldValueInvalid",
                            "message": "spec in immutable after creation",
                            "field": "spec"
                        }
                    ]
                }
            }
          }
        }
    """
    if not api_version:
        _, minor, _ = get_kube_version()
        api_version = f"admission.k8s.io/{'v1beta1' if int(minor) < 17 else 'v1'}"

    if not code:
        if allowed:
            code = 200
        else:
            code = 422 if causes else 403

    review = {
        "apiVersion": api_version,
        "kind": "AdmissionReview",
        "response": {
            "uid": uid,
            "allowed": allowed,
            "status": {"code": code},
        },
    }

    if msg:
        review["response"]["status"]["message"] = msg

    if causes:
        review["response"]["status"]["reason"] = const.STATUS_REASON_INVALID
        review["response"]["status"]["details"] = {
            "causes": [cause.to_dict() for cause in causes]
        }

    return review


def validate_schema(data, schema_path: str, kind: str, exception):
    with open(schema_path, "r", encoding="utf-8") as schema_file:
        schema = json.load(schema_file)

    try:
        validate(instance=data, schema=schema, format_checker=FormatChecker())
    except ValidationError as err:
        msg = "{validation_kind} has an invalid format: {validation_err}."
        raise exception(
            message=msg,
            validation_kind=kind,
            validation_err=err.message,
        ) from err


def get_kube_version():
    """
    Return the kubernetes version.

     Return
    ----------
    (major, minor, patch): Tupel<str, str, str>
        Major and minor version can always be assumed to be parseable as `int`s, the
        patch version could be arbitrary text.
    """
    version = os.environ.get("KUBE_VERSION", "v0.0.0")  # e.g. `v1.20.0`
    regex = r"v(\d)\.(\d{1,2})\.(.*)"
    match = re.match(regex, version)
    return match.groups() if match else ("0", "0", "0")
