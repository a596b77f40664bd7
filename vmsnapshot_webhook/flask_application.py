import logging
import traceback

from flask import Flask, jsonify, request
from prometheus_flask_exporter import NO_PREFIX, PrometheusMetrics

import vmsnapshot_webhook.constants as const
from vmsnapshot_webhook.admission_request import AdmissionRequest
from vmsnapshot_webhook.admitter import VMSnapshotAdmitter
from vmsnapshot_webhook.config import Config
from vmsnapshot_webhook.exceptions import BaseWebhookException
from vmsnapshot_webhook.kube_api import VirtualMachineAPI
from vmsnapshot_webhook.util import get_admission_review

APP = Flask(__name__)
"""
Flask application that admits the VirtualMachineSnapshot requests sent to the k8s
cluster, validates them and sends the response back.
"""
CONFIG = Config()
ADMITTER = VMSnapshotAdmitter(
    VirtualMachineAPI(CONFIG.vm_api_version, CONFIG.kube_api_timeout),
    group=CONFIG.snapshot_group,
    resource=CONFIG.snapshot_resource,
)

metrics = PrometheusMetrics(
    APP,
    defaults_prefix=NO_PREFIX,
    buckets=(0.05, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 10.0, float("inf")),
)
"""
Provides metrics for the Flask application
"""


@APP.route(const.VALIDATE_PATH, methods=["POST"])
@metrics.counter(
    "validate_requests_total",
    "Total number of validate requests",
    labels={
        "allowed": lambda r: metrics_label(r, "allowed"),
        "status_code": lambda r: metrics_label(r, "status_code"),
    },
)
def validate():
    """
    Handle the VirtualMachineSnapshot validation path and accept CREATE and
    UPDATE requests. Send a response back, which either allows the request,
    denies it with the causes found or reports an error.
    """
    admission_request = None
    try:
        ad_review = request.get_json(silent=True)
        logging.debug(ad_review)
        admission_request = AdmissionRequest(ad_review)
        decision = ADMITTER.admit(admission_request)
    except Exception as err:  # pylint: disable=broad-except
        if isinstance(err, BaseWebhookException):
            err_log = str(err)
            msg = err.user_msg
            code = err.status_code
        else:
            err_log = str(traceback.format_exc())
            msg = "unknown error. please check the logs."
            code = 500
        logging.error(err_log)
        uid = admission_request.uid if admission_request else ""
        api_version = admission_request.api_version if admission_request else None
        return jsonify(
            get_admission_review(
                uid, False, msg=msg, code=code, api_version=api_version
            )
        )

    if decision.allowed:
        review = get_admission_review(
            admission_request.uid, True, api_version=admission_request.api_version
        )
    else:
        review = get_admission_review(
            admission_request.uid,
            False,
            causes=decision.causes,
            msg=decision.message,
            api_version=admission_request.api_version,
        )
    return jsonify(review)


def metrics_label(response, label):
    json_response = response.get_json(silent=True)
    if json_response:
        if label == "allowed":
            return json_response["response"]["allowed"]
        elif label == "status_code":
            return json_response["response"]["status"]["code"]
    return json_response


# health probe
@APP.route("/health", methods=["GET", "POST"])
@metrics.do_not_track()
def healthz():
    """
    Handle the '/health' endpoint and check the health status of the web server.
    Send back '200' status code.
    """

    return "", 200


# readiness probe
@APP.route("/ready", methods=["GET", "POST"])
@metrics.do_not_track()
def readyz():
    return "", 200
