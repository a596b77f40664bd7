"""
Main method for the VirtualMachineSnapshot webhook. Start the web server.
"""

import os
from logging.config import dictConfig

from cheroot.server import HTTPServer
from cheroot.ssl.builtin import BuiltinSSLAdapter
from cheroot.wsgi import Server

from vmsnapshot_webhook.flask_application import APP
from vmsnapshot_webhook.logging import RequestLoggingWrapper

if __name__ == "__main__":
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", "5000"))

    dictConfig(
        {
            "version": 1,
            "formatters": {
                "json": {"class": "vmsnapshot_webhook.logging.JsonLogFormatter"},
            },
            "handlers": {
                "wsgi": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                },
            },
            "root": {"level": LOG_LEVEL, "handlers": ["wsgi"]},
        }
    )

    HTTPServer.ssl_adapter = BuiltinSSLAdapter(
        certificate="/app/certs/tls.crt", private_key="/app/certs/tls.key"
    )

    app = RequestLoggingWrapper(APP, LOG_LEVEL)

    server = Server(("0.0.0.0", PORT), app)  # nosec
    server.start()
