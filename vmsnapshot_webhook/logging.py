import logging
from datetime import datetime as dt, timezone

from pythonjsonlogger import jsonlogger


class RequestLoggingWrapper:
    """
    Logging wrapper for a WSGI application that logs all HTTP requests
    """

    def __init__(self, app, log_level):
        # no handler of its own, records go to the root logger
        self.logger = logging.getLogger("wsgi")
        self.logger.setLevel(log_level)
        self.app = app

    def __call__(self, environ, start_response):
        status_codes = []

        def custom_start_response(status, response_headers, exc_info=None):
            status_codes.append(status.partition(" ")[0])
            return start_response(status, response_headers, exc_info)

        result = self.app(environ, custom_start_response)
        # the last status code is the one sent

        extra_logs = {
            "client_ip": environ.get("REMOTE_ADDR", ""),
            "method": environ.get("REQUEST_METHOD", ""),
            "path": environ.get("PATH_INFO", ""),
            "query": environ.get("QUERY_STRING", ""),
            "protocol": environ.get("SERVER_PROTOCOL", ""),
            "status_code": status_codes[-1] if status_codes else "",
        }

        if environ.get("PATH_INFO") in ["/ready", "/health"]:
            self.logger.debug("request log", extra=extra_logs)
        else:
            self.logger.info("request log", extra=extra_logs)
        return result


class JsonLogFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        if "timestamp" not in log_record:
            log_record["timestamp"] = str(dt.now(timezone.utc))

        for field in self._required_fields:
            log_record[field] = record.__dict__.get(field)
        log_record.update(message_dict)

        if log_record["message"] == "request log":
            del log_record["message"]

        jsonlogger.merge_record_extra(record, log_record, reserved=self._skip_fields)
