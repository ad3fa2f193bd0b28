from __future__ import annotations

import hmac
import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import json_error
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    """Endpoints the external scheduler calls; runs must not overlap."""

    def job_token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = request.headers.get("X-Job-Token", "")
            if not container.job_token or not hmac.compare_digest(token, container.job_token):
                return json_error("Invalid job token", 403)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/jobs/absence-marking", methods=["POST"], endpoint="jobs_absence_marking")
    @job_token_required
    def jobs_absence_marking():
        now = now_local(container.timezone)
        report = container.absence_marking_job.run(now=now)
        logger.info(
            "absence marking at %s: %d marked, %d failure(s)", now, len(report.marked_absent), len(report.failures)
        )
        return jsonify({"success": not report.failures, **report.as_dict()})

    @app.route("/jobs/absence-notifications", methods=["POST"], endpoint="jobs_absence_notifications")
    @job_token_required
    def jobs_absence_notifications():
        now = now_local(container.timezone)
        report = container.absence_notification_job.run(now=now)
        logger.info("absence notifications at %s: %d sent, %d failure(s)", now, len(report.sent), len(report.failures))
        return jsonify({"success": not report.failures, **report.as_dict()})
