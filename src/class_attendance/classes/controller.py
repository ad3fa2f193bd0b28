from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_role, json_error, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, ScheduleConflictError, ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.class_service

    def _fields(data: dict) -> dict:
        return {
            "name": data.get("name") or "",
            "room": data.get("room") or "",
            "teacher_id": data.get("teacher_id"),
            "days": data.get("days") or [],
            "start": data.get("start") or "",
            "end": data.get("end") or "",
        }

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    @login_required
    def classes_create():
        data = request.get_json(silent=True) or {}
        try:
            class_id = service.create_class(current_role=current_role(), **_fields(data))
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ScheduleConflictError as e:
            return jsonify({"success": False, "message": str(e), "conflicting_class_id": e.conflicting_class_id}), 409
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "class_id": class_id}), 201

    @app.route("/api/classes/<class_id>", methods=["PUT"], endpoint="classes_update")
    @login_required
    def classes_update(class_id: str):
        data = request.get_json(silent=True) or {}
        try:
            service.update_class(current_role=current_role(), class_id=class_id, **_fields(data))
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ScheduleConflictError as e:
            return jsonify({"success": False, "message": str(e), "conflicting_class_id": e.conflicting_class_id}), 409
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True})

    @app.route("/api/classes/<class_id>/archive", methods=["POST"], endpoint="classes_toggle_archive")
    @login_required
    def classes_toggle_archive(class_id: str):
        try:
            archived = service.toggle_archive(current_role=current_role(), class_id=class_id)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ScheduleConflictError:
            return json_error("Cannot unarchive class due to schedule conflict.", 409)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "archived": archived})

    @app.route("/api/classes/<class_id>/enrollments", methods=["POST"], endpoint="classes_enroll")
    @login_required
    def classes_enroll(class_id: str):
        data = request.get_json(silent=True) or {}
        try:
            service.enroll(current_role=current_role(), class_id=class_id, user_id=str(data.get("user_id") or ""))
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True}), 201

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="classes_delete")
    @login_required
    def classes_delete(class_id: str):
        try:
            service.delete_class(current_role=current_role(), class_id=class_id)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True})

    @app.route("/api/classes/<class_id>/enrollments/<user_id>", methods=["DELETE"], endpoint="classes_unenroll")
    @login_required
    def classes_unenroll(class_id: str, user_id: str):
        try:
            service.unenroll(current_role=current_role(), class_id=class_id, user_id=user_id)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True})
