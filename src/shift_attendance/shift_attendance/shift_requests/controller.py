from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .model import ShiftRequest

logger = logging.getLogger(__name__)


def _request_to_json(r: ShiftRequest) -> dict:
    return {
        "id": r.request_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "manager_number": r.manager_number,
        "start_time": r.start_time or "",
        "end_time": r.end_time or "",
        "store": r.store,
        "remarks": r.remarks,
    }


def _request_from_json(data: dict, manager_number: str, *, need_id: bool) -> ShiftRequest:
    if not isinstance(data, dict):
        raise ValidationError("Dữ liệu ca không hợp lệ")
    if need_id and not data.get("id"):
        raise ValidationError("Yêu cầu ca thiếu id")
    # Edits keep the stored date; only new requests need one.
    work_date = None if need_id else parse_iso_date(data.get("date"))
    return ShiftRequest(
        request_id=int(data["id"]) if need_id else None,
        work_date=work_date,
        manager_number=manager_number,
        start_time=data.get("start_time") or None,
        end_time=data.get("end_time") or None,
        store=data.get("store") or "",
        remarks=data.get("remarks") or "",
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shift-requests/<manager_number>", methods=["POST"], endpoint="api_shift_requests_submit")
    def api_shift_requests_submit(manager_number: str):
        try:
            data = request.get_json(silent=True) or {}
            entries = [_request_from_json(item, manager_number, need_id=False) for item in data.get("requests") or []]
            ids = container.shift_request_service.submit(manager_number, entries)
            return jsonify({"success": True, "ids": ids}), 201
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except (ValidationError, ValueError) as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to submit shift requests for %s", manager_number)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi gửi ca"}), 500

    @app.route("/api/shift-requests/<manager_number>", methods=["GET"], endpoint="api_shift_requests_editable")
    def api_shift_requests_editable(manager_number: str):
        try:
            items = container.shift_request_service.editable(manager_number)
            return jsonify({"success": True, "requests": [_request_to_json(r) for r in items]})
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except Exception:
            logger.exception("Failed to load shift requests for %s", manager_number)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tải ca"}), 500

    @app.route("/api/shift-requests/<manager_number>", methods=["PUT"], endpoint="api_shift_requests_edit")
    def api_shift_requests_edit(manager_number: str):
        try:
            data = request.get_json(silent=True) or {}
            edits = [_request_from_json(item, manager_number, need_id=True) for item in data.get("requests") or []]
            updated = container.shift_request_service.edit(manager_number, edits)
            return jsonify({"success": True, "updated": updated})
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except (ValidationError, ValueError) as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to edit shift requests for %s", manager_number)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi cập nhật ca"}), 500
