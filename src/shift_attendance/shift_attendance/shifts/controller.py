from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..timecalc.display import to_extended_end
from .model import FinalShift

logger = logging.getLogger(__name__)


def _shift_to_json(shift: FinalShift) -> dict:
    return {
        "id": shift.shift_id,
        "date": shift.work_date.strftime("%Y-%m-%d"),
        "manager_number": shift.manager_number,
        "start_time": shift.start_time or "",
        "end_time": shift.end_time or "",
        "display_end": to_extended_end(shift.start_time, shift.end_time) if not shift.off else "",
        "is_off": shift.off,
        "store": shift.store,
    }


def _shift_from_json(data: dict, work_date) -> FinalShift:
    if not isinstance(data, dict) or not data.get("manager_number"):
        raise ValidationError("Ca làm thiếu mã nhân viên")
    return FinalShift(
        shift_id=data.get("id"),
        work_date=work_date,
        manager_number=str(data["manager_number"]),
        start_time=data.get("start_time") or None,
        end_time=data.get("end_time") or None,
        is_off=bool(data.get("is_off")),
        store=data.get("store") or "",
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts/<work_date>", methods=["GET"], endpoint="api_shifts_for_date")
    def api_shifts_for_date(work_date: str):
        try:
            shifts = container.schedule_service.list_for_date(parse_iso_date(work_date))
            return jsonify({"success": True, "date": work_date, "shifts": [_shift_to_json(s) for s in shifts]})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load shifts for %s", work_date)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tải ca làm"}), 500

    @app.route("/api/shifts/<work_date>", methods=["POST"], endpoint="api_shifts_finalize")
    def api_shifts_finalize(work_date: str):
        try:
            day = parse_iso_date(work_date)
            data = request.get_json(silent=True) or {}
            entries = [_shift_from_json(item, day) for item in data.get("shifts") or []]
            saved = container.schedule_service.finalize(day, entries)
            return jsonify({"success": True, "saved": saved}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to finalize shifts for %s", work_date)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi chốt ca"}), 500

    @app.route("/api/shifts/<work_date>/timeline", methods=["GET"], endpoint="api_shifts_timeline")
    def api_shifts_timeline(work_date: str):
        try:
            timeline = container.schedule_service.timeline(parse_iso_date(work_date))
            return jsonify({"success": True, "date": work_date, **asdict(timeline)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to build shift timeline for %s", work_date)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tải lịch ca"}), 500
