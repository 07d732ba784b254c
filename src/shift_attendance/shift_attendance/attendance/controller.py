from __future__ import annotations

import logging
from dataclasses import asdict, fields

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..timecalc.display import to_extended_end
from .model import AttendanceSheetRow

logger = logging.getLogger(__name__)

_ROW_FIELDS = {f.name for f in fields(AttendanceSheetRow)}


def _row_to_json(row: AttendanceSheetRow) -> dict:
    data = asdict(row)
    # Overnight ends shown as "26:00" in the sheet editor.
    data["display_end"] = to_extended_end(row.actual_start, row.actual_end) if row.actual_start and row.actual_end else row.actual_end
    return data


def _row_from_json(data: dict) -> AttendanceSheetRow:
    if not isinstance(data, dict) or not data.get("manager_number"):
        raise ValidationError("Dòng chấm công thiếu mã nhân viên")
    values = {k: v for k, v in data.items() if k in _ROW_FIELDS}
    values.setdefault("name", str(data["manager_number"]))
    for key in ("scheduled_start", "scheduled_end", "actual_start", "actual_end"):
        values.setdefault(key, "")
    values["manager_number"] = str(values["manager_number"])
    return AttendanceSheetRow(**values)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/dates", methods=["GET"], endpoint="api_attendance_dates")
    def api_attendance_dates():
        try:
            dates = container.attendance_service.list_sheet_dates()
            return jsonify({"success": True, "dates": [d.strftime("%Y-%m-%d") for d in dates]})
        except Exception:
            logger.exception("Failed to list attendance dates")
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tải danh sách ngày"}), 500

    @app.route("/api/attendance/<work_date>", methods=["GET"], endpoint="api_attendance_sheet")
    def api_attendance_sheet(work_date: str):
        try:
            rows = container.attendance_service.build_sheet(parse_iso_date(work_date))
            return jsonify({"success": True, "date": work_date, "rows": [_row_to_json(r) for r in rows]})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load attendance sheet for %s", work_date)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tải bảng chấm công"}), 500

    @app.route("/api/attendance/<work_date>", methods=["POST"], endpoint="api_attendance_save")
    def api_attendance_save(work_date: str):
        try:
            day = parse_iso_date(work_date)
            data = request.get_json(silent=True) or {}
            rows = []
            for item in data.get("rows") or []:
                row = _row_from_json(item)
                # Normalize edited cells the same way the sheet editor does.
                for field in ("actual_start", "actual_end", "break_minutes"):
                    row = container.attendance_service.update_row(row, field, getattr(row, field))
                rows.append(row)

            saved = container.attendance_service.save_sheet(day, rows)
            return jsonify({"success": True, "saved": saved}), 200
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to save attendance sheet for %s", work_date)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi lưu chấm công"}), 500
