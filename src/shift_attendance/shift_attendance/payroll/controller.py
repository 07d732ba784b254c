from __future__ import annotations

import csv
import io
import logging
from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request

from ..core.enums import GroupBy, ReportMode
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..timecalc.calculator import minutes_since_midnight
from ..timecalc.model import Band

logger = logging.getLogger(__name__)


def parse_band_args(values: list[str], default: tuple) -> list[Band]:
    """Parse repeated ``band=label,HH:MM,HH:MM`` query args."""

    if not values:
        return [Band.from_triple(t) for t in default]

    bands = []
    for value in values:
        parts = [p.strip() for p in value.split(",")]
        if len(parts) != 3 or not parts[0]:
            raise ValidationError(f"Khung giờ không hợp lệ: {value!r}")
        minutes_since_midnight(parts[1])
        minutes_since_midnight(parts[2])
        bands.append(Band.from_triple(parts))
    # Editor order: earliest start first.
    bands.sort(key=lambda b: minutes_since_midnight(b.start))
    return bands


def _parse_enum(enum_cls, value: str, default):
    if not value:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Giá trị không hợp lệ: {value!r}") from None


def _write_summary_csv(summary) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(["manager_number", "name", "total_minutes", "total_hours", *summary.bands])
    for row in summary.rows:
        writer.writerow(
            [
                row["manager_number"],
                row["name"],
                row["total_minutes"],
                row["total_hours"],
                *(row["bands"][label] for label in summary.bands),
            ]
        )
    return out.getvalue().encode("utf-8-sig")


def register(app: Flask, container: Container) -> None:
    def _band_summary():
        mode = _parse_enum(ReportMode, request.args.get("mode"), ReportMode.MONTHLY)
        default_period = date.today().isoformat() if mode == ReportMode.DAILY else date.today().strftime("%Y-%m")
        period = request.args.get("period") or default_period
        bands = parse_band_args(request.args.getlist("band"), app.config["REPORT_BANDS"])
        return container.work_hours_report_service.build_band_summary(
            mode=mode,
            period=period,
            bands=bands,
            manager_number=request.args.get("manager_number") or None,
        )

    @app.route("/api/reports/periods", methods=["GET"], endpoint="api_report_periods")
    def api_report_periods():
        try:
            mode = _parse_enum(ReportMode, request.args.get("mode"), ReportMode.MONTHLY)
            return jsonify({"success": True, "periods": container.work_hours_report_service.list_periods(mode)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to list report periods")
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tải danh sách kỳ"}), 500

    @app.route("/api/reports/bands", methods=["GET"], endpoint="api_report_bands")
    def api_report_bands():
        try:
            summary = _band_summary()
            return jsonify({"success": True, **asdict(summary)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to build band summary")
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tổng hợp giờ làm"}), 500

    @app.route("/api/reports/bands.csv", methods=["GET"], endpoint="api_report_bands_csv")
    def api_report_bands_csv():
        try:
            csv_bytes = _write_summary_csv(_band_summary())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to build band summary CSV")
            return jsonify({"success": False, "message": "Lỗi hệ thống khi xuất CSV"}), 500

        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=work_hours_by_band.csv"},
        )

    @app.route("/api/reports/staff/<manager_number>", methods=["GET"], endpoint="api_report_staff")
    def api_report_staff(manager_number: str):
        today = date.today()
        try:
            year = int(request.args.get("year") or today.year)
            month = int(request.args.get("month") or today.month)
            group_by = _parse_enum(GroupBy, request.args.get("group_by"), GroupBy.MONTHLY)
            slots = parse_band_args(request.args.getlist("slot"), app.config["STAFF_SLOTS"])
            summary = container.work_hours_report_service.build_staff_summary(
                manager_number=manager_number,
                year=year,
                month=month,
                group_by=group_by,
                slots=slots,
            )
            return jsonify({"success": True, **asdict(summary)})
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except (ValidationError, ValueError) as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to build staff summary for %s", manager_number)
            return jsonify({"success": False, "message": "Lỗi hệ thống khi tổng hợp giờ làm"}), 500
