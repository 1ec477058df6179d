from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_duration_short, format_hhmmss, now_local, parse_iso_date
from ..core.constants import DOCUMENT_TYPE_LABELS
from ..core.exceptions import DayExhaustedError, ValidationError
from ..container import Container
from .model import EmployeeIdentity

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punch", methods=["POST"], endpoint="register_punch")
    def register_punch():
        data = request.get_json(silent=True) or {}
        employee = EmployeeIdentity(
            code=str(data.get("code") or "").strip(),
            name=str(data.get("name") or "").strip(),
        )
        try:
            punch = container.punch_service.register(employee)
        except DayExhaustedError as e:
            logger.info("Punch rejected for employee %s: %s", employee.code, e)
            return jsonify({"message": str(e)}), 400
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Failed to register punch for employee %s", employee.code)
            return jsonify({"message": "Erro ao registrar ponto"}), 500

        return jsonify({"type": punch.type.value, "timestamp": punch.timestamp.isoformat()}), 200

    @app.route("/api/diary/<day>", methods=["GET"], endpoint="diary")
    def diary(day: str):
        """Punches and worked total of one civil day (defaults to today)."""
        try:
            work_date = now_local().date() if day == "today" else parse_iso_date(day)
            entry = container.punch_service.get_diary(request.args.get("code", ""), work_date)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load diary %s", day)
            return jsonify({"message": "Erro ao carregar diário"}), 500

        return jsonify({
            "date": entry.day.strftime("%Y-%m-%d"),
            "total": format_duration_short(entry.total),
            "punches": [
                {
                    "type": p.type.value,
                    "label": DOCUMENT_TYPE_LABELS[p.type],
                    "time": format_hhmmss(p.timestamp),
                    "timestamp": p.timestamp.isoformat(),
                }
                for p in entry.punches
            ],
        }), 200
