from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_period
from ..core.exceptions import ValidationError
from ..container import Container
from .service import ReportArtifact

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _send(artifact: ReportArtifact, *, as_attachment: bool):
        return send_file(
            io.BytesIO(artifact.content),
            mimetype=artifact.mimetype,
            as_attachment=as_attachment,
            download_name=artifact.filename,
        )

    @app.route("/api/report-excel", methods=["GET"], endpoint="report_excel")
    def report_excel():
        try:
            period = parse_period(request.args.get("start"), request.args.get("end"))
            artifact = container.report_service.build_timesheet_workbook(
                period,
                layout=request.args.get("layout") or "grouped",
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Failed to build timesheet workbook")
            return jsonify({"error": "Erro ao gerar Excel"}), 500
        return _send(artifact, as_attachment=True)

    @app.route("/api/report", methods=["GET"], endpoint="report_pdf")
    def report_pdf():
        try:
            period = parse_period(request.args.get("start"), request.args.get("end"))
            artifact = container.report_service.build_employee_document(
                request.args.get("code", ""),
                period,
                employee_name=request.args.get("name"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Failed to build employee document")
            return jsonify({"error": "Erro ao gerar PDF"}), 500
        return _send(artifact, as_attachment=False)
