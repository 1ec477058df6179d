"""Example: use the service layer without Flask.

Registers a detailed day for one employee and writes both report artifacts.
"""

from datetime import datetime

from src.ponto.ponto.common.datetime_utils import TZ, parse_period
from src.ponto.ponto.container import build_container
from src.ponto.ponto.punches.model import EmployeeIdentity


def main():
    container = build_container(punch_mode="detailed")
    employee = EmployeeIdentity(code="001", name="Ana Souza")

    for hour in (8, 12, 13, 17):
        punch = container.punch_service.register(employee, now=datetime(2025, 8, 25, hour, 0, tzinfo=TZ))
        print(punch.type.value, punch.timestamp.isoformat())

    period = parse_period("2025-08-01", "2025-08-31")
    for artifact in (
        container.report_service.build_timesheet_workbook(period),
        container.report_service.build_employee_document(employee.code, period),
    ):
        with open(artifact.filename, "wb") as f:
            f.write(artifact.content)
        print("written", artifact.filename)


if __name__ == "__main__":
    main()
