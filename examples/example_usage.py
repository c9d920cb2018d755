"""Example: drive the service layer directly (without Flask).

Controllers stay thin; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from src.training_attendance.training_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    rows = container.attendance_service.get_attendance_management(course_id=1, student_id=1)
    for r in rows:
        print(r.training_date, r.training_start_time, r.training_end_time, r.status_disp_name)


if __name__ == "__main__":
    main()
