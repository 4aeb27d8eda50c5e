"""Example: use the service layer directly (without Flask).

Controllers are thin; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from src.hrm_attendance.hrm_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG)

    view = container.new_attendance_view()
    view.load()
    print(view.summary().to_dict())
    for row in view.rows():
        print(row.to_dict())


if __name__ == "__main__":
    main()
