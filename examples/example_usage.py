"""Example: drive the service layer directly (no Flask).

Controllers stay thin; punch rules and the summary live in the services.
"""

import importlib
import sys

from config import get_settings_module

from src.punchboard.punchboard.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    if len(sys.argv) > 1:
        result = container.attendance_service.punch(sys.argv[1])
        print(result.message, result.record.to_dict())

    print(container.summary_service.today_summary().to_dict())


if __name__ == "__main__":
    main()
