"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the shift and attendance rules live in services.
"""

import importlib
from datetime import date

from config import get_settings_module

from attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    resolved = container.shift_resolver.resolve_shift(1, date.today())
    print(resolved.to_dict() if resolved else "no shift today")
    print(container.attendance_service.daily_summary(1, date.today()).to_dict())


if __name__ == "__main__":
    main()
