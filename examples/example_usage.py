"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance state machine lives in services.
"""

import importlib

from config import get_settings_module

from presence_kiosk.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, transcript_path=settings.TRANSCRIPT_PATH)
    for row in container.presence_service.currently_signed_in():
        print(row.to_dict())


if __name__ == "__main__":
    main()
