"""Drive the service layer directly, without Flask.

Registers a demo account, takes one roll call and prints the per-student
statistics. Needs a reachable MySQL configured through ``config``.
"""

import importlib
import json

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        jwt_secret=settings.JWT_SECRET,
        token_ttl_minutes=settings.TOKEN_TTL_MINUTES,
    )

    owner_id = container.auth_service.register(username="Demo Teacher", login_id="demo-teacher", password="demo1234")
    school_class = container.class_service.create_class(owner_id, name="10A")
    alice = container.student_service.create_student(owner_id, name="Alice", class_id=school_class.class_id)
    bob = container.student_service.create_student(owner_id, name="Bob", class_id=school_class.class_id)
    math = container.subject_service.create_subject(owner_id, name="Math")

    container.attendance_service.record_session(
        owner_id,
        class_id=school_class.class_id,
        subject_id=math.subject_id,
        records=[
            {"studentId": alice.student_id, "status": "present"},
            {"studentId": bob.student_id, "status": "absent"},
        ],
    )
    print(json.dumps(container.attendance_service.student_records(owner_id), indent=2))


if __name__ == "__main__":
    main()
