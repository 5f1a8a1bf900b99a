from __future__ import annotations

import io

import pytest

from presence_kiosk.core.exceptions import ValidationError
from presence_kiosk.students.model import Student
from presence_kiosk.students.service import RosterService


CSV_TEXT = (
    "SID,OEN,first_name,last_name\n"
    "S10,555000111,Katherine,Johnson\n"
    " S11 , 555000112 , Dorothy , Vaughan \n"
)


def test_import_replaces_whole_roster(students_repo):
    svc = RosterService(students_repo)

    assert svc.import_csv(io.StringIO(CSV_TEXT)) == 2

    assert set(students_repo.by_oen) == {"555000111", "555000112"}
    assert students_repo.get_by_oen("555000112") == Student(
        oen="555000112", sid="S11", first_name="Dorothy", last_name="Vaughan"
    )


def test_import_accepts_utf8_bom(students_repo):
    svc = RosterService(students_repo)

    assert svc.import_csv_bytes(("\ufeff" + CSV_TEXT).encode("utf-8")) == 2
    assert students_repo.get_by_oen("555000111").full_name == "Katherine Johnson"


def test_blank_sid_is_stored_as_none(students_repo):
    svc = RosterService(students_repo)
    svc.import_csv(io.StringIO("SID,OEN,first_name,last_name\n,555000113,Mary,Jackson\n"))

    assert students_repo.get_by_oen("555000113").sid is None


@pytest.mark.parametrize(
    "text, message",
    [
        ("OEN,first_name,last_name\n1,A,B\n", "SID"),
        ("SID,OEN,first_name,last_name\nS1,,A,B\n", "OEN is required"),
        ("SID,OEN,first_name,last_name\nS1,7,A,B\nS2,7,C,D\n", "duplicate OEN"),
    ],
)
def test_bad_csv_keeps_old_roster(students_repo, roster, text, message):
    svc = RosterService(students_repo)

    with pytest.raises(ValidationError, match=message):
        svc.import_csv(io.StringIO(text))

    assert set(students_repo.by_oen) == {s.oen for s in roster}


def test_non_utf8_upload_is_rejected(students_repo):
    with pytest.raises(ValidationError):
        RosterService(students_repo).import_csv_bytes(b"\xff\xfe\x00S")


def test_autocomplete_matches_any_field(students_repo):
    svc = RosterService(students_repo)

    assert [s.oen for s in svc.autocomplete("hop")] == ["100200302"]
    assert [s.oen for s in svc.autocomplete("S2")] == ["100200301"]
    assert svc.autocomplete("   ") == []
