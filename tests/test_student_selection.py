from pathlib import Path

from student_selection import STUDENT_COUNT, main


def test_main_with_generated_students(capsys) -> None:
    main([])
    out = capsys.readouterr().out

    assert "Assignments:\n" in out
    assert f"Students: {STUDENT_COUNT}" in out


def test_main_with_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "students.csv"
    path.write_text("Name,First,Second\nAlice,1,2\nBob,1\n", encoding="utf-8")

    main([str(path)])
    out = capsys.readouterr().out

    assert "   Project 1 (1 students)\n      Bob\n   Project 2 (1 students)\n      Alice\n" in out
    assert "Unable to assign" not in out


def test_main_with_missing_file(tmp_path: Path, capsys, caplog) -> None:
    missing = tmp_path / "missing.csv"

    main([str(missing)])

    assert "File not found" in caplog.text
    assert "Students: 0" in capsys.readouterr().out
