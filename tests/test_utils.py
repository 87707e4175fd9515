from pathlib import Path

import pytest

from data_schema import Solution
from solver import StudentSelectionSolver
from utils import dump_assignments, load_students, parse_students, solution_to_df, unassigned_names


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "students.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_students_skips_header_and_placeholders(tmp_path: Path) -> None:
    path = _write(tmp_path, "Name,First,Second,Third\nAlice,1,2,3\nBob,4,#N/A,\nCarol\n")
    students = load_students(path)

    assert [s.name for s in students] == ["Alice", "Bob", "Carol"]
    assert [s.projects for s in students] == [[1, 2, 3], [4], []]
    assert [s.id for s in students] == [0, 1, 2]


def test_load_students_keeps_gaps_out_of_the_ranking(tmp_path: Path) -> None:
    path = _write(tmp_path, "Name,First,Second,Third\nAlice,,7,2\n")
    assert load_students(path)[0].projects == [7, 2]


def test_load_students_from_missing_file(tmp_path: Path, caplog) -> None:
    missing = tmp_path / "nope.csv"

    assert load_students(missing) == []
    assert f"File not found: '{missing}'" in caplog.text


def test_load_students_with_only_a_header(tmp_path: Path) -> None:
    assert load_students(_write(tmp_path, "Name,First\n")) == []


def test_load_students_rejects_non_integer_choice(tmp_path: Path) -> None:
    path = _write(tmp_path, "Name,First\nAlice,1\nBob,Physics\n")
    with pytest.raises(ValueError):
        load_students(path)


def test_load_students_rejects_repeated_choice(tmp_path: Path) -> None:
    path = _write(tmp_path, "Name,First,Second\nAlice,1,1\n")
    with pytest.raises(ValueError):
        load_students(path)


def test_parse_students_handles_windows_line_endings() -> None:
    students = parse_students("Name,First,Second\r\nAlice,3,4\r\nBob,4\r\n")
    assert [s.projects for s in students] == [[3, 4], [4]]


def test_dump_assignments(make_instance, capsys) -> None:
    instance = make_instance([[1], [0], [0]], capacity=1)
    solution = Solution(assignments={1: [0], 0: [1]}, unassigned=[2])

    dump_assignments(solution, instance)

    assert capsys.readouterr().out == (
        "Assignments:\n"
        "   Project 0 (1 students)\n"
        "      S2\n"
        "   Project 1 (1 students)\n"
        "      S1\n"
        "Unable to assign the following students:\n"
        "   S3\n"
    )


def test_dump_assignments_without_unassigned(make_instance, capsys) -> None:
    instance = make_instance([[4]], capacity=1)
    dump_assignments(Solution(assignments={4: [0]}, unassigned=[]), instance)

    assert "Unable to assign" not in capsys.readouterr().out


def test_solution_to_df(make_instance) -> None:
    instance = make_instance([[0, 1], [0]], capacity=1)
    solution = StudentSelectionSolver(instance).solve()
    df = solution_to_df(solution, instance)

    assert list(df.columns) == ["Project", "StudentId", "Name", "Rank"]
    assert df.values.tolist() == [[0, 1, "S2", 1], [1, 0, "S1", 2]]
    assert unassigned_names(solution, instance) == []
