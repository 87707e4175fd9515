from data_schema import Instance, Student, Solution
from typing import List, Optional
import csv
import io
import logging
import os
import pandas as pd

SKIP_TOKEN = "#N/A"


def load_students(file_path, logger: Optional[logging.Logger] = None) -> List[Student]:
    """
    Read students from a comma separated file. A missing file gives no students.
    """
    logger = logger or logging.getLogger("StudentSelection-Loader")

    if not os.path.exists(file_path):
        logger.warning(f"File not found: '{file_path}'")
        return []

    with open(file_path, encoding="utf-8-sig") as f:
        return parse_students(f.read())


def parse_students(text: str) -> List[Student]:
    """
    Parse students from csv text. The first row is a header, the first column the
    student's name and every further column a project id, most preferred first.
    Empty fields and "#N/A" are skipped, anything else has to be an integer.
    """
    # skip the header row
    lines = [line for line in text.splitlines()[1:] if line.strip()]
    if not lines:
        return []

    # rows may have different lengths
    width = max(line.count(",") for line in lines) + 1
    df = pd.read_csv(io.StringIO("\n".join(lines)), header=None, names=list(range(width)),
                     dtype=str, keep_default_na=False, quoting=csv.QUOTE_NONE).fillna("")

    students = []
    for i, row in enumerate(df.itertuples(index=False, name=None)):
        projects = [int(value) for value in row[1:] if value and value != SKIP_TOKEN]
        students.append(Student(id=i, name=row[0], projects=projects))
    return students


def solution_to_df(solution: Solution, instance: Instance) -> pd.DataFrame:
    student_lookup = {s.id: s for s in instance.students}

    data = []
    for p_id in sorted(solution.assignments):
        for s_id in solution.assignments[p_id]:
            student = student_lookup[s_id]
            data.append([p_id, s_id, student.name, student.projects.index(p_id) + 1])

    return pd.DataFrame(data, columns=["Project", "StudentId", "Name", "Rank"])


def unassigned_names(solution: Solution, instance: Instance) -> List[str]:
    student_lookup = {s.id: s for s in instance.students}
    return [student_lookup[s_id].name for s_id in solution.unassigned]


def dump_assignments(solution: Solution, instance: Instance):
    student_lookup = {s.id: s for s in instance.students}

    print("Assignments:")
    for p_id in sorted(solution.assignments):
        assigned_students = solution.assignments[p_id]
        print(f"   Project {p_id} ({len(assigned_students)} students)")
        for s_id in assigned_students:
            print(f"      {student_lookup[s_id].name}")

    if solution.unassigned:
        print("Unable to assign the following students:")
        print("\n".join("   " + name for name in unassigned_names(solution, instance)))
