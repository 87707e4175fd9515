from typing import List

import pytest

from data_schema import Instance, Student


@pytest.fixture
def make_instance():
    def _make_instance(choices: List[List[int]], capacity: int) -> Instance:
        students = [Student(id=i, name=f"S{i + 1}", projects=projects) for i, projects in enumerate(choices)]
        return Instance(students=students, capacity=capacity)

    return _make_instance
