from typing import Dict, List
from pydantic import BaseModel, model_validator


class Student(BaseModel):
    """
    A student and the projects they asked for, most preferred first.
    """
    id: int # position in the input, used as identity during assignment
    name: str
    projects: List[int] # list of project ids the student selected

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_unique_projects(self):
        if len(set(self.projects)) != len(self.projects):
            raise ValueError(f"Student '{self.name}' lists a project more than once: {self.projects}")
        return self


class Instance(BaseModel):
    """
    Student Selection Instance.
    Projects are not declared, every project id a student mentions exists
    and can take up to `capacity` students.
    """
    students: List[Student]
    capacity: int # maximum number of students per project

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_instance(self):
        if self.capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {self.capacity}")
        ids = [s.id for s in self.students]
        if len(set(ids)) != len(ids):
            raise ValueError("Student ids must be unique")
        return self

    def project_ids(self) -> List[int]:
        return sorted({p for s in self.students for p in s.projects})


class Solution(BaseModel):
    """
    This class represents the solution to an Instance.
    It maps each project id to the ids of its students, in the order they were assigned,
    and lists the students that could not be placed.
    """
    assignments: Dict[int, List[int]]
    unassigned: List[int]

    class Config:
        frozen = True
