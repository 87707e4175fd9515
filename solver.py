import logging
from typing import Dict, List, Optional, Set

import networkx as nx

from data_schema import Instance, Solution, Student

DEPTH_TO_RECURSE = 4


def build_preference_index(students: List[Student]) -> Dict[int, List[int]]:
    """
    Map every requested project id to the ids of all students that listed it,
    at any rank, in the order the students appear in the input.
    """
    project_requests: Dict[int, List[int]] = {}
    for student in students:
        for project_id in student.projects:
            project_requests.setdefault(project_id, []).append(student.id)
    return project_requests


class ProjectAssignments:
    """
    Owns the students assigned to each project and enforces the capacity.
    All changes to project membership go through this class.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._assigned: Dict[int, List[int]] = {}

    def try_add(self, project_id: int, student_id: int) -> bool:
        """
        Append the student to the project if it is not full.
        Returns False, and changes nothing, if the project is full.
        """
        assigned_students = self._assigned.setdefault(project_id, [])
        if len(assigned_students) < self.capacity:
            assigned_students.append(student_id)
            return True
        return False

    def remove(self, project_id: int, student_id: int) -> None:
        self._assigned[project_id].remove(student_id)

    def students_in(self, project_id: int) -> List[int]:
        return self._assigned.get(project_id, [])

    def project_of(self, student_id: int) -> Optional[int]:
        for project_id, assigned_students in self._assigned.items():
            if student_id in assigned_students:
                return project_id
        return None

    def as_dict(self) -> Dict[int, List[int]]:
        return {p: list(s) for p, s in self._assigned.items()}


class StudentSelectionSolver:
    def __init__(self, instance: Instance, logger: Optional[logging.Logger] = None,
                 depth_to_recurse: int = DEPTH_TO_RECURSE) -> None:
        """
        Creates a solver placing the students of the instance into projects.
        Three greedy phases run one after another on the same ProjectAssignments:
        whole low-demand projects first, then every student in order of their own
        preferences, and finally a bounded search that moves assigned students
        around to make room for the ones that are left.
        """
        self._logger = logger or logging.getLogger("StudentSelection-Solver")
        self.instance = instance
        self.depth_to_recurse = depth_to_recurse
        self._students = {s.id: s for s in instance.students}
        self.projects = ProjectAssignments(instance.capacity)
        self._unassigned = [s.id for s in instance.students]

    @property
    def unassigned(self) -> List[int]:
        return list(self._unassigned)

    def fill_low_demand_projects(self) -> None:
        """
        Fill whole projects that have no more requests than free places,
        visiting the projects with the fewest requests first.
        """
        capacity = self.instance.capacity
        self._logger.info(f"Filling projects that have no more than {capacity} requests...")

        project_requests = build_preference_index(self.instance.students)
        # sorted() is stable, ties keep the order of the index
        for project_id, requesting_students in sorted(project_requests.items(), key=lambda x: len(x[1])):
            # Every following project has at least as many requests
            if len(requesting_students) > capacity:
                break

            for student_id in requesting_students:
                if student_id not in self._unassigned:
                    continue
                if not self.projects.try_add(project_id, student_id):
                    break
                self._unassigned.remove(student_id)

    def fill_by_preference(self) -> None:
        """
        Place each remaining student into the first of their choices that still has room.
        """
        self._logger.info("Filling projects in order of student preference...")
        self._assign_remaining(depth_to_recurse=0)

    def fill_by_reassignment(self) -> None:
        """
        Try to place each remaining student by moving already assigned students
        to another of their choices.
        """
        self._logger.info("Making changes to try and assign remaining students...")
        self._assign_remaining(depth_to_recurse=self.depth_to_recurse)

    def _assign_remaining(self, depth_to_recurse: int) -> None:
        # walk backwards so removing the current student keeps the indices valid
        for i in range(len(self._unassigned) - 1, -1, -1):
            student_id = self._unassigned[i]
            if self.assign_student(student_id, set(), depth_to_recurse):
                del self._unassigned[i]

    def assign_student(self, student_id: int, visited_projects: Optional[Set[int]] = None,
                       depth_to_recurse: int = 0) -> bool:
        """
        Place the student into one of their projects, bumping assigned students
        into other projects of their own choice if needed.

        Each bump adds the project it frees a place in to `visited_projects`, and a chain
        stops once more than `depth_to_recurse` projects were visited. The assignments are
        only changed after the rest of the chain succeeded, so a failed search leaves
        them untouched.
        """
        if visited_projects is None:
            visited_projects = set()

        if len(visited_projects) > depth_to_recurse:
            return False

        for project_id in self._students[student_id].projects:
            if project_id in visited_projects:
                continue

            if self.projects.try_add(project_id, student_id):
                return True

            for assigned_student in self.projects.students_in(project_id):
                # every branch gets its own copy
                visited = set(visited_projects)
                visited.add(project_id)

                if self.assign_student(assigned_student, visited, depth_to_recurse):
                    self.projects.remove(project_id, assigned_student)
                    self.projects.try_add(project_id, student_id)
                    return True

        return False

    def solve(self) -> Solution:
        """
        Run all phases and return the resulting assignments.
        """
        self._logger.info("Attempt to assign students to projects...")
        self._logger.info(f"Students remaining: {len(self._unassigned)}")

        if self._unassigned:
            self.fill_low_demand_projects()
            self._logger.info(f"Students remaining: {len(self._unassigned)}")

        if self._unassigned:
            self.fill_by_preference()
            self._logger.info(f"Students remaining: {len(self._unassigned)}")

        if self._unassigned:
            self.fill_by_reassignment()
            self._logger.info(f"Students remaining: {len(self._unassigned)}")

        return Solution(assignments=self.projects.as_dict(), unassigned=self.unassigned)


class SolutionStatCalculator:
    def __init__(self, instance: Instance, solution: Solution) -> None:
        self.instance = instance
        self.solution = solution
        self.student_lookup = {student.id: student for student in self.instance.students}

    def print_stats(self):
        by_rank = self.count_by_rank()

        print(f"Students: {len(self.instance.students)}")
        print(f"Projects: {len(self.instance.project_ids())}")
        for rank in sorted(by_rank):
            print(f"Students with choice {rank}: {by_rank[rank]}")
        print(f"Unassigned students: {self.count_unassigned()}")
        print(f"Full projects: {self.count_full_projects()}")
        print(f"Placeable at most: {self.max_placeable()}")

    def count_by_rank(self) -> Dict[int, int]:
        """
        Number of students that got their first, second, ... choice.
        """
        counts: Dict[int, int] = {}
        for project_id, student_ids in self.solution.assignments.items():
            for student_id in student_ids:
                rank = self.student_lookup[student_id].projects.index(project_id) + 1
                counts[rank] = counts.get(rank, 0) + 1
        return counts

    def count_unassigned(self) -> int:
        return len(self.solution.unassigned)

    def count_full_projects(self) -> int:
        return sum(1 for student_ids in self.solution.assignments.values()
                   if len(student_ids) >= self.instance.capacity)

    def max_placeable(self) -> int:
        """
        Upper bound on the number of students any assignment can place.
        Every project is split into `capacity` slots and a maximum matching
        between students and the slots of their projects is computed.
        """
        graph = nx.Graph()
        student_nodes = [("student", s.id) for s in self.instance.students]
        graph.add_nodes_from(student_nodes)
        for student in self.instance.students:
            for project_id in student.projects:
                for slot in range(self.instance.capacity):
                    graph.add_edge(("student", student.id), ("slot", project_id, slot))

        matching = nx.bipartite.maximum_matching(graph, top_nodes=student_nodes)
        # the matching holds both directions of every edge
        return len(matching) // 2
