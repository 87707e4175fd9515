from data_schema import Instance, Student
from typing import List
import random

NUMBER_OF_CHOICES = 3


class Generator:

    def __init__(self, seed=None):
        self.random = random.Random(seed)
        self.students = []
        self.instance = None
        self.instance_json = None

    def generate_test_data(self, number_students, number_projects, capacity, number_choices=NUMBER_OF_CHOICES) -> Instance:
        self.generate_students(number_students, number_projects, number_choices)

        self.instance = Instance(students=self.students, capacity=capacity)
        self.instance_json = self.instance.model_dump_json(indent=2)
        return self.instance

    def save_instance(self, name):
        with open(name, "w") as f:
            f.write(self.instance_json)

    def load_instance(self, name) -> Instance:
        with open(name) as f:
            self.instance = Instance.model_validate_json(f.read())
        self.students = list(self.instance.students)
        self.instance_json = self.instance.model_dump_json(indent=2)
        return self.instance

    def generate_students(self, number_students, number_projects, number_choices=NUMBER_OF_CHOICES) -> List[Student]:
        if number_projects < number_choices:
            raise ValueError(f"Cannot draw {number_choices} different choices from {number_projects} projects")

        self.students = []
        for i in range(number_students):
            self.students.append(Student(id=i, name=self.generate_name(i),
                                         projects=self.generate_choices(number_projects, number_choices)))
        return self.students

    def generate_name(self, i) -> str:
        return f"Student {i}"

    def generate_choices(self, number_projects, number_choices=NUMBER_OF_CHOICES) -> List[int]:
        choices = []
        # draw again until the choice is new
        while len(choices) < number_choices:
            choice = self.random.randrange(number_projects)
            if choice not in choices:
                choices.append(choice)
        return choices
