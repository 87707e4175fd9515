import argparse
import logging
import sys

from data_generator import Generator
from data_schema import Instance
from solver import StudentSelectionSolver, SolutionStatCalculator
from utils import dump_assignments, load_students

STUDENT_COUNT = 144
PROJECT_COUNT = 24
MAX_STUDENTS_PER_PROJECT = 6


def main(argv=None):
    parser = argparse.ArgumentParser(description="Assign students to their preferred projects.")
    parser.add_argument("file_path", nargs="?",
                        help="csv file with a header row, then one student per row: name, choice 1, choice 2, ... "
                             "Random students are generated if omitted.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    if args.file_path:
        students = load_students(args.file_path)
    else:
        students = Generator().generate_students(STUDENT_COUNT, PROJECT_COUNT)

    instance = Instance(students=students, capacity=MAX_STUDENTS_PER_PROJECT)
    solution = StudentSelectionSolver(instance).solve()

    dump_assignments(solution, instance)
    SolutionStatCalculator(instance, solution).print_stats()


if __name__ == "__main__":
    main()
