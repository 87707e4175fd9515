"""
This Code is adapted from the cpsat-primer examples (https://github.com/d-krupke/cpsat-primer)
by Dominik Krupke, TU Braunschweig, used under CC BY 4.0
"""
import streamlit as st
import pandas as pd
from data_generator import Generator
from data_schema import Instance
from solver import StudentSelectionSolver, SolutionStatCalculator
from utils import parse_students, solution_to_df, unassigned_names

st.title("Student Selection")

st.subheader("Configuration")
uploaded_file = st.file_uploader("Student preferences (csv)", type="csv")

c1, c2, c3, c4 = st.columns(4)
student_count = c1.number_input("Students", min_value=0, value=144)
project_count = c2.number_input("Projects", min_value=3, value=24)
capacity = c3.number_input("Students per project", min_value=1, value=6)
seed = c4.number_input("Seed", min_value=0, value=0)

solve_button = st.button("Solve", type="primary")

# View solution
st.subheader("Solution:")
if "solution" not in st.session_state:
    st.session_state.solution = pd.DataFrame()
    st.session_state.unassigned = []
    st.session_state.stats = None

if solve_button:
    if uploaded_file is not None:
        students = parse_students(uploaded_file.getvalue().decode("utf-8-sig"))
    else:
        students = Generator(seed=int(seed)).generate_students(int(student_count), int(project_count))

    instance = Instance(students=students, capacity=int(capacity))
    solution = StudentSelectionSolver(instance).solve()

    calculator = SolutionStatCalculator(instance, solution)
    st.session_state.solution = solution_to_df(solution, instance)
    st.session_state.unassigned = unassigned_names(solution, instance)
    st.session_state.stats = {
        "Students": len(instance.students),
        "Unassigned": calculator.count_unassigned(),
        "Full projects": calculator.count_full_projects(),
        "Placeable at most": calculator.max_placeable(),
    }

if st.session_state.stats:
    columns = st.columns(len(st.session_state.stats))
    for column, (label, value) in zip(columns, st.session_state.stats.items()):
        column.metric(label, value)

st.dataframe(st.session_state.solution, use_container_width=True)

if not st.session_state.solution.empty:
    st.download_button("Download assignments", st.session_state.solution.to_csv(index=False),
                       file_name="assignments.csv", mime="text/csv")

if st.session_state.unassigned:
    st.warning("Unable to assign the following students:")
    st.text("\n".join(st.session_state.unassigned))
