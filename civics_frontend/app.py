import logging

import streamlit as st

from civics_frontend.config import FrontendConfig
from civics_frontend.errors import UpstreamError
from civics_frontend.grading_client import ClassifierHealth, GradingClient
from civics_frontend.report import build_report, format_report_text
from civics_frontend.session import TOTAL_QUESTIONS, QuizSession, SessionStatus

logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Civics Test",
    page_icon="🇺🇸",
    layout="centered",
    initial_sidebar_state="expanded"
)

HEALTH_LABELS = {
    ClassifierHealth.OK: ("🟢", "Grader online"),
    ClassifierHealth.ERROR: ("🔴", "Grader unavailable, answers are marked incorrect"),
    ClassifierHealth.UNKNOWN: ("⚪", "Grader not contacted yet"),
}

# Initialize session state
if "grading_client" not in st.session_state:
    st.session_state.grading_client = GradingClient(
        FrontendConfig.API_BASE_URL,
        timeout=FrontendConfig.REQUEST_TIMEOUT,
    )
if "quiz" not in st.session_state:
    st.session_state.quiz = None
if "answer_input" not in st.session_state:
    st.session_state.answer_input = ""
if "load_error" not in st.session_state:
    st.session_state.load_error = None


def main():
    st.title("🇺🇸 Civics Test")

    if st.session_state.quiz is None:
        start_new_quiz()
        if st.session_state.quiz is None:
            st.error(f"Could not load questions: {st.session_state.load_error}")
            if st.button("Try again"):
                st.rerun()
            return

    if st.session_state.load_error:
        st.error(f"Could not load questions: {st.session_state.load_error}")

    snapshot = st.session_state.quiz.snapshot()

    with st.sidebar:
        st.header("📊 Progress")
        st.write(f"**Answered:** {snapshot.current_index}/{snapshot.total}")
        st.write(f"**Correct:** {snapshot.correct_count} (need {snapshot.pass_threshold})")
        st.progress(snapshot.current_index / snapshot.total)

        icon, label = HEALTH_LABELS[snapshot.health]
        st.caption(f"{icon} {label}")

        st.button("🔄 Restart", key="restart", on_click=restart_quiz)

    if snapshot.is_finished:
        show_results(snapshot)
    else:
        show_question(snapshot)


def fetch_question_set():
    """Fetch a new question sample, or None if the API is unavailable"""
    client = st.session_state.grading_client
    try:
        questions = client.fetch_questions(TOTAL_QUESTIONS)
    except UpstreamError as e:
        logger.error(f"Could not load questions: {e}")
        st.session_state.load_error = str(e)
        return None
    st.session_state.load_error = None
    return questions


def start_new_quiz():
    questions = fetch_question_set()
    if questions is None:
        return
    try:
        st.session_state.quiz = QuizSession(questions, st.session_state.grading_client)
    except ValueError as e:
        logger.error(f"Could not start quiz: {e}")
        st.session_state.load_error = str(e)


def restart_quiz():
    """Button callback: discard the current attempt and start over on a new sample"""
    questions = fetch_question_set()
    if questions is None:
        return
    try:
        st.session_state.quiz = st.session_state.quiz.restart(questions)
    except ValueError as e:
        logger.error(f"Could not restart quiz: {e}")
        st.session_state.load_error = str(e)
        return
    st.session_state.answer_input = ""


def submit_current_answer():
    """Submit callback for Enter and the button: grade the typed answer and clear the input"""
    quiz = st.session_state.quiz
    answer = st.session_state.answer_input
    with st.spinner("Grading..."):
        quiz.submit_answer(answer)
    st.session_state.answer_input = ""

    snapshot = quiz.snapshot()
    if snapshot.is_finished:
        logger.info("Quiz finished\n" + format_report_text(build_report(snapshot)))


def show_question(snapshot):
    question = snapshot.current_question
    st.caption(f"Question {snapshot.current_index + 1} of {snapshot.total}")
    st.subheader(question.text)

    # Blank answers are ignored by the session, so neither control is
    # disabled on an empty value.
    st.text_input(
        "Your answer",
        key="answer_input",
        placeholder="Type your answer here.",
        disabled=snapshot.pending,
        on_change=submit_current_answer,
    )
    st.button(
        "Grading..." if snapshot.pending else "Submit",
        key="submit",
        type="primary",
        disabled=snapshot.pending,
        on_click=submit_current_answer,
    )

    if snapshot.outcomes:
        last = snapshot.outcomes[-1]
        if not last.graded:
            st.warning(last.rationale)


def show_results(snapshot):
    report = build_report(snapshot)

    if report.status is SessionStatus.PASSED:
        st.success(f"🎉 {report.title}")
    else:
        st.error(report.title)
    st.write(report.summary)

    for row in report.rows:
        with st.expander(f"{row.marker} {row.position}: {row.question}"):
            st.write("**Your answer:**")
            st.write(row.user_answer)
            st.write("**Correct answer(s):**")
            for answer in row.accepted_answers:
                st.write(f"• {answer}")
            if row.rationale:
                st.caption(row.rationale)

    st.button("🚀 Run it again", key="run_again", type="primary", on_click=restart_quiz)


if __name__ == "__main__":
    main()
