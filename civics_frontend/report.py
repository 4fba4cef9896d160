from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from civics_frontend.session import SessionSnapshot, SessionStatus

PASSED_TITLE = "Congrats, you passed!"
FAILED_TITLE = "You did not pass"


class ReportRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: str
    question: str
    user_answer: str
    is_correct: bool
    graded: bool
    accepted_answers: Tuple[str, ...]
    rationale: str

    @property
    def marker(self) -> str:
        return "✅" if self.is_correct else "❌"


class QuizReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: SessionStatus
    title: str
    summary: str
    correct_count: int
    total: int
    rows: Tuple[ReportRow, ...]


def build_report(snapshot: SessionSnapshot) -> QuizReport:
    """Summarise a finished session. Raises ValueError while it is still running."""
    if not snapshot.is_finished:
        raise ValueError("Cannot build a report for a session that is still in progress")

    rows = tuple(
        ReportRow(
            position=f"Question {i + 1} of {snapshot.total}",
            question=outcome.question.text,
            user_answer=outcome.user_answer,
            is_correct=outcome.is_correct,
            graded=outcome.graded,
            accepted_answers=outcome.accepted_answers,
            rationale=outcome.rationale,
        )
        for i, outcome in enumerate(snapshot.outcomes)
    )
    return QuizReport(
        status=snapshot.status,
        title=PASSED_TITLE if snapshot.status is SessionStatus.PASSED else FAILED_TITLE,
        summary=f"You answered {snapshot.correct_count} out of {snapshot.total} questions correctly.",
        correct_count=snapshot.correct_count,
        total=snapshot.total,
        rows=rows,
    )


def format_report_text(report: QuizReport) -> str:
    lines: List[str] = [report.title, report.summary, ""]
    for row in report.rows:
        lines.append(f"{row.marker} {row.position}: {row.question}")
        lines.append(f"   Your answer: {row.user_answer}")
        lines.append(f"   Correct answer(s): {'; '.join(row.accepted_answers)}")
        if not row.graded:
            lines.append(f"   {row.rationale}")
    return "\n".join(lines)
