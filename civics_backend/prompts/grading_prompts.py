GRADER_SYSTEM_PROMPT = "You are a helpful assistant."

GRADING_TEMPLATE = """
You are a civics test grader. Here is the question:
{question}
Here are the correct answers: {answers}
The user answered: {user_answer}
Is the user's answer correct? Reply with only "yes" or "no" on the first line, then explain briefly on the next line.
"""


def build_grading_prompt(question: str, answers, user_answer: str) -> str:
    return GRADING_TEMPLATE.format(
        question=question,
        answers=", ".join(answers),
        user_answer=user_answer,
    )
