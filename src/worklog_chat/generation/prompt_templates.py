"""Prompt templates for work-log summarisation."""

ANSWER_SYSTEM = """You are a professional assistant reviewing detailed work logs.
Each context entry is prefixed with [YYYY-MM-DD] to show the date it was written."""

ANSWER_PROMPT = """Today's date is {today}.

Use the context below to generate a full, rich, and organized summary. Be as specific as possible about dates and tasks.

{focus_instruction}

ONLY say "I don't have enough data from the logs for that time period" if the context is completely empty or contains no relevant information.

Context:
{context}

Question:
{question}

Detailed Answer:"""

TEMPORAL_FOCUS = (
    'When answering temporal queries like "last week" or "this week", focus on the '
    "relevant date range and organize the response chronologically."
)

CONTENT_FOCUS = "Focus on the content and provide relevant information based on semantic similarity."

NO_DATA_ANSWER = "I don't have enough data from the logs for that time period."


def build_answer_prompt(question: str, context: str, is_temporal: bool, today: str) -> str:
    return ANSWER_PROMPT.format(
        today=today,
        focus_instruction=TEMPORAL_FOCUS if is_temporal else CONTENT_FOCUS,
        context=context,
        question=question,
    )
