# src/cfarag/prompts.py
"""Prompt construction for grounded CFA question generation."""

from __future__ import annotations

from cfarag.models import RetrievalQuery, RetrievedContext

SYSTEM_PROMPT = (
    "You are a senior CFA Level 1 exam question writer. You write questions that "
    "test understanding through realistic scenarios rather than recall. Each question "
    "has exactly one definitively correct answer. You base every question strictly on "
    "the source text you are given and never invent facts. You always reply with a "
    "single JSON object."
)

CFA_QUESTION_GUIDELINES = """\
QUESTION STYLE:
- Test application and understanding of foundational Level 1 concepts, not recall.
- Use realistic scenarios, e.g. "An analyst is evaluating..." or "A portfolio manager observes...".
- Use CFA-style qualifiers such as "most likely", "least likely", "best described as".
- Keep any arithmetic simple enough to do without a financial calculator.
- Use a formal, neutral exam tone.

ANSWER OPTIONS:
- Exactly 3 options: A, B and C.
- Exactly one option is definitively correct; the other two are plausible but wrong on analysis.
- Options are similar in length and structure.
- Never use "all of the above" or "none of the above".

GROUNDING:
- Derive the question only from the source text below. Do not invent facts, figures or concepts.
- Do not write "according to the text" or refer to "the source material" or "the reading".

EXPLANATION:
- Start with "<Letter> is correct." and explain why.
- For calculation questions, write out the formula and the steps.
- Then give one short paragraph per incorrect option explaining why it is wrong.
"""

OUTPUT_CONTRACT = """\
Return ONLY a single JSON object, with no text before or after it, using exactly these fields:
{{
  "question_text": "string",
  "option_a": "string",
  "option_b": "string",
  "option_c": "string",
  "correct_answer": "A" | "B" | "C",
  "explanation": "string",
  "difficulty_level": "{difficulty}",
  "topic_area": "{topic}",
  "keywords": ["3 to 5 short keyword strings"]
}}
"correct_answer" must be exactly one of "A", "B" or "C".
"difficulty_level" must be exactly one of "beginner", "intermediate" or "advanced".
"""

SOURCE_SEPARATOR = "\n---\n\n"


def format_context(context: RetrievedContext) -> str:
    """Render chunks with ``[Source n: file]`` headers, in retrieval order."""
    return SOURCE_SEPARATOR.join(
        f"[Source {i}: {chunk.source}]\n{chunk.content}"
        for i, chunk in enumerate(context.chunks, start=1)
    )


class PromptBuilder:
    """Builds the user prompt for one generation attempt.

    The result depends only on the query and context, so identical inputs
    always produce identical prompts.
    """

    def __init__(self, guidelines: str = CFA_QUESTION_GUIDELINES) -> None:
        self.guidelines = guidelines

    def build_prompt(self, query: RetrievalQuery, context: RetrievedContext) -> str:
        topic = query.topic.value
        sections = [
            "You are creating a CFA Level 1 exam question. Follow these guidelines:",
            self.guidelines,
            "===== SOURCE MATERIAL START =====\n"
            f"{format_context(context)}\n"
            "===== SOURCE MATERIAL END =====",
        ]

        if query.learning_objective_text:
            objective = ["LEARNING OBJECTIVE TO TEST:"]
            if query.learning_objective_id:
                objective.append(f"ID: {query.learning_objective_id}")
            objective.append(f"The candidate should be able to: {query.learning_objective_text}")
            objective.append("The question must assess this specific learning objective.")
            sections.append("\n".join(objective))

        parameters = [
            f"Generate one {query.difficulty} level CFA Level 1 multiple-choice question for:",
            f"- Topic Area: {topic}",
        ]
        if query.subtopic:
            parameters.append(f"- Subtopic: {query.subtopic}")
        if query.learning_objective_id:
            parameters.append(f"- Learning Objective: {query.learning_objective_id}")
        parameters.append(f"- Difficulty: {query.difficulty}")
        sections.append("\n".join(parameters))

        sections.append(OUTPUT_CONTRACT.format(difficulty=query.difficulty, topic=topic))
        return "\n\n".join(sections)

