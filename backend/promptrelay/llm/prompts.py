"""
Prompt presets for the suggest and analyze operations.

Each preset maps every suggestion category to a system prompt, a framing
template and a token/temperature budget, and every analysis category to a
system prompt. Two presets ship: ``concise`` (terse, real-time answers) and
``detailed`` (fuller coaching-style answers). Pick one with the
``PROMPT_PRESET`` setting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class SuggestionType(str, Enum):
    INTERVIEW = "interview"
    CODING = "coding"
    MEETING = "meeting"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SuggestionType":
        """Map a request string onto a category; unknown or empty means GENERAL."""
        if not value:
            return cls.GENERAL
        return _SUGGESTION_ALIASES.get(value.strip().lower(), cls.GENERAL)


class AnalysisType(str, Enum):
    SENTIMENT = "sentiment"
    INTENT = "intent"
    SUMMARY = "summary"
    TECHNICAL = "technical"
    DEBUGGING = "debugging"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AnalysisType":
        if not value:
            return cls.GENERAL
        return _ANALYSIS_ALIASES.get(value.strip().lower(), cls.GENERAL)


_SUGGESTION_ALIASES = {
    "interview": SuggestionType.INTERVIEW,
    "coding_interview": SuggestionType.INTERVIEW,
    "leetcode": SuggestionType.CODING,
    "coding": SuggestionType.CODING,
    "meeting": SuggestionType.MEETING,
}

_ANALYSIS_ALIASES = {
    "sentiment": AnalysisType.SENTIMENT,
    "intent": AnalysisType.INTENT,
    "summary": AnalysisType.SUMMARY,
    "technical": AnalysisType.TECHNICAL,
    "debug": AnalysisType.DEBUGGING,
    "debugging": AnalysisType.DEBUGGING,
}

SOLVE_TEMPLATE = "Solve this:\n\n{context}"
HELP_TEMPLATE = "Help with this:\n\n{context}"


@dataclass(frozen=True)
class PromptBudget:
    max_tokens: int
    temperature: float


@dataclass(frozen=True)
class SuggestionPrompt:
    system_prompt: str
    template: str
    budget: PromptBudget

    def render(self, context: str) -> str:
        return self.template.format(context=context)


@dataclass(frozen=True)
class PromptPreset:
    name: str
    suggestions: Dict[SuggestionType, SuggestionPrompt]
    analyses: Dict[AnalysisType, str]
    analysis_budget: PromptBudget

    def suggestion(self, kind: SuggestionType) -> SuggestionPrompt:
        return self.suggestions.get(kind, self.suggestions[SuggestionType.GENERAL])

    def analysis(self, kind: AnalysisType) -> str:
        return self.analyses.get(kind, self.analyses[AnalysisType.GENERAL])


CONCISE = PromptPreset(
    name="concise",
    suggestions={
        SuggestionType.INTERVIEW: SuggestionPrompt(
            system_prompt="""You are a real-time coding interview coach. Be EXTREMELY concise.

For coding: give optimal solution in code block, then "Time: O(?) | Space: O(?) | Pattern: [name]"
For behavioral: give 2-3 bullet points max
For system design: list 3-5 key components

NO lengthy explanations. Direct answers only.""",
            template=SOLVE_TEMPLATE,
            budget=PromptBudget(max_tokens=800, temperature=0.3),
        ),
        SuggestionType.CODING: SuggestionPrompt(
            system_prompt="""You are an expert competitive programmer. Give CONCISE answers.

FORMAT:
```python
[code]
```
Time: O(?) | Space: O(?) | Pattern: [name]

NO explanations unless asked. Code only.""",
            template=SOLVE_TEMPLATE,
            budget=PromptBudget(max_tokens=800, temperature=0.2),
        ),
        SuggestionType.MEETING: SuggestionPrompt(
            system_prompt="""You are a meeting assistant providing real-time suggestions.

RULES:
- Give actionable responses the user can say immediately
- Keep suggestions brief (1-2 sentences each)
- Be professional but natural
- Provide 2-3 options when appropriate""",
            template=HELP_TEMPLATE,
            budget=PromptBudget(max_tokens=500, temperature=0.5),
        ),
        SuggestionType.GENERAL: SuggestionPrompt(
            system_prompt=(
                "You are PromptRelay, a real-time AI assistant. Be direct, concise, and helpful. "
                "Give answers the user can use immediately."
            ),
            template=HELP_TEMPLATE,
            budget=PromptBudget(max_tokens=600, temperature=0.7),
        ),
    },
    analyses={
        AnalysisType.SENTIMENT: "Analyze sentiment briefly. Format: [POSITIVE/NEGATIVE/NEUTRAL] - one line explanation.",
        AnalysisType.INTENT: "Identify the speaker's intent in one sentence.",
        AnalysisType.SUMMARY: "Summarize in 2-3 bullet points maximum.",
        AnalysisType.TECHNICAL: "Explain the technical concept concisely with a code example if relevant.",
        AnalysisType.DEBUGGING: (
            "You are a debugging expert. Identify the bug, explain why it happens, "
            "and provide the fix. Be direct."
        ),
        AnalysisType.GENERAL: "Provide a brief, useful analysis.",
    },
    analysis_budget=PromptBudget(max_tokens=600, temperature=0.3),
)


DETAILED = PromptPreset(
    name="detailed",
    suggestions={
        SuggestionType.INTERVIEW: SuggestionPrompt(
            system_prompt="""You are an experienced interview coach helping a candidate during a live interview.

- Coding questions: state the approach in one or two sentences, give a working solution in a code block, then complexity and the key edge cases.
- Behavioral questions: outline an answer using the STAR structure (Situation, Task, Action, Result).
- System design questions: list the main components, the data flow between them, and one trade-off worth mentioning.

Keep the answer easy to read aloud.""",
            template=SOLVE_TEMPLATE,
            budget=PromptBudget(max_tokens=1200, temperature=0.4),
        ),
        SuggestionType.CODING: SuggestionPrompt(
            system_prompt="""You are an expert competitive programmer and patient teacher.

FORMAT:
1. Idea: the key insight in two sentences
2. Code:
```python
[code]
```
3. Time: O(?) | Space: O(?) | Pattern: [name]
4. Edge cases worth testing""",
            template=SOLVE_TEMPLATE,
            budget=PromptBudget(max_tokens=1200, temperature=0.2),
        ),
        SuggestionType.MEETING: SuggestionPrompt(
            system_prompt="""You are a meeting assistant following the conversation in real time.

- Summarize what was just asked or proposed in one line
- Suggest 2-3 responses the user could give, each with a short note on when it fits
- Flag any open question or action item the user should follow up on""",
            template=HELP_TEMPLATE,
            budget=PromptBudget(max_tokens=700, temperature=0.6),
        ),
        SuggestionType.GENERAL: SuggestionPrompt(
            system_prompt=(
                "You are PromptRelay, a helpful AI assistant. Answer clearly, explain your "
                "reasoning briefly, and point out anything the user should double-check."
            ),
            template=HELP_TEMPLATE,
            budget=PromptBudget(max_tokens=1000, temperature=0.7),
        ),
    },
    analyses={
        AnalysisType.SENTIMENT: (
            "Classify the sentiment as POSITIVE, NEGATIVE, NEUTRAL or MIXED, then justify "
            "it in two or three sentences quoting the decisive phrases."
        ),
        AnalysisType.INTENT: (
            "Identify the speaker's primary intent and any secondary intent, and say what "
            "a good response would need to address."
        ),
        AnalysisType.SUMMARY: "Summarize in up to five bullet points, then list any decisions or action items.",
        AnalysisType.TECHNICAL: (
            "Explain the technical concept step by step, include a short code example, and "
            "mention a common pitfall."
        ),
        AnalysisType.DEBUGGING: (
            "You are a debugging expert. Identify the bug, explain the root cause, give the "
            "corrected code, and suggest a test that would have caught it."
        ),
        AnalysisType.GENERAL: "Provide a structured analysis: key points, implications, and suggested next steps.",
    },
    analysis_budget=PromptBudget(max_tokens=900, temperature=0.2),
)


PRESETS: Dict[str, PromptPreset] = {
    CONCISE.name: CONCISE,
    DETAILED.name: DETAILED,
}


def get_preset(name: Optional[str]) -> PromptPreset:
    """Preset by name; None means ``concise``."""
    if not name:
        return CONCISE
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown prompt preset: {name}") from None
