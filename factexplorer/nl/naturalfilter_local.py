import json
import re
from dataclasses import dataclass, field
from typing import Sequence

from factexplorer.nl.model_loader import generate

# ---------------------------------------------------------------------
# Prompt template
# ---------------------------------------------------------------------

SYSTEM = (
    "You convert natural language questions into search filters for an "
    "infrastructure fact explorer. Each filter is a string called a pill; "
    "a fact row must match every pill.\n"
    "Supported pill syntax:\n"
    '- "some text": regex/substring search across host, fact path and value.\n'
    '- "\\"exact text\\"": exact match on host, fact path or value.\n'
    '- "key=value": the fact path ends with key and the value equals value.\n'
    '- "key>value", "key<value", "key>=value", "key<=value": numeric comparisons.\n'
    '- "key!=value": inequality.\n'
    '- "host=name": match a host by name.\n'
    '- "term1|term2": either term may match.\n'
    "Rules:\n"
    "- Respond with ONLY a JSON array of strings. No explanation, no markdown.\n"
    "- Prefer plain fact names or values; use key=value or comparisons when the "
    "question names a specific value or condition.\n"
    "- Use key=value whenever the key is one of the available fact paths.\n"
)


def build_prompt(question: str, fact_paths: Sequence[str]) -> str:
    """User turn: the available fact paths followed by the question."""
    paths = "\n".join(fact_paths) if fact_paths else "(none loaded)"
    return f"Available fact paths:\n{paths}\n\nQuestion: {question}\nJSON:"


# ---------------------------------------------------------------------
# Output guardrails
# ---------------------------------------------------------------------

@dataclass
class PillCheck:
    """Result of validating the model output."""
    ok: bool
    reason: str | None = None
    pills: list[str] = field(default_factory=list)


def _extract_array(text: str) -> str | None:
    """Pull the JSON array out of a reply, tolerating ``` fences and chatter around it."""
    m = re.search(r"```(?:json)?\s*(.*?)```", text, flags=re.S | re.I)
    body = m.group(1) if m else text
    start, end = body.find("["), body.rfind("]")
    if start == -1 or end <= start:
        return None
    return body[start:end + 1]


def sanitize_pills(text: str) -> PillCheck:
    """
    Validate a model reply as a JSON array of strings.
    Entries are trimmed; blanks and duplicates are dropped, order kept.
    """
    raw = _extract_array(text)
    if raw is None:
        return PillCheck(False, "no JSON array in model output")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return PillCheck(False, "model output is not valid JSON")
    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        return PillCheck(False, "expected a JSON array of strings")

    pills: list[str] = []
    for item in data:
        pill = item.strip()
        if pill and pill not in pills:
            pills.append(pill)
    if not pills:
        return PillCheck(False, "model returned no filters")
    return PillCheck(True, pills=pills)


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def generate_pills(question: str, fact_paths: Sequence[str] = ()) -> list[str]:
    """
    Turn a natural language question into filter pills.
    1. Build a prompt listing the known fact paths
    2. Call the local language model
    3. Extract and validate the JSON array
    """
    reply = generate(SYSTEM, build_prompt(question, fact_paths))
    check = sanitize_pills(reply)
    if not check.ok:
        raise ValueError(f"Unusable model output: {check.reason}")
    return check.pills
