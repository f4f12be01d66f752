"""Best-effort cleanup of raw model output into runnable module code.

Never raises: when something goes wrong the stripped input is returned.
"""

import logging
import re

from .capabilities import CAPABILITY_NAMES

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```[\w+-]*")
RETURN_BACKTICK_RE = re.compile(r"return `")
IMPORT_LINE_RE = re.compile(
    r"^[ \t]*(?:import[ \t]+[\w.]+(?:[ \t]+as[ \t]+\w+)?(?:[ \t]*,[ \t]*[\w.]+(?:[ \t]+as[ \t]+\w+)?)*"
    r"|from[ \t]+[\w.]+[ \t]+import[ \t]+.+"
    r"|import[ \t].*?from[ \t].*?;)[ \t]*$",
    re.MULTILINE,
)
PROSE_MARKERS = ("here is", "this code")

CODE_STARTERS = (
    "def ", "class ", "for ", "while ", "if ", "with ", "try:", "async ", "@", "#",
) + CAPABILITY_NAMES + ("ctx", "generate_name", "handle")
ASSIGNMENT_RE = re.compile(r"^[A-Za-z_]\w*(?:\s*,\s*[A-Za-z_]\w*)*\s*(?:\[[^\]]*\]\s*)?[-+*/]?=(?!=)")


def _starts_code(line: str) -> bool:
    return line.startswith(CODE_STARTERS) or bool(ASSIGNMENT_RE.match(line))


def _drop_leading_prose(code: str) -> str:
    lines = code.split("\n")
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped and _starts_code(stripped):
            return "\n".join(lines[i:])
    return code


def sanitize_code(raw) -> str:
    """
    Clean raw LLM output into module source.

    Steps: drop ``` fences (with any language tag), drop leaked "return"
    plus backtick prefixes and stray backticks, strip import statements,
    and when the text reads like an explanation ("here is", "this code")
    skip lines until the first one that looks like code.
    """
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raw = str(raw)

    try:
        code = FENCE_RE.sub("", raw)
        code = RETURN_BACKTICK_RE.sub("", code)
        code = code.replace("`", "")
        code = IMPORT_LINE_RE.sub("", code)

        lowered = code.lower()
        if any(marker in lowered for marker in PROSE_MARKERS):
            code = _drop_leading_prose(code)

        return code.strip()
    except Exception as e:
        logger.warning(f"Code sanitizing failed, using raw text: {e}")
        return raw.strip()
