"""Comment command extraction.

The candidate trigger is the first token of the first non-blank line. Lines
break only on "\\n" and tokens only on spaces and tabs, so other Unicode
whitespace stays part of a token. Everything after the token (rest of that
line, then every later line verbatim) is the user message. A run is official
when that message is blank.
"""

import re
from dataclasses import dataclass

_BLANKS = " \t"
_TOKEN_SEPARATOR = re.compile(r"[ \t]+")


@dataclass(frozen=True)
class ParsedCommand:
    candidate: str
    user_message: str

    @property
    def is_official(self) -> bool:
        return not self.user_message.strip()


def parse_comment(raw_body: str) -> ParsedCommand | None:
    """Split a comment body into candidate trigger and user message.

    Returns None when the body has no non-blank line.
    """
    lines = raw_body.split("\n")
    for index, line in enumerate(lines):
        if line.strip(_BLANKS):
            break
    else:
        return None

    parts = _TOKEN_SEPARATOR.split(lines[index].strip(_BLANKS), maxsplit=1)
    candidate = parts[0]
    rest = parts[1] if len(parts) > 1 else ""

    message_lines = ([rest] if rest else []) + lines[index + 1 :]
    user_message = "\n".join(message_lines).rstrip("\n")
    return ParsedCommand(candidate=candidate, user_message=user_message)


def match_trigger(raw_body: str, triggers: list[str]) -> ParsedCommand | None:
    """Parse the body and keep it only if the candidate is a registered trigger."""
    parsed = parse_comment(raw_body)
    if parsed is None or parsed.candidate not in triggers:
        return None
    return parsed
