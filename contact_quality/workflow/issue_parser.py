"""Turns the service's issues output into an IssuesParseResult."""

import json

from contact_quality.logging.logger import Log
from contact_quality.workflow.models import (
    IssuesParseResult,
    ParsedIssues,
    QualityIssue,
    UnparsedIssues,
)


def parse_issues(raw: str | None) -> IssuesParseResult:
    """Decode the issues text.

    Anything that is not valid JSON comes back as ``UnparsedIssues`` carrying
    the raw text. Valid JSON that is not an array yields no issues. Array
    elements that are not objects still count as rows, with no values.
    """
    text = raw if isinstance(raw, str) else ""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        Log.warning(f"Issues output is not JSON ({len(text)} chars), showing raw text")
        return UnparsedIssues(raw_text=text)

    if not isinstance(data, list):
        Log.warning(f"Issues output is {type(data).__name__}, expected a list")
        return ParsedIssues(issues=[])
    return ParsedIssues(
        issues=[QualityIssue.from_mapping(item if isinstance(item, dict) else {}) for item in data]
    )
