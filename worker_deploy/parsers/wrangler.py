"""Wrangler output parser.

Wrangler prints human-readable text, not a stable structured format, so
everything here is a best-effort heuristic. A miss returns ``None`` and the
caller decides whether that is fatal.
"""

import re
from dataclasses import dataclass

VERSION_ID_PATTERN = re.compile(r"Worker Version ID:\s*([0-9a-fA-F-]+)")
URL_PATTERN = re.compile(r"https?://[^\s\"]+")


@dataclass(frozen=True)
class ParsedWranglerOutput:
    """Facts recovered from a wrangler invocation's output."""

    version_id: str | None = None
    deployment_url: str | None = None


def parse_version_id(output: str) -> str | None:
    """Extract the version id printed by ``wrangler versions upload``."""
    match = VERSION_ID_PATTERN.search(output)
    if match:
        return match.group(1)
    return None


def parse_deployment_url(output: str) -> str | None:
    """Extract the first URL-looking token, usually the deployment URL."""
    match = URL_PATTERN.search(output)
    if match:
        return match.group(0)
    return None


def parse_wrangler_output(output: str) -> ParsedWranglerOutput:
    """Apply both heuristics to a captured output."""
    return ParsedWranglerOutput(
        version_id=parse_version_id(output),
        deployment_url=parse_deployment_url(output),
    )
