"""Message and tag templating."""

import re

from worker_deploy.models.metadata import DeployMetadata, TemplateContext

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([a-zA-Z0-9_]+)\s*\}\}")

# wrangler rejects longer version messages
MAX_MESSAGE_LENGTH = 100


def render_template(template: str, context: TemplateContext) -> str:
    """Render ``{{var}}`` placeholders from a context mapping.

    Unknown variables and ``None`` values render as empty strings to keep
    messages clean.
    """

    def _replace(match: re.Match[str]) -> str:
        value = context.get(match.group(1))
        return str(value) if value is not None else ""

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def build_default_message(metadata: DeployMetadata) -> str:
    """Build the message used when no ``message_template`` is given.

    Format: ``branch@short_sha: first line of the commit message``, with
    whichever prefix parts are available.
    """
    branch = metadata.branch or ""
    short_sha = metadata.short_sha or (metadata.sha[:6] if metadata.sha else "")
    base_message = metadata.short_commit_message or metadata.commit_message or ""

    if branch and short_sha:
        prefix = f"{branch}@{short_sha}"
    else:
        prefix = branch or short_sha

    combined = f"{prefix}: {base_message}" if prefix else base_message
    return combined[:MAX_MESSAGE_LENGTH]


def build_default_tag(metadata: DeployMetadata) -> str:
    """Tags are only ever set from an explicit ``tag_template``."""
    return ""
