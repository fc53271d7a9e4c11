"""Parsers for action inputs and wrangler output."""

from worker_deploy.parsers.args import split_args
from worker_deploy.parsers.wrangler import (
    ParsedWranglerOutput,
    parse_deployment_url,
    parse_version_id,
    parse_wrangler_output,
)

__all__ = [
    "split_args",
    "ParsedWranglerOutput",
    "parse_deployment_url",
    "parse_version_id",
    "parse_wrangler_output",
]
