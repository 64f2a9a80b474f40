"""Tiers 2 and 3: read a session transcript for metadata or full detail.

Both tiers walk the entire transcript. Token totals accumulate over every
line, so even the metadata-only "peek" cannot stop once the branch and
model are known.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from claude_session_insights.services.jsonl_parser import stream_transcript_file
from claude_session_insights.types.messages import MessageRecord, TranscriptRecord
from claude_session_insights.types.privacy import PrivacyConfig
from claude_session_insights.types.sessions import (
    SessionDetail,
    SessionMeta,
    SessionView,
    ToolCallSummary,
)
from claude_session_insights.utils.content_blocks import (
    count_thinking_blocks,
    extract_file_paths,
    extract_text,
    extract_tool_calls,
)
from claude_session_insights.utils.path_codec import session_file_path
from claude_session_insights.utils.redaction import filter_record

logger = logging.getLogger(__name__)

# Git reports a detached checkout as "HEAD"; it is not a branch name
NO_BRANCH = "HEAD"
MIN_SUMMARY_LENGTH = 20
SUMMARY_LENGTH = 200
MAX_SUMMARIES = 10
# Sessions with at least this many prompts get a full parse in daily summaries
DETAILED_PROMPT_THRESHOLD = 3


def stream_transcript(
    session_id: str,
    project: str,
    projects_dir: str | Path,
    privacy: PrivacyConfig,
) -> Iterator[TranscriptRecord]:
    """Yield privacy-filtered transcript records for one session."""
    path = session_file_path(projects_dir, project, session_id)
    for record in stream_transcript_file(path):
        filtered = filter_record(record, privacy)
        if filtered is not None:
            yield filtered


def _summarize(text: str) -> str:
    if len(text) > SUMMARY_LENGTH:
        return text[:SUMMARY_LENGTH] + "..."
    return text


def _scan_session(
    session: SessionView,
    projects_dir: str | Path,
    privacy: PrivacyConfig,
    full: bool,
) -> SessionDetail:
    """Single pass over a transcript, filling a SessionDetail.

    With full=False only the SessionMeta fields are populated.
    """
    detail = SessionDetail(**session.view_fields())
    path = session_file_path(projects_dir, session.project, session.session_id)
    if not path.exists():
        logger.debug("No transcript for session %s at %s", session.session_id, path)
        return detail

    tool_calls: dict[str, ToolCallSummary] = {}
    files: dict[str, None] = {}

    for record in stream_transcript(session.session_id, session.project, projects_dir, privacy):
        if not detail.git_branch and record.git_branch and record.git_branch != NO_BRANCH:
            detail.git_branch = record.git_branch

        if full:
            if record.is_sidechain:
                detail.has_sidechains = True
            if record.plan_content:
                detail.plan_referenced = True

        if not isinstance(record, MessageRecord):
            continue

        if record.model and not detail.model:
            detail.model = record.model

        if record.usage is not None:
            detail.total_input_tokens += record.usage.input_tokens
            detail.total_output_tokens += record.usage.output_tokens
            detail.cache_creation_input_tokens += record.usage.cache_creation_input_tokens
            detail.cache_read_input_tokens += record.usage.cache_read_input_tokens

        if record.role in ("user", "assistant"):
            detail.message_count += 1

        if not full or record.role != "assistant" or not record.content:
            continue

        text = extract_text(record.content)
        if len(text) > MIN_SUMMARY_LENGTH and len(detail.assistant_summaries) < MAX_SUMMARIES:
            detail.assistant_summaries.append(_summarize(text))

        # Later calls with the same display name replace earlier ones
        for call in extract_tool_calls(record.content):
            tool_calls[call.display_name] = call

        for file_path in extract_file_paths(record.content):
            files[file_path] = None

        detail.thinking_block_count += count_thinking_blocks(record.content)

    detail.tool_calls = list(tool_calls.values())
    detail.files_referenced = list(files)
    return detail


def peek_session(
    session: SessionView,
    projects_dir: str | Path,
    privacy: PrivacyConfig,
) -> SessionMeta:
    """Tier 2: branch, model, token totals and message count."""
    return _scan_session(session, projects_dir, privacy, full=False).to_meta()


def parse_session_detail(
    session: SessionView,
    projects_dir: str | Path,
    privacy: PrivacyConfig,
) -> SessionDetail:
    """Tier 3: everything peek_session returns plus summaries, tools and files."""
    return _scan_session(session, projects_dir, privacy, full=True)


def is_detailed(session: SessionView) -> bool:
    return len(session.prompts) >= DETAILED_PROMPT_THRESHOLD


def parse_sessions(
    sessions: Iterable[SessionView],
    projects_dir: str | Path,
    privacy: PrivacyConfig,
) -> tuple[list[SessionDetail], list[SessionView]]:
    """Split sessions into fully parsed (3+ prompts) and short ones."""
    detailed: list[SessionDetail] = []
    short: list[SessionView] = []
    for session in sessions:
        if is_detailed(session):
            detailed.append(parse_session_detail(session, projects_dir, privacy))
        else:
            short.append(session)
    return detailed, short
