"""Full transcript reader for a single session's detail view."""

import logging
from datetime import datetime
from typing import Any

import orjson

from antenna.services.metadata_index import load_session_index
from antenna.services.session_store import SessionStore
from antenna.services.transcript_scanner import MAX_LINE_SIZE, MESSAGE_TYPE, extract_cost
from antenna.types import DisplayMessage, SessionDetail
from antenna.utils.session_namer import resolve_session_name
from antenna.utils.timestamps import from_epoch_ms, parse_iso_timestamp_ms

logger = logging.getLogger(__name__)


def load_session_detail(
    store: SessionStore,
    session_id: str,
    cron_names: dict[str, str] | None = None,
) -> tuple[SessionDetail, list[DisplayMessage]]:
    """Read one session's header and its messages in file order.

    Raises ValueError for a session id that is not a plain file stem. A
    missing transcript yields the header with no messages.
    """
    path = store.transcript_path(session_id)
    detail = SessionDetail(session_id=session_id)

    entry = load_session_index(store.sessions_dir).get(session_id)
    updated_at = 0
    if entry is not None:
        detail.key = entry.key.raw
        detail.kind = entry.key.kind
        detail.model = entry.model
        detail.total_tokens = entry.total_tokens
        updated_at = entry.updated_at
    if updated_at <= 0:
        try:
            updated_at = int(path.stat().st_mtime * 1000)
        except OSError:
            pass
    detail.name = resolve_session_name(
        session_id,
        entry.key if entry is not None else None,
        label=entry.label if entry is not None else "",
        cron_names=cron_names,
        updated_at_ms=updated_at,
    )

    messages: list[DisplayMessage] = []
    try:
        f = open(path, "rb")
    except OSError as e:
        logger.info("Failed to read transcript %s: %s", path, e)
        return detail, messages

    with f:
        for line in f:
            line = line.strip()
            if not line or len(line) > MAX_LINE_SIZE:
                continue
            try:
                raw = orjson.loads(line)
            except orjson.JSONDecodeError:
                continue
            if not isinstance(raw, dict):
                continue
            _apply_entry(raw, detail, messages)

    return detail, messages


def _apply_entry(raw: dict, detail: SessionDetail, messages: list[DisplayMessage]):
    entry_type = raw.get("type")

    if entry_type == "session" and raw.get("cwd"):
        detail.cwd = str(raw["cwd"])
    elif entry_type == "model_change" and raw.get("modelId"):
        if not detail.model:
            detail.model = str(raw["modelId"])
        detail.provider = str(raw.get("provider") or "")
    elif entry_type == MESSAGE_TYPE:
        message = raw.get("message")
        if not isinstance(message, dict):
            return
        msg = _to_display_message(raw, message)
        detail.total_cost += msg.cost
        detail.message_count += 1
        messages.append(msg)


def _to_display_message(raw: dict, message: dict) -> DisplayMessage:
    msg = DisplayMessage(
        role=str(message.get("role") or ""),
        model=str(message.get("model") or ""),
        timestamp=_message_time(raw, message),
        cost=extract_cost(message),
    )

    usage = message.get("usage")
    if isinstance(usage, dict):
        tokens = usage.get("totalTokens")
        if isinstance(tokens, int) and not isinstance(tokens, bool):
            msg.tokens = tokens

    if message.get("stopReason") == "error":
        msg.is_error = True
        msg.error_message = str(message.get("errorMessage") or "")

    msg.content, msg.tool_calls, msg.has_thinking = parse_content(message.get("content"))
    return msg


def _message_time(raw: dict, message: dict) -> datetime | None:
    ts = message.get("timestamp")
    if isinstance(ts, (int, float)) and not isinstance(ts, bool) and ts > 0:
        try:
            return from_epoch_ms(int(ts))
        except (OverflowError, OSError, ValueError):
            pass
    iso_ms = parse_iso_timestamp_ms(raw.get("timestamp"))
    if iso_ms:
        try:
            return from_epoch_ms(iso_ms)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def parse_content(content: Any) -> tuple[str, list[str], bool]:
    """Flatten message content into (text, tool call names, has thinking).

    Text blocks are joined with newlines. Content that is neither a string
    nor a list of blocks is rendered as JSON text.
    """
    if content is None:
        return "", [], False
    if isinstance(content, str):
        return content, [], False
    if isinstance(content, list) and all(isinstance(b, dict) for b in content):
        texts = []
        tool_calls = []
        has_thinking = False
        for block in content:
            block_type = block.get("type")
            if block_type == "text":
                texts.append(str(block.get("text") or ""))
            elif block_type == "toolCall":
                tool_calls.append(str(block.get("name") or ""))
            elif block_type == "thinking":
                has_thinking = True
        return "\n".join(texts), tool_calls, has_thinking
    return orjson.dumps(content).decode(), [], False
