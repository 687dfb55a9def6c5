"""Decoding of ``notmuch show --format=json`` output into message trees.

A thread is a JSON list of nodes; each node is a two-element list of the
message object and the list of reply nodes. Multipart content is flattened
into one sequence of parts in document order.
"""

from __future__ import annotations

import json
from types import MappingProxyType

from ..thread_model.types import Headers, Message, Part
from .errors import NotmuchError

_HEADER_FIELDS = {
    "Date": "date",
    "From": "from_",
    "To": "to",
    "Cc": "cc",
    "Bcc": "bcc",
    "Subject": "subject",
    "Reply-To": "reply_to",
    "References": "references",
    "In-Reply-To": "in_reply_to",
}


def _json_error(what: str) -> NotmuchError:
    return NotmuchError(f"unexpected notmuch JSON: {what}")


def loads(text: str) -> object:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise NotmuchError(f"cannot decode notmuch output: {exc}") from exc


def parse_messages_list(data: object) -> list[Message]:
    """Parse the output of ``notmuch show`` for a single thread."""
    if not isinstance(data, list):
        raise _json_error("top level is not a list")
    if not data:
        return []
    if len(data) != 1:
        raise _json_error("expected exactly one thread")
    return parse_inner_message_list(data[0])


def parse_inner_message_list(data: object) -> list[Message]:
    if not isinstance(data, list):
        raise _json_error("message list is not a list")
    return [parse_message(node) for node in data]


def parse_message(node: object) -> Message:
    """Parse one ``[message, replies]`` node."""
    if not isinstance(node, list) or len(node) != 2:
        raise _json_error("thread node is not a [message, replies] pair")
    replies = parse_inner_message_list(node[1])
    return parse_message_details(node[0], replies)


def parse_message_details(data: object, replies: list[Message] | tuple[Message, ...] = ()) -> Message:
    if not isinstance(data, dict):
        raise _json_error("message is not an object")
    message_id = data.get("id")
    timestamp = data.get("timestamp")
    raw_headers = data.get("headers")
    raw_tags = data.get("tags")
    raw_body = data.get("body")
    if not isinstance(message_id, str):
        raise _json_error("message without id")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise _json_error(f"message {message_id} without timestamp")
    if not isinstance(raw_headers, dict) or not isinstance(raw_tags, list) or not isinstance(raw_body, list):
        raise _json_error(f"message {message_id} is missing headers, tags or body")
    if not all(isinstance(tag, str) for tag in raw_tags):
        raise _json_error(f"message {message_id} has a non-string tag")

    body: list[Part] = []
    for raw_part in raw_body:
        _parse_content(message_id, raw_part, body)

    return Message(
        message_id=message_id,
        timestamp=timestamp,
        headers=parse_headers(raw_headers),
        tags=tuple(raw_tags),
        body=tuple(body),
        replies=tuple(replies),
    )


def parse_headers(raw: dict) -> Headers:
    known: dict[str, str] = {}
    rest: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str):
            continue
        field_name = _HEADER_FIELDS.get(key)
        if field_name is None:
            rest[key] = value
        else:
            known[field_name] = value
    return Headers(**known, rest=MappingProxyType(rest))


def _parse_content(message_id: str, data: object, out: list[Part]) -> None:
    if not isinstance(data, dict):
        raise _json_error(f"part of {message_id} is not an object")

    # Embedded message/rfc822 entries carry headers and a body instead of an id.
    if "id" not in data and isinstance(data.get("body"), list):
        for raw_part in data["body"]:
            _parse_content(message_id, raw_part, out)
        return

    part_id = data.get("id")
    content_type = data.get("content-type")
    if isinstance(part_id, bool) or not isinstance(part_id, int) or not isinstance(content_type, str):
        raise _json_error(f"part of {message_id} without id or content-type")
    filename = data.get("filename")
    if not isinstance(filename, str):
        filename = None

    content = data.get("content")
    if isinstance(content, str):
        out.append(Part(message_id, part_id, content_type.lower(), content, filename))
    elif isinstance(content, list):
        for sub_part in content:
            _parse_content(message_id, sub_part, out)
    else:
        # Non-text parts are not inlined; ``notmuch show --part`` fetches them.
        out.append(Part(message_id, part_id, content_type.lower(), None, filename))
