# audit_report/normalizers.py
"""
Tolerant normalization of incoming report payloads.

Callers post records in whatever shape their issue tracker returned them:
camelCase or snake_case keys, assignee/status/priority as objects or plain
strings, comment bodies as rich-text document trees. Everything is mapped
onto the field names of audit_report.models before validation.
"""
import json
from typing import Any, Dict, List


def _pick_first(d: Dict[str, Any], keys: List[str], default=None):
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


def _safe_str(x: Any) -> str:
    if x is None:
        return ''
    return str(x)


def _as_list(raw: Any) -> list:
    if raw is None:
        return []
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode('utf-8')
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []


def _name_of(value: Any, keys=('name', 'displayName', 'value')) -> Any:
    """Objects like {'name': 'Done'} or {'displayName': 'Ana'} -> their label."""
    if isinstance(value, dict):
        return _pick_first(value, list(keys))
    return value


def extract_text_from_adf(node: Any) -> str:
    """Flatten an Atlassian document tree into plain text, one space between paragraphs."""
    if not node:
        return ''
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return _safe_str(node)

    text = _safe_str(node.get('text'))
    for child in node.get('content') or []:
        text += extract_text_from_adf(child)
        if isinstance(child, dict) and child.get('type') == 'paragraph' and text and not text.endswith('\n'):
            text += ' '
    return text.strip()


def normalize_assignee(raw: Any):
    if raw is None or raw == '':
        return None
    if isinstance(raw, dict):
        name = _pick_first(raw, ['name', 'displayName']) or 'Unknown'
        avatar = raw.get('avatarUrl') or raw.get('avatar_url')
        urls = raw.get('avatarUrls')
        if not avatar and isinstance(urls, dict):
            avatar = urls.get('24x24') or urls.get('32x32')
        return {'name': _safe_str(name), 'avatar_url': avatar}
    return {'name': _safe_str(raw)}


def normalize_comment(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return {'body': _safe_str(raw)}
    return {
        'author': _safe_str(_name_of(raw.get('author'))) or 'Unknown',
        'created': _pick_first(raw, ['created', 'createdAt', 'created_at']),
        'body': extract_text_from_adf(_pick_first(raw, ['body', 'bodyText', 'body_text', 'text'], '')),
    }


def normalize_activity(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    return {
        'created': _pick_first(raw, ['created', 'createdAt', 'created_at']),
        'author': _safe_str(_name_of(raw.get('author'))) or 'System',
        'field': _safe_str(_pick_first(raw, ['field', 'fieldName', 'field_name'], '')),
        'from_value': _safe_str(_pick_first(raw, ['from_value', 'fromString', 'fromValue', 'from'], '')),
        'to_value': _safe_str(_pick_first(raw, ['to_value', 'toString', 'toValue', 'to'], '')),
    }


def normalize_case(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    fields = raw.get('fields') if isinstance(raw.get('fields'), dict) else {}
    merged = {**fields, **raw}

    return {
        'key': merged.get('key'),
        'summary': _safe_str(merged.get('summary')),
        'type': _name_of(_pick_first(merged, ['type', 'issuetype', 'issueType'])),
        'assignee': normalize_assignee(merged.get('assignee')),
        'status': _name_of(merged.get('status')),
        'priority': _name_of(merged.get('priority')),
        'resolution_date': _pick_first(merged, ['resolution_date', 'resolutiondate', 'resolutionDate', 'closed']),
        'comments': [normalize_comment(c) for c in _as_list(merged.get('comments'))],
        'activity': [normalize_activity(a) for a in _as_list(_pick_first(merged, ['activity', 'changelog', 'activities']))],
    }


def normalize_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """{'parent': ..., 'subtasks': [...]} with aliases resolved; a missing parent stays None."""
    parent = _pick_first(payload, ['parent', 'parentIssue', 'parent_issue', 'issue'])
    subtasks = _as_list(_pick_first(payload, ['subtasks', 'children', 'subTasks']))
    return {
        'parent': normalize_case(parent) if parent is not None else None,
        'subtasks': [normalize_case(s) for s in subtasks],
    }
