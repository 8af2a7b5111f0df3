from audit_report.models import AuditReportRequest
from audit_report.normalizers import (
    extract_text_from_adf,
    normalize_activity,
    normalize_assignee,
    normalize_case,
    normalize_comment,
    normalize_payload,
)


def _adf(*paragraphs):
    return {
        'type': 'doc',
        'content': [
            {'type': 'paragraph', 'content': [{'type': 'text', 'text': p}]}
            for p in paragraphs
        ],
    }


def test_extract_text_from_adf():
    assert extract_text_from_adf(_adf('Hello', 'World')) == 'Hello World'
    assert extract_text_from_adf('plain') == 'plain'
    assert extract_text_from_adf(None) == ''


def test_normalize_assignee_shapes():
    assert normalize_assignee(None) is None
    assert normalize_assignee('Ana') == {'name': 'Ana'}
    assert normalize_assignee({'displayName': 'Ana', 'avatarUrls': {'24x24': 'http://a/24.png'}}) == {
        'name': 'Ana',
        'avatar_url': 'http://a/24.png',
    }


def test_normalize_comment_aliases():
    out = normalize_comment({'author': {'displayName': 'Bo'}, 'createdAt': '2024-01-05', 'body': _adf('Done')})
    assert out == {'author': 'Bo', 'created': '2024-01-05', 'body': 'Done'}


def test_normalize_activity_aliases():
    out = normalize_activity({'fieldName': 'status', 'fromString': 'Open', 'toString': 'Done', 'author': None})
    assert out['field'] == 'status'
    assert (out['from_value'], out['to_value']) == ('Open', 'Done')
    assert out['author'] == 'System'


def test_normalize_case_merges_tracker_fields():
    raw = {
        'key': 'CWP-10',
        'fields': {
            'summary': 'Erase data',
            'issuetype': {'name': 'GDPR'},
            'status': {'name': 'Done'},
            'priority': {'name': 'High'},
            'resolutiondate': '2024-03-02T09:15:00.000+0000',
            'assignee': {'displayName': 'Ana'},
        },
        'changelog': [{'field': 'status', 'from': 'Open', 'to': 'Done'}],
        'comments': '[{"author": "Bo", "body": "ok"}]',
    }

    out = normalize_case(raw)

    assert out['summary'] == 'Erase data'
    assert (out['type'], out['status'], out['priority']) == ('GDPR', 'Done', 'High')
    assert out['resolution_date'] == '2024-03-02T09:15:00.000+0000'
    assert out['assignee']['name'] == 'Ana'
    assert out['activity'][0]['to_value'] == 'Done'
    assert out['comments'][0]['body'] == 'ok'


def test_normalize_payload_aliases_validate():
    norm = normalize_payload({
        'parentIssue': {'key': 'CWP-1', 'summary': 'Parent'},
        'children': [{'key': 'CWP-2'}, {'key': 'CWP-3'}],
    })

    req = AuditReportRequest(**norm)
    assert req.parent.key == 'CWP-1'
    assert [s.key for s in req.subtasks] == ['CWP-2', 'CWP-3']


def test_normalize_payload_without_parent():
    assert normalize_payload({'subtasks': []}) == {'parent': None, 'subtasks': []}
