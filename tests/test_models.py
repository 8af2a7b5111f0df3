import pytest
from pydantic import ValidationError

from audit_report.models import ActivityItem, AuditReportRequest, CaseRecord, Comment


def test_case_record_requires_key():
    with pytest.raises(ValidationError) as exc_info:
        CaseRecord(key='  ')
    assert 'Issue key is required' in str(exc_info.value)


def test_case_record_defaults():
    record = CaseRecord(key=' CWP-1 ', summary=None)

    assert record.key == 'CWP-1'
    assert record.summary == ''
    assert record.assignee_name is None
    assert record.comments == [] and record.activity == []


def test_blank_authors_get_defaults():
    assert Comment(author='  ', body=None).author == 'Unknown'
    assert Comment(body=None).body == ''
    assert ActivityItem(author=None, field=None).author == 'System'


def test_request_parses_nested_records():
    req = AuditReportRequest(**{
        'parent': {'key': 'CWP-1', 'assignee': {'name': 'Ana'}},
        'subtasks': [{'key': 'CWP-2', 'comments': [{'author': 'Bo', 'body': 'ok'}]}],
    })

    assert req.parent.assignee_name == 'Ana'
    assert req.subtasks[0].comments[0].body == 'ok'
