import base64

import pytest

from app import create_app
from audit_report.config import Config
from audit_report.pdf import ReportGenerationError

PAYLOAD = {
    'parent': {
        'key': 'CWP-904',
        'summary': 'Erase customer data for account 7731',
        'status': {'name': 'Done'},
        'assignee': {'displayName': 'Ana Souza'},
        'comments': [{'author': 'Ana Souza', 'created': '2024-02-20T14:00:00.000+0000', 'body': 'Started.'}],
    },
    'subtasks': [{'key': 'CWP-905', 'summary': 'Remove CRM entries'}],
}


@pytest.fixture
def test_config(tmp_path):
    class TestConfig(Config):
        TESTING = True
        LOG_PATH = str(tmp_path / 'test.log')
    return TestConfig


@pytest.fixture
def client(test_config):
    return create_app(test_config).test_client()


class BrokenComposer:
    def generate(self, parent, subtasks):
        raise ReportGenerationError('boom')


def test_index_and_health(client):
    assert client.get('/').data == b'Audit Report Service'
    assert client.get('/health').get_json() == {'status': 'ok'}


def test_pdf_attachment(client):
    resp = client.post('/reports/audit', json=PAYLOAD)

    assert resp.status_code == 200
    assert resp.mimetype == 'application/pdf'
    assert resp.data.startswith(b'%PDF')
    assert 'CWP-904 - Audit Report.pdf' in resp.headers['Content-Disposition']
    assert resp.headers['X-Report-Size'] == str(len(resp.data))
    assert int(resp.headers['X-Report-Pages']) >= 1


def test_base64_report(client):
    resp = client.post('/reports/audit/base64', json=PAYLOAD)

    assert resp.status_code == 200
    body = resp.get_json()
    pdf = base64.b64decode(body['pdf'])
    assert pdf.startswith(b'%PDF')
    assert body['filename'] == 'CWP-904 - Audit Report.pdf'
    assert body['size'] == len(pdf)


@pytest.mark.parametrize('kwargs, error', [
    ({'data': 'not json', 'content_type': 'application/json'}, 'Invalid or missing JSON payload'),
    ({'json': []}, 'Invalid or missing JSON payload'),
    ({'json': {'subtasks': []}}, 'Missing parent issue'),
])
def test_bad_requests(client, kwargs, error):
    resp = client.post('/reports/audit/base64', **kwargs)

    assert resp.status_code == 400
    assert resp.get_json()['error'] == error


def test_missing_issue_key_is_a_validation_error(client):
    resp = client.post('/reports/audit', json={'parent': {'summary': 'no key'}})

    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Invalid report payload'


def test_generation_failure_is_500(test_config):
    client = create_app(test_config, composer=BrokenComposer()).test_client()

    resp = client.post('/reports/audit', json=PAYLOAD)

    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'boom'}
