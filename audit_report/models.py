# audit_report/models.py
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, field_validator


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class Assignee(BaseModel):
    name: str = 'Unknown'
    avatar_url: Optional[str] = None


class Comment(BaseModel):
    author: str = 'Unknown'
    created: Optional[Union[datetime, str]] = None
    body: str = ''

    @field_validator('author', mode='before')
    @classmethod
    def default_author(cls, v):
        v = _strip(v)
        return v or 'Unknown'

    @field_validator('body', mode='before')
    @classmethod
    def body_as_text(cls, v):
        return '' if v is None else str(v)


class ActivityItem(BaseModel):
    """One field change from an issue changelog."""
    created: Optional[Union[datetime, str]] = None
    author: str = 'System'
    field: str = ''
    from_value: str = ''
    to_value: str = ''

    @field_validator('author', mode='before')
    @classmethod
    def default_author(cls, v):
        v = _strip(v)
        return v or 'System'

    @field_validator('field', 'from_value', 'to_value', mode='before')
    @classmethod
    def as_text(cls, v):
        return '' if v is None else str(v)


class CaseRecord(BaseModel):
    key: str
    summary: str = ''
    type: Optional[str] = None
    assignee: Optional[Assignee] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    resolution_date: Optional[Union[datetime, str]] = None
    comments: List[Comment] = []
    activity: List[ActivityItem] = []

    @field_validator('key', mode='before')
    @classmethod
    def validate_key(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError('Issue key is required')
        return _strip(v)

    @field_validator('summary', mode='before')
    @classmethod
    def summary_as_text(cls, v):
        return '' if v is None else _strip(str(v))

    @property
    def assignee_name(self) -> Optional[str]:
        return self.assignee.name if self.assignee else None


class AuditReportRequest(BaseModel):
    parent: CaseRecord
    subtasks: List[CaseRecord] = []
