# helpdesk/client/api.py
import logging
from urllib.parse import quote

import httpx

from helpdesk.issue.schemas import (
    CommentCreate,
    CommentOut,
    IssueCreate,
    IssueDetail,
    IssueOut,
    IssueStatsOut,
    IssueUpdate,
)

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


# Works with any httpx.Client, FastAPI's TestClient included
class SupportClient:
    def __init__(self, http: httpx.Client):
        self.http = http

    def list_issues(self) -> list[IssueOut]:
        return [IssueOut.model_validate(i) for i in self._call("GET", "/api/issues")]

    def issues_for_customer(self, email: str) -> list[IssueOut]:
        data = self._call("GET", f"/api/issues/customer/{quote(email, safe='@')}")
        return [IssueOut.model_validate(i) for i in data]

    def get_issue(self, issue_id: str) -> IssueDetail:
        return IssueDetail.model_validate(self._call("GET", f"/api/issues/{issue_id}"))

    def create_issue(self, issue: IssueCreate) -> IssueOut:
        body = issue.model_dump(mode="json", by_alias=True)
        return IssueOut.model_validate(self._call("POST", "/api/issues", json=body))

    def update_issue(self, issue_id: str, changes: IssueUpdate) -> IssueOut:
        body = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return IssueOut.model_validate(self._call("PATCH", f"/api/issues/{issue_id}", json=body))

    def add_comment(self, issue_id: str, comment: CommentCreate) -> CommentOut:
        body = comment.model_dump(mode="json", by_alias=True)
        data = self._call("POST", f"/api/issues/{issue_id}/comments", json=body)
        return CommentOut.model_validate(data)

    def stats(self) -> IssueStatsOut:
        return IssueStatsOut.model_validate(self._call("GET", "/api/stats"))

    def _call(self, method: str, path: str, **kwargs):
        response = self.http.request(method, path, **kwargs)
        if response.is_success:
            return response.json()
        try:
            message = response.json().get("message", response.text)
        except ValueError:
            message = response.text
        logger.warning("%s %s failed: %s %s", method, path, response.status_code, message)
        raise ApiError(response.status_code, message)
