# helpdesk/issue/routes.py
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from helpdesk.core.dependencies import get_storage
from helpdesk.issue.entities import Issue
from helpdesk.issue.schemas import (
    CommentCreate,
    CommentOut,
    IssueCreate,
    IssueDetail,
    IssueOut,
    IssueStatsOut,
    IssueUpdate,
)
from helpdesk.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Issues"])

ISSUE_NOT_FOUND = "Issue not found"


@router.get("/issues", response_model=list[IssueOut])
def list_all(storage: Storage = Depends(get_storage)):
    return storage.get_all_issues()


@router.get("/issues/customer/{email}", response_model=list[IssueOut])
def list_for_customer(email: str, storage: Storage = Depends(get_storage)):
    return storage.get_issues_by_customer_email(email)


@router.get("/issues/{issue_id}", response_model=IssueDetail)
def get(issue_id: str, storage: Storage = Depends(get_storage)):
    issue = storage.get_issue(issue_id)
    if not issue:
        raise HTTPException(status_code=404, detail=ISSUE_NOT_FOUND)
    comments = storage.get_comments_by_issue_id(issue_id)
    return {**asdict(issue), "comments": [asdict(c) for c in comments]}


@router.post("/issues", response_model=IssueOut, status_code=201)
def create(issue: IssueCreate, storage: Storage = Depends(get_storage)):
    created = storage.create_issue(issue)
    logger.info("Issue %s created (priority=%s)", created.id, created.priority)
    return created


@router.patch("/issues/{issue_id}", response_model=IssueOut)
def update(issue_id: str, issue: IssueUpdate, storage: Storage = Depends(get_storage)):
    updated = storage.update_issue(issue_id, issue)
    if not updated:
        raise HTTPException(status_code=404, detail=ISSUE_NOT_FOUND)
    logger.info("Issue %s updated: %s", issue_id, ", ".join(sorted(issue.changes())) or "-")
    return updated


# Dependencies resolve before the body is validated, so a missing issue is 404 first
def existing_issue(issue_id: str, storage: Storage = Depends(get_storage)) -> Issue:
    issue = storage.get_issue(issue_id)
    if not issue:
        raise HTTPException(status_code=404, detail=ISSUE_NOT_FOUND)
    return issue


@router.post("/issues/{issue_id}/comments", response_model=CommentOut, status_code=201)
def add_comment(
    comment: CommentCreate,
    issue: Issue = Depends(existing_issue),
    storage: Storage = Depends(get_storage),
):
    created = storage.create_comment(issue.id, comment)
    logger.info("Comment %s added to issue %s (internal=%s)", created.id, issue.id, created.is_internal)
    return created


@router.get("/stats", response_model=IssueStatsOut, tags=["Stats"])
def stats(storage: Storage = Depends(get_storage)):
    return storage.get_issue_stats()
