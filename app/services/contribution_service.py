from datetime import datetime, timezone
from typing import Any, Mapping
import structlog
from sqlalchemy import func
from app.extensions import db
from app.models.contribution import Contribution
from app.api.pagination import paginate_query
from app.types.status_types import ContributionStatus
from app.services import prompt_service

log = structlog.get_logger()


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def submit_contribution(data: Mapping[str, Any]) -> Contribution:
    """Store a visitor submission with status `pending`."""
    title = _clean(data.get("title"))
    role = _clean(data.get("role"))
    content = _clean(data.get("content"))
    if not title:
        raise ValueError("Title is required")
    if not role:
        raise ValueError("Role/Category is required")
    if not content:
        raise ValueError("Content is required")

    contribution = Contribution(
        title=title,
        role_category=role,
        content=content,
        contributor_email=_clean(data.get("contributorEmail") or data.get("contributor_email")),
        contributor_name=_clean(data.get("contributorName") or data.get("contributor_name")),
        status=ContributionStatus.PENDING.value,
    )
    db.session.add(contribution)
    db.session.commit()
    log.info("contribution.submitted", contribution_id=contribution.id)
    return contribution


def list_contributions(request_args: Mapping[str, str]) -> dict:
    """Paginated contributions, newest first. `status=all` disables the filter."""
    status = (request_args.get("status") or ContributionStatus.PENDING.value).lower()
    query = Contribution.query
    if status != "all":
        if status not in ContributionStatus.values():
            raise ValueError(f"Invalid status: {status}")
        query = query.filter(Contribution.status == status)

    return paginate_query(
        query,
        Contribution,
        request_args,
        serialize=lambda c: c.to_dict(),
        legacy_page_size_param="limit",
        default_page_size=20,
        default_sort="created_at",
        allowed_sort_fields=("created_at", "updated_at", "title", "status"),
    )


def get_contribution(contribution_id: str) -> Contribution | None:
    if not contribution_id:
        raise ValueError("Missing id")
    return db.session.get(Contribution, contribution_id)


def review_contribution(
    contribution_id: str,
    status: str,
    admin_notes: str | None = None,
    reviewed_by: str | None = None,
    publish_to_prompts: bool = False,
) -> Contribution | None:
    """Approve or reject a contribution.

    Approving with `publish_to_prompts` creates a public prompt from the
    submission and records its id on the contribution. Both rows are
    committed together.
    """
    if status not in ContributionStatus.values():
        raise ValueError("Invalid status")
    contribution = get_contribution(contribution_id)
    if contribution is None:
        return None

    if status == ContributionStatus.APPROVED.value and publish_to_prompts and not contribution.published_prompt_id:
        prompt = prompt_service.create_prompt({
            "title": contribution.title,
            "content": contribution.content,
            "description": f"Contributed by community. Category: {contribution.role_category}",
            "tags": contribution.role_category,
            "is_public": True,
            "user_id": None,
        }, commit=False)
        contribution.published_prompt_id = prompt.id

    contribution.status = status
    contribution.admin_notes = admin_notes or None
    contribution.reviewed_by = reviewed_by
    contribution.reviewed_at = datetime.now(timezone.utc)
    db.session.commit()
    log.info(
        "contribution.reviewed",
        contribution_id=contribution_id,
        status=status,
        published_prompt_id=contribution.published_prompt_id,
    )
    return contribution


def delete_contribution(contribution_id: str) -> bool:
    contribution = get_contribution(contribution_id)
    if contribution is None:
        return False
    db.session.delete(contribution)
    db.session.commit()
    log.info("contribution.deleted", contribution_id=contribution_id)
    return True


def get_contribution_stats() -> dict:
    counts = dict(
        db.session.query(Contribution.status, func.count(Contribution.id))
        .group_by(Contribution.status)
        .all()
    )
    stats = {s: counts.get(s, 0) for s in ContributionStatus.values()}
    stats["total"] = sum(counts.values())
    return stats
