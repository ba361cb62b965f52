from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .models import Project, User


@dataclass
class DashboardStats:
    total_users: int = 0
    customers: int = 0
    admins: int = 0
    total_projects: int = 0
    total_blocks: int = 0
    with_budget: int = 0
    avg_blocks: int = 0


def all_projects(store) -> List[Project]:
    return [Project.from_record(r) for r in store.all()]


def dashboard_stats(users: Iterable[User], projects: Iterable[Project]) -> DashboardStats:
    users = list(users)
    projects = list(projects)
    total_blocks = sum(len(p.building) for p in projects)
    return DashboardStats(
        total_users=len(users),
        customers=sum(1 for u in users if u.user_type == "customer"),
        admins=sum(1 for u in users if u.is_admin),
        total_projects=len(projects),
        total_blocks=total_blocks,
        with_budget=sum(1 for p in projects if p.budget),
        # half-up, not banker's rounding
        avg_blocks=int(total_blocks / len(projects) + 0.5) if projects else 0,
    )


def projects_by_user(projects: Iterable[Project]) -> Dict[str, int]:
    return dict(Counter(p.user_id for p in projects))


def recent_projects(projects: Iterable[Project], limit: int = 10) -> List[Project]:
    # ISO-8601 timestamps sort lexicographically
    return sorted(projects, key=lambda p: p.saved_at, reverse=True)[:limit]


def newest_users(users: Iterable[User]) -> List[User]:
    return sorted(users, key=lambda u: u.created_at, reverse=True)


def user_rows(users: Iterable[User], projects: Iterable[Project]) -> List[Tuple[str, str, str, str, int]]:
    """(name, email, type, registered date, project count) per user, newest registration first."""
    counts = projects_by_user(projects)
    return [(u.name or "N/A", u.email, u.user_type.capitalize(), u.created_at[:10] or "N/A",
             counts.get(u.id, 0)) for u in newest_users(users)]


def project_details(project: Project) -> List[Tuple[str, str]]:
    return [
        ("Project Name", project.project_name or "Unnamed Project"),
        ("Blocks", str(len(project.building))),
        ("Budget", f"₱{project.budget:,.2f}" if project.budget else "N/A"),
        ("Saved Date", project.saved_at[:19].replace("T", " ") or "N/A"),
    ]
