"""
Dashboard Service - read-only aggregations for both dashboards.

Candidate dashboard:
- applications with internship title and company name, newest first
- recommendations: the first N active internships (no personalization)

Company dashboard:
- the company's internships (newest first) with nested applications
- total / pending / accepted counts per internship and overall,
  recomputed from the fetched rows on every load
"""

from typing import Dict, Iterable, List

from gradlinkup.core.config import get_settings
from gradlinkup.schemas.schemas import ApplicationStatus, InternshipStatus
from gradlinkup.services.record_service import ApplicationRecordService, InternshipRecordService

settings = get_settings()

# Badge emphasis per application status; unknown values get the lowest emphasis
STATUS_BADGES = {
    ApplicationStatus.applied.value: "secondary",
    ApplicationStatus.under_review.value: "default",
    ApplicationStatus.accepted.value: "success",
    ApplicationStatus.rejected.value: "destructive",
}
LOWEST_BADGE = "secondary"


def status_badge(status: str) -> str:
    return STATUS_BADGES.get(status, LOWEST_BADGE)


def application_stats(applications: Iterable[dict]) -> Dict[str, int]:
    """Counts over a list of {"status": ...} rows."""
    total = pending = accepted = 0
    for app in applications:
        total += 1
        if app["status"] == ApplicationStatus.applied.value:
            pending += 1
        elif app["status"] == ApplicationStatus.accepted.value:
            accepted += 1
    return {"total": total, "pending": pending, "accepted": accepted}


def combine_stats(stats: Iterable[Dict[str, int]]) -> Dict[str, int]:
    totals = {"total": 0, "pending": 0, "accepted": 0}
    for s in stats:
        for key in totals:
            totals[key] += s[key]
    return totals


class DashboardService:
    def __init__(self):
        self.internships = InternshipRecordService()
        self.applications = ApplicationRecordService()

    def candidate_dashboard(self, candidate_id: str) -> dict:
        applications = [
            {**row, "badge": status_badge(row["status"])}
            for row in self.applications.list_for_candidate(candidate_id)
        ]
        recommendations = self.internships.list_active(settings.recommendation_limit)
        return {"applications": applications, "recommendations": recommendations}

    def company_dashboard(self, company_id: str) -> dict:
        internships = self.internships.list_by_company(company_id)
        by_internship: Dict[str, List[dict]] = {i["id"]: [] for i in internships}
        for app in self.applications.list_for_internships(list(by_internship)):
            by_internship[app["internship_id"]].append({"id": app["id"], "status": app["status"]})

        views = []
        for internship in internships:
            apps = by_internship[internship["id"]]
            views.append({**internship, "applications": apps, "stats": application_stats(apps)})

        return {
            "internships": views,
            "active_internships": sum(
                1 for i in internships if i["status"] == InternshipStatus.active.value
            ),
            "totals": combine_stats(v["stats"] for v in views),
        }


def get_dashboard_service() -> DashboardService:
    """Get dashboard service instance."""
    return DashboardService()
