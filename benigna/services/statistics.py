# benigna-api/benigna/services/statistics.py
from benigna.db.repository import Repository
from benigna.models.institution import InstitutionInDB
from benigna.models.statistics import AdminStatistics
from benigna.models.user import UserType
from benigna.services.donations import summarize


def admin_statistics(repo: Repository) -> AdminStatistics:
    users = repo.get_users()
    institutions = [u for u in users if isinstance(u, InstitutionInDB)]
    summary = summarize(repo.get_donations())
    ratings = [r.rating for r in repo.get_ratings()]
    return AdminStatistics(
        total_users=len(users),
        total_institutions=len(institutions),
        verified_institutions=sum(1 for i in institutions if i.verified),
        total_donors=sum(1 for u in users if u.type == UserType.DONOR),
        total_donations=summary.total,
        pending_donations=summary.pending,
        scheduled_donations=summary.scheduled,
        delivered_donations=summary.delivered,
        cancelled_donations=summary.cancelled,
        total_categories=len(repo.get_categories()),
        total_ratings=len(ratings),
        average_rating=sum(ratings) / len(ratings) if ratings else 0.0,
    )
