"""
Public job board actions.

Every action returns a serialized envelope: SuccessResponse on success,
ErrorResponse (via server_action) on any failure. Writes check identity
and ownership before touching the database.
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session, sessionmaker

from .auth import ANONYMOUS, AuthProvider, AuthUser
from .cleanup import sweep_expired_jobs
from .database import Company, Job, session_scope
from .env import DEFAULT_JOBS_PER_PAGE
from .errors import ErrorKind, JobBoardError
from .filters import get_job_filters
from .logger import StructuredLogger, get_logger
from .normalize import normalize_filter_request
from .queries import find_cities, find_job_by_id, find_recent_jobs, query_jobs
from .recommend import recommend_jobs
from .responses import SuccessResponse, server_action
from .schema import JobByIdSchema, JobPostSchema, JobQuerySchema, RecommendedJobSchema


def _job_columns(post: JobPostSchema) -> Dict[str, Any]:
    """Column values written on create and (fully) on update."""
    return {
        "title": post.title,
        "description": post.description,
        "company_id": post.company_id,
        "type": post.type.value,
        "category": post.category.value,
        "application": post.application,
        "city": post.city,
        "address": post.address,
        "work_mode": post.work_mode.value,
        "skills": list(post.skills),
        "has_salary_range": post.has_salary_range,
        "min_salary": post.min_salary,
        "max_salary": post.max_salary,
        "has_experience_range": post.has_experience_range,
        "min_experience": post.min_experience,
        "max_experience": post.max_experience,
        "has_expiry_date": post.has_expiry_date,
        "expiry_date": post.expiry_date,
        "is_verified_job": False,
    }


class JobActions:
    """
    Entry points for the job board.

    Args:
        session_factory: SQLAlchemy sessionmaker for the job store
        auth: Resolves the calling user for write actions
        logger: Defaults to the global structured logger
        jobs_per_page: Page size used when a listing request sets none
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        auth: AuthProvider = ANONYMOUS,
        logger: Optional[StructuredLogger] = None,
        jobs_per_page: int = DEFAULT_JOBS_PER_PAGE,
    ):
        self.session_factory = session_factory
        self.auth = auth
        self.logger = logger or get_logger()
        self.jobs_per_page = jobs_per_page

    def _require_user(self) -> AuthUser:
        user = self.auth.current_user()
        if user is None or not user.id:
            raise JobBoardError("Not Authorized", ErrorKind.UNAUTHORIZED)
        return user

    @staticmethod
    def _owned_company(session: Session, company_id: str, user: AuthUser) -> Company:
        company = (
            session.query(Company)
            .filter(Company.id == company_id, Company.user_id == user.id)
            .first()
        )
        if company is None:
            raise JobBoardError("Company not found or not authorized", ErrorKind.NOT_FOUND)
        return company

    @server_action
    def create_job(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        user = self._require_user()
        post = JobPostSchema.model_validate(data)

        with session_scope(self.session_factory) as session:
            self._owned_company(session, post.company_id, user)
            job = Job(user_id=user.id, **_job_columns(post))
            session.add(job)
            session.flush()
            job_id = job.id

        self.logger.record_job_created()
        self.logger.info("Job created", job_id=job_id, user_id=user.id)
        return SuccessResponse(
            "Job created successfully, waiting for admin approval",
            201,
            {"isVerifiedJob": False},
        ).serialize()

    @server_action
    def get_all_jobs(self, data: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        request = normalize_filter_request(data)
        request.setdefault("limit", self.jobs_per_page)
        query = JobQuerySchema.model_validate(request)
        compiled = get_job_filters(query)

        with session_scope(self.session_factory) as session:
            jobs, total = query_jobs(session, compiled)

        self.logger.record_query()
        self.logger.debug(
            "Jobs listed",
            page=query.page,
            limit=query.limit,
            returned=len(jobs),
            total=total,
        )
        return SuccessResponse(
            "All jobs fetched successfully", 200, {"jobs": jobs, "totalJobs": total}
        ).serialize()

    @server_action
    def get_recommended_jobs(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        params = RecommendedJobSchema.model_validate(data)

        with session_scope(self.session_factory) as session:
            jobs, used_fallback = recommend_jobs(session, params.id, params.category.value)

        self.logger.record_query()
        if used_fallback:
            message = "No jobs found in this category, here are some recent jobs"
        else:
            message = "Recommended jobs fetched successfully"
        return SuccessResponse(message, 200, {"jobs": jobs}).serialize()

    @server_action
    def get_job_by_id(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        params = JobByIdSchema.model_validate(data)

        with session_scope(self.session_factory) as session:
            job = find_job_by_id(session, params.id)

        self.logger.record_query()
        return SuccessResponse(f"{params.id} Job fetched successfully", 200, {"job": job}).serialize()

    @server_action
    def get_city_filters(self) -> Dict[str, Any]:
        with session_scope(self.session_factory) as session:
            cities = find_cities(session)

        self.logger.record_query()
        return SuccessResponse("Cities fetched successfully", 200, {"cities": cities}).serialize()

    @server_action
    def get_recent_jobs(self) -> Dict[str, Any]:
        with session_scope(self.session_factory) as session:
            recent = find_recent_jobs(session)

        self.logger.record_query()
        return SuccessResponse(
            "Recently added jobs fetch successfully", 200, {"recentJobs": recent}
        ).serialize()

    @server_action
    def update_job(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        user = self._require_user()
        payload = dict(data)
        job_id = payload.pop("jobId", payload.pop("job_id", None))
        target = JobByIdSchema.model_validate({"id": job_id})
        post = JobPostSchema.model_validate(payload)

        with session_scope(self.session_factory) as session:
            job = (
                session.query(Job)
                .filter(Job.id == target.id, Job.user_id == user.id)
                .first()
            )
            if job is None:
                raise JobBoardError("Job not found or not authorized", ErrorKind.NOT_FOUND)
            self._owned_company(session, post.company_id, user)

            for column, value in _job_columns(post).items():
                setattr(job, column, value)

        self.logger.record_job_updated()
        self.logger.info("Job updated", job_id=target.id, user_id=user.id)
        return SuccessResponse(
            "Job updated successfully", 200, {"isVerifiedJob": False, "jobId": target.id}
        ).serialize()

    def update_expired_jobs(self) -> None:
        """
        Maintenance trigger: flip jobs past their expiry date to expired.

        Side effect only; store failures propagate to the scheduler.
        """
        with session_scope(self.session_factory) as session:
            swept = sweep_expired_jobs(session)
        self.logger.record_jobs_expired(swept)
        self.logger.info("Expired jobs swept", expired=swept)
