"""
Tests for the job query service against a SQLite store.
"""

import pytest

from jobboard.buckets import LAKH
from jobboard.filters import get_job_filters
from jobboard.queries import find_cities, find_job_by_id, find_recent_jobs, query_jobs
from jobboard.schema import JobQuerySchema


def run(session, **raw):
    return query_jobs(session, get_job_filters(JobQuerySchema.model_validate(raw)))


def ids(jobs):
    return [job["id"] for job in jobs]


class TestVisibility:

    def test_hidden_jobs_never_listed(self, db_session, make_job):
        visible = make_job()
        make_job(is_verified_job=False)
        make_job(expired=True)

        jobs, total = run(db_session)

        assert ids(jobs) == [visible.id]
        assert total == 1

    def test_payload_includes_company_public_fields(self, db_session, make_job):
        make_job()
        (job,), _ = run(db_session)

        assert job["company"] == {
            "id": "acme",
            "name": "Acme",
            "bio": "We build rockets",
            "logo": "https://cdn.example.com/acme.png",
        }
        assert job["companyId"] == "acme"
        assert "postedAt" in job
        assert "hasExperiencerange" in job


class TestFilters:

    def test_empty_list_same_as_no_filter(self, db_session, make_job):
        make_job(work_mode="remote", city="Pune")
        make_job(work_mode="onsite", city="Delhi")

        unfiltered = run(db_session)
        empty = run(db_session, workmode=[], city=[], EmpType=[], salaryrange=[])

        assert ids(unfiltered[0]) == ids(empty[0])
        assert unfiltered[1] == empty[1] == 2

    def test_values_within_field_are_ored(self, db_session, make_job):
        remote = make_job(work_mode="remote")
        hybrid = make_job(work_mode="hybrid")
        make_job(work_mode="onsite")

        jobs, total = run(db_session, workmode=["remote", "hybrid"])

        assert set(ids(jobs)) == {remote.id, hybrid.id}
        assert total == 2

    def test_fields_are_anded(self, db_session, make_job):
        match = make_job(work_mode="remote", city="Pune", type="contract")
        make_job(work_mode="remote", city="Delhi", type="contract")
        make_job(work_mode="onsite", city="Pune", type="contract")
        make_job(work_mode="remote", city="Pune", type="full_time")

        jobs, total = run(db_session, workmode=["remote"], city=["Pune"], EmpType=["contract"])

        assert ids(jobs) == [match.id]
        assert total == 1

    def test_salary_union_and_ungated_jobs(self, db_session, make_job):
        salaries = [1 * LAKH, 4 * LAKH, 7 * LAKH, 12 * LAKH, 18 * LAKH, 25 * LAKH]
        for salary in salaries:
            make_job(has_salary_range=True, min_salary=salary, max_salary=salary + LAKH)
        no_range = make_job(has_salary_range=False)

        selected = ["3-6L", "20L+"]
        jobs, total = run(db_session, salaryrange=selected)

        ranged = [job for job in jobs if job["hasSalaryRange"]]
        assert sorted(job["minSalary"] for job in ranged) == [4 * LAKH, 25 * LAKH]
        assert no_range.id in ids(jobs)
        assert total == 3

    def test_experience_buckets(self, db_session, make_job):
        junior = make_job(has_experience_range=True, min_experience=0, max_experience=1)
        make_job(has_experience_range=True, min_experience=6, max_experience=8)
        open_range = make_job(has_experience_range=False)

        jobs, _ = run(db_session, experience=["0-1"])

        assert set(ids(jobs)) == {junior.id, open_range.id}

    def test_search_is_case_insensitive(self, db_session, make_job):
        python = make_job(title="Senior Python Developer")
        make_job(title="Designer")

        jobs, _ = run(db_session, search="python")

        assert ids(jobs) == [python.id]

    @pytest.mark.parametrize("term", ["%", "_"])
    def test_search_wildcards_match_literally(self, db_session, make_job, term):
        make_job(title="Backend Engineer")
        make_job(title="Data Scientist")
        literal = make_job(title=f"Growth Lead (50{term} remote)")

        jobs, total = run(db_session, search=term)

        assert ids(jobs) == [literal.id]
        assert total == 1


class TestOrderingAndPaging:

    def test_newest_first_by_default(self, db_session, make_job):
        first, second, third = make_job(), make_job(), make_job()
        jobs, _ = run(db_session)
        assert ids(jobs) == [third.id, second.id, first.id]

    def test_oldest_first(self, db_session, make_job):
        first, second = make_job(), make_job()
        jobs, _ = run(db_session, sortby="postedat_asc")
        assert ids(jobs) == [first.id, second.id]

    def test_salary_sort(self, db_session, make_job):
        low = make_job(has_salary_range=True, min_salary=LAKH, max_salary=2 * LAKH)
        high = make_job(has_salary_range=True, min_salary=LAKH, max_salary=9 * LAKH)
        mid = make_job(has_salary_range=True, min_salary=LAKH, max_salary=5 * LAKH)

        jobs, _ = run(db_session, sortby="maxsalary_desc")

        assert ids(jobs) == [high.id, mid.id, low.id]

    @pytest.mark.parametrize("sortby", ["maxsalary_asc", "maxsalary_desc", "minsalary_asc"])
    def test_salary_sort_puts_unranged_jobs_last(self, db_session, make_job, sortby):
        unranged = make_job(has_salary_range=False)
        ranged = make_job(has_salary_range=True, min_salary=LAKH, max_salary=2 * LAKH)

        jobs, _ = run(db_session, sortby=sortby)

        assert ids(jobs) == [ranged.id, unranged.id]

    def test_second_page_matches_unpaginated_slice(self, db_session, make_job):
        for _ in range(25):
            make_job()
        make_job(expired=True)

        everything, total_all = run(db_session, limit=100)
        page_two, total = run(db_session, page=2, limit=10)

        assert ids(page_two) == ids(everything)[10:20]
        assert total == total_all == 25

    def test_page_past_the_end(self, db_session, make_job):
        make_job()
        jobs, total = run(db_session, page=5, limit=10)
        assert jobs == []
        assert total == 1


class TestLookups:

    def test_recent_jobs_capped_at_six(self, db_session, make_job):
        created = [make_job() for _ in range(8)]
        make_job(is_verified_job=False)

        recent = find_recent_jobs(db_session)

        assert ids(recent) == [job.id for job in reversed(created)][:6]

    def test_find_job_by_id(self, db_session, make_job):
        job = make_job(application="mailto:jobs@acme.example.com")
        found = find_job_by_id(db_session, job.id)
        assert found["id"] == job.id
        assert found["application"] == "mailto:jobs@acme.example.com"

    @pytest.mark.parametrize("job_id", ["missing", "expired"])
    def test_find_job_by_id_none(self, db_session, make_job, job_id):
        make_job(id="expired", expired=True)
        assert find_job_by_id(db_session, job_id) is None

    def test_cities_distinct_and_visible_only(self, db_session, make_job):
        make_job(city="Pune")
        make_job(city="Pune")
        make_job(city="Chennai")
        make_job(city="Delhi", expired=True)
        make_job(city="Goa", is_verified_job=False)

        assert find_cities(db_session) == ["Chennai", "Pune"]
