"""
Test suite for jobs: CRUD layer and /jobs endpoints.

Tests cover:
- Job creation, duplicate titles and unknown companies
- Listing with title/minSalary/hasEquity filters
- Retrieval, partial updates and deletion by title
- Renames that would collide with an existing title
- Admin-only access for writes
- Generic 500 handling for database failures
"""

import pytest
from fastapi.testclient import TestClient

from jobly.core.database import run_query
from jobly.core.errors import BadRequestError, ConflictError, NotFoundError
from jobly.crud import job as job_crud
from jobly.schemas.job import JobNew
from main import app


def without_id(job):
    assert isinstance(job["id"], int)
    return {key: value for key, value in job.items() if key != "id"}


J1 = {"title": "j1", "salary": 75000, "equity": 0.5, "companyHandle": "c1"}
J2 = {"title": "j2", "salary": 95000, "equity": 0.5, "companyHandle": "c2"}
J3 = {"title": "j3", "salary": 175000, "equity": 0.5, "companyHandle": "c3"}
J4 = {"title": "j4", "salary": 125000, "equity": None, "companyHandle": "c1"}

NEW_JOB = {"title": "coder", "salary": 100000, "equity": 0.5, "companyHandle": "c1"}


@pytest.fixture
def no_equity_job(db_session):
    """A fourth job without equity"""
    run_query(
        db_session,
        """INSERT INTO jobs (title, salary, equity, company_handle)
           VALUES ($1, $2, $3, $4)""",
        ["j4", 125000, None, "c1"],
    )


class TestJobCrud:
    """Tests for jobly.crud.job"""

    def test_create(self, db_session):
        """Test creating a job returns and stores it"""
        job = job_crud.create(db_session, JobNew.model_validate(NEW_JOB))
        assert without_id(job) == NEW_JOB

        rows = run_query(
            db_session,
            """SELECT id, title, salary, equity, company_handle AS "companyHandle"
               FROM jobs
               WHERE title = 'coder'""",
        )
        assert rows == [job]

    def test_create_duplicate(self, db_session):
        """Test creating a job with a taken title fails"""
        job_crud.create(db_session, JobNew.model_validate(NEW_JOB))

        with pytest.raises(ConflictError):
            job_crud.create(db_session, JobNew.model_validate(NEW_JOB))

    def test_create_unknown_company(self, db_session):
        """Test creating a job for a missing company fails"""
        with pytest.raises(BadRequestError):
            job_crud.create(db_session, JobNew.model_validate({**NEW_JOB, "companyHandle": "nope"}))

    def test_find_all_no_filter(self, db_session):
        """Test listing all jobs ordered by title"""
        jobs = job_crud.find_all(db_session)
        assert [without_id(job) for job in jobs] == [J1, J2, J3]

    def test_find_all_min_salary_with_equity(self, db_session, no_equity_job):
        """Test minSalary combined with hasEquity=true"""
        jobs = job_crud.find_all(db_session, {"minSalary": 90000, "hasEquity": True})
        assert [without_id(job) for job in jobs] == [J2, J3]

    def test_find_all_min_salary_equity_false(self, db_session, no_equity_job):
        """Test hasEquity=false does not restrict a minSalary filter"""
        jobs = job_crud.find_all(db_session, {"minSalary": 90000, "hasEquity": False})
        assert [without_id(job) for job in jobs] == [J2, J3, J4]

    def test_find_all_only_equity_false(self, db_session, no_equity_job):
        """Test hasEquity=false alone returns every job"""
        jobs = job_crud.find_all(db_session, {"hasEquity": False})
        assert [without_id(job) for job in jobs] == [J1, J2, J3, J4]

    def test_find_all_only_equity_true(self, db_session, no_equity_job):
        """Test hasEquity=true excludes jobs without equity"""
        jobs = job_crud.find_all(db_session, {"hasEquity": True})
        assert [without_id(job) for job in jobs] == [J1, J2, J3]

    def test_find_all_zero_equity_is_not_equity(self, db_session):
        """Test a zero equity job does not count as offering equity"""
        job_crud.update(db_session, "j1", {"equity": 0})

        jobs = job_crud.find_all(db_session, {"hasEquity": True})
        assert [job["title"] for job in jobs] == ["j2", "j3"]

    def test_find_all_by_title(self, db_session):
        """Test case-insensitive title filter"""
        jobs = job_crud.find_all(db_session, {"title": "J3"})
        assert [without_id(job) for job in jobs] == [J3]

    def test_find_all_unknown_filter(self, db_session):
        """Test an unknown filter key is rejected"""
        with pytest.raises(BadRequestError):
            job_crud.find_all(db_session, {"companyHandle": "c1"})

    def test_get(self, db_session):
        """Test fetching a job by title"""
        assert without_id(job_crud.get(db_session, "j1")) == J1

    def test_get_not_found(self, db_session):
        """Test fetching a missing job fails"""
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, "nope")

    def test_update(self, db_session):
        """Test updating every mutable field"""
        job = job_crud.update(db_session, "j1", {"title": "newTitle", "salary": 300000, "equity": 1.0})

        assert without_id(job) == {"title": "newTitle", "salary": 300000, "equity": 1.0, "companyHandle": "c1"}
        assert job_crud.get(db_session, "newTitle") == job

    def test_partial_update(self, db_session):
        """Test a partial update leaves other fields alone"""
        before = job_crud.get(db_session, "j1")

        job = job_crud.update(db_session, "j1", {"salary": 300000})

        assert job == {**before, "salary": 300000}

    def test_update_to_taken_title(self, db_session):
        """Test renaming a job to another job's title fails and changes nothing"""
        with pytest.raises(ConflictError):
            job_crud.update(db_session, "j1", {"title": "j2"})

        rows = run_query(db_session, "SELECT title FROM jobs ORDER BY title")
        assert [row["title"] for row in rows] == ["j1", "j2", "j3"]

    def test_update_keeping_own_title(self, db_session):
        """Test passing a job's current title is not a conflict"""
        job = job_crud.update(db_session, "j1", {"title": "j1", "salary": 80000})
        assert without_id(job) == {**J1, "salary": 80000}

    def test_update_not_found(self, db_session):
        """Test updating a missing job fails"""
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, "nope", {"salary": 1})

    def test_rename_not_found(self, db_session):
        """Test renaming a missing job to a taken title reports the missing job"""
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, "nope", {"title": "j2"})

    def test_update_no_data(self, db_session):
        """Test an empty update is rejected"""
        with pytest.raises(BadRequestError):
            job_crud.update(db_session, "j1", {})

    def test_remove(self, db_session):
        """Test deleting a job by title"""
        assert job_crud.remove(db_session, "j1") == {"deleted": "j1"}

        with pytest.raises(NotFoundError):
            job_crud.get(db_session, "j1")

    def test_remove_not_found(self, db_session):
        """Test deleting a missing job fails"""
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, "nope")


class TestCreateJobEndpoint:
    """Tests for POST /jobs"""

    def test_admin(self, client, admin_headers):
        """Test admin can create a job"""
        response = client.post("/jobs", json=NEW_JOB, headers=admin_headers)

        assert response.status_code == 201
        assert without_id(response.json()["job"]) == NEW_JOB

    def test_regular_user(self, client, u1_headers):
        """Test non-admin users cannot create jobs"""
        response = client.post("/jobs", json=NEW_JOB, headers=u1_headers)
        assert response.status_code == 401

    def test_anon(self, client):
        """Test anonymous requests cannot create jobs"""
        response = client.post("/jobs", json=NEW_JOB)
        assert response.status_code == 401

    def test_missing_data(self, client, admin_headers):
        """Test a body without companyHandle is rejected"""
        response = client.post(
            "/jobs",
            json={"title": "j5", "salary": 100000, "equity": 0.5, "company_handle": "c1"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_extra_data(self, client, admin_headers):
        """Test unknown body fields are rejected"""
        response = client.post("/jobs", json={**NEW_JOB, "extraData": "not-allowed"}, headers=admin_headers)
        assert response.status_code == 400

    def test_equity_above_one(self, client, admin_headers):
        """Test equity above 1 is rejected"""
        response = client.post("/jobs", json={**NEW_JOB, "equity": 1.5}, headers=admin_headers)
        assert response.status_code == 400

    def test_duplicate_title(self, client, admin_headers):
        """Test a taken title is a bad request"""
        response = client.post("/jobs", json={**NEW_JOB, "title": "j1"}, headers=admin_headers)
        assert response.status_code == 400

    def test_unknown_company(self, client, admin_headers):
        """Test an unknown company is a bad request"""
        response = client.post("/jobs", json={**NEW_JOB, "companyHandle": "nope"}, headers=admin_headers)
        assert response.status_code == 400


class TestListJobsEndpoint:
    """Tests for GET /jobs"""

    def test_anon(self, client):
        """Test anyone can list jobs"""
        response = client.get("/jobs")

        assert response.status_code == 200
        assert [without_id(job) for job in response.json()["jobs"]] == [J1, J2, J3]

    def test_filters(self, client, no_equity_job):
        """Test query string filters are applied"""
        response = client.get("/jobs", params={"minSalary": "90000", "hasEquity": "true"})
        assert [job["title"] for job in response.json()["jobs"]] == ["j2", "j3"]

    def test_equity_false_only(self, client, no_equity_job):
        """Test hasEquity=false alone lists every job"""
        response = client.get("/jobs", params={"hasEquity": "false"})

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["j1", "j2", "j3", "j4"]

    def test_title_filter(self, client):
        """Test filtering by part of a title"""
        response = client.get("/jobs", params={"title": "2"})
        assert [job["title"] for job in response.json()["jobs"]] == ["j2"]

    def test_unknown_filter(self, client):
        """Test an unknown query parameter is rejected with its name"""
        response = client.get("/jobs", params={"companyHandle": "c1"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "companyHandle is not an appropriate filter option"

    def test_bad_equity_value(self, client):
        """Test a non-boolean hasEquity is rejected"""
        response = client.get("/jobs", params={"hasEquity": "sometimes"})
        assert response.status_code == 400

    def test_database_error_is_500(self, db_session, client):
        """Test database failures answer a generic 500"""
        run_query(db_session, "DROP TABLE jobs")

        with TestClient(app, raise_server_exceptions=False) as failing_client:
            response = failing_client.get("/jobs")

        assert response.status_code == 500


class TestGetJobEndpoint:
    """Tests for GET /jobs/{title}"""

    def test_anon(self, client):
        """Test anyone can fetch a job"""
        response = client.get("/jobs/j1")

        assert response.status_code == 200
        assert without_id(response.json()["job"]) == J1

    def test_not_found(self, client):
        """Test a missing job is a 404"""
        response = client.get("/jobs/nope")
        assert response.status_code == 404


class TestUpdateJobEndpoint:
    """Tests for PATCH /jobs/{title}"""

    def test_admin(self, client, admin_headers):
        """Test admin can rename a job"""
        response = client.patch("/jobs/j1", json={"title": "j1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert without_id(response.json()["job"]) == {**J1, "title": "j1-new"}

    def test_regular_user(self, client, u1_headers):
        """Test non-admin users cannot update jobs"""
        response = client.patch("/jobs/j1", json={"title": "j1-new"}, headers=u1_headers)
        assert response.status_code == 401

    def test_anon(self, client):
        """Test anonymous requests cannot update jobs"""
        response = client.patch("/jobs/j1", json={"name": "j1-new"})
        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        """Test updating a missing job is a 404"""
        response = client.patch("/jobs/nope", json={"title": "new nope"}, headers=admin_headers)
        assert response.status_code == 404

    def test_rename_to_taken_title(self, client, admin_headers):
        """Test a rename onto another job's title is refused and delete still hits one row"""
        response = client.patch("/jobs/j1", json={"title": "j2"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate job: j2"

        assert client.delete("/jobs/j2", headers=admin_headers).status_code == 200
        titles = [job["title"] for job in client.get("/jobs").json()["jobs"]]
        assert titles == ["j1", "j3"]

    def test_id_change(self, client, admin_headers):
        """Test id cannot be changed"""
        response = client.patch("/jobs/j1", json={"id": 1000}, headers=admin_headers)
        assert response.status_code == 400

    def test_company_handle_change(self, client, admin_headers):
        """Test a job cannot move to another company"""
        response = client.patch("/jobs/j1", json={"companyHandle": "c3"}, headers=admin_headers)
        assert response.status_code == 400

    def test_invalid_data(self, client, admin_headers):
        """Test a non-integer salary is rejected"""
        response = client.patch("/jobs/j1", json={"salary": "not-an-integer"}, headers=admin_headers)
        assert response.status_code == 400


class TestDeleteJobEndpoint:
    """Tests for DELETE /jobs/{title}"""

    def test_admin(self, client, admin_headers):
        """Test admin can delete a job"""
        response = client.delete("/jobs/j1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "j1"}

    def test_regular_user(self, client, u1_headers):
        """Test non-admin users cannot delete jobs"""
        response = client.delete("/jobs/j1", headers=u1_headers)
        assert response.status_code == 401

    def test_anon(self, client):
        """Test anonymous requests cannot delete jobs"""
        response = client.delete("/jobs/j1")
        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        """Test deleting a missing job is a 404"""
        response = client.delete("/jobs/nope", headers=admin_headers)
        assert response.status_code == 404
