"""
Test suite for job-related endpoints and functionality.

Tests cover:
- Job creation
- Job retrieval and filtering
- Partial updates
- Job deletion
- Error handling
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text


def job_json(seed_data, title, salary, equity, company_handle):
    return {
        "id": seed_data[title],
        "title": title,
        "salary": salary,
        "equity": equity,
        "companyHandle": company_handle,
    }


@pytest.fixture
def all_jobs(seed_data):
    return [
        job_json(seed_data, "j1", 1000, "0.1", "c1"),
        job_json(seed_data, "j2", 2000, "0.2", "c2"),
        job_json(seed_data, "j3", 3000, "0.3", "c3"),
        job_json(seed_data, "j4", 4000, None, "c3"),
    ]


@pytest.fixture
def new_job():
    return {
        "title": "puncher",
        "salary": 12345,
        "equity": "0.5",
        "companyHandle": "c1",
    }


class TestJobCreation:
    """Tests for job creation endpoint"""

    def test_create_job_success(self, client, seed_data, admin_headers, new_job):
        response = client.post("/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()["job"]
        assert isinstance(data["id"], int)
        assert {k: v for k, v in data.items() if k != "id"} == new_job

        # Retrievable by its generated id
        get_response = client.get(f"/jobs/{data['id']}")
        assert get_response.json() == {"job": data}

    def test_optional_fields(self, client, seed_data, admin_headers):
        response = client.post(
            "/jobs",
            json={"title": "volunteer", "companyHandle": "c2"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()["job"]
        assert data["salary"] is None
        assert data["equity"] is None

    def test_create_job_not_admin(self, client, seed_data, user_headers, new_job):
        response = client.post("/jobs", json=new_job, headers=user_headers)
        assert response.status_code == 401

    def test_create_job_missing_fields(self, client, seed_data, admin_headers):
        response = client.post("/jobs", json={}, headers=admin_headers)
        assert response.status_code == 400

    def test_create_job_invalid_salary(self, client, seed_data, admin_headers, new_job):
        new_job["salary"] = "a lot of money please"
        response = client.post("/jobs", json=new_job, headers=admin_headers)
        assert response.status_code == 400

    def test_create_job_salary_out_of_range(self, client, seed_data, admin_headers, new_job):
        new_job["salary"] = 2 ** 64
        response = client.post("/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 400
        assert any(err.startswith("salary") for err in response.json()["detail"])

    @pytest.mark.parametrize("equity", ["1.5", "-0.1", "abc", 0.5])
    def test_create_job_invalid_equity(self, client, seed_data, admin_headers, new_job, equity):
        new_job["equity"] = equity
        response = client.post("/jobs", json=new_job, headers=admin_headers)
        assert response.status_code == 400

    def test_create_job_unknown_company(self, client, seed_data, admin_headers, new_job):
        new_job["companyHandle"] = "nope"
        response = client.post("/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No company: nope"

    def test_new_job_listed_under_company(self, client, seed_data, admin_headers, new_job):
        job_id = client.post("/jobs", json=new_job, headers=admin_headers).json()["job"]["id"]

        jobs = client.get("/companies/c1").json()["company"]["jobs"]
        assert {"id": job_id, "title": "puncher", "salary": 12345, "equity": "0.5"} in jobs


class TestJobListing:
    """Tests for GET /jobs and its filters"""

    def test_list_jobs(self, client, all_jobs):
        response = client.get("/jobs")

        assert response.status_code == 200
        assert response.json() == {"jobs": all_jobs}

    def test_filter_by_title(self, client, all_jobs):
        response = client.get("/jobs", params={"title": "J1"})
        assert response.json() == {"jobs": [all_jobs[0]]}

    def test_filter_by_min_salary(self, client, all_jobs):
        response = client.get("/jobs", params={"minSalary": 3000})
        assert response.json() == {"jobs": all_jobs[2:]}

    def test_filter_has_equity(self, client, all_jobs):
        response = client.get("/jobs", params={"hasEquity": "true"})
        assert response.json() == {"jobs": all_jobs[:3]}

    def test_has_equity_false_returns_everything(self, client, all_jobs):
        response = client.get("/jobs", params={"hasEquity": "false"})
        assert response.json() == {"jobs": all_jobs}

    def test_combined_filters(self, client, all_jobs):
        response = client.get(
            "/jobs", params={"title": "j", "minSalary": 3000, "hasEquity": "true"}
        )
        assert response.json() == {"jobs": [all_jobs[2]]}

    def test_shared_title_intersects_by_id(self, client, seed_data, admin_headers):
        """Jobs sharing a title are filtered individually."""
        rich = client.post(
            "/jobs",
            json={"title": "dev", "salary": 9000, "companyHandle": "c1"},
            headers=admin_headers,
        ).json()["job"]
        client.post(
            "/jobs",
            json={"title": "dev", "salary": 10, "equity": "0.2", "companyHandle": "c2"},
            headers=admin_headers,
        )

        response = client.get("/jobs", params={"title": "dev", "minSalary": 5000})
        assert response.json() == {"jobs": [rich]}

        response = client.get(
            "/jobs", params={"title": "dev", "minSalary": 5000, "hasEquity": "true"}
        )
        assert response.json() == {"jobs": []}

    def test_invalid_min_salary(self, client, seed_data):
        response = client.get("/jobs", params={"minSalary": "plenty"})
        assert response.status_code == 400

    @pytest.mark.parametrize("min_salary", [2 ** 31, 2 ** 64])
    def test_min_salary_out_of_range(self, client, seed_data, min_salary):
        response = client.get("/jobs", params={"minSalary": min_salary})
        assert response.status_code == 400

    def test_min_salary_at_upper_bound(self, client, all_jobs):
        response = client.get("/jobs", params={"minSalary": 2 ** 31 - 1})
        assert response.json() == {"jobs": []}

    def test_invalid_has_equity(self, client, seed_data):
        response = client.get("/jobs", params={"hasEquity": "maybe"})
        assert response.status_code == 400


class TestJobRetrieval:
    """Tests for job retrieval endpoints"""

    def test_get_job_by_id(self, client, all_jobs):
        response = client.get(f"/jobs/{all_jobs[0]['id']}")

        assert response.status_code == 200
        assert response.json() == {"job": all_jobs[0]}

    def test_get_nonexistent_job(self, client, seed_data):
        response = client.get("/jobs/99999")

        assert response.status_code == 404
        assert "no job" in response.json()["detail"].lower()

    def test_get_non_integer_id(self, client, seed_data):
        response = client.get("/jobs/abc")
        assert response.status_code == 400


class TestJobUpdate:
    """Tests for PATCH /jobs/{job_id}"""

    def test_partial_update(self, client, all_jobs, admin_headers):
        job = all_jobs[0]
        response = client.patch(f"/jobs/{job['id']}", json={"title": "super j1"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"job": {**job, "title": "super j1"}}

    def test_clear_equity(self, client, all_jobs, admin_headers):
        job = all_jobs[1]
        response = client.patch(
            f"/jobs/{job['id']}", json={"equity": None, "salary": 2500}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {"job": {**job, "equity": None, "salary": 2500}}

    def test_not_admin(self, client, all_jobs, user_headers):
        response = client.patch(f"/jobs/{all_jobs[0]['id']}", json={"title": "x"}, headers=user_headers)
        assert response.status_code == 401

    @pytest.mark.parametrize("changes", [{"companyHandle": "c2"}, {"id": 42}])
    def test_cannot_change_identity(self, client, all_jobs, admin_headers, changes):
        job = all_jobs[0]
        response = client.patch(f"/jobs/{job['id']}", json=changes, headers=admin_headers)

        assert response.status_code == 400
        assert client.get(f"/jobs/{job['id']}").json() == {"job": job}

    def test_invalid_data(self, client, all_jobs, admin_headers):
        response = client.patch(
            f"/jobs/{all_jobs[0]['id']}", json={"salary": "lots"}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_null_title_rejected(self, client, all_jobs, admin_headers):
        response = client.patch(f"/jobs/{all_jobs[0]['id']}", json={"title": None}, headers=admin_headers)
        assert response.status_code == 400

    def test_salary_out_of_range(self, client, all_jobs, admin_headers):
        response = client.patch(f"/jobs/{all_jobs[0]['id']}", json={"salary": 2 ** 64}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_nonexistent(self, client, seed_data, admin_headers):
        response = client.patch("/jobs/99999", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404


class TestJobDeletion:
    """Tests for job deletion"""

    def test_delete_job(self, client, all_jobs, admin_headers):
        job_id = all_jobs[0]["id"]
        response = client.delete(f"/jobs/{job_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": job_id}

        # Verify it's gone
        assert client.get(f"/jobs/{job_id}").status_code == 404

    def test_delete_not_admin(self, client, all_jobs, user_headers):
        response = client.delete(f"/jobs/{all_jobs[0]['id']}", headers=user_headers)
        assert response.status_code == 401

    def test_delete_anonymous(self, client, all_jobs):
        response = client.delete(f"/jobs/{all_jobs[0]['id']}")
        assert response.status_code == 401

    def test_delete_nonexistent_job(self, client, seed_data, admin_headers):
        response = client.delete("/jobs/99999", headers=admin_headers)
        assert response.status_code == 404


class TestServerErrors:
    """Unexpected failures are reported as 500"""

    def test_database_error(self, app, db_session, seed_data):
        db_session.execute(text("DROP TABLE jobs"))
        db_session.commit()

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/jobs")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error", "status": 500}
