import pytest
from fastapi import status

from jobportal.core.exceptions import DuplicateApplicationError
from jobportal.models.application import Application
from jobportal.models.job import Job
from jobportal.services.application_service import ApplicationService


def _apply(client, user, job_id, auth_headers, cover_letter="I would love to join."):
    return client.post(
        "/api/applications",
        headers=auth_headers(user),
        json={"job_id": job_id, "cover_letter": cover_letter},
    )


def test_apply_creates_pending_application(client, create_job, seeker, auth_headers):
    job = create_job()
    response = _apply(client, seeker, job["id"], auth_headers)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["job_id"] == job["id"]
    assert data["applicant_id"] == seeker.id
    assert data["cover_letter"] == "I would love to join."
    assert data["resume_filename"] is None


def test_apply_accepts_camel_case_body(client, create_job, seeker, auth_headers):
    job = create_job()
    response = client.post(
        "/api/applications",
        headers=auth_headers(seeker),
        json={"jobId": job["id"], "coverLetter": "hi"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["job_id"] == job["id"]
    assert data["cover_letter"] == "hi"


def test_application_shows_up_on_job(client, create_job, seeker, auth_headers):
    job = create_job()
    application = _apply(client, seeker, job["id"], auth_headers).json()["data"]

    data = client.get(f"/api/jobs/{job['id']}").json()["data"]
    assert data["applications"] == [application["id"]]
    assert data["applications_count"] == 1


def test_apply_to_missing_job_returns_404(client, seeker, auth_headers):
    response = _apply(client, seeker, 777, auth_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Job not found"


def test_apply_requires_authentication(client, create_job):
    job = create_job()
    response = client.post("/api/applications", json={"job_id": job["id"]})
    assert response.status_code == 401


def test_cover_letter_is_capped_at_1000_chars(client, create_job, seeker, auth_headers):
    job = create_job()
    assert _apply(client, seeker, job["id"], auth_headers, cover_letter="x" * 1001).status_code == 400
    assert _apply(client, seeker, job["id"], auth_headers, cover_letter="x" * 1000).status_code == 201


def test_duplicate_application_is_rejected(client, create_job, seeker, auth_headers, db_session):
    job = create_job()
    assert _apply(client, seeker, job["id"], auth_headers).status_code == 201

    response = _apply(client, seeker, job["id"], auth_headers)
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "You have already applied for this job"}

    count = db_session.query(Application).filter(
        Application.job_id == job["id"], Application.applicant_id == seeker.id
    ).count()
    assert count == 1


def test_unique_constraint_decides_when_precheck_misses(db_session, employer, seeker, job_payload, monkeypatch):
    """A racing second insert that slipped past the pre-check still fails cleanly."""
    from jobportal.schemas.job import JobCreate
    from jobportal.services.job_service import JobService

    job = JobService(db_session).create_job(employer, JobCreate(**job_payload()))
    service = ApplicationService(db_session)
    service.apply(job.id, seeker)

    monkeypatch.setattr(service, "_find_existing", lambda job_id, applicant_id: None)
    with pytest.raises(DuplicateApplicationError):
        service.apply(job.id, seeker)

    assert db_session.query(Application).filter(Application.job_id == job.id).count() == 1


def test_different_users_may_apply_to_same_job(client, create_job, make_user, auth_headers):
    job = create_job()
    first, second = make_user(), make_user()
    assert _apply(client, first, job["id"], auth_headers).status_code == 201
    assert _apply(client, second, job["id"], auth_headers).status_code == 201


def test_my_applications_lists_newest_first_with_job_summary(client, create_job, seeker, auth_headers):
    older = create_job(title="Older Role")
    newer = create_job(title="Newer Role")
    _apply(client, seeker, older["id"], auth_headers)
    _apply(client, seeker, newer["id"], auth_headers)

    response = client.get("/api/applications/my-applications", headers=auth_headers(seeker))
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [a["job"]["title"] for a in body["data"]] == ["Newer Role", "Older Role"]
    assert body["data"][0]["job"]["salary_range"] == "$90,000 - $120,000"


def test_owner_lists_applicants(client, create_job, employer, seeker, auth_headers):
    job = create_job()
    _apply(client, seeker, job["id"], auth_headers)

    response = client.get(f"/api/applications/job/{job['id']}", headers=auth_headers(employer))
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["data"][0]["applicant"]["email"] == seeker.email


@pytest.mark.parametrize("requester", ["other_employer", "admin_user", "seeker"])
def test_only_owner_lists_applicants(client, create_job, auth_headers, request, requester):
    job = create_job()
    user = request.getfixturevalue(requester)
    response = client.get(f"/api/applications/job/{job['id']}", headers=auth_headers(user))
    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to view applications for this job"


def test_list_applicants_for_missing_job_returns_404(client, employer, auth_headers):
    response = client.get("/api/applications/job/31337", headers=auth_headers(employer))
    assert response.status_code == 404


def test_owner_sets_any_status_in_any_order(client, create_job, employer, seeker, auth_headers):
    job = create_job()
    application = _apply(client, seeker, job["id"], auth_headers).json()["data"]

    for new_status in ["accepted", "pending", "rejected", "reviewed"]:
        response = client.put(
            f"/api/applications/{application['id']}/status",
            headers=auth_headers(employer),
            json={"status": new_status},
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == new_status


def test_invalid_status_is_rejected(client, create_job, employer, seeker, auth_headers):
    job = create_job()
    application = _apply(client, seeker, job["id"], auth_headers).json()["data"]

    response = client.put(
        f"/api/applications/{application['id']}/status",
        headers=auth_headers(employer),
        json={"status": "hired"},
    )
    assert response.status_code == 400


@pytest.mark.parametrize("requester", ["other_employer", "admin_user", "seeker"])
def test_only_owner_sets_status(client, create_job, seeker, auth_headers, request, requester, db_session):
    job = create_job()
    application = _apply(client, seeker, job["id"], auth_headers).json()["data"]
    user = request.getfixturevalue(requester)

    response = client.put(
        f"/api/applications/{application['id']}/status",
        headers=auth_headers(user),
        json={"status": "accepted"},
    )
    assert response.status_code == 403
    assert db_session.get(Application, application["id"]).status == "pending"


def test_status_for_missing_application_returns_404(client, employer, auth_headers):
    response = client.put(
        "/api/applications/555/status",
        headers=auth_headers(employer),
        json={"status": "reviewed"},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Application not found"


def test_deleting_job_keeps_applications(client, create_job, employer, seeker, auth_headers, db_session):
    job = create_job()
    application = _apply(client, seeker, job["id"], auth_headers).json()["data"]

    assert client.delete(f"/api/jobs/{job['id']}", headers=auth_headers(employer)).status_code == 200
    assert db_session.get(Job, job["id"]) is None

    kept = db_session.get(Application, application["id"])
    assert kept is not None
    assert kept.job_id is None

    mine = client.get("/api/applications/my-applications", headers=auth_headers(seeker)).json()
    assert mine["count"] == 1
    assert mine["data"][0]["id"] == application["id"]
    assert mine["data"][0]["job"] is None
    assert mine["data"][0]["job_id"] is None


def test_status_of_application_to_deleted_job_cannot_be_changed(
    client, create_job, employer, seeker, auth_headers
):
    job = create_job()
    application = _apply(client, seeker, job["id"], auth_headers).json()["data"]
    client.delete(f"/api/jobs/{job['id']}", headers=auth_headers(employer))

    response = client.put(
        f"/api/applications/{application['id']}/status",
        headers=auth_headers(employer),
        json={"status": "accepted"},
    )
    assert response.status_code == 403
