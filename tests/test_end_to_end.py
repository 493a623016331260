def test_hiring_flow(client, job_payload, upload_dir):
    """Employer posts, seeker uploads and applies, employer accepts, seeker sees it."""
    employer = client.post("/api/auth/register", json={
        "name": "TechCorp HR", "email": "hr@techcorp.io", "password": "password123", "role": "employer",
    }).json()
    employer_headers = {"Authorization": f"Bearer {employer['token']}"}

    job = client.post("/api/jobs", headers=employer_headers, json=job_payload()).json()["data"]

    seeker = client.post("/api/auth/register", json={
        "name": "Jane Seeker", "email": "jane@mail.io", "password": "password123", "role": "job_seeker",
    }).json()
    seeker_headers = {"Authorization": f"Bearer {seeker['token']}"}

    upload = client.post(
        "/api/resumes/upload",
        headers=seeker_headers,
        files={"resume": ("jane.pdf", b"%PDF-1.4 jane", "application/pdf")},
    )
    assert upload.status_code == 200

    applied = client.post(
        "/api/applications",
        headers=seeker_headers,
        json={"job_id": job["id"], "cover_letter": "Hello!"},
    )
    assert applied.status_code == 201
    application_id = applied.json()["data"]["id"]
    assert applied.json()["data"]["resume_filename"] == upload.json()["data"]["filename"]

    applicants = client.get(f"/api/applications/job/{job['id']}", headers=employer_headers).json()
    assert applicants["count"] == 1
    assert applicants["data"][0]["applicant"]["name"] == "Jane Seeker"

    accepted = client.put(
        f"/api/applications/{application_id}/status",
        headers=employer_headers,
        json={"status": "accepted"},
    )
    assert accepted.status_code == 200

    mine = client.get("/api/applications/my-applications", headers=seeker_headers).json()
    assert mine["count"] == 1
    assert mine["data"][0]["status"] == "accepted"
    assert mine["data"][0]["job"]["title"] == job["title"]
