import asyncio
from datetime import date, timedelta

from tests.conftest import job_body, post_job


async def test_employer_posts_job_with_defaults(client, employer):
    job = await post_job(client, employer)

    assert job["company"] == "Khmer Digital Solutions"
    assert job["contact_email"] == "hr@khmerdigital.com"
    assert job["deleted_at"] is None
    assert [r["name"] for r in job["requirements"]] == ["CV / Resume", "ID / Passport"]
    assert date.fromisoformat(job["end_date"]) - date.fromisoformat(job["posted_at"][:10]) == timedelta(days=30)


async def test_candidate_cannot_post_job(client, candidate, db):
    response = await client.post("/jobs", json=job_body(), headers=candidate)

    assert response.status_code == 403
    assert await db.jobs.count_documents({}) == 0


async def test_missing_required_field_is_rejected_before_any_write(client, employer, db):
    response = await client.post("/jobs", json=job_body(salary="  "), headers=employer)

    assert response.status_code == 422
    assert "Salary" in response.text
    assert await db.jobs.count_documents({}) == 0


async def test_listing_is_newest_first_and_hides_removed_jobs(client, employer):
    first = await post_job(client, employer, title="First")
    await asyncio.sleep(0.01)
    second = await post_job(client, employer, title="Second")
    await asyncio.sleep(0.01)
    third = await post_job(client, employer, title="Third")

    response = await client.delete(f"/jobs/{second['id']}", headers=employer)
    assert response.status_code == 200

    listed = (await client.get("/jobs")).json()
    assert [job["id"] for job in listed] == [third["id"], first["id"]]

    assert (await client.get(f"/jobs/{second['id']}")).status_code == 404


async def test_soft_delete_keeps_the_record(client, employer, db):
    job = await post_job(client, employer)
    await client.delete(f"/jobs/{job['id']}", headers=employer)

    stored = await db.jobs.find_one({})
    assert stored["title"] == "Junior Web Developer"
    assert stored["deleted_at"] is not None


async def test_only_owner_can_remove_job(client, employer, other_employer):
    job = await post_job(client, employer)

    response = await client.delete(f"/jobs/{job['id']}", headers=other_employer)

    assert response.status_code == 403
    assert len((await client.get("/jobs")).json()) == 1


async def test_invalid_job_id(client):
    assert (await client.get("/jobs/not-an-id")).status_code == 400


async def test_my_jobs_reports_applicant_counts(client, employer, candidate, other_candidate):
    job = await post_job(client, employer)
    quiet = await post_job(client, employer, title="Quiet role")
    for headers in (candidate, other_candidate):
        await client.post("/applications", json={"job_id": job["id"]}, headers=headers)

    rows = (await client.get("/recruiter/my-jobs", headers=employer)).json()
    counts = {row["id"]: (row["application_count"], row["new_applications"]) for row in rows}

    assert counts == {job["id"]: (2, 2), quiet["id"]: (0, 0)}
