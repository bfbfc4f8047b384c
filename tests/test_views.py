import pytest

from workboard.client.views import (
    applicant_total,
    filter_jobs,
    is_failed,
    pending_count,
    roadmap,
)
from tests.factories import make_app, make_job


def marks(status):
    return [(s.completed, s.failed, s.trophy) for s in roadmap(status)]


def test_roadmap_pending():
    assert marks("pending") == [(True, False, False), (False, False, False), (False, False, False)]


def test_roadmap_interview_set():
    steps = roadmap("interview_set")
    assert [s.completed for s in steps] == [True, True, False]
    assert not any(s.failed for s in steps)


def test_roadmap_passed_shows_trophy_on_last_step():
    assert marks("passed") == [(True, False, False), (True, False, False), (True, False, True)]


def test_roadmap_failed_shortlist():
    assert marks("failed_shortlist") == [(False, True, False), (False, False, False), (False, False, False)]


def test_roadmap_failed_interview():
    assert marks("failed_interview") == [(False, False, False), (False, True, False), (False, False, False)]


@pytest.mark.parametrize("status", ["pending", "interview_set", "passed", "failed_shortlist", "failed_interview"])
def test_roadmap_never_marks_a_step_both_failed_and_completed(status):
    assert [s.label for s in roadmap(status)] == ["Review", "Interview", "Hired"]
    assert not any(s.completed and s.failed for s in roadmap(status))


def test_is_failed():
    assert is_failed("failed_shortlist")
    assert is_failed("failed_interview")
    assert not is_failed("passed")


def test_pending_count_counts_only_pending_on_that_job():
    apps = [
        make_app("a1", "job-1", "pending", "cand-1"),
        make_app("a2", "job-1", "pending", "cand-2"),
        make_app("a3", "job-1", "interview_set", "cand-3"),
        make_app("a4", "job-2", "pending", "cand-1"),
    ]
    assert pending_count(apps, "job-1") == 2
    assert pending_count(apps, "job-2") == 1
    assert pending_count(apps, "job-3") == 0


def test_applicant_total_counts_each_candidate_on_the_job():
    apps = [
        make_app("a1", "job-1", candidate_id="cand-1"),
        make_app("a2", "job-1", candidate_id="cand-2"),
        make_app("a3", "job-2", candidate_id="cand-1"),
    ]
    assert applicant_total(apps, "job-1") == 2
    assert applicant_total(apps, "job-2") == 1


def test_filter_jobs_by_type_saved_and_search():
    jobs = [
        make_job("j1", "Junior Web Developer"),
        make_job("j2", "Part-time Barista", company="Brown Coffee", job_type="Student-friendly", workplace="BKK1"),
        make_job("j3", "UI/UX Designer"),
    ]

    assert [j.id for j in filter_jobs(jobs)] == ["j1", "j2", "j3"]
    assert [j.id for j in filter_jobs(jobs, "Student-friendly")] == ["j2"]
    assert [j.id for j in filter_jobs(jobs, "Saved", saved_ids={"j3"})] == ["j3"]
    assert [j.id for j in filter_jobs(jobs, query="brown")] == ["j2"]
    assert [j.id for j in filter_jobs(jobs, "Full-time", query="designer")] == ["j3"]


def test_role_filters():
    from workboard.client.views import candidate_applications, employer_jobs

    apps = [make_app("a1", "job-1", candidate_id="cand-1"), make_app("a2", "job-1", candidate_id="cand-2")]
    jobs = [make_job("j1", "Developer", employer_id="emp-1"), make_job("j2", "Barista", employer_id="emp-2")]

    assert [a.id for a in candidate_applications(apps, "cand-2")] == ["a2"]
    assert [j.id for j in employer_jobs(jobs, "emp-1")] == ["j1"]
