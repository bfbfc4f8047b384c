import pytest

from workboard.client.store import Store
from workboard.models.application import ApplicationStatus, IllegalTransition
from tests.factories import make_app, make_job


@pytest.fixture
def store():
    s = Store()
    s.replace_all_from_poll([
        make_app("a1", "job-1", "pending", "cand-1"),
        make_app("a2", "job-1", "pending", "cand-2"),
        make_app("a3", "job-2", "passed", "cand-1"),
    ])
    return s


def test_patch_changes_only_that_records_status(store):
    before = {app.id: app.model_dump() for app in store.applications()}

    store.patch_application_status("a1", "interview_set")

    after = {app.id: app.model_dump() for app in store.applications()}
    assert after["a1"]["status"] == ApplicationStatus.INTERVIEW_SET
    assert {k: v for k, v in after["a1"].items() if k != "status"} == \
        {k: v for k, v in before["a1"].items() if k != "status"}
    assert after["a2"] == before["a2"]
    assert after["a3"] == before["a3"]


def test_illegal_patch_leaves_store_unchanged(store):
    snapshot = store.applications()

    with pytest.raises(IllegalTransition):
        store.patch_application_status("a3", "pending")

    assert store.applications() == snapshot


def test_patch_unknown_application(store):
    with pytest.raises(KeyError):
        store.patch_application_status("missing", "interview_set")


def test_insert_puts_newest_first(store):
    store.insert_application(make_app("a4", "job-3"))
    assert [app.id for app in store.applications()] == ["a4", "a1", "a2", "a3"]


def test_poll_replaces_everything(store):
    store.patch_application_status("a1", "interview_set")
    store.replace_all_from_poll([make_app("a1", "job-1", "pending")])

    assert [(app.id, app.status) for app in store.applications()] == [("a1", ApplicationStatus.PENDING)]


def test_snapshots_are_immutable(store):
    snapshot = store.applications()
    store.insert_application(make_app("a5", "job-1"))
    assert len(snapshot) == 3


def test_jobs_and_bookmarks():
    s = Store()
    s.replace_jobs([make_job("j1", "Developer"), make_job("j2", "Barista")])
    assert s.toggle_saved("j2") is True
    assert s.saved_ids() == {"j2"}
    assert s.toggle_saved("j2") is False

    s.remove_job("j1")
    assert [job.id for job in s.jobs()] == ["j2"]

    s.clear()
    assert s.jobs() == () and s.applications() == ()
