# tests/test_stores.py
import pytest

from conftest import PASSWORD, promote
from folio.client.state import AdminState, AuthState, prepend, remove_by_id, replace_by_id
from folio.client.stores import AdminStore, AuthStore, StoreError, _camel, to_form


@pytest.fixture
def auth(client):
    return AuthStore(client)


@pytest.fixture
def admin(client, auth, db_call):
    auth.signup("admin", "admin@example.com", "0999999999", "other", PASSWORD)
    db_call(promote, "admin")
    auth.login("admin", PASSWORD)
    return AdminStore(client)


def test_reducers_return_new_tuples():
    items = ({"id": "a", "v": 1}, {"id": "b", "v": 1})
    assert prepend(items, {"id": "c"}) == ({"id": "c"},) + items
    assert replace_by_id(items, {"id": "b", "v": 2}) == ({"id": "a", "v": 1}, {"id": "b", "v": 2})
    assert remove_by_id(items, "a") == ({"id": "b", "v": 1},)
    assert items == ({"id": "a", "v": 1}, {"id": "b", "v": 1})


def test_snapshots_are_immutable():
    state = AuthState()
    with pytest.raises(AttributeError):
        state.is_loading = True
    assert AdminState().posts == ()


def test_to_form():
    assert to_form({"isPublished": True, "tags": ["a", "b"], "title": "T", "excerpt": None}) == {
        "isPublished": "true",
        "tags": "a,b",
        "title": "T",
    }


def test_login_flow(auth):
    auth.signup("alice", "alice@example.com", "0123456789", "female", PASSWORD)
    assert auth.state == AuthState()

    user = auth.login("alice", PASSWORD)
    assert user["username"] == "alice"
    assert auth.state.is_logged_in is True
    assert auth.state.is_loading is False
    assert auth.state.error is None

    assert auth.check_auth()["username"] == "alice"

    auth.logout()
    assert auth.state == AuthState()
    assert auth.check_auth() is None
    assert auth.state.is_logged_in is False


def test_failed_action_sets_error_and_raises(auth):
    with pytest.raises(StoreError) as excinfo:
        auth.login("ghost", PASSWORD)
    assert excinfo.value.message == "Invalid credentials"
    assert excinfo.value.status_code == 401
    assert auth.state.error == "Invalid credentials"
    assert auth.state.is_loading is False
    assert auth.state.is_logged_in is False

    auth.clear_error()
    assert auth.state.error is None


def test_next_action_clears_error(auth):
    with pytest.raises(StoreError):
        auth.signup("alice", "bad-email", "0123456789", "female", PASSWORD)
    assert auth.state.error == "Invalid email format"

    auth.signup("alice", "alice@example.com", "0123456789", "female", PASSWORD)
    assert auth.state.error is None


def test_subscribers_see_every_snapshot(auth):
    seen = []
    unsubscribe = auth.subscribe(lambda state: seen.append(state.is_loading))
    auth.signup("alice", "alice@example.com", "0123456789", "female", PASSWORD)
    assert seen == [True, False]

    unsubscribe()
    auth.clear_error()
    assert seen == [True, False]


def test_delete_account(auth):
    auth.signup("alice", "alice@example.com", "0123456789", "female", PASSWORD)
    auth.login("alice", PASSWORD)

    with pytest.raises(StoreError):
        auth.delete_account("wrong-password")
    assert auth.state.error == "Incorrect password"
    assert auth.state.is_logged_in is True

    auth.delete_account(PASSWORD)
    assert auth.state.is_logged_in is False
    assert auth.state.user is None


def test_post_actions_reconcile_locally(admin):
    first = admin.create_post(title="First", content="body one", is_published=True)
    second = admin.create_post(
        title="Second", content="body two", tags=["x", "y"], image=("c.png", b"c", "image/png")
    )
    assert [p["id"] for p in admin.state.posts] == [second["id"], first["id"]]
    assert second["tags"] == ["x", "y"]
    assert second["coverImage"]

    updated = admin.update_post(first["id"], title="First, edited", is_featured=True)
    assert updated["slug"] == "first-edited"
    assert admin.state.posts[1]["title"] == "First, edited"
    assert admin.state.posts[1]["isFeatured"] is True

    admin.delete_post(second["id"])
    assert [p["id"] for p in admin.state.posts] == [first["id"]]

    admin.fetch_all_posts(status="draft")
    assert admin.state.posts == ()
    admin.fetch_all_posts()
    assert len(admin.state.posts) == 1
    assert admin.fetch_post_by_id(first["id"])["title"] == "First, edited"


def test_post_failure_keeps_collection(admin):
    admin.create_post(title="Keep", content="body")
    with pytest.raises(StoreError):
        admin.create_post(title="No content")
    assert admin.state.error == "content is required"
    assert len(admin.state.posts) == 1


def test_project_actions(admin):
    project = admin.create_project(
        title="Folio",
        description="CMS",
        short_description="CMS",
        technologies=["Python"],
        status="in-progress",
    )
    assert admin.state.projects[0]["id"] == project["id"]

    admin.update_project(project["id"], status="completed")
    assert admin.state.projects[0]["status"] == "completed"

    covered = admin.upload_project_cover(project["id"], ("c.png", b"c", "image/png"))
    assert covered["coverImage"]
    assert admin.state.projects[0]["coverImage"] == covered["coverImage"]

    admin.fetch_projects_by_status("planned")
    assert admin.state.projects == ()
    admin.fetch_all_projects()
    assert len(admin.state.projects) == 1

    admin.delete_project(project["id"])
    assert admin.state.projects == ()

    with pytest.raises(StoreError) as excinfo:
        admin.update_project("missing", title="x")
    assert excinfo.value.status_code == 404
    assert admin.state.error == "Project not found"


def test_profile_actions(admin):
    profile = admin.fetch_profile()
    assert admin.state.profile["id"] == profile["id"]

    admin.update_profile(full_name="Ada")
    admin.update_social_links({"github": "https://github.com/ada"})
    admin.update_skills([{"category": "Backend", "items": ["Python"], "level": "advanced"}])
    admin.update_technologies(["FastAPI"])
    admin.update_experience({"years": 3})
    admin.update_education([{"degree": "BSc", "institution": "UCL"}])
    admin.update_certifications([{"name": "CKA"}])
    admin.toggle_profile_publish(True)

    state = admin.state.profile
    assert state["fullName"] == "Ada"
    assert state["socialLinks"]["github"] == "https://github.com/ada"
    assert state["skills"][0]["level"] == "advanced"
    assert state["technologies"] == ["FastAPI"]
    assert state["experience"]["years"] == 3
    assert state["education"][0]["degree"] == "BSc"
    assert state["certifications"][0]["name"] == "CKA"
    assert state["isPublished"] is True

    admin.upload_profile_image(("me.png", b"me", "image/png"))
    admin.upload_cover_image(("cover.png", b"cover", "image/png"))
    admin.upload_cv(("cv.pdf", b"%PDF", "application/pdf"))
    assert admin.state.profile["profileImage"]
    assert admin.state.profile["coverImage"]
    assert admin.state.profile["cvUrl"]

    admin.delete_profile_image()
    admin.delete_cover_image()
    admin.delete_cv()
    assert admin.state.profile["profileImage"] == ""
    assert admin.state.profile["coverImage"] == ""
    assert admin.state.profile["cvUrl"] == ""


def test_admin_store_without_admin_session(client):
    store = AdminStore(client)
    with pytest.raises(StoreError) as excinfo:
        store.fetch_all_posts()
    assert excinfo.value.status_code == 401
    assert store.state.error == "Not authenticated"
    store.clear_error()
    assert store.state == AdminState()


def test_request_bodies_use_camel_case_keys():
    assert _camel({"is_published": True, "social_links": {}, "title": "T"}) == {
        "isPublished": True,
        "socialLinks": {},
        "title": "T",
    }


def test_unexpected_response_does_not_leave_store_loading(admin, monkeypatch):
    monkeypatch.setattr(admin, "request", lambda *args, **kwargs: {})
    with pytest.raises(KeyError):
        admin.fetch_all_posts()
    assert admin.state.is_loading is False
    assert admin.state.error == "Failed to fetch posts"
