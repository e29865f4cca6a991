# folio/client/stores.py
"""
Client-side state containers for the admin UI and the auth widgets.

A store owns one snapshot (see state.py) and exposes actions that call the
HTTP API. Every action follows the same shape:

    1. install a snapshot with is_loading=True and the error cleared
    2. perform the request
    3. on success install the new snapshot, error cleared
    4. on failure install a snapshot carrying the error and raise StoreError

Writes reconcile the local collections instead of refetching: create
prepends, update replaces by id, delete filters out.

The HTTP session is injected: a requests.Session in an application, a
FastAPI TestClient in tests. Whatever it is must keep the auth-token cookie
between calls.
"""
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

import requests
from pydantic.alias_generators import to_camel

from folio.client.state import (
    AdminState,
    AuthState,
    Entity,
    prepend,
    remove_by_id,
    replace_by_id,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class StoreError(Exception):
    """An action failed; the message is what the server (or transport) said."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _form_value(value: Any) -> str:
    # Form fields are strings; booleans travel as "true" / "false"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def to_form(fields: Dict[str, Any]) -> Dict[str, str]:
    return {key: _form_value(value) for key, value in fields.items() if value is not None}


class BaseStore:
    def __init__(self, http, base_url: str = "", state=None):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.state = state
        self._listeners: List[Callable] = []

    def subscribe(self, listener: Callable) -> Callable[[], None]:
        """Call listener(state) after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _set(self, **changes) -> None:
        self.state = replace(self.state, **changes)
        for listener in list(self._listeners):
            listener(self.state)

    def request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Perform one API call; raise StoreError on any non-2xx answer."""
        url = f"{self.base_url}{API_PREFIX}{path}"
        response = self.http.request(method, url, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            detail = body.get("detail") if isinstance(body, dict) else None
            raise StoreError(
                detail or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        return body if isinstance(body, dict) else {}

    @contextmanager
    def action(self, failure_message: str):
        self._set(is_loading=True, error=None)
        try:
            yield
        except StoreError as e:
            logger.debug("%s: %s", failure_message, e.message)
            self._set(is_loading=False, error=e.message or failure_message)
            raise
        except requests.RequestException as e:
            logger.warning("%s: %s", failure_message, e)
            self._set(is_loading=False, error=failure_message)
            raise StoreError(failure_message) from e
        except Exception:
            # e.g. a response missing the expected key
            logger.exception(failure_message)
            self._set(is_loading=False, error=failure_message)
            raise

    def clear_error(self) -> None:
        self._set(error=None)


class AuthStore(BaseStore):
    def __init__(self, http, base_url: str = ""):
        super().__init__(http, base_url, AuthState())

    def signup(self, username: str, email: str, phone_number: str, gender: str, password: str) -> Entity:
        """Create an account. Does not log in."""
        with self.action("Signup failed"):
            body = self.request(
                "POST",
                "/auth/signup",
                json={
                    "username": username,
                    "email": email,
                    "phoneNumber": phone_number,
                    "gender": gender,
                    "password": password,
                },
            )
            self._set(is_loading=False, error=None)
        return body["user"]

    def login(self, email_or_username: str, password: str) -> Entity:
        with self.action("Login failed"):
            body = self.request(
                "POST",
                "/auth/login",
                json={"emailOrUsername": email_or_username, "password": password},
            )
            self._set(user=body["user"], is_logged_in=True, is_loading=False, error=None)
        return body["user"]

    def logout(self) -> None:
        """Always ends logged out, even when the server call fails."""
        self._set(is_loading=True, error=None)
        try:
            self.request("POST", "/auth/logout")
        except (StoreError, requests.RequestException) as e:
            logger.warning("Logout request failed: %s", e)
        finally:
            self._set(user=None, is_logged_in=False, is_loading=False, error=None)

    def check_auth(self) -> Optional[Entity]:
        """Ask the server who we are; a failure leaves the store logged out."""
        self._set(is_loading=True, error=None)
        try:
            body = self.request("GET", "/auth/me")
        except StoreError:
            self._set(user=None, is_logged_in=False, is_loading=False)
            raise
        except requests.RequestException as e:
            self._set(user=None, is_logged_in=False, is_loading=False)
            raise StoreError("Auth check failed") from e

        user = body.get("user")
        self._set(user=user, is_logged_in=user is not None, is_loading=False, error=None)
        return user

    def delete_account(self, password: str) -> None:
        with self.action("Failed to delete account"):
            self.request("DELETE", "/auth/delete-account", json={"password": password})
            self._set(user=None, is_logged_in=False, is_loading=False, error=None)


class AdminStore(BaseStore):
    def __init__(self, http, base_url: str = ""):
        super().__init__(http, base_url, AdminState())

    # ── posts ─────────────────────────────────────────────────────────────
    def fetch_all_posts(self, status: Optional[str] = None) -> None:
        params = {"status": status} if status else None
        with self.action("Failed to fetch posts"):
            body = self.request("GET", "/admin/posts", params=params)
            self._set(posts=tuple(body["posts"]), is_loading=False, error=None)

    def fetch_post_by_id(self, post_id: str) -> Entity:
        with self.action("Failed to fetch post"):
            body = self.request("GET", f"/admin/posts/{post_id}")
            self._set(is_loading=False, error=None)
        return body["post"]

    def create_post(self, image: Optional[tuple] = None, **fields) -> Entity:
        """fields: title, content, description, excerpt, category, tags, is_published, is_featured"""
        files = {"image": image} if image else None
        with self.action("Failed to create post"):
            body = self.request("POST", "/admin/posts", data=to_form(_camel(fields)), files=files)
            self._set(posts=prepend(self.state.posts, body["post"]), is_loading=False, error=None)
        return body["post"]

    def update_post(self, post_id: str, image: Optional[tuple] = None, **fields) -> Entity:
        files = {"image": image} if image else None
        with self.action("Failed to update post"):
            body = self.request(
                "PUT", f"/admin/posts/{post_id}", data=to_form(_camel(fields)), files=files
            )
            self._set(posts=replace_by_id(self.state.posts, body["post"]), is_loading=False, error=None)
        return body["post"]

    def delete_post(self, post_id: str) -> None:
        with self.action("Failed to delete post"):
            self.request("DELETE", f"/admin/posts/{post_id}")
            self._set(posts=remove_by_id(self.state.posts, post_id), is_loading=False, error=None)

    # ── projects ──────────────────────────────────────────────────────────
    def fetch_all_projects(self) -> None:
        with self.action("Failed to fetch projects"):
            body = self.request("GET", "/admin/projects")
            self._set(projects=tuple(body["projects"]), is_loading=False, error=None)

    def fetch_projects_by_status(self, status: str) -> None:
        with self.action("Failed to fetch projects"):
            body = self.request("GET", "/admin/projects", params={"status": status})
            self._set(projects=tuple(body["projects"]), is_loading=False, error=None)

    def create_project(self, **fields) -> Entity:
        with self.action("Failed to create project"):
            body = self.request("POST", "/admin/projects", json=_camel(fields))
            self._set(
                projects=prepend(self.state.projects, body["project"]),
                is_loading=False,
                error=None,
            )
        return body["project"]

    def update_project(self, project_id: str, **fields) -> Entity:
        with self.action("Failed to update project"):
            body = self.request("PUT", f"/admin/projects/{project_id}", json=_camel(fields))
            self._set(
                projects=replace_by_id(self.state.projects, body["project"]),
                is_loading=False,
                error=None,
            )
        return body["project"]

    def delete_project(self, project_id: str) -> None:
        with self.action("Failed to delete project"):
            self.request("DELETE", f"/admin/projects/{project_id}")
            self._set(
                projects=remove_by_id(self.state.projects, project_id),
                is_loading=False,
                error=None,
            )

    def upload_project_cover(self, project_id: str, image: tuple) -> Entity:
        with self.action("Failed to upload cover image"):
            body = self.request(
                "POST",
                "/admin/projects",
                data={"action": "upload-cover-image", "projectId": project_id},
                files={"image": image},
            )
            self._set(
                projects=replace_by_id(self.state.projects, body["project"]),
                is_loading=False,
                error=None,
            )
        return body["project"]

    # ── profile ───────────────────────────────────────────────────────────
    def fetch_profile(self) -> Entity:
        with self.action("Failed to fetch profile"):
            body = self.request("GET", "/admin/profile")
            self._set(profile=body["profile"], is_loading=False, error=None)
        return body["profile"]

    def _profile_call(self, method: str, failure_message: str, **kwargs) -> Entity:
        with self.action(failure_message):
            body = self.request(method, "/admin/profile", **kwargs)
            self._set(profile=body["profile"], is_loading=False, error=None)
        return body["profile"]

    def _profile_update(self, action: str, failure_message: str, **payload) -> Entity:
        return self._profile_call(
            "PUT", failure_message, json=dict(_camel(payload), action=action)
        )

    def update_profile(self, **fields) -> Entity:
        return self._profile_update("update-basic", "Failed to update profile", **fields)

    def update_social_links(self, social_links: Dict[str, str]) -> Entity:
        return self._profile_update(
            "update-social", "Failed to update social links", social_links=social_links
        )

    def update_skills(self, skills: List[Dict[str, Any]]) -> Entity:
        return self._profile_update("update-skills", "Failed to update skills", skills=skills)

    def update_technologies(self, technologies: List[str]) -> Entity:
        return self._profile_update(
            "update-technologies", "Failed to update technologies", technologies=technologies
        )

    def update_experience(self, experience: Dict[str, Any]) -> Entity:
        return self._profile_update(
            "update-experience", "Failed to update experience", experience=experience
        )

    def update_education(self, education: List[Dict[str, Any]]) -> Entity:
        return self._profile_update(
            "update-education", "Failed to update education", education=education
        )

    def update_certifications(self, certifications: List[Dict[str, Any]]) -> Entity:
        return self._profile_update(
            "update-certifications", "Failed to update certifications", certifications=certifications
        )

    def toggle_profile_publish(self, is_published: bool) -> Entity:
        return self._profile_update(
            "toggle-publish", "Failed to update publish status", is_published=is_published
        )

    def upload_profile_image(self, image: tuple) -> Entity:
        return self._profile_call(
            "POST",
            "Failed to upload profile image",
            data={"action": "upload-profile-image"},
            files={"image": image},
        )

    def upload_cover_image(self, image: tuple) -> Entity:
        return self._profile_call(
            "POST",
            "Failed to upload cover image",
            data={"action": "upload-cover-image"},
            files={"image": image},
        )

    def upload_cv(self, cv: tuple) -> Entity:
        return self._profile_call(
            "POST", "Failed to upload CV", data={"action": "upload-cv"}, files={"cv": cv}
        )

    def delete_profile_image(self) -> Entity:
        return self._profile_call(
            "DELETE", "Failed to delete profile image", params={"action": "delete-profile-image"}
        )

    def delete_cover_image(self) -> Entity:
        return self._profile_call(
            "DELETE", "Failed to delete cover image", params={"action": "delete-cover-image"}
        )

    def delete_cv(self) -> Entity:
        return self._profile_call("DELETE", "Failed to delete CV", params={"action": "delete-cv"})


def _camel(fields: Dict[str, Any]) -> Dict[str, Any]:
    """is_published -> isPublished for the top-level keys of a request body."""
    return {to_camel(key): value for key, value in fields.items()}
