from typing import Optional

import requests


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TaskboardClient:
    """
    Thin wrapper around the Taskboard REST API.

    The bearer token is plain instance state: ``register``/``login`` set it,
    ``logout`` drops it. Any requests-compatible session can be passed in.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _request(self, method: str, path: str, json=None, params=None):
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if params:
            params = {k: v for k, v in params.items() if v not in (None, "")}
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params or None,
            headers=headers,
            timeout=self.timeout,
        )
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code >= 400:
            raise ApiError(response.status_code, body.get("message") or response.text or "Unknown error")
        return body

    # -----------------------------
    # Auth
    # -----------------------------
    def register(self, name: str, email: str, password: str) -> dict:
        body = self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})
        self.token = body["token"]
        self.user = body["user"]
        return self.user

    def login(self, email: str, password: str) -> dict:
        body = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = body["token"]
        self.user = body["user"]
        return self.user

    def logout(self) -> None:
        self.token = None
        self.user = None

    def get_profile(self) -> dict:
        self.user = self._request("GET", "/auth/profile")["user"]
        return self.user

    def update_profile(self, **fields) -> dict:
        self.user = self._request("PUT", "/auth/profile", json=fields)["user"]
        return self.user

    # -----------------------------
    # Tasks
    # -----------------------------
    def create_task(self, title: str, **fields) -> dict:
        return self._request("POST", "/tasks", json={"title": title, **fields})["task"]

    def list_tasks(self, status=None, priority=None, search=None) -> list:
        params = {"status": status, "priority": priority, "search": search}
        return self._request("GET", "/tasks", params=params)["tasks"]

    def get_task(self, task_id: str) -> dict:
        return self._request("GET", f"/tasks/{task_id}")["task"]

    def update_task(self, task_id: str, **fields) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json=fields)["task"]

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
