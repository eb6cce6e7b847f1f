# SPDX-License-Identifier: MIT

import json
import logging
from typing import Any, Optional, cast

import requests

from timecard.configuration import DEFAULT_BASE_URL, DEFAULT_PROJECT_FILTER
from timecard.errors import CredentialError, RemoteError
from timecard.model.cache import UserPrefs
from timecard.model.celoxis import CeloxisProject, CeloxisTask, CeloxisTimeEntry
from timecard.prompt import Prompter
from timecard.repository.cache import CacheRepository
from timecard.repository.credential import CredentialRepository

logger = logging.getLogger(__name__)


def ensure_api_key(credentials: CredentialRepository, prompter: Prompter) -> str:
    """Read the API key, asking for it and saving it on first run."""
    token = credentials.read_token()
    if token is not None:
        return token

    prompter.show(f"API key file ({credentials.path}) not found.")
    token = prompter.ask_text("Celoxis API key", secret=True)
    if token is None or not token.strip():
        raise CredentialError("an API key is required")
    credentials.write_token(token)
    prompter.show(f"API key saved to {credentials.path}")
    return token.strip()


class CeloxisClient:
    """
    Celoxis reference data and time entry submission.

    Projects and tasks are served from the cache unless a refresh is forced
    or nothing is cached yet; a fetch replaces the cached set wholesale.
    """

    def __init__(
        self,
        cache: CacheRepository,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        project_filter: str = DEFAULT_PROJECT_FILTER,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.project_filter = project_filter
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"bearer {api_key.strip()}",
                "Content-Type": "application/json",
            }
        )

    def list_projects(self, force_refresh: bool = False) -> list[CeloxisProject]:
        if not force_refresh:
            cached_projects: dict[str, CeloxisProject] = self.cache.get("projects")
            if cached_projects:
                return list(cached_projects.values())

        projects = [
            self.__to_project(raw)
            for raw in self.__get_data("projects", self.project_filter)
        ]
        self.cache.put_and_flush(
            "projects",
            {project["id"]: project for project in projects},
            mark_fetched=True,
        )
        logger.info("fetched %d projects", len(projects))
        return projects

    def cached_tasks(self, project_id: str) -> Optional[list[CeloxisTask]]:
        cached: dict[str, list[CeloxisTask]] = self.cache.get("tasks")
        return cached.get(project_id)

    def list_tasks(
        self, project_id: str, force_refresh: bool = False
    ) -> list[CeloxisTask]:
        if not force_refresh:
            cached_tasks = self.cached_tasks(project_id)
            if cached_tasks is not None:
                return cached_tasks

        task_filter = json.dumps({"project.id": project_id})
        logger.debug("fetching tasks with filter %s", task_filter)
        tasks = [self.__to_task(raw) for raw in self.__get_data("tasks", task_filter)]

        all_tasks: dict[str, list[CeloxisTask]] = self.cache.get("tasks")
        all_tasks[project_id] = tasks
        self.cache.put_and_flush("tasks", all_tasks, mark_fetched=True)
        logger.info("fetched %d tasks for project %s", len(tasks), project_id)
        return tasks

    def submit(self, time_entries: list[CeloxisTimeEntry]) -> Any:
        """
        Post a batch of time entries.

        Raises:
            RemoteError: If the service does not accept the batch
        """
        logger.info("submitting %d time entries", len(time_entries))
        response = self.session.post(
            f"{self.base_url}/timeEntries", data=json.dumps(time_entries)
        )
        if not response.ok:
            raise RemoteError(
                "time entry submission failed",
                status_code=response.status_code,
                payload=self.__response_payload(response),
            )
        return self.__response_payload(response) if response.content else None

    def ensure_preferences(
        self, prompter: Prompter, default_time_code: str
    ) -> UserPrefs:
        user_prefs: Optional[UserPrefs] = self.cache.get("user_prefs")
        if user_prefs is not None:
            return user_prefs

        prompter.show("Celoxis user preferences are not set yet.")
        username = None
        while not username:
            username = prompter.ask_text("Celoxis username")
            if username is None:
                raise CredentialError("a Celoxis username is required")
            username = username.strip()

        time_code = prompter.ask_text("Default time code", default=default_time_code)
        user_prefs = {
            "username": username,
            "time_code": (time_code or default_time_code).strip(),
        }
        self.cache.put_and_flush("user_prefs", user_prefs)
        return user_prefs

    def __get_data(self, resource: str, filter_value: str) -> list[dict[str, Any]]:
        response = self.session.get(
            f"{self.base_url}/{resource}", params={"filter": filter_value}
        )
        if not response.ok:
            raise RemoteError(
                f"fetching {resource} failed",
                status_code=response.status_code,
                payload=self.__response_payload(response),
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteError(f"{resource} response is not JSON") from e
        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise RemoteError(f"{resource} response has no data array", payload=body)
        return cast(list[dict[str, Any]], body["data"])

    def __response_payload(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def __to_project(self, raw: dict[str, Any]) -> CeloxisProject:
        if "id" not in raw or "name" not in raw:
            raise RemoteError("project record is missing id or name", payload=raw)
        return {
            "id": str(raw["id"]),
            "name": str(raw["name"]),
            "description": raw.get("description"),
            "state": raw.get("state"),
        }

    def __to_task(self, raw: dict[str, Any]) -> CeloxisTask:
        if "id" not in raw or "name" not in raw:
            raise RemoteError("task record is missing id or name", payload=raw)
        return {"id": str(raw["id"]), "name": str(raw["name"])}
