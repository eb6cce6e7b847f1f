# SPDX-License-Identifier: MIT

import logging
from enum import Enum
from typing import Optional

from timecard.client.celoxis import CeloxisClient
from timecard.model.cache import UserPrefs
from timecard.model.celoxis import CeloxisProject, CeloxisTask
from timecard.model.grouped_entry import GroupedEntry
from timecard.model.task_assignment import TaskAssignment
from timecard.prompt import Prompter
from timecard.service.grouping import describe_tags, total_minutes
from timecard.service.submission import build_assignment
from timecard.time import minutes_to_hours

logger = logging.getLogger(__name__)


class WorkflowState(Enum):
    POOLING = 0
    SELECTING_GROUPS = 1
    SELECTING_PROJECT = 2
    SELECTING_TASK = 3
    ENTERING_SUMMARY = 4
    RECORDING_ASSIGNMENT = 5
    DONE = 6


def format_group_option(index: int, group: GroupedEntry) -> str:
    hours = minutes_to_hours(total_minutes(group))
    submitted = " [Submitted]" if group["all_submitted"] else ""
    return (
        f"Group {index} - {describe_tags(group['tags'])} - Total: {hours:.2f}h"
        f"{submitted}"
    )


def format_reference_option(record: CeloxisProject | CeloxisTask) -> str:
    return f"{record['id']} - {record['name']}"


class AssignmentWorkflow:
    """
    Interactive loop that binds pooled groups to Celoxis tasks.

    Each pass selects groups, a project, one task and a summary, then
    records a TaskAssignment and removes the chosen groups from the pool.
    Cancelling the project, task or summary step leaves the groups pooled.
    Client and I/O errors are not caught here.
    """

    def __init__(
        self,
        client: CeloxisClient,
        prompter: Prompter,
        user_prefs: UserPrefs,
        groups: list[GroupedEntry],
        refresh_projects: bool = False,
    ) -> None:
        self.client = client
        self.prompter = prompter
        self.user_prefs = user_prefs
        self.pool: list[GroupedEntry] = list(groups)
        self.assignments: list[TaskAssignment] = []
        self.state = WorkflowState.POOLING

        self._refresh_projects = refresh_projects
        self._selected_groups: list[GroupedEntry] = []
        self._project: Optional[CeloxisProject] = None
        self._task: Optional[CeloxisTask] = None
        self._summary: Optional[str] = None

    def run(self) -> list[TaskAssignment]:
        while self.state != WorkflowState.DONE:
            self.step()
        return self.assignments

    def step(self) -> None:
        match self.state:
            case WorkflowState.POOLING:
                self.state = self.__pooling()
            case WorkflowState.SELECTING_GROUPS:
                self.state = self.__select_groups()
            case WorkflowState.SELECTING_PROJECT:
                self.state = self.__select_project()
            case WorkflowState.SELECTING_TASK:
                self.state = self.__select_task()
            case WorkflowState.ENTERING_SUMMARY:
                self.state = self.__enter_summary()
            case WorkflowState.RECORDING_ASSIGNMENT:
                self.state = self.__record_assignment()
            case WorkflowState.DONE:
                pass

    def __pooling(self) -> WorkflowState:
        self._selected_groups = []
        self._project = None
        self._task = None
        self._summary = None

        if len(self.pool) == 0:
            return WorkflowState.DONE
        return WorkflowState.SELECTING_GROUPS

    def __select_groups(self) -> WorkflowState:
        options = [
            format_group_option(index, group)
            for index, group in enumerate(self.pool, start=1)
        ]
        while True:
            selection = self.prompter.ask_multi_choice(
                "Select groups to process", options
            )
            if selection is None:
                logger.info("no groups selected, done assigning")
                return WorkflowState.DONE
            if len(selection) > 0:
                break
            self.prompter.show("Please select at least one group")

        self._selected_groups = [self.pool[index] for index in sorted(set(selection))]
        combined = sum(total_minutes(group) for group in self._selected_groups)
        self.prompter.show(
            f"Grouping {len(self._selected_groups)} sets of entries, "
            f"total {minutes_to_hours(combined):.2f} hours"
        )
        return WorkflowState.SELECTING_PROJECT

    def __select_project(self) -> WorkflowState:
        projects = sorted(
            self.client.list_projects(force_refresh=self._refresh_projects),
            key=lambda project: project["name"].lower(),
        )
        self._refresh_projects = False

        selection = self.prompter.ask_choice(
            "Select project to associate time entries with",
            [format_reference_option(project) for project in projects],
        )
        if selection is None:
            logger.info("project selection skipped, groups stay unassigned")
            return self.__next_pass()
        self._project = projects[selection]
        return WorkflowState.SELECTING_TASK

    def __select_task(self) -> WorkflowState:
        if self._project is None:
            raise ValueError("task selection requires a project")

        project_id = self._project["id"]
        if self.client.cached_tasks(project_id) is not None:
            force_refresh = self.prompter.ask_confirm(
                "Refresh task list from Celoxis?", default=False
            )
        else:
            force_refresh = True

        tasks = sorted(
            self.client.list_tasks(project_id, force_refresh=force_refresh),
            key=lambda task: task["name"].lower(),
        )
        if len(tasks) == 0:
            logger.warning("project %s has no tasks, skipping these entries", project_id)
            self.prompter.show("No tasks found for this project. Skipping these entries.")
            return self.__next_pass()

        selection = self.prompter.ask_choice(
            "Select task to associate time entries with",
            [format_reference_option(task) for task in tasks],
        )
        if selection is None:
            logger.info("no task selected, skipping these entries")
            self.prompter.show("No task selected. Skipping these entries.")
            return self.__next_pass()
        self._task = tasks[selection]
        return WorkflowState.ENTERING_SUMMARY

    def __enter_summary(self) -> WorkflowState:
        while True:
            summary = self.prompter.ask_text("Enter work summary for these entries")
            if summary is None:
                logger.info("summary cancelled, skipping these entries")
                return self.__next_pass()
            if summary.strip():
                self._summary = summary.strip()
                return WorkflowState.RECORDING_ASSIGNMENT
            self.prompter.show("Summary cannot be empty")

    def __record_assignment(self) -> WorkflowState:
        if self._project is None or self._task is None or self._summary is None:
            raise ValueError("recording requires a project, a task and a summary")

        assignment = build_assignment(
            self._selected_groups,
            self._project,
            self._task,
            self._summary,
            self.user_prefs,
        )
        self.assignments.append(assignment)

        consumed_ids = {group["id"] for group in self._selected_groups}
        self.pool = [group for group in self.pool if group["id"] not in consumed_ids]
        return self.__next_pass()

    def __next_pass(self) -> WorkflowState:
        if len(self.pool) == 0:
            return WorkflowState.DONE
        if not self.prompter.ask_confirm("Assign more entries to tasks?", default=True):
            return WorkflowState.DONE
        return WorkflowState.POOLING
