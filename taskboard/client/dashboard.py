"""View-state controller for a user's task list.

Holds page, page size and status filter, refetches whenever one of them
changes, and refetches again after every mutation instead of patching the
local list.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from ..models.task import TaskStatus
from ..permissions import Capability
from ..schemas.task import TaskResponse
from ..utils.logging import get_logger
from .api import ApiError, TaskAPI
from .session import SessionContext

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 9
STATUS_FILTERS = ("all", TaskStatus.PENDING.value, TaskStatus.COMPLETED.value)


@dataclass
class Toast:
    title: str
    description: str
    variant: str = "default"


@dataclass
class TaskForm:
    title: str
    description: str
    status: TaskStatus = TaskStatus.PENDING


def _always_confirm(message: str) -> bool:
    return True


class TaskDashboard:
    def __init__(
        self,
        api: TaskAPI,
        page_size: int = DEFAULT_PAGE_SIZE,
        confirm: Callable[[str], bool] = _always_confirm,
        notify: Optional[Callable[[Toast], None]] = None,
        session: Optional[SessionContext] = None,
    ):
        self.api = api
        self.session = session
        self.confirm = confirm
        self.toasts: List[Toast] = []
        self._notify = notify or self.toasts.append

        self.current_page = 1
        self.page_size = page_size
        self.status_filter = "all"

        self.tasks: List[TaskResponse] = []
        self.total_pages = 1
        self.total_tasks = 0
        self.loading = False

        self.dialog_open = False
        self.dialog_loading = False
        self.selected_task: Optional[TaskResponse] = None

    @property
    def can_delete(self) -> bool:
        """Whether the delete action should be offered at all."""
        return self.session is not None and self.session.can(Capability.DELETE_ANY_TASK)

    # -- notifications -------------------------------------------------

    def _success(self, description: str) -> None:
        self._notify(Toast("Success", description))

    def _error(self, description: str) -> None:
        self._notify(Toast("Error", description, variant="destructive"))

    # -- fetching ------------------------------------------------------

    def refresh(self) -> bool:
        """Fetch the current page. Returns False and raises a toast on failure."""
        self.loading = True
        try:
            page = self.api.get_tasks(self.current_page, self.page_size, self.status_filter)
        except ApiError as exc:
            logger.warning("Fetching tasks failed: %s", exc)
            self._error("Failed to fetch tasks")
            return False
        finally:
            self.loading = False

        self.tasks = page.tasks
        self.total_pages = page.total_pages
        self.total_tasks = page.total_tasks
        return True

    # -- view state ----------------------------------------------------

    def set_status_filter(self, value: Union[TaskStatus, str]) -> None:
        if isinstance(value, TaskStatus):
            value = value.value
        if value not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {value!r}")
        self.status_filter = value
        self.current_page = 1
        self.refresh()

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.current_page = 1
        self.refresh()

    def go_to_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("page must be at least 1")
        self.current_page = page
        self.refresh()

    def next_page(self) -> bool:
        if self.current_page >= self.total_pages:
            return False
        self.go_to_page(self.current_page + 1)
        return True

    def previous_page(self) -> bool:
        if self.current_page <= 1:
            return False
        self.go_to_page(self.current_page - 1)
        return True

    # -- dialog --------------------------------------------------------

    def open_create_dialog(self) -> None:
        self.selected_task = None
        self.dialog_open = True

    def open_edit_dialog(self, task: TaskResponse) -> None:
        self.selected_task = task
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False
        self.selected_task = None

    def submit_task(self, form: TaskForm) -> bool:
        """Create or update depending on how the dialog was opened."""
        self.dialog_loading = True
        try:
            if self.selected_task is not None:
                self.api.update_task(
                    self.selected_task.id,
                    title=form.title,
                    description=form.description,
                    status=form.status,
                )
                self._success("Task updated successfully")
            else:
                self.api.create_task(form.title, form.description, form.status)
                self._success("Task created successfully")
        except ApiError as exc:
            self._error(exc.message or "Failed to save task")
            return False
        finally:
            self.dialog_loading = False

        self.close_dialog()
        self.refresh()
        return True

    # -- delete --------------------------------------------------------

    def delete_task(self, task_id: str) -> bool:
        if not self.confirm("Are you sure you want to delete this task?"):
            return False

        try:
            self.api.delete_task(task_id)
        except ApiError as exc:
            self._error(exc.message or "Failed to delete task")
            return False

        self._success("Task deleted successfully")
        self.refresh()
        return True
