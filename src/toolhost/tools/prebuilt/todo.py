"""Todo list tools backed by an in-process store.

All reads and writes go through one lock around the whole collection.
Handlers hand out copies, so an item returned to a caller never changes
underneath it while another request mutates the store.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from toolhost.foundation.core import ParamKind, param
from toolhost.foundation.registry import ToolRegistry
from toolhost.records import Priority, PriorityBreakdown, TodoItem, TodoStats, utcnow


@dataclass(slots=True)
class TodoStore:
    """The process-wide todo collection and its lock."""

    items: list[TodoItem] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def find(self, todo_id: str) -> TodoItem | None:
        """Lookup by id. Caller must hold `lock`."""
        return next((t for t in self.items if t.id == todo_id), None)


class TodoTools:
    """Todo handlers operating on an injected TodoStore."""

    __slots__ = ("_store",)

    def __init__(self, store: TodoStore | None = None) -> None:
        self._store = store if store is not None else TodoStore()

    @property
    def store(self) -> TodoStore:
        return self._store

    def create_todo(self, title: str, description: str = "", priority: str = "Medium") -> TodoItem:
        todo = TodoItem(title=title, description=description, priority=Priority.parse(priority) or Priority.MEDIUM)
        with self._store.lock:
            self._store.items.append(todo)
            return todo.model_copy()

    def get_todos(self, filter: str = "all", priority: str = "all") -> list[TodoItem]:  # noqa: A002 - wire name
        status = filter.strip().lower()
        any_priority = priority.strip().lower() == "all"
        wanted = Priority.parse(priority)
        with self._store.lock:
            items = [
                t for t in self._store.items
                if (status != "completed" or t.is_completed)
                and (status != "pending" or not t.is_completed)
                and (any_priority or t.priority == wanted)
            ]
            # Stable sort keeps insertion order for equal timestamps; reverse first so newer wins ties
            items = sorted(reversed(items), key=lambda t: t.created_at, reverse=True)
            return [t.model_copy() for t in items]

    def complete_todo(self, id: str) -> TodoItem | None:  # noqa: A002
        with self._store.lock:
            if (todo := self._store.find(id)) is None:
                return None
            todo.is_completed = True
            todo.completed_at = utcnow()
            return todo.model_copy()

    def update_todo(
        self,
        id: str,  # noqa: A002
        title: str | None = None,
        description: str | None = None,
        priority: str | None = None,
    ) -> TodoItem | None:
        """Patch the supplied fields. Blank title keeps the current one; an unknown priority is ignored."""
        with self._store.lock:
            if (todo := self._store.find(id)) is None:
                return None
            if title and title.strip():
                todo.title = title
            if description is not None:
                todo.description = description
            if (parsed := Priority.parse(priority)) is not None:
                todo.priority = parsed
            return todo.model_copy()

    def delete_todo(self, id: str) -> bool:  # noqa: A002
        with self._store.lock:
            if (todo := self._store.find(id)) is None:
                return False
            self._store.items.remove(todo)
            return True

    def clear_completed(self) -> int:
        with self._store.lock:
            before = len(self._store.items)
            self._store.items[:] = [t for t in self._store.items if not t.is_completed]
            return before - len(self._store.items)

    def get_todo_stats(self) -> TodoStats:
        with self._store.lock:
            items = self._store.items
            pending = [t for t in items if not t.is_completed]
            return TodoStats(
                total=len(items),
                completed=len(items) - len(pending),
                pending=len(pending),
                by_priority=PriorityBreakdown(
                    high=sum(t.priority is Priority.HIGH for t in pending),
                    medium=sum(t.priority is Priority.MEDIUM for t in pending),
                    low=sum(t.priority is Priority.LOW for t in pending),
                ),
            )


def register_todo_tools(registry: ToolRegistry, tools: TodoTools | None = None) -> TodoTools:
    tools = tools if tools is not None else TodoTools()
    todo_id = lambda desc: param("id", ParamKind.STRING, desc)  # noqa: E731

    registry.add(
        "CreateTodo", "Creates a new todo item with the specified title, description, and priority.",
        tools.create_todo,
        param("title", ParamKind.STRING, "The title of the todo item"),
        param("description", ParamKind.STRING, "Optional description for the todo item", default=""),
        param("priority", ParamKind.STRING, "Priority level: 'Low', 'Medium', or 'High'. Defaults to 'Medium'.", default="Medium"),
        category="todo",
    )
    registry.add(
        "GetTodos", "Gets all todo items. Can optionally filter by completion status or priority.",
        tools.get_todos,
        param("filter", ParamKind.STRING, "Filter by completion status: 'all', 'completed', or 'pending'.", default="all"),
        param("priority", ParamKind.STRING, "Filter by priority: 'Low', 'Medium', 'High', or 'all'.", default="all"),
        category="todo",
    )
    registry.add(
        "CompleteTodo", "Marks a todo item as completed by its ID.",
        tools.complete_todo, todo_id("The ID of the todo item to mark as completed"), category="todo",
    )
    registry.add(
        "UpdateTodo", "Updates an existing todo item's title, description, or priority.",
        tools.update_todo,
        todo_id("The ID of the todo item to update"),
        param("title", ParamKind.STRING, "New title (leave empty to keep current)", default=None),
        param("description", ParamKind.STRING, "New description (omit to keep current)", default=None),
        param("priority", ParamKind.STRING, "New priority: 'Low', 'Medium', or 'High' (leave empty to keep current)", default=None),
        category="todo",
    )
    registry.add(
        "DeleteTodo", "Deletes a todo item by its ID.",
        tools.delete_todo, todo_id("The ID of the todo item to delete"), category="todo",
    )
    registry.add(
        "GetTodoStats",
        "Gets summary statistics about the todo list including total count, completed count, and breakdown by priority.",
        tools.get_todo_stats, category="todo",
    )
    registry.add(
        "ClearCompleted", "Removes all completed todo items from the list.",
        tools.clear_completed, category="todo",
    )
    return tools
