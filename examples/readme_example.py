from dataclasses import dataclass, field
from enum import Enum

from deepops import compare_deep, copy_deep, equal_deep, hash_deep, pformat, record, tabulate


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@record
@dataclass
class Task:
    description: str
    status: TaskStatus
    estimates: dict[str, float] = field(default_factory=dict)
    blocked_by: "Task | None" = None


@record(operators=True)
@dataclass
class TaskList:
    """Operators make task lists usable as dict keys and sortable."""

    owner: str
    tasks: list[Task] = field(default_factory=list)


def main() -> None:
    design = Task("design", TaskStatus.COMPLETED, {"alice": 2.0, "bob": 3.5})
    build = Task("build", TaskStatus.PENDING, {"bob": 1500.0}, blocked_by=design)
    backlog = TaskList("team", [design, build])

    # Copies are equal, hash equal, and independent
    snapshot = copy_deep(backlog)
    assert equal_deep(backlog, snapshot)
    assert hash_deep(backlog) == hash_deep(snapshot)
    assert snapshot.tasks[1].blocked_by is snapshot.tasks[0]

    snapshot.tasks[1].status = TaskStatus.IN_PROGRESS
    print(f"Backlog changed since snapshot: {not equal_deep(backlog, snapshot)}")
    print(f"Snapshot orders after backlog: {compare_deep(snapshot, backlog) == 1}")

    # Estimates inserted in any order are the same map
    reordered = Task("design", TaskStatus.COMPLETED, {"bob": 3.5, "alice": 2.0})
    print(f"Reordered estimates equal: {equal_deep(design, reordered)}")

    seen = {backlog: "v1"}
    print(f"Lookup by content: {seen[backlog.dup()]}")

    print(pformat(build))
    print(tabulate(backlog.tasks, header=["Task", "Status", "Estimates", "Blocked by"]))


if __name__ == "__main__":
    main()
