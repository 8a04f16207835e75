"""TaskStore - Main API for Task Store operations."""

from __future__ import annotations

from sqlalchemy import func, literal_column, select
from sqlalchemy.exc import SQLAlchemyError

from tracksync.task_store.database import Database
from tracksync.task_store.exceptions import PersistenceError, ProjectNotFoundError
from tracksync.task_store.models import Project, Task, TaskStatus


class TaskStore:
    """Main API for Task Store operations.

    Provides operations on Projects and their Tasks. Every call opens and
    closes its own session, so each write commits independently.
    """

    def __init__(self, db_path: str = "tracksync.db") -> None:
        """Initialize Task Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Project Operations ---

    def create_project(self, name: str, project_id: str | None = None) -> Project:
        """Create a new project.

        Args:
            name: Human-readable project name
            project_id: Explicit ID to use instead of a generated UUID

        Returns:
            Created Project object
        """
        session = self._db.get_session()
        try:
            project = Project(name=name, id=project_id)
            session.add(project)
            session.commit()
            session.refresh(project)
            return project
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Failed to create project '{name}': {e}") from e
        finally:
            session.close()

    def get_project(self, project_id: str) -> Project:
        """Get project by ID.

        Raises:
            ProjectNotFoundError: If project doesn't exist
        """
        session = self._db.get_session()
        try:
            project = session.get(Project, project_id)
            if project is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")
            return project
        finally:
            session.close()

    def list_projects(self) -> list[Project]:
        """List all projects, ordered by name."""
        session = self._db.get_session()
        try:
            stmt = select(Project).order_by(Project.name)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    # --- Task Operations ---

    def create_task(
        self,
        project_id: str,
        title: str,
        source_issue_id: str | None = None,
        description: str | None = None,
        status: TaskStatus = TaskStatus.TODO,
    ) -> Task:
        """Create and commit a new task.

        Args:
            project_id: The project's unique ID
            title: Task title
            source_issue_id: ID of the remote issue this task was created from
            description: Task description
            status: Initial status

        Returns:
            Created Task object

        Raises:
            ProjectNotFoundError: If project doesn't exist
            PersistenceError: If the task could not be committed
        """
        session = self._db.get_session()
        try:
            if session.get(Project, project_id) is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")

            task = Task(
                project_id=project_id,
                title=title,
                source_issue_id=source_issue_id,
                description=description,
                status=status.value,
            )
            session.add(task)
            session.commit()
            session.refresh(task)
            return task
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Failed to create task '{title}': {e}") from e
        finally:
            session.close()

    def list_tasks(self, project_id: str) -> list[Task]:
        """List a project's tasks, oldest first.

        Raises:
            ProjectNotFoundError: If project doesn't exist
        """
        session = self._db.get_session()
        try:
            if session.get(Project, project_id) is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")
            stmt = (
                select(Task)
                .where(Task.project_id == project_id)
                .order_by(Task.created_at, literal_column("tasks.rowid"))
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def list_source_issue_ids(self, project_id: str) -> list[str]:
        """Source issue IDs of a project's tasks that were created from remote issues.

        Raises:
            ProjectNotFoundError: If project doesn't exist
        """
        session = self._db.get_session()
        try:
            if session.get(Project, project_id) is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")
            stmt = select(Task.source_issue_id).where(
                Task.project_id == project_id,
                Task.source_issue_id.is_not(None),
            )
            return [row for row in session.execute(stmt).scalars().all() if row is not None]
        finally:
            session.close()

    def count_tasks(self, project_id: str | None = None) -> int:
        """Count tasks, optionally restricted to one project."""
        session = self._db.get_session()
        try:
            stmt = select(func.count()).select_from(Task)
            if project_id is not None:
                stmt = stmt.where(Task.project_id == project_id)
            return int(session.execute(stmt).scalar_one())
        finally:
            session.close()
