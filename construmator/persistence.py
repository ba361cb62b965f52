from __future__ import annotations
import logging
import uuid
from typing import List

from .errors import EmptyProjectError, NotAuthenticatedError, NotFoundError, ValidationError
from .models import Project, User
from .state import SessionState
from .store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectPersistence:
    """Named, per-user project snapshots of an editor session.

    Every operation works on a copy of the session state; the live session is
    only replaced once a stored project has been fully validated.
    """

    def __init__(self, store: ProjectStore, auth):
        self.store = store
        self.auth = auth
        self.state = SessionState()

    def _user(self) -> User:
        user = self.auth.current_user() if self.auth.is_logged_in() else None
        if user is None or not user.id:
            raise NotAuthenticatedError("Please login to continue")
        return user

    def save(self, session, name: str) -> Project:
        user = self._user()
        name = (name or "").strip()
        if not name:
            raise ValidationError("Please enter a project name")
        if len(session.engine) == 0:
            raise EmptyProjectError("Please place some materials before saving")

        existing = next((r for r in self.store.all()
                         if r.get("userId") == user.id and r.get("projectName") == name), None)
        project_id = existing["id"] if existing else uuid.uuid4().hex
        project = self.state.serialize(session, project_id, user.id, name)
        if existing:
            self.store.update(project.to_record())
        else:
            self.store.append(project.to_record())
        logger.info("saved project %r (%s) for %s, %d blocks",
                    name, project_id, user.id, len(project.building))
        return project

    def list_projects(self) -> List[Project]:
        if not self.auth.is_logged_in():
            return []
        user = self.auth.current_user()
        if user is None:
            return []
        return [Project.from_record(r) for r in self.store.all() if r.get("userId") == user.id]

    def load(self, session, project_id: str) -> Project:
        user = self._user()
        rec = self.store.get(project_id)
        if rec is None or rec.get("userId") != user.id:
            raise NotFoundError("Project not found")
        project = Project.from_record(rec)
        self.state.deserialize(session, project)
        session.notify()
        logger.info("loaded project %r (%s)", project.project_name, project.id)
        return project

    def delete(self, project_id: str) -> bool:
        user = self._user()
        rec = self.store.get(project_id)
        if rec is None or rec.get("userId") != user.id:
            return False
        deleted = self.store.delete(project_id)
        if deleted:
            logger.info("deleted project %s", project_id)
        return deleted
