from typing import Callable

from sqlalchemy.orm import Session


class ServiceBase:
    def __init__(self, session: Session):
        self._session = session

    def commit_write(self, write: Callable[[], None]) -> None:
        """Run one store write and commit it; on failure roll back and re-raise."""
        try:
            write()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
