"""Student petition service."""

import logging

from sqlalchemy.orm import Session

from gradebook.models.petition import Petition
from gradebook.schemas.petition import PetitionCreate
from gradebook.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class PetitionService:
    """Stores petitions filed by students."""

    def __init__(self, db: Session):
        self.db = db
        self.store = RecordStore(db)

    def submit(self, student_email: str, request: PetitionCreate) -> Petition:
        """Save a petition for an existing student."""
        student = self.store.find_student(student_email)
        petition = Petition(
            email=student.email,
            course_name=request.course_name,
            text=request.text,
        )
        self.db.add(petition)
        self.db.flush()
        self.db.refresh(petition)
        logger.info(f"Petition {petition.id} saved for {student_email}")
        return petition
