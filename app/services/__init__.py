from app.services.grading import grade_answers
from app.services.progression import ProgressionCoordinator, SubmissionOutcome
from app.services.submission import SubmissionService

__all__ = ["grade_answers", "ProgressionCoordinator", "SubmissionOutcome", "SubmissionService"]
