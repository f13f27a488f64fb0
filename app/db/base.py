# Import all models here so Base.metadata has every table
# (used by the app factory, the seed script and alembic)
from app.db.database import Base  # noqa: F401
from app.models.user_models import User  # noqa: F401
from app.models.course_models import Course  # noqa: F401
from app.models.room_models import Room  # noqa: F401
from app.models.student_profile_models import StudentProfile  # noqa: F401
from app.models.fee_structure_models import FeeStructure  # noqa: F401
from app.models.payment_models import Payment  # noqa: F401
from app.models.query_models import Query  # noqa: F401
from app.models.verification_token_models import VerificationToken  # noqa: F401
