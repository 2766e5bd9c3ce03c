# Import every model so Base.metadata is complete (alembic env, tests).
from portal.models.base import Base  # noqa: F401
from portal.models.project import Project  # noqa: F401
from portal.models.deliverable import Deliverable, DeliverableStatus  # noqa: F401
from portal.models.deliverable_version import DeliverableVersion  # noqa: F401
from portal.models.annotation import Annotation  # noqa: F401
from portal.models.timeline_comment import TimelineComment  # noqa: F401
from portal.models.approval import Approval, ApprovalStatus  # noqa: F401
