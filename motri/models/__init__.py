# motri/models/__init__.py

from motri.models.director import Director  # noqa: F401
from motri.models.report import Report, AbuseType  # noqa: F401
