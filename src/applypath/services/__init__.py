from src.applypath.services.admin_service import AdminService
from src.applypath.services.identity_service import IdentityService
from src.applypath.services.profile_service import ProfileService
from src.applypath.services.project_service import ActivityService, ProjectService
from src.applypath.services.provisioning_service import ProvisioningService
from src.applypath.services.stats_service import StatsService

__all__ = [
    "ActivityService",
    "AdminService",
    "IdentityService",
    "ProfileService",
    "ProjectService",
    "ProvisioningService",
    "StatsService",
]
