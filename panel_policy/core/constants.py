"""Core constants: cache key prefixes, role codes and activity log names."""

# Cache key prefixes
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite cache keys
CACHE_KEY_SEP = ":"

# Role granted every permission in the catalog by the RBAC seeder
SUPER_ADMIN_ROLE = "super_admin"

# Separator between action and resource type in permission names (delete_any_user)
PERMISSION_SEP = "_"

# Activity log channels (log_name values)
LOG_NAME_RESOURCE = "Resource"
LOG_NAME_ACCESS = "Access"
LOG_NAME_NOTIFICATION = "Notification"
LOG_NAME_MODEL = "Model"
ACTIVITY_LOG_CHANNELS = (
    LOG_NAME_RESOURCE,
    LOG_NAME_ACCESS,
    LOG_NAME_NOTIFICATION,
    LOG_NAME_MODEL,
)

# Field names that should never be allow-listed for activity logging
DEFAULT_SENSITIVE_FIELDS = (
    "password",
    "remember_token",
    "api_token",
    "two_factor_secret",
    "two_factor_recovery_codes",
)

# Length of generated CUID2 primary keys
ID_LENGTH = 24
