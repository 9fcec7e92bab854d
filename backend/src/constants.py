"""Application constants."""

# Routes
TAGS_PAGE_PATH = "/admin/tags"
TAGS_AJAX_PATH = "/admin/tags/ajax"

# Request ID header
REQUEST_ID_HEADER = "X-Request-ID"

# Form fields
TERM_FIELD_PATTERN = r"^term_(\d+)$"
FALSY_FORM_VALUES = frozenset({"", "0", "false", "off", "no"})

# Weighting
WEIGHT_MIN_RANGE = 5
WEIGHT_CLASSES = 6

# Messages (gettext keys)
MSG_AUTH_FAILED = "WSSE authentication failed."
MSG_MISSING_MASTER = "Error: New name not specified."
MSG_UNKNOWN_ACTION = "Error: Unknown action."
MSG_DELETED_ONE = "Tag {names} has been deleted."
MSG_DELETED_MANY = "{count} tags have been deleted."
MSG_RENAMED_ONE = "Tag {names} has been renamed to {master}."
MSG_RENAMED_MANY = "Tags {names} have been renamed to {master}."
MSG_RENAMED_NONE = "No tags have been renamed."
MSG_NO_TAGS = "No tags could be found to match the query criteria."
MSG_MANAGE_POSTS = "Manage posts tagged {name}"
