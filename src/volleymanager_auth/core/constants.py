"""
Backend-defined constants for the VolleyManager session client.

Endpoint paths, form field names and page markers mirror what the legacy
Neos Flow backend renders and accepts. Field names must match exactly.
"""

# Endpoint paths (relative to the base URL)
LOGIN_PAGE_PATH = "/login"
AUTHENTICATE_PATH = "/sportmanager.security/authentication/authenticate"
LOGOUT_PATH = "/logout"
DASHBOARD_PATH = "/sportmanager.volleyball/main/dashboard"

# HTTP status codes with special meaning for the authenticate call
HTTP_OK = 200
HTTP_LOCKED = 423
HTTP_REDIRECT_MIN = 300
HTTP_REDIRECT_MAX = 400

# Delay before re-fetching the dashboard so cookies from the previous
# response are persisted by the transport
DEFAULT_COOKIE_PROCESSING_DELAY_MS = 100
DEFAULT_TIMEOUT = 30

# Anti-forgery token and referrer routing fields
TRUSTED_PROPERTIES_FIELD = "__trustedProperties"
REFERRER_PACKAGE_FIELD = "__referrer[@package]"
REFERRER_SUBPACKAGE_FIELD = "__referrer[@subpackage]"
REFERRER_CONTROLLER_FIELD = "__referrer[@controller]"
REFERRER_ACTION_FIELD = "__referrer[@action]"
REFERRER_ARGUMENTS_FIELD = "__referrer[arguments]"

DEFAULT_REFERRER_PACKAGE = "SportManager.Volleyball"
DEFAULT_REFERRER_SUBPACKAGE = ""
DEFAULT_REFERRER_CONTROLLER = "Public"
DEFAULT_REFERRER_ACTION = "login"
DEFAULT_REFERRER_ARGUMENTS = ""

# Neos Flow username/password authentication token fields
_TOKEN_PREFIX = "__authentication[Neos][Flow][Security][Authentication][Token][UsernamePassword]"
USERNAME_FIELD = f"{_TOKEN_PREFIX}[username]"
PASSWORD_FIELD = f"{_TOKEN_PREFIX}[password]"

# Page markers
CSRF_TOKEN_ATTRIBUTE = "data-csrf-token"
LOGIN_FORM_ACTION_MARKER = 'action="/login"'
USERNAME_INPUT_MARKER = 'id="username"'
PASSWORD_INPUT_MARKER = 'id="password"'

AUTH_ERROR_MARKERS = ('color="error"', "color='error'")
TFA_PAGE_MARKERS = (
    "secondFactorToken",
    "SecondFactor",
    "TwoFactorAuthentication",
    "totp",
    "TOTP",
)

# Top-level keys of an embedded activeParty object
ACTIVE_PARTY_KEYS = (
    "eligibleAttributeValues",
    "groupedEligibleAttributeValues",
    "eligibleRoles",
    "activeRoleIdentifier",
    "activeAttributeValue",
)

# Roles and attribute types
REFEREE_ROLE_IDENTIFIER = "Indoorvolleyball.RefAdmin:Referee"
ASSOCIATION_TYPE_SUFFIX = "AbstractAssociation"

# Words skipped when deriving an association code from its name
ASSOCIATION_CODE_STOP_WORDS = frozenset(
    ["de", "du", "des", "la", "le", "les", "et", "und", "of", "the"]
)

DEFAULT_USER_ID = "user"

# User-facing error messages
MSG_LOGIN_PAGE_FAILED = "Failed to load login page"
MSG_FORM_FIELDS_MISSING = "Could not extract form fields from login page"
MSG_INVALID_CREDENTIALS = "Invalid username or password"
MSG_LOCKED = "Account temporarily locked"
MSG_LOCKED_FALLBACK = "Account temporarily locked due to too many failed attempts"
MSG_TFA_UNSUPPORTED = (
    "Two-factor authentication is not supported. "
    "Please disable it in your VolleyManager account settings."
)
MSG_DASHBOARD_UNREACHABLE = "Login succeeded but could not load dashboard"
MSG_SESSION_NOT_ESTABLISHED = "Login succeeded but session could not be established"
MSG_AUTH_REQUEST_FAILED = "Authentication request failed"
MSG_LOGIN_FAILED = "Login failed - please try again"
