"""Core constants: external endpoints and shared literal values."""

# Firebase Authentication REST endpoints
IDENTITY_TOOLKIT_BASE_URL = "https://identitytoolkit.googleapis.com/v1"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

# Firestore REST v1
FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"

# Sensitive operations (account deletion) need a sign-in at most this old.
RECENT_SIGN_IN_WINDOW_SECONDS = 5 * 60

# Refresh ID tokens this many seconds before they expire.
ID_TOKEN_REFRESH_MARGIN_SECONDS = 60

# Redirect URI sent with federated credentials (required by signInWithIdp, unused for ID tokens).
FEDERATED_REQUEST_URI = "http://localhost"

# Notice shown when no reauthentication method is available.
SIGN_OUT_AND_BACK_IN_MESSAGE = (
    "For security, please sign out and sign back in, then try deleting your account again."
)
