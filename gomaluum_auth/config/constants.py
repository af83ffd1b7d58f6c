"""i-Ma'luum authentication URLs and CAS protocol constants."""

# i-Ma'luum main page
IMALUUM_PAGE = "https://imaluum.iium.edu.my/"

# CAS login page (GET initializes the session)
IMALUUM_CAS_PAGE = (
    "https://cas.iium.edu.my:8448/cas/login?service=https%3a%2f%2fimaluum.iium.edu.my%2fhome"
)

# CAS form submission endpoint
IMALUUM_LOGIN_PAGE = (
    "https://cas.iium.edu.my:8448/cas/login"
    "?service=https%3a%2f%2fimaluum.iium.edu.my%2fhome"
    "?service=https%3a%2f%2fimaluum.iium.edu.my%2fhome"
)

# Cookie carrying the session token once CAS has accepted the credentials
AUTH_COOKIE_NAME = "MOD_AUTH_CAS"

# Fixed CAS form fields
CAS_EXECUTION = "e1s1"
CAS_EVENT_ID = "submit"
