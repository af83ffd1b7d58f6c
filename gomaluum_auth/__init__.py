"""
GoMaluum Authentication Service

Logs users in to the i-Ma'luum portal through its CAS server and returns
the MOD_AUTH_CAS session token, behind a static bearer-token gate.

Modules:
- http: Per-attempt HTTP client with its own cookie jar
- auth: CAS login flow and error taxonomy
- middleware: Bearer-token authorization gate
- api: RPC facade, models and error categories
"""

__version__ = "1.0.0"
