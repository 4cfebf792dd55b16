"""Authentication and authorization.

This package provides:
- Role policy (roles.py)
- Signed session cookies (session.py, PyJWT)
- Login/logout (authenticator.py, bcrypt via alliance.core.security)
- Current-user resolution and role checks (authorizer.py)
"""
