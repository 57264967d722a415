"""Authentication.

Learn: Users log in with email/password and get a JWT bearer token.
Every protected route resolves that token back to a user record through
``get_current_user``.
"""
