"""
Use Cases

Organized into domain folders:
- accounts/: Account lifecycle
- auth/: Tokens, login and password reset codes
"""
