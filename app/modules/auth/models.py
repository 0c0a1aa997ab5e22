# Admin login
# The dashboard has a single operator whose credentials come from configuration
# (ADMIN_EMAIL / ADMIN_PASSWORD). No table is involved.

"""
Session lifecycle:
- init()               - read the persisted flag file at startup; "true" skips the login gate
- mark_authenticated() - set after a successful credential check and persist the flag
- teardown()           - clear the flag on logout and remove the file

The flag is the only thing persisted. Collections, tab and search state live in memory.
"""
