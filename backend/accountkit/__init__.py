"""
AccountKit - account setup and authentication core

Registration, login with failed-attempt lockout, logout, biometric unlock
of the secure credential slot and registration drafts, all persisted through
a small async key-value Credential Store.
"""

__version__ = "0.1.0"
